"""
MFA（Multi-Factor Authentication）関連のCRUD操作を定義するモジュール
  - いずれも1回の読み込み済みUserに対する更新と1回のコミットで完結させる。
"""

from datetime import datetime, timezone
from sqlalchemy.orm import Session
from app.core.exceptions import BadRequestError
from app.crud.base import commit_or_raise
from app.models.user import User

def _utcnow() -> datetime:
    # DBにはタイムゾーンなしのUTCで保存する
    return datetime.now(timezone.utc).replace(tzinfo=None)

def save_mfa_secret(db: Session, user: User, totp_secret: str) -> User:
    """
    未確定のTOTP秘密鍵を保存する（有効化はまだ行わない）
    """
    user.mfa_secret = totp_secret
    user.mfa_enabled = False
    user.mfa_setup_at = _utcnow()

    commit_or_raise(db, "set up MFA")
    db.refresh(user)
    return user

def enable_mfa(db: Session, user: User) -> User:
    """
    コード確認済みのMFAを有効化する（秘密鍵が無ければ BadRequest）
    """
    if not user.mfa_secret:
        raise BadRequestError("MFA secret not set")

    user.mfa_enabled = True

    commit_or_raise(db, "enable MFA")
    db.refresh(user)
    return user

def disable_mfa(db: Session, user: User) -> User:
    """
    MFAを無効化し、関連する設定をクリアする
    """
    user.mfa_enabled = False
    user.mfa_secret = None
    user.mfa_setup_at = None

    commit_or_raise(db, "disable MFA")
    db.refresh(user)
    return user
