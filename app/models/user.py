from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from datetime import datetime, timezone
from app.db.base_class import Base

class User(Base):
    """
    - ログインユーザーの認証情報を格納するテーブル。
    - ユーザー名は一意かつ作成後に変更しない。
    - パスワードはハッシュのみを保持し、平文は保存しない。
    """

    __tablename__ = "users"

    # ユーザーID（主キー / AUTO_INCREMENT）
    id = Column(Integer, primary_key=True, autoincrement=True)

    # ログインID ※一意制約
    username = Column(String(100), unique=True, index=True, nullable=False)

    # ハッシュ化されたパスワード
    password_hash = Column(String(255), nullable=False)

    # MFAを有効化済みか（True の場合は mfa_secret が必ず存在する）
    mfa_enabled = Column(Boolean, default=False, nullable=False)

    # TOTPの共有シークレット（base32）。未設定・無効化時は NULL
    mfa_secret = Column(String(64), nullable=True)

    # シークレットを発行した日時（未確定シークレットの有効期限判定に使用）
    mfa_setup_at = Column(DateTime, nullable=True)

    # プロフィール画像（data URI や URL をそのまま保持）
    profile_image = Column(Text, nullable=True)

    # レコード作成日時（UTC）
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # レコード更新日時（更新時に自動更新 / UTC）
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
