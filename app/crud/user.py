# app/crud/user.py
"""
 - ログインユーザーに関するDB操作（CRUD）を定義するモジュール。
 - 主に SQLAlchemy を通じて User モデルとデータベースをやり取りする。
 - パスワードは呼び出し側でハッシュ化済みのものを受け取る。
"""

import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import ConflictError, InternalError
from app.crud.base import commit_or_raise
from app.models.user import User

# ロガーの設定
logger = logging.getLogger(__name__)

# 新規ユーザーを登録する関数　（事前にハッシュ化されたパスワードを引数として受け取る)
def create_user(db: Session, username: str, password_hash: str) -> User:
    user = User(
        username=username,
        password_hash=password_hash,
        mfa_enabled=False,
        mfa_secret=None,
    )
    db.add(user)
    try:
        db.commit()
    # 一意制約違反はユーザー名の重複として扱う
    except IntegrityError as e:
        db.rollback()
        logger.info(f"ユーザー名が重複しています: {username}")
        raise ConflictError("Error: Username already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"ユーザー登録でDBエラー: {e}", exc_info=True)
        raise InternalError("Error: Unable to register user") from e

    db.refresh(user)
    return user

# ユーザー名でユーザーを検索する関数
def get_user_by_username(db: Session, username: str) -> Optional[User]:
    if not username:
        return None
    return db.query(User).filter(User.username == username).first()

# パスワードハッシュを更新する関数
def update_password_hash(db: Session, user: User, password_hash: str) -> User:
    user.password_hash = password_hash
    commit_or_raise(db, "reset password")
    db.refresh(user)
    return user

# プロフィール画像を更新する関数
def update_profile_image(db: Session, user: User, profile_image: Optional[str]) -> User:
    user.profile_image = profile_image
    commit_or_raise(db, "update profile image")
    db.refresh(user)
    return user
