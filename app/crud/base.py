# app/crud/base.py
""" CRUD層で共通に使うコミット処理 """

import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import InternalError

# ロガーの設定
logger = logging.getLogger(__name__)

def commit_or_raise(db: Session, action: str) -> None:
    """コミットし、DBエラーはロールバックしたうえで InternalError に変換する"""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{action}でDBエラー: {e}", exc_info=True)
        raise InternalError(f"Unable to {action}") from e
