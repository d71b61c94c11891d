# app/core/exceptions.py
"""
 - アプリケーション全体で使うドメイン例外を定義するモジュール。
 - サービス層はHTTPに依存せずこれらの例外を送出し、
   境界（main.py の例外ハンドラ）で対応するステータスコードへ変換する。
"""

from typing import Any, Dict, Optional
from fastapi import status


class AppError(Exception):
    """ドメイン例外の基底クラス"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, payload: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        # 構造化レスポンス（MFAチャレンジなど）を返したい場合に使用
        self.payload = payload
        super().__init__(self.message)


class NotFoundError(AppError):
    """対象（ユーザー・部署・社員）が存在しない"""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """一意制約違反（ユーザー名の重複など）"""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class BadRequestError(AppError):
    """入力不正・MFAの前提条件を満たさない操作"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(AppError):
    """認証情報・MFAコードの不一致"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class InternalError(AppError):
    """永続化などの予期しない失敗"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
