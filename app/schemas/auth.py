# app/schemas/auth.py
"""
 - 登録・ログイン・パスワードリセットに関連するデータスキーマを定義するモジュール。
 - JSONのキーはフロントエンドに合わせてキャメルケース（newPassword など）。
"""

from pydantic import Field
from typing import Optional
from app.schemas.base import CamelModel


# 登録APIのリクエストボディ用スキーマ（POST /register）
class RegisterRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str


# ログインAPIのリクエストボディ用スキーマ（POST /authenticate）
class AuthenticateRequest(CamelModel):
    username: str
    password: str
    code: Optional[str] = None  # MFA有効時のみ必要


# ログイン成功時に返すトークン情報のレスポンススキーマ
class TokenResponse(CamelModel):
    token: str
    mfa_enabled: bool


# MFAコードが必要な場合に401で返すチャレンジ
class MFAChallengeResponse(CamelModel):
    mfa_required: bool = True
    mfa_enabled: bool = True


# パスワードリセット用スキーマ（POST /reset-password）
class ResetPasswordRequest(CamelModel):
    username: str
    new_password: str
    code: Optional[str] = None


# プロフィール画像更新用スキーマ（POST /profile-image）
class ProfileImageRequest(CamelModel):
    username: str
    profile_image: Optional[str] = None


# プロフィール画像取得用スキーマ（GET /profile-image/{username}）
class ProfileImageResponse(CamelModel):
    profile_image: Optional[str] = None
