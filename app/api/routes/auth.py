# app/api/routes/auth.py
"""
 - ユーザー登録・ログイン認証・パスワードリセット用APIルートを定義するモジュール。
 - 入力されたユーザー名・パスワード（MFA有効時はTOTPコードも）を検証し、
   有効であればJWTトークンを返す。
 - 失敗時のステータスコード変換は main.py の例外ハンドラで行う。
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from app.core.dependencies import get_auth_flow
from app.core.exceptions import NotFoundError
from app.schemas.auth import (
    RegisterRequest, AuthenticateRequest, TokenResponse, MFAChallengeResponse,
    ResetPasswordRequest, ProfileImageRequest, ProfileImageResponse
)
from app.services.auth_flow import AuthFlowController

# ロガーの設定
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

# ユーザー登録API
@router.post("/register", response_class=PlainTextResponse)
def register_user(
    request: RegisterRequest,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    """新規ユーザー登録（パスワードはハッシュ化して保存）"""
    auth_flow.register(request.username, request.password)
    return "User registered successfully!"

# ログインAPI (認証に成功したらアクセストークン（JWT）を発行して返す)
@router.post(
    "/authenticate",
    response_model=TokenResponse,
    responses={401: {"model": MFAChallengeResponse, "description": "認証失敗、またはMFAコードが必要"}},
)
def authenticate_user(
    request: AuthenticateRequest,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    result = auth_flow.authenticate(request.username, request.password, request.code)
    return TokenResponse(token=result.token, mfa_enabled=result.mfa_enabled)

# ユーザー名の存在確認API
@router.get("/verify-username/{username}", response_class=PlainTextResponse)
def verify_username(
    username: str,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    if not auth_flow.username_exists(username):
        raise NotFoundError("Error: Username not found")
    return "Username exists"

# パスワードリセットAPI（MFA有効時はTOTPコード必須）
@router.post("/reset-password", response_class=PlainTextResponse)
def reset_password(
    request: ResetPasswordRequest,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    auth_flow.reset_password(request.username, request.new_password, request.code)
    return "Password reset successfully"

# プロフィール画像更新API
@router.post("/profile-image", response_class=PlainTextResponse)
def update_profile_image(
    request: ProfileImageRequest,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    auth_flow.update_profile_image(request.username, request.profile_image)
    return "Profile image updated successfully"

# プロフィール画像取得API
@router.get("/profile-image/{username}", response_model=ProfileImageResponse)
def get_profile_image(
    username: str,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    return ProfileImageResponse(profile_image=auth_flow.get_profile_image(username))
