"""
MFA（Multi-Factor Authentication）関連のデータスキーマを定義するモジュール
"""

from pydantic import Field
from typing import Optional
from app.schemas.base import CamelModel

class MFASetupRequest(CamelModel):
    """MFAセットアップリクエスト用スキーマ"""
    username: str = Field(..., description="ユーザー名")

class MFASetupResponse(CamelModel):
    """MFAセットアップレスポンス用スキーマ"""
    secret: str = Field(..., description="手入力用のTOTP秘密鍵")
    qr_url: str = Field(..., description="otpauth:// 形式のプロビジョニングURI")
    qr_code: Optional[str] = Field(None, description="QRコード画像（data URI）")

class MFAEnableRequest(CamelModel):
    """MFA有効化（確認）リクエスト用スキーマ"""
    username: str = Field(..., description="ユーザー名")
    code: Optional[str] = Field(None, description="6桁のTOTPコード")

class MFADisableRequest(CamelModel):
    """MFA無効化リクエスト用スキーマ"""
    username: str = Field(..., description="ユーザー名")

class MFAStatusResponse(CamelModel):
    """MFA設定状況レスポンス用スキーマ"""
    mfa_enabled: bool = Field(..., description="MFAが有効化されているか")
