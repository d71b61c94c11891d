"""
MFA APIルーター
"""

from fastapi import APIRouter, Depends
from app.core.dependencies import get_auth_flow
from app.schemas.mfa import (
    MFASetupRequest, MFASetupResponse, MFAEnableRequest,
    MFADisableRequest, MFAStatusResponse
)
from app.services.auth_flow import AuthFlowController, ConfirmEnrollment, DisableMfa
from .config import mfa_config

router = APIRouter(prefix="/mfa", tags=["MFA"])

@router.post("/setup", response_model=MFASetupResponse)
def setup_mfa_endpoint(
    request: MFASetupRequest,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    """TOTP秘密鍵とQRコード用URIを発行（有効化は /mfa/enable で確認後）"""
    result = auth_flow.setup_mfa(request.username)
    return MFASetupResponse(
        secret=result.secret,
        qr_url=result.provisioning_uri,
        qr_code=result.qr_code,
    )

@router.get("/status/{username}", response_model=MFAStatusResponse)
def get_mfa_status_endpoint(
    username: str,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    """MFA設定状況を取得"""
    return MFAStatusResponse(mfa_enabled=auth_flow.get_mfa_status(username))

@router.post("/disable")
def disable_mfa_endpoint(
    request: MFADisableRequest,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    """MFAを無効化（コード確認なし）"""
    auth_flow.disable_mfa(request.username)
    return {"message": "MFA disabled"}

@router.post("/enable")
def enable_mfa_endpoint(
    request: MFAEnableRequest,
    auth_flow: AuthFlowController = Depends(get_auth_flow)
):
    """
    TOTPコードを確認してMFAを有効化。
    予約コード（000000）は既存クライアント互換のため無効化として扱う。
    """
    if request.code == mfa_config.disable_sentinel:
        auth_flow.apply_mfa_action(request.username, DisableMfa())
        return {"message": "MFA disabled"}

    auth_flow.apply_mfa_action(request.username, ConfirmEnrollment(code=request.code))
    return {"message": "MFA enabled successfully"}
