# app/core/dependencies.py
""" DBセッション・認証フロー・認証済みユーザーを取得するための依存関数を提供 """

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.security.jwt import TokenIssuer, get_token_issuer
from app.db.session import get_db
from app.services.auth_flow import AuthFlowController

# ロガーの設定
logger = logging.getLogger(__name__)

# Authorization: Bearer <token> を読み取るスキーム（未指定時はこちらで401を返す）
bearer_scheme = HTTPBearer(auto_error=False)


""" 認証フローのサービスを取得する関数 """
def get_auth_flow(
    db: Session = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthFlowController:
    return AuthFlowController(db, token_issuer)


""" ベアラートークンを検証し、ユーザー名を取得する関数 """
def get_current_username(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> str:
    # 認証エラーの例外を定義
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    username = token_issuer.verify(credentials.credentials)
    if username is None:
        logger.debug("無効なトークンでのアクセス")
        raise credentials_exception
    return username
