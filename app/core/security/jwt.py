# app/core/security/jwt.py
"""
 - JWT（JSON Web Token）を発行・検証するモジュール。
 - ログイン成功時にユーザー名を `sub` に格納したトークンを発行し、
   保護されたAPIではトークンを検証してユーザー名を取り出す。
 - 署名鍵は起動時に設定から一度だけ読み込み、実行中に変更しない。
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
import logging

from jose import JWTError, jwt
from app.core.config import get_settings

# ロガーの設定
logger = logging.getLogger(__name__)


class TokenIssuer:
    """署名付き・有効期限付きのベアラートークンを扱うクラス"""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 600):
        if not secret_key:
            raise ValueError("SECRET_KEY is missing")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_delta = timedelta(minutes=expire_minutes)

    @property
    def expires_in(self) -> int:
        """トークンの有効秒数"""
        return int(self._expire_delta.total_seconds())

    # アクセストークンを生成する (ユーザー名と有効期限を含むJWTを返す)
    def issue(self, username: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "sub": username,
            "iat": issued_at,
            "exp": issued_at + self._expire_delta,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    # トークンを検証し、有効であればユーザー名を返す
    def verify(self, token: str) -> Optional[str]:
        """
        署名と有効期限を検証する。
        改ざん・期限切れ・形式不正はいずれも区別せず None を返す。
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            logger.debug("トークン検証失敗")
            return None

        username = payload.get("sub")
        if not isinstance(username, str) or not username:
            return None
        return username


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """プロセス全体で共有するTokenIssuerを取得（FastAPIの依存関数としても使用）"""
    settings = get_settings()
    return TokenIssuer(
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
