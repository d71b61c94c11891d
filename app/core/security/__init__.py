"""
認証・セキュリティモジュール
"""

# パスワード関連の関数をエクスポート
from .password import hash_password, verify_password

# JWT関連の機能をエクスポート
from .jwt import TokenIssuer, get_token_issuer

__all__ = [
    "hash_password",
    "verify_password",
    "TokenIssuer",
    "get_token_issuer",
]
