"""
MFA（Multi-Factor Authentication）モジュール

ルーターは依存関係の循環を避けるため app.core.security.mfa.router から直接インポートする。
"""

from .config import MFAConfig, mfa_config
from .service import MFAService
from .crud import save_mfa_secret, enable_mfa, disable_mfa

__all__ = [
    "MFAService",
    "MFAConfig",
    "mfa_config",
    "save_mfa_secret",
    "enable_mfa",
    "disable_mfa",
]
