"""
MFAサービス - TOTPエンジン
  - 共有シークレットの生成、otpauth:// URIの生成、ワンタイムコードの検証を行う。
  - DBには依存しない純粋な処理のみを置く。
"""

import logging
import time
from typing import Optional, Union
from datetime import datetime

import pyotp
from .config import mfa_config

# ロガーの設定
logger = logging.getLogger(__name__)

class MFAService:
    """MFAサービスクラス"""

    @staticmethod
    def generate_totp_secret() -> str:
        """TOTP秘密鍵を生成（base32 / 160bit）"""
        return pyotp.random_base32()

    @staticmethod
    def get_totp_uri(secret: str, username: str, issuer: Optional[str] = None) -> str:
        """TOTP URIを生成（QRコード化してクライアントに読み込ませる）"""
        totp = pyotp.TOTP(secret, digits=mfa_config.totp_digits, interval=mfa_config.totp_period)
        return totp.provisioning_uri(
            name=username,
            issuer_name=issuer or mfa_config.issuer
        )

    @staticmethod
    def is_well_formed_code(code: Optional[str]) -> bool:
        """6桁の数字かどうかを判定"""
        return (
            isinstance(code, str)
            and len(code) == mfa_config.totp_digits
            and code.isascii()
            and code.isdigit()
        )

    @staticmethod
    def verify_totp_code(
        secret: str,
        code: Optional[str],
        now: Union[datetime, float, None] = None,
    ) -> bool:
        """
        TOTPコードを検証する。
        現在の時間窓と前後 valid_window 個の窓のいずれかに一致すれば True。
        形式不正のコードは例外を出さずに False を返す。
        """
        if not secret or not MFAService.is_well_formed_code(code):
            return False

        for_time = time.time() if now is None else now
        try:
            totp = pyotp.TOTP(secret, digits=mfa_config.totp_digits, interval=mfa_config.totp_period)
            return totp.verify(code, for_time=for_time, valid_window=mfa_config.valid_window)
        except (ValueError, TypeError) as e:
            # 壊れたシークレット（base32として不正など）
            logger.warning(f"TOTP検証でエラー: {type(e).__name__}")
            return False

    @staticmethod
    def get_current_code(secret: str, now: Union[datetime, float, None] = None) -> str:
        """指定時刻のTOTPコードを取得（テスト・デバッグ用）"""
        totp = pyotp.TOTP(secret, digits=mfa_config.totp_digits, interval=mfa_config.totp_period)
        return totp.at(time.time() if now is None else now)
