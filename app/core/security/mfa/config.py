# app/core/security/mfa/config.py
"""
MFA（多要素認証）設定管理
  - このファイルでは、TOTPの桁数・周期・許容ずれや、未確定シークレットの有効期限などを集中管理する。
  - すべての値は環境変数（.env）で上書き可能。
  - 環境変数の接頭辞は "MFA_"。
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class MFAConfig(BaseSettings):
    """MFA設定クラス"""

    # 認証アプリに表示される発行者名
    issuer: str = "EmployeeMgmtApp"

    # TOTP（ワンタイムパスワード）設定
    totp_digits: Literal[6] = 6    # ワンタイムパスワードの桁数（6桁固定）
    totp_period: int = 30   # ワンタイムパスワードの有効秒数（デフォルトは30秒）
    valid_window: int = 1   # 前後に許容する時間窓の数（±1ステップ = ±30秒）

    # セットアップ後、確認されないシークレットの有効期限（分）。0は無期限
    setup_expire_minutes: int = 0

    # 無効化用の予約コード（/mfa/enable で受け付ける互換用の値）
    disable_sentinel: str = "000000"

    model_config = SettingsConfigDict(
        env_prefix="MFA_",    # 環境変数の接頭辞
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",    # 未定義のキーは無視
    )

# グローバル設定インスタンス
mfa_config = MFAConfig()
