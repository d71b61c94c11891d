# app/services/auth_flow.py
"""
 - 登録・ログイン（MFAステップアップ）・MFA登録/無効化・パスワードリセットを
   まとめて扱う認証フローのサービスモジュール。
 - ユーザーの認証状態はDBに保存せず、リクエストごとに User の各フィールドから算出する。
 - HTTPには依存せず、失敗は app.core.exceptions のドメイン例外で表現する。
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Optional, Union

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from app.core.security.jwt import TokenIssuer
from app.core.security.mfa import crud as mfa_crud
from app.core.security.mfa.config import mfa_config
from app.core.security.mfa.service import MFAService
from app.core.security.password import hash_password, verify_password
from app.crud import user as user_crud
from app.models.user import User
from app.services.qr_code import QRCodeService

# ロガーの設定
logger = logging.getLogger(__name__)


class MFAState(str, Enum):
    """ユーザーのMFA登録状態"""
    DISABLED = "disabled"          # シークレット未発行
    UNCONFIRMED = "unconfirmed"    # セットアップ済み・コード未確認
    ACTIVE = "active"              # 有効化済み


def mfa_state_of(user: User) -> MFAState:
    """User の各フィールドからMFA状態を算出する"""
    if user.mfa_enabled and user.mfa_secret:
        return MFAState.ACTIVE
    if user.mfa_secret:
        return MFAState.UNCONFIRMED
    return MFAState.DISABLED


# /mfa/enable で受け付ける操作（コード確認 または 無効化）
@dataclass(frozen=True)
class ConfirmEnrollment:
    code: Optional[str]


@dataclass(frozen=True)
class DisableMfa:
    pass


MFAEnrollmentAction = Union[ConfirmEnrollment, DisableMfa]


@dataclass(frozen=True)
class MFASetupResult:
    secret: str
    provisioning_uri: str
    qr_code: str


@dataclass(frozen=True)
class LoginResult:
    token: str
    mfa_enabled: bool


class AuthFlowController:
    """認証フローのビジネスロジックを提供"""

    def __init__(
        self,
        db: Session,
        token_issuer: TokenIssuer,
        clock: Callable[[], float] = time.time,
    ):
        self.db = db
        self.token_issuer = token_issuer
        # TOTP検証・有効期限判定に使う現在時刻（テストで差し替え可能）
        self.clock = clock

    # ---------- 内部ヘルパー ----------

    def _get_user_or_404(self, username: str) -> User:
        user = user_crud.get_user_by_username(self.db, username)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def _parse_code(code: str) -> str:
        """MFAコードの形式チェック（数字以外は BadRequest）"""
        normalized = code.strip()
        if not normalized or not (normalized.isascii() and normalized.isdigit()):
            raise BadRequestError("Invalid MFA code format")
        return normalized

    def _require_valid_code(self, user: User, code: Optional[str], missing_message: str) -> None:
        """MFA有効ユーザーに対するコード必須チェック（ログイン・リセット共通）"""
        if code is None:
            raise UnauthorizedError(missing_message)
        parsed = self._parse_code(code)
        if not MFAService.verify_totp_code(user.mfa_secret, parsed, now=self.clock()):
            logger.warning(f"MFAコード検証失敗: {user.username}")
            raise UnauthorizedError("Invalid MFA code")

    def _setup_expired(self, user: User) -> bool:
        """未確定シークレットの有効期限切れ判定（0分設定なら常に False）"""
        limit = mfa_config.setup_expire_minutes
        if limit <= 0 or user.mfa_setup_at is None:
            return False
        setup_at = user.mfa_setup_at
        if setup_at.tzinfo is None:
            setup_at = setup_at.replace(tzinfo=timezone.utc)
        now = datetime.fromtimestamp(self.clock(), tz=timezone.utc)
        return now - setup_at > timedelta(minutes=limit)

    # ---------- 登録 ----------

    def register(self, username: str, password: str) -> User:
        """パスワードをハッシュ化してユーザーを登録する（重複時は ConflictError）"""
        password_hash = hash_password(password)
        user = user_crud.create_user(self.db, username, password_hash)
        logger.info(f"ユーザー登録完了: {user.username}")
        return user

    def username_exists(self, username: str) -> bool:
        return user_crud.get_user_by_username(self.db, username) is not None

    # ---------- MFA ----------

    def setup_mfa(self, username: str) -> MFASetupResult:
        """
        TOTP秘密鍵を発行して保存する（まだ有効化しない）。
        有効化済みのユーザーには再発行しない。
        """
        user = self._get_user_or_404(username)
        if mfa_state_of(user) is MFAState.ACTIVE:
            raise BadRequestError("MFA already enabled")

        secret = MFAService.generate_totp_secret()
        mfa_crud.save_mfa_secret(self.db, user, secret)

        uri = MFAService.get_totp_uri(secret, user.username)
        qr_code = QRCodeService.generate_qr_data_uri(uri)
        logger.info(f"MFAセットアップ: {user.username}")
        return MFASetupResult(secret=secret, provisioning_uri=uri, qr_code=qr_code)

    def apply_mfa_action(self, username: str, action: MFAEnrollmentAction) -> MFAState:
        """MFA登録の確認、または無効化を行い、操作後の状態を返す"""
        user = self._get_user_or_404(username)

        if isinstance(action, DisableMfa):
            mfa_crud.disable_mfa(self.db, user)
            logger.info(f"MFA無効化: {user.username}")
            return MFAState.DISABLED

        if not user.mfa_secret:
            raise BadRequestError("MFA secret not set")
        if action.code is None:
            raise BadRequestError("Invalid MFA code format")
        code = self._parse_code(action.code)

        if mfa_state_of(user) is MFAState.UNCONFIRMED and self._setup_expired(user):
            raise BadRequestError("MFA setup expired, run setup again")

        if not MFAService.verify_totp_code(user.mfa_secret, code, now=self.clock()):
            logger.warning(f"MFA有効化のコード検証失敗: {user.username}")
            raise UnauthorizedError("Invalid MFA code")

        mfa_crud.enable_mfa(self.db, user)
        logger.info(f"MFA有効化: {user.username}")
        return MFAState.ACTIVE

    def disable_mfa(self, username: str) -> None:
        self.apply_mfa_action(username, DisableMfa())

    def get_mfa_status(self, username: str) -> bool:
        user = self._get_user_or_404(username)
        return bool(user.mfa_enabled)

    # ---------- ログイン ----------

    def authenticate(self, username: str, password: str, code: Optional[str] = None) -> LoginResult:
        """
        パスワードを検証し、MFA有効時はコードも検証してトークンを発行する。
        コード未指定の場合は mfaRequired のチャレンジを返す。
        """
        user = user_crud.get_user_by_username(self.db, username)
        # ユーザーの存在有無は応答から区別できないようにする
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"ログイン失敗: {username}")
            raise UnauthorizedError("Invalid username or password")

        if user.mfa_enabled:
            if code is None:
                logger.info(f"MFAコード要求: {user.username}")
                raise UnauthorizedError(
                    "MFA code required",
                    payload={"mfaRequired": True, "mfaEnabled": True},
                )
            self._require_valid_code(user, code, "MFA code required")

        token = self.token_issuer.issue(user.username)
        logger.info(f"ログイン成功: {user.username}")
        return LoginResult(token=token, mfa_enabled=bool(user.mfa_enabled))

    # ---------- パスワードリセット ----------

    def reset_password(self, username: str, new_password: str, code: Optional[str] = None) -> None:
        """MFA有効時はコードを必須としてパスワードを再設定する（現パスワードは確認しない）"""
        user = self._get_user_or_404(username)

        if user.mfa_enabled:
            if code is None:
                raise UnauthorizedError("MFA code required")
            if not user.mfa_secret:
                raise BadRequestError("MFA secret not set")
            self._require_valid_code(user, code, "MFA code required")

        user_crud.update_password_hash(self.db, user, hash_password(new_password))
        logger.info(f"パスワードリセット完了: {user.username}")

    # ---------- プロフィール画像 ----------

    def get_profile_image(self, username: str) -> Optional[str]:
        return self._get_user_or_404(username).profile_image

    def update_profile_image(self, username: str, profile_image: Optional[str]) -> None:
        user = self._get_user_or_404(username)
        user_crud.update_profile_image(self.db, user, profile_image)
        logger.info(f"プロフィール画像更新: {user.username}")
