"""
AuthFlowController のサービス層テスト
  - HTTPを経由せずDBセッションを直接使う。
  - 時計を差し替えてTOTPの時間窓を制御する。
"""
import time

import pyotp
import pytest

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from app.core.security.mfa import crud as mfa_crud
from app.core.security.mfa.config import mfa_config
from app.core.security.mfa.service import MFAService
from app.core.security.password import verify_password
from app.crud.user import get_user_by_username
from app.services.auth_flow import (
    AuthFlowController,
    ConfirmEnrollment,
    DisableMfa,
    MFAState,
    mfa_state_of,
)


@pytest.fixture
def flow(db_session, token_issuer):
    return AuthFlowController(db_session, token_issuer)


def _flow_at(db_session, token_issuer, offset_seconds):
    return AuthFlowController(db_session, token_issuer, clock=lambda: time.time() + offset_seconds)


def _enroll(flow, username):
    secret = flow.setup_mfa(username).secret
    flow.apply_mfa_action(username, ConfirmEnrollment(MFAService.get_current_code(secret)))
    return secret


def _wrong_code(secret):
    # 現在のコードを1ずらし、この時間窓では一致しない値にする
    return f"{(int(pyotp.TOTP(secret).now()) + 1) % 1_000_000:06d}"


class TestRegister:

    def test_password_is_stored_hashed(self, flow, db_session):
        flow.register("alice", "s3cret-pass")
        user = get_user_by_username(db_session, "alice")

        assert user.password_hash != "s3cret-pass"
        assert verify_password("s3cret-pass", user.password_hash)
        assert mfa_state_of(user) is MFAState.DISABLED

    def test_duplicate_username_conflicts(self, flow):
        flow.register("alice", "one")
        with pytest.raises(ConflictError):
            flow.register("alice", "two")


class TestMfaLifecycle:

    def test_setup_leaves_user_unconfirmed(self, flow, db_session):
        flow.register("alice", "pw")
        result = flow.setup_mfa("alice")

        user = get_user_by_username(db_session, "alice")
        assert user.mfa_secret == result.secret
        assert mfa_state_of(user) is MFAState.UNCONFIRMED
        assert result.provisioning_uri.startswith("otpauth://totp/")
        assert result.qr_code.startswith("data:image/png;base64,")

    def test_setup_again_while_unconfirmed_replaces_secret(self, flow):
        flow.register("alice", "pw")
        first = flow.setup_mfa("alice").secret
        second = flow.setup_mfa("alice").secret
        assert first != second

    def test_setup_is_refused_once_active(self, flow):
        flow.register("alice", "pw")
        _enroll(flow, "alice")
        with pytest.raises(BadRequestError):
            flow.setup_mfa("alice")

    def test_setup_for_unknown_user(self, flow):
        with pytest.raises(NotFoundError):
            flow.setup_mfa("ghost")

    def test_confirm_activates(self, flow, db_session):
        flow.register("alice", "pw")
        _enroll(flow, "alice")
        assert mfa_state_of(get_user_by_username(db_session, "alice")) is MFAState.ACTIVE
        assert flow.get_mfa_status("alice") is True

    def test_confirm_without_secret(self, flow):
        flow.register("alice", "pw")
        with pytest.raises(BadRequestError):
            flow.apply_mfa_action("alice", ConfirmEnrollment("123456"))

    def test_confirm_with_wrong_code_keeps_unconfirmed(self, flow, db_session):
        flow.register("alice", "pw")
        secret = flow.setup_mfa("alice").secret
        with pytest.raises(UnauthorizedError):
            flow.apply_mfa_action("alice", ConfirmEnrollment(_wrong_code(secret)))
        assert mfa_state_of(get_user_by_username(db_session, "alice")) is MFAState.UNCONFIRMED

    @pytest.mark.parametrize("code", ["abcdef", "", None])
    def test_confirm_with_malformed_code(self, flow, code):
        flow.register("alice", "pw")
        flow.setup_mfa("alice")
        with pytest.raises(BadRequestError):
            flow.apply_mfa_action("alice", ConfirmEnrollment(code))

    def test_disable_clears_secret(self, flow, db_session):
        flow.register("alice", "pw")
        _enroll(flow, "alice")

        state = flow.apply_mfa_action("alice", DisableMfa())

        user = get_user_by_username(db_session, "alice")
        assert state is MFAState.DISABLED
        assert user.mfa_secret is None
        assert user.mfa_enabled is False

    def test_expired_setup_must_be_repeated(self, db_session, token_issuer, monkeypatch):
        monkeypatch.setattr(mfa_config, "setup_expire_minutes", 5)
        flow = AuthFlowController(db_session, token_issuer)
        flow.register("alice", "pw")
        secret = flow.setup_mfa("alice").secret

        later = _flow_at(db_session, token_issuer, 10 * 60)
        code = pyotp.TOTP(secret).at(time.time() + 10 * 60)
        with pytest.raises(BadRequestError, match="expired"):
            later.apply_mfa_action("alice", ConfirmEnrollment(code))

    def test_setup_without_expiry_can_be_confirmed_later(self, db_session, token_issuer, monkeypatch):
        monkeypatch.setattr(mfa_config, "setup_expire_minutes", 0)
        flow = AuthFlowController(db_session, token_issuer)
        flow.register("alice", "pw")
        secret = flow.setup_mfa("alice").secret

        later = _flow_at(db_session, token_issuer, 24 * 60 * 60)
        code = pyotp.TOTP(secret).at(time.time() + 24 * 60 * 60)
        assert later.apply_mfa_action("alice", ConfirmEnrollment(code)) is MFAState.ACTIVE


class TestAuthenticate:

    def test_password_only_login(self, flow, token_issuer):
        flow.register("alice", "pw")
        result = flow.authenticate("alice", "pw")
        assert result.mfa_enabled is False
        assert token_issuer.verify(result.token) == "alice"

    def test_unknown_user_and_wrong_password_look_the_same(self, flow):
        flow.register("alice", "pw")
        with pytest.raises(UnauthorizedError) as unknown:
            flow.authenticate("ghost", "pw")
        with pytest.raises(UnauthorizedError) as wrong:
            flow.authenticate("alice", "nope")
        assert unknown.value.message == wrong.value.message

    def test_unconfirmed_setup_does_not_require_code(self, flow):
        flow.register("alice", "pw")
        flow.setup_mfa("alice")
        assert flow.authenticate("alice", "pw").mfa_enabled is False

    def test_missing_code_yields_challenge(self, flow):
        flow.register("alice", "pw")
        _enroll(flow, "alice")
        with pytest.raises(UnauthorizedError) as exc:
            flow.authenticate("alice", "pw")
        assert exc.value.payload == {"mfaRequired": True, "mfaEnabled": True}

    def test_valid_code_issues_token(self, flow):
        flow.register("alice", "pw")
        secret = _enroll(flow, "alice")
        result = flow.authenticate("alice", "pw", pyotp.TOTP(secret).now())
        assert result.mfa_enabled is True

    def test_code_from_previous_step_is_accepted(self, db_session, token_issuer):
        flow = AuthFlowController(db_session, token_issuer)
        flow.register("alice", "pw")
        secret = _enroll(flow, "alice")

        later = _flow_at(db_session, token_issuer, 30)
        assert later.authenticate("alice", "pw", pyotp.TOTP(secret).now()).mfa_enabled is True

    def test_wrong_code_is_rejected(self, flow):
        flow.register("alice", "pw")
        secret = _enroll(flow, "alice")
        with pytest.raises(UnauthorizedError, match="Invalid MFA code"):
            flow.authenticate("alice", "pw", _wrong_code(secret))

    def test_non_numeric_code_is_bad_request(self, flow):
        flow.register("alice", "pw")
        _enroll(flow, "alice")
        with pytest.raises(BadRequestError):
            flow.authenticate("alice", "pw", "12ab56")

    def test_wrong_password_is_checked_before_code(self, flow):
        flow.register("alice", "pw")
        _enroll(flow, "alice")
        with pytest.raises(UnauthorizedError) as exc:
            flow.authenticate("alice", "nope", "12ab56")
        assert exc.value.payload is None


class TestResetPassword:

    def test_reset_without_mfa(self, flow):
        flow.register("alice", "old-pw")
        flow.reset_password("alice", "new-pw")

        assert flow.authenticate("alice", "new-pw").token
        with pytest.raises(UnauthorizedError):
            flow.authenticate("alice", "old-pw")

    def test_reset_unknown_user(self, flow):
        with pytest.raises(NotFoundError):
            flow.reset_password("ghost", "pw")

    def test_reset_with_mfa_requires_code(self, flow):
        flow.register("alice", "old-pw")
        _enroll(flow, "alice")
        with pytest.raises(UnauthorizedError):
            flow.reset_password("alice", "new-pw")

    def test_reset_with_mfa_and_wrong_code_keeps_password(self, flow):
        flow.register("alice", "old-pw")
        secret = _enroll(flow, "alice")
        with pytest.raises(UnauthorizedError):
            flow.reset_password("alice", "new-pw", _wrong_code(secret))
        code = pyotp.TOTP(secret).now()
        assert flow.authenticate("alice", "old-pw", code).token

    def test_reset_with_mfa_and_valid_code(self, flow):
        flow.register("alice", "old-pw")
        secret = _enroll(flow, "alice")
        flow.reset_password("alice", "new-pw", pyotp.TOTP(secret).now())
        assert flow.authenticate("alice", "new-pw", pyotp.TOTP(secret).now()).token


class TestProfileImage:

    def test_update_and_read_back(self, flow):
        flow.register("alice", "pw")
        assert flow.get_profile_image("alice") is None
        flow.update_profile_image("alice", "data:image/png;base64,AAAA")
        assert flow.get_profile_image("alice") == "data:image/png;base64,AAAA"

    def test_unknown_user(self, flow):
        with pytest.raises(NotFoundError):
            flow.get_profile_image("ghost")


class TestEnabledWithoutSecret:
    """mfa_enabled=True なのにシークレットが無い不整合状態のユーザー"""

    @pytest.fixture
    def broken_user(self, flow, db_session):
        flow.register("alice", "pw")
        user = get_user_by_username(db_session, "alice")
        user.mfa_enabled = True
        user.mfa_secret = None
        db_session.commit()
        return user

    def test_reset_reports_missing_secret(self, flow, broken_user):
        with pytest.raises(BadRequestError, match="MFA secret not set"):
            flow.reset_password("alice", "new-pw", "123456")

    def test_reset_without_code_still_requires_code(self, flow, broken_user):
        with pytest.raises(UnauthorizedError, match="MFA code required"):
            flow.reset_password("alice", "new-pw")

    def test_login_with_code_is_unauthorized(self, flow, broken_user):
        with pytest.raises(UnauthorizedError, match="Invalid MFA code"):
            flow.authenticate("alice", "pw", "123456")

    def test_login_without_code_gets_challenge(self, flow, broken_user):
        with pytest.raises(UnauthorizedError) as exc:
            flow.authenticate("alice", "pw")
        assert exc.value.payload == {"mfaRequired": True, "mfaEnabled": True}


class TestMfaCrud:

    def test_enable_without_secret_is_bad_request(self, flow, db_session):
        flow.register("alice", "pw")
        user = get_user_by_username(db_session, "alice")

        with pytest.raises(BadRequestError, match="MFA secret not set"):
            mfa_crud.enable_mfa(db_session, user)
        assert user.mfa_enabled is False
