from unittest.mock import patch

from use_cases import auth_flow
from use_cases.session_models import CHECKING, SIGNED_OUT, Identity, SessionSnapshot


def _signed_in(verified=True, admin=False):
    identity = Identity(id="u1", fullname="Asha", email="a@example.com", verified=verified, is_admin=admin)
    return SessionSnapshot(checking=False, authenticated=True, identity=identity)


@patch("use_cases.auth_flow.session_manager.init_session_state")
@patch("use_cases.auth_flow.session_manager.current_snapshot", return_value=CHECKING)
def test_ensure_access_waits_while_checking(_mock_snapshot, _mock_init) -> None:
    result = auth_flow.ensure_access("/cart")
    assert result.status == "WAIT"
    assert result.redirect_to is None


@patch("auth.get_audit_repo")
@patch("use_cases.auth_flow.session_manager.init_session_state")
@patch("use_cases.auth_flow.session_manager.current_snapshot", return_value=SIGNED_OUT)
def test_ensure_access_redirects_guest_from_protected_page(_mock_snapshot, _mock_init, _mock_audit) -> None:
    result = auth_flow.ensure_access("/cart")
    assert result.status == "REDIRECT"
    assert result.redirect_to == "/login"
    assert result.reason == "unauthenticated"
    assert result.user_id is None


@patch("auth.get_audit_repo")
@patch("use_cases.auth_flow.session_manager.init_session_state")
def test_ensure_access_sends_unverified_user_to_verification(_mock_init, _mock_audit) -> None:
    with patch("use_cases.auth_flow.session_manager.current_snapshot", return_value=_signed_in(verified=False)):
        result = auth_flow.ensure_access("/profile")
    assert result.status == "REDIRECT"
    assert result.redirect_to == "/verify-email"
    assert result.user_id == "u1"


@patch("use_cases.auth_flow.session_manager.init_session_state")
def test_ensure_access_continues_for_admin(_mock_init) -> None:
    with patch("use_cases.auth_flow.session_manager.current_snapshot", return_value=_signed_in(admin=True)):
        result = auth_flow.ensure_access("/admin/restaurant")
    assert result.status == "CONTINUE"
    assert result.user_id == "u1"


@patch("use_cases.auth_flow.session_manager.init_session_state")
@patch("use_cases.auth_flow.session_manager.current_snapshot", return_value=SIGNED_OUT)
def test_ensure_access_public_page_for_guest(_mock_snapshot, _mock_init) -> None:
    result = auth_flow.ensure_access("/search")
    assert result.status == "CONTINUE"
    assert result.reason == "allowed"
