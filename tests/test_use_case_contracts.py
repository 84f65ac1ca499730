from unittest.mock import MagicMock, patch

from use_cases import auth_flow, bootstrap
from use_cases.session_models import SIGNED_OUT


@patch("use_cases.auth_flow.session_manager.current_snapshot", return_value=SIGNED_OUT)
@patch("use_cases.auth_flow.session_manager.init_session_state")
def test_auth_flow_contract(_, __) -> None:
    assert hasattr(auth_flow, "ensure_access")
    result = auth_flow.ensure_access("/")
    assert isinstance(result, auth_flow.AuthFlowResult)
    assert result.status in {"CONTINUE", "WAIT", "REDIRECT"}


@patch("use_cases.bootstrap.session_manager.bind_cart_to_identity")
@patch("use_cases.bootstrap.session_manager.get_authority", return_value=MagicMock(**{"snapshot.return_value": SIGNED_OUT}))
@patch("use_cases.bootstrap.session_manager.init_session_state")
@patch("use_cases.bootstrap.auth.init_storage")
def test_bootstrap_contract(_, __, ___, ____) -> None:
    assert hasattr(bootstrap, "run_startup")
    result = bootstrap.run_startup()
    assert isinstance(result, bootstrap.StartupResult)
    assert result.status in {"CONTINUE", "STOP"}
    assert isinstance(result.planned_steps, tuple)
