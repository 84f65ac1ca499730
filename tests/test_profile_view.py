from unittest.mock import patch
from infrastructure.api.food_api_client import ApiError
from use_cases.session_models import Identity, SessionSnapshot
from views import profile_view

IDENTITY = Identity(id="u1", fullname="Asha", email="a@example.com", verified=True, city="Pune")


def _typed_city(label, value="", **kwargs):
    return "Delhi" if label == "City" else value


@patch("views.profile_view.auth.get_audit_repo")
@patch("views.profile_view.session_manager.get_authority")
@patch("views.profile_view.st")
def test_profile_update_reruns_with_new_identity(mock_st, mock_get_authority, mock_get_audit_repo):
    mock_st.text_input.side_effect = _typed_city
    mock_st.form_submit_button.return_value = True
    updated = SessionSnapshot(checking=False, authenticated=True, identity=IDENTITY.merged({"city": "Delhi"}))
    mock_get_authority.return_value.update_identity.return_value = updated

    profile_view._render_profile_form(IDENTITY)

    patch_arg = mock_get_authority.return_value.update_identity.call_args[0][0]
    assert patch_arg["city"] == "Delhi"
    mock_get_audit_repo.return_value.log_action.assert_called_once()
    mock_st.rerun.assert_called_once()


@patch("views.profile_view.auth.get_audit_repo")
@patch("views.profile_view.session_manager.get_authority")
@patch("views.profile_view.st")
def test_failed_profile_update_shows_error_without_rerun(mock_st, mock_get_authority, mock_get_audit_repo):
    mock_st.form_submit_button.return_value = True
    mock_get_authority.return_value.update_identity.side_effect = ApiError("Internal server error", status_code=500)

    profile_view._render_profile_form(IDENTITY)

    mock_st.error.assert_called_once_with("Internal server error")
    mock_st.rerun.assert_not_called()
    mock_get_audit_repo.return_value.log_action.assert_not_called()
