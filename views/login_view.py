import streamlit as st
import auth
from infrastructure.api.food_api_client import ApiError
from infrastructure.repositories.sqlite_audit_repository import AuditAction
from services import validation
from utils import session_manager

def _show_errors(errors):
    for message in errors:
        st.error(message)

def _after_sign_in():
    session_manager.persist_api_cookie()
    session_manager.bind_cart_to_identity()

def render_login():
    st.title("🍽️ Welcome back")
    st.caption("Log in to order from your favourite restaurants.")

    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", type="primary")

    if submitted:
        errors = validation.validate_login({"email": email, "password": password})
        if errors:
            _show_errors(errors)
        else:
            try:
                snapshot = session_manager.get_authority().login(email, password)
            except ApiError as e:
                auth.get_audit_repo().log_action(
                    AuditAction.LOGIN_FAIL, target_type="session",
                    metadata={"reason": e.message}, result="deny"
                )
                st.error(e.message or "Login failed")
            else:
                auth.get_audit_repo().log_action(
                    AuditAction.LOGIN_SUCCESS, target_type="session", actor_user_id=snapshot.identity.id
                )
                _after_sign_in()
                session_manager.navigate("/")

    col1, col2 = st.columns(2)
    if col1.button("Forgot password?"):
        session_manager.navigate("/forgot-password")
    if col2.button("Create an account"):
        session_manager.navigate("/signup")

def render_signup():
    st.title("📝 Create your account")

    with st.form("signup_form", clear_on_submit=False):
        fullname = st.text_input("Full name *")
        email = st.text_input("Email *")
        contact = st.text_input("Contact number *", max_chars=10)
        password = st.text_input("Password *", type="password")
        submitted = st.form_submit_button("Sign up", type="primary")

    if submitted:
        form = {"fullname": fullname, "email": email, "contact": contact, "password": password}
        errors = validation.validate_signup(form)
        if errors:
            _show_errors(errors)
        else:
            try:
                snapshot = session_manager.get_authority().signup(fullname, email, password, contact)
            except ApiError as e:
                st.error(e.message or "Signup failed")
                if e.already_exists:
                    st.info("This email is already registered. Please log in instead.")
                    if st.button("Go to login"):
                        session_manager.navigate("/login")
            else:
                auth.get_audit_repo().log_action(
                    AuditAction.SIGNUP, target_type="user", actor_user_id=snapshot.identity.id
                )
                _after_sign_in()
                session_manager.navigate("/verify-email")

    if st.button("Already have an account? Login"):
        session_manager.navigate("/login")

def render_verify_email():
    st.title("📧 Verify your email")
    st.caption("Enter the 6 digit code sent to your email address.")

    snapshot = session_manager.current_snapshot()
    if not snapshot.authenticated:
        st.info("Log in first to verify your email.")
        if st.button("Go to login"):
            session_manager.navigate("/login")
        return
    if snapshot.identity.verified:
        st.success("Your email is already verified.")
        if st.button("Continue"):
            session_manager.navigate("/")
        return

    with st.form("verify_form"):
        code = st.text_input("Verification code", max_chars=6)
        submitted = st.form_submit_button("Verify", type="primary")

    if submitted:
        errors = validation.validate_verification_code(code)
        if errors:
            _show_errors(errors)
            return
        try:
            snapshot = session_manager.get_authority().verify_identity(code)
        except ApiError as e:
            st.error(e.message or "Email verification failed")
        else:
            auth.get_audit_repo().log_action(
                AuditAction.EMAIL_VERIFY, target_type="user", actor_user_id=snapshot.identity.id
            )
            session_manager.navigate("/")

def render_forgot_password():
    st.title("🔑 Forgot password")
    with st.form("forgot_form"):
        email = st.text_input("Email")
        submitted = st.form_submit_button("Send reset link", type="primary")
    if submitted:
        errors = validation.validate_email(email)
        if errors:
            _show_errors(errors)
            return
        try:
            st.success(session_manager.get_authority().forgot_password(email))
        except ApiError as e:
            st.error(e.message or "Password reset request failed")
    if st.button("Back to login"):
        session_manager.navigate("/login")

def render_reset_password():
    st.title("🔒 Reset password")
    token = st.query_params.get("token", "")
    if not token:
        st.error("The reset link is missing its token.")
        return
    with st.form("reset_form"):
        new_password = st.text_input("New password", type="password")
        submitted = st.form_submit_button("Reset password", type="primary")
    if submitted:
        if len(new_password) < validation.MIN_PASSWORD_LENGTH:
            st.error(f"Password must be at least {validation.MIN_PASSWORD_LENGTH} characters.")
            return
        try:
            st.success(session_manager.get_authority().reset_password(token, new_password))
        except ApiError as e:
            st.error(e.message or "Password reset failed")
        else:
            if st.button("Go to login"):
                session_manager.navigate("/login")
