import streamlit as st
import auth
from infrastructure.api.food_api_client import ApiError
from infrastructure.repositories.sqlite_audit_repository import AuditAction
from services import order_service
from utils import session_manager

def _render_profile_form(identity):
    with st.form("profile_form"):
        if identity.profile_picture:
            st.image(identity.profile_picture, width=96)
        fullname = st.text_input("Full name", value=identity.fullname)
        st.text_input("Email", value=identity.email, disabled=True)
        contact = st.text_input("Contact", value=identity.contact)
        address = st.text_input("Address", value=identity.address)
        city = st.text_input("City", value=identity.city)
        country = st.text_input("Country", value=identity.country)
        submitted = st.form_submit_button("Update profile", type="primary")

    if not submitted:
        return
    patch = {"fullname": fullname, "contact": contact, "address": address, "city": city, "country": country}
    try:
        snapshot = session_manager.get_authority().update_identity(patch)
    except ApiError as e:
        st.error(e.message or "Profile update failed")
        return
    auth.get_audit_repo().log_action(AuditAction.PROFILE_UPDATE, target_type="user", actor_user_id=snapshot.identity.id)
    st.toast("Profile updated")
    st.rerun()

def render_profile():
    identity = session_manager.current_snapshot().identity
    st.title(f"👤 {identity.fullname}")
    tab_profile, tab_orders = st.tabs(["Profile", "Order history"])

    with tab_profile:
        _render_profile_form(identity)

    with tab_orders:
        try:
            orders = session_manager.get_client().get_orders()
        except ApiError as e:
            st.error(e.message or "Failed to fetch order history")
            return
        df = order_service.orders_to_frame(orders)
        if df.empty:
            st.info("You have not ordered anything yet.")
            return
        st.metric("Total spent", f"₹{df['Amount'].sum():.2f}")
        st.dataframe(
            df,
            use_container_width=True,
            hide_index=True,
            column_config={
                "Amount": st.column_config.NumberColumn(format="₹%.2f"),
                "Date": st.column_config.DatetimeColumn(format="DD.MM.YYYY HH:mm"),
            },
        )
