import streamlit as st

def setup_style():
    st.markdown("""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;700;800&display=swap');

        :root {
            --accent: #f97316;
            --accent-soft: rgba(249, 115, 22, 0.12);
            --card-border: rgba(15, 23, 42, 0.08);
            --text-soft: rgba(15, 23, 42, 0.6);
        }

        html, body, .stApp {
            font-family: 'Manrope', sans-serif;
        }

        [data-testid="stVerticalBlockBorderWrapper"] {
            border-radius: 14px !important;
            border-color: var(--card-border) !important;
        }

        .stButton > button[kind="primary"], .stFormSubmitButton > button[kind="primary"] {
            background: var(--accent) !important;
            border-color: var(--accent) !important;
        }

        .fo-loading-card {
            margin: 18vh auto 0;
            max-width: 360px;
            padding: 28px;
            border-radius: 18px;
            text-align: center;
            background: var(--accent-soft);
        }
        .fo-loading-orb {
            width: 42px;
            height: 42px;
            margin: 0 auto 14px;
            border-radius: 50%;
            border: 4px solid var(--accent-soft);
            border-top-color: var(--accent);
            animation: fo-spin 0.9s linear infinite;
        }
        .fo-loading-sub { color: var(--text-soft); }

        @keyframes fo-spin { to { transform: rotate(360deg); } }
    </style>
    """, unsafe_allow_html=True)

def show_loading_overlay(message="Checking your session"):
    st.markdown(
        f"""
        <div class="fo-loading-card">
          <div class="fo-loading-orb"></div>
          <div class="fo-loading-sub">{message}</div>
        </div>
        """,
        unsafe_allow_html=True
    )
