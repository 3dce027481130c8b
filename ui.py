import streamlit as st


def setup_style():
    st.markdown("""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;700;800&display=swap');

        :root {
            --card-bg: #ffffff;
            --card-border: rgba(15, 23, 42, 0.08);
            --card-shadow: 0 10px 30px rgba(15, 23, 42, 0.08);
            --text-main: #0f172a;
            --text-soft: #64748b;
            --accent: #2563eb;
        }

        html, body, .stApp {
            font-family: 'Manrope', sans-serif;
            color: var(--text-main);
            background: #f3f4f6;
        }

        .main .block-container {
            max-width: 56rem;
            padding-top: 2rem;
            padding-bottom: 2rem;
        }

        div[data-testid="stForm"] {
            background: var(--card-bg);
            border: 1px solid var(--card-border);
            border-radius: 14px;
            box-shadow: var(--card-shadow);
            padding: 1.5rem;
        }

        .closer-subtitle {
            color: var(--text-soft);
            font-size: 1.05rem;
            margin-top: -0.6rem;
            margin-bottom: 1.4rem;
        }

        .closer-empty {
            text-align: center;
            color: var(--text-soft);
            padding: 2rem 0;
        }
    </style>
    """, unsafe_allow_html=True)


def page_header(title, subtitle=None):
    st.title(title)
    if subtitle:
        st.markdown(f"<p class='closer-subtitle'>{subtitle}</p>", unsafe_allow_html=True)


def show_success(message):
    st.toast(message, icon="✅")


def show_error(message):
    st.toast(message, icon="❌")


def render_empty_state(message):
    st.markdown(f"<p class='closer-empty'>{message}</p>", unsafe_allow_html=True)
