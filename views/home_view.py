import streamlit as st

import ui
from use_cases.session_sync import DAILY_REPORT_PATH, REPORTS_PATH
from utils import session_manager


def render_home():
    ui.page_header(
        "Bienvenue sur votre application Closer !",
        "Commencez à gérer vos prospects et rapports ici.",
    )

    col1, col2 = st.columns(2)
    if col1.button("📝 Saisir un rapport quotidien", type="primary", use_container_width=True):
        session_manager.navigate_to(DAILY_REPORT_PATH)
    if col2.button("📋 Voir mes rapports", type="secondary", use_container_width=True):
        session_manager.navigate_to(REPORTS_PATH)
