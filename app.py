import streamlit as st
import sentry_sdk
from datetime import datetime, timezone

from infrastructure.observability import setup_observability
setup_observability()

import ui
from use_cases import bootstrap
from use_cases.session_sync import DAILY_REPORT_PATH, HOME_PATH, LOGIN_PATH, REPORTS_PATH, session_scope
from utils import session_manager
from views import daily_report_view, home_view, login_view, reports_list_view

# --- CONFIGURATION DE LA PAGE ---
st.set_page_config(page_title="Closer Reports", page_icon="📈", layout="centered")

# Health Check (Basic load-balancer heartbeat)
if st.query_params.get("health") == "1":
    st.write({"status": "ok", "version": "1.0", "time": datetime.now(timezone.utc).isoformat()})
    st.stop()

ui.setup_style()

# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()

# --- ROUTES ---
PAGES = {
    HOME_PATH: st.Page(home_view.render_home, title="Accueil", icon="🏠", url_path="accueil", default=True),
    LOGIN_PATH: st.Page(login_view.render_auth_screen, title="Connexion", icon="🔐", url_path="login"),
    DAILY_REPORT_PATH: st.Page(daily_report_view.render_daily_report, title="Rapport quotidien", icon="📝", url_path="daily-report"),
    REPORTS_PATH: st.Page(reports_list_view.render_reports_list, title="Mes rapports", icon="📋", url_path="reports"),
}
page = st.navigation(list(PAGES.values()), position="hidden")
running_path = "/" + page.url_path
st.session_state.current_path = running_path

# --- SESSION ---
# Created and started once per browser session; later runs reuse it.
sync = session_manager.get_synchronizer()
session_manager.flush_browser_token()

current_session = sync.get_current_session()
if current_session is not None:
    if sentry_sdk.get_client().is_active():
        sentry_sdk.set_user({"id": current_session.user_id})

    with st.sidebar:
        st.caption(f"Connecté : {current_session.email or current_session.user_id}")
        if st.button("🏠 Accueil", key="home_btn", use_container_width=True):
            session_manager.navigate_to(HOME_PATH)
        if st.button("Se déconnecter", key="logout_btn", type="secondary", use_container_width=True):
            session_manager.logout()

# Navigation requested at startup or from the sidebar.
session_manager.follow_pending_navigation(PAGES, running_path)

with session_scope(sync):
    page.run()

# Navigation requested while the page rendered (sign-in, links, auth gate).
session_manager.follow_pending_navigation(PAGES, running_path)
