import streamlit as st

import ui
from infrastructure.repositories.supabase_report_repository import SupabaseReportRepository
from use_cases import auth_flow, history_flow
from use_cases.domain_models import COUNTER_LABELS
from use_cases.session_sync import use_session
from utils import session_manager

EMPTY_MESSAGE = "Aucun rapport trouvé. Commencez par en soumettre un !"


def render_reports_list():
    gate = auth_flow.ensure_authenticated_session()
    if gate.status == "LOADING":
        st.info("Chargement des rapports...")
        return
    if gate.status == "STOP":
        session_manager.request_login_redirect()
        return

    session = use_session().session
    repo = SupabaseReportRepository(session_manager.get_backend_client())

    ui.page_header("Mes Rapports Quotidiens", "Voici la liste de tous vos rapports soumis.")

    # Not cached: every visit re-fetches.
    with st.spinner("Chargement des rapports..."):
        history = history_flow.load_report_history(repo, session)

    if history.status == "FAILED":
        ui.show_error(history.error)

    if history.status != "LOADED":
        ui.render_empty_state(EMPTY_MESSAGE)
        return

    reports = list(history.reports)
    totals = history_flow.summarize_reports(reports)
    cols = st.columns(len(totals))
    for col, (name, total) in zip(cols, totals.items()):
        col.metric(COUNTER_LABELS[name], f"{total:,}".replace(",", " "))

    st.dataframe(
        history_flow.reports_to_frame(reports),
        hide_index=True,
        use_container_width=True,
    )
    st.caption(f"{len(reports)} rapport(s)")
