from datetime import date

import streamlit as st

import ui
from infrastructure.repositories.supabase_profile_repository import SupabaseProfileRepository
from infrastructure.repositories.supabase_report_repository import SupabaseReportRepository
from use_cases import auth_flow, report_flow
from use_cases.session_sync import use_session
from utils import session_manager

COUNTER_INPUTS = (
    ("num_calls", "Nombre d'appels"),
    ("num_nrp", "Nombre de NRP"),
    ("num_settings", "Nombre de Settings"),
    ("num_closings", "Nombre de Closings"),
    ("num_sales", "Nombre de Ventes"),
)

FIELD_LABELS = {"closer_name": "Nom du Closer", "report_date": "Date", **dict(COUNTER_INPUTS)}


def _resolve_closer_name(client, session):
    """Profile lookup, done once per user and browser session. A failure is kept too."""
    cached = st.session_state.get("profile_lookup")
    if cached is not None and cached[0] == session.user_id:
        return cached[1]

    lookup = report_flow.load_closer_name(SupabaseProfileRepository(client), session)
    if lookup.error:
        ui.show_error("Erreur lors du chargement du profil utilisateur.")
    st.session_state.profile_lookup = (session.user_id, lookup)
    return lookup


def _form_defaults(lookup, today):
    """Values a fresh form starts from: the draft kept by the last reset, else the defaults."""
    draft = st.session_state.get("report_form_defaults")
    if draft is None:
        return report_flow.default_draft(lookup.closer_name, today=today)
    if draft.report_date != today:
        return report_flow.reset_draft(draft, today=today)
    return draft


def render_daily_report():
    gate = auth_flow.ensure_authenticated_session()
    if gate.status == "LOADING":
        st.info("Chargement...")
        return
    if gate.status == "STOP":
        session_manager.request_login_redirect()
        return

    session = use_session().session
    client = session_manager.get_backend_client()

    ui.page_header("Rapport Quotidien du Closer", "Saisissez vos performances pour la journée.")

    flash = session_manager.pop_flash()
    if flash is not None:
        level, message = flash
        if level == "success":
            ui.show_success(message)
        else:
            ui.show_error(message)

    lookup = _resolve_closer_name(client, session)
    # Bumping the version gives every widget a fresh key, i.e. resets the form.
    version = st.session_state.setdefault("report_form_version", 0)
    today = date.today()
    defaults = _form_defaults(lookup, today)

    with st.form("daily_report_form", clear_on_submit=False):
        closer_name = st.text_input(
            FIELD_LABELS["closer_name"],
            value=lookup.closer_name or defaults.closer_name,
            placeholder="Votre nom",
            disabled=bool(lookup.closer_name),
            key=f"closer_name_{version}",
        )
        report_date = st.date_input(
            FIELD_LABELS["report_date"],
            value=defaults.report_date,
            min_value=report_flow.MIN_REPORT_DATE,
            max_value=today,
            format="DD/MM/YYYY",
            key=f"report_date_{version}",
        )
        counters = {
            name: st.number_input(label, min_value=0, value=int(getattr(defaults, name)), step=1, key=f"{name}_{version}")
            for name, label in COUNTER_INPUTS
        }
        submitted = st.form_submit_button("Soumettre le rapport", type="primary", use_container_width=True)

    if not submitted:
        return

    draft = report_flow.ReportDraft(
        closer_name=lookup.closer_name or closer_name,
        report_date=report_date,
        **{name: int(value) for name, value in counters.items()},
    )
    result = report_flow.submit_report(SupabaseReportRepository(client), session, draft, today=today)

    if result.status == "INVALID":
        for name, message in result.errors.items():
            st.error(f"{FIELD_LABELS[name]} : {message}")
    elif result.status == "AUTH_REQUIRED":
        ui.show_error(result.message)
        session_manager.request_login_redirect()
    elif result.status == "FAILED":
        ui.show_error(result.message)
    else:
        session_manager.set_flash("success", result.message)
        st.session_state.report_form_defaults = report_flow.reset_draft(draft, today=today)
        st.session_state.report_form_version = version + 1
        st.rerun()
