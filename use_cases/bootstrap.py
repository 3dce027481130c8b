"""Startup orchestration for application bootstrap."""

import logging
from dataclasses import dataclass
from typing import Literal, Tuple

import streamlit as st

import auth
from utils import session_manager

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


def run_startup() -> StartupResult:
    """Check backend configuration and prepare session state."""
    executed_steps = []

    try:
        auth.get_backend_config()
    except auth.BackendConfigError as e:
        log.error("Startup aborted: %s", e)
        st.error("🚨 Configuration manquante : définissez `SUPABASE_URL` et `SUPABASE_ANON_KEY` dans `secrets.toml`.")
        return StartupResult(status="STOP", planned_steps=("check_backend_config_failed",))
    executed_steps.append("check_backend_config")

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
