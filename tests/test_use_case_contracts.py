from datetime import date
from unittest.mock import patch

from tests.fakes import FakeAuthBackend, FakeNavigator, FakeReportRepository
from use_cases import auth_flow, bootstrap, history_flow, report_flow
from use_cases.session_sync import SessionSynchronizer, session_scope


def test_auth_flow_contract() -> None:
    assert hasattr(auth_flow, "ensure_authenticated_session")
    sync = SessionSynchronizer(FakeAuthBackend(), FakeNavigator()).start()
    with session_scope(sync):
        result = auth_flow.ensure_authenticated_session()
    assert isinstance(result, auth_flow.AuthFlowResult)
    assert result.status in {"CONTINUE", "STOP", "LOADING"}


@patch("use_cases.bootstrap.session_manager.init_session_state")
@patch("use_cases.bootstrap.auth.get_backend_config", return_value=("url", "key"))
def test_bootstrap_contract(_, __) -> None:
    assert hasattr(bootstrap, "run_startup")
    result = bootstrap.run_startup()
    assert isinstance(result, bootstrap.StartupResult)
    assert result.status in {"CONTINUE", "STOP"}
    assert isinstance(result.planned_steps, tuple)


def test_report_flow_contract(user_session) -> None:
    draft = report_flow.default_draft("Jeanne", today=date(2025, 3, 14))
    result = report_flow.submit_report(FakeReportRepository(), user_session, draft, today=date(2025, 3, 14))
    assert isinstance(result, report_flow.SubmissionResult)
    assert result.status in {"SUBMITTED", "INVALID", "AUTH_REQUIRED", "FAILED"}


def test_history_flow_contract(user_session) -> None:
    result = history_flow.load_report_history(FakeReportRepository(), user_session)
    assert isinstance(result, history_flow.HistoryResult)
    assert result.status in {"LOADED", "EMPTY", "FAILED", "AUTH_REQUIRED"}
    assert isinstance(result.reports, tuple)
