"""Application layer contracts for orchestrating high-level flows."""

from .auth_flow import AuthFlowResult, AuthFlowStatus, ensure_authenticated_session
from .bootstrap import StartupResult, StartupStatus, run_startup
from .domain_models import REPORT_COUNTER_FIELDS, Report
from .history_flow import HistoryResult, load_report_history, reports_to_frame, summarize_reports
from .report_flow import ProfileLookup, ReportDraft, SubmissionResult, load_closer_name, submit_report, validate_draft
from .session_models import AuthEvent, UserSession, is_authenticated
from .session_sync import (
    NAVIGATION_POLICY,
    SessionScopeError,
    SessionState,
    SessionSyncError,
    SessionSynchronizer,
    decide_navigation,
    session_scope,
    use_session,
)

__all__ = [
    "AuthEvent",
    "AuthFlowResult",
    "AuthFlowStatus",
    "HistoryResult",
    "NAVIGATION_POLICY",
    "ProfileLookup",
    "REPORT_COUNTER_FIELDS",
    "Report",
    "ReportDraft",
    "SessionScopeError",
    "SessionState",
    "SessionSyncError",
    "SessionSynchronizer",
    "StartupResult",
    "StartupStatus",
    "SubmissionResult",
    "UserSession",
    "decide_navigation",
    "ensure_authenticated_session",
    "is_authenticated",
    "load_closer_name",
    "load_report_history",
    "reports_to_frame",
    "run_startup",
    "session_scope",
    "submit_report",
    "summarize_reports",
    "use_session",
    "validate_draft",
]
