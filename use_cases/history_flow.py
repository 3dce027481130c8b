"""Report history preparation for application layer orchestration."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Literal, Optional, Tuple

import pandas as pd

from infrastructure.repositories.errors import ReportRepositoryError
from use_cases import access_policy
from use_cases.domain_models import COUNTER_LABELS, REPORT_COUNTER_FIELDS, Report
from use_cases.session_models import UserSession

HistoryStatus = Literal["LOADED", "EMPTY", "FAILED", "AUTH_REQUIRED"]

FRENCH_MONTHS = (
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
)

HISTORY_COLUMNS = ("Date", "Closer") + tuple(COUNTER_LABELS[name] for name in REPORT_COUNTER_FIELDS)


@dataclass(frozen=True)
class HistoryResult:
    status: HistoryStatus
    reports: Tuple[Report, ...] = field(default_factory=tuple)
    error: str = ""


def load_report_history(repository, session: Optional[UserSession]) -> HistoryResult:
    """Fetch the session user's reports, newest report date first."""
    if session is None:
        return HistoryResult(status="AUTH_REQUIRED")

    try:
        rows = repository.list_reports_for_user(session.user_id)
    except ReportRepositoryError as e:
        return HistoryResult(
            status="FAILED",
            error=f"Erreur lors du chargement des rapports : {e}",
        )

    reports = access_policy.visible_reports(session, rows)
    if not reports:
        return HistoryResult(status="EMPTY")
    return HistoryResult(status="LOADED", reports=tuple(reports))


def format_french_date(value: date) -> str:
    return f"{value.day} {FRENCH_MONTHS[value.month - 1]} {value.year}"


def reports_to_frame(reports: List[Report]) -> pd.DataFrame:
    records = [
        {
            "Date": format_french_date(r.report_date),
            "Closer": r.closer_name,
            **{COUNTER_LABELS[name]: getattr(r, name) for name in REPORT_COUNTER_FIELDS},
        }
        for r in reports
    ]
    return pd.DataFrame(records, columns=list(HISTORY_COLUMNS))


def summarize_reports(reports: List[Report]) -> Dict[str, int]:
    """Totals per counter over the given reports."""
    if not reports:
        return {name: 0 for name in REPORT_COUNTER_FIELDS}
    df = pd.DataFrame([r.counters() for r in reports], columns=list(REPORT_COUNTER_FIELDS))
    return {name: int(df[name].sum()) for name in REPORT_COUNTER_FIELDS}
