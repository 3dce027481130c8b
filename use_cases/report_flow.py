"""Daily report submission for application layer orchestration."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Literal, Optional

from infrastructure.repositories.errors import ReportRepositoryError
from use_cases.domain_models import REPORT_COUNTER_FIELDS
from use_cases.session_models import UserSession

log = logging.getLogger(__name__)

MIN_REPORT_DATE = date(1900, 1, 1)
MIN_CLOSER_NAME_LENGTH = 2

SubmissionStatus = Literal["SUBMITTED", "INVALID", "AUTH_REQUIRED", "FAILED"]


@dataclass(frozen=True)
class ReportDraft:
    """Form values of a daily report before validation."""

    closer_name: str
    report_date: Optional[date]
    num_calls: Any = 0
    num_nrp: Any = 0
    num_settings: Any = 0
    num_closings: Any = 0
    num_sales: Any = 0


@dataclass(frozen=True)
class SubmissionResult:
    status: SubmissionStatus
    errors: Dict[str, str] = field(default_factory=dict)
    message: str = ""


@dataclass(frozen=True)
class ProfileLookup:
    closer_name: str
    error: bool = False


def default_draft(closer_name: str = "", today: Optional[date] = None) -> ReportDraft:
    return ReportDraft(closer_name=closer_name, report_date=today or date.today())


def reset_draft(draft: ReportDraft, today: Optional[date] = None) -> ReportDraft:
    """Defaults for a fresh form, keeping the resolved closer name."""
    return replace(default_draft(today=today), closer_name=draft.closer_name)


def validate_draft(draft: ReportDraft, today: Optional[date] = None) -> Dict[str, str]:
    """Return {field: message} for every invalid field, empty when the draft is valid."""
    today = today or date.today()
    errors: Dict[str, str] = {}

    if len((draft.closer_name or "").strip()) < MIN_CLOSER_NAME_LENGTH:
        errors["closer_name"] = "Le nom du closer est requis."

    if draft.report_date is None:
        errors["report_date"] = "La date du rapport est requise."
    elif not MIN_REPORT_DATE <= draft.report_date <= today:
        errors["report_date"] = "La date doit être comprise entre le 01/01/1900 et aujourd'hui."

    for name in REPORT_COUNTER_FIELDS:
        value = getattr(draft, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            errors[name] = "Doit être un nombre positif."

    return errors


def build_report_row(draft: ReportDraft, user_id: str) -> Dict[str, Any]:
    row = {
        "user_id": user_id,
        "closer_name": draft.closer_name.strip(),
        "report_date": draft.report_date.strftime("%Y-%m-%d"),
    }
    row.update({name: getattr(draft, name) for name in REPORT_COUNTER_FIELDS})
    return row


def submit_report(repository, session: Optional[UserSession], draft: ReportDraft, today: Optional[date] = None) -> SubmissionResult:
    """Validate locally, then insert one report owned by the session's user."""
    errors = validate_draft(draft, today=today)
    if errors:
        return SubmissionResult(status="INVALID", errors=errors)

    if session is None:
        return SubmissionResult(
            status="AUTH_REQUIRED",
            message="Vous devez être connecté pour soumettre un rapport.",
        )

    try:
        repository.insert_report(build_report_row(draft, session.user_id))
    except ReportRepositoryError as e:
        return SubmissionResult(
            status="FAILED",
            message=f"Erreur lors de la soumission du rapport : {e}",
        )

    log.info("Report for %s submitted by user %s", draft.report_date, session.user_id)
    return SubmissionResult(status="SUBMITTED", message="Rapport soumis avec succès !")


def load_closer_name(profile_repository, session: UserSession) -> ProfileLookup:
    """Resolve the closer display name from the user's profile."""
    try:
        profile = profile_repository.get_profile(session.user_id)
    except ReportRepositoryError:
        return ProfileLookup(closer_name="", error=True)
    full_name = f"{profile.get('first_name') or ''} {profile.get('last_name') or ''}".strip()
    return ProfileLookup(closer_name=full_name)
