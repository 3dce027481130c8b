"""Report ownership checks."""

import logging
from typing import Iterable, List, Optional

from use_cases.domain_models import Report
from use_cases.session_models import UserSession

log = logging.getLogger(__name__)


def can_view(session: Optional[UserSession], report: Report) -> bool:
    return session is not None and report.user_id == session.user_id


def visible_reports(session: Optional[UserSession], reports: Iterable[Report]) -> List[Report]:
    """
    Keeps only the reports owned by the session's user.
    Anything dropped here means the backend filter did not hold, so it is logged.
    """
    visible = []
    denied = 0
    for report in reports:
        if can_view(session, report):
            visible.append(report)
        else:
            denied += 1

    if denied:
        log.warning(
            "Dropped %d report(s) not owned by user %s",
            denied,
            session.user_id if session else None,
        )
    return visible
