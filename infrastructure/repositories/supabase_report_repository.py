import logging
from typing import Any, Dict, List

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from infrastructure.repositories.errors import ReportRepositoryError, _error_message
from use_cases.domain_models import Report

log = logging.getLogger(__name__)

REPORTS_TABLE = "reports"


class SupabaseReportRepository:
    def __init__(self, client: Client):
        self.client = client

    def insert_report(self, row: Dict[str, Any]) -> None:
        try:
            self.client.table(REPORTS_TABLE).insert(row).execute()
        except (APIError, httpx.HTTPError) as e:
            log.error("Report insert failed for user %s: %s", row.get("user_id"), _error_message(e))
            raise ReportRepositoryError(_error_message(e)) from e

    def list_reports_for_user(self, user_id: str) -> List[Report]:
        """Reports owned by `user_id`, most recent report date first."""
        try:
            response = (
                self.client.table(REPORTS_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("report_date", desc=True)
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            log.error("Report query failed for user %s: %s", user_id, _error_message(e))
            raise ReportRepositoryError(_error_message(e)) from e
        return [Report.from_row(row) for row in response.data or []]
