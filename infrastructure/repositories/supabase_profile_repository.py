import logging

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from infrastructure.repositories.errors import ReportRepositoryError, _error_message

log = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


class SupabaseProfileRepository:
    def __init__(self, client: Client):
        self.client = client

    def get_profile(self, user_id: str) -> dict:
        """Return {"first_name", "last_name"} for the user. A missing row is an error."""
        try:
            response = (
                self.client.table(PROFILES_TABLE)
                .select("first_name, last_name")
                .eq("id", user_id)
                .single()
                .execute()
            )
        except (APIError, httpx.HTTPError) as e:
            log.error("Profile lookup failed for user %s: %s", user_id, _error_message(e))
            raise ReportRepositoryError(_error_message(e)) from e
        return response.data or {}
