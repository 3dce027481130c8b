from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError

from infrastructure.repositories.supabase_profile_repository import SupabaseProfileRepository
from infrastructure.repositories.supabase_report_repository import ReportRepositoryError, SupabaseReportRepository


def _api_error(message):
    return APIError({"message": message, "code": "42501", "hint": None, "details": None})


@pytest.fixture
def client():
    return MagicMock()


def test_insert_report_targets_reports_table(client) -> None:
    row = {"user_id": "U1", "report_date": "2025-03-13", "num_calls": 5}

    SupabaseReportRepository(client).insert_report(row)

    client.table.assert_called_once_with("reports")
    client.table.return_value.insert.assert_called_once_with(row)
    client.table.return_value.insert.return_value.execute.assert_called_once()


def test_insert_report_translates_backend_error(client) -> None:
    client.table.return_value.insert.return_value.execute.side_effect = _api_error("new row violates row-level security policy")

    with pytest.raises(ReportRepositoryError) as excinfo:
        SupabaseReportRepository(client).insert_report({"user_id": "U1"})

    assert str(excinfo.value) == "new row violates row-level security policy"


def test_insert_report_translates_transport_error(client) -> None:
    client.table.return_value.insert.return_value.execute.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(ReportRepositoryError) as excinfo:
        SupabaseReportRepository(client).insert_report({"user_id": "U1"})

    assert "connection refused" in str(excinfo.value)


def test_list_reports_filters_by_user_and_orders_by_date(client) -> None:
    query = client.table.return_value.select.return_value
    ordered = query.eq.return_value.order.return_value
    ordered.execute.return_value = MagicMock(
        data=[
            {"id": "b", "user_id": "U1", "closer_name": "J", "report_date": "2025-03-02", "num_calls": 3},
            {"id": "a", "user_id": "U1", "closer_name": "J", "report_date": "2025-03-01", "num_calls": 1},
        ]
    )

    reports = SupabaseReportRepository(client).list_reports_for_user("U1")

    client.table.assert_called_once_with("reports")
    client.table.return_value.select.assert_called_once_with("*")
    query.eq.assert_called_once_with("user_id", "U1")
    query.eq.return_value.order.assert_called_once_with("report_date", desc=True)
    assert [r.id for r in reports] == ["b", "a"]
    assert reports[0].num_calls == 3


def test_list_reports_handles_empty_data(client) -> None:
    chain = client.table.return_value.select.return_value.eq.return_value.order.return_value
    chain.execute.return_value = MagicMock(data=None)

    assert SupabaseReportRepository(client).list_reports_for_user("U1") == []


def test_list_reports_translates_backend_error(client) -> None:
    chain = client.table.return_value.select.return_value.eq.return_value.order.return_value
    chain.execute.side_effect = _api_error("permission denied for table reports")

    with pytest.raises(ReportRepositoryError):
        SupabaseReportRepository(client).list_reports_for_user("U1")


def test_get_profile_single_row(client) -> None:
    query = client.table.return_value.select.return_value
    query.eq.return_value.single.return_value.execute.return_value = MagicMock(
        data={"first_name": "Jeanne", "last_name": "Martin"}
    )

    profile = SupabaseProfileRepository(client).get_profile("U1")

    client.table.assert_called_once_with("profiles")
    client.table.return_value.select.assert_called_once_with("first_name, last_name")
    query.eq.assert_called_once_with("id", "U1")
    assert profile == {"first_name": "Jeanne", "last_name": "Martin"}


def test_get_profile_missing_row_is_an_error(client) -> None:
    chain = client.table.return_value.select.return_value.eq.return_value.single.return_value
    chain.execute.side_effect = _api_error("JSON object requested, multiple (or no) rows returned")

    with pytest.raises(ReportRepositoryError):
        SupabaseProfileRepository(client).get_profile("U1")
