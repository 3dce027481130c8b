from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

REPORT_COUNTER_FIELDS = ("num_calls", "num_nrp", "num_settings", "num_closings", "num_sales")

COUNTER_LABELS = {
    "num_calls": "Appels",
    "num_nrp": "NRP",
    "num_settings": "Settings",
    "num_closings": "Closings",
    "num_sales": "Ventes",
}


@dataclass(frozen=True)
class Report:
    """DTO for one persisted daily report."""
    id: Optional[str]
    user_id: str
    closer_name: str
    report_date: date
    num_calls: int = 0
    num_nrp: int = 0
    num_settings: int = 0
    num_closings: int = 0
    num_sales: int = 0
    submission_timestamp: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Report":
        """Build a report from a `reports` table row."""
        raw_date = row["report_date"]
        report_date = raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date)[:10])

        raw_ts = row.get("submission_timestamp")
        submitted = None
        if isinstance(raw_ts, datetime):
            submitted = raw_ts
        elif raw_ts:
            # Postgres returns "+00:00" offsets, older Pythons reject a trailing "Z".
            submitted = datetime.fromisoformat(str(raw_ts).replace("Z", "+00:00"))

        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            user_id=str(row["user_id"]),
            closer_name=row.get("closer_name") or "",
            report_date=report_date,
            submission_timestamp=submitted,
            **{name: int(row.get(name) or 0) for name in REPORT_COUNTER_FIELDS},
        )

    def counters(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in REPORT_COUNTER_FIELDS}

