"""Report Store — the in-memory case collection shared by the citizen and police views.

Seeded with demo FIRs. Reports are immutable values: commits append, and
investigation results replace the stored report with the same id.
"""

from __future__ import annotations

import logging
import threading

from firdesk.core.models import Report, ReportStatus

logger = logging.getLogger(__name__)

SEED_REPORTS: tuple[Report, ...] = (
    Report(
        id="FIR-2023-001",
        title="Mobile Phone Theft at Central Station",
        description=(
            "I was waiting for the 5:30 PM train at platform 4. A man in a blue hoodie bumped into "
            "me and ran away. I realized my iPhone 13 Pro was missing from my jacket pocket "
            "immediately after."
        ),
        date_of_incident="2023-10-15 17:30",
        location="Central Railway Station, Platform 4",
        status=ReportStatus.SUBMITTED,
        complainant_name="John Doe",
        created_at="2023-10-15T18:00:00Z",
    ),
    Report(
        id="FIR-2023-002",
        title="Vandalism of Shop Window",
        description=(
            'When I arrived at my shop "Tech World" this morning at 9 AM, I found the front glass '
            "window shattered. There is a brick inside with a threatening note attached."
        ),
        date_of_incident="2023-10-16 02:00",
        location="42 Market Street",
        status=ReportStatus.UNDER_INVESTIGATION,
        complainant_name="Sarah Smith",
        created_at="2023-10-16T09:15:00Z",
    ),
)


class ReportStore:
    """Ordered report collection, newest first."""

    def __init__(self, seed: tuple[Report, ...] = SEED_REPORTS) -> None:
        self._reports: list[Report] = list(seed)
        self._lock = threading.Lock()

    def all(self) -> list[Report]:
        with self._lock:
            return list(self._reports)

    def ids(self) -> set[str]:
        with self._lock:
            return {r.id for r in self._reports}

    def get(self, report_id: str) -> Report | None:
        with self._lock:
            return next((r for r in self._reports if r.id == report_id), None)

    def add(self, report: Report) -> None:
        """Store a newly committed report ahead of older ones."""
        with self._lock:
            if any(r.id == report.id for r in self._reports):
                raise ValueError(f"Report id already exists: {report.id}")
            self._reports.insert(0, report)
        logger.info("Report %s stored (%d total)", report.id, len(self._reports))

    def replace(self, report: Report) -> None:
        """Swap in a new value for an existing report id."""
        with self._lock:
            for i, existing in enumerate(self._reports):
                if existing.id == report.id:
                    self._reports[i] = report
                    break
            else:
                raise KeyError(report.id)
        logger.info("Report %s updated (status=%s)", report.id, report.status.value)

    def stats(self) -> dict[str, int]:
        """Counts per status for the dashboard."""
        reports = self.all()
        return {
            "total": len(reports),
            "submitted": sum(r.status is ReportStatus.SUBMITTED for r in reports),
            "under_investigation": sum(r.status is ReportStatus.UNDER_INVESTIGATION for r in reports),
            "closed": sum(r.status is ReportStatus.CLOSED for r in reports),
        }


# Singleton instance
_report_store: ReportStore | None = None


def get_report_store() -> ReportStore:
    """Return the singleton ReportStore instance."""
    global _report_store
    if _report_store is None:
        _report_store = ReportStore()
    return _report_store
