from __future__ import annotations

import logging

from cotrac_onboarding.schemas.wizard import DashboardRow, DashboardSummary
from cotrac_onboarding.store.submissions import SubmissionStore
from cotrac_onboarding.sync.csv_export import submissions_to_csv

logger = logging.getLogger(__name__)


class StaffDashboard:
    """Admin view over the shared store: activity log, webhook target, CSV export."""

    def __init__(self, store: SubmissionStore) -> None:
        self._store = store

    def summary(self) -> DashboardSummary:
        submissions = self._store.load_submissions()
        url = self._store.load_webhook_url()
        rows = [
            DashboardRow(
                id=s.id,
                timestamp=s.timestamp,
                plan_name=s.service_name,
                client_identity=s.form_data.get("full_name") or "PROVISIONING...",
            )
            for s in submissions
        ]
        return DashboardSummary(
            total_records=len(submissions),
            webhook_url=url,
            is_linked=self._store.is_linked(url),
            rows=rows,
        )

    def update_webhook_url(self, url: str) -> str:
        value = str(url or "").strip()
        self._store.save_webhook_url(value)
        logger.info("webhook url updated linked=%s", self._store.is_linked(self._store.load_webhook_url()))
        return self._store.load_webhook_url()

    def export_csv(self) -> str:
        return submissions_to_csv(self._store.load_submissions())
