from __future__ import annotations

import json
import logging
from typing import List

from pydantic import ValidationError

from cotrac_onboarding.config import DEFAULT_SYNC_URL
from cotrac_onboarding.schemas.records import Submission
from cotrac_onboarding.store.local_store import LocalStore

logger = logging.getLogger(__name__)

SUBMISSIONS_KEY = "cotrac_v4_store"
SYNC_URL_KEY = "cotrac_sync_url"


class SubmissionStore:
    """Submission log (newest first) and webhook URL on top of a LocalStore."""

    def __init__(self, local_store: LocalStore, *, default_webhook_url: str = DEFAULT_SYNC_URL) -> None:
        self._store = local_store
        self.default_webhook_url = default_webhook_url

    def load_submissions(self) -> List[Submission]:
        raw = self._store.get_item(SUBMISSIONS_KEY)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.error("Storage error: could not parse %s err=%r", SUBMISSIONS_KEY, e)
            return []
        if not isinstance(items, list):
            logger.error("Storage error: %s is not a list", SUBMISSIONS_KEY)
            return []

        # One bad row must not cost the rest of the log on the next save.
        out: List[Submission] = []
        for idx, item in enumerate(items):
            try:
                out.append(Submission.model_validate(item))
            except ValidationError as e:
                logger.error("Storage error: skipping %s[%d] err=%r", SUBMISSIONS_KEY, idx, e)
        return out

    def save_submissions(self, submissions: List[Submission]) -> None:
        encoded = json.dumps([s.model_dump(by_alias=True) for s in submissions], ensure_ascii=False)
        self._store.set_item(SUBMISSIONS_KEY, encoded)

    def prepend(self, submission: Submission, existing: List[Submission]) -> List[Submission]:
        updated = [submission, *existing]
        self.save_submissions(updated)
        return updated

    def load_webhook_url(self) -> str:
        # An empty saved value means "never configured".
        return self._store.get_item(SYNC_URL_KEY) or self.default_webhook_url

    def save_webhook_url(self, url: str) -> None:
        self._store.set_item(SYNC_URL_KEY, url)

    def is_linked(self, url: str) -> bool:
        return url != self.default_webhook_url
