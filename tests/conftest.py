from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if _SRC.exists():
    sys.path.insert(0, str(_SRC))
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from cotrac_onboarding.schemas.records import FormField, Submission  # noqa: E402
from cotrac_onboarding.store import LocalStore, SubmissionStore  # noqa: E402

SIGNATURE = "data:image/png;base64,iVBORw0KGgo="


@pytest.fixture
def store(tmp_path: Path) -> SubmissionStore:
    return SubmissionStore(LocalStore(tmp_path / "local_store.json"))


@pytest.fixture
def gold_fields() -> List[FormField]:
    return [
        FormField(id="email_address", label="Email Address", type="email", required=True),
        FormField(id="full_name", label="Full Name", type="text", required=True),
        FormField(id="prev_install", label="Previous Install", type="select", required=False, options=["YES", "NO"]),
        FormField(id="license_plate", label="License Plate", type="text", required=True),
        FormField(id="vehicle_color", label="Vehicle Color", type="text", required=False),
    ]


class SyncRecorder:
    def __init__(self, *, fail: Exception | None = None) -> None:
        self.calls: list[tuple[Submission, str]] = []
        self.fail = fail

    async def __call__(self, submission: Submission, webhook_url: str) -> bool:
        self.calls.append((submission, webhook_url))
        if self.fail is not None:
            raise self.fail
        return True


@pytest.fixture
def sync_recorder() -> SyncRecorder:
    return SyncRecorder()


@pytest.fixture
def failing_sync() -> SyncRecorder:
    from cotrac_onboarding.errors import SyncError

    return SyncRecorder(fail=SyncError("Sync Error: Verify your webhook URL and connectivity."))


@pytest.fixture
def make_submission():
    def _make(record_id: str = "COT-1700000000-AB12", **form_data: str) -> Submission:
        return Submission(
            id=record_id,
            service_id="gold",
            service_name="COTRAC GOLD",
            form_data=form_data,
            signature=SIGNATURE,
            timestamp="2024-05-01T10:00:00.000Z",
        )

    return _make
