from __future__ import annotations

import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, List, Optional

import anyio

from cotrac_onboarding.catalog import get_service
from cotrac_onboarding.errors import (
    IntakeIncompleteError,
    InvalidTransitionError,
    SubmitNotReadyError,
    UnknownFieldError,
    UnknownServiceError,
)
from cotrac_onboarding.form_generator import generate_dynamic_form
from cotrac_onboarding.schemas.records import AppView, FormField, Service, Submission
from cotrac_onboarding.schemas.wizard import WizardSnapshot
from cotrac_onboarding.signature.pad import SignaturePad
from cotrac_onboarding.store.submissions import SubmissionStore
from cotrac_onboarding.sync.client import sync_submission

logger = logging.getLogger(__name__)

GenerateFields = Callable[[str], List[FormField]]
SyncSubmission = Callable[[Submission, str], Awaitable[bool]]

# Field ids rendered in the "Asset Specs" group; everything else is customer profile.
VEHICLE_KEYWORDS = frozenset(
    {
        "license_plate",
        "unit_no",
        "vehicle_make",
        "sim_no",
        "model",
        "engine_no",
        "vehicle_color",
        "mileage",
        "chassis_no",
        "speed_limit",
        "fuel_capacity",
        "fuel_sensor",
    }
)

SPECIAL_VIEWS = frozenset({AppView.WELCOME, AppView.SUCCESS})

_ID_ALPHABET = string.digits + string.ascii_uppercase


def new_record_id(now: Optional[float] = None) -> str:
    ts = int(now if now is not None else time.time())
    suffix = "".join(random.choices(_ID_ALPHABET, k=4))
    return f"COT-{ts}-{suffix}"


def iso_timestamp(now: Optional[datetime] = None) -> str:
    dt = now or datetime.now(timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_input(value: str, field_type: str) -> str:
    return value if field_type == "email" else value.upper()


def partition_fields(fields: List[FormField]) -> tuple[List[FormField], List[FormField]]:
    customer = [f for f in fields if f.id not in VEHICLE_KEYWORDS]
    asset = [f for f in fields if f.id in VEHICLE_KEYWORDS]
    return customer, asset


class WizardController:
    """
    One onboarding session: WELCOME -> SERVICE_SELECTION -> INTAKE_FORM -> SIGNATURE -> SUCCESS,
    with STAFF_DASHBOARD reachable from any non-special view.

    Every transition is user-triggered. The two suspending calls (field generation and sync)
    raise `is_loading` / `is_syncing` for their duration and are not cancellable.
    """

    def __init__(
        self,
        store: SubmissionStore,
        *,
        session_id: str = "",
        generate_fields: GenerateFields = generate_dynamic_form,
        sync: SyncSubmission = sync_submission,
        signature_pad: Optional[SignaturePad] = None,
    ) -> None:
        self.session_id = session_id
        self._store = store
        self._generate_fields = generate_fields
        self._sync = sync
        self.pad = signature_pad or SignaturePad()

        self.view = AppView.WELCOME
        self.selected_service: Optional[Service] = None
        self.form_fields: List[FormField] = []
        self.form_data: Dict[str, str] = {}
        self.signature = ""
        self.agreed_terms = False
        self.is_loading = False
        self.is_syncing = False
        self.last_submission: Optional[Submission] = None

    # -------- Guards ---------------------------------------------------------
    def _require_view(self, *views: AppView) -> None:
        if self.view not in views:
            allowed = ", ".join(v.value for v in views)
            raise InvalidTransitionError(
                f"Action not allowed from {self.view.value} (expected {allowed}).",
                details={"view": self.view.value},
            )

    # -------- Navigation -----------------------------------------------------
    def start(self) -> None:
        self._require_view(AppView.WELCOME)
        self.view = AppView.SERVICE_SELECTION

    async def select_service(self, service_id: str) -> List[FormField]:
        self._require_view(AppView.SERVICE_SELECTION)
        service = get_service(service_id)
        if service is None:
            raise UnknownServiceError(f"Unknown service: {service_id}", details={"serviceId": service_id})

        self.selected_service = service
        self.form_fields = []
        self.is_loading = True
        self.view = AppView.INTAKE_FORM
        try:
            fields = await anyio.to_thread.run_sync(self._generate_fields, service.name)
        finally:
            self.is_loading = False
        # Applied even if the user navigated away meanwhile.
        self.form_fields = list(fields)
        logger.info("session=%s plan=%s fields=%d", self.session_id, service.id, len(self.form_fields))
        return self.form_fields

    def open_staff_dashboard(self) -> None:
        if self.view in SPECIAL_VIEWS:
            raise InvalidTransitionError(
                f"Staff dashboard is not reachable from {self.view.value}.",
                details={"view": self.view.value},
            )
        self.view = AppView.STAFF_DASHBOARD

    def exit_staff_dashboard(self) -> None:
        self._require_view(AppView.STAFF_DASHBOARD)
        self.view = AppView.WELCOME

    def reset(self) -> None:
        self.selected_service = None
        self.form_fields = []
        self.form_data = {}
        self.signature = ""
        self.agreed_terms = False
        self.pad.clear()
        self.view = AppView.WELCOME

    # -------- Intake ---------------------------------------------------------
    def _field(self, field_id: str) -> FormField:
        for f in self.form_fields:
            if f.id == field_id:
                return f
        raise UnknownFieldError(f"Unknown field: {field_id}", details={"fieldId": field_id})

    def set_field(self, field_id: str, value: str) -> str:
        self._require_view(AppView.INTAKE_FORM)
        field = self._field(field_id)
        final_value = normalize_input(str(value), field.type)
        self.form_data = {**self.form_data, field.id: final_value}
        return final_value

    def submit_intake(self) -> None:
        self._require_view(AppView.INTAKE_FORM)
        if self.is_loading:
            raise IntakeIncompleteError("Form fields are still loading.")

        missing: List[str] = []
        invalid: List[str] = []
        for f in self.form_fields:
            value = (self.form_data.get(f.id) or "").strip()
            if f.required and not value:
                missing.append(f.id)
            elif value and f.type == "select" and f.options and value not in {o.upper() for o in f.options}:
                invalid.append(f.id)
        if missing or invalid:
            raise IntakeIncompleteError(
                "Please complete the required fields.",
                details={"missing": missing, "invalid": invalid},
            )

        self.pad.clear()
        self.view = AppView.SIGNATURE

    @property
    def customer_fields(self) -> List[FormField]:
        return partition_fields(self.form_fields)[0]

    @property
    def asset_fields(self) -> List[FormField]:
        return partition_fields(self.form_fields)[1]

    # -------- Signature ------------------------------------------------------
    def pointer_event(self, kind: str, x: float = 0.0, y: float = 0.0) -> None:
        self._require_view(AppView.SIGNATURE)
        if kind == "down":
            self.pad.pointer_down(x, y)
        elif kind == "move":
            self.pad.pointer_move(x, y)
        elif kind in {"up", "leave"}:
            exported = self.pad.pointer_up()
            if exported:
                self.signature = exported
        else:
            raise ValueError(f"unknown pointer event: {kind!r}")

    def clear_signature(self) -> None:
        # Only the surface is wiped; the last exported signature stays captured.
        self._require_view(AppView.SIGNATURE)
        self.pad.clear()

    def set_consent(self, agreed: bool) -> None:
        self._require_view(AppView.SIGNATURE)
        self.agreed_terms = bool(agreed)

    @property
    def can_submit(self) -> bool:
        return bool(self.signature) and self.agreed_terms and not self.is_syncing

    async def final_submit(self) -> Submission:
        """
        Build the submission, sync it, then record it locally.

        A sync failure propagates as SyncError; nothing is stored and the view does not change.
        """
        self._require_view(AppView.SIGNATURE)
        if self.selected_service is None or not self.can_submit:
            raise SubmitNotReadyError(
                "Signature and consent are required before submitting.",
                details={
                    "hasSignature": bool(self.signature),
                    "agreedTerms": self.agreed_terms,
                    "isSyncing": self.is_syncing,
                },
            )

        self.is_syncing = True
        try:
            submission = Submission(
                id=new_record_id(),
                service_id=self.selected_service.id,
                service_name=self.selected_service.name,
                form_data=dict(self.form_data),
                signature=self.signature,
                timestamp=iso_timestamp(),
            )
            await self._sync(submission, self._store.load_webhook_url())
            self._store.prepend(submission, self._store.load_submissions())
            self.last_submission = submission
            self.view = AppView.SUCCESS
        finally:
            self.is_syncing = False

        logger.info("session=%s committed record=%s", self.session_id, submission.id)
        return submission

    # -------- Snapshot -------------------------------------------------------
    def snapshot(self) -> WizardSnapshot:
        customer, asset = partition_fields(self.form_fields)
        client_name = None
        if self.view == AppView.SUCCESS:
            client_name = self.form_data.get("full_name") or "CLIENT"
        return WizardSnapshot(
            session_id=self.session_id,
            view=self.view,
            selected_service=self.selected_service,
            customer_fields=customer,
            asset_fields=asset,
            form_data=dict(self.form_data),
            has_signature=bool(self.signature),
            signature_has_content=self.pad.has_content,
            agreed_terms=self.agreed_terms,
            is_loading=self.is_loading,
            is_syncing=self.is_syncing,
            can_submit=self.can_submit,
            is_linked=self._store.is_linked(self._store.load_webhook_url()),
            last_submission_id=self.last_submission.id if self.last_submission else None,
            client_name=client_name,
        )
