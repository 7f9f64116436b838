from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request

from api.models import ConsentRequest, FieldInputRequest, PointerEventsRequest, SelectServiceRequest
from cotrac_onboarding.catalog import SERVICES
from cotrac_onboarding.schemas.records import Service
from cotrac_onboarding.schemas.wizard import WizardSnapshot
from cotrac_onboarding.wizard.controller import WizardController
from cotrac_onboarding.wizard.sessions import WizardSessionRegistry

router = APIRouter(prefix="/api", tags=["wizard"])


def get_registry(request: Request) -> WizardSessionRegistry:
    return request.app.state.sessions


def get_session(sessionId: str, registry: WizardSessionRegistry = Depends(get_registry)) -> WizardController:
    return registry.get(sessionId)


@router.get("/services", response_model=List[Service])
async def list_services() -> List[Service]:
    return list(SERVICES)


@router.post("/wizard/sessions", response_model=WizardSnapshot, status_code=201)
async def create_session(registry: WizardSessionRegistry = Depends(get_registry)) -> WizardSnapshot:
    return registry.create().snapshot()


@router.get("/wizard/sessions/{sessionId}", response_model=WizardSnapshot)
async def get_snapshot(wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/start", response_model=WizardSnapshot)
async def start(wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    wizard.start()
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/service", response_model=WizardSnapshot)
async def select_service(body: SelectServiceRequest, wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    """
    Pick a plan and generate its intake form.

    Returns once the fields are ready; generation failures yield the fixed three-field form.
    """
    await wizard.select_service(body.service_id)
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/fields", response_model=WizardSnapshot)
async def set_field(body: FieldInputRequest, wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    wizard.set_field(body.field_id, body.value)
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/intake", response_model=WizardSnapshot)
async def submit_intake(wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    wizard.submit_intake()
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/signature/events", response_model=WizardSnapshot)
async def signature_events(body: PointerEventsRequest, wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    for event in body.events:
        wizard.pointer_event(event.type, event.x, event.y)
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/signature/clear", response_model=WizardSnapshot)
async def clear_signature(wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    wizard.clear_signature()
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/consent", response_model=WizardSnapshot)
async def consent(body: ConsentRequest, wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    wizard.set_consent(body.agreed)
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/submit", response_model=WizardSnapshot)
async def submit(wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    await wizard.final_submit()
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/staff", response_model=WizardSnapshot)
async def open_staff(wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    wizard.open_staff_dashboard()
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/staff/exit", response_model=WizardSnapshot)
async def exit_staff(wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    wizard.exit_staff_dashboard()
    return wizard.snapshot()


@router.post("/wizard/sessions/{sessionId}/reset", response_model=WizardSnapshot)
async def reset(wizard: WizardController = Depends(get_session)) -> WizardSnapshot:
    wizard.reset()
    return wizard.snapshot()
