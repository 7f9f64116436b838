from __future__ import annotations

import uuid
from typing import Callable, Dict

from cotrac_onboarding.errors import SessionNotFoundError
from cotrac_onboarding.wizard.controller import WizardController

ControllerFactory = Callable[[str], WizardController]


class WizardSessionRegistry:
    """In-process map of session id -> controller. Sessions do not survive a restart."""

    def __init__(self, factory: ControllerFactory) -> None:
        self._factory = factory
        self._sessions: Dict[str, WizardController] = {}

    def create(self) -> WizardController:
        session_id = uuid.uuid4().hex
        controller = self._factory(session_id)
        self._sessions[session_id] = controller
        return controller

    def get(self, session_id: str) -> WizardController:
        controller = self._sessions.get(session_id)
        if controller is None:
            raise SessionNotFoundError(f"Unknown session: {session_id}", details={"sessionId": session_id})
        return controller

    def __len__(self) -> int:
        return len(self._sessions)
