from __future__ import annotations

from typing import Any, Dict, Optional


class OnboardingError(Exception):
    """Base for wizard errors that map to a client-facing error envelope."""

    code = "onboarding_error"
    status_code = 400

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidTransitionError(OnboardingError):
    code = "invalid_transition"
    status_code = 409


class UnknownServiceError(OnboardingError):
    code = "unknown_service"
    status_code = 404


class UnknownFieldError(OnboardingError):
    code = "unknown_field"
    status_code = 404


class IntakeIncompleteError(OnboardingError):
    code = "intake_incomplete"
    status_code = 422


class SubmitNotReadyError(OnboardingError):
    code = "submit_not_ready"
    status_code = 409


class SyncError(OnboardingError):
    code = "sync_failed"
    status_code = 502


class SessionNotFoundError(OnboardingError):
    code = "session_not_found"
    status_code = 404
