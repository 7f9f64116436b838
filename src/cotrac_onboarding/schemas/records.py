from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

FieldType = Literal["text", "email", "tel", "number", "select", "textarea", "date"]


class AppView(str, Enum):
    WELCOME = "WELCOME"
    SERVICE_SELECTION = "SERVICE_SELECTION"
    INTAKE_FORM = "INTAKE_FORM"
    SIGNATURE = "SIGNATURE"
    SUCCESS = "SUCCESS"
    STAFF_DASHBOARD = "STAFF_DASHBOARD"


class Service(BaseModel):
    """A plan from the static catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str


class FormField(BaseModel):
    """One intake field descriptor, as produced by the form generator."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    label: str
    type: FieldType
    required: bool
    options: Optional[List[str]] = None
    placeholder: Optional[str] = None


class Submission(BaseModel):
    """
    A committed onboarding record.

    Persisted with camelCase keys (`serviceId`, `serviceName`, `formData`) so stored logs
    stay readable by the dashboard export tooling.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    service_id: str = Field(..., alias="serviceId")
    service_name: str = Field(..., alias="serviceName")
    form_data: Dict[str, str] = Field(default_factory=dict, alias="formData")
    signature: str = Field(..., min_length=1)
    timestamp: str

    @field_validator("service_id")
    @classmethod
    def _known_service(cls, v: str) -> str:
        from cotrac_onboarding.catalog import get_service

        if get_service(v) is None:
            raise ValueError(f"unknown serviceId: {v!r}")
        return v
