from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SelectServiceRequest(BaseModel):
    """Plan picked on the service selection screen."""

    model_config = ConfigDict(populate_by_name=True)

    service_id: str = Field(..., alias="serviceId", min_length=1, description="Catalog id, e.g. 'gold'")


class FieldInputRequest(BaseModel):
    """One keystroke-level update of an intake field."""

    model_config = ConfigDict(populate_by_name=True)

    field_id: str = Field(..., alias="fieldId", min_length=1)
    value: str = Field(default="", description="Raw input; stored upper-cased unless the field is an email")


class PointerEvent(BaseModel):
    """
    Pointer/touch event on the signature surface, in surface-relative coordinates.

    Touch clients may send `touches` instead of x/y; the first touch point wins.
    """

    type: Literal["down", "move", "up", "leave"]
    x: float = 0.0
    y: float = 0.0
    touches: Optional[List[Tuple[float, float]]] = None

    @model_validator(mode="after")
    def _first_touch(self) -> "PointerEvent":
        if self.touches:
            self.x, self.y = self.touches[0]
        return self


class PointerEventsRequest(BaseModel):
    events: List[PointerEvent] = Field(default_factory=list, max_length=5000)


class ConsentRequest(BaseModel):
    agreed: bool


class WebhookUrlRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    webhook_url: str = Field(default="", alias="webhookUrl", max_length=2048)
