"""
Intake form generation.

Asks the configured LM for the plan's field list and returns validated FormField models.
Any failure yields FALLBACK_FIELDS; callers never see the error.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional

from cotrac_onboarding.form_generator.lm import build_lm, make_dspy_lm_config
from cotrac_onboarding.form_generator.prompts import build_field_brief
from cotrac_onboarding.form_generator.validation import parse_form_fields
from cotrac_onboarding.schemas.records import FormField

logger = logging.getLogger(__name__)

FALLBACK_FIELDS: tuple[FormField, ...] = (
    FormField(id="full_name", label="Full Name", type="text", required=True),
    FormField(id="phone_no", label="Phone Number", type="tel", required=True),
    FormField(id="license_plate", label="License Plate", type="text", required=True),
)


def fallback_fields() -> List[FormField]:
    return [f.model_copy(deep=True) for f in FALLBACK_FIELDS]


def _run_program(service_name: str, program: Optional[Callable[..., Any]]) -> Any:
    brief = build_field_brief(service_name)
    if program is not None:
        return program(plan_name=service_name, field_brief=brief)

    lm_cfg = make_dspy_lm_config()
    if not lm_cfg:
        raise RuntimeError("DSPy LM not configured (set DSPY_PROVIDER and the provider API key)")

    import dspy  # type: ignore

    from cotrac_onboarding.form_generator.module import IntakeFormModule

    lm = build_lm(lm_cfg)
    # dspy.context is thread-local, safe to use from the worker thread the wizard runs us in.
    with dspy.context(lm=lm):
        return IntakeFormModule()(plan_name=service_name, field_brief=brief)


def generate_dynamic_form(service_name: str, *, program: Optional[Callable[..., Any]] = None) -> List[FormField]:
    """
    Generate the intake fields for `service_name`.

    `program` replaces the DSPy module; it is called with `plan_name` and `field_brief`
    and must return an object with a `form_fields_json` attribute.
    """
    t0 = time.time()
    try:
        prediction = _run_program(service_name, program)
        fields = parse_form_fields(getattr(prediction, "form_fields_json", None))
        if not fields:
            raise ValueError("form generation returned no fields")
    except Exception as e:  # noqa: BLE001 - any generation failure degrades to the fixed form
        logger.error("Form Generation Error: plan=%r err=%r", service_name, e)
        return fallback_fields()

    logger.info(
        "form generated plan=%r fields=%d latency_ms=%d",
        service_name,
        len(fields),
        int((time.time() - t0) * 1000),
    )
    return fields
