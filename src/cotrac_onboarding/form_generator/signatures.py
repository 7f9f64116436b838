"""
DSPy Signatures (LLM contracts only).

- IntakeFormFieldsJSON: field descriptors for the installation intake form of one plan.

Outputs are JSON strings, validated with JSON Schema + Pydantic in the runtime layer.
"""

from __future__ import annotations

import dspy  # type: ignore


class IntakeFormFieldsJSON(dspy.Signature):
    """
    Generate the intake form fields for a Cotrac Nigeria vehicle-tracker installation.

    HARD RULES:
    - Output MUST be a JSON array only (no prose, no markdown, no code fences).
    - Each item is an object with: id (snake_case key exactly as listed in the brief),
      label (short user-facing text), type (one of text, email, tel, number, select,
      textarea, date) and required (boolean). Optional: placeholder, options.
    - Fields listed with options MUST use type "select" and carry exactly those options.
    - Only emit fields named in the brief, in the order they are listed.
    """

    plan_name: str = dspy.InputField(desc="Service plan being installed, e.g. 'COTRAC GOLD'.")
    field_brief: str = dspy.InputField(
        desc="Sectioned list of field keys to generate, with required flags and option lists."
    )

    form_fields_json: str = dspy.OutputField(
        desc=(
            "JSON array of FormField objects. Example: "
            '[{"id":"full_name","label":"Full Name","type":"text","required":true},'
            '{"id":"prev_install","label":"Previous Installation","type":"select","required":false,'
            '"options":["YES","NO"]}]'
        )
    )
