"""
DSPy Module wrapper for intake form generation.
"""

from __future__ import annotations

from typing import Any

import dspy  # type: ignore

from cotrac_onboarding.form_generator.signatures import IntakeFormFieldsJSON


class IntakeFormModule(dspy.Module):
    def __init__(self) -> None:
        super().__init__()
        self.prog = dspy.Predict(IntakeFormFieldsJSON)

    def forward(self, **kwargs: Any) -> dspy.Prediction:
        return self.prog(**kwargs)
