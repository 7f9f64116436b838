"""
Plan-specific intake form generation.

- Prompt brief: `prompts.py`
- DSPy contract + module: `signatures.py`, `module.py`
- Response validation: `validation.py`
- Entry point: `orchestrator.generate_dynamic_form`
"""

from cotrac_onboarding.form_generator.orchestrator import FALLBACK_FIELDS, fallback_fields, generate_dynamic_form

__all__ = ["FALLBACK_FIELDS", "fallback_fields", "generate_dynamic_form"]
