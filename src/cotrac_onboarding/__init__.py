"""
Internal library package for the Cotrac onboarding service.

This package holds the wizard implementation (catalog, form generation, signature
capture, sync client, local store). The HTTP layer lives in the top-level `api/` package.

- Runtime package: `src/cotrac_onboarding/`
- ASGI entrypoint: `api/main.py`
"""

__version__ = "0.1.0"
