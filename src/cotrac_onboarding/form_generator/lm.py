from __future__ import annotations

import os
from typing import Any, Dict, Optional

_DEFAULT_MODELS = {
    "gemini": "gemini-3-flash-preview",
    "openai": "gpt-4o-mini",
    "groq": "openai/gpt-oss-20b",
}


def make_dspy_lm_config() -> Optional[Dict[str, Any]]:
    """
    Return a LiteLLM model string (provider-prefixed) for DSPy, or None if not configured.
    """
    provider = (os.getenv("DSPY_PROVIDER") or "gemini").strip().lower()
    if provider not in _DEFAULT_MODELS:
        return None
    model = (os.getenv("DSPY_MODEL") or "").strip() or _DEFAULT_MODELS[provider]

    if provider == "gemini":
        # `API_KEY` is what the kiosk build historically shipped with.
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        if not api_key:
            return None
        return {"provider": "gemini", "model": f"gemini/{model}", "modelName": model, "apiKey": api_key}

    if provider == "openai":
        if not os.getenv("OPENAI_API_KEY"):
            return None
        return {"provider": "openai", "model": f"openai/{model}", "modelName": model}

    if not os.getenv("GROQ_API_KEY"):
        return None
    return {"provider": "groq", "model": f"groq/{model}", "modelName": model}


def _get_float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def build_lm(cfg: Dict[str, Any]) -> Any:
    import dspy  # type: ignore

    kwargs: Dict[str, Any] = {
        "model": cfg["model"],
        "temperature": _get_float_env("DSPY_TEMPERATURE", 0.2),
        "max_tokens": int(_get_float_env("DSPY_FORM_MAX_TOKENS", 4000)),
        "timeout": _get_float_env("DSPY_LLM_TIMEOUT_SEC", 20.0),
        "num_retries": 0,
    }
    if cfg.get("apiKey"):
        kwargs["api_key"] = cfg["apiKey"]
    return dspy.LM(**kwargs)
