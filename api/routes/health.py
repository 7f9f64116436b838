from __future__ import annotations

import time
from typing import Any, Dict

from fastapi import APIRouter

from cotrac_onboarding import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "ok": True,
        "service": "cotrac-onboarding-service",
        "version": __version__,
        "ts": int(time.time() * 1000),
    }
