from __future__ import annotations

import time
import uuid
from typing import Any, Dict, Optional


def new_request_id(prefix: str) -> str:
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def error_envelope(
    *,
    error: str,
    message: str,
    request_id: str,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    content: Dict[str, Any] = {
        "ok": False,
        "error": error,
        "message": message,
        "requestId": request_id,
    }
    if details is not None:
        content["details"] = details
    return content
