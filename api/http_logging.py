from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import parse_qsl

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from cotrac_onboarding.config import Settings

logger = logging.getLogger("api.http")

Headers = Iterable[Tuple[bytes, bytes]]

_SENSITIVE_KEYS = {
    "authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "api_key",
    "apikey",
    "token",
    "secret",
    "password",
    "gemini_api_key",
    "openai_api_key",
    "groq_api_key",
    # Signature images are personal data and bloat log lines.
    "signature",
    "signature_data",
}


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: ("***" if str(k).lower() in _SENSITIVE_KEYS else _redact(v)) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact(v) for v in value]
    return value


def _header_map(headers: Optional[Headers]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for k, v in headers or []:
        key = k.decode("latin-1").lower()
        out[key] = "***" if key in _SENSITIVE_KEYS else v.decode("latin-1", errors="replace")
    return out


def _describe_body(content_type: str, body: bytes) -> Any:
    ct = (content_type or "").lower()
    text = body.decode("utf-8", errors="replace")
    if "application/json" in ct:
        try:
            return _redact(json.loads(text))
        except ValueError:
            return text
    if "application/x-www-form-urlencoded" in ct:
        return _redact(dict(parse_qsl(text)))
    if ct.startswith("text/"):
        return text
    return "<binary>" if body else ""


class _BodyTap:
    """Keeps the first `limit` bytes of a streamed body."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.buf = bytearray()
        self.truncated = False

    def feed(self, chunk: bytes) -> None:
        if not chunk or self.limit <= 0:
            return
        room = self.limit - len(self.buf)
        if room > 0:
            self.buf.extend(chunk[:room])
        if len(chunk) > room:
            self.truncated = True


class HttpLoggingMiddleware:
    """One JSON log line per HTTP request, with redacted headers and capped bodies."""

    def __init__(self, app: ASGIApp, *, log_headers: bool, max_body_bytes: int) -> None:
        self.app = app
        self.log_headers = log_headers
        self.max_body_bytes = max(0, max_body_bytes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        started_at = time.perf_counter()
        req_headers = _header_map(scope.get("headers"))
        request_id = req_headers.get("x-request-id") or uuid.uuid4().hex[:12]
        req_tap = _BodyTap(self.max_body_bytes)
        res_tap = _BodyTap(self.max_body_bytes)
        response: Dict[str, Any] = {"status": None, "headers": []}

        async def receive_wrapped() -> Message:
            message = await receive()
            if message.get("type") == "http.request":
                req_tap.feed(message.get("body") or b"")
            return message

        async def send_wrapped(message: Message) -> None:
            if message.get("type") == "http.response.start":
                response["status"] = int(message.get("status") or 0)
                response["headers"] = list(message.get("headers") or [])
            elif message.get("type") == "http.response.body":
                res_tap.feed(message.get("body") or b"")
            await send(message)

        err: Optional[BaseException] = None
        try:
            await self.app(scope, receive_wrapped, send_wrapped)
        except BaseException as e:  # noqa: BLE001 - logged then re-raised
            err = e
            raise
        finally:
            res_headers = _header_map(response["headers"])
            record: Dict[str, Any] = {
                "id": request_id,
                "method": str(scope.get("method") or "").upper(),
                "path": str(scope.get("path") or ""),
                "status": response["status"],
                "dur_ms": int((time.perf_counter() - started_at) * 1000),
                "request": self._part(req_headers, req_tap),
                "response": self._part(res_headers, res_tap),
            }
            if err is not None:
                record["error"] = {"type": type(err).__name__, "message": str(err)}
            logger.info(json.dumps(record, ensure_ascii=False, separators=(",", ":"), default=str))

    def _part(self, headers: Dict[str, str], tap: _BodyTap) -> Dict[str, Any]:
        content_type = headers.get("content-type", "")
        part: Dict[str, Any] = {"content_type": content_type}
        if self.log_headers:
            part["headers"] = headers
        if self.max_body_bytes:
            part["body"] = _describe_body(content_type, bytes(tap.buf))
            part["body_truncated"] = tap.truncated
        return part


def install_http_logging(app: Any, settings: Settings) -> None:
    """
    Enable request/response logging from settings.

    - `ONBOARDING_HTTP_LOG=1` enables middleware
    - `ONBOARDING_HTTP_LOG_HEADERS=1` logs request/response headers (redacted)
    - `ONBOARDING_HTTP_LOG_BODY_MAX_BYTES=4096` caps body bytes captured per request/response
    """
    if not settings.http_log:
        return
    app.add_middleware(
        HttpLoggingMiddleware,
        log_headers=settings.http_log_headers,
        max_body_bytes=settings.http_log_body_max_bytes,
    )


__all__: List[str] = ["HttpLoggingMiddleware", "install_http_logging"]
