from __future__ import annotations

import sys
from functools import partial
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY, HTTP_500_INTERNAL_SERVER_ERROR


def _repo_root() -> Path:
    # `api/main.py` lives at `<repo>/api/main.py`
    return Path(__file__).resolve().parents[1]


def _ensure_src_on_path() -> None:
    src = _repo_root() / "src"
    if not src.is_dir():
        return
    s = str(src)
    if s not in sys.path:
        sys.path.insert(0, s)


_ensure_src_on_path()

from api.http_logging import install_http_logging  # noqa: E402
from api.routes import admin, health, wizard  # noqa: E402
from api.utils import error_envelope, new_request_id  # noqa: E402
from cotrac_onboarding.config import Settings, load_settings  # noqa: E402
from cotrac_onboarding.errors import OnboardingError  # noqa: E402
from cotrac_onboarding.form_generator import generate_dynamic_form  # noqa: E402
from cotrac_onboarding.signature.pad import SignaturePad  # noqa: E402
from cotrac_onboarding.store import LocalStore, SubmissionStore  # noqa: E402
from cotrac_onboarding.sync.client import sync_submission  # noqa: E402
from cotrac_onboarding.wizard import StaffDashboard, WizardController, WizardSessionRegistry  # noqa: E402
from cotrac_onboarding.wizard.controller import GenerateFields, SyncSubmission  # noqa: E402


def create_app(
    *,
    settings: Optional[Settings] = None,
    generate_fields: Optional[GenerateFields] = None,
    sync: Optional[SyncSubmission] = None,
) -> FastAPI:
    # Load `.env` + `.env.local` when present (local dev convenience).
    load_dotenv(_repo_root() / ".env", override=False)
    load_dotenv(_repo_root() / ".env.local", override=False)
    settings = settings or load_settings()

    store = SubmissionStore(LocalStore(settings.store_path), default_webhook_url=settings.default_webhook_url)
    gen_fn = generate_fields or generate_dynamic_form
    sync_fn = sync or partial(sync_submission, timeout=settings.sync_timeout_sec)

    def _new_controller(session_id: str) -> WizardController:
        pad = SignaturePad(
            settings.signature_width,
            settings.signature_height,
            pixel_ratio=settings.signature_pixel_ratio,
        )
        return WizardController(
            store,
            session_id=session_id,
            generate_fields=gen_fn,
            sync=sync_fn,
            signature_pad=pad,
        )

    app = FastAPI(title="cotrac-onboarding-service")
    app.state.settings = settings
    app.state.sessions = WizardSessionRegistry(_new_controller)
    app.state.dashboard = StaffDashboard(store)

    @app.exception_handler(OnboardingError)
    async def _onboarding_error_handler(request: Request, exc: OnboardingError) -> JSONResponse:
        request_id = new_request_id(exc.code)
        print(
            f"[api] {exc.status_code} {exc.code} requestId={request_id} path={request.url.path} msg={exc.message}",
            flush=True,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(
                error=exc.code,
                message=exc.message,
                request_id=request_id,
                details=exc.details,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        request_id = new_request_id("val")
        # Keep server logs useful without dumping full bodies.
        print(
            f"[api] 422 validation_error requestId={request_id} path={request.url.path} errors={exc.errors()}",
            flush=True,
        )
        details: Any = jsonable_errors(exc)
        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_envelope(
                error="validation_error",
                message="Request body did not match expected schema.",
                request_id=request_id,
                details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = new_request_id("err")
        print(f"[api] 500 internal_error requestId={request_id} path={request.url.path} err={exc!r}", flush=True)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(
                error="internal_error",
                message="Unhandled server error.",
                request_id=request_id,
            ),
        )

    app.include_router(health.router)
    app.include_router(wizard.router)
    app.include_router(admin.router)
    install_http_logging(app, settings)
    return app


def jsonable_errors(exc: RequestValidationError) -> list[Dict[str, Any]]:
    # `ctx` may hold exception instances that JSONResponse cannot encode.
    out: list[Dict[str, Any]] = []
    for err in exc.errors():
        item = {k: v for k, v in err.items() if k != "ctx"}
        out.append(item)
    return out


app = create_app()
