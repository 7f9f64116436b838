"""
Webhook sync for committed submissions.

The sheet script is called fire-and-forget: the response is never inspected, so a
dispatched request counts as a saved record.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import urlencode

import httpx

from cotrac_onboarding.config import DEFAULT_SYNC_URL
from cotrac_onboarding.errors import SyncError
from cotrac_onboarding.schemas.records import Submission
from cotrac_onboarding.sync.whitelist import SYNC_WHITELIST

logger = logging.getLogger(__name__)

SYNC_ERROR_MESSAGE = "Sync Error: Verify your webhook URL and connectivity."


def build_sync_payload(submission: Submission) -> Dict[str, str]:
    # PLAN_NAME stays top-level so the sheet script can show "COTRAC GOLD" etc.
    payload: Dict[str, str] = {
        "RECORD_ID": submission.id,
        "PLAN_NAME": submission.service_name,
        "DATE_TIME": submission.timestamp,
        "SIGNATURE_DATA": submission.signature,
    }
    for key, value in submission.form_data.items():
        if key in SYNC_WHITELIST:
            payload[key] = str(value)
    return payload


def encode_sync_body(payload: Dict[str, str]) -> str:
    return urlencode(list(payload.items()))


async def sync_submission(
    submission: Submission,
    webhook_url: str,
    *,
    timeout: float = 20.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bool:
    """
    POST the whitelisted submission to the webhook.

    Raises SyncError when the request could not be dispatched.
    """
    target_url = webhook_url or DEFAULT_SYNC_URL
    body = encode_sync_body(build_sync_payload(submission))
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            await client.post(
                target_url,
                content=body,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error("Cloud Sync Error: record=%s url=%s err=%r", submission.id, target_url, e)
        raise SyncError(SYNC_ERROR_MESSAGE, details={"recordId": submission.id}) from e

    logger.info("sync dispatched record=%s plan=%r", submission.id, submission.service_name)
    return True
