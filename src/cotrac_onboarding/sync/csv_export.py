from __future__ import annotations

from typing import Iterable, List

from cotrac_onboarding.schemas.records import Submission
from cotrac_onboarding.sync.whitelist import SYNC_WHITELIST

CSV_HEADERS: tuple[str, ...] = ("RECORD_ID", "DATE_TIME", "PLAN_NAME") + tuple(k.upper() for k in SYNC_WHITELIST)


def _quote(value: object) -> str:
    return '"' + str(value if value is not None else "").replace('"', '""') + '"'


def submissions_to_csv(submissions: Iterable[Submission]) -> str:
    """
    Render the submission log in sheet column order.

    Only whitelist columns are quoted; the leading id/time/plan columns are written as-is.
    """
    subs = list(submissions)
    if not subs:
        return ""
    lines: List[str] = [",".join(CSV_HEADERS)]
    for sub in subs:
        row = [sub.id, sub.timestamp, sub.service_name]
        row.extend(_quote(sub.form_data.get(key) or "") for key in SYNC_WHITELIST)
        lines.append(",".join(row))
    return "\n".join(lines)
