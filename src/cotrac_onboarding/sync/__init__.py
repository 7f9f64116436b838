from cotrac_onboarding.sync.client import SYNC_ERROR_MESSAGE, build_sync_payload, encode_sync_body, sync_submission
from cotrac_onboarding.sync.csv_export import CSV_HEADERS, submissions_to_csv
from cotrac_onboarding.sync.whitelist import SYNC_WHITELIST

__all__ = [
    "CSV_HEADERS",
    "SYNC_ERROR_MESSAGE",
    "SYNC_WHITELIST",
    "build_sync_payload",
    "encode_sync_body",
    "submissions_to_csv",
    "sync_submission",
]
