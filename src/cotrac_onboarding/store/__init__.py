from cotrac_onboarding.store.local_store import LocalStore
from cotrac_onboarding.store.submissions import SUBMISSIONS_KEY, SYNC_URL_KEY, SubmissionStore

__all__ = ["LocalStore", "SUBMISSIONS_KEY", "SYNC_URL_KEY", "SubmissionStore"]
