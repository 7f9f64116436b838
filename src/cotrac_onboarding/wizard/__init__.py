from cotrac_onboarding.wizard.controller import (
    VEHICLE_KEYWORDS,
    WizardController,
    new_record_id,
    normalize_input,
    partition_fields,
)
from cotrac_onboarding.wizard.dashboard import StaffDashboard
from cotrac_onboarding.wizard.sessions import WizardSessionRegistry

__all__ = [
    "StaffDashboard",
    "VEHICLE_KEYWORDS",
    "WizardController",
    "WizardSessionRegistry",
    "new_record_id",
    "normalize_input",
    "partition_fields",
]
