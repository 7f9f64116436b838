from cotrac_onboarding.schemas.records import AppView, FieldType, FormField, Service, Submission
from cotrac_onboarding.schemas.wizard import DashboardRow, DashboardSummary, WizardSnapshot

__all__ = [
    "AppView",
    "DashboardRow",
    "DashboardSummary",
    "FieldType",
    "FormField",
    "Service",
    "Submission",
    "WizardSnapshot",
]
