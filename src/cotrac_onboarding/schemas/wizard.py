from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cotrac_onboarding.schemas.records import AppView, FormField, Service


class WizardSnapshot(BaseModel):
    """Everything a client needs to render the current wizard screen."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    view: AppView
    selected_service: Optional[Service] = Field(default=None, alias="selectedService")
    customer_fields: List[FormField] = Field(default_factory=list, alias="customerFields")
    asset_fields: List[FormField] = Field(default_factory=list, alias="assetFields")
    form_data: Dict[str, str] = Field(default_factory=dict, alias="formData")
    has_signature: bool = Field(default=False, alias="hasSignature")
    signature_has_content: bool = Field(default=False, alias="signatureHasContent")
    agreed_terms: bool = Field(default=False, alias="agreedTerms")
    is_loading: bool = Field(default=False, alias="isLoading")
    is_syncing: bool = Field(default=False, alias="isSyncing")
    can_submit: bool = Field(default=False, alias="canSubmit")
    is_linked: bool = Field(default=False, alias="isLinked")
    last_submission_id: Optional[str] = Field(default=None, alias="lastSubmissionId")
    client_name: Optional[str] = Field(default=None, alias="clientName")


class DashboardRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    timestamp: str
    plan_name: str = Field(..., alias="planName")
    client_identity: str = Field(..., alias="clientIdentity")


class DashboardSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_records: int = Field(..., alias="totalRecords")
    webhook_url: str = Field(..., alias="webhookUrl")
    is_linked: bool = Field(..., alias="isLinked")
    rows: List[DashboardRow] = Field(default_factory=list)
