from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator, model_validator
from monhub.constants import COMPLETION_REASONS, PROGRESS_STEP_IDS
from monhub.schemas.common import ApiModel, id_field
from monhub.schemas.user import UserRef


class CollaborationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PostType(str, Enum):
    PROPERTY = "Property"
    SEARCH_AD = "SearchAd"


class CompensationType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    GIFT_VOUCHERS = "gift_vouchers"


class ProgressNote(ApiModel):
    note: Optional[str] = None
    created_by: Optional[Union[UserRef, str]] = None
    created_at: Optional[datetime] = None


class ProgressStep(ApiModel):
    id: str
    completed: bool = False
    owner_validated: bool = False
    collaborator_validated: bool = False
    notes: List[ProgressNote] = []
    validated_at: Optional[datetime] = None


class Activity(ApiModel):
    type: Optional[str] = None
    message: Optional[str] = None
    created_by: Optional[Union[UserRef, str]] = None
    created_at: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None


def _ref_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, UserRef):
        return value.id
    if isinstance(value, dict):
        return value.get("_id") or value.get("id")
    return None


class Collaboration(ApiModel):
    id: str = id_field()
    post_id: Optional[Union[str, Dict[str, Any]]] = None
    post_type: PostType = PostType.PROPERTY
    post_owner_id: Optional[Union[UserRef, str]] = None
    collaborator_id: Optional[Union[UserRef, str]] = None
    status: CollaborationStatus = CollaborationStatus.PENDING
    proposed_commission: Optional[float] = None
    compensation_type: Optional[CompensationType] = None
    compensation_amount: Optional[float] = None
    proposal_message: Optional[str] = None
    current_progress_step: Optional[str] = None
    progress_steps: List[ProgressStep] = []
    activities: List[Activity] = []
    contract_text: Optional[str] = None
    additional_terms: Optional[str] = None
    owner_signed: bool = False
    owner_signed_at: Optional[datetime] = None
    collaborator_signed: bool = False
    collaborator_signed_at: Optional[datetime] = None
    completion_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def owner_id(self) -> Optional[str]:
        return _ref_id(self.post_owner_id)

    @property
    def collaborator_user_id(self) -> Optional[str]:
        return _ref_id(self.collaborator_id)

    @property
    def post_ref_id(self) -> Optional[str]:
        return _ref_id(self.post_id)

    @property
    def is_post_populated(self) -> bool:
        return isinstance(self.post_id, dict)


class ProposeCollaborationRequest(BaseModel):
    property_id: Optional[str] = Field(None, serialization_alias="propertyId")
    search_ad_id: Optional[str] = Field(None, serialization_alias="searchAdId")
    commission_percentage: Optional[float] = Field(
        None, serialization_alias="commissionPercentage"
    )
    message: str = ""
    compensation_type: Optional[CompensationType] = Field(
        None, serialization_alias="compensationType"
    )
    compensation_amount: Optional[float] = Field(
        None, serialization_alias="compensationAmount"
    )

    @model_validator(mode="after")
    def exactly_one_post(self):
        if bool(self.property_id) == bool(self.search_ad_id):
            raise ValueError("Provide either property_id or search_ad_id")
        return self


class ProposalForm(BaseModel):
    """Raw form values of the propose-collaboration modal."""

    post_type: str = Field(..., pattern="^(property|searchAd)$")
    post_id: str
    owner_user_type: str = Field(..., pattern="^(agent|apporteur)$")
    commission_percentage: str = ""
    compensation_type: CompensationType = CompensationType.PERCENTAGE
    compensation_amount: str = ""
    message: str = ""
    agree_to_terms: bool = False


class RespondRequest(BaseModel):
    response: str = Field(..., pattern="^(accepted|rejected)$")


class StatusUpdateRequest(BaseModel):
    status: CollaborationStatus


class ConfirmRequest(BaseModel):
    pending_action: CollaborationStatus

    @field_validator("pending_action")
    @classmethod
    def cancellable_or_completable(cls, v):
        if v not in (CollaborationStatus.CANCELLED, CollaborationStatus.COMPLETED):
            raise ValueError("pending_action must be cancelled or completed")
        return v


class CompletionRequest(BaseModel):
    reason: str

    @field_validator("reason")
    @classmethod
    def known_reason(cls, v):
        if v not in COMPLETION_REASONS:
            raise ValueError("Raison de complétion invalide")
        return v


class NoteRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class ProgressRequest(BaseModel):
    step: str
    notes: Optional[str] = None


class ProgressUpdateRequest(BaseModel):
    target_step: str = Field(..., serialization_alias="targetStep")
    notes: Optional[str] = None
    validated_by: str = Field(
        ..., pattern="^(owner|collaborator)$", serialization_alias="validatedBy"
    )

    @field_validator("target_step")
    @classmethod
    def known_step(cls, v):
        if v not in PROGRESS_STEP_IDS:
            raise ValueError("Invalid target step")
        return v


class ContractUpdateRequest(BaseModel):
    contract_text: str = Field(..., serialization_alias="contractText")
    additional_terms: Optional[str] = Field(None, serialization_alias="additionalTerms")


class Contract(ApiModel):
    contract_text: Optional[str] = None
    additional_terms: Optional[str] = None
    owner_signed: bool = False
    owner_signed_at: Optional[datetime] = None
    collaborator_signed: bool = False
    collaborator_signed_at: Optional[datetime] = None
    requires_signature: bool = False
    can_edit: bool = False


class AdminCollaborationUpdate(BaseModel):
    proposed_commission: Optional[float] = Field(
        None, ge=0, le=100, serialization_alias="proposedCommission"
    )
    status: Optional[CollaborationStatus] = None
    proposal_message: Optional[str] = Field(None, serialization_alias="proposalMessage")


class AdminCloseRequest(BaseModel):
    action: str = Field(..., pattern="^(cancel|complete)$")
