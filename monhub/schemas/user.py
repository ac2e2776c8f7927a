from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel
from monhub.schemas.common import ApiModel, id_field


class IdentityCard(ApiModel):
    url: str
    key: Optional[str] = None
    uploaded_at: Optional[datetime] = None


class ProfessionalInfo(ApiModel):
    agent_type: Optional[str] = None
    t_card: Optional[str] = None
    siren_number: Optional[str] = None
    rsac_number: Optional[str] = None
    siret_number: Optional[str] = None
    network: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    intervention_radius: Optional[int] = None
    covered_cities: List[str] = []
    mandate_types: List[str] = []
    years_experience: Optional[int] = None
    personal_pitch: Optional[str] = None
    collaborate_with_agents: Optional[bool] = None
    share_commission: Optional[bool] = None
    identity_card: Optional[IdentityCard] = None


class UserRef(ApiModel):
    """Populated user reference as embedded in other records."""

    id: str = id_field()
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    profile_image: Optional[str] = None
    user_type: Optional[str] = None


class ChatUser(UserRef):
    phone: Optional[str] = None
    professional_info: Optional[ProfessionalInfo] = None
    last_seen: Optional[datetime] = None
    is_online: Optional[bool] = None
    unread_count: int = 0


class AdminUser(ChatUser):
    is_email_verified: bool = False
    profile_completed: bool = False
    is_paid: bool = False
    subscription_status: Optional[str] = None
    subscription_plan: Optional[str] = None
    subscription_end_date: Optional[datetime] = None
    canceled_at: Optional[datetime] = None
    failed_payment_count: Optional[int] = None
    access_granted_by_admin: bool = False
    is_validated: bool = False
    is_blocked: bool = False
    created_at: Optional[datetime] = None


class AdminUserUpdate(BaseModel):
    is_validated: Optional[bool] = None
    is_blocked: Optional[bool] = None
    access_granted_by_admin: Optional[bool] = None


class CurrentUser(BaseModel):
    """Identity decoded from the bearer token forwarded to the backend."""

    id: str
    email: Optional[str] = None
    user_type: Optional[str] = None
    profile_completed: bool = False
    is_paid: bool = False
    access_granted_by_admin: bool = False
    token: str
