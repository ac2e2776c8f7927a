from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator, model_validator
from monhub.constants import (
    APPOINTMENT_TYPES,
    EMAIL_PATTERN,
    PHONE_PATTERN,
    TIME_SLOT_PATTERN,
)
from monhub.schemas.common import ApiModel, id_field
from monhub.schemas.user import UserRef


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ContactInfo(ApiModel):
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None


class Appointment(ApiModel):
    id: str = id_field()
    agent_id: Union[UserRef, str]
    client_id: Optional[Union[UserRef, str]] = None
    contact_info: Optional[ContactInfo] = None
    appointment_type: str
    scheduled_date: date
    scheduled_time: str
    notes: Optional[str] = None
    status: AppointmentStatus = AppointmentStatus.PENDING
    created_at: Optional[datetime] = None


class BookAppointmentRequest(BaseModel):
    agent_id: str = Field(..., serialization_alias="agentId")
    appointment_type: str = Field(..., serialization_alias="appointmentType")
    scheduled_date: date = Field(..., serialization_alias="scheduledDate")
    scheduled_time: str = Field(..., serialization_alias="scheduledTime")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str
    phone: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("appointment_type")
    @classmethod
    def known_type(cls, v):
        if v not in APPOINTMENT_TYPES:
            raise ValueError("Type de rendez-vous invalide")
        return v

    @field_validator("scheduled_time")
    @classmethod
    def valid_slot(cls, v):
        if not TIME_SLOT_PATTERN.match(v):
            raise ValueError("Créneau horaire invalide (HH:MM)")
        return v

    @field_validator("email")
    @classmethod
    def valid_email(cls, v):
        if not EMAIL_PATTERN.match(v) or len(v) > 255:
            raise ValueError("Adresse email invalide")
        return v

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, v):
        if v and not PHONE_PATTERN.match(v):
            raise ValueError("Numéro de téléphone invalide")
        return v

    @model_validator(mode="after")
    def not_in_past(self):
        if self.scheduled_date < date.today():
            raise ValueError("La date du rendez-vous ne peut pas être passée")
        return self

    def to_payload(self) -> dict:
        return {
            "agentId": self.agent_id,
            "appointmentType": self.appointment_type,
            "scheduledDate": self.scheduled_date.isoformat(),
            "scheduledTime": self.scheduled_time,
            "contactInfo": {
                "firstName": self.first_name,
                "lastName": self.last_name,
                "email": self.email,
                "phone": self.phone,
            },
            "notes": self.notes,
        }


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class Availability(ApiModel):
    agent_id: Optional[str] = None
    weekly_schedule: Dict[str, List[str]] = {}
    blocked_dates: List[date] = []
