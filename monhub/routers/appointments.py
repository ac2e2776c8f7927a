import logging
from typing import List, Optional

from fastapi import APIRouter, Request
from starlette import status

from monhub.constants import APPOINTMENT_STATUS_LABELS, APPOINTMENT_TYPES
from monhub.dependencies import CurrentUser, api_dependency, public_api_dependency
from monhub.limits import limiter
from monhub.schemas.appointment import (
    Appointment,
    AppointmentStatus,
    AppointmentStatusUpdate,
    BookAppointmentRequest,
)
from monhub.services.appointment_api import AppointmentApi
from monhub.utils.date_utils import format_long_date
from monhub.utils.formatting import participant_name
from monhub.utils.image_utils import to_cdn_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["appointments"])


def appointment_view(appointment: Appointment) -> dict:
    contact = appointment.contact_info
    return {
        "id": appointment.id,
        "type": appointment.appointment_type,
        "type_label": APPOINTMENT_TYPES.get(
            appointment.appointment_type, appointment.appointment_type
        ),
        "date": format_long_date(appointment.scheduled_date),
        "time": appointment.scheduled_time,
        "agent": participant_name(appointment.agent_id),
        "client": f"{contact.first_name} {contact.last_name}"
        if contact
        else participant_name(appointment.client_id),
        "email": contact.email if contact else None,
        "phone": contact.phone if contact else None,
        "notes": appointment.notes,
        "status": appointment.status.value,
        "status_label": APPOINTMENT_STATUS_LABELS[appointment.status.value],
    }


@router.get("/agents")
def list_agents(client: public_api_dependency, city: Optional[str] = None) -> List[dict]:
    return [
        {
            "id": agent.id,
            "name": participant_name(agent),
            "profile_image": to_cdn_url(agent.profile_image),
            "city": agent.professional_info.city if agent.professional_info else None,
            "network": agent.professional_info.network if agent.professional_info else None,
        }
        for agent in AppointmentApi(client).get_agents(city)
    ]


@router.get("/availability/{agent_id}")
def agent_availability(agent_id: str, client: public_api_dependency) -> dict:
    availability = AppointmentApi(client).get_agent_availability(agent_id)
    return availability.model_dump(mode="json")


@limiter.limit("10/hour")
@router.post("/", status_code=status.HTTP_201_CREATED)
def book_appointment(
    body: BookAppointmentRequest, client: public_api_dependency, request: Request
) -> dict:
    appointment = AppointmentApi(client).book_appointment(body)
    logger.info(f"Appointment {appointment.id} booked with agent {body.agent_id}")
    return appointment_view(appointment)


@router.get("/mine")
def my_appointments(
    current_user: CurrentUser,
    client: api_dependency,
    status: Optional[AppointmentStatus] = None,
) -> List[dict]:
    return [appointment_view(a) for a in AppointmentApi(client).get_my_appointments(status)]


@router.patch("/{appointment_id}/status")
def update_appointment_status(
    appointment_id: str,
    body: AppointmentStatusUpdate,
    current_user: CurrentUser,
    client: api_dependency,
) -> dict:
    appointment = AppointmentApi(client).update_appointment_status(appointment_id, body.status)
    return appointment_view(appointment)
