from typing import List, Optional

from monhub.schemas.appointment import (
    Appointment,
    AppointmentStatus,
    Availability,
    BookAppointmentRequest,
)
from monhub.schemas.user import ChatUser
from monhub.services.api_client import ApiClient


class AppointmentApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_agents(self, city: Optional[str] = None) -> List[ChatUser]:
        params = {"city": city} if city else None
        body = self.client.get("/auth/agents", params=params)
        rows = body.get("agents", body.get("data", [])) if isinstance(body, dict) else body
        return [ChatUser.model_validate(row) for row in rows or []]

    def get_agent_availability(self, agent_id: str) -> Availability:
        body = self.client.get(f"/appointments/availability/{agent_id}")
        return Availability.model_validate(body.get("data", body))

    def book_appointment(self, request: BookAppointmentRequest) -> Appointment:
        body = self.client.post("/appointments", json=request.to_payload())
        return Appointment.model_validate(body.get("data", body))

    def get_my_appointments(self, status: Optional[AppointmentStatus] = None) -> List[Appointment]:
        params = {"status": status.value} if status else None
        body = self.client.get("/appointments/my", params=params)
        rows = body.get("data", []) if isinstance(body, dict) else body
        return [Appointment.model_validate(row) for row in rows or []]

    def update_appointment_status(
        self, appointment_id: str, status: AppointmentStatus
    ) -> Appointment:
        body = self.client.patch(
            f"/appointments/{appointment_id}/status", json={"status": status.value}
        )
        return Appointment.model_validate(body.get("data", body))
