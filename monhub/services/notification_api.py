from typing import List

from monhub.schemas.notification import Notification
from monhub.services.api_client import ApiClient


class NotificationApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list(self, limit: int = 20) -> List[Notification]:
        body = self.client.get("/notifications", params={"limit": limit})
        rows = body.get("items", body.get("notifications", [])) if isinstance(body, dict) else body
        return [Notification.model_validate(row) for row in rows or []]

    def unread_count(self) -> int:
        body = self.client.get("/notifications/unread-count")
        return int(body.get("count", 0))

    def mark_read(self, notification_id: str) -> None:
        self.client.patch(f"/notifications/{notification_id}/read")

    def mark_all_read(self) -> None:
        self.client.patch("/notifications/read-all")
