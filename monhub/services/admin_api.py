from typing import List

from monhub.schemas.user import AdminUser, AdminUserUpdate
from monhub.services.api_client import ApiClient


class AdminApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_users(self) -> List[AdminUser]:
        body = self.client.get("/admin/users")
        rows = body.get("users", body) if isinstance(body, dict) else body
        return [AdminUser.model_validate(row) for row in rows or []]

    def get_user_profile(self, user_id: str) -> AdminUser:
        body = self.client.get(f"/admin/users/{user_id}")
        return AdminUser.model_validate(body.get("user", body))

    def update_user(self, user_id: str, update: AdminUserUpdate) -> AdminUser:
        payload = {}
        if update.is_validated is not None:
            payload["isValidated"] = update.is_validated
        if update.is_blocked is not None:
            payload["isBlocked"] = update.is_blocked
        if update.access_granted_by_admin is not None:
            payload["accessGrantedByAdmin"] = update.access_granted_by_admin
        body = self.client.put(f"/admin/users/{user_id}", json=payload)
        return AdminUser.model_validate(body.get("user", body))

    def get_properties(self) -> List[dict]:
        # Rows stay plain dicts: the admin listing mixes properties and search ads
        body = self.client.get("/admin/properties")
        return body.get("properties", body) if isinstance(body, dict) else body

    def get_stats(self) -> dict:
        body = self.client.get("/admin/stats")
        return body.get("stats", body)
