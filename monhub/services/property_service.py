from typing import List, Optional

from monhub.schemas.property import Property, PropertyFilters
from monhub.services.api_client import ApiClient


class PropertyService:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_properties(self, filters: Optional[PropertyFilters] = None) -> List[Property]:
        params = filters.to_query() if filters else None
        body = self.client.get("/property", params=params)
        rows = body.get("data", body.get("properties", [])) if isinstance(body, dict) else body
        return [Property.model_validate(row) for row in rows or []]

    def get_property_by_id(self, property_id: str) -> Property:
        # The backend increments the view counter on this read
        body = self.client.get(f"/property/{property_id}")
        return Property.model_validate(body.get("data", body))

    def get_my_properties(self) -> List[Property]:
        body = self.client.get("/property/my/properties")
        rows = body.get("data", {})
        if isinstance(rows, dict):
            rows = rows.get("properties", [])
        return [Property.model_validate(row) for row in rows]

    def create_property(self, payload: dict) -> Property:
        body = self.client.post("/property", json=payload)
        return Property.model_validate(body.get("data", body))

    def update_property(self, property_id: str, payload: dict) -> Property:
        body = self.client.put(f"/property/{property_id}", json=payload)
        return Property.model_validate(body.get("data", body))

    def update_property_status(self, property_id: str, status: str) -> Property:
        body = self.client.patch(
            f"/property/{property_id}/status", json={"status": status}
        )
        return Property.model_validate(body.get("data", body))

    def delete_property(self, property_id: str) -> None:
        self.client.delete(f"/property/{property_id}")
