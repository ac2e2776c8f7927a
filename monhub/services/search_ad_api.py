from typing import List, Optional

from monhub.schemas.search_ad import SearchAd
from monhub.services.api_client import ApiClient


def _rows(body) -> list:
    if isinstance(body, list):
        return body
    return body.get("data", body.get("searchAds", [])) or []


class SearchAdApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_all_search_ads(self, params: Optional[dict] = None) -> List[SearchAd]:
        return [
            SearchAd.model_validate(row)
            for row in _rows(self.client.get("/search-ads", params=params))
        ]

    def get_search_ad_by_id(self, search_ad_id: str) -> SearchAd:
        body = self.client.get(f"/search-ads/{search_ad_id}")
        return SearchAd.model_validate(body.get("data", body))

    def get_my_search_ads(self) -> List[SearchAd]:
        return [
            SearchAd.model_validate(row)
            for row in _rows(self.client.get("/search-ads/my-ads"))
        ]

    def create_search_ad(self, payload: dict) -> SearchAd:
        body = self.client.post("/search-ads", json=payload)
        return SearchAd.model_validate(body.get("data", body))

    def update_search_ad(self, search_ad_id: str, payload: dict) -> SearchAd:
        body = self.client.put(f"/search-ads/{search_ad_id}", json=payload)
        return SearchAd.model_validate(body.get("data", body))

    def update_search_ad_status(self, search_ad_id: str, status: str) -> SearchAd:
        body = self.client.patch(
            f"/search-ads/{search_ad_id}/status", json={"status": status}
        )
        return SearchAd.model_validate(body.get("data", body))

    def delete_search_ad(self, search_ad_id: str) -> None:
        self.client.delete(f"/search-ads/{search_ad_id}")
