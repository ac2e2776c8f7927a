import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Body, Depends
from starlette import status

from monhub.constants import USER_TYPE_AGENT, USER_TYPE_APPORTEUR
from monhub.dependencies import (
    OptionalUser,
    api_dependency,
    public_api_dependency,
    require_user_type,
)
from monhub.schemas.search_ad import SearchAdStatusUpdate
from monhub.schemas.user import CurrentUser
from monhub.services.property_view import search_ad_detail
from monhub.services.search_ad_api import SearchAdApi

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search-ads", tags=["search-ads"])

publisher_dependency = Annotated[
    CurrentUser, Depends(require_user_type(USER_TYPE_AGENT, USER_TYPE_APPORTEUR))
]


@router.get("/")
def list_search_ads(
    current_user: OptionalUser,
    client: public_api_dependency,
    city: Optional[str] = None,
    property_type: Optional[str] = None,
) -> List[dict]:
    params = {}
    if city:
        params["city"] = city
    if property_type:
        params["propertyType"] = property_type
    user_id = current_user.id if current_user else None
    return [
        search_ad_detail(ad, user_id)
        for ad in SearchAdApi(client).get_all_search_ads(params or None)
    ]


@router.get("/mine")
def my_search_ads(current_user: publisher_dependency, client: api_dependency) -> List[dict]:
    return [search_ad_detail(ad, current_user.id) for ad in SearchAdApi(client).get_my_search_ads()]


@router.get("/{search_ad_id}")
def get_search_ad(
    search_ad_id: str, current_user: OptionalUser, client: public_api_dependency
) -> dict:
    search_ad = SearchAdApi(client).get_search_ad_by_id(search_ad_id)
    return search_ad_detail(search_ad, current_user.id if current_user else None)


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_search_ad(
    current_user: publisher_dependency,
    client: api_dependency,
    payload: dict = Body(...),
) -> dict:
    search_ad = SearchAdApi(client).create_search_ad(payload)
    logger.info(f"Search ad {search_ad.id} created by {current_user.id}")
    return search_ad_detail(search_ad, current_user.id)


@router.put("/{search_ad_id}")
def update_search_ad(
    search_ad_id: str,
    current_user: publisher_dependency,
    client: api_dependency,
    payload: dict = Body(...),
) -> dict:
    return search_ad_detail(
        SearchAdApi(client).update_search_ad(search_ad_id, payload), current_user.id
    )


@router.patch("/{search_ad_id}/status")
def update_search_ad_status(
    search_ad_id: str,
    body: SearchAdStatusUpdate,
    current_user: publisher_dependency,
    client: api_dependency,
) -> dict:
    return search_ad_detail(
        SearchAdApi(client).update_search_ad_status(search_ad_id, body.status),
        current_user.id,
    )


@router.delete("/{search_ad_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_search_ad(
    search_ad_id: str, current_user: publisher_dependency, client: api_dependency
):
    SearchAdApi(client).delete_search_ad(search_ad_id)
