import logging
from typing import Annotated, List

from fastapi import APIRouter, Body, Depends
from starlette import status

from monhub.constants import USER_TYPE_AGENT, USER_TYPE_APPORTEUR
from monhub.dependencies import (
    OptionalUser,
    api_dependency,
    public_api_dependency,
    require_user_type,
)
from monhub.schemas.property import PropertyFilters, PropertyStatusUpdate
from monhub.schemas.user import CurrentUser
from monhub.services.api_client import ApiError
from monhub.services.collaboration_api import CollaborationApi
from monhub.services.property_service import PropertyService
from monhub.services.property_view import property_detail, property_list_item

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/property", tags=["properties"])

publisher_dependency = Annotated[
    CurrentUser, Depends(require_user_type(USER_TYPE_AGENT, USER_TYPE_APPORTEUR))
]


@router.get("/")
def list_properties(
    client: public_api_dependency, filters: Annotated[PropertyFilters, Depends()]
) -> List[dict]:
    return [property_list_item(p) for p in PropertyService(client).get_properties(filters)]


@router.get("/mine")
def my_properties(current_user: publisher_dependency, client: api_dependency) -> List[dict]:
    return [property_list_item(p) for p in PropertyService(client).get_my_properties()]


@router.get("/{property_id}")
def get_property(
    property_id: str, current_user: OptionalUser, client: public_api_dependency
) -> dict:
    property = PropertyService(client).get_property_by_id(property_id)
    user_id = current_user.id if current_user else None
    collaborations = []
    if user_id and user_id != property.owner_id:
        try:
            collaborations = CollaborationApi(client).get_property_collaborations(property_id)
        except ApiError as exc:
            # No collaboration data means the address stays hidden
            logger.warning(f"Collaborations unavailable for property {property_id}: {exc}")
    return property_detail(
        property,
        user_id,
        collaborations,
        user_type=current_user.user_type if current_user else None,
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_property(
    current_user: publisher_dependency,
    client: api_dependency,
    payload: dict = Body(...),
) -> dict:
    property = PropertyService(client).create_property(payload)
    logger.info(f"Property {property.id} created by {current_user.id}")
    return property_detail(property, current_user.id)


@router.put("/{property_id}")
def update_property(
    property_id: str,
    current_user: publisher_dependency,
    client: api_dependency,
    payload: dict = Body(...),
) -> dict:
    property = PropertyService(client).update_property(property_id, payload)
    return property_detail(property, current_user.id)


@router.patch("/{property_id}/status")
def update_property_status(
    property_id: str,
    body: PropertyStatusUpdate,
    current_user: publisher_dependency,
    client: api_dependency,
) -> dict:
    property = PropertyService(client).update_property_status(property_id, body.status)
    return property_list_item(property)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
    property_id: str, current_user: publisher_dependency, client: api_dependency
):
    PropertyService(client).delete_property(property_id)
    logger.info(f"Property {property_id} deleted by {current_user.id}")
