from typing import List, Optional

from fastapi import APIRouter, Query
from starlette import status

from monhub.constants import DASHBOARD_ROUTE
from monhub.dependencies import CurrentUser, api_dependency
from monhub.schemas.notification import Notification
from monhub.services.notification_api import NotificationApi
from monhub.utils.date_utils import format_date_time
from monhub.utils.formatting import participant_name
from monhub.utils.image_utils import to_cdn_url

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def notification_target(notification: Notification) -> Optional[str]:
    """Page opened when the user clicks a notification."""
    entity = notification.entity
    if entity.type == "chat":
        actor = notification.actor_user_id
        return f"/chat?userId={actor}" if actor else "/chat"
    if entity.type == "collaboration":
        return f"/collaboration/{entity.id}"
    if entity.type == "appointment":
        return DASHBOARD_ROUTE
    return None


def notification_view(notification: Notification) -> dict:
    actor = notification.actor_id
    return {
        "id": notification.id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "read": notification.read,
        "target": notification_target(notification),
        "actor": {
            "name": participant_name(actor),
            "profile_image": to_cdn_url(getattr(actor, "profile_image", None)),
        }
        if actor
        else None,
        "created_at": format_date_time(notification.created_at),
    }


@router.get("/")
def list_notifications(
    current_user: CurrentUser,
    client: api_dependency,
    limit: int = Query(20, ge=1, le=100),
) -> List[dict]:
    return [notification_view(n) for n in NotificationApi(client).list(limit)]


@router.get("/unread-count")
def unread_count(current_user: CurrentUser, client: api_dependency) -> dict:
    return {"count": NotificationApi(client).unread_count()}


@router.patch("/read-all", status_code=status.HTTP_204_NO_CONTENT)
def mark_all_read(current_user: CurrentUser, client: api_dependency):
    NotificationApi(client).mark_all_read()


@router.patch("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_read(notification_id: str, current_user: CurrentUser, client: api_dependency):
    NotificationApi(client).mark_read(notification_id)
