import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple

from monhub.constants import (
    ADDRESS_HIDDEN_HINT,
    COLLABORATION_STATUS_LABELS,
    COMPLETION_REASONS,
    PROGRESS_STEPS,
)
from monhub.schemas.collaboration import Collaboration, PostType
from monhub.schemas.property import Property
from monhub.schemas.search_ad import SearchAd
from monhub.schemas.user import ChatUser, UserRef
from monhub.services.api_client import ApiError
from monhub.services.chat_api import ChatApi
from monhub.services.collaboration_workflow import CollaborationWorkflow
from monhub.services.property_service import PropertyService
from monhub.services.search_ad_api import SearchAdApi
from monhub.utils.address_privacy import (
    can_view_full_address_for_status,
    get_display_address,
)
from monhub.utils.date_utils import format_date, format_date_time
from monhub.utils.formatting import format_price, participant_name
from monhub.utils.image_utils import get_image_url, to_cdn_url

logger = logging.getLogger(__name__)

# Two lookups at most per page (owner and collaborator)
_executor = ThreadPoolExecutor(max_workers=4)


def load_post_details(
    collaboration: Collaboration,
    property_service: PropertyService,
    search_ad_api: SearchAdApi,
) -> Tuple[Optional[Property], Optional[SearchAd]]:
    """Resolve the collaboration's post; a failed lookup leaves it empty."""
    if not collaboration.post_id:
        return None, None
    try:
        if collaboration.post_type == PostType.PROPERTY:
            if collaboration.is_post_populated:
                return Property.model_validate(collaboration.post_id), None
            return property_service.get_property_by_id(collaboration.post_id), None
        if collaboration.is_post_populated:
            return None, SearchAd.model_validate(collaboration.post_id)
        return None, search_ad_api.get_search_ad_by_id(collaboration.post_id)
    except (ApiError, ValueError) as exc:
        logger.warning(
            f"Post details unavailable for collaboration {collaboration.id}: {exc}"
        )
        return None, None


def fetch_users_parallel(
    chat_api: ChatApi, user_ids: List[Optional[str]]
) -> List[Optional[ChatUser]]:
    """Fan out the user lookups and wait for all of them."""
    futures = [
        _executor.submit(chat_api.get_user_by_id, user_id) if user_id else None
        for user_id in user_ids
    ]
    users: List[Optional[ChatUser]] = []
    for user_id, future in zip(user_ids, futures):
        if future is None:
            users.append(None)
            continue
        try:
            users.append(future.result())
        except ApiError as exc:
            logger.warning(f"User lookup failed for {user_id}: {exc}")
            users.append(None)
    return users


def _participant(ref, fetched: Optional[ChatUser]) -> Optional[dict]:
    user = fetched or (ref if isinstance(ref, UserRef) else None)
    if user is None:
        return None
    return {
        "id": user.id,
        "name": participant_name(user),
        "email": user.email,
        "profile_image": to_cdn_url(user.profile_image),
        "user_type": user.user_type,
    }


def build_progress_steps(collaboration: Collaboration) -> List[dict]:
    by_id = {step.id: step for step in collaboration.progress_steps}
    steps = []
    for step_id, title in PROGRESS_STEPS:
        step = by_id.get(step_id)
        steps.append(
            {
                "id": step_id,
                "title": title,
                "completed": bool(step and step.completed),
                "owner_validated": bool(step and step.owner_validated),
                "collaborator_validated": bool(step and step.collaborator_validated),
                "current": collaboration.current_progress_step == step_id,
                "notes": [
                    {
                        "note": note.note,
                        "author": participant_name(note.created_by),
                        "created_at": format_date_time(note.created_at),
                    }
                    for note in (step.notes if step else [])
                ],
            }
        )
    return steps


def build_timeline(collaboration: Collaboration) -> List[dict]:
    activities = sorted(
        collaboration.activities,
        key=lambda a: a.created_at.timestamp() if a.created_at else 0,
        reverse=True,
    )
    return [
        {
            "type": activity.type,
            "message": activity.message,
            "author": participant_name(activity.created_by),
            "created_at": format_date_time(activity.created_at),
        }
        for activity in activities
    ]


def build_post_info(
    collaboration: Collaboration,
    property: Optional[Property],
    search_ad: Optional[SearchAd],
) -> dict:
    can_view = can_view_full_address_for_status(collaboration.status)
    base_path = "property" if collaboration.post_type == PostType.PROPERTY else "search-ads"
    info = {
        "post_type": collaboration.post_type.value,
        "link": f"/{base_path}/{collaboration.post_ref_id}" if collaboration.post_ref_id else None,
        "can_view_full_address": can_view,
        "address_hint": None if can_view else ADDRESS_HIDDEN_HINT,
    }
    if property is not None:
        info.update(
            {
                "title": property.title,
                "price": format_price(property.price),
                "surface": property.surface,
                "image": get_image_url(property.main_image, "medium"),
                "address": get_display_address(
                    can_view, property.address, property.city, property.postal_code
                ),
            }
        )
    elif search_ad is not None:
        info.update(
            {
                "title": search_ad.title,
                "description": search_ad.description,
                "cities": search_ad.location.cities,
                "budget": format_price(search_ad.budget.max),
                "property_types": search_ad.property_types,
            }
        )
    return info


def build_contract_info(collaboration: Collaboration, workflow: CollaborationWorkflow) -> dict:
    my_signature = (
        collaboration.owner_signed if workflow.is_owner else collaboration.collaborator_signed
    )
    return {
        "has_contract": bool(collaboration.contract_text and collaboration.contract_text.strip()),
        "owner_signed": collaboration.owner_signed,
        "owner_signed_at": format_date_time(collaboration.owner_signed_at),
        "collaborator_signed": collaboration.collaborator_signed,
        "collaborator_signed_at": format_date_time(collaboration.collaborator_signed_at),
        "requires_my_signature": workflow.can_update and not my_signature,
    }


def build_collaboration_page(
    workflow: CollaborationWorkflow,
    chat_api: ChatApi,
    property_service: PropertyService,
    search_ad_api: SearchAdApi,
    unread_counts: Optional[Dict[str, int]] = None,
) -> dict:
    collaboration = workflow.collaboration
    property, search_ad = load_post_details(collaboration, property_service, search_ad_api)

    owner_ref, collaborator_ref = collaboration.post_owner_id, collaboration.collaborator_id
    to_fetch = [
        None if isinstance(owner_ref, UserRef) else collaboration.owner_id,
        None if isinstance(collaborator_ref, UserRef) else collaboration.collaborator_user_id,
    ]
    owner_user, collaborator_user = fetch_users_parallel(chat_api, to_fetch)
    peer_id = workflow.peer_id()

    return {
        "id": collaboration.id,
        "status": collaboration.status.value,
        "status_label": COLLABORATION_STATUS_LABELS[collaboration.status.value],
        "commission": collaboration.proposed_commission,
        "compensation_type": collaboration.compensation_type.value
        if collaboration.compensation_type
        else None,
        "compensation_amount": collaboration.compensation_amount,
        "proposal_message": collaboration.proposal_message,
        "completion_reason": COMPLETION_REASONS.get(collaboration.completion_reason or "")
        if collaboration.completion_reason
        else None,
        "created_at": format_date(collaboration.created_at),
        "participants": {
            "owner": _participant(owner_ref, owner_user),
            "collaborator": _participant(collaborator_ref, collaborator_user),
        },
        "permissions": {
            "is_owner": workflow.is_owner,
            "is_collaborator": workflow.is_collaborator,
            "can_update": workflow.can_update,
            "is_active": workflow.is_active,
        },
        "post": build_post_info(collaboration, property, search_ad),
        "progress_steps": build_progress_steps(collaboration),
        "timeline": build_timeline(collaboration),
        "contract": build_contract_info(collaboration, workflow),
        "chat": {
            "peer_id": peer_id,
            "unread_count": (unread_counts or {}).get(peer_id, 0) if peer_id else 0,
        },
    }
