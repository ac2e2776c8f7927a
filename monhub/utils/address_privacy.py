from typing import Iterable, Optional

from monhub.schemas.collaboration import Collaboration, CollaborationStatus

# Statuses after which the collaborator may see the exact address
ADDRESS_VISIBLE_STATUSES = {
    CollaborationStatus.ACCEPTED,
    CollaborationStatus.ACTIVE,
    CollaborationStatus.COMPLETED,
}


def can_view_full_address_for_status(status: CollaborationStatus) -> bool:
    return status in ADDRESS_VISIBLE_STATUSES


def can_view_full_address(
    is_owner: bool,
    collaborations: Optional[Iterable[Collaboration]],
    user_id: Optional[str],
) -> bool:
    """Owner always sees it; otherwise the user needs an accepted collaboration."""
    if is_owner:
        return True
    if not user_id:
        return False
    for collaboration in collaborations or []:
        if user_id not in (collaboration.owner_id, collaboration.collaborator_user_id):
            continue
        if can_view_full_address_for_status(collaboration.status):
            return True
    return False


def get_display_address(
    can_view: bool,
    address: Optional[str],
    city: Optional[str],
    postal_code: Optional[str],
) -> str:
    locality = " ".join(part for part in (postal_code, city) if part)
    if can_view and address:
        return f"{address}, {locality}" if locality else address
    if locality:
        return locality
    return "Adresse non communiquée"
