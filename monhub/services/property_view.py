from typing import List, Optional

from monhub.constants import ADDRESS_HIDDEN_HINT, LOGIN_ROUTE, USER_TYPE_AGENT
from monhub.schemas.collaboration import Collaboration, CollaborationStatus
from monhub.schemas.property import Property
from monhub.schemas.search_ad import SearchAd
from monhub.schemas.user import UserRef
from monhub.utils.address_privacy import can_view_full_address, get_display_address
from monhub.utils.date_utils import format_date, format_month_year
from monhub.utils.formatting import format_price, participant_name
from monhub.utils.image_utils import get_gallery_images, get_image_url, to_cdn_url

CONDITION_LABELS = {
    "new": "Neuf",
    "good": "Bon état",
    "refresh": "À rafraîchir",
    "renovate": "À rénover",
}

SALE_TYPE_LABELS = {
    "vente_classique": "Vente classique",
    "vente_viager": "Vente en viager",
    "vente_lot": "Vente en lot / Ensemble immobilier",
    "vente_vefa": "Vente en VEFA",
    "vente_location": "Vente en cours de location",
    "vente_usufruit": "Vente en usufruit / Nu-propriété",
    "vente_indivisions": "Vente en indivisions",
    "constructible": "Constructible",
    "terrain_loisirs": "Terrain de loisirs",
    "jardin": "Jardin",
    "champs_agricole": "Champs agricole",
    "ancien": "Ancien",
    "viager": "Viager",
}

BADGE_LABELS = {
    "nouveau": "Nouveau",
    "urgent": "Urgent",
    "negociable": "Négociable",
    "exclusivite": "Exclusivité",
    "coup_de_coeur": "Coup de cœur",
}

# An open collaboration on a property keeps others from proposing
BLOCKING_STATUS_LABELS = {
    CollaborationStatus.PENDING: "en attente",
    CollaborationStatus.ACCEPTED: "acceptée",
    CollaborationStatus.ACTIVE: "active",
}


def _plural(count: int, singular: str, plural: str) -> str:
    return plural if count > 1 else singular


def property_features(property: Property) -> List[str]:
    """Labels of the 'Caractéristiques' block, in display order."""
    features = []
    if property.rooms:
        features.append(f"{property.rooms} pièces")
    if property.bedrooms:
        features.append(f"{property.bedrooms} chambres")
    if property.bathrooms:
        features.append(
            f"{property.bathrooms} {_plural(property.bathrooms, 'salle', 'salles')} de bain"
        )
    if property.shower_rooms:
        features.append(
            f"{property.shower_rooms} {_plural(property.shower_rooms, 'salle', 'salles')} d'eau"
        )
    if property.surface:
        features.append(f"{property.surface:g} m² habitable")
    if property.land_area:
        features.append(f"{property.land_area:g} m² terrain")
    if property.floor is not None:
        total = f"/{property.total_floors}" if property.total_floors else ""
        features.append(f"Étage {property.floor}{total}")
    if property.levels:
        features.append(f"{property.levels} niveaux")
    if property.parking_spaces:
        features.append(f"{property.parking_spaces} places parking")
    if property.condition:
        features.append(f"État: {CONDITION_LABELS.get(property.condition, property.condition)}")
    if property.sale_type:
        features.append(SALE_TYPE_LABELS.get(property.sale_type, property.sale_type))
    if property.energy_rating:
        features.append(f"DPE: {property.energy_rating}")
    if property.gas_emission_class:
        features.append(f"GES: {property.gas_emission_class}")
    if property.annual_condo_fees:
        features.append(f"{property.annual_condo_fees:g}€/an charges")
    if property.available_from_date:
        features.append(f"Disponible: {format_month_year(property.available_from_date)}")
    for flag, label in (
        (property.has_parking, "Parking"),
        (property.has_garden, "Jardin"),
        (property.has_elevator, "Ascenseur"),
        (property.has_balcony, "Balcon"),
        (property.has_terrace, "Terrasse"),
        (property.has_air_conditioning, "Climatisation"),
    ):
        if flag:
            features.append(label)
    return features


def blocking_collaboration(
    collaborations: Optional[List[Collaboration]],
) -> Optional[Collaboration]:
    return next(
        (c for c in collaborations or [] if c.status in BLOCKING_STATUS_LABELS), None
    )


def contact_href(property: Property, user_id: Optional[str]) -> Optional[str]:
    if not user_id:
        return LOGIN_ROUTE
    if not property.owner_id:
        return None
    return f"/chat?userId={property.owner_id}&propertyId={property.id}"


def property_list_item(property: Property) -> dict:
    return {
        "id": property.id,
        "title": property.title,
        "image": get_image_url(property.main_image, "medium"),
        "price": format_price(property.price),
        "surface": property.surface,
        "location": " ".join(p for p in (property.postal_code, property.city) if p),
        "badges": [BADGE_LABELS[b] for b in property.badges if b in BADGE_LABELS],
        "status": property.status,
        "view_count": property.view_count,
        "views_label": f"{property.view_count} vues",
    }


def property_detail(
    property: Property,
    user_id: Optional[str],
    collaborations: Optional[List[Collaboration]] = None,
    user_type: Optional[str] = None,
) -> dict:
    is_owner = bool(user_id) and user_id == property.owner_id
    can_view = can_view_full_address(is_owner, collaborations, user_id)
    owner = property.owner if isinstance(property.owner, UserRef) else None
    blocking = None if is_owner else blocking_collaboration(collaborations)
    blocking_message = (
        f"Propriété déjà en collaboration ({BLOCKING_STATUS_LABELS[blocking.status]})"
        if blocking
        else None
    )
    return {
        "id": property.id,
        "title": property.title,
        "description": property.description,
        "price": format_price(property.price),
        "price_including_fees": format_price(property.price_including_fees),
        "agency_fees": format_price(property.agency_fees_amount),
        "surface": property.surface,
        "property_type": property.property_type,
        "transaction_type": property.transaction_type,
        "main_image": get_image_url(property.main_image, "large"),
        "gallery": get_gallery_images(property.gallery_images),
        "address": get_display_address(
            can_view, property.address, property.city, property.postal_code
        ),
        "can_view_full_address": can_view,
        "address_hint": None if can_view else ADDRESS_HIDDEN_HINT,
        "features": property_features(property),
        "owner": {
            "id": owner.id,
            "name": participant_name(owner),
            "profile_image": to_cdn_url(owner.profile_image),
            "user_type": owner.user_type,
        }
        if owner
        else None,
        "is_owner": is_owner,
        "contact_href": None if is_owner else contact_href(property, user_id),
        "has_blocking_collaboration": blocking is not None,
        "blocking_status": blocking.status.value if blocking else None,
        "blocking_message": blocking_message,
        "can_propose_collaboration": user_type == USER_TYPE_AGENT
        and not is_owner
        and blocking is None,
        "view_count": property.view_count,
        "published_at": format_date(property.published_at or property.created_at),
    }


def search_ad_detail(search_ad: SearchAd, user_id: Optional[str]) -> dict:
    author = search_ad.author_id if isinstance(search_ad.author_id, UserRef) else None
    budget = search_ad.budget
    return {
        "id": search_ad.id,
        "title": search_ad.title,
        "description": search_ad.description,
        "cities": search_ad.location.cities,
        "max_distance": search_ad.location.max_distance,
        "budget_max": format_price(budget.max),
        "budget_ideal": format_price(budget.ideal),
        "property_types": search_ad.property_types,
        "min_rooms": search_ad.min_rooms,
        "min_surface": search_ad.min_surface,
        "author": {
            "id": author.id,
            "name": participant_name(author),
            "profile_image": to_cdn_url(author.profile_image),
        }
        if author
        else None,
        "author_type": search_ad.author_type,
        "is_author": bool(user_id) and user_id == search_ad.author_user_id,
        "status": search_ad.status,
        "created_at": format_date(search_ad.created_at),
    }
