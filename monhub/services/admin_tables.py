"""Admin back-office table columns.

Each column renders one cell of a row into plain data (text, badge, link,
image) that the front end draws as-is.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from monhub.constants import COLLABORATION_STATUS_LABELS, USER_TYPE_AGENT, USER_TYPE_LABELS
from monhub.schemas.collaboration import Collaboration, PostType
from monhub.schemas.user import AdminUser, UserRef
from monhub.utils.date_utils import format_date, format_day_month, format_short_date
from monhub.utils.formatting import capitalize, format_price_thousands, participant_name
from monhub.utils.image_utils import to_cdn_url

PROPERTY_TYPE_LABELS = {
    "Appartement": "Appartement",
    "Maison": "Maison",
    "Terrain": "Terrain",
    "Local commercial": "Local commercial",
    "Bureaux": "Bureaux",
    "Recherche": "Recherche",
}

_SUCCESS = {"active", "accepted", "completed", "paid", "validated", "fulfilled"}
_WARNING = {"pending", "draft", "paused", "past_due", "pending_cancellation"}
_ERROR = {"rejected", "cancelled", "canceled", "archived", "blocked"}
_INFO = {"sold", "rented"}


def status_badge_variant(status: str) -> str:
    status = (status or "").lower()
    if status in _SUCCESS:
        return "success"
    if status in _WARNING:
        return "warning"
    if status in _ERROR:
        return "error"
    if status in _INFO:
        return "info"
    return "default"


def badge(label: str, variant: str, extra: Optional[str] = None) -> dict:
    cell = {"kind": "badge", "label": label, "variant": variant}
    if extra:
        cell["extra"] = extra
    return cell


def text(value: Any) -> dict:
    return {"kind": "text", "text": "" if value is None else str(value)}


@dataclass
class Column:
    header: str
    accessor: str
    width: Optional[str] = None
    render: Optional[Callable[[Any, Any], dict]] = None

    def cell(self, row: Any) -> dict:
        value = row.get(self.accessor) if isinstance(row, dict) else getattr(row, self.accessor, None)
        if self.render:
            return self.render(value, row)
        return text(value)


def render_table(columns: List[Column], rows: List[Any]) -> dict:
    return {
        "columns": [{"header": c.header, "accessor": c.accessor, "width": c.width} for c in columns],
        "rows": [[c.cell(row) for c in columns] for row in rows],
    }


# ==================== PROPERTIES ====================


def _property_title(_value, row: dict) -> dict:
    base_path = "/search-ads" if row.get("propertyType") == "Recherche" else "/property"
    image = (row.get("mainImage") or {}).get("url") if isinstance(row.get("mainImage"), dict) else row.get("mainImage")
    return {
        "kind": "link",
        "href": f"{base_path}/{row.get('_id') or row.get('id')}",
        "text": row.get("title"),
        "subtitle": row.get("location") or row.get("city"),
        "image": to_cdn_url(image) if image else None,
        "new_tab": True,
    }


def _property_type(value, row: dict) -> dict:
    raw = value or row.get("propertyType") or ""
    return badge(PROPERTY_TYPE_LABELS.get(raw, raw), "info")


def _property_status(value, _row) -> dict:
    status = str(value or "")
    return badge(capitalize(status), status_badge_variant(status))


def get_property_table_columns() -> List[Column]:
    return [
        Column("Annonce", "title", "35%", _property_title),
        Column("Type", "type", "12%", _property_type),
        Column("Prix", "price", "15%", lambda v, _r: text(format_price_thousands(float(v or 0)))),
        Column("Statut", "status", "15%", _property_status),
        Column("Créée", "createdAt", "15%", lambda v, _r: text(format_date(v))),
    ]


# ==================== USERS ====================


def _user_identity(_value, row: AdminUser) -> dict:
    return {
        "kind": "link",
        "href": f"/admin/users/{row.id}",
        "text": participant_name(row),
        "subtitle": row.email,
        "image": to_cdn_url(row.profile_image) if row.profile_image else None,
        "initial": participant_name(row)[:1].upper(),
    }


def _user_type(value, _row: AdminUser) -> dict:
    return badge(USER_TYPE_LABELS.get(value, capitalize(value or "")), "info")


def _user_validation(_value, row: AdminUser) -> dict:
    if row.is_blocked:
        return badge("Bloqué", "error")
    if row.is_validated:
        return badge("Validé", "success")
    return badge("Nouveau", "warning")


def payment_cell(_value, row: AdminUser) -> dict:
    if row.user_type != USER_TYPE_AGENT:
        return text("N/A")
    if row.access_granted_by_admin:
        return badge("Accès manuel", "info")
    if row.subscription_status == "canceled":
        return badge("Annulé", "error", format_date(row.canceled_at) or None)
    if row.subscription_status == "pending_cancellation":
        end = format_day_month(row.subscription_end_date)
        return badge("Annulation", "warning", f"fin {end}" if end else None)
    if row.subscription_status == "past_due":
        failed = row.failed_payment_count or 0
        return badge("Retard", "warning", f"{failed} échec(s)" if failed > 0 else None)
    if row.is_paid:
        renewal = format_short_date(row.subscription_end_date)
        return badge("Payé", "success", f"↻ {renewal}" if renewal else None)
    if row.profile_completed:
        return badge("En attente", "warning")
    return text("Profil incomplet")


def get_user_table_columns() -> List[Column]:
    return [
        Column("Utilisateur", "email", "30%", _user_identity),
        Column("Type", "user_type", "15%", _user_type),
        Column("Statut", "is_validated", "15%", _user_validation),
        Column("Inscrit", "created_at", "15%", lambda v, _r: text(format_date(v))),
        Column("Paiement", "is_paid", "15%", payment_cell),
    ]


# ==================== COLLABORATIONS ====================


def _person(ref) -> dict:
    name = participant_name(ref, "Unknown")
    user = ref if isinstance(ref, UserRef) else None
    return {
        "name": name,
        "initial": name[:1].upper(),
        "image": to_cdn_url(user.profile_image) if user and user.profile_image else None,
        "href": f"/admin/users/{user.id if user else ref}" if ref else None,
    }


def _collaboration_parties(_value, row: Collaboration) -> dict:
    return {
        "kind": "parties",
        "agent": _person(row.post_owner_id),
        "apporteur": _person(row.collaborator_id),
    }


def _collaboration_post(_value, row: Collaboration) -> dict:
    post = row.post_id if isinstance(row.post_id, dict) else {}
    title = post.get("title") or post.get("address") or "Unknown"
    image = post.get("mainImage")
    if isinstance(image, dict):
        image = image.get("url")
    is_property = row.post_type == PostType.PROPERTY
    return {
        "kind": "link" if is_property and row.post_ref_id else "text",
        "href": f"/property/{row.post_ref_id}" if is_property and row.post_ref_id else None,
        "text": title,
        "image": to_cdn_url(image) if image else None,
    }


def _collaboration_status(_value, row: Collaboration) -> dict:
    status = row.status.value
    return badge(COLLABORATION_STATUS_LABELS[status], status_badge_variant(status))


def _collaboration_actions(_value, row: Collaboration) -> dict:
    return {
        "kind": "actions",
        "chat_href": f"/admin/chat?collaborationId={row.id}",
        "detail_href": f"/collaboration/{row.id}",
    }


def get_collaboration_table_columns() -> List[Column]:
    return [
        Column("Agent & Apporteur", "agent", "25%", _collaboration_parties),
        Column("Annonce", "property", "22%", _collaboration_post),
        Column(
            "Commission",
            "proposed_commission",
            "13%",
            lambda v, _r: text(f"{v if v is not None else 0:g}%"),
        ),
        Column("Statut", "status", "13%", _collaboration_status),
        Column("Créée", "created_at", "12%", lambda v, _r: text(format_date(v))),
        Column("Actions", "id", "15%", _collaboration_actions),
    ]


# ==================== USER PROFILE ====================


def user_profile_view(user: AdminUser) -> dict:
    """Header plus the 'Professionnel' and 'Documents' tabs of a user page."""
    info = user.professional_info
    identity_card = info.identity_card if info else None
    professional = None
    if info is not None:
        professional = {
            "agent_type": info.agent_type,
            "t_card": info.t_card,
            "siren_number": info.siren_number,
            "rsac_number": info.rsac_number,
            "siret_number": info.siret_number,
            "network": info.network,
            "location": " ".join(p for p in (info.postal_code, info.city) if p),
            "intervention_radius": f"{info.intervention_radius} km"
            if info.intervention_radius
            else None,
            "covered_cities": info.covered_cities,
            "mandate_types": info.mandate_types,
            "years_experience": info.years_experience,
            "personal_pitch": info.personal_pitch,
        }
    return {
        "id": user.id,
        "name": participant_name(user),
        "email": user.email,
        "phone": user.phone,
        "profile_image": to_cdn_url(user.profile_image),
        "user_type": USER_TYPE_LABELS.get(user.user_type, user.user_type),
        "validation": _user_validation(None, user),
        "payment": payment_cell(None, user),
        "registered_at": format_date(user.created_at),
        "tabs": {
            "professional": professional,
            "documents": {
                "identity_card": {
                    "url": to_cdn_url(identity_card.url),
                    "uploaded_at": format_date(identity_card.uploaded_at),
                    "is_pdf": identity_card.url.lower().endswith(".pdf"),
                }
                if identity_card
                else None,
            },
        },
    }
