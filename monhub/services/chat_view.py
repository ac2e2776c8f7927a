import logging
from datetime import date
from typing import Dict, List, Optional

from monhub.constants import (
    ALLOWED_DOC_TYPES,
    ALLOWED_IMAGE_TYPES,
    FILE_UPLOAD_MAX_SIZE_BYTES,
    FILE_UPLOAD_MAX_SIZE_MB,
)
from monhub.schemas.chat import Attachment, ChatMessage
from monhub.schemas.user import ChatUser
from monhub.services.api_client import ApiError
from monhub.services.chat_api import ChatApi
from monhub.services.collaboration_view import fetch_users_parallel
from monhub.utils.date_utils import day_label, format_time_only, local_date
from monhub.utils.formatting import format_file_size, participant_name
from monhub.utils.image_utils import to_cdn_url

logger = logging.getLogger(__name__)


class AttachmentRejected(ValueError):
    pass


def document_label(mime: str) -> str:
    lower = (mime or "").lower()
    if "pdf" in lower:
        return "PDF Document"
    if "word" in lower or "msword" in lower or "officedocument.word" in lower:
        return "Microsoft Word Document"
    if any(k in lower for k in ("sheet", "spreadsheet", "excel", "csv")):
        return "Excel Spreadsheet"
    if "presentation" in lower or "powerpoint" in lower:
        return "PowerPoint Presentation"
    return mime


def attachment_tile(attachment: Attachment) -> dict:
    url = to_cdn_url(attachment.url)
    if attachment.type == "image":
        return {"kind": "image", "url": url, "alt": attachment.name or "Message attachment"}
    label = document_label(attachment.mime)
    size = format_file_size(attachment.size) if attachment.size else ""
    return {
        "kind": "document",
        "url": url,
        "name": attachment.name or "Document",
        "description": f"{size}, {label}" if size else label,
    }


def message_bubble(message: ChatMessage, current_user_id: str) -> dict:
    is_mine = message.sender_id == current_user_id
    return {
        "id": message.id,
        "align": "right" if is_mine else "left",
        "is_mine": is_mine,
        "text": message.text or None,
        "image": to_cdn_url(message.image) if message.image else None,
        "attachments": [attachment_tile(a) for a in message.attachments],
        "time": format_time_only(message.created_at),
        # Read receipts only on sent messages
        "read_receipt": ("read" if message.is_read else "sent") if is_mine else None,
    }


def group_messages_by_date(
    messages: List[ChatMessage], today: Optional[date] = None
) -> List[dict]:
    """Messages in chronological order, bucketed by calendar day."""
    groups: List[dict] = []
    for message in sorted(messages, key=lambda m: m.created_at):
        day = local_date(message.created_at).isoformat()
        if not groups or groups[-1]["date"] != day:
            groups.append(
                {"date": day, "label": day_label(message.created_at, today), "messages": []}
            )
        groups[-1]["messages"].append(message)
    return groups


def build_thread(
    messages: List[ChatMessage], current_user_id: str, today: Optional[date] = None
) -> List[dict]:
    return [
        {
            "date": group["date"],
            "label": group["label"],
            "messages": [message_bubble(m, current_user_id) for m in group["messages"]],
        }
        for group in group_messages_by_date(messages, today)
    ]


def chat_user_summary(user: ChatUser) -> dict:
    return {
        "id": user.id,
        "name": participant_name(user),
        "profile_image": to_cdn_url(user.profile_image),
        "user_type": user.user_type,
        "unread_count": user.unread_count,
        "is_online": bool(user.is_online),
    }


def validate_attachment(content_type: str, size: int) -> str:
    """Return the attachment type for an upload, or raise AttachmentRejected."""
    if size > FILE_UPLOAD_MAX_SIZE_BYTES:
        raise AttachmentRejected(
            f"Le fichier dépasse la taille maximale de {FILE_UPLOAD_MAX_SIZE_MB} Mo"
        )
    if content_type in ALLOWED_IMAGE_TYPES:
        return "image"
    if content_type == "application/pdf":
        return "pdf"
    if content_type in ALLOWED_DOC_TYPES:
        return "doc"
    raise AttachmentRejected("Type de fichier non supporté")


def load_admin_conversation(
    chat_api: ChatApi, collaboration_id: str, today: Optional[date] = None
) -> dict:
    """Read-only view of the chat between the two parties of a collaboration."""
    conversation = chat_api.get_conversation_by_collaboration(collaboration_id)
    if not conversation or not conversation.owner_id or not conversation.collaborator_id:
        return {"collaboration_id": collaboration_id, "owner": None, "collaborator": None, "groups": []}

    owner_id, collaborator_id = conversation.owner_id, conversation.collaborator_id
    messages = chat_api.get_messages_between(owner_id, collaborator_id, 200)
    owner, collaborator = fetch_users_parallel(chat_api, [owner_id, collaborator_id])
    users: Dict[str, Optional[ChatUser]] = {owner_id: owner, collaborator_id: collaborator}

    groups = []
    for group in group_messages_by_date(messages, today):
        bubbles = []
        for message in group["messages"]:
            bubble = message_bubble(message, owner_id)
            sender = users.get(message.sender_id)
            bubble["sender_name"] = participant_name(sender)
            bubble["sender_image"] = to_cdn_url(sender.profile_image) if sender else None
            # Admin view never shows read receipts
            bubble["read_receipt"] = None
            bubbles.append(bubble)
        groups.append({"date": group["date"], "label": group["label"], "messages": bubbles})

    return {
        "collaboration_id": collaboration_id,
        "owner": chat_user_summary(owner) if owner else {"id": owner_id, "name": "Inconnu"},
        "collaborator": chat_user_summary(collaborator)
        if collaborator
        else {"id": collaborator_id, "name": "Inconnu"},
        "groups": groups,
    }


def unread_counts(chat_api: ChatApi) -> Dict[str, int]:
    try:
        return {user.id: user.unread_count for user in chat_api.get_users()}
    except ApiError as exc:
        logger.warning(f"Chat users unavailable: {exc}")
        return {}
