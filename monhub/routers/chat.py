import logging
from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, Request, UploadFile
from starlette import status

from monhub.dependencies import ProtectedUser, api_dependency
from monhub.limits import limiter
from monhub.services.chat_api import ChatApi
from monhub.services.chat_view import (
    AttachmentRejected,
    build_thread,
    chat_user_summary,
    message_bubble,
    validate_attachment,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/users")
def list_chat_users(current_user: ProtectedUser, client: api_dependency) -> List[dict]:
    return [chat_user_summary(user) for user in ChatApi(client).get_users()]


@router.get("/{user_id}/messages")
def get_thread(
    user_id: str,
    current_user: ProtectedUser,
    client: api_dependency,
    limit: int = Query(50, ge=1, le=200),
    before: Optional[str] = None,
) -> dict:
    chat_api = ChatApi(client)
    peer = chat_api.get_user_by_id(user_id)
    messages = chat_api.get_messages(user_id, limit=limit, before=before)
    return {
        "peer": chat_user_summary(peer),
        "groups": build_thread(messages, current_user.id),
        "has_more": len(messages) >= limit,
    }


@limiter.limit("30/minute")
@router.post("/{user_id}/messages", status_code=status.HTTP_201_CREATED)
def send_message(
    user_id: str,
    request: Request,
    current_user: ProtectedUser,
    client: api_dependency,
    text: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
) -> dict:
    if not (text and text.strip()) and file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Message vide"
        )
    chat_api = ChatApi(client)
    attachments = []
    if file is not None:
        content = file.file.read()
        try:
            kind = validate_attachment(file.content_type, len(content))
        except AttachmentRejected as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            )
        attachment = chat_api.upload_attachment(file.filename, content, file.content_type)
        if attachment.type == "file":
            attachment.type = kind
        attachments.append(attachment)
        logger.info(f"Uploaded {kind} attachment for user {current_user.id}")
    message = chat_api.send_message(
        user_id, text.strip() if text else None, attachments or None
    )
    return message_bubble(message, current_user.id)


@router.post("/{user_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_thread_read(user_id: str, current_user: ProtectedUser, client: api_dependency):
    ChatApi(client).mark_as_read(user_id)


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(message_id: str, current_user: ProtectedUser, client: api_dependency):
    ChatApi(client).delete_message(message_id)
