import logging
from typing import BinaryIO, List, Optional

from monhub.schemas.chat import Attachment, ChatMessage, Conversation
from monhub.schemas.user import ChatUser
from monhub.services.api_client import ApiClient

logger = logging.getLogger(__name__)


class ChatApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_users(self) -> List[ChatUser]:
        body = self.client.get("/message/users")
        rows = body.get("users", body) if isinstance(body, dict) else body
        return [ChatUser.model_validate(row) for row in rows or []]

    def get_user_by_id(self, user_id: str) -> ChatUser:
        body = self.client.get(f"/message/users/{user_id}")
        return ChatUser.model_validate(body.get("user", body))

    def get_messages(
        self, user_id: str, limit: int = 50, before: Optional[str] = None
    ) -> List[ChatMessage]:
        params = {"limit": limit}
        if before:
            params["before"] = before
        body = self.client.get(f"/message/{user_id}", params=params)
        rows = body.get("messages", body) if isinstance(body, dict) else body
        return [ChatMessage.model_validate(row) for row in rows or []]

    def get_messages_between(
        self, user_a: str, user_b: str, limit: int = 200
    ) -> List[ChatMessage]:
        """Admin read of a thread; does not mark anything as read."""
        body = self.client.get(
            "/admin/chat/messages",
            params={"userA": user_a, "userB": user_b, "limit": limit},
        )
        return [ChatMessage.model_validate(row) for row in body.get("messages", [])]

    def get_conversation_by_collaboration(
        self, collaboration_id: str
    ) -> Optional[Conversation]:
        body = self.client.get(f"/admin/chat/collaboration/{collaboration_id}")
        conversation = body.get("conversation")
        if not conversation:
            return None
        return Conversation.model_validate(conversation)

    def send_message(
        self,
        receiver_id: str,
        text: Optional[str] = None,
        attachments: Optional[List[Attachment]] = None,
    ) -> ChatMessage:
        payload = {"text": text}
        if attachments:
            payload["attachments"] = [
                a.model_dump(by_alias=True, exclude_none=True) for a in attachments
            ]
        body = self.client.post(f"/message/send/{receiver_id}", json=payload)
        return ChatMessage.model_validate(body.get("message", body))

    def mark_as_read(self, sender_id: str) -> None:
        self.client.put(f"/message/read/{sender_id}")

    def delete_message(self, message_id: str) -> None:
        self.client.delete(f"/message/{message_id}")

    def upload_attachment(
        self, filename: str, content: BinaryIO, content_type: str
    ) -> Attachment:
        body = self.client.upload(
            "/upload/chat-file", files={"file": (filename, content, content_type)}
        )
        return Attachment.model_validate(body.get("data", body))
