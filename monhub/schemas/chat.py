from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from monhub.schemas.common import ApiModel, id_field


class Attachment(ApiModel):
    url: str
    name: str = ""
    mime: str = "application/octet-stream"
    size: int = 0
    type: Literal["image", "pdf", "doc", "docx", "file"] = "file"
    thumbnail_url: Optional[str] = None


class ChatMessage(ApiModel):
    id: str = id_field()
    sender_id: str
    receiver_id: str
    text: Optional[str] = None
    # Legacy single image
    image: Optional[str] = None
    attachments: List[Attachment] = []
    created_at: datetime
    is_read: bool = False


class Conversation(ApiModel):
    id: Optional[str] = id_field(None)
    owner_id: Optional[str] = None
    collaborator_id: Optional[str] = None


class SendMessageRequest(BaseModel):
    text: Optional[str] = Field(None, max_length=5000)
    attachments: List[Attachment] = []
