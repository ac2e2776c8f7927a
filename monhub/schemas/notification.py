from datetime import datetime
from typing import Any, Dict, Literal, Optional, Union
from monhub.schemas.common import ApiModel, id_field
from monhub.schemas.user import UserRef


class NotificationEntity(ApiModel):
    type: Literal["chat", "collaboration", "appointment"]
    id: str


class Notification(ApiModel):
    id: str = id_field()
    type: str
    title: str
    message: str
    entity: NotificationEntity
    actor_id: Optional[Union[UserRef, str]] = None
    read: bool = False
    data: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    @property
    def actor_user_id(self) -> Optional[str]:
        if isinstance(self.actor_id, UserRef):
            return self.actor_id.id
        return self.actor_id
