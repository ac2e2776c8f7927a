from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, Field
from monhub.schemas.common import ApiModel, id_field
from monhub.schemas.user import UserRef


class SearchAdLocation(ApiModel):
    cities: List[str] = []
    max_distance: Optional[int] = None
    open_to_other_areas: bool = False


class SearchAdBudget(ApiModel):
    max: Optional[float] = None
    ideal: Optional[float] = None
    financing_type: Optional[str] = None


class SearchAd(ApiModel):
    id: str = id_field()
    title: str
    description: Optional[str] = None
    location: SearchAdLocation = SearchAdLocation()
    budget: SearchAdBudget = SearchAdBudget()
    property_types: List[str] = []
    min_rooms: Optional[int] = None
    min_surface: Optional[float] = None
    author_id: Optional[Union[UserRef, str]] = None
    author_type: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def author_user_id(self) -> Optional[str]:
        if isinstance(self.author_id, UserRef):
            return self.author_id.id
        return self.author_id


class SearchAdStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(active|paused|fulfilled|sold|rented|archived)$")
