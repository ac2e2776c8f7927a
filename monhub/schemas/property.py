from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union
from datetime import datetime
from monhub.schemas.common import ApiModel, id_field
from monhub.schemas.user import UserRef


class ImageData(ApiModel):
    url: Optional[str] = None
    key: Optional[str] = None
    # Legacy sized variants
    original: Optional[str] = None
    large: Optional[str] = None
    medium: Optional[str] = None
    thumbnail: Optional[str] = None


ImageRef = Union[str, ImageData]


class Property(ApiModel):
    id: str = id_field()
    title: str
    description: Optional[str] = None
    price: float = 0
    price_including_fees: Optional[float] = None
    agency_fees_amount: Optional[float] = None
    agency_fees_percentage: Optional[float] = None
    surface: Optional[float] = None
    land_area: Optional[float] = None
    property_type: Optional[str] = None
    transaction_type: Optional[str] = None
    sale_type: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    rooms: Optional[int] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    shower_rooms: Optional[int] = None
    floor: Optional[int] = None
    total_floors: Optional[int] = None
    levels: Optional[int] = None
    parking_spaces: Optional[int] = None
    condition: Optional[str] = None
    energy_rating: Optional[str] = None
    gas_emission_class: Optional[str] = None
    annual_condo_fees: Optional[float] = None
    available_from_date: Optional[str] = None
    year_built: Optional[int] = None
    orientation: Optional[str] = None
    heating_type: Optional[str] = None
    mandate_number: Optional[str] = None
    has_parking: bool = False
    has_garden: bool = False
    has_elevator: bool = False
    has_balcony: bool = False
    has_terrace: bool = False
    has_air_conditioning: bool = False
    main_image: Optional[ImageRef] = None
    gallery_images: List[ImageRef] = []
    badges: List[str] = []
    owner: Optional[Union[UserRef, str]] = None
    view_count: int = 0
    status: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def owner_id(self) -> Optional[str]:
        if isinstance(self.owner, UserRef):
            return self.owner.id
        return self.owner


class PropertyFilters(BaseModel):
    city: Optional[str] = None
    postal_code: Optional[str] = None
    property_type: Optional[str] = None
    transaction_type: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    min_surface: Optional[float] = Field(None, ge=0)
    max_surface: Optional[float] = Field(None, ge=0)
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)

    def to_query(self) -> Dict[str, Any]:
        """Query string params in the backend's camelCase."""
        mapping = {
            "city": "city",
            "postal_code": "postalCode",
            "property_type": "propertyType",
            "transaction_type": "transactionType",
            "min_price": "minPrice",
            "max_price": "maxPrice",
            "min_surface": "minSurface",
            "max_surface": "maxSurface",
            "page": "page",
            "limit": "limit",
        }
        return {
            mapping[k]: v
            for k, v in self.model_dump(exclude_none=True).items()
            if k in mapping
        }


class PropertyStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(draft|active|sold|rented|archived)$")
