from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal, Union, Annotated
from primeproperty.schemas.common import PropertyType, SaleStatus
from primeproperty.schemas.payment import PaymentResponse
from primeproperty.services.listing_lifecycle import check_details_kind


class ResidentialDetails(BaseModel):
    kind: Literal["residential"]
    bedrooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    parking: int = Field(0, ge=0)
    has_garden: bool = False
    floors: int = Field(1, ge=0)


class LandDetails(BaseModel):
    kind: Literal["land"]
    land_size: float = Field(0, ge=0)
    zoning_type: Optional[str] = None
    has_road_access: bool = False


class CommercialDetails(BaseModel):
    kind: Literal["commercial"]
    office_space: float = Field(0, ge=0)
    parking_capacity: int = Field(0, ge=0)
    business_type_allowed: Optional[str] = None


PropertyDetails = Annotated[
    Union[ResidentialDetails, LandDetails, CommercialDetails],
    Field(discriminator="kind"),
]


class PropertyResponse(BaseModel):
    id: int
    seller_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    price: float
    location: str
    type: PropertyType
    status: SaleStatus
    images: List[str] = []
    details: Optional[dict] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    is_approved: bool
    is_featured: bool
    seller_name: Optional[str] = None
    seller_email: Optional[str] = None
    created_at: str
    updated_at: str


class PropertyCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    location: str = Field(..., min_length=1)
    type: PropertyType
    status: SaleStatus = "for sale"
    images: List[str] = []
    details: Optional[PropertyDetails] = None
    contact_phone: Optional[str] = Field(None, max_length=20)
    contact_email: Optional[str] = None

    @model_validator(mode="after")
    def details_match_type(self):
        if self.details is not None:
            check_details_kind(self.type, self.details.kind)
        return self


class PropertyUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, min_length=1)
    type: Optional[PropertyType] = None
    status: Optional[SaleStatus] = None
    images: Optional[List[str]] = None
    details: Optional[PropertyDetails] = None
    contact_phone: Optional[str] = Field(None, max_length=20)
    contact_email: Optional[str] = None


class FeatureRequest(BaseModel):
    is_featured: bool


class PromoteResponse(BaseModel):
    property: PropertyResponse
    payment: PaymentResponse
