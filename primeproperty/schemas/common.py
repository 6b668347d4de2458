from pydantic import BaseModel
from typing import Literal

UserRole = Literal["buyer", "seller", "admin"]
UserStatus = Literal["active", "blocked"]
PropertyType = Literal["house", "land", "apartment", "office", "commercial"]
SaleStatus = Literal["for sale", "for rent", "sold"]
PaymentType = Literal["promotion", "subscription"]
PaymentStatus = Literal["pending", "completed", "failed"]
SortOrder = Literal["newest", "price_asc", "price_desc"]


class SuccessResponse(BaseModel):
    success: bool = True
