"""
Property Controller - public search and listing lifecycle endpoints
"""
from fastapi import APIRouter, HTTPException, Depends, Query, status
from typing import List, Optional
from primeproperty.config import settings
from primeproperty.schemas.common import PropertyType, SortOrder, SuccessResponse
from primeproperty.schemas.property import (
    PropertyResponse,
    PropertyCreateRequest,
    PropertyUpdateRequest,
    PromoteResponse,
)
from primeproperty.schemas.payment import PaymentResponse
from primeproperty.schemas.report import ReportCreateRequest, ReportResponse
from primeproperty.services.property_service import (
    search_properties,
    get_property_by_id,
    get_properties_by_seller,
    create_property,
    update_property,
    delete_property,
    promote_property,
)
from primeproperty.services.report_service import create_report
from primeproperty.utils.dependencies import get_current_user
from primeproperty.utils.exceptions import ForbiddenError, NotFoundError

router = APIRouter(prefix="/api/properties", tags=["Properties"])


def _dump_listing_request(request) -> dict:
    data = request.dict(exclude_unset=True)
    # Keep every details default, not only the keys the client sent
    if request.details is not None:
        data["details"] = request.details.dict()
    return data


@router.get("", response_model=List[PropertyResponse])
async def list_public_properties(
    location: Optional[str] = None,
    property_type: Optional[PropertyType] = Query(None, alias="type"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    sort: Optional[SortOrder] = None,
    featured: bool = False,
):
    """
    Public search over approved listings
    Filters: location substring, exact type, price range, featured only
    """
    try:
        props = await search_properties(
            location=location,
            property_type=property_type,
            min_price=min_price,
            max_price=max_price,
            sort=sort,
            featured_only=featured,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return [PropertyResponse(**prop) for prop in props]


@router.get("/mine", response_model=List[PropertyResponse])
async def get_my_properties(current_user: dict = Depends(get_current_user)):
    """Own listings in every moderation state"""
    props = await get_properties_by_seller(current_user["id"])
    return [PropertyResponse(**prop) for prop in props]


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: int):
    """Single listing with seller name and email"""
    prop = await get_property_by_id(property_id)

    if not prop:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found"
        )

    return PropertyResponse(**prop)


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property_endpoint(
    request: PropertyCreateRequest,
    current_user: dict = Depends(get_current_user)
):
    """Create a listing owned by the caller; it waits for approval unless the caller is an admin"""
    try:
        prop = await create_property(current_user, _dump_listing_request(request))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return PropertyResponse(**prop)


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property_endpoint(
    property_id: int,
    request: PropertyUpdateRequest,
    current_user: dict = Depends(get_current_user)
):
    """Edit a listing (owner or admin)"""
    try:
        prop = await update_property(
            property_id=property_id,
            actor=current_user,
            update_data=_dump_listing_request(request),
            reapprove_on_edit=settings.REAPPROVE_ON_EDIT,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return PropertyResponse(**prop)


@router.delete("/{property_id}", response_model=SuccessResponse)
async def delete_property_endpoint(
    property_id: int,
    current_user: dict = Depends(get_current_user)
):
    """Delete a listing (owner or admin)"""
    try:
        await delete_property(property_id, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    return SuccessResponse()


@router.post("/{property_id}/promote", response_model=PromoteResponse)
async def promote_property_endpoint(
    property_id: int,
    current_user: dict = Depends(get_current_user)
):
    """Simulated paid promotion: records a completed payment and features the listing"""
    try:
        prop, payment = await promote_property(property_id, current_user, settings.PROMOTION_AMOUNT)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    return PromoteResponse(property=PropertyResponse(**prop), payment=PaymentResponse(**payment))


@router.post("/{property_id}/report", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def report_property(
    property_id: int,
    request: ReportCreateRequest,
    current_user: dict = Depends(get_current_user)
):
    """Flag a listing for admin review"""
    try:
        report = await create_report(property_id, current_user["id"], request.reason)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return ReportResponse(**report)
