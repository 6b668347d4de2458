from fastapi import APIRouter, HTTPException, Depends, status
from typing import List
from primeproperty.schemas.common import SuccessResponse
from primeproperty.schemas.property import PropertyResponse
from primeproperty.services.favorite_service import get_favorites, add_favorite, remove_favorite
from primeproperty.utils.dependencies import get_current_user
from primeproperty.utils.exceptions import ConflictError, NotFoundError

router = APIRouter(prefix="/api/favorites", tags=["Favorites"])


@router.get("", response_model=List[PropertyResponse])
async def list_favorites(current_user: dict = Depends(get_current_user)):
    """Listings the current user has favorited"""
    props = await get_favorites(current_user["id"])
    return [PropertyResponse(**prop) for prop in props]


@router.post("/{property_id}", response_model=SuccessResponse)
async def favorite_property(property_id: int, current_user: dict = Depends(get_current_user)):
    try:
        await add_favorite(current_user["id"], property_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return SuccessResponse()


@router.delete("/{property_id}", response_model=SuccessResponse)
async def unfavorite_property(property_id: int, current_user: dict = Depends(get_current_user)):
    await remove_favorite(current_user["id"], property_id)
    return SuccessResponse()
