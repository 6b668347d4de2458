from fastapi import APIRouter
from typing import List
from primeproperty.schemas.announcement import AnnouncementResponse
from primeproperty.services.announcement_service import get_announcements

router = APIRouter(prefix="/api/announcements", tags=["Announcements"])


@router.get("", response_model=List[AnnouncementResponse])
async def list_announcements():
    """Public announcements, newest first"""
    announcements = await get_announcements()
    return [AnnouncementResponse(**a) for a in announcements]
