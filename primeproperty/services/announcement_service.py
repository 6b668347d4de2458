from typing import List
import logging
from sqlalchemy import select, desc
from primeproperty.database.connection import AsyncSessionLocal
from primeproperty.models.announcement import Announcement

logger = logging.getLogger(__name__)


def announcement_to_dict(announcement: Announcement) -> dict:
    return {
        "id": announcement.id,
        "author_id": announcement.author_id,
        "title": announcement.title,
        "content": announcement.content,
        "created_at": announcement.created_at.isoformat() if announcement.created_at else "",
    }


async def create_announcement(author_id: int, title: str, content: str) -> dict:
    async with AsyncSessionLocal() as session:
        announcement = Announcement(author_id=author_id, title=title, content=content)
        session.add(announcement)
        await session.commit()
        await session.refresh(announcement)

        logger.info(f"Announcement {announcement.id} posted by admin {author_id}")
        return announcement_to_dict(announcement)


async def get_announcements() -> List[dict]:
    async with AsyncSessionLocal() as session:
        stmt = select(Announcement).order_by(desc(Announcement.created_at), desc(Announcement.id))
        result = await session.execute(stmt)
        return [announcement_to_dict(a) for a in result.scalars().all()]
