from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from primeproperty.database.connection import Base


class Announcement(Base):
    __tablename__ = "announcements"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    author_id = Column(Integer, nullable=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
