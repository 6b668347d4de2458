from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.sql import func
from primeproperty.database.connection import Base


class Favorite(Base):
    __tablename__ = "favorites"

    user_id = Column(Integer, primary_key=True)
    property_id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
