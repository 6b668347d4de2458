from sqlalchemy import Column, String, Integer, Numeric, Boolean, DateTime, JSON, Text, Index
from sqlalchemy.sql import func
from primeproperty.database.connection import Base


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Plain indexed column: deleting a seller leaves the listing in place
    seller_id = Column(Integer, nullable=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    location = Column(String, nullable=False)
    property_type = Column("type", String, nullable=False, index=True)
    status = Column(String, nullable=False, default="for sale")
    images = Column(JSON, nullable=False, default=list)  # ordered list of URLs
    details = Column(JSON, nullable=True)  # type specific attributes, tagged by "kind"
    contact_phone = Column(String, nullable=True)
    contact_email = Column(String, nullable=True)
    is_approved = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_property_public', 'is_approved', 'type'),
        Index('idx_property_featured', 'is_approved', 'is_featured'),
        # Ids of deleted listings are never reissued; dangling references stay dangling
        {"sqlite_autoincrement": True},
    )
