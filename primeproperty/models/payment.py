from sqlalchemy import Column, Integer, String, Numeric, DateTime
from sqlalchemy.sql import func
from primeproperty.database.connection import Base


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    property_id = Column(Integer, nullable=True, index=True)  # None for subscriptions
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    payment_type = Column(String, nullable=False)  # promotion | subscription
    status = Column(String, nullable=False, default="completed")  # pending | completed | failed
    created_at = Column(DateTime(timezone=True), server_default=func.now())
