# Database models
from primeproperty.models.user import User
from primeproperty.models.property import Property
from primeproperty.models.favorite import Favorite
from primeproperty.models.message import Message
from primeproperty.models.payment import Payment
from primeproperty.models.report import Report
from primeproperty.models.announcement import Announcement

__all__ = [
    "User",
    "Property",
    "Favorite",
    "Message",
    "Payment",
    "Report",
    "Announcement",
]
