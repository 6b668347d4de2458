"""
Message Service - direct messages between users about a listing

Messages are immutable. A reply is a new row addressed to the other
party of the message being answered.
"""
from typing import List, Optional
import logging
from sqlalchemy import select, or_, desc
from sqlalchemy.orm import aliased
from primeproperty.database.connection import AsyncSessionLocal
from primeproperty.models.message import Message
from primeproperty.models.property import Property
from primeproperty.models.user import User
from primeproperty.utils.exceptions import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


def message_to_dict(
    message: Message,
    sender_name: Optional[str] = None,
    receiver_name: Optional[str] = None,
    property_title: Optional[str] = None,
) -> dict:
    return {
        "id": message.id,
        "sender_id": message.sender_id,
        "receiver_id": message.receiver_id,
        "property_id": message.property_id,
        "content": message.content,
        "sender_name": sender_name,
        "receiver_name": receiver_name,
        "property_title": property_title,
        "created_at": message.created_at.isoformat() if message.created_at else "",
    }


def reply_receiver_id(original: Message, actor_id: int) -> int:
    """The counterpart of the actor in the original message"""
    if actor_id == original.sender_id:
        return original.receiver_id
    if actor_id == original.receiver_id:
        return original.sender_id
    raise ForbiddenError("Not a participant in this conversation")


async def send_message(sender_id: int, receiver_id: int, property_id: Optional[int], content: str) -> dict:
    async with AsyncSessionLocal() as session:
        message = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            property_id=property_id,
            content=content,
        )
        session.add(message)
        await session.commit()
        await session.refresh(message)

        logger.info(f"Message {message.id} sent from user {sender_id} to user {receiver_id}")
        return message_to_dict(message)


async def reply_to_message(message_id: int, actor_id: int, content: str) -> dict:
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Message).where(Message.id == message_id))
        original = result.scalar_one_or_none()
        if not original:
            raise NotFoundError("Message not found")

        reply = Message(
            sender_id=actor_id,
            receiver_id=reply_receiver_id(original, actor_id),
            property_id=original.property_id,
            content=content,
        )
        session.add(reply)
        await session.commit()
        await session.refresh(reply)

        logger.info(f"Message {reply.id} replies to {message_id}")
        return message_to_dict(reply)


async def get_messages_for_user(user_id: int) -> List[dict]:
    """Sent and received messages, newest first"""
    async with AsyncSessionLocal() as session:
        sender = aliased(User)
        receiver = aliased(User)
        stmt = (
            select(Message, sender.name, receiver.name, Property.title)
            .outerjoin(sender, sender.id == Message.sender_id)
            .outerjoin(receiver, receiver.id == Message.receiver_id)
            .outerjoin(Property, Property.id == Message.property_id)
            .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(desc(Message.created_at), desc(Message.id))
        )
        result = await session.execute(stmt)
        return [
            message_to_dict(message, sender_name=sender_name, receiver_name=receiver_name, property_title=title)
            for message, sender_name, receiver_name, title in result.all()
        ]
