from fastapi import APIRouter, HTTPException, Depends, status
from typing import List
from primeproperty.schemas.message import MessageCreateRequest, MessageReplyRequest, MessageResponse
from primeproperty.services.message_service import send_message, reply_to_message, get_messages_for_user
from primeproperty.utils.dependencies import get_current_user
from primeproperty.utils.exceptions import ForbiddenError, NotFoundError

router = APIRouter(prefix="/api/messages", tags=["Messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    request: MessageCreateRequest,
    current_user: dict = Depends(get_current_user)
):
    """Send a message to another user about a listing"""
    message = await send_message(
        sender_id=current_user["id"],
        receiver_id=request.receiver_id,
        property_id=request.property_id,
        content=request.content,
    )
    return MessageResponse(**message)


@router.get("", response_model=List[MessageResponse])
async def list_messages(current_user: dict = Depends(get_current_user)):
    """Inbox and sent messages, newest first"""
    messages = await get_messages_for_user(current_user["id"])
    return [MessageResponse(**message) for message in messages]


@router.post("/{message_id}/reply", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def reply_message(
    message_id: int,
    request: MessageReplyRequest,
    current_user: dict = Depends(get_current_user)
):
    """Reply to the other party of a message"""
    try:
        message = await reply_to_message(message_id, current_user["id"], request.content)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    return MessageResponse(**message)
