import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.accounts import candidate_profile_for, hr_profile_for
from ..services.chat import (
    conversation_payload,
    conversations_for,
    get_conversation,
    message_payload,
    messages_for,
    send_message,
)
from ..utils.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["Chat"])


class SendMessageRequest(BaseModel):
    message: str = Field(max_length=5000)


def _profile_id(db: Session, user: dict) -> int:
    user_id = int(user.get("sub"))
    if user.get("role") == "hr":
        return int(hr_profile_for(db, user_id).id)
    return int(candidate_profile_for(db, user_id).id)


@router.get("/conversations")
def list_conversations(db: Session = Depends(get_db), user=Depends(get_current_user)):
    conversations = conversations_for(db, role=user.get("role"), profile_id=_profile_id(db, user))
    return {"success": True, "conversations": [conversation_payload(c) for c in conversations]}


@router.get("/conversations/{conversation_id:int}/messages")
def list_messages(conversation_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    conversation = get_conversation(
        db, conversation_id=conversation_id, role=user.get("role"), profile_id=_profile_id(db, user)
    )
    return {
        "success": True,
        "conversation": conversation_payload(conversation),
        "messages": [message_payload(m) for m in messages_for(db, conversation)],
    }


@router.post("/conversations/{conversation_id:int}/messages", status_code=202)
def post_message(
    conversation_id: int,
    payload: SendMessageRequest,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    conversation = get_conversation(
        db, conversation_id=conversation_id, role=user.get("role"), profile_id=_profile_id(db, user)
    )
    result = send_message(conversation, sender_id=int(user.get("sub")), text=payload.message)
    return {"success": True, **result}
