import logging

from sqlalchemy.orm import Session

from ..models.chat import ChatConversation, ChatMessage
from ..utils.error_handlers import ForbiddenError, NotFoundError, ValidationError, get_error_message

logger = logging.getLogger(__name__)


def conversations_for(db: Session, *, role: str, profile_id: int) -> list[ChatConversation]:
    q = db.query(ChatConversation)
    if role == "hr":
        q = q.filter(ChatConversation.hr_id == int(profile_id))
    else:
        q = q.filter(ChatConversation.candidate_id == int(profile_id))
    return q.order_by(ChatConversation.updated_at.desc(), ChatConversation.id.desc()).all()


def get_conversation(db: Session, *, conversation_id: int, role: str, profile_id: int) -> ChatConversation:
    conversation = db.query(ChatConversation).filter(ChatConversation.id == int(conversation_id)).first()
    if not conversation:
        raise NotFoundError(get_error_message("conversation_not_found"))
    owner = conversation.hr_id if role == "hr" else conversation.candidate_id
    if int(owner) != int(profile_id):
        raise ForbiddenError(get_error_message("forbidden"))
    return conversation


def messages_for(db: Session, conversation: ChatConversation) -> list[ChatMessage]:
    return (
        db.query(ChatMessage)
        .filter(ChatMessage.conversation_id == conversation.id)
        .order_by(ChatMessage.timestamp.asc(), ChatMessage.id.asc())
        .all()
    )


def send_message(conversation: ChatConversation, *, sender_id: int, text: str) -> dict:
    """
    Acknowledge an outgoing message without storing it.

    Message delivery isn't wired up; the composer is simply cleared.
    """
    body = (text or "").strip()
    if not body:
        raise ValidationError(get_error_message("empty_message"))
    logger.info("Chat send on conversation %s by user %s not delivered (%d chars)", conversation.id, sender_id, len(body))
    return {"conversation_id": int(conversation.id), "delivered": False, "persisted": False}


def conversation_payload(conversation: ChatConversation) -> dict:
    return {
        "id": int(conversation.id),
        "hr_id": int(conversation.hr_id),
        "candidate_id": int(conversation.candidate_id),
        "job_id": int(conversation.job_id),
        "application_id": int(conversation.application_id) if conversation.application_id else None,
        "last_message": conversation.last_message,
        "updated_at": conversation.updated_at.isoformat() if conversation.updated_at else None,
    }


def message_payload(message: ChatMessage) -> dict:
    return {
        "id": int(message.id),
        "conversation_id": int(message.conversation_id),
        "sender_id": int(message.sender_id),
        "sender_role": message.sender_role,
        "message": message.message,
        "timestamp": message.timestamp.isoformat() if message.timestamp else None,
        "read": bool(message.read),
    }
