from fastapi import APIRouter, Depends

from app.core.exceptions import ValidationAppError
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.chat import ChatMessage, ChatRequest
from app.services import chat_assistant

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.get("/welcome", response_model=ChatMessage)
def welcome(current_user: User = Depends(get_current_user)):
    return ChatMessage(role="assistant", content=chat_assistant.WELCOME_MESSAGE)


@router.post("", response_model=ChatMessage)
def chat(request: ChatRequest, current_user: User = Depends(get_current_user)):
    """Answer with locally computed resume tips. No external AI call, nothing stored."""
    text = request.message.strip()
    if not text:
        raise ValidationAppError("Message cannot be empty")
    return ChatMessage(role="assistant", content=chat_assistant.reply_to(text))
