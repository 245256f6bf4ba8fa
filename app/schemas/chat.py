from pydantic import BaseModel
from typing import Literal

class ChatRequest(BaseModel):
    message: str

class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
