# chat models: transcript messages and sessions

from typing import Literal, Optional
from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    id: str
    role: Literal["user", "ai"]
    content: str
    timestamp: str
    category: Optional[str] = None
    severity: Optional[str] = None
    emotion: Optional[str] = None


class ChatSessionCreate(BaseModel):
    session_type: Literal["chat", "guided", "crisis"] = Field("chat", alias="sessionType")

    model_config = {"populate_by_name": True}


class ChatSessionResponse(BaseModel):
    id: str
    session_type: str = Field(..., alias="sessionType")
    messages: list[ChatMessage] = Field(default_factory=list)
    session_summary: str = Field("", alias="sessionSummary")
    mood_before: Optional[int] = Field(None, alias="moodBefore")
    mood_after: Optional[int] = Field(None, alias="moodAfter")
    duration: int = 0
    created_at: str = Field(..., alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True}


class ChatMessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    category: Optional[str] = None


class ConversationStarter(BaseModel):
    text: str
    category: str
    emotion: str
