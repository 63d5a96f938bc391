# tracking models: mood entries, thought records, exposure (ERP) sessions
# scale bounds here are the only validation numeric fields get

from typing import Optional
from pydantic import BaseModel, Field


class MoodEntryCreate(BaseModel):
    """payload for a mood/anxiety check-in"""
    mood: int = Field(..., ge=1, le=10, description="mood score 1-10")
    anxiety: int = Field(..., ge=1, le=10, description="anxiety score 1-10")
    notes: str = Field("", max_length=5000)
    triggers: list[str] = Field(default_factory=list, description="trigger labels")


class MoodEntryResponse(BaseModel):
    id: str
    user_id: str = Field(..., alias="userId")
    mood: int
    anxiety: int
    notes: str = ""
    triggers: list[str] = Field(default_factory=list)
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}


class ThoughtRecordCreate(BaseModel):
    """payload for a CBT thought record"""
    situation: str = Field(..., min_length=1)
    automatic_thought: str = Field(..., min_length=1, alias="automaticThought")
    emotion: str = ""
    emotion_intensity: Optional[int] = Field(None, ge=1, le=10, alias="emotionIntensity")
    evidence_for: str = Field("", alias="evidenceFor")
    evidence_against: str = Field("", alias="evidenceAgainst")
    balanced_thought: str = Field("", alias="balancedThought")
    new_emotion: str = Field("", alias="newEmotion")

    model_config = {"populate_by_name": True}


class ThoughtRecordResponse(BaseModel):
    id: str
    user_id: str = Field(..., alias="userId")
    situation: str
    automatic_thought: str = Field(..., alias="automaticThought")
    emotion: str = ""
    emotion_intensity: Optional[int] = Field(None, alias="emotionIntensity")
    evidence_for: str = Field("", alias="evidenceFor")
    evidence_against: str = Field("", alias="evidenceAgainst")
    balanced_thought: str = Field("", alias="balancedThought")
    new_emotion: str = Field("", alias="newEmotion")
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}


class ErpSessionCreate(BaseModel):
    """payload for an exposure and response prevention session"""
    exposure: str = Field(..., min_length=1)
    anxiety_before: int = Field(5, ge=1, le=10, alias="anxietyBefore")
    anxiety_after: int = Field(5, ge=1, le=10, alias="anxietyAfter")
    duration: int = Field(15, ge=1, le=120, description="minutes")
    completed: bool = False
    notes: str = ""

    model_config = {"populate_by_name": True}


class ErpSessionResponse(BaseModel):
    id: str
    user_id: str = Field(..., alias="userId")
    exposure: str
    anxiety_before: int = Field(..., alias="anxietyBefore")
    anxiety_after: int = Field(..., alias="anxietyAfter")
    duration: int
    completed: bool = False
    notes: str = ""
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}
