# activity log models: meditation, sleep, crisis tools, education progress

from typing import Optional
from pydantic import BaseModel, Field


class MeditationSessionCreate(BaseModel):
    session_type: str = Field(..., min_length=1, alias="sessionType")
    duration: int = Field(..., ge=0, description="minutes")
    completed: bool = True
    rating: Optional[int] = Field(None, ge=0, le=5)
    notes: str = ""

    model_config = {"populate_by_name": True}


class MeditationSessionResponse(BaseModel):
    id: str
    session_type: str = Field(..., alias="sessionType")
    duration: int
    completed: bool
    rating: Optional[int] = None
    notes: str = ""
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}


class SleepSessionCreate(BaseModel):
    session_type: str = Field(..., min_length=1, alias="sessionType")
    duration: Optional[int] = Field(None, ge=0)
    completed: bool = True
    sleep_quality: Optional[int] = Field(None, ge=0, le=5, alias="sleepQuality")

    model_config = {"populate_by_name": True}


class SleepSessionResponse(BaseModel):
    id: str
    session_type: str = Field(..., alias="sessionType")
    duration: Optional[int] = None
    completed: bool
    sleep_quality: Optional[int] = Field(None, alias="sleepQuality")
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}


class CrisisLogCreate(BaseModel):
    tool_used: str = Field(..., min_length=1, alias="toolUsed")
    duration: Optional[int] = Field(None, ge=0, description="seconds")
    effectiveness_rating: Optional[int] = Field(None, ge=1, le=10, alias="effectivenessRating")
    notes: str = ""

    model_config = {"populate_by_name": True}


class CrisisLogResponse(BaseModel):
    id: str
    tool_used: str = Field(..., alias="toolUsed")
    duration: Optional[int] = None
    effectiveness_rating: Optional[int] = Field(None, alias="effectivenessRating")
    notes: str = ""
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}


class EducationProgressCreate(BaseModel):
    content_id: str = Field(..., min_length=1, alias="contentId")
    content_type: str = Field("educational", alias="contentType")
    progress_percentage: int = Field(0, ge=0, le=100, alias="progressPercentage")
    completed: bool = False

    model_config = {"populate_by_name": True}


class EducationProgressResponse(BaseModel):
    id: str
    content_id: str = Field(..., alias="contentId")
    content_type: str = Field(..., alias="contentType")
    progress_percentage: int = Field(..., alias="progressPercentage")
    completed: bool
    created_at: str = Field(..., alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True}
