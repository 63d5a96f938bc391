# preference and notification models

from typing import Literal, Optional
from pydantic import BaseModel, Field


class PreferencesUpdate(BaseModel):
    ocd_themes: list[str] = Field(default_factory=list, alias="ocdThemes")
    difficulty_level: int = Field(1, ge=1, le=10, alias="difficultyLevel")
    anonymous_mode: bool = Field(False, alias="anonymousMode")
    reminder_frequency: str = Field("daily", alias="reminderFrequency")

    model_config = {"populate_by_name": True}


class PreferencesResponse(BaseModel):
    ocd_themes: list[str] = Field(default_factory=list, alias="ocdThemes")
    difficulty_level: int = Field(1, alias="difficultyLevel")
    anonymous_mode: bool = Field(False, alias="anonymousMode")
    reminder_frequency: str = Field("daily", alias="reminderFrequency")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True}


class NotificationCreate(BaseModel):
    type: Literal["reminder", "encouragement", "milestone", "tip"]
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=1000)
    action_url: Optional[str] = Field(None, alias="actionUrl")

    model_config = {"populate_by_name": True}


class NotificationResponse(BaseModel):
    id: str
    type: str
    title: str
    message: str
    action_url: Optional[str] = Field(None, alias="actionUrl")
    timestamp: str
    read: bool

    model_config = {"populate_by_name": True}


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int = Field(..., alias="unreadCount")

    model_config = {"populate_by_name": True}
