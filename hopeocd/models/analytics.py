# progress models: stats and achievements from the progress view

from typing import Optional
from pydantic import BaseModel, Field


class Achievement(BaseModel):
    title: str
    description: str
    earned: bool


class WeeklyMood(BaseModel):
    date: Optional[str] = None
    mood: Optional[int] = None


class ProgressResponse(BaseModel):
    total_days: int = Field(..., alias="totalDays")
    average_mood: float = Field(..., alias="averageMood")
    average_anxiety: float = Field(..., alias="averageAnxiety")
    thought_records: int = Field(..., alias="thoughtRecords")
    erp_sessions: int = Field(..., alias="erpSessions")
    completed_erp: int = Field(..., alias="completedErp")
    erp_completion_rate: int = Field(..., alias="erpCompletionRate")
    mood_trend: str = Field(..., alias="moodTrend")
    achievements: list[Achievement]
    earned_count: int = Field(..., alias="earnedCount")
    weekly_mood: list[WeeklyMood] = Field(default_factory=list, alias="weeklyMood")

    model_config = {"populate_by_name": True}
