from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class UpcomingQuiz(BaseModel):
    subject: str
    date: str
    time: str


class RecentResult(BaseModel):
    subject: Optional[str] = None
    score: int
    date: str


class DashboardResponse(BaseModel):
    quizzes_taken: int
    average_score: int
    hours_practiced: float
    upcoming_quizzes: list[UpcomingQuiz] = Field(default_factory=list)
    recent_results: list[RecentResult] = Field(default_factory=list)
