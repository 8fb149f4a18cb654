from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class GenerateQuizResponse(BaseModel):
    success: bool = True
    id: int
    message: str


class QuizSetItem(BaseModel):
    id: int
    title: str
    subject: str
    difficulty: str
    time_limit: int
    num_questions: int
    score: Optional[int] = None
    max_score: int = 100
    created_at: Optional[datetime] = None
    status: str


class QuizSetsResponse(BaseModel):
    success: bool = True
    quizzes: list[QuizSetItem] = Field(default_factory=list)


class QuizQuestionRead(BaseModel):
    question: str
    options: list[str]
    correct_answer: int


class QuizRead(BaseModel):
    id: int
    title: str
    subject: str
    difficulty: str
    time_limit: int
    num_questions: int
    status: str
    created_at: Optional[datetime] = None
    questions: list[QuizQuestionRead] = Field(default_factory=list)


class QuizResponse(BaseModel):
    success: bool = True
    quiz: QuizRead


class QuizResultCreate(BaseModel):
    quiz_id: int
    score: int = Field(ge=0)
    answers: list[int] = Field(default_factory=list)
    time_spent: float = Field(default=0, ge=0)


class QuizResultRead(BaseModel):
    id: int
    quiz_id: int
    score: int
    answers: list[int]
    time_spent: float
    created_at: Optional[datetime] = None


class QuizResultResponse(BaseModel):
    success: bool = True
    result: QuizResultRead


class MessageResponse(BaseModel):
    success: bool = True
    message: str
