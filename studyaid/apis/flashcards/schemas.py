from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class GenerateResponse(BaseModel):
    success: bool = True
    id: int
    message: str


class ManualCard(BaseModel):
    question: str
    answer: str


class ManualCreateRequest(BaseModel):
    title: str
    subject: str
    cards: list[ManualCard]


class Progress(BaseModel):
    known: int
    total: int


class FlashcardSetSummary(BaseModel):
    id: int
    title: str
    subject: str
    card_count: int
    known: int
    progress: Progress
    mastery_level: int = 0
    status: str
    created_at: Optional[datetime] = None
    last_studied: Optional[datetime] = None


class FlashcardSetsResponse(BaseModel):
    success: bool = True
    sets: list[FlashcardSetSummary] = Field(default_factory=list)


class FlashcardRead(BaseModel):
    id: int
    question: str
    answer: str
    mastery_level: int
    order_index: int


class FlashcardSetRead(BaseModel):
    id: int
    title: str
    subject: str
    mastery_level: int
    created_at: Optional[datetime] = None
    last_studied: Optional[datetime] = None
    cards: list[FlashcardRead] = Field(default_factory=list)


class FlashcardSetResponse(BaseModel):
    success: bool = True
    set: FlashcardSetRead


class StudyRequest(BaseModel):
    card_id: int
    known: bool


class StudyResponse(BaseModel):
    success: bool = True
    message: str
    mastery_level: int
    set_mastery_level: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
