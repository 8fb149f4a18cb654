from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from studyaid.apis.deps import (
    CurrentUser,
    Orchestrator,
    bad_request,
    generation_http_error,
    get_flashcard_service,
    read_pdf_text,
)
from studyaid.core.config import settings
from studyaid.core.db.schemas.flashcards import FlashcardSet as DBSet
from studyaid.core.db_services import FlashcardSetService
from studyaid.modules.flashcards import (
    count_known,
    generate_flashcards,
    set_status,
)
from studyaid.modules.generation import OrchestratorError, ValidatedFlashcard
from .schemas import (
    FlashcardRead,
    FlashcardSetRead,
    FlashcardSetResponse,
    FlashcardSetSummary,
    FlashcardSetsResponse,
    GenerateResponse,
    ManualCreateRequest,
    MessageResponse,
    Progress,
    StudyRequest,
    StudyResponse,
)


router = APIRouter()

Service = Annotated[FlashcardSetService, Depends(get_flashcard_service)]

PREFIX = f"/{settings.app.version}/flashcards"


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail={"error": "Flashcard set not found"})


def _summary(s: DBSet) -> FlashcardSetSummary:
    masteries = [c.mastery_level for c in s.flashcards or []]
    known = count_known(masteries)
    total = len(masteries)
    return FlashcardSetSummary(
        id=s.id,
        title=s.title,
        subject=s.subject,
        card_count=total,
        known=known,
        progress=Progress(known=known, total=total),
        mastery_level=s.mastery_level or 0,
        status=set_status(known, total, s.last_studied),
        created_at=s.created_at,
        last_studied=s.last_studied,
    )


@router.post(
    f"{PREFIX}/generate-flashcards",
    response_model=GenerateResponse,
    tags=["flashcards"],
)
async def generate_from_pdf(
    user: CurrentUser,
    orchestrator: Orchestrator,
    service: Service,
    title: Annotated[str, Form()],
    subject: Annotated[str, Form()],
    pdf_file: Annotated[Optional[UploadFile], File()] = None,
) -> GenerateResponse:
    text = await read_pdf_text(pdf_file)
    try:
        cards = await generate_flashcards(
            orchestrator,
            text,
            subject,
            max_chars=settings.gemini.max_prompt_chars,
        )
    except OrchestratorError as e:
        raise generation_http_error(e, what="flashcard") from e

    saved = await service.save_flashcard_set(
        user_id=user.id, title=title, subject=subject, cards=cards
    )
    return GenerateResponse(id=saved.id, message="Flashcards generated successfully")


@router.post(
    f"{PREFIX}/create-flashcards-manual",
    response_model=GenerateResponse,
    tags=["flashcards"],
)
async def create_manual(
    req: ManualCreateRequest,
    user: CurrentUser,
    service: Service,
) -> GenerateResponse:
    if not req.title.strip() or not req.subject.strip():
        raise bad_request("Title, subject, and cards array are required")
    if not req.cards:
        raise bad_request("At least one flashcard is required")
    if any(not c.question.strip() or not c.answer.strip() for c in req.cards):
        raise bad_request("All cards must have both question and answer")

    cards = [
        ValidatedFlashcard(question=c.question.strip(), answer=c.answer.strip())
        for c in req.cards
    ]
    saved = await service.save_flashcard_set(
        user_id=user.id, title=req.title, subject=req.subject, cards=cards
    )
    return GenerateResponse(id=saved.id, message="Flashcards created successfully")


@router.get(
    f"{PREFIX}/sets",
    response_model=FlashcardSetsResponse,
    tags=["flashcards"],
)
async def list_sets(user: CurrentUser, service: Service) -> FlashcardSetsResponse:
    sets = await service.list_sets(user.id)
    return FlashcardSetsResponse(sets=[_summary(s) for s in sets])


@router.get(
    f"{PREFIX}/sets/{{set_id:int}}",
    response_model=FlashcardSetResponse,
    tags=["flashcards"],
)
async def get_set(set_id: int, user: CurrentUser, service: Service) -> FlashcardSetResponse:
    s = await service.get_set(set_id, user_id=user.id)
    if not s:
        raise _not_found()
    return FlashcardSetResponse(
        set=FlashcardSetRead(
            id=s.id,
            title=s.title,
            subject=s.subject,
            mastery_level=s.mastery_level or 0,
            created_at=s.created_at,
            last_studied=s.last_studied,
            cards=[
                FlashcardRead(
                    id=c.id,
                    question=c.question,
                    answer=c.answer,
                    mastery_level=c.mastery_level,
                    order_index=c.order_index,
                )
                for c in (s.flashcards or [])
            ],
        )
    )


@router.delete(
    f"{PREFIX}/sets/{{set_id:int}}",
    response_model=MessageResponse,
    tags=["flashcards"],
)
async def delete_set(set_id: int, user: CurrentUser, service: Service) -> MessageResponse:
    if not await service.delete_set(set_id, user_id=user.id):
        raise _not_found()
    return MessageResponse(message="Flashcard set deleted successfully")


@router.post(
    f"{PREFIX}/sets/{{set_id:int}}/study",
    response_model=StudyResponse,
    status_code=status.HTTP_200_OK,
    tags=["flashcards"],
)
async def study(
    set_id: int,
    req: StudyRequest,
    user: CurrentUser,
    service: Service,
) -> StudyResponse:
    try:
        updated = await service.record_study(
            set_id, user_id=user.id, card_id=req.card_id, known=req.known
        )
    except LookupError:
        raise HTTPException(status_code=404, detail={"error": "Card not found in this set"})
    if updated is None:
        raise _not_found()
    card, db_set = updated
    return StudyResponse(
        message="Study progress updated",
        mastery_level=card.mastery_level,
        set_mastery_level=db_set.mastery_level,
    )
