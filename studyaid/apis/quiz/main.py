from __future__ import annotations

from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from studyaid.apis.deps import (
    CurrentUser,
    Orchestrator,
    generation_http_error,
    get_quiz_service,
    read_pdf_text,
)
from studyaid.core.config import settings
from studyaid.core.db_services import QuizService
from studyaid.modules.generation import OrchestratorError
from studyaid.modules.quiz import generate_quiz_questions
from .schemas import (
    GenerateQuizResponse,
    MessageResponse,
    QuizQuestionRead,
    QuizRead,
    QuizResponse,
    QuizResultCreate,
    QuizResultRead,
    QuizResultResponse,
    QuizSetItem,
    QuizSetsResponse,
)


router = APIRouter()

Service = Annotated[QuizService, Depends(get_quiz_service)]

PREFIX = f"/{settings.app.version}/quizzes"


def _quiz_not_found() -> HTTPException:
    return HTTPException(status_code=404, detail={"error": "Quiz not found"})


@router.post(
    f"{PREFIX}/generate-quiz",
    response_model=GenerateQuizResponse,
    tags=["quizzes"],
)
async def generate_quiz(
    user: CurrentUser,
    orchestrator: Orchestrator,
    service: Service,
    title: Annotated[str, Form()],
    subject: Annotated[str, Form()],
    num_questions: Annotated[int, Form(ge=1, le=50)] = 10,
    difficulty: Annotated[Literal["easy", "medium", "hard"], Form()] = "medium",
    time_limit: Annotated[int, Form(ge=1)] = 10,
    pdf_file: Annotated[Optional[UploadFile], File()] = None,
) -> GenerateQuizResponse:
    text = await read_pdf_text(pdf_file)
    try:
        questions = await generate_quiz_questions(
            orchestrator,
            text,
            subject,
            num_questions=num_questions,
            difficulty=difficulty,
            max_chars=settings.gemini.max_prompt_chars,
        )
    except OrchestratorError as e:
        raise generation_http_error(e, what="quiz") from e

    quiz = await service.save_quiz(
        user_id=user.id,
        title=title,
        subject=subject,
        difficulty=difficulty,
        time_limit=time_limit,
        num_questions=num_questions,
        questions=questions,
    )
    return GenerateQuizResponse(id=quiz.id, message="Quiz generated successfully")


@router.get(
    f"{PREFIX}/sets",
    response_model=QuizSetsResponse,
    tags=["quizzes"],
)
async def list_quizzes(user: CurrentUser, service: Service) -> QuizSetsResponse:
    quizzes = await service.list_quizzes(user.id)
    scores = await service.latest_scores(user.id)
    return QuizSetsResponse(
        quizzes=[
            QuizSetItem(
                id=q.id,
                title=q.title,
                subject=q.subject,
                difficulty=q.difficulty,
                time_limit=q.time_limit,
                num_questions=q.num_questions,
                score=scores.get(q.id),
                created_at=q.created_at,
                status="completed" if q.id in scores else "pending",
            )
            for q in quizzes
        ]
    )


@router.post(
    f"{PREFIX}/quiz-results",
    response_model=MessageResponse,
    tags=["quizzes"],
)
async def save_result(
    req: QuizResultCreate, user: CurrentUser, service: Service
) -> MessageResponse:
    quiz = await service.get_quiz(req.quiz_id, user_id=user.id)
    if not quiz:
        raise _quiz_not_found()
    await service.save_result(
        user_id=user.id,
        quiz_id=req.quiz_id,
        score=req.score,
        answers=req.answers,
        time_spent=req.time_spent,
    )
    return MessageResponse(message="Quiz result saved successfully")


@router.get(
    f"{PREFIX}/quiz-results/{{quiz_id:int}}",
    response_model=QuizResultResponse,
    tags=["quizzes"],
)
async def get_result(quiz_id: int, user: CurrentUser, service: Service) -> QuizResultResponse:
    result = await service.get_result(quiz_id, user_id=user.id)
    if not result:
        raise HTTPException(status_code=404, detail={"error": "Result not found"})
    return QuizResultResponse(
        result=QuizResultRead(
            id=result.id,
            quiz_id=result.quiz_id,
            score=result.score,
            answers=list(result.answers or []),
            time_spent=result.time_spent,
            created_at=result.created_at,
        )
    )


@router.delete(
    f"{PREFIX}/sets/{{quiz_id:int}}",
    response_model=MessageResponse,
    tags=["quizzes"],
)
async def delete_quiz(quiz_id: int, user: CurrentUser, service: Service) -> MessageResponse:
    if not await service.delete_quiz(quiz_id, user_id=user.id):
        raise _quiz_not_found()
    return MessageResponse(message="Quiz deleted successfully")


# Registered last so the literal paths above take precedence.
@router.get(
    f"{PREFIX}/{{quiz_id:int}}",
    response_model=QuizResponse,
    tags=["quizzes"],
)
async def get_quiz(quiz_id: int, user: CurrentUser, service: Service) -> QuizResponse:
    q = await service.get_quiz(quiz_id, user_id=user.id)
    if not q:
        raise _quiz_not_found()
    return QuizResponse(
        quiz=QuizRead(
            id=q.id,
            title=q.title,
            subject=q.subject,
            difficulty=q.difficulty,
            time_limit=q.time_limit,
            num_questions=q.num_questions,
            status=q.status,
            created_at=q.created_at,
            questions=[
                QuizQuestionRead(
                    question=qq.question,
                    options=list(qq.options or []),
                    correct_answer=qq.correct_answer,
                )
                for qq in (q.questions or [])
            ],
        )
    )
