from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from studyaid.core.config import settings
from studyaid.core.db.base import get_session
from studyaid.core.db.schemas.auth import User
from studyaid.core.db_services import DashboardService, FlashcardSetService, QuizService
from studyaid.core.logging import get_logger
from studyaid.modules.auth import current_active_user
from studyaid.modules.generation import (
    GenerationFailed,
    GenerationOrchestrator,
    InvalidFormat,
    ModelUnavailable,
    OrchestratorError,
)
from studyaid.modules.pdf import ExtractionFailed, NoTextFound, require_text

logger = get_logger(__name__)

CurrentUser = Annotated[User, Depends(current_active_user)]

PDF_MIME = "application/pdf"


def get_orchestrator(request: Request) -> GenerationOrchestrator:
    """The orchestrator built once in the app lifespan."""
    orchestrator: Optional[GenerationOrchestrator] = getattr(
        request.app.state, "orchestrator", None
    )
    if orchestrator is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "AI model not initialized."},
        )
    return orchestrator


def get_flashcard_service(session: AsyncSession = Depends(get_session)) -> FlashcardSetService:
    return FlashcardSetService(session)


def get_quiz_service(session: AsyncSession = Depends(get_session)) -> QuizService:
    return QuizService(session)


def get_dashboard_service(session: AsyncSession = Depends(get_session)) -> DashboardService:
    return DashboardService(session)


Orchestrator = Annotated[GenerationOrchestrator, Depends(get_orchestrator)]


def bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"error": message})


async def read_pdf_text(pdf_file: Optional[UploadFile]) -> str:
    """Validate the upload and return its extracted text (HTTP 400 on any problem)."""
    if pdf_file is None:
        raise bad_request("PDF file is required")
    if pdf_file.content_type != PDF_MIME:
        raise bad_request("File must be a PDF")
    data = await pdf_file.read()
    if len(data) > settings.app.max_upload_bytes:
        limit_mb = settings.app.max_upload_bytes // (1024 * 1024)
        raise bad_request(f"File size exceeds {limit_mb}MB limit")
    try:
        return require_text(data)
    except (ExtractionFailed, NoTextFound) as e:
        raise bad_request(str(e)) from e


def generation_http_error(exc: OrchestratorError, *, what: str) -> HTTPException:
    """Map an orchestrator failure to a 500 with an actionable JSON body."""
    if isinstance(exc, InvalidFormat):
        detail = {
            "error": f"AI returned invalid {what} format. {exc.suggestion}",
            "debug": exc.raw_excerpt,
        }
    elif isinstance(exc, ModelUnavailable):
        detail = {"error": f"{exc.message} {exc.suggestion}"}
    elif isinstance(exc, GenerationFailed):
        detail = {
            "error": f"Failed to generate {what}. {exc.suggestion}",
            "details": exc.message,
        }
    else:
        detail = {"error": f"Failed to generate {what}. {exc.suggestion}"}
    logger.error("Generation error (%s): %s", type(exc).__name__, exc.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
