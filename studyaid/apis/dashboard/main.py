from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from studyaid.apis.deps import CurrentUser, get_dashboard_service
from studyaid.core.config import settings
from studyaid.core.db_services import DashboardService
from studyaid.modules.quiz import summarize_results
from .schemas import DashboardResponse, RecentResult, UpcomingQuiz


router = APIRouter()

Service = Annotated[DashboardService, Depends(get_dashboard_service)]


@router.get(
    f"/{settings.app.version}/dashboard",
    response_model=DashboardResponse,
    tags=["dashboard"],
)
async def dashboard(user: CurrentUser, service: Service) -> DashboardResponse:
    results = await service.recent_results(user.id, limit=5)
    stats = summarize_results(
        [r.score for r in results], [r.time_spent for r in results]
    )
    await service.store_stats(user.id, stats)

    upcoming = await service.upcoming_quizzes(user.id, limit=5)
    return DashboardResponse(
        quizzes_taken=stats.quizzes_taken,
        average_score=stats.average_score,
        hours_practiced=stats.hours_practiced,
        upcoming_quizzes=[
            UpcomingQuiz(
                subject=q.subject,
                date=q.created_at.date().isoformat(),
                time=q.created_at.strftime("%H:%M:%S"),
            )
            for q in upcoming
        ],
        recent_results=[
            RecentResult(
                subject=r.quiz.subject if r.quiz else None,
                score=r.score,
                date=r.created_at.date().isoformat(),
            )
            for r in results
        ],
    )
