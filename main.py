from fastapi import FastAPI
from contextlib import asynccontextmanager
from studyaid.core.config import settings
from studyaid.core.db.base import engine
from studyaid.core.logging import get_logger, setup_logging
from studyaid.apis.flashcards.main import router as flashcards_router
from studyaid.apis.quiz.main import router as quiz_router
from studyaid.apis.dashboard.main import router as dashboard_router
from studyaid.modules.generation import GenerationOrchestrator

import uvicorn
from fastapi.middleware.cors import CORSMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # One key pool per process, shared by every request
    app.state.orchestrator = GenerationOrchestrator.from_settings(settings.gemini)
    try:
        yield
    finally:
        app.state.orchestrator = None
        await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(flashcards_router)
    app.include_router(quiz_router)
    app.include_router(dashboard_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        logger.error("An error occurred when starting the server: %s", e)
