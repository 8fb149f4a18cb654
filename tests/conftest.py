import os

import pytest

# settings are read at import time
os.environ.setdefault("MODE", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_DB_PORT", "5432")
os.environ.setdefault("POSTGRES_DB_NAME", "studyaid_test")
os.environ.setdefault("POSTGRES_DB_USER", "studyaid")
os.environ.setdefault("POSTGRES_DB_PASSWORD", "studyaid")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("GEMINI_API_KEYS", "test-key-a,test-key-b")

from studyaid.modules.generation import (  # noqa: E402
    GenerationOrchestrator,
    ResponseValidator,
    RetryController,
    RotationManager,
)
from tests.fakes import FakeResolver, RecordingSleep  # noqa: E402


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def make_orchestrator(sleep):
    def build(scripts, credentials=None, max_attempts=5):
        creds = list(credentials if credentials is not None else scripts.keys())
        resolver = FakeResolver(scripts)
        rotation = RotationManager(creds, resolver)  # type: ignore[arg-type]
        retry = RetryController(
            rotation,
            max_attempts=max_attempts,
            rotation_pause_sec=1.0,
            sleep=sleep,
        )
        orchestrator = GenerationOrchestrator(rotation, retry, ResponseValidator())
        return orchestrator, resolver

    return build
