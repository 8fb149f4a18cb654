"""AI generation exports."""

from .errors import (
    GenerationFailed,
    InvalidFormat,
    ModelUnavailable,
    OrchestratorError,
    QuotaExhausted,
    TransientFailure,
)
from .handles import ModelHandle, ModelResolver
from .models import (
    GenerationKind,
    GenerationRequest,
    ValidatedFlashcard,
    ValidatedQuizQuestion,
)
from .orchestrator import GenerationOrchestrator
from .retry import RetryController
from .rotation import RotationManager
from .validator import ResponseValidator, strip_code_fence

__all__ = [
    "GenerationFailed",
    "InvalidFormat",
    "ModelUnavailable",
    "OrchestratorError",
    "QuotaExhausted",
    "TransientFailure",
    "ModelHandle",
    "ModelResolver",
    "GenerationKind",
    "GenerationRequest",
    "ValidatedFlashcard",
    "ValidatedQuizQuestion",
    "GenerationOrchestrator",
    "RetryController",
    "RotationManager",
    "ResponseValidator",
    "strip_code_fence",
]
