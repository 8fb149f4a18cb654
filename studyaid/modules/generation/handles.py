"""Model handles bound to one credential, and the resolver that builds them.

A handle wraps a pydantic-ai ``Agent`` with plain-text output so the caller gets
exactly what the model produced; structure is validated separately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pydantic_ai import Agent

from studyaid.core.logging import get_logger

logger = get_logger(__name__)

ModelFactory = Callable[[str, str], Any]


def build_google_model(credential: str, model_name: str):
    """Build the Google Gemini model provider (lazy import)."""
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    provider = GoogleProvider(api_key=credential)
    return GoogleModel(model_name, provider=provider)


@dataclass(frozen=True)
class ModelHandle:
    """A ready-to-call endpoint for one credential and one model name."""

    credential_index: int
    model_name: str
    agent: Agent[None, str] = field(repr=False, compare=False)

    async def generate_content(self, prompt: str) -> str:
        result = await self.agent.run(prompt)
        return result.output


class ModelResolver:
    def __init__(
        self,
        *,
        primary_model: str,
        fallback_model: Optional[str] = None,
        model_factory: ModelFactory = build_google_model,
    ) -> None:
        self.primary_model = primary_model
        self.fallback_model = fallback_model
        self.model_factory = model_factory

    def _build(self, index: int, credential: str, model_name: str) -> ModelHandle:
        model = self.model_factory(credential, model_name)
        # One model call per run; the retry controller owns every retry
        agent: Agent[None, str] = Agent[None, str](
            model=model, output_type=str, retries=0, output_retries=0
        )
        return ModelHandle(credential_index=index, model_name=model_name, agent=agent)

    def resolve(self, index: int, credential: str) -> Optional[ModelHandle]:
        """Primary model first, then fallback; None when neither can be set up."""
        names = [self.primary_model]
        if self.fallback_model and self.fallback_model != self.primary_model:
            names.append(self.fallback_model)

        for i, name in enumerate(names):
            try:
                handle = self._build(index, credential, name)
            except Exception as e:  # noqa: BLE001
                logger.error(
                    "Error setting up model %s: %s",
                    name,
                    e,
                    extra={"key_index": index},
                )
                continue
            if i == 0:
                logger.info("Using primary model: %s", name, extra={"key_index": index})
            else:
                logger.warning("Using fallback model: %s", name, extra={"key_index": index})
            return handle

        logger.error("Failed to initialize any model", extra={"key_index": index})
        return None
