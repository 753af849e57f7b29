"""
Narrative text generation over pydantic-ai.

``NarrativeModel`` hides the agent behind a single ``generate`` call taking a
system prompt, the user prompt, earlier turns of the conversation and the
sampling settings. The agent is created on first use so that importing the
application never requires an API key.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Sequence, Tuple

from pydantic_ai import Agent, ModelSettings
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models import Model

from ..core.errors import NarrativeGenerationError
from ..core.monitoring import log_llm_call

logger = logging.getLogger(__name__)

# (role, content) pairs, role being "user" or "assistant"
ChatTurn = Tuple[str, str]


def build_message_history(system_prompt: str, history: Sequence[ChatTurn] = ()) -> list[ModelMessage]:
    """Convert a system prompt and earlier turns into pydantic-ai messages."""
    messages: list[ModelMessage] = [ModelRequest(parts=[SystemPromptPart(content=system_prompt)])]
    for role, content in history:
        if role == "assistant":
            messages.append(ModelResponse(parts=[TextPart(content=content)]))
        else:
            messages.append(ModelRequest(parts=[UserPromptPart(content=content)]))
    return messages


class NarrativeModel:
    """Generates free text answers with a language model."""

    def __init__(
        self,
        model: Model | str | None = None,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        """
        Args:
            model: A pydantic-ai model instance or a ``provider:model`` name.
                Defaults to the configured OpenAI model.
            api_key: OpenAI API key, defaults to ``OPENAI_API_KEY`` from settings
            base_url: Custom OpenAI compatible endpoint
        """
        self._model = model
        self._api_key = api_key
        self._base_url = base_url
        self._agent: Optional[Agent[None, str]] = None

    @property
    def model_name(self) -> str:
        if isinstance(self._model, Model):
            return self._model.model_name
        if isinstance(self._model, str):
            return self._model
        from ..server.core.config import settings

        return settings.openai.model_name

    def _resolve_model(self) -> Model | str:
        if self._model is not None:
            return self._model

        from ..server.core.config import settings

        openai_config = settings.openai
        api_key = self._api_key or openai_config.api_key
        if not api_key:
            raise NarrativeGenerationError("OPENAI_API_KEY is not configured")

        from pydantic_ai.models.openai import OpenAIChatModel
        from pydantic_ai.providers.openai import OpenAIProvider

        provider = OpenAIProvider(api_key=api_key, base_url=self._base_url or openai_config.base_url)
        logger.debug(f"Creating OpenAI chat model: {openai_config.model}")
        return OpenAIChatModel(openai_config.model, provider=provider)

    def _get_agent(self) -> Agent[None, str]:
        if self._agent is None:
            self._agent = Agent(self._resolve_model(), output_type=str)
        return self._agent

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        history: Sequence[ChatTurn] = (),
        *,
        temperature: float = 0.7,
        max_tokens: int = 500,
        purpose: str = "narrative",
        user_id: Optional[str] = None,
    ) -> str:
        """
        Generate a text answer.

        Args:
            system_prompt: Persona and instructions
            user_prompt: The request to answer
            history: Earlier (role, content) turns, oldest first
            temperature: Sampling temperature
            max_tokens: Upper bound on the answer length
            purpose: Label used in logs and traces
            user_id: The user the answer is for, used in logs and traces

        Returns:
            The generated text

        Raises:
            NarrativeGenerationError: If the model is not configured or the call fails
        """
        agent = self._get_agent()
        start = time.perf_counter()
        try:
            result = await agent.run(
                user_prompt,
                message_history=build_message_history(system_prompt, history),
                model_settings=ModelSettings(temperature=temperature, max_tokens=max_tokens),
            )
        except NarrativeGenerationError:
            raise
        except Exception as e:
            logger.error(f"Narrative generation failed for {purpose}: {e}")
            raise NarrativeGenerationError(f"Language model call failed: {e}") from e

        duration_ms = (time.perf_counter() - start) * 1000
        log_llm_call(purpose=purpose, model=self.model_name, duration_ms=duration_ms, user_id=user_id)
        logger.debug(f"Generated {purpose} narrative in {duration_ms:.0f}ms")

        output: Any = result.output
        return str(output).strip()
