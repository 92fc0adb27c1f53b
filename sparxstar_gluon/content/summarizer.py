from __future__ import annotations

"""Text summarization backends.

``Summarizer`` is the seam the summarize ability depends on. The default
``PydanticAISummarizer`` prompts a pydantic-ai ``Agent`` and walks an ordered
list of model preferences, falling through to the next model whenever one
cannot be built or fails to answer.
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from pydantic_ai import Agent

from sparxstar_gluon.core.logging_config import get_logger
from sparxstar_gluon.errors import CapabilityFailure

logger = get_logger(__name__)

SUMMARY_PROMPT = "Summarize the following content in 2 sentences:\n\n"

DEFAULT_MODEL_PREFERENCES: tuple[str, ...] = (
    "anthropic:claude-sonnet-4-5",
    "google-gla:gemini-3-pro-preview",
    "openai:gpt-5.1",
)


@runtime_checkable
class Summarizer(Protocol):
    async def summarize(self, text: str) -> str: ...


class PydanticAISummarizer:
    """Summarizes text with the first model that answers.

    Args:
        model_preferences: ``provider:model`` identifiers in preference order.
        temperature: Sampling temperature sent with every request.
    """

    def __init__(
        self,
        model_preferences: Sequence[Any] = DEFAULT_MODEL_PREFERENCES,
        *,
        temperature: float = 0.1,
    ) -> None:
        if not model_preferences:
            raise ValueError("model_preferences must not be empty")
        self._models: List[Any] = list(model_preferences)
        self._settings: Dict[str, Any] = {"temperature": temperature}

    def build_prompt(self, text: str) -> str:
        return SUMMARY_PROMPT + text

    async def summarize(self, text: str) -> str:
        prompt = self.build_prompt(text)
        last_error: Optional[Exception] = None
        for model in self._models:
            try:
                agent: Agent = Agent(model, output_type=str)
                result = await agent.run(prompt, model_settings=self._settings)
            except Exception as e:
                logger.debug(f"Summarizer model {model!r} unavailable: {e}")
                last_error = e
                continue
            return str(result.output).strip()
        raise CapabilityFailure(
            "model_unavailable",
            "No configured model could produce a summary.",
            {"last_error": str(last_error) if last_error else None},
        )
