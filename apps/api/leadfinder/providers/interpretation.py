import json
import logging

from leadfinder.core.config import Settings
from leadfinder.core.constants import MAX_TARGET_PROFILES
from leadfinder.prompts import PROMPT_INTERPRET_QUERY, build_interpretation_input
from leadfinder.schemas.interpretation import InterpretationResult
from leadfinder.utils import strip_json_from_response

from .llm import LLMServiceError, LLMTimeoutError, OpenAIResponsesProvider, get_llm_provider

logger = logging.getLogger(__name__)


class InterpretationError(Exception):
    """The interpretation stage failed to produce structured criteria. str(e) is user-facing."""


class InterpretationParseError(InterpretationError):
    """The model reply was not JSON of the expected shape."""


class InterpretationTimeoutError(InterpretationError):
    """The model did not answer within the interpretation timeout."""


class InterpretationProviderError(InterpretationError):
    """The model API was unreachable, misconfigured, or answered with an error."""


class InterpretationClient:
    """Free-text query (+ optional transcript) -> InterpretationResult."""

    def __init__(
        self,
        llm: OpenAIResponsesProvider,
        model: str,
        effort: str = "medium",
        timeout: float = 30.0,
    ):
        self.llm = llm
        self.model = model
        self.effort = effort
        self.timeout = timeout

    async def interpret(
        self,
        query: str,
        history: list[dict[str, str]] | None = None,
    ) -> InterpretationResult:
        try:
            text = await self.llm.complete(
                model=self.model,
                instructions=PROMPT_INTERPRET_QUERY,
                input=build_interpretation_input(query, history),
                effort=self.effort,
                timeout=self.timeout,
            )
        except LLMTimeoutError as e:
            logger.error("Interpretation timed out after %.0fs", self.timeout)
            raise InterpretationTimeoutError(str(e)) from e
        except LLMServiceError as e:
            logger.error("Interpretation provider error: %s", e)
            raise InterpretationProviderError(str(e)) from e

        raw = strip_json_from_response(text)
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Interpretation reply is not JSON: %s", raw[:500])
            raise InterpretationParseError("The AI returned a response I couldn't understand") from e
        if not isinstance(data, dict):
            raise InterpretationParseError("The AI returned a response I couldn't understand")
        raw_profiles = data.get("targetProfiles")
        if isinstance(raw_profiles, list) and len(raw_profiles) > MAX_TARGET_PROFILES:
            logger.info(
                "Interpretation returned %d target profiles, keeping the first %d",
                len(raw_profiles),
                MAX_TARGET_PROFILES,
            )
        try:
            result = InterpretationResult.from_llm_dict(data)
        except ValueError as e:
            logger.warning("Interpretation reply has no usable target profiles: %s", e)
            raise InterpretationParseError("The AI couldn't work out who to search for") from e
        return result


def get_interpretation_client(settings: Settings) -> InterpretationClient:
    return InterpretationClient(
        llm=get_llm_provider(settings),
        model=settings.interpretation_model,
        effort=settings.interpretation_reasoning_effort,
        timeout=settings.interpretation_timeout_seconds,
    )
