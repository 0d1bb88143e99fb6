import logging

import httpx

from leadfinder.core.config import Settings

logger = logging.getLogger(__name__)


class LLMServiceError(Exception):
    """Raised when the LLM API is unavailable or returns invalid or unexpected output."""


class LLMTimeoutError(LLMServiceError):
    """Raised when the LLM API does not answer within the configured timeout."""


class LLMConfigError(LLMServiceError):
    """Raised when no API key is configured."""


def extract_output_text(data: dict) -> str:
    """Concatenate every output_text segment of every message item in a Responses API reply."""
    if not isinstance(data, dict):
        return ""
    parts: list[str] = []
    for item in data.get("output") or []:
        if not isinstance(item, dict) or item.get("type") != "message":
            continue
        for segment in item.get("content") or []:
            if isinstance(segment, dict) and segment.get("type") == "output_text":
                text = segment.get("text")
                if isinstance(text, str):
                    parts.append(text)
    if not parts and isinstance(data.get("output_text"), str):
        return data["output_text"]
    return "".join(parts)


class OpenAIResponsesProvider:
    """OpenAI Responses API (instructions + input + reasoning effort). Single attempt, no retries."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._transport = transport

    async def complete(
        self,
        *,
        model: str,
        instructions: str,
        input: str,
        effort: str = "medium",
        timeout: float = 30.0,
    ) -> str:
        if not self.api_key:
            raise LLMConfigError("AI interpretation is not configured")
        payload = {
            "model": model,
            "instructions": instructions,
            "input": input,
            "reasoning": {"effort": effort},
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                r = await client.post(f"{self.base_url}/responses", json=payload, headers=headers)
                r.raise_for_status()
                data = r.json()
        except httpx.TimeoutException as e:
            raise LLMTimeoutError("The AI service took too long to respond") from e
        except httpx.HTTPStatusError as e:
            body = getattr(e.response, "text", None) or ""
            if body:
                logger.warning("Responses API error %s: %s", e.response.status_code, body[:500])
            raise LLMServiceError(
                f"The AI service returned an error ({e.response.status_code})"
            ) from e
        except httpx.RequestError as e:
            raise LLMServiceError("The AI service is unavailable right now") from e
        except ValueError as e:
            raise LLMServiceError("The AI service returned an unexpected response format") from e

        text = extract_output_text(data).strip()
        if not text:
            raise LLMServiceError("The AI service returned an empty response")
        logger.info("Responses API call ok | model=%s response_chars=%d", model, len(text))
        return text


def get_llm_provider(settings: Settings) -> OpenAIResponsesProvider:
    return OpenAIResponsesProvider(
        base_url=settings.openai_base_url,
        api_key=settings.openai_api_key,
    )
