from .llm import LLMServiceError, LLMTimeoutError, LLMConfigError, OpenAIResponsesProvider, get_llm_provider
from .interpretation import (
    InterpretationClient,
    InterpretationError,
    InterpretationParseError,
    InterpretationTimeoutError,
    InterpretationProviderError,
    get_interpretation_client,
)
from .enrichment import (
    EnrichmentError,
    EnrichmentSubQueryError,
    EnrichmentConfigError,
    RocketReachProvider,
    get_enrichment_provider,
)
from .google_identity import GoogleIdentity, GoogleIdentityError, verify_google_id_token

__all__ = [
    "LLMServiceError",
    "LLMTimeoutError",
    "LLMConfigError",
    "OpenAIResponsesProvider",
    "get_llm_provider",
    "InterpretationClient",
    "InterpretationError",
    "InterpretationParseError",
    "InterpretationTimeoutError",
    "InterpretationProviderError",
    "get_interpretation_client",
    "EnrichmentError",
    "EnrichmentSubQueryError",
    "EnrichmentConfigError",
    "RocketReachProvider",
    "get_enrichment_provider",
    "GoogleIdentity",
    "GoogleIdentityError",
    "verify_google_id_token",
]
