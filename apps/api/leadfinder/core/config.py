from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/leadfinder"
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Google sign-in (ID tokens are checked against this audience)
    google_client_id: str | None = None

    # OpenAI Responses API (query interpretation + follow-up drafting)
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    interpretation_model: str = "gpt-5.2-pro"
    interpretation_reasoning_effort: str = "medium"
    interpretation_timeout_seconds: float = 30.0
    followup_model: str = "gpt-5.2-pro"
    followup_reasoning_effort: str = "low"
    followup_timeout_seconds: float = 60.0

    # RocketReach people search; None => synthetic placeholder contacts
    rocketreach_api_key: str | None = None
    rocketreach_base_url: str = "https://api.rocketreach.co/v2/api"
    enrichment_page_size: int = 10
    enrichment_timeout_seconds: float = 15.0

    # Rate limiting (per-user when key_func uses user id; multi-instance needs Redis later)
    search_rate_limit: str = "10/minute"
    conversation_rate_limit: str = "20/minute"
    followup_rate_limit: str = "30/minute"
    auth_login_rate_limit: str = "10/minute"

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
