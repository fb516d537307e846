"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for model credentials and external service endpoints."""

    xai_api_key: Optional[str] = None
    llm_model: str = "grok-4-fast-reasoning"
    llm_temperature: float = 0.7
    currency_api_url: str = "https://api.frankfurter.app"
    weather_api_url: str = "https://api.weather.gov"
    geocoding_url: str = "https://nominatim.openstreetmap.org/search"
    user_agent: str = "TravelPlanner/1.0"
    http_timeout_s: float = 15.0
    use_geocoding: bool = False
    sentry_dsn: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables, falling back to the defaults."""

        defaults = cls()
        return cls(
            xai_api_key=os.getenv("XAI_API_KEY"),
            llm_model=os.getenv("LLM_MODEL", defaults.llm_model),
            llm_temperature=float(os.getenv("LLM_TEMPERATURE", str(defaults.llm_temperature))),
            currency_api_url=os.getenv("CURRENCY_API_URL", defaults.currency_api_url),
            weather_api_url=os.getenv("WEATHER_API_URL", defaults.weather_api_url),
            geocoding_url=os.getenv("GEOCODING_URL", defaults.geocoding_url),
            user_agent=os.getenv("HTTP_USER_AGENT", defaults.user_agent),
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", str(defaults.http_timeout_s))),
            use_geocoding=_env_flag("USE_GEOCODING"),
            sentry_dsn=os.getenv("SENTRY_DSN"),
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value

    def apply_langsmith_tracing(self) -> None:
        """Enable LangSmith tracing defaults and expose the model key to LangChain."""

        os.environ.setdefault("LANGCHAIN_TRACING_V2", "true")
        os.environ.setdefault("LANGCHAIN_ENDPOINT", "https://api.smith.langchain.com")
        if self.xai_api_key:
            os.environ.setdefault("XAI_API_KEY", self.xai_api_key)
