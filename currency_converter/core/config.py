from functools import lru_cache

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from currency_converter.models.constants import CURRENCY_CODES


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    EXCHANGE_API_BASE_URL, RATE_PROVIDER, HTTP_TIMEOUT_SECONDS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Currency Converter"
    debug: bool = False
    version: str = "0.1.0"

    # Exchange rates
    exchange_api_base_url: AnyHttpUrl = "https://api.exchangerate-api.com/v4/latest"  # base currency appended as last path segment
    http_timeout_seconds: float = 5.0

    # Allowed: 'exchangerate-api' (base in path), 'exchangerate-host' (base as query param)
    rate_provider: str = "exchangerate-api"

    # Initial form values for a fresh session
    default_amount: str = "1"
    default_source: str = "USD"
    default_destination: str = "EUR"

    # Sessions (in-memory only, lost on restart)
    session_cookie_name: str = "converter_session"
    max_sessions: int = 1000

    def init_post_load(self) -> None:
        """Validate derived / cross-field values."""
        allowed = {"exchangerate-api", "exchangerate-host"}
        if self.rate_provider not in allowed:
            raise ValueError(
                f"Unsupported rate_provider '{self.rate_provider}'. Allowed: {allowed}"
            )
        for field in ("default_source", "default_destination"):
            code = getattr(self, field)
            if code not in CURRENCY_CODES:
                raise ValueError(f"{field} '{code}' is not a supported currency")
        if self.max_sessions <= 0:
            raise ValueError("max_sessions must be positive")

    @property
    def rates_base_url(self) -> str:
        return str(self.exchange_api_base_url).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
