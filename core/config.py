from pydantic import field_validator
from pydantic_settings import BaseSettings


def _strip_inline_comment(value: str) -> str:
    """Strip trailing inline comments that python-dotenv keeps for unquoted values."""
    idx = value.find(" #")
    if idx != -1:
        value = value[:idx]
    return value.strip()


class Settings(BaseSettings):
    anthropic_api_key: str = "test-key"
    anthropic_model: str = "claude-sonnet-4-5"
    oracle_max_tokens: int = 4096

    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_hostname: str = "test.api.amadeus.com"

    api_market_key: str = ""
    airport_search_radius_km: int = 500

    @field_validator(
        "anthropic_api_key", "amadeus_client_id", "amadeus_client_secret", "api_market_key",
        mode="before",
    )
    @classmethod
    def clean_secret(cls, v: str) -> str:
        if isinstance(v, str):
            return _strip_inline_comment(v)
        return v

    use_real_apis: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
