"""Settings and configuration."""
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

# Load .env file if it exists
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass


class Settings(BaseSettings):
    # Core
    mode: str = "dev"  # dev, prod

    # Tracing
    service_name: str = Field(
        default="span-masking",
        validation_alias=AliasChoices("OTEL_SERVICE_NAME", "SERVICE_NAME"),
    )
    tracing_enabled: bool = True
    otel_exporter_otlp_endpoint: Optional[str] = None
    otel_exporter_otlp_insecure: bool = True
    console_exporter: bool = Field(
        default=False,
        validation_alias=AliasChoices("SPAN_MASKING_CONSOLE_EXPORTER", "CONSOLE_EXPORTER"),
    )

    # Masking
    masking_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices("SPAN_MASKING_ENABLED", "MASKING_ENABLED"),
    )

    # Logging
    log_level: str = "INFO"
    log_redaction_enabled: bool = True

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def is_prod(self) -> bool:
        return self.mode.lower() == "prod"


settings = Settings()
