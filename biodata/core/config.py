"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TEMPLATE_URL = (
    "https://utlihxppncolcysnwrrj.supabase.co/storage/v1/object/public/"
    "biodata//RanjithBiodata.pptx"
)
DEFAULT_CONVERT_API_URL = "https://v2.convertapi.com/convert/pptx/to/png"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Everything except the conversion credential has a default and can be
    overridden via environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="None",
    )

    # Conversion provider
    convert_api_key: SecretStr = Field(
        description="ConvertAPI bearer credential. Required.",
    )
    convert_api_url: str = Field(
        default=DEFAULT_CONVERT_API_URL,
        description="ConvertAPI endpoint turning a PPTX upload into PNG images.",
    )

    # Template
    template_url: str = Field(
        default=DEFAULT_TEMPLATE_URL,
        description="Location of the biodata PPTX template.",
    )
    template_spool_max_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Template size kept in memory before spilling to a temp file.",
    )

    # Outbound HTTP
    http_timeout_seconds: float | None = Field(
        default=120.0,
        description="Timeout for outbound calls. None disables the client-side timeout.",
    )

    # Static files
    public_dir: Path = Field(
        default=Path("./public"),
        description="Directory served at the root path.",
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address for uvicorn.")
    port: int = Field(default=3000, description="Listen port for uvicorn.")

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for info.log and error.log.",
    )

    @field_validator("convert_api_key")
    @classmethod
    def require_api_key(cls, v: SecretStr) -> SecretStr:
        """Reject an empty credential."""
        if not v.get_secret_value().strip():
            raise ValueError("CONVERT_API_KEY is not set")
        return v

    @field_validator("public_dir")
    @classmethod
    def ensure_public_dir(cls, v: Path) -> Path:
        """Ensure the static directory exists."""
        v.mkdir(parents=True, exist_ok=True)
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    def configure_logging(self) -> None:
        """Configure structlog on top of the stdlib logging tree."""
        import structlog

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.

    Raises:
        pydantic.ValidationError: If CONVERT_API_KEY is missing or empty.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
