"""Settings management for Google Docs Markdown."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Environment variables are prefixed with GDMD_.
    Example: GDMD_SERVICE_ACCOUNT_PATH=/path/to/key.json
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="GDMD_",
    )

    # Google credentials
    credentials_path: Path = Field(
        default=Path(".client_secret.googleusercontent.com.json"),
        description="Path to Google OAuth client secrets file",
    )
    token_path: Path = Field(
        default=Path("tmp/token_docs.json"),
        description="Path to cached OAuth token",
    )
    service_account_path: Path | None = Field(
        default=None,
        description="Path to a service account key file (skips the OAuth browser flow)",
    )

    # Keyring settings
    use_keyring: bool = Field(
        default=True,
        description="Use keyring for credential storage if available",
    )
    keyring_service_name: str = Field(
        default="google-docs-markdown",
        description="Service name used for keyring storage",
    )

    # Output settings
    target_directory: Path = Field(
        default=Path("exports"),
        description="Default directory for saved markdown files",
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="pretty",
        description="Log format: 'pretty' for colored output, 'json' for structured",
    )


# Global settings instance
settings = Settings()
