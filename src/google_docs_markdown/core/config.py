"""Configuration models for Google Docs Markdown."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DOCS_READONLY_SCOPE = "https://www.googleapis.com/auth/documents.readonly"


class GoogleDocsReaderConfig(BaseModel):
    """Configuration for GoogleDocsReader."""

    credentials_path: Path = Field(default=Path(".client_secret.googleusercontent.com.json"))
    token_path: Path = Field(default=Path("tmp/token_docs.json"))
    service_account_path: Path | None = Field(
        default=None, description="Service account key file; takes precedence over the OAuth user flow"
    )
    target_directory: Path = Field(default=Path("exports"))
    scopes: list[str] = Field(default_factory=lambda: [DOCS_READONLY_SCOPE])
    # Credential storage
    use_keyring: bool = Field(default=True)
    keyring_fallback_to_file: bool = Field(default=True)
    keyring_service_name: str = Field(default="google-docs-markdown")
    # Frontmatter configuration
    enable_frontmatter: bool = Field(default=False, description="Enable YAML frontmatter in markdown files")
    frontmatter_fields: dict[str, Any] = Field(default_factory=dict, description="Custom frontmatter fields to inject")

    @field_validator("target_directory", "credentials_path", "token_path", mode="before")
    @classmethod
    def ensure_path(cls, v):
        """Ensure path fields are Path objects."""
        return Path(v) if not isinstance(v, Path) else v
