"""Output schemas for CLI commands."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class CommandOutput(BaseModel):
    """Base output schema for all commands."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "command": "render",
                "success": True,
                "timestamp": "2024-01-15T10:30:00Z",
                "version": "0.1.0",
                "errors": [],
            }
        }
    )

    command: str = Field(..., description="Command name (render, read, extract-id)")
    success: bool = Field(..., description="Overall success status")
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat(), description="ISO 8601 timestamp")
    version: str = Field(..., description="CLI version")
    errors: list[str] = Field(default_factory=list, description="List of error messages")


class MarkdownOutput(CommandOutput):
    """Output schema for commands that produce Markdown (render, read)."""

    source: str = Field(..., description="Input file, URL or document ID")
    document_id: str | None = Field(None, description="Google Docs document ID, when known")
    title: str | None = Field(None, description="Document title, when known")
    markdown: str | None = Field(None, description="Rendered Markdown (omitted when written to a file)")
    output_path: str | None = Field(None, description="Absolute path of the written Markdown file")
    size_bytes: int | None = Field(None, description="Size of the written file in bytes")


class ExtractIdOutput(CommandOutput):
    """Output schema for extract-id command."""

    url: str = Field(..., description="URL the ID was extracted from")
    document_id: str | None = Field(None, description="Extracted document ID")
    doc_type: str = Field("unknown", description="Document type (document, spreadsheet, presentation)")
