"""Google Docs Markdown - render Google Docs documents as Markdown.

This package provides:
- MarkdownRenderer: Pure conversion of a Docs API document tree to Markdown
- GoogleDocsReader: Fetches documents from the Docs API and renders them
- CLI tool (gdmd): Command-line interface for local dumps and remote documents

Basic usage::

    from google_docs_markdown import convert_docs_json_to_markdown

    markdown = convert_docs_json_to_markdown(api_response)

    from google_docs_markdown import GoogleDocsReader, GoogleDocsReaderConfig

    reader = GoogleDocsReader(GoogleDocsReaderConfig(service_account_path=Path("key.json")))
    markdown = reader.read_markdown("https://docs.google.com/document/d/...")

CLI usage::

    gdmd render document.json
    gdmd read https://docs.google.com/document/d/... -o notes.md
    gdmd extract-id https://docs.google.com/document/d/.../edit
"""

from .core.config import GoogleDocsReaderConfig
from .core.document import Document, parse_document
from .core.markdown import EMPTY_DOCUMENT_MESSAGE, MarkdownRenderer, convert_docs_json_to_markdown
from .core.reader import GoogleDocsReader
from .core.types import DocumentType, NamedStyleType

__version__ = "0.1.0"

__all__ = [
    "EMPTY_DOCUMENT_MESSAGE",
    "Document",
    "DocumentType",
    "GoogleDocsReader",
    "GoogleDocsReaderConfig",
    "MarkdownRenderer",
    "NamedStyleType",
    "convert_docs_json_to_markdown",
    "parse_document",
    "__version__",
]


def main() -> None:
    """CLI entry point."""
    import sys

    from loguru import logger
    from rich.console import Console

    from .cli.app import app
    from .settings import settings

    # Configure logging
    logger.remove()
    if settings.log_format == "json":
        logger.add(sys.stderr, format="{message}", serialize=True, level=settings.log_level)
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
                "<cyan>{name}</cyan> - <level>{message}</level>"
            ),
            level=settings.log_level,
            colorize=True,
        )

    console = Console(stderr=True)

    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error occurred")
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
