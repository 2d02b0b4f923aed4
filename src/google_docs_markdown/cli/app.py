"""CLI application for Google Docs Markdown."""

import json
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from googleapiclient.errors import HttpError
from loguru import logger
from rich.console import Console

from .. import __version__
from ..core.config import GoogleDocsReaderConfig
from ..core.markdown import convert_docs_json_to_markdown
from ..core.reader import GoogleDocsReader
from ..settings import settings
from .formatters import get_formatter
from .output import OutputMode, get_output_mode, set_output_mode
from .schemas import ExtractIdOutput, MarkdownOutput

console = Console()

app = typer.Typer(
    name="gdmd",
    help="Google Docs Markdown - Render Google Docs documents as Markdown",
    add_completion=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]google-docs-markdown[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity. Use -v for DEBUG, -vv for TRACE.",
        ),
    ] = 0,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Set log level (DEBUG, INFO, WARNING, ERROR)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output in JSON format (machine-readable)"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = False,
) -> None:
    """Google Docs Markdown - Render Google Docs documents as Markdown."""
    set_output_mode(OutputMode.JSON if json_output else OutputMode.HUMAN)

    if log_level:
        level = log_level.upper()
    elif verbose >= 2:
        level = "TRACE"
    elif verbose == 1:
        level = "DEBUG"
    else:
        level = settings.log_level

    if level != settings.log_level:
        logger.remove()
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
                "<cyan>{name}</cyan> - <level>{message}</level>"
            ),
            level=level,
            colorize=True,
        )


def _parse_frontmatter_fields(items: list[str] | None, frontmatter_file: Path | None) -> dict[str, Any]:
    """Collect frontmatter fields from a YAML file and key=value options.

    Options given on the command line override fields from the file.
    """
    fields: dict[str, Any] = {}

    if frontmatter_file:
        if not frontmatter_file.exists():
            raise FileNotFoundError(f"Frontmatter file not found: {frontmatter_file}")
        with open(frontmatter_file) as f:
            file_data = yaml.safe_load(f)
        if isinstance(file_data, dict):
            fields.update(file_data)

    for item in items or []:
        if "=" not in item:
            logger.warning(f"Invalid frontmatter format '{item}'. Expected key=value")
            continue
        key, value = item.split("=", 1)
        fields[key.strip()] = value.strip()

    return fields


@app.command()
def render(
    source: Annotated[
        str,
        typer.Argument(help="Path to a Docs API document JSON file, or '-' for stdin"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write Markdown to this file instead of stdout"),
    ] = None,
) -> None:
    """Render a saved Google Docs API document (JSON) as Markdown.

    Examples:
        gdmd render document.json
        gdmd render document.json -o document.md
        cat document.json | gdmd render -
    """
    formatter = get_formatter(get_output_mode())

    try:
        raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, json.JSONDecodeError) as e:
        formatter.print_result(
            MarkdownOutput(command="render", success=False, version=__version__, source=source, errors=[str(e)])
        )
        raise typer.Exit(1) from e

    markdown = convert_docs_json_to_markdown(data)
    result = MarkdownOutput(
        command="render",
        success=True,
        version=__version__,
        source=source,
        document_id=data.get("documentId") if isinstance(data, dict) else None,
        title=data.get("title") if isinstance(data, dict) else None,
    )

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markdown, encoding="utf-8")
        result.output_path = str(output.absolute())
        result.size_bytes = output.stat().st_size
    else:
        result.markdown = markdown

    formatter.print_result(result)


@app.command()
def read(
    document: Annotated[
        str,
        typer.Argument(help="Google Docs URL or document ID"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write Markdown to this file instead of stdout"),
    ] = None,
    credentials: Annotated[
        Path,
        typer.Option("--credentials", "-c", help="Path to Google OAuth client secrets file"),
    ] = settings.credentials_path,
    service_account: Annotated[
        Path | None,
        typer.Option("--service-account", "-s", help="Path to a service account key file"),
    ] = settings.service_account_path,
    frontmatter: Annotated[
        list[str] | None,
        typer.Option(
            "--frontmatter", "-m", help="Add frontmatter field (format: key=value). Can be used multiple times."
        ),
    ] = None,
    frontmatter_file: Annotated[
        Path | None,
        typer.Option("--frontmatter-file", help="Path to YAML file containing frontmatter fields"),
    ] = None,
    enable_frontmatter: Annotated[
        bool,
        typer.Option("--enable-frontmatter", help="Prefix saved files with YAML frontmatter"),
    ] = False,
) -> None:
    """Fetch a Google Docs document and print or save it as Markdown.

    Examples:
        gdmd read https://docs.google.com/document/d/abc123/edit
        gdmd read abc123 -o notes.md --enable-frontmatter -m "type=meeting"
        gdmd read abc123 --service-account key.json
    """
    formatter = get_formatter(get_output_mode())

    def fail(message: str) -> typer.Exit:
        formatter.print_result(
            MarkdownOutput(command="read", success=False, version=__version__, source=document, errors=[message])
        )
        return typer.Exit(1)

    try:
        frontmatter_fields = _parse_frontmatter_fields(frontmatter, frontmatter_file)
    except (OSError, yaml.YAMLError) as e:
        raise fail(f"Error loading frontmatter: {e}") from e

    config = GoogleDocsReaderConfig(
        credentials_path=credentials,
        token_path=settings.token_path,
        service_account_path=service_account,
        use_keyring=settings.use_keyring,
        keyring_service_name=settings.keyring_service_name,
        target_directory=settings.target_directory,
        enable_frontmatter=enable_frontmatter or bool(frontmatter_fields),
        frontmatter_fields=frontmatter_fields,
    )
    reader = GoogleDocsReader(config)

    formatter.print_progress(f"[bold]Reading {document}[/bold]")

    try:
        document_id = reader.extract_document_id(document)
        result = MarkdownOutput(
            command="read", success=True, version=__version__, source=document, document_id=document_id
        )

        if output:
            path = reader.export_markdown(document, output_path=output)
            result.output_path = str(path.absolute())
            result.size_bytes = path.stat().st_size
        else:
            parsed = reader.get_document(document)
            result.title = parsed.title
            result.markdown = reader.renderer.render(parsed)

    except FileNotFoundError as e:
        formatter.print_info("Provide OAuth client secrets with -c or a service account key with -s")
        raise fail(str(e)) from e
    except ValueError as e:
        raise fail(str(e)) from e
    except HttpError as e:
        raise fail(f"Google API error: {e}") from e

    formatter.print_result(result)


@app.command()
def extract_id(
    url: Annotated[
        str,
        typer.Argument(help="Google Drive URL to extract ID from"),
    ],
) -> None:
    """Extract document ID from a Google Drive URL.

    Examples:
        gdmd extract-id https://docs.google.com/document/d/abc123/edit
    """
    formatter = get_formatter(get_output_mode())
    reader = GoogleDocsReader()

    try:
        document_id = reader.extract_document_id(url)
    except ValueError as e:
        formatter.print_result(
            ExtractIdOutput(command="extract-id", success=False, version=__version__, url=url, errors=[str(e)])
        )
        raise typer.Exit(1) from e

    formatter.print_result(
        ExtractIdOutput(
            command="extract-id",
            success=True,
            version=__version__,
            url=url,
            document_id=document_id,
            doc_type=reader.detect_document_type(url).value,
        )
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold blue]google-docs-markdown[/bold blue] version [green]{__version__}[/green]")
