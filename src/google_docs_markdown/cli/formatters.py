"""Output formatters for CLI commands."""

import json
from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape

from .output import OutputMode
from .schemas import CommandOutput, ExtractIdOutput, MarkdownOutput


class BaseOutputFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def print_progress(self, message: str) -> None:
        """Print a progress message."""

    @abstractmethod
    def print_info(self, message: str) -> None:
        """Print an informational message."""

    @abstractmethod
    def print_result(self, result: CommandOutput) -> None:
        """Print the final command result."""


class HumanOutputFormatter(BaseOutputFormatter):
    """Formatter for human-readable output.

    Markdown goes to stdout unstyled so it can be piped; status messages go
    through Rich.
    """

    def __init__(self) -> None:
        self.console = Console()
        # Status chatter stays off stdout so Markdown can be piped
        self.status_console = Console(stderr=True)

    def print_progress(self, message: str) -> None:
        self.status_console.print(message)

    def print_info(self, message: str) -> None:
        self.status_console.print(f"[dim]{message}[/dim]")

    def print_result(self, result: CommandOutput) -> None:
        if isinstance(result, MarkdownOutput):
            self._print_markdown_result(result)
        elif isinstance(result, ExtractIdOutput):
            self._print_extract_id_result(result)
        else:
            self.console.print(f"[dim]{result.model_dump_json(indent=2)}[/dim]")

    def _print_markdown_result(self, result: MarkdownOutput) -> None:
        if not result.success:
            for error in result.errors:
                self.console.print(f"[red]Error: {escape(error)}[/red]")
            return

        if result.output_path:
            self.console.print(f"[green]Wrote Markdown to[/green] [blue]{result.output_path}[/blue]")
        elif result.markdown is not None:
            # Plain print: Rich markup would eat [text](url) links
            print(result.markdown)

    def _print_extract_id_result(self, result: ExtractIdOutput) -> None:
        if not result.success:
            for error in result.errors:
                self.console.print(f"[red]Error: {escape(error)}[/red]")
            return

        self.console.print(f"[bold]Document ID:[/bold] [cyan]{result.document_id}[/cyan]")
        self.console.print(f"[bold]Type:[/bold] [green]{result.doc_type}[/green]")


class JSONOutputFormatter(BaseOutputFormatter):
    """Formatter for machine-readable JSON output."""

    def print_progress(self, message: str) -> None:
        """Suppress progress messages in JSON mode."""

    def print_info(self, message: str) -> None:
        """Suppress info messages in JSON mode."""

    def print_result(self, result: CommandOutput) -> None:
        output = result.model_dump(mode="json", exclude_none=False)
        print(json.dumps(output, indent=2))


def get_formatter(mode: OutputMode) -> BaseOutputFormatter:
    """Get the appropriate formatter for the given output mode."""
    if mode == OutputMode.JSON:
        return JSONOutputFormatter()
    return HumanOutputFormatter()
