"""Markdown rendering of Google Docs document trees."""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from .document import (
    Block,
    Document,
    Paragraph,
    ParagraphBlock,
    SectionBreakBlock,
    Table,
    TableBlock,
    TableCell,
    TextRun,
    parse_document,
)
from .types import HEADING_LEVELS

EMPTY_DOCUMENT_MESSAGE = "Document appears to be empty."
HORIZONTAL_RULE = "---"
BULLET_PREFIX = "- "


class MarkdownRenderer:
    """Convert a Document into a single Markdown string.

    The renderer holds no state between calls and never raises for a
    Document it is given. Blocks become lines, lines are joined with a
    single newline and no blank lines are inserted between blocks.

    Example::

        renderer = MarkdownRenderer()
        markdown = renderer.render(parse_document(api_response))
    """

    def render(self, document: Document) -> str:
        """Render a whole document.

        Args:
            document: Parsed document tree.

        Returns:
            Markdown text, or EMPTY_DOCUMENT_MESSAGE when the body has no content.
        """
        body = document.body
        if body is None or not body.content:
            logger.debug("Document has no body content")
            return EMPTY_DOCUMENT_MESSAGE

        lines = self.render_blocks(body.content)
        logger.debug(f"Rendered {len(body.content)} block(s) into {len(lines)} line(s)")
        return "\n".join(lines)

    def render_blocks(self, blocks: Iterable[Block]) -> list[str]:
        """Render a sequence of blocks into output lines, preserving order."""
        lines: list[str] = []
        for block in blocks:
            lines.extend(self.render_block(block))
        return lines

    def render_block(self, block: Block) -> list[str]:
        """Render one block into zero or more lines."""
        if isinstance(block, ParagraphBlock):
            return [self.render_paragraph(block.paragraph)]
        if isinstance(block, TableBlock):
            return self.render_table(block.table)
        if isinstance(block, SectionBreakBlock):
            return [HORIZONTAL_RULE]

        logger.trace(f"Skipping unsupported block: {type(block).__name__}")
        return []

    def render_paragraph(self, paragraph: Paragraph) -> str:
        """Render a paragraph as one line with its heading or bullet prefix.

        A bullet takes precedence over the heading prefix; list items are
        normal-style paragraphs in practice.
        """
        text = "".join(
            self.render_text_run(element.text_run)
            for element in paragraph.elements
            if element.text_run is not None
        )

        if paragraph.is_list_item:
            return f"{BULLET_PREFIX}{text}"

        level = HEADING_LEVELS.get(paragraph.paragraph_style.named_style_type, 0)
        if level:
            return f"{'#' * level} {text}"
        return text

    def render_text_run(self, run: TextRun) -> str:
        """Render a text run with link, emphasis and strikethrough markers.

        Wrapping order is fixed: link innermost, then emphasis, then
        strikethrough. Bold plus italic is a single ``***`` marker rather than
        nested ``**`` and ``*`` pairs.
        """
        text = run.content
        if not text:
            return ""

        style = run.text_style
        if style.link is not None and style.link.url:
            text = f"[{text}]({style.link.url})"

        if style.bold and style.italic:
            text = f"***{text}***"
        elif style.bold:
            text = f"**{text}**"
        elif style.italic:
            text = f"*{text}*"

        if style.strikethrough:
            text = f"~~{text}~~"

        return text

    def render_table(self, table: Table) -> list[str]:
        """Render a table as a header row, a separator row and data rows.

        The separator has one column per header cell. A table without rows
        renders nothing.
        """
        if not table.table_rows:
            return []

        header_row, *data_rows = table.table_rows
        header = [self.render_cell(cell) for cell in header_row.table_cells]

        lines = [
            self._format_table_row(header),
            self._format_table_row([HORIZONTAL_RULE] * len(header)),
        ]
        for row in data_rows:
            lines.append(self._format_table_row([self.render_cell(cell) for cell in row.table_cells]))
        return lines

    def render_cell(self, cell: TableCell) -> str:
        """Render a cell's blocks and flatten them onto one line.

        Lines are stripped, empty ones dropped and the rest joined with a
        space. Pipes are escaped so they cannot split the cell.
        """
        rendered = "\n".join(self.render_blocks(cell.content))
        parts = [line.strip() for line in rendered.splitlines()]
        flattened = " ".join(part for part in parts if part)
        return flattened.replace("|", "\\|")

    @staticmethod
    def _format_table_row(cells: list[str]) -> str:
        return f"| {' | '.join(cells)} |"


_renderer = MarkdownRenderer()


def convert_docs_json_to_markdown(data: Mapping[str, Any] | Document) -> str:
    """Convert a Docs API document to Markdown.

    Accepts either the raw JSON mapping returned by ``documents.get`` or an
    already parsed Document. Never raises: input that cannot be read as a
    document at all is logged and treated as empty.

    Args:
        data: Raw document mapping or Document model.

    Returns:
        Markdown text.
    """
    if isinstance(data, Document):
        return _renderer.render(data)

    try:
        document = parse_document(data)
    except ValidationError as e:
        logger.warning(f"Could not read document structure ({e.error_count()} error(s)), treating as empty")
        logger.debug(str(e))
        return EMPTY_DOCUMENT_MESSAGE

    return _renderer.render(document)
