"""Core type definitions for Google Docs Markdown."""

from enum import Enum


class DocumentType(Enum):
    """Google Drive document types recognised from URLs."""

    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"
    PRESENTATION = "presentation"
    UNKNOWN = "unknown"


class NamedStyleType(str, Enum):
    """Paragraph roles reported by the Docs API in ``paragraphStyle.namedStyleType``."""

    NORMAL_TEXT = "NORMAL_TEXT"
    TITLE = "TITLE"
    SUBTITLE = "SUBTITLE"
    HEADING_1 = "HEADING_1"
    HEADING_2 = "HEADING_2"
    HEADING_3 = "HEADING_3"
    HEADING_4 = "HEADING_4"
    HEADING_5 = "HEADING_5"
    HEADING_6 = "HEADING_6"


# Markdown heading depth per named style; styles not listed get no prefix
HEADING_LEVELS: dict[str, int] = {
    NamedStyleType.TITLE.value: 1,
    NamedStyleType.HEADING_1.value: 1,
    NamedStyleType.HEADING_2.value: 2,
    NamedStyleType.HEADING_3.value: 3,
    NamedStyleType.HEADING_4.value: 4,
    NamedStyleType.HEADING_5.value: 5,
    NamedStyleType.HEADING_6.value: 6,
}
