"""Core module for Google Docs Markdown."""

from .config import GoogleDocsReaderConfig
from .document import Document, parse_document
from .markdown import EMPTY_DOCUMENT_MESSAGE, MarkdownRenderer, convert_docs_json_to_markdown
from .reader import GoogleDocsReader
from .types import DocumentType, NamedStyleType

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
]
