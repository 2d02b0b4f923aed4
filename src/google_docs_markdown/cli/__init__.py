"""Command-line interface for Google Docs Markdown."""
