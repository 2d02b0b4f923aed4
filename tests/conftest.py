"""Pytest fixtures for Google Docs Markdown tests."""

import json
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """A Docs API document with a title, styled text, a list and a table."""
    return {
        "documentId": "doc123",
        "title": "Meeting Notes",
        "body": {
            "content": [
                {"sectionBreak": {"sectionStyle": {"sectionType": "CONTINUOUS"}}},
                {
                    "paragraph": {
                        "paragraphStyle": {"namedStyleType": "TITLE"},
                        "elements": [{"textRun": {"content": "Meeting Notes"}}],
                    }
                },
                {
                    "paragraph": {
                        "elements": [
                            {"textRun": {"content": "Agreed on "}},
                            {"textRun": {"content": "the plan", "textStyle": {"bold": True}}},
                        ]
                    }
                },
                {"paragraph": {"bullet": {"listId": "kix.1"}, "elements": [{"textRun": {"content": "Ship it"}}]}},
                {"paragraph": {"bullet": {"listId": "kix.1"}, "elements": [{"textRun": {"content": "Celebrate"}}]}},
                {
                    "table": {
                        "rows": 2,
                        "columns": 2,
                        "tableRows": [
                            {
                                "tableCells": [
                                    {"content": [{"paragraph": {"elements": [{"textRun": {"content": "Owner"}}]}}]},
                                    {"content": [{"paragraph": {"elements": [{"textRun": {"content": "Task"}}]}}]},
                                ]
                            },
                            {
                                "tableCells": [
                                    {"content": [{"paragraph": {"elements": [{"textRun": {"content": "Ana"}}]}}]},
                                    {"content": [{"paragraph": {"elements": [{"textRun": {"content": "Docs"}}]}}]},
                                ]
                            },
                        ],
                    }
                },
            ]
        },
    }


@pytest.fixture
def sample_markdown() -> str:
    """Expected rendering of sample_document."""
    return "\n".join(
        [
            "---",
            "# Meeting Notes",
            "Agreed on **the plan**",
            "- Ship it",
            "- Celebrate",
            "| Owner | Task |",
            "| --- | --- |",
            "| Ana | Docs |",
        ]
    )


@pytest.fixture
def sample_document_file(tmp_path: Path, sample_document: dict[str, Any]) -> Path:
    """Write the sample document to a JSON file."""
    path = tmp_path / "document.json"
    path.write_text(json.dumps(sample_document))
    return path


@pytest.fixture
def mock_client_secrets_file(tmp_path: Path) -> Path:
    """Create a mock OAuth client secrets file."""
    creds = tmp_path / "credentials.json"
    creds.write_text('{"installed": {"client_id": "test", "client_secret": "test"}}')
    return creds
