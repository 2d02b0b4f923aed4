"""Fetch Google Docs documents and render them as Markdown."""

import json
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, cast
from urllib.parse import parse_qs, urlparse

import google.auth.transport.requests
import yaml
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from loguru import logger

from .config import GoogleDocsReaderConfig
from .document import Document, parse_document
from .markdown import MarkdownRenderer
from .storage import CredentialStorage, StoredCredentials, get_credential_storage
from .types import DocumentType


class GoogleDocsReader:
    """Read Google Docs documents through the Docs API and convert them to Markdown."""

    OAUTH_REDIRECT_PORT = 47621

    def __init__(self, config: GoogleDocsReaderConfig | None = None, renderer: MarkdownRenderer | None = None):
        """Initialize the reader.

        Args:
            config: Configuration object. If None, uses defaults.
            renderer: Markdown renderer to use. If None, a default one is created.
        """
        self.config = config or GoogleDocsReaderConfig()
        self.renderer = renderer or MarkdownRenderer()
        self._docs_service = None

    @property
    def docs_service(self):
        """Get or create the Google Docs API service instance."""
        if self._docs_service is None:
            creds = self._authenticate()
            self._docs_service = build("docs", "v1", credentials=creds)
        return self._docs_service

    def _authenticate(self):
        """Authenticate with the Google Docs API.

        A configured service account key wins over the OAuth user flow.

        Returns:
            Authenticated credentials.
        """
        if self.config.service_account_path is not None:
            return self._authenticate_service_account(self.config.service_account_path)
        return self._authenticate_user()

    def _authenticate_service_account(self, key_path: Path) -> service_account.Credentials:
        if not key_path.exists():
            raise FileNotFoundError(f"Service account key file not found: {key_path}")

        logger.info(f"Authenticating with service account key {key_path}")
        return service_account.Credentials.from_service_account_file(str(key_path), scopes=self.config.scopes)

    def _authenticate_user(self) -> Credentials:
        storage = get_credential_storage(
            use_keyring=self.config.use_keyring,
            fallback_to_file=self.config.keyring_fallback_to_file,
            service_name=self.config.keyring_service_name,
            token_path=self.config.token_path,
        )

        creds = None
        stored = storage.load()
        if stored and stored.token_data:
            token_scopes = set(stored.token_data.get("scopes", []))
            missing = set(self.config.scopes) - token_scopes
            if missing:
                logger.info(f"Scopes changed, re-authentication required. Missing: {missing}")
            else:
                logger.debug("Loading credentials from storage")
                creds = Credentials.from_authorized_user_info(stored.token_data, self.config.scopes)

        if creds and creds.valid:
            return creds

        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired credentials")
            creds.refresh(google.auth.transport.requests.Request())
            self._save_credentials(creds, storage)
            return creds

        client_config = self._load_client_config()
        logger.info("Running OAuth flow for new credentials")
        flow = InstalledAppFlow.from_client_config(client_config, self.config.scopes)
        creds = flow.run_local_server(port=self.OAUTH_REDIRECT_PORT, prompt="consent", access_type="offline")
        self._save_credentials(creds, storage)
        return cast(Credentials, creds)

    def _load_client_config(self) -> dict[str, Any]:
        """Load OAuth client secrets from the configured file."""
        path = self.config.credentials_path
        if not path.exists():
            raise FileNotFoundError(
                f"Client credentials not found. Either:\n"
                f"  1. Place an OAuth client secrets file at: {path}\n"
                f"  2. Set GDMD_SERVICE_ACCOUNT_PATH to a service account key file"
            )

        with open(path) as f:
            client_config = json.load(f)
        if not isinstance(client_config, dict) or not ({"installed", "web"} & client_config.keys()):
            raise ValueError(f"{path} is not an OAuth client secrets file (expected 'installed' or 'web' key)")
        return client_config

    def _save_credentials(self, creds: Credentials, storage: CredentialStorage) -> None:
        token_data = json.loads(creds.to_json())
        stored = StoredCredentials(
            token_data=token_data,
            client_id=token_data.get("client_id"),
            client_secret=token_data.get("client_secret"),
        )

        if storage.save(stored):
            logger.debug("Credentials saved to storage")
        else:
            logger.warning("Failed to save credentials to storage")

    def extract_document_id(self, url_or_id: str) -> str:
        """Extract document ID from URL or return the ID if already provided.

        Args:
            url_or_id: Google Docs URL or document ID.

        Returns:
            Document ID.

        Raises:
            ValueError: If a URL is given and no ID can be found in it.
        """
        if not url_or_id.startswith(("http://", "https://")):
            return url_or_id

        patterns = [
            r"/document/(?:u/\d+/)?d/([a-zA-Z0-9_-]+)",
            r"/spreadsheets/(?:u/\d+/)?d/([a-zA-Z0-9_-]+)",
            r"/presentation/(?:u/\d+/)?d/([a-zA-Z0-9_-]+)",
            r"/file/d/([a-zA-Z0-9_-]+)",
        ]
        for pattern in patterns:
            match = re.search(pattern, url_or_id)
            if match:
                return match.group(1)

        params = parse_qs(urlparse(url_or_id).query)
        if "id" in params:
            return params["id"][0]

        raise ValueError(f"Could not extract document ID from URL: {url_or_id}")

    def detect_document_type(self, url_or_id: str) -> DocumentType:
        """Detect the type of Google Drive document from its URL.

        Plain IDs carry no type information and give UNKNOWN.
        """
        if not url_or_id.startswith(("http://", "https://")):
            return DocumentType.UNKNOWN

        if "/spreadsheets/" in url_or_id:
            return DocumentType.SPREADSHEET
        if "/presentation/" in url_or_id:
            return DocumentType.PRESENTATION
        if "/document/" in url_or_id:
            return DocumentType.DOCUMENT
        return DocumentType.UNKNOWN

    def fetch_document(self, url_or_id: str) -> dict[str, Any]:
        """Fetch the raw Docs API representation of a document.

        Args:
            url_or_id: Google Docs URL or document ID.

        Returns:
            Parsed JSON response of ``documents.get``.

        Raises:
            ValueError: If the URL points at something other than a document.
            HttpError: If the API call fails.
        """
        doc_type = self.detect_document_type(url_or_id)
        if doc_type not in (DocumentType.DOCUMENT, DocumentType.UNKNOWN):
            raise ValueError(f"Only Google Docs documents can be rendered, got a {doc_type.value}")

        document_id = self.extract_document_id(url_or_id)
        logger.debug(f"Fetching document {document_id}")

        try:
            result = self.docs_service.documents().get(documentId=document_id).execute()
        except HttpError as error:
            if error.resp.status == 404:
                logger.error(f"Document not found or not accessible: {document_id}")
                logger.error("Check that the document exists and is shared with the authenticated account")
                logger.error(f"Document URL: https://docs.google.com/document/d/{document_id}/edit")
            elif error.resp.status == 403:
                logger.error(f"Permission denied for document: {document_id}")
            else:
                logger.error(f"Failed to fetch document {document_id}: {error}")
            raise

        logger.debug(f"Fetched document '{result.get('title', 'untitled')}'")
        return cast(dict[str, Any], result)

    def get_document(self, url_or_id: str) -> Document:
        """Fetch a document and parse it into the typed document tree."""
        return parse_document(self.fetch_document(url_or_id))

    def read_markdown(self, url_or_id: str) -> str:
        """Fetch a document and render it as Markdown.

        Args:
            url_or_id: Google Docs URL or document ID.

        Returns:
            Markdown text.
        """
        return self.renderer.render(self.get_document(url_or_id))

    def export_markdown(self, url_or_id: str, output_path: Path | None = None) -> Path:
        """Fetch a document and write its Markdown to a file.

        Args:
            url_or_id: Google Docs URL or document ID.
            output_path: Target file. Defaults to ``<target_directory>/<title>.md``.

        Returns:
            Path of the written file.
        """
        document = self.get_document(url_or_id)
        document_id = document.document_id or self.extract_document_id(url_or_id)
        title = document.title or "untitled"

        if output_path is None:
            output_path = self.config.target_directory / f"{sanitize_filename(title)}.md"

        content = self.renderer.render(document)
        if self.config.enable_frontmatter:
            source_url = f"https://docs.google.com/document/d/{document_id}/edit"
            content = self.generate_frontmatter(title, source_url) + content

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.success(f"Exported to {output_path}")
        return output_path

    def generate_frontmatter(self, title: str, source_url: str) -> str:
        """Generate YAML frontmatter for markdown files.

        Custom fields from the configuration override the automatic ones.

        Args:
            title: Document title.
            source_url: Google Docs URL of the document.

        Returns:
            YAML frontmatter string with --- delimiters.
        """
        frontmatter_data: dict[str, Any] = {
            "title": title,
            "source": source_url,
            "synced_at": datetime.now(UTC).isoformat(),
        }
        frontmatter_data.update(self.config.frontmatter_fields)

        yaml_content = yaml.dump(frontmatter_data, default_flow_style=False, allow_unicode=True, sort_keys=False)
        return f"---\n{yaml_content}---\n\n"


def sanitize_filename(filename: str, max_length: int = 200) -> str:
    """Sanitize a document title for use as a filename.

    Args:
        filename: Original title
        max_length: Maximum length for the sanitized filename

    Returns:
        Sanitized filename, "untitled" if nothing usable remains
    """
    sanitized = re.sub(r"[^\w\s-]", "_", filename)[:max_length]
    return sanitized.strip(" _") or "untitled"
