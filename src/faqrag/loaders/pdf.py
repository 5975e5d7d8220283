"""PDF fetcher using pypdf - lightweight, pure Python."""

from __future__ import annotations

import io
import logging

import httpx
from pypdf import PdfReader

from faqrag.models import Document
from faqrag.text import clean_text
from faqrag.urls import last_path_segment

logger = logging.getLogger(__name__)

PDF_FETCH_TIMEOUT_SECONDS = 20.0
USER_AGENT = "faqrag-crawler/1.0"


def extract_pdf(data: bytes) -> tuple[str, str | None]:
    """Text of every page, and the metadata title if the PDF has one.

    Raises:
        pypdf.errors.PdfReadError: If the bytes are not a readable PDF
    """
    reader = PdfReader(io.BytesIO(data))
    pages = [page.extract_text() or "" for page in reader.pages]
    metadata = reader.metadata
    title = metadata.title if metadata is not None else None
    return "\n\n".join(pages), (title.strip() if title and title.strip() else None)


class PDFFetcher:
    """Downloads a PDF and extracts its text.

    Any failure (network, status, content type, parse error, empty text) is
    logged and yields None, so one bad URL never aborts an ingestion.
    """

    def __init__(self, client: httpx.Client, timeout: float = PDF_FETCH_TIMEOUT_SECONDS) -> None:
        self._client = client
        self.timeout = timeout

    def fetch(self, url: str) -> Document | None:
        try:
            response = self._client.get(
                url,
                headers={"User-Agent": USER_AGENT, "Accept": "application/pdf"},
                timeout=self.timeout,
                follow_redirects=True,
            )
            response.raise_for_status()

            content_type = response.headers.get("content-type", "")
            if "pdf" not in content_type:
                raise ValueError(
                    f"Expected PDF content-type for {url}, got {content_type or 'unknown'}"
                )

            raw_text, metadata_title = extract_pdf(response.content)
        except Exception as e:
            logger.warning("Failed to fetch PDF %s: %s", url, e)
            return None

        text = clean_text(raw_text)
        if not text:
            logger.warning("PDF %s has no extractable text", url)
            return None

        title = metadata_title or last_path_segment(url) or url
        return Document(url=url, title=title, text=text)
