"""Same-origin breadth-first site crawler."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

import httpx
from bs4 import BeautifulSoup

from faqrag.loaders.html import html_to_text, parse_title
from faqrag.models import Document
from faqrag.urls import normalize_url

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 12.0
USER_AGENT = "faqrag-crawler/1.0"


@dataclass
class _Page:
    document: Document
    html: str


class SiteCrawler:
    """Crawls one site breadth-first, staying on the base URL's origin.

    Pages that fail to load, are not HTML, or have no readable text are
    skipped; the crawl never raises for a single bad page.

    Example:
        with httpx.Client() as client:
            crawler = SiteCrawler(client)
            documents = crawler.crawl("https://docs.example.com", max_pages=10, max_depth=2)
    """

    def __init__(self, client: httpx.Client, timeout: float = FETCH_TIMEOUT_SECONDS) -> None:
        self._client = client
        self.timeout = timeout

    def crawl(self, base_url: str, max_pages: int = 10, max_depth: int = 2) -> list[Document]:
        """Crawl from base_url.

        Args:
            base_url: Starting page; its origin bounds the crawl
            max_pages: Stop once this many documents were collected
            max_depth: Links further than this many hops from base_url are ignored

        Returns:
            Documents in crawl order
        """
        queue: deque[tuple[str, int]] = deque([(base_url, 0)])
        visited: set[str] = set()
        documents: list[Document] = []

        while queue and len(documents) < max_pages:
            url, depth = queue.popleft()
            if url in visited or depth > max_depth:
                continue
            visited.add(url)

            page = self.fetch_page(url)
            if page is None:
                continue
            documents.append(page.document)

            for link in self._links(base_url, page.html, visited):
                if len(documents) + len(queue) >= max_pages:
                    break
                queue.append((link, depth + 1))

        logger.info("Crawled %s: %d pages", base_url, len(documents))
        return documents

    def fetch_page(self, url: str) -> _Page | None:
        """Fetch and parse one page, or None if it is unusable."""
        try:
            response = self._client.get(
                url,
                headers={"User-Agent": USER_AGENT, "Accept": "text/html,application/xhtml+xml"},
                timeout=self.timeout,
                follow_redirects=True,
            )
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            return None

        if not response.is_success:
            logger.debug("Skipping %s: HTTP %d", url, response.status_code)
            return None
        if "text/html" not in response.headers.get("content-type", ""):
            logger.debug("Skipping %s: not HTML", url)
            return None

        html = response.text
        text = html_to_text(html)
        if not text:
            return None

        title = parse_title(html) or url
        return _Page(document=Document(url=url, title=title, text=text), html=html)

    @staticmethod
    def _links(base_url: str, html: str, visited: set[str]) -> list[str]:
        """Followable same-origin links of a page, in document order, deduplicated."""
        soup = BeautifulSoup(html, "html.parser")
        links: list[str] = []
        seen: set[str] = set()
        for anchor in soup.find_all("a", href=True):
            normalized = normalize_url(base_url, anchor["href"])
            if normalized is None or normalized in visited or normalized in seen:
                continue
            seen.add(normalized)
            links.append(normalized)
        return links
