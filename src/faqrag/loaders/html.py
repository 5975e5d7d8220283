"""HTML to plain text for crawled pages."""

import re

from bs4 import BeautifulSoup

from faqrag.text import clean_text

# Tags to remove entirely (including their content)
REMOVE_TAGS = ["script", "style", "noscript"]

# Page chrome that never holds answer text
CHROME_SELECTORS = [
    "header",
    "footer",
    "nav",
    "aside",
    "form",
    '[role="navigation"]',
    '[role="banner"]',
    '[role="search"]',
    ".skip-to-content",
    ".cookie",
    ".cookies",
]

# Content roots, most specific first
ROOT_SELECTORS = ["main", "article", "[data-docs-root]", "body"]

_UI_PHRASES = [
    re.compile(r"\b(?:Read\s+More|Subscribe|Contact\s+Sales)\b", re.IGNORECASE),
    re.compile(r"\bSearch\s+documentation\b", re.IGNORECASE),
    re.compile(r"\bShowcase\b|\bTemplates\b|\bDocs\b|\bBlog\b|\bEnterprise\b", re.IGNORECASE),
]
_SPACE_RUNS = re.compile(r"[ \t]{2,}")


def parse_title(html: str) -> str | None:
    """Contents of the first <title>, stripped, or None."""
    soup = BeautifulSoup(html, "html.parser")
    if soup.title is None:
        return None
    title = soup.title.get_text().strip()
    return title or None


def html_to_text(html: str) -> str:
    """Extract readable text from an HTML page.

    Scripts, styles and page chrome (header, footer, navigation, forms,
    cookie banners) are removed; the text comes from ``main``, else
    ``article``, else ``[data-docs-root]``, else ``body``. Repeated UI
    phrases are dropped before the whitespace is normalized.
    """
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(REMOVE_TAGS):
        tag.decompose()
    for element in soup.select(", ".join(CHROME_SELECTORS)):
        element.decompose()

    root = None
    for selector in ROOT_SELECTORS:
        root = soup.select_one(selector)
        if root is not None:
            break
    if root is None:
        root = soup

    text = root.get_text(separator="\n")
    for pattern in _UI_PHRASES:
        text = pattern.sub(" ", text)
    text = _SPACE_RUNS.sub(" ", text)

    # Block elements leave whitespace-only lines behind
    return clean_text("\n".join(line.strip() for line in text.split("\n")))
