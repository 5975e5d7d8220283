"""Document loaders for faqrag: site crawling and PDF fetching."""

from faqrag.loaders.crawler import SiteCrawler
from faqrag.loaders.html import html_to_text, parse_title
from faqrag.loaders.pdf import PDFFetcher, extract_pdf

__all__ = ["PDFFetcher", "SiteCrawler", "extract_pdf", "html_to_text", "parse_title"]
