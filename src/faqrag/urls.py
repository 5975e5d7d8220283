"""URL helpers shared by the crawler and the ingestor."""

from __future__ import annotations

from pathlib import PurePosixPath
from urllib.parse import parse_qsl, urlencode, urljoin, urlparse, urlunparse

TRACKING_QUERY_PARAMS = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "gclid",
        "fbclid",
        "mc_cid",
        "mc_eid",
        "ref",
    }
)

SKIPPED_EXTENSIONS = frozenset(
    {
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".svg",
        ".webp",
        ".ico",
        ".zip",
        ".gz",
        ".mp4",
        ".mp3",
        ".woff",
        ".woff2",
    }
)


def origin_of(url: str) -> str:
    """scheme://host[:port] of a URL, or the URL itself if it has no host."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return url
    return f"{parsed.scheme}://{parsed.netloc}".lower()


def is_same_origin(base_url: str, candidate_url: str) -> bool:
    return origin_of(base_url) == origin_of(urljoin(base_url, candidate_url))


def normalize_url(base_url: str, candidate: str) -> str | None:
    """Resolve a link for crawling, or None if it should not be followed.

    Drops fragments and tracking parameters, and rejects non-http(s)
    schemes, other origins and static assets.
    """
    try:
        resolved = urlparse(urljoin(base_url, candidate.strip()))
    except ValueError:
        return None
    if resolved.scheme not in ("http", "https"):
        return None

    params = parse_qsl(resolved.query, keep_blank_values=True)
    query = urlencode([(key, value) for key, value in params if key not in TRACKING_QUERY_PARAMS])
    url = urlunparse(resolved._replace(query=query, fragment=""))

    if not is_same_origin(base_url, url):
        return None
    if PurePosixPath(resolved.path).suffix.lower() in SKIPPED_EXTENSIONS:
        return None
    return url


def last_path_segment(url: str) -> str | None:
    segments = [segment for segment in urlparse(url).path.split("/") if segment]
    return segments[-1] if segments else None
