"""Utility functions for HTML and URL processing."""

from __future__ import annotations

from bs4 import BeautifulSoup

# Tags whose text never renders
INVISIBLE_TAGS = ["script", "style", "noscript", "template", "meta", "link"]


def html_to_text(html: str, strip_tags: list[str] | None = None) -> str:
    """Extract the visible text of an HTML document's body.

    Args:
        html: The HTML content to process
        strip_tags: Tags to remove before extraction (default: INVISIBLE_TAGS)

    Returns:
        Plain text content, one non-empty line per text block
    """
    soup = BeautifulSoup(html, "lxml")

    tags_to_strip = strip_tags if strip_tags is not None else INVISIBLE_TAGS
    for tag in tags_to_strip:
        for element in soup.find_all(tag):
            element.decompose()

    root = soup.body or soup
    text = root.get_text(separator="\n", strip=True)

    lines = [line.strip() for line in text.split("\n") if line.strip()]
    return "\n".join(lines)


def truncate(text: str, limit: int, marker: str = "") -> str:
    """Cut text to at most ``limit`` characters, appending ``marker`` if cut.

    Examples:
        >>> truncate("abcdef", 3, "...")
        'abc...'
        >>> truncate("abc", 3, "...")
        'abc'
    """
    if len(text) <= limit:
        return text
    return text[:limit] + marker


def is_api_like(url: str, method: str) -> bool:
    """Heuristic used to single out API traffic.

    A request counts when its URL contains ``/api/``, its method is not GET,
    or its URL contains ``json``.
    """
    return "/api/" in url or method != "GET" or "json" in url
