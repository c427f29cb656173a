"""Extract tag links from an item page."""
import logging
from typing import List

from selectolax.parser import HTMLParser

from core.exceptions import TagParseError
from schemas.item import Tag

logger = logging.getLogger(__name__)

TAG_SELECTOR = "a.tag"


def parse_tags(html: str, url: str = "") -> List[Tag]:
    """
    Return every ``<a class="tag" href="...">name</a>`` on the page, in
    document order.

    Anchors without an href or without visible text are skipped. A page
    with no tag anchors yields an empty list.

    Raises:
        TagParseError: The document is not text or cannot be parsed
    """
    if not isinstance(html, str):
        raise TagParseError(
            f"Expected HTML text, got {type(html).__name__}",
            context={"url": url}
        )

    try:
        parser = HTMLParser(html)
        nodes = parser.css(TAG_SELECTOR)
    except Exception as e:
        raise TagParseError(
            "Failed to parse item page",
            context={"url": url, "content_length": len(html)},
            original_exception=e
        )

    tags = []
    for node in nodes:
        href = (node.attributes.get("href") or "").strip()
        name = node.text(strip=True)
        if not href or not name:
            continue
        tags.append(Tag(tag_url=href, tag_name=name))

    logger.debug(f"Parsed {len(tags)} tags from {url or 'document'}")
    return tags
