"""
Transform accepted feed events into display-ready items
"""

from schemas.feed import RawEvent
from schemas.item import Item
import logging

logger = logging.getLogger(__name__)


def derive_item_url(url: str) -> str:
    """
    Force an item page url onto https.

    ``http://a.bandcamp.com/x`` and ``//a.bandcamp.com/x`` both become
    ``https://a.bandcamp.com/x``; a url without a scheme separator gets
    the prefix as-is.
    """
    url = url.strip()
    if "//" in url:
        return "https://" + url.split("//", 1)[1]
    return "https://" + url


class EventNormalizer:
    """
    Normalize feed events into the Item schema.

    Handles:
    - Url derivation
    - Field renaming (artist_name -> artist, album_title -> title, ...)
    """

    def normalize(self, event: RawEvent) -> Item:
        """Build a fresh, unenriched Item from an event"""
        return Item(
            url=derive_item_url(event.url),
            artist=event.artist_name,
            title=event.album_title,
            description=event.item_description,
            art_url=event.art_url,
            utc_date=event.utc_date,
        )
