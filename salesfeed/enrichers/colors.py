"""
Color enrichment: derive a background and a text color from item art.

The image is downloaded through the feed client and decoded in a worker
thread with ColorThief (Pillow underneath). The most dominant palette
entry becomes the background color and the least dominant the text color.
There is no retry; an item whose art fails to load keeps no colors.
"""

import asyncio
import io
from functools import partial
from typing import Callable, List, Optional, Sequence
from colorthief import ColorThief
from core.config import settings
from core.exceptions import ImageDecodeError, SalesFeedException
from salesfeed.extractors.feed_client import FeedClient
from salesfeed.loaders.item_store import ItemStore
from schemas.item import ColorPair, Item
import logging

logger = logging.getLogger(__name__)

Palette = List[Sequence[int]]


def extract_palette(data: bytes, color_count: int = 5, quality: int = 10) -> Palette:
    """
    Decode image bytes and return its reduced palette, most dominant first.

    Raises:
        ImageDecodeError: The bytes are not a decodable image
    """
    try:
        palette = ColorThief(io.BytesIO(data)).get_palette(
            color_count=color_count,
            quality=quality
        )
    except Exception as e:
        raise ImageDecodeError(
            "Failed to decode image",
            context={"size_bytes": len(data)},
            original_exception=e
        )
    return palette or []


def to_rgb_color(rgb: Sequence[int]) -> str:
    """``[10, 20, 30]`` -> ``"rgb(10,20,30,1)"``"""
    return "rgb({},{},{},1)".format(*(int(c) for c in rgb[:3]))


class ColorEnricher:
    """Populate ``Item.colors`` from the item's art image"""

    def __init__(
        self,
        client: FeedClient,
        store: ItemStore,
        palette_extractor: Optional[Callable[[bytes], Palette]] = None
    ):
        self.client = client
        self.store = store
        self.palette_extractor = palette_extractor or partial(
            extract_palette,
            color_count=settings.PALETTE_COLOR_COUNT,
            quality=settings.PALETTE_QUALITY
        )

    async def load_palette(self, art_url: str) -> Palette:
        """Download the image and decode it off the event loop"""
        data = await self.client.fetch_bytes(art_url)
        return await asyncio.to_thread(self.palette_extractor, data)

    async def enrich(self, item: Item) -> Optional[ColorPair]:
        """
        Load the art, derive the colors and assign them to the item.

        Returns:
            The item's colors, or None if the image could not be used
        """
        if not item.art_url:
            logger.debug(f"Item {item.utc_date} has no art, skipping colors")
            return None

        try:
            palette = await self.load_palette(item.art_url)
        except SalesFeedException as e:
            logger.warning(
                f"Art for {item.utc_date} unavailable, colors left unset: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            return None

        if not palette:
            logger.warning(f"Art for {item.utc_date} produced an empty palette")
            return None

        colors = ColorPair(
            background_color=to_rgb_color(palette[0]),
            text_color=to_rgb_color(palette[-1])
        )
        if not self.store.assign_colors(item, colors):
            logger.debug(f"Colors for {item.utc_date} already set, result dropped")
        return item.colors
