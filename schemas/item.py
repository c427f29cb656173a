"""
Display-ready item schemas and the values enrichment attaches to them
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class Tag(BaseModel):
    """A tag link scraped from an item page"""

    tag_url: str
    tag_name: str

    class Config:
        frozen = True


class ColorPair(BaseModel):
    """Background and text color derived from an item's art"""

    background_color: str
    text_color: str

    class Config:
        frozen = True


class Item(BaseModel):
    """
    An accepted, deduplicated sale.

    ``tags`` and ``colors`` start out unset and are filled in later by the
    enrichers. Each of them is a set-once cell: ``set_tags`` and
    ``set_colors`` refuse to replace a value that is already there. Callers
    that share an item across tasks should go through ``ItemStore`` so the
    check and the write happen under its lock.
    """

    url: str
    artist: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    art_url: Optional[str] = None
    utc_date: int = Field(..., description="Sale timestamp in whole seconds, the identity of the item")
    tags: Optional[List[Tag]] = None
    colors: Optional[ColorPair] = None

    @property
    def background_color(self) -> Optional[str]:
        return self.colors.background_color if self.colors else None

    @property
    def text_color(self) -> Optional[str]:
        return self.colors.text_color if self.colors else None

    @property
    def is_enriched(self) -> bool:
        return self.tags is not None and self.colors is not None

    def set_tags(self, tags: List[Tag]) -> bool:
        """Attach tags unless already attached. Returns True if applied."""
        if self.tags is not None:
            return False
        self.tags = list(tags)
        return True

    def set_colors(self, colors: ColorPair) -> bool:
        """Attach colors unless already attached. Returns True if applied."""
        if self.colors is not None:
            return False
        self.colors = colors
        return True
