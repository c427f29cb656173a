from salesfeed.enrichers.colors import ColorEnricher, extract_palette, to_rgb_color
from salesfeed.enrichers.tags import TagEnricher

__all__ = ["ColorEnricher", "TagEnricher", "extract_palette", "to_rgb_color"]
