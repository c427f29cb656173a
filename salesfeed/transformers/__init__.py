from salesfeed.transformers.normalizer import EventNormalizer, derive_item_url
from salesfeed.transformers.price_filter import ItemFilter

__all__ = ["EventNormalizer", "ItemFilter", "derive_item_url"]
