from salesfeed.extractors.feed_client import FeedClient
from salesfeed.extractors.tag_parser import parse_tags

__all__ = ["FeedClient", "parse_tags"]
