"""Unsplash Gallery - photo feed, favorites and photographer search."""

__version__ = "0.1.0"

from unsplash_gallery.core.config import GalleryConfig, config
from unsplash_gallery.core.feed_client import FeedClient, FetchResult, FetchStatus
from unsplash_gallery.core.feed_store import FeedStore
from unsplash_gallery.core.models import Image

__all__ = [
    "FeedClient",
    "FeedStore",
    "FetchResult",
    "FetchStatus",
    "GalleryConfig",
    "Image",
    "config",
]
