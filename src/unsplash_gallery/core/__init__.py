"""Core functionality for the gallery feed.

This package provides the components behind the gallery views:

- **GalleryConfig / config**: Configuration using Pydantic Settings
- **Image**: The photo record shown in the grid and detail views
- **FeedClient**: One-shot HTTP fetch and decode of the Unsplash feed
- **FeedStore**: In-memory feed, favorites and search state

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration, UNSPLASH_GALLERY_ prefix
   - Static access key read once per process

2. **Feed Layer** (models.py, feed_client.py):
   - Wire models for the upstream JSON and decoding into ``Image``
   - Failure classification into ``FetchResult`` values

3. **State Layer** (feed_store.py):
   - Feed replacement on the event loop that runs the fetch
   - Favorites toggling and photographer search

Usage Example
-------------
    from unsplash_gallery.core import FeedClient, FeedStore, config

    store = FeedStore(FeedClient(config))
    result = await store.fetch_feed()
    matches = store.filtered_images("ana")
"""

from unsplash_gallery.core.config import GalleryConfig, config
from unsplash_gallery.core.feed_client import (
    FeedClient,
    FetchResult,
    FetchStatus,
    InvalidFeedURLError,
    build_feed_url,
)
from unsplash_gallery.core.feed_store import FeedStore
from unsplash_gallery.core.models import FeedDecodeError, Image, decode_feed

__all__ = [
    "FeedClient",
    "FeedDecodeError",
    "FeedStore",
    "FetchResult",
    "FetchStatus",
    "GalleryConfig",
    "Image",
    "InvalidFeedURLError",
    "build_feed_url",
    "config",
    "decode_feed",
]
