"""Shared pytest fixtures for Unsplash Gallery tests."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from unsplash_gallery.core.config import GalleryConfig
from unsplash_gallery.core.feed_client import FeedClient
from unsplash_gallery.core.feed_store import FeedStore
from unsplash_gallery.core.models import Image

Handler = Callable[[httpx.Request], httpx.Response]


def make_photo(photo_id: str, author: str) -> dict:
    """Build one upstream photo object with the fields the gallery reads.

    Extra fields are included to mirror a real ``/photos/`` response.
    """
    return {
        "id": photo_id,
        "width": 4000,
        "height": 3000,
        "likes": 12,
        "urls": {
            "raw": f"https://images.unsplash.com/{photo_id}?raw",
            "regular": f"https://images.unsplash.com/{photo_id}?w=1080",
            "small": f"https://images.unsplash.com/{photo_id}?w=400",
            "thumb": f"https://images.unsplash.com/{photo_id}?w=200",
        },
        "user": {"id": f"user-{photo_id}", "username": author.lower(), "name": author},
    }


def make_image(image_id: str, author: str) -> Image:
    """Build the :class:`Image` that ``make_photo`` decodes to."""
    return Image(
        id=image_id,
        thumbnail_url=f"https://images.unsplash.com/{image_id}?w=400",
        full_url=f"https://images.unsplash.com/{image_id}?w=1080",
        author_name=author,
    )


def json_handler(payload, status_code: int = 200) -> Handler:
    """Return a MockTransport handler that always answers with ``payload``."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode())

    return handler


@pytest.fixture
def test_config() -> GalleryConfig:
    """Create a test configuration that never reads the local .env file.

    Returns:
        GalleryConfig pointing at a fake API host
    """
    return GalleryConfig(
        _env_file=None,
        api_base_url="https://api.example.test",
        access_key="test-key",
    )


@pytest.fixture
def sample_photos() -> list[dict]:
    """Upstream payload with two photographers.

    Returns:
        List of photo objects as returned by ``GET /photos/``
    """
    return [make_photo("1", "Ana"), make_photo("2", "Ben")]


@pytest.fixture
def make_client(test_config: GalleryConfig) -> Callable[[Handler], FeedClient]:
    """Factory building a FeedClient backed by an httpx MockTransport.

    Returns:
        Callable taking a request handler and returning a FeedClient
    """

    def factory(handler: Handler, config: GalleryConfig | None = None) -> FeedClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return FeedClient(config or test_config, http_client=http_client)

    return factory


@pytest.fixture
def store(make_client, sample_photos) -> FeedStore:
    """Create an empty FeedStore whose fetches return ``sample_photos``.

    Returns:
        FeedStore instance (not yet fetched)
    """
    return FeedStore(make_client(json_handler(sample_photos)))


@pytest.fixture
def photo_factory() -> Callable[[str, str], dict]:
    """Expose :func:`make_photo` to tests."""
    return make_photo


@pytest.fixture
def image_factory() -> Callable[[str, str], Image]:
    """Expose :func:`make_image` to tests."""
    return make_image


@pytest.fixture
def handler_factory() -> Callable[..., Handler]:
    """Expose :func:`json_handler` to tests."""
    return json_handler
