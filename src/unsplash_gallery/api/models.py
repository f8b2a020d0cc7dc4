"""Pydantic request and response models for the Gallery API.

These models define the JSON schema for the API endpoints.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Models
------
FavoriteToggleRequest
    Payload for ``POST /api/favorites/toggle``.
FeedResponse
    Grid listing returned by ``GET /api/feed``.
ImageDetailResponse
    Detail view data returned by ``GET /api/images/{id}``.
RefreshResponse
    Outcome of ``POST /api/feed/refresh``.
ShareResponse
    Share target returned by ``GET /api/images/{id}/share``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from unsplash_gallery.core.feed_client import FetchStatus
from unsplash_gallery.core.models import Image


class FavoriteToggleRequest(BaseModel):
    """Request body for the ``POST /api/favorites/toggle`` endpoint.

    Attributes:
        image_id: Identifier of the image to toggle.
    """

    image_id: str = Field(
        ...,
        min_length=1,
        description="Identifier of the image to add to or remove from favorites.",
    )


class FeedResponse(BaseModel):
    """Response body for ``GET /api/feed``.

    Attributes:
        images: Images in feed order, filtered by ``query`` when one was given.
        total: Number of images returned.
        query: The search text applied (empty for the full feed).
        is_loading: Whether a fetch is currently in flight.
        last_status: Status of the most recent fetch, ``None`` before the
            first one completes.
    """

    images: list[Image]
    total: int
    query: str = ""
    is_loading: bool = False
    last_status: FetchStatus | None = None


class ImageDetailResponse(BaseModel):
    """Response body for ``GET /api/images/{id}``."""

    image: Image
    is_favorite: bool


class RefreshResponse(BaseModel):
    """Response body for ``POST /api/feed/refresh``.

    Fetch failures are reported here rather than as HTTP errors.

    Attributes:
        status: Outcome of the fetch cycle.
        count: Number of images in the store after the cycle.
        error: Failure description, ``None`` on success.
    """

    status: FetchStatus
    count: int
    error: str | None = None


class ShareResponse(BaseModel):
    """Response body for ``GET /api/images/{id}/share``."""

    id: str
    url: str
