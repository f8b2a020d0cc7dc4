"""Tests for unsplash_gallery.api.models - Pydantic request/response models.

Tests cover:
- FavoriteToggleRequest field validation.
- FeedResponse defaults and status serialisation.
- RefreshResponse error reporting.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from unsplash_gallery.api.models import (
    FavoriteToggleRequest,
    FeedResponse,
    ImageDetailResponse,
    RefreshResponse,
    ShareResponse,
)
from unsplash_gallery.core.feed_client import FetchStatus


class TestFavoriteToggleRequest:
    """Test FavoriteToggleRequest Pydantic model."""

    def test_valid_request(self):
        """A request with an image id should validate."""
        req = FavoriteToggleRequest(image_id="abc")
        assert req.image_id == "abc"

    def test_missing_image_id_raises(self):
        """Omitting image_id should raise ValidationError."""
        with pytest.raises(ValidationError):
            FavoriteToggleRequest()

    def test_empty_image_id_raises(self):
        """An empty id should be rejected."""
        with pytest.raises(ValidationError):
            FavoriteToggleRequest(image_id="")


class TestFeedResponse:
    """Test FeedResponse Pydantic model."""

    def test_defaults(self, image_factory):
        """Optional fields should default to an idle, unfiltered feed."""
        resp = FeedResponse(images=[image_factory("1", "Ana")], total=1)
        assert resp.query == ""
        assert resp.is_loading is False
        assert resp.last_status is None

    def test_status_serialises_as_string(self):
        """The fetch status should appear as its string value in JSON."""
        resp = FeedResponse(images=[], total=0, last_status=FetchStatus.DECODE_ERROR)
        assert resp.model_dump(mode="json")["last_status"] == "decode_error"

    def test_images_serialise_flat(self, image_factory):
        """Images should serialise with the flattened field names."""
        resp = FeedResponse(images=[image_factory("1", "Ana")], total=1)
        data = resp.model_dump(mode="json")
        assert data["images"][0] == {
            "id": "1",
            "thumbnail_url": "https://images.unsplash.com/1?w=400",
            "full_url": "https://images.unsplash.com/1?w=1080",
            "author_name": "Ana",
        }


class TestOtherResponses:
    """Test the remaining response models."""

    def test_refresh_response_error_defaults_to_none(self):
        """A successful refresh has no error."""
        resp = RefreshResponse(status=FetchStatus.OK, count=3)
        assert resp.error is None

    def test_refresh_response_accepts_string_status(self):
        """Status values should validate from their string form."""
        resp = RefreshResponse(status="transport_error", count=0, error="offline")
        assert resp.status is FetchStatus.TRANSPORT_ERROR

    def test_detail_response(self, image_factory):
        """Detail response should carry the image and favorite flag."""
        resp = ImageDetailResponse(image=image_factory("1", "Ana"), is_favorite=True)
        assert resp.image.author_name == "Ana"
        assert resp.is_favorite is True

    def test_share_response_requires_url(self):
        """Share response without a URL should fail validation."""
        with pytest.raises(ValidationError):
            ShareResponse(id="1")
