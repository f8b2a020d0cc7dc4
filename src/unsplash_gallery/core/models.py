"""Image records and Unsplash feed decoding.

The upstream ``/photos/`` endpoint returns a JSON array of photo objects with
far more fields than the gallery needs.  Only four values are kept:

========================  ==================
Upstream field            ``Image`` field
========================  ==================
``id``                    ``id``
``urls.small``            ``thumbnail_url``
``urls.regular``          ``full_url``
``user.name``             ``author_name``
========================  ==================

Decoding is all-or-nothing: if any element of the array is missing one of
these fields (or has the wrong type), the whole response is rejected with a
:class:`FeedDecodeError`.  Unknown fields are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


class FeedDecodeError(ValueError):
    """Raised when a feed response body does not match the expected shape."""


class Image(BaseModel):
    """A single photo in the gallery feed.

    Images are immutable.  Identity is the ``id`` field: the store keys
    favorites by ``id``, so two records with the same ``id`` refer to the same
    photo even if their other fields differ.

    Attributes:
        id: Unsplash photo identifier.
        thumbnail_url: Small rendition used in the grid.
        full_url: Regular rendition used for the detail view and sharing.
        author_name: Display name of the photographer.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique photo identifier.")
    thumbnail_url: str = Field(..., description="Grid thumbnail URL.")
    full_url: str = Field(..., description="Full-resolution URL for detail and share.")
    author_name: str = Field(..., description="Photographer display name.")


# ---------------------------------------------------------------------------
# Upstream wire models.
# ---------------------------------------------------------------------------


class PhotoUrls(BaseModel):
    """The ``urls`` object of an Unsplash photo (subset)."""

    small: str
    regular: str


class PhotoUser(BaseModel):
    """The ``user`` object of an Unsplash photo (subset)."""

    name: str


class UnsplashPhoto(BaseModel):
    """One element of the ``GET /photos/`` response array."""

    id: str
    urls: PhotoUrls
    user: PhotoUser

    def to_image(self) -> Image:
        """Flatten the nested upstream record into an :class:`Image`."""
        return Image(
            id=self.id,
            thumbnail_url=self.urls.small,
            full_url=self.urls.regular,
            author_name=self.user.name,
        )


_FEED_ADAPTER = TypeAdapter(list[UnsplashPhoto])


def decode_feed(content: bytes | str) -> list[Image]:
    """Decode a ``/photos/`` response body into images, preserving order.

    Args:
        content: Raw JSON response body.

    Returns:
        Images in the order the upstream returned them.

    Raises:
        FeedDecodeError: If the body is not valid JSON or any element lacks a
            required field.
    """
    try:
        photos = _FEED_ADAPTER.validate_json(content)
    except ValidationError as e:
        raise FeedDecodeError(
            f"Feed response did not match the expected shape "
            f"({e.error_count()} error(s)): {e.errors()[0]['msg']}"
        ) from e

    return [photo.to_image() for photo in photos]
