"""HTTP client for the upstream photo feed.

:class:`FeedClient` performs exactly one ``GET {base}/photos/?client_id={key}``
per call and turns every possible outcome into a :class:`FetchResult`.  It
never raises for fetch failures; the caller inspects ``result.status``
instead.

Failure classification
----------------------
=====================  ===================================================
Status                 Cause
=====================  ===================================================
``invalid_url``        Base URL has no http(s) scheme/host, or empty key.
                       No request is sent.
``transport_error``    Any ``httpx.HTTPError`` raised by the request, or a
                       response with an empty body.
``decode_error``       Body is not a JSON array of well-formed photos.
=====================  ===================================================

HTTP status codes are not checked.  The body is decoded whatever the status,
so an Unsplash error payload (``{"errors": [...]}``) surfaces as a
``decode_error`` and the status code appears in the log line.

There is no retry and no timeout beyond the one configured through
``request_timeout`` (httpx's default applies when it is unset).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import httpx

from unsplash_gallery.core.config import GalleryConfig
from unsplash_gallery.core.models import FeedDecodeError, Image, decode_feed

logger = logging.getLogger(__name__)


class InvalidFeedURLError(ValueError):
    """Raised when the feed URL cannot be built from the configuration."""


class FetchStatus(str, Enum):
    """Outcome of one fetch cycle."""

    OK = "ok"
    TRANSPORT_ERROR = "transport_error"
    DECODE_ERROR = "decode_error"
    INVALID_URL = "invalid_url"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class FetchResult:
    """The single value handed back from the network side of a fetch.

    Attributes:
        status: Outcome classification.
        images: Decoded images in upstream order (empty unless ``status`` is
            ``OK``).
        error: Human-readable failure description, ``None`` on success.
    """

    status: FetchStatus
    images: tuple[Image, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the fetch produced a decoded feed."""
        return self.status is FetchStatus.OK


def build_feed_url(base_url: str, access_key: str) -> httpx.URL:
    """Build the photo feed URL.

    Args:
        base_url: API root, e.g. ``https://api.unsplash.com``.
        access_key: Static ``client_id`` credential.

    Returns:
        ``{base_url}/photos/?client_id={access_key}``

    Raises:
        InvalidFeedURLError: If the base URL is not an absolute http(s) URL or
            the access key is empty.
    """
    if not access_key:
        raise InvalidFeedURLError("Access key is empty")

    try:
        url = httpx.URL(f"{base_url.rstrip('/')}/photos/", params={"client_id": access_key})
    except httpx.InvalidURL as e:
        raise InvalidFeedURLError(f"Malformed base URL {base_url!r}: {e}") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidFeedURLError(f"Base URL must be an absolute http(s) URL, got {base_url!r}")

    return url


class FeedClient:
    """Fetches and decodes the photo feed.

    Args:
        config: Gallery configuration supplying the base URL, access key and
            optional timeout.
        http_client: Optional pre-built ``httpx.AsyncClient``.  When given, the
            caller owns it and :meth:`aclose` leaves it open.
    """

    def __init__(self, config: GalleryConfig, http_client: httpx.AsyncClient | None = None):
        self.config = config
        self._owns_client = http_client is None
        if http_client is None:
            if config.request_timeout is not None:
                http_client = httpx.AsyncClient(timeout=config.request_timeout)
            else:
                http_client = httpx.AsyncClient()
        self._client = http_client

    async def fetch_photos(self) -> FetchResult:
        """Run one request/decode cycle against the feed endpoint.

        Returns:
            A :class:`FetchResult`.  Never raises for network or decoding
            failures.
        """
        try:
            url = build_feed_url(self.config.api_base_url, self.config.access_key)
        except InvalidFeedURLError as e:
            logger.error(f"Feed fetch skipped: {e}")
            return FetchResult(FetchStatus.INVALID_URL, error=str(e))

        # Never log the full URL, it carries the access key.
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Feed request to {url.host} failed: {e!r}")
            return FetchResult(FetchStatus.TRANSPORT_ERROR, error=str(e) or type(e).__name__)

        if not response.content:
            logger.warning(f"Feed request returned no data (HTTP {response.status_code})")
            return FetchResult(FetchStatus.TRANSPORT_ERROR, error="Empty response body")

        try:
            images = decode_feed(response.content)
        except FeedDecodeError as e:
            logger.warning(f"Failed to decode feed (HTTP {response.status_code}): {e}")
            return FetchResult(FetchStatus.DECODE_ERROR, error=str(e))

        logger.info(f"Fetched {len(images)} images from feed")
        return FetchResult(FetchStatus.OK, images=tuple(images))

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
            logger.debug("Feed HTTP client closed")

    async def __aenter__(self) -> FeedClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
