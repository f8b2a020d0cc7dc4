"""Unsplash Gallery - FastAPI Application.

This module defines the FastAPI ``app`` instance, the REST routes a gallery
front end uses, and the ``main()`` CLI function that launches the uvicorn
server.

Architecture
------------
- **State** lives in a single :class:`~unsplash_gallery.core.feed_store.FeedStore`
  created by the application lifespan and stored on ``app.state``.  Routes
  receive it through the :func:`get_feed_store` dependency, so tests can
  override it.
- **The initial fetch** is scheduled on startup, the server-side equivalent of
  the grid view appearing.  Startup does not wait for it.
- **Fetch failures** never become HTTP errors.  ``POST /api/feed/refresh``
  always answers 200 and reports the outcome in its ``status`` field.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/api/feed``                 Grid listing, optional ``query``
POST      ``/api/feed/refresh``         Run one fetch cycle
GET       ``/api/images/{id}``          Detail view data
GET       ``/api/images/{id}/share``    Full-resolution URL for sharing
GET       ``/api/favorites``            Favorites in insertion order
POST      ``/api/favorites/toggle``     Toggle favorite status
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    unsplash-gallery

Direct invocation::

    python -m unsplash_gallery.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from unsplash_gallery import __version__
from unsplash_gallery.api.models import (
    FavoriteToggleRequest,
    FeedResponse,
    ImageDetailResponse,
    RefreshResponse,
    ShareResponse,
)
from unsplash_gallery.core.config import config
from unsplash_gallery.core.feed_client import FeedClient
from unsplash_gallery.core.feed_store import FeedStore
from unsplash_gallery.core.models import Image

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle - feed client and store setup and teardown.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Creates the :class:`FeedClient` and :class:`FeedStore`, stores the
        store on ``app.state`` and schedules the first fetch without waiting
        for it.

    On shutdown:
        Closes the feed client's HTTP connection pool.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    # --- Startup -----------------------------------------------------------
    client = FeedClient(config)
    store = FeedStore(client, prune_stale_favorites=config.prune_stale_favorites)
    app.state.feed_store = store
    app.state.initial_fetch = store.schedule_fetch()
    logger.info("FeedStore initialised, initial fetch scheduled.")

    yield  # Application runs here.

    # --- Shutdown ----------------------------------------------------------
    await client.aclose()
    logger.info("Feed client closed on shutdown.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Unsplash Gallery",
    description="Photo feed with favorites, photographer search and sharing.",
    version=__version__,
    lifespan=lifespan,
)

# Allow cross-origin requests so the front end can be served from a different
# port during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_feed_store(request: Request) -> FeedStore:
    """Return the store created by :func:`lifespan`."""
    return request.app.state.feed_store


def _require_image(store: FeedStore, image_id: str) -> Image:
    """Look up an image or raise 404.

    Raises:
        HTTPException: 404 if the id is in neither the feed nor favorites.
    """
    image = store.get_image(image_id)
    if image is None:
        raise HTTPException(status_code=404, detail="Image not found")
    return image


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/feed", response_model=FeedResponse)
async def get_feed(query: str = "", store: FeedStore = Depends(get_feed_store)) -> FeedResponse:
    """Return the gallery grid, optionally filtered by photographer.

    Args:
        query: Case-insensitive substring matched against author names.
            Empty returns the whole feed.

    Returns:
        :class:`FeedResponse` with the images, count, loading flag and last
        fetch status.
    """
    images = store.filtered_images(query)
    last = store.last_result
    return FeedResponse(
        images=list(images),
        total=len(images),
        query=query,
        is_loading=store.is_loading,
        last_status=last.status if last is not None else None,
    )


@app.post("/api/feed/refresh", response_model=RefreshResponse)
async def refresh_feed(store: FeedStore = Depends(get_feed_store)) -> RefreshResponse:
    """Run one fetch cycle and report its outcome.

    Returns:
        :class:`RefreshResponse`.  Failures are reported in ``status``; the
        previous feed stays in place.
    """
    result = await store.fetch_feed()
    return RefreshResponse(status=result.status, count=len(store.images), error=result.error)


@app.get("/api/images/{image_id}", response_model=ImageDetailResponse)
async def get_image(
    image_id: str, store: FeedStore = Depends(get_feed_store)
) -> ImageDetailResponse:
    """Return detail view data for one image.

    Raises:
        HTTPException: 404 if the image is unknown.
    """
    image = _require_image(store, image_id)
    return ImageDetailResponse(image=image, is_favorite=store.is_favorite(image))


@app.get("/api/images/{image_id}/share", response_model=ShareResponse)
async def share_image(image_id: str, store: FeedStore = Depends(get_feed_store)) -> ShareResponse:
    """Return the full-resolution URL to pass to the platform share sheet.

    Raises:
        HTTPException: 404 if the image is unknown.
    """
    url = store.share_url(image_id)
    if url is None:
        raise HTTPException(status_code=404, detail="Image not found")
    return ShareResponse(id=image_id, url=url)


@app.get("/api/favorites", response_model=list[Image])
async def list_favorites(store: FeedStore = Depends(get_feed_store)) -> list[Image]:
    """Return favorites in the order they were added."""
    return store.favorites


@app.post("/api/favorites/toggle")
async def toggle_favorite(
    req: FavoriteToggleRequest, store: FeedStore = Depends(get_feed_store)
) -> dict:
    """Toggle the favorite status of an image.

    Args:
        req: Validated :class:`FavoriteToggleRequest` payload.

    Returns:
        Dictionary with ``success``, ``id``, and ``is_favorite``.

    Raises:
        HTTPException: 404 if the image is unknown.
    """
    image = _require_image(store, req.image_id)
    is_favorite = store.toggle_favorite(image)
    return {"success": True, "id": image.id, "is_favorite": is_favorite}


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Configure logging and launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~unsplash_gallery.core.config.config`
    (``UNSPLASH_GALLERY_SERVER_HOST``, ``UNSPLASH_GALLERY_SERVER_PORT`` and
    ``UNSPLASH_GALLERY_LOG_LEVEL``).  Defaults to ``0.0.0.0:7860``.

    This function is registered as the ``unsplash-gallery`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # httpx logs full request URLs at INFO, which include the access key.
    logging.getLogger("httpx").setLevel(logging.WARNING)

    uvicorn.run(
        "unsplash_gallery.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
