"""In-memory feed, favorites and search state for the gallery.

:class:`FeedStore` is the single object the presentation layer talks to.  It
owns three pieces of state:

- ``images``: the feed as last returned by the upstream API, replaced
  wholesale on every applied fetch and never reordered
- ``favorites``: user-selected images in the order they were added, keyed by
  image ``id`` and independent of feed freshness
- ``search_query``: the photographer filter currently typed by the user

Update context
--------------
The store is affine to the asyncio event loop that runs :meth:`fetch_feed`.
Network I/O happens inside the awaited :class:`FeedClient` coroutine and only
its :class:`FetchResult` comes back; the ``images`` replacement then happens
after the await, on that loop, in a single assignment.  Presentation code
running on another thread triggers fetches with :meth:`schedule_fetch`, which
submits the cycle to the store's loop rather than mutating from the caller's
thread.

Overlapping fetches
-------------------
Fetches are never cancelled.  Each one is numbered when it starts, and a
result is applied only if no later-started fetch has been applied already.
Older responses that arrive late are reported as ``superseded``.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
from collections.abc import Callable
from dataclasses import replace

from unsplash_gallery.core.feed_client import FeedClient, FetchResult, FetchStatus
from unsplash_gallery.core.models import Image

logger = logging.getLogger(__name__)

Listener = Callable[["FeedStore"], None]


class FeedStore:
    """Feed synchronization and local favorites/search state.

    Args:
        client: Feed client used by :meth:`fetch_feed`.
        prune_stale_favorites: If True, favorites whose ``id`` is absent from a
            newly applied feed are dropped.  By default they are kept.
    """

    def __init__(self, client: FeedClient, *, prune_stale_favorites: bool = False):
        self._client = client
        self.prune_stale_favorites = prune_stale_favorites

        self._images: tuple[Image, ...] = ()
        self._favorites: dict[str, Image] = {}  # insertion-ordered
        self._search_query: str = ""

        self._listeners: list[Listener] = []
        self._in_flight = 0
        self._started_seq = 0
        self._applied_seq = 0
        self.last_result: FetchResult | None = None

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def images(self) -> tuple[Image, ...]:
        """The current feed in upstream order."""
        return self._images

    @property
    def favorites(self) -> list[Image]:
        """Favorited images in the order they were added."""
        return list(self._favorites.values())

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def is_loading(self) -> bool:
        """True while at least one fetch is in flight."""
        return self._in_flight > 0

    @property
    def visible_images(self) -> tuple[Image, ...]:
        """The feed filtered by the current search query."""
        return self.filtered_images(self._search_query)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback invoked with the store after every change.

        Args:
            listener: Callable receiving this store.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"Feed store listener {listener!r} failed: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    async def fetch_feed(self) -> FetchResult:
        """Run one fetch/decode/replace cycle.

        On success ``images`` is replaced with the decoded feed.  On any
        failure ``images`` is left untouched.  No exception is raised for
        fetch failures; the outcome is returned and kept in ``last_result``.

        Returns:
            The :class:`FetchResult` of this cycle.
        """
        self._started_seq += 1
        seq = self._started_seq
        self._in_flight += 1
        try:
            result = await self._client.fetch_photos()
        finally:
            self._in_flight -= 1

        # Back on the update context from here on.
        if result.ok:
            if seq < self._applied_seq:
                logger.debug(f"Discarding feed response #{seq}, #{self._applied_seq} already applied")
                result = replace(result, status=FetchStatus.SUPERSEDED, images=())
            else:
                self._apply_images(result.images)
                self._applied_seq = seq

        self.last_result = result
        self._notify()
        return result

    def _apply_images(self, images: tuple[Image, ...]) -> None:
        self._images = images

        if self.prune_stale_favorites and self._favorites:
            current_ids = {image.id for image in images}
            stale = [image_id for image_id in self._favorites if image_id not in current_ids]
            for image_id in stale:
                del self._favorites[image_id]
            if stale:
                logger.info(f"Pruned {len(stale)} stale favorite(s)")

        logger.debug(f"Feed replaced with {len(images)} images")

    def schedule_fetch(
        self, loop: asyncio.AbstractEventLoop | None = None
    ) -> asyncio.Task | concurrent.futures.Future:
        """Start a fetch without waiting for it.

        Called by the presentation layer when a view appears.  From inside the
        store's loop a task is created on it; from another thread pass the
        store's loop and the cycle is submitted to it thread-safely.

        Args:
            loop: The store's event loop.  Defaults to the running loop.

        Returns:
            The scheduled task (same loop) or a concurrent future (other
            thread), resolving to the :class:`FetchResult`.
        """
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if loop is None or loop is running:
            if running is None:
                raise RuntimeError("schedule_fetch() needs a loop when called outside one")
            return running.create_task(self.fetch_feed())

        return asyncio.run_coroutine_threadsafe(self.fetch_feed(), loop)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def toggle_favorite(self, image: Image) -> bool:
        """Add the image to favorites, or remove it if already there.

        Args:
            image: Image to toggle (matched by ``id``).

        Returns:
            True if the image is now a favorite, False if it was removed.
        """
        if image.id in self._favorites:
            del self._favorites[image.id]
            logger.info(f"Removed from favorites: {image.id}")
            now_favorite = False
        else:
            self._favorites[image.id] = image
            logger.info(f"Added to favorites: {image.id}")
            now_favorite = True

        self._notify()
        return now_favorite

    def is_favorite(self, image: Image) -> bool:
        return image.id in self._favorites

    # ------------------------------------------------------------------
    # Search and lookup
    # ------------------------------------------------------------------

    def filtered_images(self, query: str) -> tuple[Image, ...]:
        """Return images whose author name contains ``query``, ignoring case.

        An empty query returns ``images`` itself.  Order is preserved and the
        store is never modified.

        Args:
            query: Substring to look for in ``author_name``.

        Returns:
            Matching images in feed order.
        """
        if not query:
            return self._images

        needle = query.casefold()
        return tuple(image for image in self._images if needle in image.author_name.casefold())

    def set_search_query(self, query: str) -> None:
        """Store the presentation layer's current search text."""
        if query == self._search_query:
            return
        self._search_query = query
        self._notify()

    def get_image(self, image_id: str) -> Image | None:
        """Look up an image by id in the feed, then among favorites.

        Favorites are searched too so a favorite dropped from the latest feed
        can still be opened.
        """
        for image in self._images:
            if image.id == image_id:
                return image
        return self._favorites.get(image_id)

    def share_url(self, image_id: str) -> str | None:
        """Return the full-resolution URL to hand to the share collaborator."""
        image = self.get_image(image_id)
        return image.full_url if image is not None else None

    def __repr__(self) -> str:
        return (
            f"FeedStore(images={len(self._images)}, "
            f"favorites={len(self._favorites)}, "
            f"loading={self.is_loading})"
        )
