"""Periodically refreshed in-memory product cache.

This is the only component allowed to replace the cached product list.
One asyncio task drives the refresh timer; readers get the current
immutable snapshot without ever waiting on a refresh.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, TypeVar

from greenbox._constants import DEFAULT_REFRESH_INTERVAL
from greenbox.config import GreenboxConfig
from greenbox.exceptions import GreenboxCacheError, GreenboxConfigError, GreenboxError
from greenbox.models.product import DisplayProduct
from greenbox.sources._base import ProductSource
from greenbox.transform import to_display_products

_logger = logging.getLogger(__name__)

_T = TypeVar("_T")

ProductList = tuple[DisplayProduct, ...]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CacheStatus(StrEnum):
    INITIALIZING = "initializing"
    READY = "ready"
    REFRESHING = "refreshing"
    STOPPED = "stopped"


class ProductCache:
    """In-memory product list refreshed from a product source on a timer.

    Usage::

        async with ProductCache(source, refresh_interval=600) as cache:
            products = cache.list()

    Parameters
    ----------
    source : ProductSource
        Where products come from.  Injected by the caller; see
        :func:`greenbox.sources.build_product_source`.
    refresh_interval : float
        Seconds between the end of one refresh cycle and the start of
        the next.
    on_refresh : callable, optional
        Called with the new product tuple after every committed refresh.
    on_refresh_error : callable, optional
        Called with the exception of every failed refresh cycle.
    clock : callable
        Returns the current time; used for ``last_refreshed_at``.
    """

    def __init__(
        self,
        source: ProductSource,
        *,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        on_refresh: Callable[[ProductList], None] | None = None,
        on_refresh_error: Callable[[Exception], None] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if refresh_interval <= 0:
            raise GreenboxConfigError(f"refresh_interval must be positive, got {refresh_interval}")
        self._source = source
        self._refresh_interval = refresh_interval
        self._on_refresh = on_refresh
        self._on_refresh_error = on_refresh_error
        self._clock = clock

        self._products: ProductList = ()
        self._status = CacheStatus.INITIALIZING
        self._last_refreshed_at: datetime | None = None
        self._refresh_count = 0
        self._failure_count = 0

        self._lock = asyncio.Lock()
        self._stop_event: asyncio.Event | None = None
        self._task: asyncio.Task[None] | None = None

    @classmethod
    def from_config(cls, config: GreenboxConfig, source: ProductSource, **kwargs: Any) -> ProductCache:
        """Build a cache using ``config.refresh_interval``."""
        kwargs.setdefault("refresh_interval", config.refresh_interval)
        return cls(source, **kwargs)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def status(self) -> CacheStatus:
        return self._status

    @property
    def refresh_interval(self) -> float:
        return self._refresh_interval

    @property
    def last_refreshed_at(self) -> datetime | None:
        """When the current product list was committed (``None`` before the first)."""
        return self._last_refreshed_at

    @property
    def refresh_count(self) -> int:
        """Number of committed refresh cycles, including the initial fetch."""
        return self._refresh_count

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def is_running(self) -> bool:
        """Whether the refresh timer is armed."""
        return self._task is not None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self) -> ProductList:
        """Return the current product list.

        Never blocks and never fetches.  The returned tuple is the
        snapshot of one completed refresh; later refreshes replace the
        cache's reference, not the tuple's contents.
        """
        return self._products

    def get(self, product_id: str) -> DisplayProduct | None:
        """Return the cached product with *product_id*, if any."""
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ProductCache:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        """Fetch the initial product list and arm the refresh timer.

        Errors from the initial fetch propagate; the timer is only armed
        once a first list has been committed.
        """
        if self._task is not None:
            raise GreenboxCacheError("Product cache is already running")

        self._status = CacheStatus.INITIALIZING
        async with self._lock:
            products = await self._fetch()
            self._commit(products)
        self._status = CacheStatus.READY

        stop_event = asyncio.Event()
        self._stop_event = stop_event
        self._task = asyncio.create_task(self._run(stop_event), name="greenbox-product-cache")
        _logger.info(
            "Product cache started with %d products, refreshing every %ss",
            len(products),
            self._refresh_interval,
        )

    async def stop(self) -> None:
        """Disarm the refresh timer.

        A refresh cycle already in progress completes first.  The last
        committed product list stays readable.
        """
        task = self._task
        if task is None:
            return
        if self._stop_event is not None:
            self._stop_event.set()
        try:
            await task
        finally:
            self._task = None
            self._stop_event = None
        # Waits out a manual refresh() that is still in flight.
        async with self._lock:
            self._status = CacheStatus.STOPPED
        _logger.info("Product cache stopped with %d products", len(self._products))

    async def refresh(self) -> ProductList:
        """Run one refresh cycle now and return the committed list.

        Failures are reported like a timer tick (previous list kept,
        ``on_refresh_error`` called) and then re-raised.
        """
        if self._task is None:
            raise GreenboxCacheError("Product cache is not running; call start() first")
        error = await self._refresh_cycle()
        if error is not None:
            raise error
        return self._products

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._refresh_interval)
            except TimeoutError:
                await self._refresh_cycle()

    async def _fetch(self) -> ProductList:
        raw_products = await self._source.fetch_products()
        return to_display_products(raw_products)

    async def _refresh_cycle(self) -> Exception | None:
        """Fetch, transform and commit; return the failure instead of raising it."""
        async with self._lock:
            if self._status is CacheStatus.STOPPED:
                return GreenboxCacheError("Product cache was stopped before the refresh could run")
            self._status = CacheStatus.REFRESHING
            try:
                products = await self._fetch()
            except Exception as exc:
                self._record_failure(exc)
                return exc
            finally:
                self._status = CacheStatus.READY
            self._commit(products)
            _logger.debug("Product cache refreshed with %d products", len(products))
            return None

    def _commit(self, products: ProductList) -> None:
        # Single reference swap; readers see either the old or the new tuple.
        self._products = products
        self._last_refreshed_at = self._clock()
        self._refresh_count += 1
        self._notify(self._on_refresh, products)

    def _record_failure(self, exc: Exception) -> None:
        self._failure_count += 1
        if isinstance(exc, GreenboxError):
            _logger.warning(
                "Product refresh failed, keeping %d cached products: %s",
                len(self._products),
                exc,
            )
        else:
            _logger.warning(
                "Product refresh failed unexpectedly, keeping %d cached products",
                len(self._products),
                exc_info=exc,
            )
        self._notify(self._on_refresh_error, exc)

    def _notify(self, callback: Callable[[_T], None] | None, value: _T) -> None:
        if callback is None:
            return
        try:
            callback(value)
        except Exception:
            _logger.exception("Product cache observer %r failed", callback)
