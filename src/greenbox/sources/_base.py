"""Product source capability shared by the cache and its collaborators."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from greenbox.models.product import RawProduct


@runtime_checkable
class ProductSource(Protocol):
    """Structural product source interface used by the cache.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpProductSource`) concrete.
    """

    async def fetch_products(self) -> list[RawProduct]:
        """Return all current products in upstream order.

        Raises a :class:`~greenbox.exceptions.GreenboxError` subclass when
        the products cannot be fetched.
        """
        ...
