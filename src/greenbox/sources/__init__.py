"""Product sources and deployment-time source selection."""

from __future__ import annotations

import aiohttp

from greenbox._constants import SOURCE_HTTP, SOURCE_MEMORY
from greenbox.config import GreenboxConfig
from greenbox.exceptions import GreenboxConfigError
from greenbox.sources._base import ProductSource
from greenbox.sources.http import HttpProductSource, parse_products
from greenbox.sources.memory import InMemoryProductSource


def build_product_source(
    config: GreenboxConfig,
    *,
    session: aiohttp.ClientSession | None = None,
) -> HttpProductSource | InMemoryProductSource:
    """Build the product source selected by ``config.product_source``.

    The result is meant to be injected into
    :class:`~greenbox.cache.ProductCache`; the cache itself never picks
    a source.
    """
    if config.product_source == SOURCE_HTTP:
        return HttpProductSource(config, session=session)
    if config.product_source == SOURCE_MEMORY:
        return InMemoryProductSource(seed=config.memory_seed, size=config.memory_size)
    raise GreenboxConfigError(f"Unknown product source {config.product_source!r}")


__all__ = [
    "HttpProductSource",
    "InMemoryProductSource",
    "ProductSource",
    "build_product_source",
    "parse_products",
]
