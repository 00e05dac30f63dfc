"""greenbox - Periodically refreshed in-memory product price cache."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("greenbox")
except PackageNotFoundError:
    __version__ = "0+local"
from greenbox.cache import CacheStatus, ProductCache
from greenbox.config import GreenboxConfig
from greenbox.exceptions import (
    GreenboxCacheError,
    GreenboxConfigError,
    GreenboxError,
    GreenboxPayloadError,
    GreenboxTransportError,
)
from greenbox.models import DisplayProduct, RawProduct
from greenbox.sources import (
    HttpProductSource,
    InMemoryProductSource,
    ProductSource,
    build_product_source,
)
from greenbox.transform import capitalize_name, price_to_money, to_display_product, to_display_products

__all__ = [
    "__version__",
    "CacheStatus",
    "DisplayProduct",
    "GreenboxCacheError",
    "GreenboxConfig",
    "GreenboxConfigError",
    "GreenboxError",
    "GreenboxPayloadError",
    "GreenboxTransportError",
    "HttpProductSource",
    "InMemoryProductSource",
    "ProductCache",
    "ProductSource",
    "RawProduct",
    "build_product_source",
    "capitalize_name",
    "price_to_money",
    "to_display_product",
    "to_display_products",
]
