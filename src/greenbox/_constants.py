"""Internal constants shared across the library."""

DEFAULT_PRODUCTS_URL = "http://localhost:4000/api/products"
USER_AGENT = "greenbox/1 (+aiohttp)"

#: Ten minutes, the refresh cadence of the storefront's price list.
DEFAULT_REFRESH_INTERVAL: float = 10 * 60
DEFAULT_REQUEST_TIMEOUT: float = 30.0
DEFAULT_MEMORY_SIZE = 10

SOURCE_HTTP = "http"
SOURCE_MEMORY = "memory"
PRODUCT_SOURCES: frozenset[str] = frozenset({SOURCE_HTTP, SOURCE_MEMORY})
