"""Live product source: ``GET`` a JSON array of products over HTTP."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from greenbox._constants import USER_AGENT
from greenbox._redact import redact_for_log
from greenbox.config import GreenboxConfig
from greenbox.exceptions import GreenboxError, GreenboxPayloadError, GreenboxTransportError
from greenbox.models.product import RawProduct

_logger = logging.getLogger(__name__)


def _preview(body: bytes) -> str:
    return body[:200].decode("utf-8", errors="replace")


def parse_products(payload: Any, *, url: str = "") -> list[RawProduct]:
    """Validate a decoded products response.

    Parameters
    ----------
    payload : Any
        Decoded JSON body; must be a list of product objects.
    url : str
        Source URL, used in error messages only.

    Returns
    -------
    list[RawProduct]
        Products in upstream order.

    Raises
    ------
    GreenboxTransportError
        If the body is not a JSON array.
    GreenboxPayloadError
        If any record fails validation.  The whole list is rejected.
    """
    if not isinstance(payload, list):
        raise GreenboxTransportError(
            f"Expected a JSON array from {url}, got {type(payload).__name__}",
            url=url,
        )

    products: list[RawProduct] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise GreenboxPayloadError(
                f"Product #{index} from {url} is not an object: {item!r:.64}",
                index=index,
                url=url,
            )
        try:
            products.append(RawProduct.model_validate(item))
        except ValidationError as exc:
            raise GreenboxPayloadError(
                f"Product #{index} from {url} is invalid: {exc.error_count()} error(s)",
                index=index,
                url=url,
            ) from exc
    return products


class HttpProductSource:
    """Product source backed by the storefront's products endpoint.

    Usage::

        async with HttpProductSource(config) as source:
            products = await source.fetch_products()
    """

    def __init__(
        self,
        config: GreenboxConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session

    @property
    def url(self) -> str:
        return self._config.products_url

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> HttpProductSource:
        self._require_session()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this source created it."""
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
        self._http_session = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            if self._external_session:
                raise GreenboxError("Injected HTTP session was already released")
            self._http_session = aiohttp.ClientSession()
        return self._http_session

    def _build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if self._config.api_token:
            headers["authorization"] = f"Bearer {self._config.api_token}"
        return headers

    # ------------------------------------------------------------------
    # ProductSource
    # ------------------------------------------------------------------

    async def fetch_products(self) -> list[RawProduct]:
        """Fetch and validate the current product list."""
        http = self._require_session()
        url = self.url
        headers = self._build_headers()
        timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)

        _logger.debug("GET %s headers=%s", url, redact_for_log(headers))

        try:
            async with http.get(url, headers=headers, timeout=timeout) as resp:
                body_bytes = await resp.read()
                if resp.status != 200:
                    raise GreenboxTransportError(
                        f"HTTP {resp.status} from {url}: {_preview(body_bytes)}",
                        status_code=resp.status,
                        url=url,
                    )
        except GreenboxTransportError:
            raise
        except TimeoutError as exc:
            raise GreenboxTransportError(
                f"Request to {url} timed out after {self._config.request_timeout}s",
                url=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise GreenboxTransportError(
                f"Request to {url} failed: {exc}",
                url=url,
            ) from exc

        try:
            body = json.loads(body_bytes.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise GreenboxTransportError(
                f"Invalid JSON from {url}: {_preview(body_bytes)}",
                status_code=200,
                url=url,
            ) from exc

        _logger.debug("GET %s response=%s", url, redact_for_log(body))

        return parse_products(body, url=url)
