"""Cache and product source configuration for greenbox."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable
from typing import Any, TypeVar

from greenbox._constants import (
    DEFAULT_MEMORY_SIZE,
    DEFAULT_PRODUCTS_URL,
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    PRODUCT_SOURCES,
    SOURCE_HTTP,
)
from greenbox.exceptions import GreenboxConfigError

_N = TypeVar("_N", int, float)


def _env_number(env_key: str, value: str, cast: Callable[[str], _N]) -> _N:
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise GreenboxConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class GreenboxConfig:
    """Product cache configuration.

    Parameters
    ----------
    products_url : str
        URL answering ``GET`` with a JSON array of products.
    refresh_interval : float
        Seconds between the end of one refresh cycle and the start of
        the next.  Defaults to 10 minutes.
    request_timeout : float
        Total timeout in seconds for a single upstream fetch.
    product_source : str
        Which product source to build: ``"http"`` for the live endpoint
        or ``"memory"`` for the deterministic in-memory stand-in.
    api_token : str or None
        Optional bearer token sent to the products endpoint.
    memory_seed : int or None
        Seed for the in-memory source's generated product lists.
    memory_size : int
        Number of products the in-memory source generates per fetch.
    """

    products_url: str = DEFAULT_PRODUCTS_URL
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    product_source: str = SOURCE_HTTP
    api_token: str | None = None
    memory_seed: int | None = None
    memory_size: int = DEFAULT_MEMORY_SIZE

    def __post_init__(self) -> None:
        if self.refresh_interval <= 0:
            raise GreenboxConfigError(f"refresh_interval must be positive, got {self.refresh_interval}")
        if self.request_timeout <= 0:
            raise GreenboxConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.memory_size <= 0:
            raise GreenboxConfigError(f"memory_size must be positive, got {self.memory_size}")
        if self.product_source not in PRODUCT_SOURCES:
            raise GreenboxConfigError(
                f"product_source must be one of {sorted(PRODUCT_SOURCES)}, got {self.product_source!r}"
            )
        if self.product_source == SOURCE_HTTP and not self.products_url.strip():
            raise GreenboxConfigError("products_url is required for the http product source")

    @classmethod
    def from_env(cls, **overrides: Any) -> GreenboxConfig:
        """Create configuration from environment variables.

        Reads optional ``GREENBOX_*`` variables.  Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        GreenboxConfig
            Populated configuration.

        Raises
        ------
        GreenboxConfigError
            If a numeric variable cannot be parsed or a value is invalid.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "GREENBOX_PRODUCTS_URL": "products_url",
            "GREENBOX_PRODUCT_SOURCE": "product_source",
            "GREENBOX_API_TOKEN": "api_token",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val.strip()

        _ENV_NUMBER_MAP: dict[str, tuple[str, Callable[[str], Any]]] = {
            "GREENBOX_REFRESH_INTERVAL": ("refresh_interval", float),
            "GREENBOX_REQUEST_TIMEOUT": ("request_timeout", float),
            "GREENBOX_MEMORY_SEED": ("memory_seed", int),
            "GREENBOX_MEMORY_SIZE": ("memory_size", int),
        }
        for env_key, (field_name, cast) in _ENV_NUMBER_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, cast)

        # An empty token in the environment means "no token"
        if config_kwargs.get("api_token") == "":
            config_kwargs["api_token"] = None

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
