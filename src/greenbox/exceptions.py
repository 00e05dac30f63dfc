"""Custom exception hierarchy for greenbox."""

from __future__ import annotations


class GreenboxError(Exception):
    """Base exception for all greenbox errors."""


class GreenboxConfigError(GreenboxError):
    """Invalid or missing configuration."""


class GreenboxTransportError(GreenboxError):
    """HTTP-level failure (network, timeout, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class GreenboxPayloadError(GreenboxError):
    """Upstream returned a product record that failed validation.

    The whole response is rejected; ``index`` is the position of the
    first offending record in the upstream list.
    """

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        url: str = "",
    ) -> None:
        self.index = index
        self.url = url
        super().__init__(message)


class GreenboxCacheError(GreenboxError):
    """Product cache used outside its lifecycle (e.g. started twice)."""
