# src/interviewprep_router/core/errors.py
from __future__ import annotations


class RouterError(Exception):
    """Base error for everything raised by the router."""


class EmptyPoolError(RouterError):
    """No credentials configured for the requested provider."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"No API keys configured for provider '{provider}'")


class ProviderError(RouterError):
    """A provider call failed after the request was sent."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class ProviderHttpError(ProviderError):
    """Non-2xx HTTP status from a provider."""

    def __init__(self, provider: str, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(provider, f"HTTP {status_code}: {body[:400]}")


class ProviderResponseError(ProviderError):
    """2xx response whose payload is missing the expected fields."""
