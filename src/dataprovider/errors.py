"""Exceptions raised by the dataprovider framework."""

from typing import Any

__all__ = ["DataProviderError", "ProviderMissingError", "ProviderCycleError"]


class DataProviderError(Exception):
    """Base class for errors raised while registering or resolving providers."""

    pass


class ProviderMissingError(DataProviderError):
    """Raised when an identifier resolves to no static value, provider or fallback.

    Attributes:
        provider_id: The identifier that could not be resolved.
    """

    def __init__(self, provider_id: Any, message: str = None):
        self.provider_id = provider_id
        super().__init__(
            message or f"Tried to take data from missing provider: {provider_id!r}"
        )


class ProviderCycleError(DataProviderError):
    """Raised when cycle detection is enabled and a provider re-enters itself.

    Attributes:
        path: Identifiers of the in-flight providers, outermost first, ending
            with the provider that was re-entered.
    """

    def __init__(self, path: tuple):
        self.path = path
        super().__init__(
            "Provider cycle detected: %s" % " -> ".join(repr(p) for p in path)
        )
