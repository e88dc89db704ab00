"""Hierarchical data providers.

dataprovider resolves identifiers to values through registered providers:
small computations that may take other values, given input data and the
providers they override. It is meant to be embedded in host objects that
derive many values from a few inputs, with rules that can be overridden and
composed.

Key Features:
    - Atomic and compound (scoped) identifiers
    - Priority-ordered overrides with explicit access to the overridden provider
    - Scope-relative lookups from inside providers
    - Catch-all fallback provider
    - Copy-on-write composition of containers

Basic Usage:
    >>> from dataprovider import Container
    >>>
    >>> container = Container()
    >>>
    >>> @container.provider("sum", requires=["array"])
    ... def total(ctx):
    ...     return sum(ctx.given("array") or [])
    >>>
    >>> container.give(array=[1, 2, 4]).take("sum")
    7

The package consists of:
    - container: Container registration, resolution and composition
    - context: The ProviderContext handed to provider bodies
    - provider: Immutable Provider and ProviderOptions values
    - identifiers: Identifier normalisation and scope helpers
    - host: DataProvider base class with a class-level template container
    - errors: Framework-specific exceptions
    - log: Package loggers and opt-in stderr output
"""

from dataprovider.container import Container, ContainerOptions
from dataprovider.context import ProviderContext
from dataprovider.errors import (
    DataProviderError,
    ProviderCycleError,
    ProviderMissingError,
)
from dataprovider.host import DataProvider
from dataprovider.log import configure_logging
from dataprovider.provider import Provider, ProviderOptions

__all__ = [
    "Container",
    "ContainerOptions",
    "DataProvider",
    "DataProviderError",
    "Provider",
    "ProviderContext",
    "ProviderCycleError",
    "ProviderMissingError",
    "ProviderOptions",
    "configure_logging",
]
