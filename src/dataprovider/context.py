"""The resolution context handed to provider bodies."""

from typing import TYPE_CHECKING, Any, Optional

from dataprovider.identifiers import Identifier
from dataprovider.provider import Provider

if TYPE_CHECKING:
    from dataprovider.container import Container

__all__ = ["ProviderContext"]


class ProviderContext:
    """Explicit view of the resolving container, passed to every provider body.

    Nested resolution calls made through the context carry the same ``host``,
    so providers several levels deep still see the object they are computing
    values for.

    Attributes:
        container: The container performing the resolution.
        host: Optional object the value is being resolved for, or None.

    Example:
        >>> @container.provider("greeting")
        ... def greeting(ctx):
        ...     return f"Hello {ctx.given('name')}"
    """

    def __init__(self, container: "Container", host: Any = None):
        self.container = container
        self.host = host

    def take(self, identifier: Identifier, skip: Optional[int] = None) -> Any:
        return self.container.take(identifier, host=self.host, skip=skip)

    def try_take(self, identifier: Identifier) -> Any:
        return self.container.try_take(identifier, host=self.host)

    def scoped_take(self, identifier: Identifier) -> Any:
        return self.container.scoped_take(identifier, host=self.host)

    def take_super(self) -> Any:
        return self.container.take_super(host=self.host)

    def given(self, key: Any) -> Any:
        return self.container.given(key)

    def got(self, key: Any) -> bool:
        return self.container.got(key)

    def scope(self) -> tuple:
        return self.container.scope()

    def scopes(self) -> list[tuple]:
        return self.container.scopes()

    def provider_id(self) -> Optional[Identifier]:
        return self.container.provider_id()

    def provider_stack(self) -> tuple[Provider, ...]:
        return self.container.provider_stack()

    @property
    def missing_provider(self) -> Optional[Identifier]:
        """The identifier that triggered the fallback provider, if running inside it."""
        return self.container.missing_provider

    def __repr__(self):
        return f"ProviderContext(provider_id={self.provider_id()!r}, host={self.host!r})"
