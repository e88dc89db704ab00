"""Immutable descriptions of registered providers."""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from dataprovider.identifiers import Identifier, scope_of

__all__ = ["ProviderOptions", "Provider"]


@dataclass(frozen=True)
class ProviderOptions:
    """Options attached to a provider at registration time.

    Attributes:
        priority: Ordering among providers with the same identifier; higher wins.
            ``None`` means the container's default priority.
        requires: Identifiers of the inputs the provider expects to be given.
            Informational only, never enforced.
        force_build: Marks the provider as one whose output should always be
            built, even when empty.
    """

    priority: Optional[float] = None
    requires: tuple = ()
    force_build: bool = False


@dataclass(frozen=True)
class Provider:
    """A computation registered under an identifier.

    Attributes:
        identifier: The atomic or compound identifier the provider answers to.
            ``None`` for the fallback provider.
        options: The :class:`ProviderOptions` given at registration.
        body: Callable invoked with a
            :class:`~dataprovider.context.ProviderContext` to produce the value.

    Example:
        >>> @container.provider(("person", "fullname"), priority=1)
        ... def fullname(ctx):
        ...     return f"{ctx.scoped_take('firstname')} {ctx.scoped_take('lastname')}"
        >>>
        >>> # Registers Provider(("person", "fullname"), ProviderOptions(priority=1), fullname)
    """

    identifier: Identifier
    options: ProviderOptions = field(default_factory=ProviderOptions)
    body: Callable[[Any], Any] = None

    @property
    def priority(self) -> Optional[float]:
        return self.options.priority

    @property
    def force_build(self) -> bool:
        return self.options.force_build is True

    @property
    def requirements(self) -> tuple:
        return self.options.requires

    @property
    def scope(self) -> tuple:
        return scope_of(self.identifier)

    def with_identifier(self, identifier: Identifier) -> "Provider":
        """Return a copy of this provider registered under another identifier."""
        return replace(self, identifier=identifier)
