"""Registration, resolution and composition of data providers.

A :class:`Container` maps identifiers to providers: computations registered
under an atomic or compound identifier that produce a value when taken.
Providers registered under the same identifier override each other by
priority and, among equal priorities, by recency. An overriding provider can
still reach the one it replaced through ``take_super``.

Containers compose: the providers, static values, fallback and data of one
container can be added to another, optionally prefixed with a scope. The
non-mutating variants (``add``, ``add_scoped``, ``give``) work on a copy, so a
shared container can act as a template for cheap per-call variations.
"""

import inspect
from collections import deque
from collections.abc import Mapping, Sized
from contextlib import contextmanager
from dataclasses import dataclass, replace
from logging import Logger
from typing import Any, Callable, Iterator, Optional

from dataprovider.context import ProviderContext
from dataprovider.errors import (
    DataProviderError,
    ProviderCycleError,
    ProviderMissingError,
)
from dataprovider.identifiers import (
    Identifier,
    flatten,
    has_prefix,
    is_private,
    normalize,
    prefixed,
)
from dataprovider.log import get_logger
from dataprovider.provider import Provider, ProviderOptions

__all__ = ["ContainerOptions", "Frame", "Container"]

Body = Callable[[ProviderContext], Any]


@dataclass(frozen=True)
class ContainerOptions:
    """Construction-time configuration of a :class:`Container`.

    Attributes:
        default_priority: Priority assumed for providers registered without one.
        logger: Logger to report through; defaults to ``dataprovider.container``.
        detect_cycles: Raise :class:`ProviderCycleError` when a provider re-enters
            itself instead of recursing until the interpreter's limit.
    """

    default_priority: float = 0
    logger: Optional[Logger] = None
    detect_cycles: bool = False


@dataclass(frozen=True)
class Frame:
    """One in-flight provider evaluation.

    Attributes:
        provider: The provider being evaluated.
        skip: How many higher-ranked providers with the same identifier were passed over.
        missing: For fallback evaluations, the identifier that was not found.
    """

    provider: Provider
    skip: int
    missing: Optional[Identifier] = None


class Container:
    """Registry of providers, static values and given data.

    Example:
        >>> container = Container()
        >>> container.provides({"greeting": "Hello"})
        >>>
        >>> @container.provider("message")
        ... def message(ctx):
        ...     return f"{ctx.take('greeting')} {ctx.given('name')}"
        >>>
        >>> container.give(name="Billy").take("message")
        'Hello Billy'
    """

    def __init__(self, options: Optional[ContainerOptions] = None, **overrides):
        options = options or ContainerOptions()
        if overrides:
            options = replace(options, **overrides)
        self.options = options
        self.logger = options.logger or get_logger("dataprovider.container")
        self._providers: deque[Provider] = deque()
        self._provides: dict[Identifier, Any] = {}
        self._fallback: Optional[Provider] = None
        self._data: dict[Any, Any] = {}
        self._frames: list[Frame] = []

    # ---- Registration ----

    def provider(
        self,
        identifier: Identifier,
        body: Optional[Body] = None,
        *,
        priority: Optional[float] = None,
        requires: Any = (),
        force_build: bool = False,
    ):
        """Register a provider for ``identifier``.

        Can be called directly with a body, or used as a decorator when the body
        is omitted.

        Args:
            identifier: Atomic or compound identifier; lists become tuples.
            body: Callable taking a :class:`ProviderContext` and returning the value.
            priority: Optional priority; higher priorities win over more recent
                registrations.
            requires: Identifiers of data the provider expects to be given.
            force_build: Flag reported by :meth:`force_build`.

        Returns:
            The container when ``body`` is given, otherwise a decorator that
            registers and returns the decorated function.

        Example:
            @container.provider(("identification", "fullname"))
            def fullname(ctx):
                return f"{ctx.scoped_take('firstname')} {ctx.scoped_take('lastname')}"
        """
        options = ProviderOptions(priority, _as_requirements(requires), force_build)
        identifier = normalize(identifier)

        def decorator(func: Body) -> Body:
            if not callable(func):
                raise TypeError(f"Provider body for {identifier!r} is not callable: {func!r}")
            self._providers.appendleft(Provider(identifier, options, func))
            return func

        if body is None:
            return decorator
        decorator(body)
        return self

    def provides(self, mapping: Optional[Mapping] = None):
        """Define static values, or return the ones defined so far.

        Static values are returned by :meth:`take` as they are, except for plain
        zero-argument callables, which are called on every take.

        Args:
            mapping: Identifier to value mapping merged into the static values;
                later values win.

        Returns:
            A copy of the static values when called without a mapping, otherwise
            the container.
        """
        if mapping is None:
            return dict(self._provides)
        if not isinstance(mapping, Mapping):
            raise TypeError(f"provides expects a mapping, got {type(mapping).__name__}")
        for key, value in mapping.items():
            self._provides[normalize(key)] = value
        return self

    def provider_missing(self, body: Optional[Body] = None):
        """Register the fallback provider, replacing any previous one.

        The fallback runs when nothing else resolves an identifier; the
        identifier is available inside it as ``ctx.missing_provider``.
        Usable as a decorator when ``body`` is omitted.
        """

        def decorator(func: Body) -> Body:
            if not callable(func):
                raise TypeError(f"Fallback provider body is not callable: {func!r}")
            self._fallback = Provider(None, ProviderOptions(), func)
            return func

        if body is None:
            return decorator
        decorator(body)
        return self

    # ---- Queries ----

    @property
    def providers(self) -> tuple[Provider, ...]:
        """Registered providers, most recent first."""
        return tuple(self._providers)

    @property
    def fallback_provider(self) -> Optional[Provider]:
        return self._fallback

    def has_fallback_provider(self) -> bool:
        return self._fallback is not None

    def has_provider(self, identifier: Identifier) -> bool:
        identifier = normalize(identifier)
        return (
            identifier in self._provides
            or self._matching_provider(identifier) is not None
        )

    def provider_identifiers(self) -> list[Identifier]:
        """Identifiers of all static values and providers, without duplicates.

        Static value identifiers come first, then provider identifiers, most
        recently registered first.
        """
        identifiers = [*self._provides, *(p.identifier for p in self._providers)]
        return [i for i in dict.fromkeys(identifiers) if i is not None]

    def providers_with_scope(self, scope: Identifier) -> list[tuple]:
        """Compound identifiers that extend ``scope`` by at least one segment.

        Example:
            >>> container.provider(("a", "b", "c"), lambda ctx: 1)
            >>> container.providers_with_scope("a")
            [('a', 'b', 'c')]
            >>> container.providers_with_scope(("a", "b", "c"))
            []
        """
        scope = normalize(scope)
        return [i for i in self.provider_identifiers() if has_prefix(i, scope)]

    def has_providers_with_scope(self, scope: Identifier) -> bool:
        return len(self.providers_with_scope(scope)) > 0

    def has_filled_providers_with_scope(
        self, current: Identifier, *, include_current: bool = False, host: Any = None
    ) -> bool:
        """Whether anything below ``current`` produces a non-empty value.

        Providers within the scope are tried shortest identifier first, and the
        search stops at the first one yielding a value that is neither None nor
        empty. Identifiers ending in a private segment (``"_name"``) are ignored.

        Args:
            current: The scope to inspect.
            include_current: Try ``current`` itself before the providers in its
                scope. An empty value there answers False straight away.
            host: Passed on to the providers that are tried.
        """
        current = normalize(current)
        if include_current:
            value = self.try_take(current, host=host)
            if _is_empty(value):
                return False
            if value is not None:
                return True

        for identifier in sorted(self.providers_with_scope(current), key=len):
            if is_private(identifier[-1]):
                continue
            value = self.try_take(identifier, host=host)
            if value is not None and not _is_empty(value):
                return True
        return False

    def force_build(self, identifier: Identifier) -> bool:
        """Whether the provider ``identifier`` resolves to was registered with ``force_build``."""
        provider = self._matching_provider(normalize(identifier))
        return provider is not None and provider.force_build

    # ---- Resolution ----

    def take(self, identifier: Identifier, *, host: Any = None, skip: Optional[int] = None) -> Any:
        """Resolve ``identifier`` to a value.

        Static values are checked first, then providers for ``identifier``.
        Inside a provider body, an identifier without a provider of its own is
        also looked up within the scope of the provider being evaluated. When
        nothing matches, the fallback provider answers.

        Args:
            identifier: The identifier to resolve.
            host: Object exposed to provider bodies as ``ctx.host``.
            skip: Number of higher-ranked providers to pass over. Static values
                are only consulted when no skip is given.

        Raises:
            ProviderMissingError: If nothing resolves the identifier.
        """
        identifier = normalize(identifier)
        self.logger.debug("take %r", identifier)

        if skip is None and identifier in self._provides:
            return _static_value(self._provides[identifier])

        skip = skip or 0
        provider = self._matching_provider(identifier, skip)

        if provider is None:
            scope = self.scope()
            if scope:
                provider = self._matching_provider(scope + flatten(identifier), skip)

        if provider is not None:
            return self._evaluate(Frame(provider, skip), host)

        if self._fallback is not None:
            return self._evaluate(Frame(self._fallback, skip, identifier), host)

        raise ProviderMissingError(identifier)

    def try_take(self, identifier: Identifier, *, host: Any = None) -> Any:
        """Like :meth:`take`, but returns None when nothing can resolve ``identifier``.

        Errors raised by a provider that does exist still propagate.
        """
        identifier = normalize(identifier)
        if self.has_provider(identifier) or self.has_fallback_provider():
            return self.take(identifier, host=host)
        self.logger.debug("Try for missing provider: %r", identifier)
        return None

    def take_super(self, *, host: Any = None) -> Any:
        """Evaluate the provider overridden by the one currently being evaluated.

        Only meaningful from inside a provider body.

        Raises:
            DataProviderError: If called outside of a provider body.
            ProviderMissingError: If there is no older provider for the identifier.
        """
        if not self._frames:
            raise DataProviderError("take_super can only be called from inside a provider")

        identifier = self.provider_id()
        skip = self.current_skip() + 1
        provider = self._matching_provider(identifier, skip)
        if provider is None:
            raise ProviderMissingError(identifier)
        return self._evaluate(Frame(provider, skip), host)

    def scoped_take(self, identifier: Identifier, *, host: Any = None) -> Any:
        """Take ``identifier`` within the scope of the provider being evaluated."""
        return self.take(self.scope() + flatten(identifier), host=host)

    def __getitem__(self, identifier: Identifier) -> Any:
        return self.take(identifier)

    def __contains__(self, identifier: Identifier) -> bool:
        return self.has_provider(identifier)

    # ---- Composition ----

    def add_in_place(self, other: "Container") -> "Container":
        """Add everything registered in ``other`` to this container.

        ``other``'s providers keep their relative order and override this
        container's providers of equal priority. Its static values, fallback
        and data replace this container's on collision.

        Returns:
            This container.
        """
        for provider in reversed(tuple(other._providers)):
            self._providers.appendleft(provider)
        self.provides(other._provides)
        if other._fallback is not None:
            self._fallback = other._fallback
        return self.give_in_place(other._data)

    def add(self, other: "Container") -> "Container":
        """Return a copy of this container with ``other`` added to it."""
        return self.copy().add_in_place(other)

    def add_scoped_in_place(self, other: "Container", scope: Identifier = None) -> "Container":
        """Add ``other``'s providers and static values below ``scope``.

        Every identifier from ``other`` is turned into a compound identifier
        prefixed with the segments of ``scope``. The fallback and data are
        added unprefixed.

        Example:
            >>> names = Container().provider("name", lambda ctx: "child")
            >>> family = Container().add_scoped_in_place(names, "child")
            >>> family.take(("child", "name"))
            'child'
        """
        for provider in reversed(tuple(other._providers)):
            self._providers.appendleft(
                provider.with_identifier(prefixed(scope, provider.identifier))
            )
        for key, value in tuple(other._provides.items()):
            self._provides[prefixed(scope, key)] = value
        if other._fallback is not None:
            self._fallback = other._fallback
        return self.give_in_place(other._data)

    def add_scoped(self, other: "Container", scope: Identifier = None) -> "Container":
        """Return a copy of this container with ``other`` added below ``scope``."""
        return self.copy().add_scoped_in_place(other, scope)

    def copy(self) -> "Container":
        """Return an independent container with the same options and contents."""
        return type(self)(self.options).add_in_place(self)

    # ---- Data ----

    @property
    def data(self) -> dict[Any, Any]:
        return dict(self._data)

    def give(self, data: Optional[Mapping] = None, /, **kwargs) -> "Container":
        """Return a copy of this container with ``data`` merged into its given data."""
        return self.copy().give_in_place(data, **kwargs)

    def give_in_place(self, data: Optional[Mapping] = None, /, **kwargs) -> "Container":
        """Merge ``data`` into this container's given data and return the container."""
        for key, value in {**(data or {}), **kwargs}.items():
            self._data[normalize(key)] = value
        return self

    def given(self, key: Any) -> Any:
        """Return the given data for ``key``, or None (logged) when it was not given."""
        key = normalize(key)
        if key in self._data:
            return self._data[key]
        self.logger.debug("Data provider expected missing data with identifier: %r", key)
        return None

    def got(self, key: Any) -> bool:
        return normalize(key) in self._data

    # ---- In-flight introspection ----

    def provider_stack(self) -> tuple[Provider, ...]:
        """Providers currently being evaluated, outermost first."""
        return tuple(frame.provider for frame in self._frames)

    def current_provider(self) -> Optional[Provider]:
        return self._frames[-1].provider if self._frames else None

    def provider_id(self) -> Optional[Identifier]:
        provider = self.current_provider()
        return provider.identifier if provider else None

    def scopes(self) -> list[tuple]:
        return [frame.provider.scope for frame in self._frames]

    def scope(self) -> tuple:
        return self._frames[-1].provider.scope if self._frames else ()

    def current_skip(self) -> int:
        return self._frames[-1].skip if self._frames else 0

    @property
    def missing_provider(self) -> Optional[Identifier]:
        """The identifier being handled by the fallback provider.

        None unless read from inside the fallback provider's own body.
        """
        return self._frames[-1].missing if self._frames else None

    # ---- Internals ----

    def _matching_provider(self, identifier: Identifier, skip: int = 0) -> Optional[Provider]:
        """Return the provider for ``identifier`` at rank ``skip``, or None.

        Providers are ranked by priority, highest first. The sort is stable and
        storage is most-recent-first, so ties go to the latest registration.
        """
        matching = [p for p in self._providers if p.identifier == identifier]
        matching.sort(key=self._effective_priority, reverse=True)
        if 0 <= skip < len(matching):
            return matching[skip]
        return None

    def _effective_priority(self, provider: Provider) -> float:
        if provider.priority is None:
            return self.options.default_priority
        return provider.priority

    def _evaluate(self, frame: Frame, host: Any) -> Any:
        with self._push(frame):
            return frame.provider.body(ProviderContext(self, host))

    @contextmanager
    def _push(self, frame: Frame) -> Iterator[None]:
        if self.options.detect_cycles:
            self._check_cycle(frame)
        self._frames.append(frame)
        try:
            yield
        finally:
            self._frames.pop()

    def _check_cycle(self, frame: Frame):
        for active in self._frames:
            if (
                active.provider is frame.provider
                and active.skip == frame.skip
                and active.missing == frame.missing
            ):
                path = [
                    f.missing if f.provider.identifier is None else f.provider.identifier
                    for f in (*self._frames, frame)
                ]
                raise ProviderCycleError(tuple(path))

    def __repr__(self):
        return (
            f"{type(self).__name__}(providers={len(self._providers)}, "
            f"provides={len(self._provides)}, data={len(self._data)})"
        )


def _as_requirements(requires: Any) -> tuple:
    if requires is None:
        return ()
    if isinstance(requires, (list, tuple, set, frozenset)):
        return tuple(normalize(r) for r in requires)
    return (normalize(requires),)


def _static_value(value: Any) -> Any:
    if not callable(value) or inspect.isclass(value):
        return value
    try:
        inspect.signature(value).bind()
    except (TypeError, ValueError):
        return value
    return value()


def _is_empty(value: Any) -> bool:
    return isinstance(value, Sized) and len(value) == 0
