"""Binding of provider containers to host classes.

Each :class:`DataProvider` subclass owns a template :class:`Container`, built
once at class level. Instances copy the template when they are created, so
providers added to the class afterwards only reach instances created later.
Subclasses start from a copy of their parent's template and can override any
of its providers.
"""

from typing import Any, Mapping, Optional

from dataprovider.container import Container, ContainerOptions
from dataprovider.identifiers import Identifier

__all__ = ["DataProvider"]


class DataProvider:
    """Base class for objects that compute values through providers.

    Provider bodies receive the instance as ``ctx.host``.

    Example:
        >>> class Person(DataProvider):
        ...     pass
        >>>
        >>> @Person.provider("fullname")
        ... def fullname(ctx):
        ...     return f"{ctx.given('first')} {ctx.given('last')}"
        >>>
        >>> Person(data={"first": "Billy", "last": "Bragg"}).take("fullname")
        'Billy Bragg'
    """

    _template: Container = Container()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._template = cls._template.copy()

    def __init__(
        self,
        data: Optional[Mapping] = None,
        options: Optional[ContainerOptions] = None,
    ):
        template = type(self).template()
        self.container = Container(options or template.options).add_in_place(template)
        self.container.give_in_place(data)

    # ---- Class-level registration ----

    @classmethod
    def template(cls) -> Container:
        """The container shared by the class, copied into each new instance."""
        return cls._template

    @classmethod
    def provider(cls, identifier: Identifier, body=None, **options):
        result = cls._template.provider(identifier, body, **options)
        return cls if body is not None else result

    @classmethod
    def provides(cls, mapping: Optional[Mapping] = None):
        result = cls._template.provides(mapping)
        return result if mapping is None else cls

    @classmethod
    def provider_missing(cls, body=None):
        result = cls._template.provider_missing(body)
        return cls if body is not None else result

    @classmethod
    def add(cls, other: Container) -> type:
        """Add ``other``'s providers to the class template."""
        cls._template.add_in_place(_container_of(other))
        return cls

    @classmethod
    def add_scoped(cls, other: Container, scope: Identifier = None) -> type:
        """Add ``other``'s providers to the class template below ``scope``."""
        cls._template.add_scoped_in_place(_container_of(other), scope)
        return cls

    @classmethod
    def class_has_provider(cls, identifier: Identifier) -> bool:
        return cls._template.has_provider(identifier)

    # ---- Instance-level forwarding ----

    def has_provider(self, identifier: Identifier) -> bool:
        return self.container.has_provider(identifier)

    def take(self, identifier: Identifier) -> Any:
        return self.container.take(identifier, host=self)

    def try_take(self, identifier: Identifier) -> Any:
        return self.container.try_take(identifier, host=self)

    def given(self, key: Any) -> Any:
        return self.container.given(key)

    def got(self, key: Any) -> bool:
        return self.container.got(key)

    @property
    def data(self) -> dict:
        return self.container.data

    def give(self, data: Optional[Mapping] = None, /, **kwargs) -> "DataProvider":
        """Return a new instance whose container has ``data`` merged in."""
        clone = object.__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone.container = self.container.give(data, **kwargs)
        return clone

    def give_in_place(self, data: Optional[Mapping] = None, /, **kwargs) -> "DataProvider":
        self.container.give_in_place(data, **kwargs)
        return self


def _container_of(other: Any) -> Container:
    if isinstance(other, Container):
        return other
    if isinstance(other, type) and issubclass(other, DataProvider):
        return other.template()
    raise TypeError(f"Cannot add providers from {other!r}")
