"""Helpers for atomic and compound provider identifiers.

An identifier is either an atomic hashable token (``"name"``, ``3``, an enum
member) or a compound identifier: an ordered sequence of atomic tokens such as
``("person", "name")``. Lists are accepted wherever an identifier is expected
and normalised to tuples, so that compound identifiers can be used as
dictionary keys and compare element-wise.

The scope of a compound identifier is the identifier without its last
segment; atomic identifiers have the empty scope ``()``.
"""

from typing import Any, Hashable, Iterable, Union

__all__ = [
    "Identifier",
    "normalize",
    "flatten",
    "scope_of",
    "has_prefix",
    "prefixed",
    "is_private",
]

Identifier = Union[Hashable, tuple]
"""Type alias for anything that names a provider or static value."""


def normalize(identifier: Any) -> Identifier:
    """Turn list-based compound identifiers into (nested) tuples.

    Example:
        >>> normalize(["person", "name"])
        ('person', 'name')
        >>> normalize("name")
        'name'
    """
    if isinstance(identifier, (list, tuple)):
        return tuple(normalize(segment) for segment in identifier)
    return identifier


def _is_compound(identifier: Any) -> bool:
    return isinstance(identifier, (list, tuple))


def flatten(identifier: Any) -> tuple:
    """Return the atomic segments of an identifier as a flat tuple.

    Nested sequences are flattened depth first and ``None`` segments are
    dropped, so ``flatten(None)`` is the empty tuple.

    Example:
        >>> flatten("name")
        ('name',)
        >>> flatten([("a", "b"), "c"])
        ('a', 'b', 'c')
    """
    return tuple(_iter_segments(identifier))


def _iter_segments(identifier: Any) -> Iterable[Any]:
    if identifier is None:
        return
    if _is_compound(identifier):
        for segment in identifier:
            yield from _iter_segments(segment)
    else:
        yield identifier


def scope_of(identifier: Any) -> tuple:
    """Return the scope of ``identifier``: every segment but the last."""
    if _is_compound(identifier):
        return tuple(identifier[:-1])
    return ()


def has_prefix(identifier: Any, prefix: Any) -> bool:
    """Whether ``identifier`` is compound, strictly longer than and starts with ``prefix``.

    An atomic ``prefix`` is treated as a one-element sequence.
    """
    if not _is_compound(identifier):
        return False
    prefix = tuple(prefix) if _is_compound(prefix) else (prefix,)
    return len(identifier) > len(prefix) and tuple(identifier[: len(prefix)]) == prefix


def prefixed(scope: Any, identifier: Any) -> tuple:
    """Prefix ``identifier`` with the segments of ``scope``.

    The result is always a compound identifier, even when ``scope`` is empty.

    Example:
        >>> prefixed("person", "name")
        ('person', 'name')
        >>> prefixed(None, "name")
        ('name',)
    """
    return flatten(scope) + flatten(identifier)


def is_private(segment: Any) -> bool:
    """Whether an identifier segment is marked private (a string starting with ``_``)."""
    return isinstance(segment, str) and segment.startswith("_")
