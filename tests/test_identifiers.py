from dataprovider.identifiers import (
    flatten,
    has_prefix,
    is_private,
    normalize,
    prefixed,
    scope_of,
)


def test_lists_are_normalised_to_tuples():
    assert normalize(["person", ["address", "street"]]) == ("person", ("address", "street"))
    assert normalize("name") == "name"
    assert normalize(3) == 3


def test_flatten_returns_atomic_segments():
    assert flatten("name") == ("name",)
    assert flatten([("a", "b"), "c"]) == ("a", "b", "c")
    assert flatten(None) == ()
    assert flatten(["a", None, "b"]) == ("a", "b")


def test_scope_drops_the_last_segment():
    assert scope_of(("a", "b", "c")) == ("a", "b")
    assert scope_of(("a",)) == ()
    assert scope_of("a") == ()


def test_prefix_must_be_strictly_shorter():
    assert has_prefix(("a", "b", "c"), "a")
    assert has_prefix(("a", "b", "c"), ("a", "b"))
    assert not has_prefix(("a", "b", "c"), ("a", "b", "c"))
    assert not has_prefix(("b", "a"), "a")
    assert not has_prefix("abc", "a")


def test_prefixed_always_returns_a_compound_identifier():
    assert prefixed("person", "name") == ("person", "name")
    assert prefixed(["creatures", "person"], ("name",)) == ("creatures", "person", "name")
    assert prefixed(None, "name") == ("name",)


def test_private_segments_start_with_an_underscore():
    assert is_private("_internal")
    assert not is_private("public")
    assert not is_private(1)


def test_public_names():
    from dataprovider import identifiers

    assert sorted(identifiers.__all__) == [
        "Identifier",
        "flatten",
        "has_prefix",
        "is_private",
        "normalize",
        "prefixed",
        "scope_of",
    ]
