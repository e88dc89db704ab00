import pytest

from dataprovider import Container, DataProvider, ProviderMissingError


def test_instances_take_from_the_class_template():
    class Person(DataProvider):
        pass

    @Person.provider("fullname")
    def fullname(ctx):
        return f"{ctx.given('first')} {ctx.given('last')}"

    person = Person(data={"first": "Billy", "last": "Bragg"})

    assert person.take("fullname") == "Billy Bragg"
    assert person.has_provider("fullname")
    assert Person.class_has_provider("fullname")


def test_provider_bodies_see_the_host():
    class Host(DataProvider):
        def func(self):
            return "Something Normal Here"

    Host.provider("inner", lambda ctx: ctx.host.func())
    Host.provider("outer", lambda ctx: (ctx.host, ctx.take("inner")))

    host = Host()
    assert host.take("outer") == (host, "Something Normal Here")


def test_adding_providers_from_other_classes_and_containers():
    class Additional(DataProvider):
        pass

    Additional.provider("provider2", lambda ctx: "#2")
    overwrite = Container().provider("provider1", lambda ctx: "#111")

    class Original(DataProvider):
        pass

    Original.provider("provider1", lambda ctx: "#1").add(Additional).add(overwrite)

    assert Original().take("provider2") == "#2"
    assert Original().take("provider1") == "#111"


def test_class_additions_do_not_reach_existing_instances():
    class Stuff(DataProvider):
        pass

    Stuff.provider(["some", "Stuff"], lambda ctx: "SomeStuff")
    instance = Stuff()
    assert instance.take(["some", "Stuff"]) == "SomeStuff"

    Stuff.add(Container().provider(["some", "Stuff"], lambda ctx: "OtherStuff"))

    assert Stuff().take(["some", "Stuff"]) == "OtherStuff"
    assert instance.take(["some", "Stuff"]) == "SomeStuff"


def test_subclasses_inherit_and_override_providers():
    class Parent(DataProvider):
        pass

    Parent.provider("greeting", lambda ctx: "Hello")
    Parent.provider("name", lambda ctx: "parent")

    class Child(Parent):
        pass

    Child.provider("greeting", lambda ctx: ctx.take_super() + " there")

    assert Child().take("greeting") == "Hello there"
    assert Child().take("name") == "parent"
    assert Parent().take("greeting") == "Hello"


def test_class_level_provides_and_fallback():
    class Band(DataProvider):
        pass

    assert Band.provides({"name": "Paddy"}) is Band
    assert Band.provides() == {"name": "Paddy"}

    assert Band().try_take("instrument") is None
    with pytest.raises(ProviderMissingError):
        Band().take("instrument")

    Band.provider_missing(lambda ctx: f"unknown {ctx.missing_provider}")
    assert Band().take("instrument") == "unknown instrument"


def test_add_scoped_at_class_level():
    names = Container().provider("name", lambda ctx: "child")

    class Family(DataProvider):
        pass

    Family.add_scoped(names, "child")

    assert Family().take(["child", "name"]) == "child"
    assert not Family().has_provider("name")


def test_give_returns_a_new_instance():
    class Summer(DataProvider):
        pass

    Summer.provider("sum", lambda ctx: sum(ctx.given("array") or []))

    summer = Summer()
    updated = summer.give(array=[1, 2, 4])

    assert isinstance(updated, Summer)
    assert updated.take("sum") == 7
    assert summer.take("sum") == 0
    assert not summer.got("array")

    summer.give_in_place(array=[5, 5])
    assert summer.given("array") == [5, 5]
    assert summer.data == {"array": [5, 5]}


def test_adding_something_that_holds_no_providers_is_rejected():
    class Empty(DataProvider):
        pass

    with pytest.raises(TypeError, match="Cannot add providers"):
        Empty.add(object())


def test_give_accepts_a_key_named_data():
    class Record(DataProvider):
        pass

    Record.provider("size", lambda ctx: len(ctx.given("data")))

    record = Record().give(data=[1, 2, 3])
    assert record.take("size") == 3

    record.give_in_place(data=[])
    assert record.take("size") == 0
