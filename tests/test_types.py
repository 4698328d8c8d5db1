from my_types import BOOLEAN, INTEGER, NONE, TypeDesc, object_type


def test_equality_is_reflexive():
    for t in (INTEGER, BOOLEAN, NONE, object_type("Foo")):
        assert t.equals(t)


def test_equality_is_symmetric():
    pairs = [
        (INTEGER, BOOLEAN),
        (INTEGER, TypeDesc('integer')),
        (object_type("A"), object_type("A")),
        (object_type("A"), object_type("B")),
        (NONE, object_type("None")),
    ]
    for a, b in pairs:
        assert a.equals(b) == b.equals(a)


def test_object_types_compare_by_class_name():
    assert object_type("A").equals(object_type("A"))
    assert not object_type("A").equals(object_type("B"))
    assert object_type("A") == object_type("A")


def test_primitives_are_distinct():
    assert not INTEGER.equals(BOOLEAN)
    assert not BOOLEAN.equals(NONE)
    assert not NONE.equals(object_type("Main"))
    assert not INTEGER.equals(None)


def test_repr():
    assert repr(INTEGER) == "Integer"
    assert repr(BOOLEAN) == "Boolean"
    assert repr(NONE) == "None"
    assert repr(object_type("Shape")) == "Object(Shape)"
