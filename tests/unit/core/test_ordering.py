import pytest

from magicbus.core.ordering import compare_types, is_strict_ancestor, order_types


class Base:
    pass


class Right(Base):
    pass


class FarRight(Right):
    pass


class Left(Base):
    pass


class Unrelated:
    pass


@pytest.mark.parametrize(
    "a,b,expected",
    [
        (Base, Right, -1),
        (Right, Base, 1),
        (object, FarRight, -1),
        (Left, Right, 0),
        (Unrelated, Base, 0),
        (Base, Base, 0),
    ],
)
def test_compare_types(a, b, expected):
    assert compare_types(a, b) == expected


def test_is_strict_ancestor_is_irreflexive():
    assert is_strict_ancestor(Base, Right)
    assert not is_strict_ancestor(Right, Base)
    assert not is_strict_ancestor(Base, Base)


def test_order_types_puts_ancestors_first():
    ordered = order_types([FarRight, Right, object, Base])
    assert ordered == [object, Base, Right, FarRight]


def test_order_types_keeps_input_order_for_unrelated_types():
    assert order_types([Unrelated, Left, Right]) == [Unrelated, Left, Right]
    assert order_types([Right, Unrelated, Left]) == [Right, Unrelated, Left]


def test_order_types_not_fooled_by_unrelated_type_in_between():
    # A plain comparator sort sees FarRight == Unrelated == Base and may keep
    # FarRight in front of Base.
    ordered = order_types([FarRight, Unrelated, Base])
    assert ordered == [Unrelated, Base, FarRight]


def test_order_types_with_custom_subtype_relation():
    # Tagged types with an external hierarchy table: "fill" is-a "order_event"
    parents = {"fill": {"order_event"}, "order_event": set(), "tick": set()}

    def subtype(candidate, ancestor):
        return candidate == ancestor or ancestor in parents[candidate]

    assert order_types(["fill", "tick", "order_event"], subtype) == [
        "tick",
        "order_event",
        "fill",
    ]
