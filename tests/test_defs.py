import dataclasses

import pytest

from unitlore.defs import (
    BinOp,
    BinOpExpr,
    CanonicalizationDef,
    CategoryDef,
    ConstExpr,
    DefEntry,
    DimensionDef,
    ErrorExpr,
    MulExpr,
    OfExpr,
    PrefixDef,
    Property,
    QuantityDef,
    SPrefixDef,
    SubstanceDef,
    UnaryOp,
    UnaryOpExpr,
    UnitDef,
    UnitExpr,
)
from unitlore.numeric import Numeric


def _density():
    return Property(
        name="density",
        input=UnitExpr("gram"),
        input_name="mass",
        output=UnitExpr("cm"),
        output_name="volume",
    )


def test_mul_expr_stores_tuple():
    expr = MulExpr([UnitExpr("a"), UnitExpr("b")])
    assert expr.exprs == (UnitExpr("a"), UnitExpr("b"))


def test_substance_properties_stored_as_tuple():
    sub = SubstanceDef(properties=[_density()], symbol="H2O")
    assert sub.properties == (_density(),)
    assert sub.symbol == "H2O"


def test_substance_defaults():
    sub = SubstanceDef()
    assert sub.properties == ()
    assert sub.symbol is None


def test_property_doc_defaults_to_none():
    assert _density().doc is None


def test_def_entry_defaults():
    entry = DefEntry("meter", CanonicalizationDef(of="m"))
    assert entry.doc is None
    assert entry.category is None
    assert entry.definition.of == "m"


def test_expressions_are_frozen():
    expr = UnitExpr("kg")
    with pytest.raises(dataclasses.FrozenInstanceError):
        expr.name = "g"
    assert expr.name == "kg"
    assert expr == UnitExpr("kg")


def test_entries_are_frozen():
    entry = DefEntry("m", DimensionDef())
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.name = "s"
    assert entry.name == "m"
    assert entry == DefEntry("m", DimensionDef())


def test_structural_equality_and_hash():
    a = BinOpExpr(BinOp.FRAC, ConstExpr(Numeric(1)), UnitExpr("s"))
    b = BinOpExpr(BinOp.FRAC, ConstExpr(Numeric.one()), UnitExpr("s"))
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_different_operators_differ():
    a = UnaryOpExpr(UnaryOp.POSITIVE, UnitExpr("x"))
    b = UnaryOpExpr(UnaryOp.NEGATIVE, UnitExpr("x"))
    assert (a == b) is False


def test_dimension_defs_compare_equal():
    first = DefEntry("m", DimensionDef(), doc="length")
    second = DefEntry("m", DimensionDef(), doc="length")
    assert first == second
    assert len({first, second}) == 1
    assert (DimensionDef() == UnitDef(UnitExpr("m"))) is False


def test_replace_keeps_other_fields():
    entry = DefEntry("kilo", SPrefixDef(ConstExpr(Numeric(1000))), doc="thousand", category="si")
    changed = dataclasses.replace(entry, definition=PrefixDef(UnitExpr("kilo")))
    assert changed.name == "kilo"
    assert changed.doc == "thousand"
    assert changed.category == "si"
    assert changed.definition == PrefixDef(UnitExpr("kilo"))


def test_nested_expressions_round_trip_through_fields():
    inner = OfExpr("mass", UnitExpr("water"))
    outer = QuantityDef(MulExpr([inner, ErrorExpr("bad")]))
    assert outer.expr.exprs[0].property == "mass"
    assert outer.expr.exprs[0].expr == UnitExpr("water")
    assert outer.expr.exprs[1].message == "bad"


def test_unit_and_category_defs_hold_values():
    assert UnitDef(UnitExpr("inch")).expr.name == "inch"
    assert CategoryDef("SI").display_name == "SI"