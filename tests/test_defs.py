import struct

import pytest

from rmdb.defs import (
    ColType,
    CompOp,
    Condition,
    Rid,
    SetClause,
    TabCol,
    Value,
    coltype2str,
)
from rmdb.errors import InternalError, StringOverflowError


def test_coltype2str():
    assert coltype2str(ColType.INT) == "INT"
    assert coltype2str(ColType.FLOAT) == "FLOAT"
    assert coltype2str(ColType.STRING) == "STRING"


def test_coltype_int_values_match_serialized_form():
    assert [int(t) for t in ColType] == [0, 1, 2]
    assert coltype2str(2) == "STRING"


def test_rid_equality_and_hash():
    assert Rid(1, 2) == Rid(1, 2)
    assert Rid(1, 2) != Rid(2, 1)
    assert len({Rid(1, 2), Rid(1, 2)}) == 1


def test_tabcol_ordering():
    cols = [TabCol("b", "a"), TabCol("a", "z"), TabCol("a", "b")]
    assert sorted(cols) == [TabCol("a", "b"), TabCol("a", "z"), TabCol("b", "a")]


def test_setters_change_type():
    v = Value()
    v.set_int(5)
    assert v.type is ColType.INT and v.int_val == 5
    v.set_float(1.5)
    assert v.type is ColType.FLOAT and v.float_val == 1.5
    v.set_str("hi")
    assert v.type is ColType.STRING and v.str_val == "hi"


def test_init_raw_int_round_trip():
    v = Value()
    v.set_int(-123)
    v.init_raw(4)
    assert struct.unpack("<i", v.raw)[0] == -123


def test_init_raw_float_round_trip():
    v = Value()
    v.set_float(2.5)
    v.init_raw(4)
    assert struct.unpack("<f", v.raw)[0] == 2.5


def test_init_raw_string_pads_with_zeros():
    v = Value()
    v.set_str("ab")
    v.init_raw(5)
    assert len(v.raw) == 5
    assert v.raw.rstrip(b"\x00") == b"ab"
    assert set(v.raw[2:]) == {0}


def test_init_raw_string_overflow():
    v = Value()
    v.set_str("abcdef")
    with pytest.raises(StringOverflowError):
        v.init_raw(3)


def test_init_raw_twice_fails():
    v = Value()
    v.set_int(1)
    v.init_raw(4)
    with pytest.raises(InternalError):
        v.init_raw(4)


def test_init_raw_int_wrong_length():
    v = Value()
    v.set_int(1)
    with pytest.raises(InternalError):
        v.init_raw(8)


def test_condition_and_set_clause():
    val = Value()
    val.set_int(3)
    cond = Condition(TabCol("t", "a"), CompOp.GE, True, rhs_val=val)
    assert cond.rhs_val.int_val == 3
    assert cond.rhs_col is None
    clause = SetClause(TabCol("t", "a"), val)
    assert clause.lhs.col_name == "a"