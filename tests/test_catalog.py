import pytest

from rmdb.catalog import ColMeta, DbMeta, IndexMeta, TabMeta
from rmdb.defs import ColType
from rmdb.errors import ColumnNotFoundError, IndexNotFoundError, TableNotFoundError


def make_table():
    a = ColMeta("t", "a", ColType.INT, 4, 0, True)
    b = ColMeta("t", "b", ColType.STRING, 8, 4, False)
    c = ColMeta("t", "c", ColType.FLOAT, 4, 12, False)
    idx = IndexMeta("t", 4, 1, [a])
    return TabMeta("t", [a, b, c], [idx])


def test_is_col_and_get_col():
    tab = make_table()
    assert tab.is_col("b")
    assert not tab.is_col("z")
    assert tab.get_col("c").offset == 12
    with pytest.raises(ColumnNotFoundError):
        tab.get_col("z")


def test_is_index_is_order_sensitive():
    tab = make_table()
    a, b = tab.cols[0], tab.cols[1]
    tab.indexes.append(IndexMeta("t", 12, 2, [a, b]))
    assert tab.is_index(["a"])
    assert tab.is_index(["a", "b"])
    assert not tab.is_index(["b", "a"])
    assert not tab.is_index(["b"])


def test_get_index_meta():
    tab = make_table()
    assert tab.get_index_meta(["a"]) is tab.indexes[0]
    with pytest.raises(IndexNotFoundError) as info:
        tab.get_index_meta(["b", "c"])
    assert str(info.value) == "Error: Index not found: t.(b, c)"


def test_get_table_and_set():
    db = DbMeta("db")
    tab = make_table()
    db.set_tab_meta("t", tab)
    assert db.is_table("t")
    assert db.get_table("t") is tab
    with pytest.raises(TableNotFoundError):
        db.get_table("missing")


def test_dumps_empty_database():
    assert DbMeta("db").dumps() == "db\n0\n"


def test_dumps_column_line_format():
    db = DbMeta("db", {"t": make_table()})
    text = db.dumps()
    assert "t a 0 4 0 1\n" in text
    assert text.startswith("db\n1\nt\n3\n")


def test_round_trip():
    db = DbMeta("shop")
    db.set_tab_meta("t", make_table())
    db.set_tab_meta("empty", TabMeta("empty"))
    restored = DbMeta.loads(db.dumps())
    assert restored == db
    assert restored.get_table("t").get_index_meta(["a"]).cols[0].index is True


def test_dumps_tables_in_name_order():
    db = DbMeta("db")
    db.set_tab_meta("zeta", TabMeta("zeta"))
    db.set_tab_meta("alpha", TabMeta("alpha"))
    text = db.dumps()
    assert text.index("alpha") < text.index("zeta")


def test_loads_malformed():
    with pytest.raises(ValueError):
        DbMeta.loads("db\n2\n")