"""Catalog metadata for columns, indexes, tables and databases."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from rmdb.defs import ColType
from rmdb.errors import ColumnNotFoundError, IndexNotFoundError, TableNotFoundError


@dataclass
class ColMeta:
    """A column of a table: its type, byte length and offset within a record."""

    tab_name: str
    name: str
    type: ColType
    len: int
    offset: int
    index: bool = False

    def _dump(self) -> str:
        return (
            f"{self.tab_name} {self.name} {int(self.type)} "
            f"{self.len} {self.offset} {int(self.index)}"
        )

    @classmethod
    def _load(cls, tokens: Iterator[str]) -> "ColMeta":
        return cls(
            tab_name=next(tokens),
            name=next(tokens),
            type=ColType(int(next(tokens))),
            len=int(next(tokens)),
            offset=int(next(tokens)),
            index=int(next(tokens)) != 0,
        )


@dataclass
class IndexMeta:
    """An index over one or more columns of a table."""

    tab_name: str
    col_tot_len: int = 0
    col_num: int = 0
    cols: list[ColMeta] = field(default_factory=list)

    def _dump(self) -> str:
        head = f"{self.tab_name} {self.col_tot_len} {self.col_num}"
        return head + "".join("\n" + col._dump() for col in self.cols)

    @classmethod
    def _load(cls, tokens: Iterator[str]) -> "IndexMeta":
        tab_name = next(tokens)
        col_tot_len = int(next(tokens))
        col_num = int(next(tokens))
        cols = [ColMeta._load(tokens) for _ in range(col_num)]
        return cls(tab_name, col_tot_len, col_num, cols)

    def _matches(self, col_names: Sequence[str]) -> bool:
        return self.col_num == len(col_names) and all(
            col.name == name for col, name in zip(self.cols, col_names)
        )


@dataclass
class TabMeta:
    """A table: its columns and the indexes built on it."""

    name: str = ""
    cols: list[ColMeta] = field(default_factory=list)
    indexes: list[IndexMeta] = field(default_factory=list)

    def is_col(self, col_name: str) -> bool:
        return any(col.name == col_name for col in self.cols)

    def is_index(self, col_names: Sequence[str]) -> bool:
        """Whether an index exists on exactly these columns, in this order."""
        return any(index._matches(col_names) for index in self.indexes)

    def get_index_meta(self, col_names: Sequence[str]) -> IndexMeta:
        for index in self.indexes:
            if index._matches(col_names):
                return index
        raise IndexNotFoundError(self.name, col_names)

    def get_col(self, col_name: str) -> ColMeta:
        for col in self.cols:
            if col.name == col_name:
                return col
        raise ColumnNotFoundError(col_name)

    def _dump(self) -> str:
        lines = [self.name, str(len(self.cols))]
        lines.extend(col._dump() for col in self.cols)
        lines.append(str(len(self.indexes)))
        lines.extend(index._dump() for index in self.indexes)
        return "\n".join(lines) + "\n"

    @classmethod
    def _load(cls, tokens: Iterator[str]) -> "TabMeta":
        name = next(tokens)
        cols = [ColMeta._load(tokens) for _ in range(int(next(tokens)))]
        indexes = [IndexMeta._load(tokens) for _ in range(int(next(tokens)))]
        return cls(name, cols, indexes)


@dataclass
class DbMeta:
    """A database: its name and its tables, keyed by table name."""

    name: str = ""
    tabs: dict[str, TabMeta] = field(default_factory=dict)

    def is_table(self, tab_name: str) -> bool:
        return tab_name in self.tabs

    def set_tab_meta(self, tab_name: str, meta: TabMeta) -> None:
        self.tabs[tab_name] = meta

    def get_table(self, tab_name: str) -> TabMeta:
        try:
            return self.tabs[tab_name]
        except KeyError:
            raise TableNotFoundError(tab_name) from None

    def dumps(self) -> str:
        """Serialize to the catalog text format, tables in name order."""
        parts = [f"{self.name}\n{len(self.tabs)}\n"]
        parts.extend(self.tabs[name]._dump() + "\n" for name in sorted(self.tabs))
        return "".join(parts)

    @classmethod
    def loads(cls, text: str) -> "DbMeta":
        """Parse the catalog text format."""
        tokens = iter(text.split())
        try:
            name = next(tokens)
            count = int(next(tokens))
            db = cls(name)
            for _ in range(count):
                tab = TabMeta._load(tokens)
                db.tabs[tab.name] = tab
        except (StopIteration, ValueError) as exc:
            raise ValueError("malformed catalog text") from exc
        return db