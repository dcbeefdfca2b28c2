"""Core value types, enums and configuration constants."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from rmdb.errors import InternalError, StringOverflowError

BUFFER_LENGTH = 8192

INVALID_FRAME_ID = -1
INVALID_PAGE_ID = -1
INVALID_TXN_ID = -1
INVALID_TIMESTAMP = -1
INVALID_LSN = -1
HEADER_PAGE_ID = 0
PAGE_SIZE = 4096
BUFFER_POOL_SIZE = 65536
LOG_BUFFER_SIZE = 1024 * PAGE_SIZE
BUCKET_SIZE = 50

LOG_FILE_NAME = "db.log"
REPLACER_TYPE = "LRU"
DB_META_NAME = "db.meta"

_INT = struct.Struct("<i")
_FLOAT = struct.Struct("<f")


@dataclass(frozen=True)
class Rid:
    """Record identifier: page number and slot number."""

    page_no: int
    slot_no: int


class ColType(IntEnum):
    INT = 0
    FLOAT = 1
    STRING = 2


_COLTYPE_NAMES = {ColType.INT: "INT", ColType.FLOAT: "FLOAT", ColType.STRING: "STRING"}


def coltype2str(col_type: ColType) -> str:
    """Return the display name of a column type."""
    return _COLTYPE_NAMES[ColType(col_type)]


@dataclass(frozen=True, order=True)
class TabCol:
    """A column qualified by its table; ordered by (table, column)."""

    tab_name: str
    col_name: str


@dataclass
class Value:
    """A typed literal value with an optional raw byte encoding."""

    type: ColType | None = None
    int_val: int = 0
    float_val: float = 0.0
    str_val: str = ""
    raw: bytes | None = None

    def set_int(self, int_val: int) -> None:
        self.type = ColType.INT
        self.int_val = int_val

    def set_float(self, float_val: float) -> None:
        self.type = ColType.FLOAT
        self.float_val = float_val

    def set_str(self, str_val: str) -> None:
        self.type = ColType.STRING
        self.str_val = str_val

    def init_raw(self, length: int) -> None:
        """Encode the value into a raw buffer of ``length`` bytes."""
        if self.raw is not None:
            raise InternalError("Value raw buffer already initialized")
        if self.type == ColType.INT:
            if length != _INT.size:
                raise InternalError(f"Invalid INT length: {length}")
            self.raw = _INT.pack(self.int_val)
        elif self.type == ColType.FLOAT:
            if length != _FLOAT.size:
                raise InternalError(f"Invalid FLOAT length: {length}")
            self.raw = _FLOAT.pack(self.float_val)
        elif self.type == ColType.STRING:
            encoded = self.str_val.encode()
            if length < len(encoded):
                raise StringOverflowError()
            self.raw = encoded.ljust(length, b"\x00")
        else:
            self.raw = bytes(length)


class CompOp(IntEnum):
    EQ = 0
    NE = 1
    LT = 2
    GT = 3
    LE = 4
    GE = 5


@dataclass
class Condition:
    """A comparison between a column and either a value or another column."""

    lhs_col: TabCol
    op: CompOp
    is_rhs_val: bool
    rhs_col: TabCol | None = None
    rhs_val: Value = field(default_factory=Value)


@dataclass
class SetClause:
    """Assignment of a value to a column in an UPDATE."""

    lhs: TabCol
    rhs: Value