"""Execution context and tabular result formatting."""

from __future__ import annotations

from typing import Any, Sequence

from rmdb.defs import BUFFER_LENGTH

RECORD_COUNT_LENGTH = 40


class Context:
    """Per-statement state: managers, transaction and the output buffer."""

    def __init__(
        self,
        lock_mgr: Any = None,
        log_mgr: Any = None,
        txn: Any = None,
        data_send: bytearray | None = None,
    ) -> None:
        self.lock_mgr = lock_mgr
        self.log_mgr = log_mgr
        self.txn = txn
        self.data_send = data_send if data_send is not None else bytearray()
        self.ellipsis = False

    @property
    def offset(self) -> int:
        return len(self.data_send)

    def output_text(self) -> str:
        """Return everything written to the output buffer."""
        return self.data_send.decode()

    def _fits(self, chunk: bytes) -> bool:
        return self.offset + RECORD_COUNT_LENGTH + len(chunk) < BUFFER_LENGTH

    def _append_limited(self, text: str) -> None:
        chunk = text.encode()
        if not self.ellipsis and self._fits(chunk):
            self.data_send += chunk
        else:
            self.ellipsis = True


class RecordPrinter:
    """Formats rows as a fixed-width ASCII table into a context's buffer."""

    COL_WIDTH = 16

    def __init__(self, num_cols: int) -> None:
        if num_cols <= 0:
            raise ValueError("num_cols must be positive")
        self.num_cols = num_cols

    def print_separator(self, context: Context) -> None:
        for _ in range(self.num_cols):
            context._append_limited("+" + "-" * (self.COL_WIDTH + 2))
        context._append_limited("+\n")

    def print_record(self, rec_str: Sequence[str], context: Context) -> None:
        if len(rec_str) != self.num_cols:
            raise ValueError(
                f"expected {self.num_cols} columns, got {len(rec_str)}"
            )
        for col in rec_str:
            if len(col) > self.COL_WIDTH:
                col = col[: self.COL_WIDTH - 3] + "..."
            context._append_limited(f"| {col:>{self.COL_WIDTH}} ")
        end = b"|\n"
        if not context.ellipsis and context._fits(end):
            context.data_send += end

    @staticmethod
    def print_record_count(num_rec: int, context: Context) -> None:
        text = "... ...\n" if context.ellipsis else ""
        text += f"Total record(s): {num_rec}\n"
        context.data_send += text.encode()