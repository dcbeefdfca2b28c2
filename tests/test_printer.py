import pytest

from rmdb.defs import BUFFER_LENGTH
from rmdb.printer import Context, RecordPrinter


def test_separator_single_column():
    ctx = Context()
    RecordPrinter(1).print_separator(ctx)
    assert ctx.output_text() == "+" + "-" * 18 + "+\n"
    assert ctx.offset == len(ctx.output_text())


def test_separator_segments_per_column():
    ctx = Context()
    RecordPrinter(3).print_separator(ctx)
    assert ctx.output_text().count("+") == 4


def test_record_right_aligned():
    ctx = Context()
    RecordPrinter(1).print_record(["Tables"], ctx)
    assert ctx.output_text() == "| " + "Tables".rjust(16) + " |\n"


def test_long_column_truncated():
    ctx = Context()
    RecordPrinter(1).print_record(["abcdefghijklmnopqrstuvwxyz"], ctx)
    assert ctx.output_text() == "| abcdefghijklm... |\n"


def test_row_width_matches_separator():
    ctx = Context()
    printer = RecordPrinter(2)
    printer.print_separator(ctx)
    printer.print_record(["a", "b"], ctx)
    sep, row = ctx.output_text().splitlines()
    assert len(sep) == len(row)


def test_record_count():
    ctx = Context()
    RecordPrinter.print_record_count(3, ctx)
    assert ctx.output_text() == "Total record(s): 3\n"
    assert not ctx.ellipsis


def test_invalid_column_count():
    with pytest.raises(ValueError):
        RecordPrinter(0)
    with pytest.raises(ValueError):
        RecordPrinter(2).print_record(["only"], Context())


def test_overflow_sets_ellipsis_and_bounds_buffer():
    ctx = Context()
    printer = RecordPrinter(2)
    for i in range(1000):
        printer.print_record([str(i), "x"], ctx)
    assert ctx.ellipsis
    assert ctx.offset < BUFFER_LENGTH
    RecordPrinter.print_record_count(1000, ctx)
    text = ctx.output_text()
    assert text.endswith("... ...\nTotal record(s): 1000\n")
    assert len(text.encode()) <= BUFFER_LENGTH


def test_existing_buffer_is_appended():
    buf = bytearray(b"head\n")
    ctx = Context(data_send=buf)
    RecordPrinter(1).print_record(["v"], ctx)
    assert ctx.output_text().startswith("head\n| ")
    assert ctx.data_send is buf