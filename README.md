# rmdb

This package provides the lower layers of a small relational database
engine, written in pure Python. It covers page-oriented disk storage, an LRU
buffer pool, database and table metadata with its text format, database
lifecycle commands, and transaction bookkeeping types.

## Installation

```
pip install .
```

To run the test suite, install with the `test` extra:

```
pip install .[test]
pytest
```

## Modules

- `rmdb.errors` holds the exception hierarchy. Its root is `RMDBError`, and
  every message starts with `"Error: "`. For example, `str(TableNotFoundError("t"))`
  is `"Error: Table not found: t"`.
- `rmdb.defs` holds the configuration constants (`PAGE_SIZE`,
  `BUFFER_LENGTH`, `LOG_FILE_NAME`, `DB_META_NAME`, ...) and the core value
  types:
  - `Rid`, `ColType` and `coltype2str`.
  - `TabCol`, which is ordered by table and then by column.
  - `Value`, with `set_int`, `set_float`, `set_str` and `init_raw`.
    `init_raw` encodes the value as little-endian bytes. Strings are
    zero-padded, and `StringOverflowError` is raised when a string is too
    long for its length.
  - `CompOp`, `Condition` and `SetClause`.
- `rmdb.printer` holds `Context` and `RecordPrinter`:
  - `Context` collects output in a byte buffer. `Context.output_text()`
    returns that output.
  - `RecordPrinter` draws fixed-width tables of 16-character columns into
    the buffer. Longer values are cut short with `...`. Once the
    8192-byte buffer would overflow, further rows are dropped and the
    context is marked with an ellipsis. `RecordPrinter.print_record_count`
    then writes `... ...` before the `Total record(s): N` line.
- `rmdb.page` holds `PageId` and the 4 KiB `Page`:
  - `PageId` has a packed `key` property.
  - `Page` has `data`, `is_dirty`, `pin_count` and a `page_lsn` property
    stored in its first four bytes. `Page.reset_memory()` zeroes the data.
- `rmdb.disk_manager` holds `DiskManager`, which works with OS file
  descriptors:
  - It creates, opens, closes and removes files and directories.
  - It reads and writes pages, and `allocate_page` and `set_fd2pageno`
    hand out page numbers for each file.
  - It appends to and reads from the log file `db.log` (`write_log`,
    `read_log`).
  - It can be used as a context manager, which closes every file it opened
    on exit.
- `rmdb.buffer_pool` holds `BufferPoolManager` and its LRU `Replacer`:
  - `BufferPoolManager` offers `fetch_page`, `new_page`, `unpin_page`,
    `flush_page`, `flush_all_pages`, `delete_page` and `mark_dirty`.
  - `fetch_page` and `new_page` return `None` when every frame is pinned.
- `rmdb.catalog` holds `ColMeta`, `IndexMeta`, `TabMeta` and `DbMeta`.
  `DbMeta.dumps()` and `DbMeta.loads()` convert the catalog to and from the
  whitespace-separated text stored in `db.meta`.
- `rmdb.transaction` holds the transaction types:
  - The enums `TransactionState`, `IsolationLevel`, `WType`, `LockDataType`
    and `AbortReason`.
  - `WriteRecord`.
  - `LockDataId`, which has `table`, `record` and a packed `key()`.
  - `TransactionAbortError`, which has `info()`.
  - `Transaction`, which keeps write, lock and index page sets.
- `rmdb.system_manager` holds `ColDef`, `SmManager` and
  `open_system_manager`. `SmManager` manages databases:
  - `create_db` makes a directory containing `db.meta` and `db.log`.
  - `drop_db` removes that directory.
  - `open_db` changes into the directory and loads the catalog.
  - `close_db` saves the catalog and changes back out.
  - `show_tables` writes the table list to a `Context` and also appends it
    to `output.txt` in the current directory.
  - `desc_table` lists each column's name and type and whether it is
    indexed.

## Example

```python
from rmdb.disk_manager import DiskManager
from rmdb.buffer_pool import BufferPoolManager

disk = DiskManager()
disk.create_file("table.dat")
fd = disk.open_file("table.dat")

pool = BufferPoolManager(16, disk)
page = pool.new_page(fd)
page.data[4:9] = b"hello"
pool.unpin_page(page.id, True)
pool.flush_all_pages(fd)
disk.close_file(fd)
```

## What this package does not do

This package is not a complete database. It has no:

- SQL parser, planner or executor;
- record-file or index manager;
- lock manager or transaction manager;
- server or command-line program.

`SmManager` handles databases as a whole, along with listing and
describing tables. It does not create or drop tables or indexes.

`SmManager` does take optional `rm_manager` and `ix_manager` objects. When
they are given, opening and closing a database also opens and closes the
table and index handles through them. No such objects are included in this
package.

`Transaction` records writes and locks, but nothing here commits, aborts or
enforces locking.