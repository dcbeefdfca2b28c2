"""System manager: database lifecycle and catalog commands."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from typing import Any, Optional

from rmdb.catalog import DbMeta
from rmdb.defs import DB_META_NAME, LOG_FILE_NAME, ColType, coltype2str
from rmdb.disk_manager import DiskManager
from rmdb.errors import DatabaseExistsError, DatabaseNotFoundError, UnixError
from rmdb.printer import Context, RecordPrinter

OUTPUT_FILE_NAME = "output.txt"


@dataclass
class ColDef:
    """Definition of a column in a CREATE TABLE statement."""

    name: str
    type: ColType
    len: int


@dataclass(eq=False)
class SmManager:
    """Manages the open database's catalog and its table and index handles.

    All files of a database live in a directory named after it; while a
    database is open the process works inside that directory.
    """

    disk_manager: DiskManager
    buffer_pool_manager: Any = None
    rm_manager: Any = None
    ix_manager: Any = None
    db: DbMeta = field(default_factory=DbMeta)
    fhs: dict[str, Any] = field(default_factory=dict)
    ihs: dict[str, Any] = field(default_factory=dict)

    def is_dir(self, db_name: str) -> bool:
        """Whether ``db_name`` names an existing directory."""
        return os.path.isdir(db_name)

    @staticmethod
    def _chdir(path: str) -> None:
        try:
            os.chdir(path)
        except OSError as exc:
            raise UnixError(exc) from exc

    def create_db(self, db_name: str) -> None:
        """Create the database directory with an empty catalog and log file."""
        if self.is_dir(db_name):
            raise DatabaseExistsError(db_name)
        try:
            os.mkdir(db_name)
        except OSError as exc:
            raise UnixError(exc) from exc
        self._chdir(db_name)
        try:
            with open(DB_META_NAME, "w", encoding="utf-8") as meta_file:
                meta_file.write(DbMeta(name=db_name).dumps())
            self.disk_manager.create_file(LOG_FILE_NAME)
        finally:
            self._chdir("..")

    def drop_db(self, db_name: str) -> None:
        """Remove the database directory and everything in it."""
        if not self.is_dir(db_name):
            raise DatabaseNotFoundError(db_name)
        try:
            shutil.rmtree(db_name)
        except OSError as exc:
            raise UnixError(exc) from exc

    def open_db(self, db_name: str) -> None:
        """Enter the database directory, load its catalog and open its files."""
        if not self.is_dir(db_name):
            raise DatabaseNotFoundError(db_name)
        if self.db.name:
            raise DatabaseExistsError(db_name)
        self._chdir(db_name)
        try:
            with open(DB_META_NAME, encoding="utf-8") as meta_file:
                text = meta_file.read()
        except OSError as exc:
            self._chdir("..")
            raise UnixError(exc) from exc
        self.db = DbMeta.loads(text)

        for tab in self.db.tabs.values():
            if self.rm_manager is not None:
                self.fhs[tab.name] = self.rm_manager.open_file(tab.name)
            if self.ix_manager is not None:
                for index in tab.indexes:
                    index_name = self.ix_manager.get_index_name(tab.name, index.cols)
                    self.ihs[index_name] = self.ix_manager.open_index(
                        tab.name, index.cols
                    )

        self.disk_manager.log_fd = self.disk_manager.open_file(LOG_FILE_NAME)

    def flush_meta(self) -> None:
        """Write the catalog of the open database to its metadata file."""
        with open(DB_META_NAME, "w", encoding="utf-8") as meta_file:
            meta_file.write(self.db.dumps())

    def close_db(self) -> None:
        """Persist the catalog, close all handles and leave the database directory."""
        if not self.db.name:
            raise DatabaseNotFoundError(self.db.name)
        self.flush_meta()
        self.db = DbMeta()

        if self.rm_manager is not None:
            for handle in self.fhs.values():
                self.rm_manager.close_file(handle)
        if self.ix_manager is not None:
            for handle in self.ihs.values():
                self.ix_manager.close_index(handle)
        self.fhs.clear()
        self.ihs.clear()

        if self.disk_manager.log_fd != -1:
            self.disk_manager.close_file(self.disk_manager.log_fd)

        self._chdir("..")

    def show_tables(self, context: Context) -> None:
        """List the tables of the open database, also appending them to the output file."""
        printer = RecordPrinter(1)
        printer.print_separator(context)
        printer.print_record(["Tables"], context)
        printer.print_separator(context)
        with open(OUTPUT_FILE_NAME, "a", encoding="utf-8") as outfile:
            outfile.write("| Tables |\n")
            for name in sorted(self.db.tabs):
                printer.print_record([name], context)
                outfile.write(f"| {name} |\n")
        printer.print_separator(context)

    def desc_table(self, tab_name: str, context: Context) -> None:
        """Describe the columns of a table: name, type and whether indexed."""
        tab = self.db.get_table(tab_name)
        captions = ["Field", "Type", "Index"]
        printer = RecordPrinter(len(captions))
        printer.print_separator(context)
        printer.print_record(captions, context)
        printer.print_separator(context)
        for col in tab.cols:
            printer.print_record(
                [col.name, coltype2str(col.type), "YES" if col.index else "NO"],
                context,
            )
        printer.print_separator(context)


def open_system_manager(
    disk_manager: Optional[DiskManager] = None,
) -> SmManager:
    """Build a system manager with its own disk manager when none is given."""
    return SmManager(disk_manager if disk_manager is not None else DiskManager())