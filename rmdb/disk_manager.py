"""File, page and log I/O on disk."""

from __future__ import annotations

import os
import shutil
import stat
import threading
from typing import Optional

from rmdb.defs import LOG_FILE_NAME, PAGE_SIZE
from rmdb.errors import (
    FileAlreadyExistsError,
    FileMissingError,
    FileNotClosedError,
    FileNotOpenError,
    InternalError,
    UnixError,
)

_BINARY = getattr(os, "O_BINARY", 0)


class DiskManager:
    """Opens, creates and removes files and reads and writes their pages."""

    MAX_FD = 8192

    def __init__(self) -> None:
        self._path2fd: dict[str, int] = {}
        self._fd2path: dict[int, str] = {}
        self._fd2pageno: dict[int, int] = {}
        self._pageno_lock = threading.Lock()
        self.log_fd = -1

    def __enter__(self) -> "DiskManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        for fd in list(self._fd2path):
            self.close_file(fd)

    # pages

    def write_page(self, fd: int, page_no: int, data: bytes) -> None:
        """Write ``data`` at the start of page ``page_no`` of the file."""
        try:
            os.lseek(fd, page_no * PAGE_SIZE, os.SEEK_SET)
        except OSError as exc:
            raise InternalError("DiskManager::write_page Error: lseek failed") from exc
        try:
            written = os.write(fd, bytes(data))
        except OSError as exc:
            raise InternalError("DiskManager::write_page Error: write failed") from exc
        if written != len(data):
            raise InternalError("DiskManager::write_page Error: write failed")

    def read_page(self, fd: int, page_no: int, num_bytes: int) -> bytes:
        """Read ``num_bytes`` from the start of page ``page_no`` of the file."""
        try:
            os.lseek(fd, page_no * PAGE_SIZE, os.SEEK_SET)
        except OSError as exc:
            raise InternalError("DiskManager::read_page Error: lseek failed") from exc
        try:
            data = os.read(fd, num_bytes)
        except OSError as exc:
            raise InternalError("DiskManager::read_page Error: read failed") from exc
        if len(data) != num_bytes:
            raise InternalError("DiskManager::read_page Error: read failed")
        return data

    def allocate_page(self, fd: int) -> int:
        """Hand out the next page number of the file."""
        if not 0 <= fd < self.MAX_FD:
            raise InternalError(f"Invalid file descriptor for allocation: {fd}")
        with self._pageno_lock:
            page_no = self._fd2pageno.get(fd, 0)
            self._fd2pageno[fd] = page_no + 1
        return page_no

    def deallocate_page(self, page_id: int) -> None:
        """Page numbers are never reused; nothing to do."""

    def set_fd2pageno(self, fd: int, start_page_no: int) -> None:
        """Set how many pages of the file are already allocated."""
        with self._pageno_lock:
            self._fd2pageno[fd] = start_page_no

    def get_fd2pageno(self, fd: int) -> int:
        """Return how many pages of the file are allocated."""
        with self._pageno_lock:
            return self._fd2pageno.get(fd, 0)

    # directories

    def is_dir(self, path: str) -> bool:
        try:
            return stat.S_ISDIR(os.stat(path).st_mode)
        except OSError:
            return False

    def create_dir(self, path: str) -> None:
        try:
            os.mkdir(path)
        except OSError as exc:
            raise UnixError(exc) from exc

    def destroy_dir(self, path: str) -> None:
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise UnixError(exc) from exc

    # files

    def is_file(self, path: str) -> bool:
        try:
            return stat.S_ISREG(os.stat(path).st_mode)
        except OSError:
            return False

    def create_file(self, path: str) -> None:
        if self.is_file(path):
            raise FileAlreadyExistsError(path)
        try:
            fd = os.open(path, os.O_CREAT | os.O_RDWR | _BINARY, 0o600)
        except OSError as exc:
            raise UnixError(exc) from exc
        os.close(fd)

    def destroy_file(self, path: str) -> None:
        if not self.is_file(path):
            raise FileMissingError(path)
        if path in self._path2fd:
            raise FileNotClosedError(path)
        try:
            os.unlink(path)
        except OSError as exc:
            raise UnixError(exc) from exc

    def open_file(self, path: str) -> int:
        """Open an existing file for reading and writing and return its descriptor."""
        if not self.is_file(path):
            raise FileMissingError(path)
        if path in self._path2fd:
            raise FileNotClosedError(path)
        try:
            fd = os.open(path, os.O_RDWR | _BINARY)
        except OSError as exc:
            raise UnixError(exc) from exc
        self._path2fd[path] = fd
        self._fd2path[fd] = path
        return fd

    def close_file(self, fd: int) -> None:
        if fd not in self._fd2path:
            raise FileNotOpenError(fd)
        try:
            os.close(fd)
        except OSError as exc:
            raise UnixError(exc) from exc
        path = self._fd2path.pop(fd)
        del self._path2fd[path]
        if fd == self.log_fd:
            self.log_fd = -1

    def get_file_size(self, file_name: str) -> int:
        """Size of the file in bytes, or -1 when it cannot be read."""
        try:
            return os.stat(file_name).st_size
        except OSError:
            return -1

    def get_file_name(self, fd: int) -> str:
        try:
            return self._fd2path[fd]
        except KeyError:
            raise FileNotOpenError(fd) from None

    def get_file_fd(self, file_name: str) -> int:
        """Descriptor of the file, opening it if it is not open yet."""
        fd = self._path2fd.get(file_name)
        return self.open_file(file_name) if fd is None else fd

    # log

    def _ensure_log(self) -> int:
        if self.log_fd == -1:
            self.log_fd = self.open_file(LOG_FILE_NAME)
        return self.log_fd

    def read_log(self, size: int, offset: int) -> Optional[bytes]:
        """Read up to ``size`` bytes of the log from ``offset``.

        Returns None when ``offset`` lies beyond the end of the log.
        """
        fd = self._ensure_log()
        file_size = self.get_file_size(LOG_FILE_NAME)
        if offset > file_size:
            return None
        size = min(size, file_size - offset)
        if size == 0:
            return b""
        os.lseek(fd, offset, os.SEEK_SET)
        data = os.read(fd, size)
        if len(data) != size:
            raise InternalError("DiskManager::read_log Error: read failed")
        return data

    def write_log(self, log_data: bytes) -> None:
        """Append ``log_data`` to the end of the log."""
        fd = self._ensure_log()
        try:
            os.lseek(fd, 0, os.SEEK_END)
            written = os.write(fd, bytes(log_data))
        except OSError as exc:
            raise UnixError(exc) from exc
        if written != len(log_data):
            raise UnixError()