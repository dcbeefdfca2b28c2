import pytest

from rmdb.defs import LOG_FILE_NAME, PAGE_SIZE
from rmdb.disk_manager import DiskManager
from rmdb.errors import (
    FileAlreadyExistsError,
    FileMissingError,
    FileNotClosedError,
    FileNotOpenError,
    InternalError,
)


@pytest.fixture
def dm():
    with DiskManager() as manager:
        yield manager


@pytest.fixture
def table_path(tmp_path, dm):
    path = str(tmp_path / "table")
    dm.create_file(path)
    return path


def test_page_write_read_round_trip(dm, table_path):
    fd = dm.open_file(table_path)
    payload = bytes(range(256)) * (PAGE_SIZE // 256)
    dm.write_page(fd, 0, payload)
    dm.write_page(fd, 2, b"\x07" * PAGE_SIZE)
    assert dm.read_page(fd, 0, PAGE_SIZE) == payload
    assert dm.read_page(fd, 2, PAGE_SIZE) == b"\x07" * PAGE_SIZE
    assert dm.get_file_size(table_path) == 3 * PAGE_SIZE


def test_read_past_end_raises(dm, table_path):
    fd = dm.open_file(table_path)
    with pytest.raises(InternalError):
        dm.read_page(fd, 5, PAGE_SIZE)


def test_allocate_page_increments(dm):
    assert [dm.allocate_page(4) for _ in range(3)] == [0, 1, 2]
    assert dm.get_fd2pageno(4) == 3
    assert dm.allocate_page(5) == 0


def test_set_fd2pageno(dm):
    dm.set_fd2pageno(6, 10)
    assert dm.get_fd2pageno(6) == 10
    assert dm.allocate_page(6) == 10


def test_allocate_page_rejects_bad_fd(dm):
    with pytest.raises(InternalError):
        dm.allocate_page(DiskManager.MAX_FD)


def test_create_existing_file_raises(dm, table_path):
    assert dm.is_file(table_path)
    with pytest.raises(FileAlreadyExistsError):
        dm.create_file(table_path)


def test_destroy_missing_file_raises(dm, tmp_path):
    with pytest.raises(FileMissingError):
        dm.destroy_file(str(tmp_path / "absent"))


def test_destroy_open_file_raises(dm, table_path):
    dm.open_file(table_path)
    with pytest.raises(FileNotClosedError):
        dm.destroy_file(table_path)


def test_destroy_closed_file(dm, table_path):
    fd = dm.open_file(table_path)
    dm.close_file(fd)
    dm.destroy_file(table_path)
    assert not dm.is_file(table_path)


def test_open_twice_raises(dm, table_path):
    dm.open_file(table_path)
    with pytest.raises(FileNotClosedError):
        dm.open_file(table_path)


def test_open_missing_raises(dm, tmp_path):
    with pytest.raises(FileMissingError):
        dm.open_file(str(tmp_path / "absent"))


def test_close_unknown_fd_raises(dm):
    with pytest.raises(FileNotOpenError):
        dm.close_file(9999)


def test_file_name_and_fd_lookup(dm, table_path):
    fd = dm.get_file_fd(table_path)
    assert dm.get_file_name(fd) == table_path
    assert dm.get_file_fd(table_path) == fd
    dm.close_file(fd)
    with pytest.raises(FileNotOpenError):
        dm.get_file_name(fd)


def test_file_size_of_missing_file(dm, tmp_path):
    assert dm.get_file_size(str(tmp_path / "absent")) == -1


def test_directories(dm, tmp_path):
    path = str(tmp_path / "db")
    assert not dm.is_dir(path)
    dm.create_dir(path)
    assert dm.is_dir(path)
    assert not dm.is_file(path)
    dm.destroy_dir(path)
    assert not dm.is_dir(path)


def test_log_round_trip(dm, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    dm.create_file(LOG_FILE_NAME)
    dm.write_log(b"first;")
    dm.write_log(b"second")
    assert dm.read_log(100, 0) == b"first;second"
    assert dm.read_log(3, 6) == b"sec"
    assert dm.read_log(10, 12) == b""
    assert dm.read_log(10, 13) is None
    assert dm.get_file_name(dm.log_fd) == LOG_FILE_NAME