"""Buffer pool of page frames with LRU replacement."""

from __future__ import annotations

import threading
from collections import OrderedDict, deque
from typing import Optional

from rmdb.defs import INVALID_PAGE_ID, PAGE_SIZE
from rmdb.disk_manager import DiskManager
from rmdb.page import Page, PageId


class Replacer:
    """Least-recently-used choice among frames that are not pinned."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._frames: OrderedDict[int, None] = OrderedDict()
        self._lock = threading.Lock()

    def victim(self) -> Optional[int]:
        """Remove and return the least recently unpinned frame, or None if there is none."""
        with self._lock:
            if not self._frames:
                return None
            frame_id, _ = self._frames.popitem(last=False)
            return frame_id

    def pin(self, frame_id: int) -> None:
        """Withdraw a frame from replacement."""
        with self._lock:
            self._frames.pop(frame_id, None)

    def unpin(self, frame_id: int) -> None:
        """Make a frame available for replacement as the most recently used one."""
        with self._lock:
            if frame_id in self._frames or len(self._frames) >= self.capacity:
                return
            self._frames[frame_id] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._frames)


class BufferPoolManager:
    """Caches file pages in a fixed number of frames."""

    def __init__(self, pool_size: int, disk_manager: DiskManager) -> None:
        self.pool_size = pool_size
        self._pages = [Page() for _ in range(pool_size)]
        self._page_table: dict[PageId, int] = {}
        self._free_list: deque[int] = deque(range(pool_size))
        self._disk = disk_manager
        self._replacer = Replacer(pool_size)
        self._latch = threading.Lock()

    @staticmethod
    def mark_dirty(page: Page) -> None:
        """Flag a page as modified."""
        page.is_dirty = True

    def _find_victim(self) -> Optional[int]:
        if self._free_list:
            return self._free_list.popleft()
        return self._replacer.victim()

    def _write_back(self, page: Page) -> None:
        self._disk.write_page(page.id.fd, page.id.page_no, page.data)

    def fetch_page(self, page_id: PageId) -> Optional[Page]:
        """Return the page pinned in a frame, reading it from disk if needed.

        Returns None when every frame is pinned.
        """
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is not None:
                page = self._pages[frame_id]
                page.pin_count += 1
                self._replacer.pin(frame_id)
                return page

            frame_id = self._find_victim()
            if frame_id is None:
                return None
            page = self._pages[frame_id]
            if page.is_dirty:
                self._write_back(page)
                page.is_dirty = False

            page.data[:] = self._disk.read_page(page_id.fd, page_id.page_no, PAGE_SIZE)
            self._page_table.pop(page.id, None)
            self._page_table[page_id] = frame_id
            page.id = page_id
            page.pin_count = 1
            self._replacer.pin(frame_id)
            return page

    def unpin_page(self, page_id: PageId, is_dirty: bool) -> bool:
        """Drop one pin of a cached page; False if it is not cached or not pinned."""
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            page = self._pages[frame_id]
            if page.pin_count <= 0:
                return False
            page.pin_count -= 1
            if page.pin_count == 0:
                self._replacer.unpin(frame_id)
            if is_dirty:
                page.is_dirty = True
            return True

    def flush_page(self, page_id: PageId) -> bool:
        """Write a cached page to disk whether or not it is dirty."""
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            page = self._pages[frame_id]
            self._disk.write_page(page_id.fd, page_id.page_no, page.data)
            page.is_dirty = False
            return True

    def new_page(self, fd: int) -> Optional[Page]:
        """Allocate a new zeroed page of file ``fd`` and return it pinned.

        The new page's id is available as ``page.id``. Returns None when
        no frame can be had.
        """
        with self._latch:
            frame_id = self._find_victim()
            if frame_id is None:
                return None
            page_no = self._disk.allocate_page(fd)
            if page_no == INVALID_PAGE_ID:
                return None

            page = self._pages[frame_id]
            if page.is_dirty:
                self._write_back(page)

            new_id = PageId(fd, page_no)
            self._page_table.pop(page.id, None)
            page.reset_memory()
            page.id = new_id
            page.is_dirty = False
            page.pin_count = 1
            self._page_table[new_id] = frame_id
            self._replacer.pin(frame_id)
            return page

    def delete_page(self, page_id: PageId) -> bool:
        """Remove a page from the pool.

        True if it was not cached or was removed; False if it is pinned.
        """
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return True
            page = self._pages[frame_id]
            if page.pin_count > 0:
                return False
            if page.is_dirty:
                self._disk.write_page(page_id.fd, page_id.page_no, page.data)
                page.is_dirty = False

            del self._page_table[page_id]
            page.reset_memory()
            page.id = PageId(fd=-1, page_no=INVALID_PAGE_ID)
            page.is_dirty = False
            page.pin_count = 0
            self._free_list.append(frame_id)
            self._replacer.unpin(frame_id)
            return True

    def flush_all_pages(self, fd: int) -> None:
        """Write every cached page of file ``fd`` to disk."""
        with self._latch:
            for page_id, frame_id in self._page_table.items():
                if page_id.fd == fd:
                    page = self._pages[frame_id]
                    self._disk.write_page(page_id.fd, page_id.page_no, page.data)
                    page.is_dirty = False