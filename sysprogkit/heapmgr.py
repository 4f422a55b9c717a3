"""A first-fit heap manager over a simulated arena.

Free chunks are kept in a doubly linked list sorted by address. Adjacent
free chunks are coalesced. Allocation splits the tail off a larger free
chunk. The heap grows by at least ``MEMALLOC_MIN`` units at a time.
Addresses handed out are byte offsets of a chunk's data from the arena
start.
"""

from __future__ import annotations

import sys

from sysprogkit.chunk import CHUNK_UNIT, Arena, Chunk, ChunkStatus

__all__ = ["MEMALLOC_MIN", "HeapManager", "size_to_units"]

MEMALLOC_MIN = 1024


def size_to_units(size: int) -> int:
    """Return the number of chunk units needed to hold ``size`` bytes."""
    if size < 0:
        raise ValueError("size cannot be negative")
    return (size + CHUNK_UNIT - 1) // CHUNK_UNIT


class HeapManager:
    """Hand out and take back blocks of a growable arena.

    ``limit`` caps the arena size in units. With ``checked`` set, the whole
    heap is validated around every operation and a :class:`RuntimeError`
    is raised if it is found inconsistent.
    """

    def __init__(self, limit: int | None = None, checked: bool = False) -> None:
        self.arena = Arena(limit)
        self.checked = checked
        self._free_head: Chunk | None = None

    # -- validation ----------------------------------------------------

    def check_validity(self) -> bool:
        """Sanity-check all chunks and the free list; report problems on stderr."""
        arena = self.arena
        if arena.start == arena.end:
            if self._free_head is None:
                return True
            sys.stderr.write("Inconsistent empty heap\n")
            return False

        w: Chunk | None = arena.chunk_at(arena.start)
        while w is not None and w.offset < arena.end:
            if not arena.is_valid(w):
                return False
            w = arena.next_adjacent(w)

        w = self._free_head
        while w is not None:
            if w.status != ChunkStatus.FREE:
                sys.stderr.write("Non-free chunk in the free chunk list\n")
                return False
            if not arena.is_valid(w):
                return False
            n = arena.next_adjacent(w)
            if n is not None and n is w.next_free:
                sys.stderr.write("Uncoalesced chunks\n")
                return False
            w = w.next_free
        return True

    def _verify(self) -> None:
        if self.checked and not self.check_validity():
            raise RuntimeError("heap is inconsistent")

    def free_list(self) -> list[Chunk]:
        """Return the free chunks in list (address) order."""
        chunks = []
        w = self._free_head
        while w is not None:
            chunks.append(w)
            w = w.next_free
        return chunks

    # -- chunk operations ----------------------------------------------

    def _merge(self, c1: Chunk, c2: Chunk) -> Chunk:
        assert self.arena.next_adjacent(c1) is c2
        assert c1.status == ChunkStatus.FREE and c2.status == ChunkStatus.FREE
        following = c2.next_free
        merged = self.arena.place(c1.offset, c1.units + c2.units + 2, ChunkStatus.FREE)
        merged.next_free = following
        if following is not None:
            following.prev_free = merged
        c2.next_free = c2.prev_free = None
        return merged

    def _split(self, c: Chunk, units: int) -> Chunk:
        """Carve ``units`` off the tail of free chunk ``c``; return the tail."""
        assert c.status == ChunkStatus.FREE
        assert c.units > units + 2
        self.arena.place(c.offset, c.units - units - 2, ChunkStatus.FREE)
        tail = self.arena.place(c.end, units, ChunkStatus.IN_USE)
        tail.next_free = tail.prev_free = None
        return tail

    def _insert_head(self, c: Chunk) -> None:
        assert c.units >= 1
        c.status = ChunkStatus.FREE
        c.prev_free = None
        head = self._free_head
        if head is None:
            c.next_free = None
            self._free_head = c
            return
        assert c.offset < head.offset
        c.next_free = head
        head.prev_free = c
        if self.arena.next_adjacent(c) is head:
            c = self._merge(c, head)
        self._free_head = c

    def _insert_after(self, e: Chunk, c: Chunk) -> Chunk:
        assert e.offset < c.offset
        assert e.status == ChunkStatus.FREE
        assert c.status != ChunkStatus.FREE

        following = e.next_free
        if following is not None:
            following.prev_free = c
        c.next_free = following
        e.next_free = c
        c.prev_free = e
        c.status = ChunkStatus.FREE

        if self.arena.next_adjacent(e) is c:
            c = self._merge(e, c)
        n = self.arena.next_adjacent(c)
        if n is not None and n.status == ChunkStatus.FREE:
            c = self._merge(c, n)
        return c

    def _remove(self, prev: Chunk | None, c: Chunk) -> None:
        assert c.status == ChunkStatus.FREE
        following = c.next_free
        if prev is None:
            self._free_head = following
        else:
            prev.next_free = following
        if following is not None:
            following.prev_free = prev
        c.next_free = c.prev_free = None
        c.status = ChunkStatus.IN_USE

    def _allocate_more(self, prev: Chunk | None, units: int) -> Chunk | None:
        units = max(units, MEMALLOC_MIN)
        try:
            offset = self.arena.grow(units + 2)
        except MemoryError:
            return None
        c = self.arena.place(offset, units, ChunkStatus.IN_USE)
        c.next_free = None
        c.prev_free = prev
        if self._free_head is None or prev is None:
            self._insert_head(c)
        else:
            c = self._insert_after(prev, c)
        self._verify()
        return c

    # -- public interface ----------------------------------------------

    @staticmethod
    def _address(c: Chunk) -> int:
        return (c.offset + 1) * CHUNK_UNIT

    def malloc(self, size: int) -> int | None:
        """Allocate room for ``size`` bytes; return its address or None."""
        if size <= 0:
            return None
        self._verify()
        units = size_to_units(size)

        pprev: Chunk | None = None
        prev: Chunk | None = None
        c = self._free_head
        while c is not None:
            if c.units >= units:
                if c.units > units + 2:
                    c = self._split(c, units)
                    self._verify()
                    return self._address(c)
                if c.units == units:
                    self._remove(prev, c)
                    self._verify()
                    return self._address(c)
            pprev, prev = prev, c
            c = c.next_free

        c = self._allocate_more(prev, units)
        if c is None:
            self._verify()
            return None
        assert c.units >= units
        if c is prev:
            prev = pprev
        if c.units > units + 2:
            c = self._split(c, units)
        else:
            self._remove(prev, c)
        self._verify()
        return self._address(c)

    def free(self, address: int | None) -> None:
        """Give back the block at ``address``; None is ignored."""
        if address is None:
            return
        self._verify()
        units, rem = divmod(address, CHUNK_UNIT)
        offset = units - 1
        if rem or offset < self.arena.start or offset >= self.arena.end:
            raise ValueError(f"address {address} is not a heap block")
        c = self.arena.chunk_at(offset)
        if c.status == ChunkStatus.FREE or c.units == 0:
            raise ValueError(f"address {address} is not an allocated block")

        prev: Chunk | None = None
        w = self._free_head
        while w is not None:
            if c.offset < w.offset:
                break
            prev = w
            w = w.next_free

        if prev is None:
            self._insert_head(c)
        else:
            self._insert_after(prev, c)
        self._verify()