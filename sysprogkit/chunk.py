"""Chunks of a simulated heap, measured in fixed-size units.

A chunk occupies one header unit, ``units`` data units and one footer unit.
Positions inside an :class:`Arena` are unit offsets from its start.
"""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field

__all__ = ["CHUNK_UNIT", "ChunkStatus", "Chunk", "Arena"]

CHUNK_UNIT = 24


class ChunkStatus(enum.IntEnum):
    """Whether a chunk is on the free list or handed out."""

    FREE = 0
    IN_USE = 1


@dataclass(eq=False)
class Chunk:
    """Header (and footer) of one chunk; compared by identity."""

    offset: int
    units: int = 0
    status: ChunkStatus = ChunkStatus.FREE
    next_free: Chunk | None = field(default=None, repr=False)
    prev_free: Chunk | None = field(default=None, repr=False)
    footer: int = 0

    @property
    def end(self) -> int:
        """Offset just past this chunk's footer."""
        return self.offset + self.units + 2


class Arena:
    """A growable run of units holding chunk headers."""

    def __init__(self, limit: int | None = None) -> None:
        self.start = 0
        self.end = 0
        self.limit = limit
        self._headers: dict[int, Chunk] = {}

    def grow(self, units: int) -> int:
        """Extend the arena by ``units`` and return the offset of the new space."""
        if units < 0:
            raise ValueError("cannot grow by a negative amount")
        if self.limit is not None and self.end + units > self.limit:
            raise MemoryError("arena limit exceeded")
        old_end = self.end
        self.end += units
        return old_end

    def place(self, offset: int, units: int, status: ChunkStatus) -> Chunk:
        """Write a chunk header and footer at ``offset`` and return the chunk.

        Headers that lay inside the new chunk's span are discarded.
        """
        if units < 0:
            raise ValueError("chunk size cannot be negative")
        if offset < self.start or offset + units + 2 > self.end:
            raise ValueError("chunk does not fit in the arena")
        for inner in range(offset + 1, offset + units + 2):
            self._headers.pop(inner, None)
        chunk = self.chunk_at(offset)
        chunk.units = units
        chunk.footer = units
        chunk.status = ChunkStatus(status)
        return chunk

    def chunk_at(self, offset: int) -> Chunk:
        """Return the header at ``offset``; an unwritten one reads as blank."""
        if not self.start <= offset < self.end:
            raise IndexError(f"offset {offset} outside the arena")
        chunk = self._headers.get(offset)
        if chunk is None:
            chunk = self._headers[offset] = Chunk(offset)
        return chunk

    def next_adjacent(self, chunk: Chunk) -> Chunk | None:
        """Return the chunk that follows ``chunk``, or None if it is the last."""
        if chunk.offset < self.start:
            raise ValueError("chunk lies before the arena")
        following = chunk.end
        if following >= self.end:
            return None
        return self.chunk_at(following)

    def is_valid(self, chunk: Chunk) -> bool:
        """Check that ``chunk`` lies inside the arena and is not empty."""
        if chunk.offset < self.start:
            sys.stderr.write("Bad heap start\n")
            return False
        if chunk.offset >= self.end:
            sys.stderr.write("Bad heap end\n")
            return False
        if chunk.units == 0:
            sys.stderr.write("Zero units\n")
            return False
        return True