"""Formatting helpers and counters for directory-tree listings."""

from __future__ import annotations

import enum
import stat
from dataclasses import dataclass, fields
from typing import Any

__all__ = [
    "Flags",
    "Summary",
    "tree_prefix",
    "truncate",
    "align_right",
    "align_left",
    "format_counts",
    "file_type",
    "verbose_details",
]

_COUNTS_LIMIT = 99


class Flags(enum.IntFlag):
    """Output control flags."""

    NONE = 0
    TREE = 0x1
    SUMMARY = 0x2
    VERBOSE = 0x4


@dataclass
class Summary:
    """Running totals for one or more analysed directories."""

    files: int = 0
    dirs: int = 0
    links: int = 0
    fifos: int = 0
    socks: int = 0
    size: int = 0
    blocks: int = 0

    def record(self, st: Any) -> None:
        """Count one entry described by an ``lstat`` result."""
        mode = st.st_mode
        if stat.S_ISREG(mode):
            self.files += 1
        elif stat.S_ISDIR(mode):
            self.dirs += 1
        elif stat.S_ISLNK(mode):
            self.links += 1
        elif stat.S_ISFIFO(mode):
            self.fifos += 1
        elif stat.S_ISSOCK(mode):
            self.socks += 1
        elif stat.S_ISBLK(mode):
            self.blocks += 1
        self.size += st.st_size
        self.blocks += getattr(st, "st_blocks", 0)

    def merge(self, other: Summary) -> None:
        """Add the totals of ``other`` to this summary."""
        for field in fields(self):
            setattr(self, field.name, getattr(self, field.name) + getattr(other, field.name))


def tree_prefix(parent: str, flags: Flags | int, is_last: bool) -> str:
    """Return the prefix printed in front of an entry below ``parent``.

    Branch marks (``-`` and `````) inherited from the parent are blanked out.
    In tree mode the last two characters become ``|-``, or ```-`` for the last
    entry; for a two-character prefix the first character is kept unless the
    entry is the last one.
    """
    chars = [" " if c in "-`" else c for c in parent]
    if Flags(flags) & Flags.TREE:
        if len(chars) < 2:
            raise ValueError("tree prefix needs at least two characters")
        chars[-1] = "-"
        if len(chars) > 2:
            chars[-2] = "|"
        if is_last:
            chars[-2] = "`"
    return "".join(chars)


def truncate(prefix: str, name: str, max_len: int) -> str:
    """Shorten ``name`` with a trailing ``...`` so ``prefix + name`` fits ``max_len``."""
    if len(prefix) + len(name) <= max_len:
        return name
    remaining = max_len - len(prefix)
    if remaining < 3:
        raise ValueError("no room left for the name")
    return name[: remaining - 3] + "..."


def align_right(text: str, width: int) -> str:
    """Right-align ``text`` in ``width`` columns, cutting it if too long."""
    return text[:width].rjust(width)


def align_left(text: str, width: int) -> str:
    """Left-align ``text`` in ``width`` columns, cutting it if too long."""
    return text[:width].ljust(width)


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def format_counts(files: int, dirs: int, links: int, pipes: int, sockets: int) -> str:
    """Describe entry counts in words, e.g. ``1 file, 2 directories, ...``."""
    text = "{}, {}, {}, {}, and {}".format(
        _plural(files, "file", "files"),
        _plural(dirs, "directory", "directories"),
        _plural(links, "link", "links"),
        _plural(pipes, "pipe", "pipes"),
        _plural(sockets, "socket", "sockets"),
    )
    return text[:_COUNTS_LIMIT]


def file_type(mode: int) -> str:
    """Return the one-letter type code shown in verbose listings."""
    if stat.S_ISREG(mode):
        return " "
    if stat.S_ISDIR(mode):
        return "d"
    if stat.S_ISLNK(mode):
        return "l"
    if stat.S_ISCHR(mode):
        return "c"
    if stat.S_ISBLK(mode):
        return "b"
    if stat.S_ISFIFO(mode):
        return "f"
    if stat.S_ISSOCK(mode):
        return "s"
    return " "


def _user_name(uid: int) -> str:
    try:
        import pwd

        return pwd.getpwuid(uid).pw_name
    except (ImportError, KeyError):
        return str(uid)


def _group_name(gid: int) -> str:
    try:
        import grp

        return grp.getgrgid(gid).gr_name
    except (ImportError, KeyError):
        return str(gid)


def verbose_details(st: Any) -> str:
    """Return the owner, size, block count and type columns for an entry."""
    user = align_right(_user_name(st.st_uid), 8)
    group = align_left(_group_name(st.st_gid), 8)
    size = align_right(str(st.st_size), 10)
    blocks = align_right(str(getattr(st, "st_blocks", 0)), 8)
    return f"  {user}:{group}  {size}  {blocks}  {file_type(st.st_mode)}"