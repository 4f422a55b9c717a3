"""Walk directory trees and list their entries, optionally with totals."""

from __future__ import annotations

import os
import sys
from typing import TextIO

from sysprogkit.layout import (
    Flags,
    Summary,
    align_right,
    format_counts,
    tree_prefix,
    truncate,
    verbose_details,
)

__all__ = ["sorted_entries", "process_dir", "print_summary", "usage", "main"]

MAX_DIR = 64
NAME_WIDTH = 54
SUMMARY_WIDTH = 68
RULE = "-" * 100
VERBOSE_HEADER = "Name".ljust(57) + "   User:Group           Size    Blocks Type"


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def sorted_entries(path: str) -> list[os.DirEntry]:
    """Return the entries of ``path``, directories first, then by byte-wise name."""
    with os.scandir(path) as it:
        entries = [e for e in it if e.name not in (".", "..")]
    entries.sort(key=lambda e: (not _is_dir(e), os.fsencode(e.name)))
    return entries


def _error_text(exc: OSError) -> str:
    if exc.strerror:
        return exc.strerror
    if exc.errno is not None:
        return os.strerror(exc.errno)
    return str(exc)


def process_dir(
    path: str,
    prefix: str,
    summary: Summary,
    flags: Flags | int,
    out: TextIO,
    err: TextIO,
) -> None:
    """Print the tree below ``path`` to ``out`` and count its entries in ``summary``."""
    flags = Flags(flags)
    if len(prefix) <= 2:
        out.write(f"{path}\n")

    try:
        entries = sorted_entries(path)
    except OSError as exc:
        err.write(f"{tree_prefix(prefix, flags, True)}ERROR: {_error_text(exc)}\n")
        return

    last = len(entries) - 1
    for index, entry in enumerate(entries):
        entry_prefix = tree_prefix(prefix, flags, index == last)
        name = truncate(entry_prefix, entry.name, NAME_WIDTH)
        entry_path = f"{path}/{entry.name}"

        try:
            st = os.lstat(entry_path)
        except OSError as exc:
            message = _error_text(exc)
            err.write(f"ERROR: {message}")
            err.write(f"{entry_prefix}ERROR: {message}\n")
            continue
        summary.record(st)

        if flags & Flags.VERBOSE:
            label = f"{entry_prefix}{name}"[:NAME_WIDTH].ljust(NAME_WIDTH)
            out.write(f"{label}{verbose_details(st)}\n")
        else:
            out.write(f"{entry_prefix}{name}\n")

        if _is_dir(entry):
            process_dir(entry_path, entry_prefix + "  ", summary, flags, out, err)


def print_summary(
    path: str,
    summary: Summary,
    flags: Flags | int,
    out: TextIO,
    err: TextIO,
) -> None:
    """Print the listing of ``path`` framed by a header and a totals footer."""
    flags = Flags(flags)
    if flags & Flags.VERBOSE:
        out.write(f"{VERBOSE_HEADER}\n{RULE}\n")
    else:
        out.write(f"Name\n{RULE}\n")

    prefix = "| " if flags & Flags.TREE else "  "
    process_dir(path, prefix, summary, flags, out, err)

    out.write(f"{RULE}\n")
    counts = format_counts(
        summary.files, summary.dirs, summary.links, summary.fifos, summary.socks
    )
    counts = truncate("", counts, SUMMARY_WIDTH).ljust(SUMMARY_WIDTH)[:SUMMARY_WIDTH]
    if (flags & (Flags.SUMMARY | Flags.VERBOSE)) == (Flags.SUMMARY | Flags.VERBOSE):
        out.write(counts)
    else:
        out.write(f"{counts}\n\n")

    if flags & Flags.VERBOSE:
        size = align_right(str(summary.size), 14)
        blocks = align_right(str(summary.blocks), 9)
        out.write(f"   {size} {blocks}\n\n")


def usage(prog: str) -> str:
    """Return the help text for the command."""
    return (
        f"Usage {os.path.basename(prog)} [-t] [-s] [-v] [-h] [path...]\n"
        "Gather information about directory trees. If no path is given, "
        "the current directory\n"
        "is analyzed.\n"
        "\n"
        "Options:\n"
        " -t        print the directory tree (default if no other option "
        "specified)\n"
        " -s        print summary of directories (total number of files, "
        "total file size, etc)\n"
        " -v        print detailed information for each file. Turns on "
        "tree view.\n"
        " -h        print this help\n"
        f" path...   list of space-separated paths (max {MAX_DIR}). Default "
        "is the current directory.\n"
    )


def main(argv: list[str] | None = None) -> int:
    """Run the command with ``argv`` (without the program name)."""
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "dirtree"
    args = sys.argv[1:] if argv is None else list(argv)
    out, err = sys.stdout, sys.stderr

    options = {"-t": Flags.TREE, "-s": Flags.SUMMARY, "-v": Flags.VERBOSE}
    flags = Flags.NONE
    directories: list[str] = []

    for arg in args:
        if arg.startswith("-"):
            if arg in options:
                flags |= options[arg]
                continue
            if arg != "-h":
                err.write(f"Unrecognized option '{arg}'.")
                err.flush()
                out.write("\n\n")
                out.flush()
            err.write(usage(prog))
            return 1
        if len(directories) < MAX_DIR:
            directories.append(arg)
        else:
            out.write(
                f"Warning: maximum number of directories exceeded, ignoring '{arg}'.\n"
            )

    if not directories:
        directories.append(".")

    total = Summary()
    for directory in directories:
        current = Summary()
        if flags & Flags.SUMMARY:
            print_summary(directory, current, flags, out, err)
        else:
            prefix = "| " if flags & Flags.TREE else "  "
            process_dir(directory, prefix, current, flags, out, err)
        total.merge(current)

    if flags & Flags.SUMMARY and len(directories) > 1:
        out.write(
            f"Analyzed {len(directories)} directories:\n"
            f"  total # of files:        {total.files:16d}\n"
            f"  total # of directories:  {total.dirs:16d}\n"
            f"  total # of links:        {total.links:16d}\n"
            f"  total # of pipes:        {total.fifos:16d}\n"
            f"  total # of sockets:      {total.socks:16d}\n"
        )
        if flags & Flags.VERBOSE:
            out.write(
                f"  total file size:         {total.size:16d}\n"
                f"  total # of blocks:       {total.blocks:16d}\n"
            )
    out.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())