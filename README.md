# sysprogkit

A few small systems-programming tools, usable from the command line or
from Python:

- **decomment** / **decomment-dfa**: remove C comments from source text.
- **dirtree**: walks directory trees and lists their entries, optionally
  as a tree, with per-entry details and with summaries.
- **heapmgr**: a simulated first-fit heap allocator with an
  address-ordered, doubly linked free list, header and footer units,
  splitting and coalescing.

Only the standard library is needed.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## decomment

Reads C source on standard input and writes it back with comments removed.

```
decomment < program.c > program.stripped.c
```

- Each `//` or `/* ... */` comment is replaced by a single space.
- Newlines inside a block comment are kept, so line numbers are kept too.
- Comment markers inside string literals and character constants are left
  alone; backslash escapes inside them are respected. An unterminated
  literal simply ends at the end of input.
- A lone `/` at the very end of the input is dropped.
- If the input ends inside a comment, everything produced so far is still
  written to standard output, the message
  `Error: line N: unterminated comment` goes to standard error, and the
  command exits with status 1. For a block comment `N` is the line it
  started on. A `//` comment with no newline after it also counts as
  unterminated here.

`decomment-dfa` does the same job as one explicit state machine, with two
differences: a `/` at the very end of the input is written out, and a `//`
comment may run to the end of the input. Only an unclosed block comment is
an error.

```
decomment-dfa < program.c
```

Input is read as bytes and passed through unchanged apart from the
comments.

From Python:

```python
from sysprogkit.decomment import decomment, UnterminatedCommentError
from sysprogkit.decomment_dfa import decomment_dfa

print(decomment("int x; /* counter */\n"))   # "int x;  \n"

try:
    decomment("a /* never closed")
except UnterminatedCommentError as exc:
    print(exc, exc.line)     # "line 1: unterminated comment", 1
    print(exc.output)        # the text produced before the end
```

`UnterminatedCommentError` is a `ValueError`; `decomment_dfa` raises it
too.

## dirtree

Lists every entry under one or more directories, directories first and
then by byte-wise name at each level. `.` and `..` are skipped and
symbolic links are not followed.

```
dirtree [-t] [-s] [-v] [-h] [path...]
```

| Option    | Meaning                                                          |
|-----------|------------------------------------------------------------------|
| `-t`      | draw the listing as a tree (`|-` and `` `- `` branches)          |
| `-s`      | print a header, a footer and a summary line for each directory  |
| `-v`      | show user, group, size, blocks and type for each entry          |
| `-h`      | print the help text to standard error and exit with status 1    |
| `path...` | directories to analyse (at most 64); default is the current one |

An unknown option prints `Unrecognized option '...'.` and the help text,
and exits with status 1. Paths beyond the 64th are ignored with a warning.
Directories that cannot be read are reported on standard error and the
walk goes on.

With `-s` and more than one path, grand totals for all directories are
printed at the end; with `-v` as well, the total size and block counts are
included. Names too long for their 54-column field are cut and end in
`...`.

```
dirtree -t -s -v /etc /var/log
```

The building blocks are in `sysprogkit.layout`: `Flags` (`TREE`,
`SUMMARY`, `VERBOSE`), `Summary` (with `record` and `merge`),
`tree_prefix`, `truncate`, `align_right`, `align_left`, `format_counts`,
`file_type` and `verbose_details`. `sysprogkit.dirtree` provides
`sorted_entries`, `process_dir`, `print_summary`, `usage` and `main`;
`process_dir` and `print_summary` write to any text streams you pass in.

```python
from sysprogkit.layout import format_counts, truncate

format_counts(1, 2, 0, 0, 3)
# '1 file, 2 directories, 0 links, 0 pipes, and 3 sockets'
truncate("| ", "a_rather_long_name", 12)
# 'a_rath...'
```

Where user or group names cannot be looked up, the numeric ids are shown.

## Heap manager

`sysprogkit.heapmgr.HeapManager` simulates a heap of 24-byte units. Every
chunk has a header and a footer unit; free chunks are kept in a list
sorted by address, split on allocation when large enough and merged with
free neighbours when released. The heap grows by at least 1024 units
(`MEMALLOC_MIN`) at a time.

```python
from sysprogkit.heapmgr import HeapManager, size_to_units

heap = HeapManager(checked=True)
a = heap.malloc(100)        # byte offset of the data area
b = heap.malloc(40)
heap.free(a)
heap.free(b)

assert heap.check_validity()
print(heap.free_list())
print(size_to_units(100))   # 5
```

- `malloc(size)` returns `None` for a size of zero or less, and when the
  optional `limit` (in units) given to `HeapManager` would be exceeded.
- `free(None)` does nothing; an address that is not an allocated block
  raises `ValueError`.
- With `checked=True` the whole heap is validated before and after each
  operation and a `RuntimeError` is raised if it is inconsistent.
  `check_validity()` can also be called directly; it reports problems on
  standard error and returns `False`.

The chunk layout is in `sysprogkit.chunk`: `CHUNK_UNIT`, `ChunkStatus`,
`Chunk` and `Arena` (with `grow`, `place`, `chunk_at`, `next_adjacent` and
`is_valid`).

## What this package does not do

The heap manager works on a simulated arena only: it does not manage the
memory of the running process, and addresses are offsets into that arena.
There is no command for it; it is used from Python.