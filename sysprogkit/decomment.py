"""Strip C comments from source text.

Each comment is replaced by a single space. Newlines inside block comments
are kept so that line numbers stay the same. String and character literals
are copied unchanged, even when they hold comment markers.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator

__all__ = ["UnterminatedCommentError", "decomment", "main"]


class UnterminatedCommentError(ValueError):
    """Raised when the input ends inside a comment.

    ``line`` is the line the comment started on (for ``//`` comments, the
    line being read). ``output`` holds what was produced before the end.
    """

    def __init__(self, line: int, output: str) -> None:
        super().__init__(f"line {line}: unterminated comment")
        self.line = line
        self.output = output


def _skip_line_comment(chars: Iterator[str], out: list[str], line: int) -> int:
    out.append(" ")
    for ch in chars:
        if ch == "\n":
            out.append("\n")
            return line + 1
    raise UnterminatedCommentError(line, "".join(out))


def _skip_block_comment(chars: Iterator[str], out: list[str], line: int) -> int:
    start = line
    out.append(" ")
    star = False
    for ch in chars:
        if ch == "\n":
            line += 1
            out.append("\n")
            star = False
        elif ch == "*":
            star = True
        elif star and ch == "/":
            return line
        else:
            star = False
    raise UnterminatedCommentError(start, "".join(out))


def _copy_literal(chars: Iterator[str], out: list[str], quote: str, line: int) -> int:
    out.append(quote)
    escaped = False
    for ch in chars:
        if ch == quote and not escaped:
            out.append(ch)
            return line
        if ch == "\n":
            out.append(ch)
            escaped = False
            line += 1
        elif ch == "\\" and not escaped:
            out.append(ch)
            escaped = True
        else:
            out.append(ch)
            escaped = False
    return line


def decomment(text: str) -> str:
    """Return ``text`` with its C comments removed.

    A lone ``/`` at the very end of the input is dropped. An unterminated
    literal simply ends at the end of input; an unterminated comment raises
    :class:`UnterminatedCommentError`.
    """
    out: list[str] = []
    chars = iter(text)
    line = 1
    pending_slash = False

    for ch in chars:
        if ch == "/":
            if pending_slash:
                line = _skip_line_comment(chars, out, line)
                pending_slash = False
            else:
                pending_slash = True
            continue

        if ch == "*":
            if pending_slash:
                line = _skip_block_comment(chars, out, line)
            else:
                out.append(ch)
        else:
            if pending_slash:
                out.append("/")
            if ch in "\"'":
                line = _copy_literal(chars, out, ch, line)
            else:
                out.append(ch)
                if ch == "\n":
                    line += 1
        pending_slash = False

    return "".join(out)


def _write_bytes(stream, text: str) -> None:
    stream.flush()
    stream.buffer.write(text.encode("latin-1"))
    stream.buffer.flush()


def main(argv: list[str] | None = None) -> int:
    """Read standard input, write it without comments to standard output."""
    data = sys.stdin.buffer.read().decode("latin-1")
    try:
        result = decomment(data)
    except UnterminatedCommentError as exc:
        _write_bytes(sys.stdout, exc.output)
        sys.stderr.write(f"Error: {exc}\n")
        sys.stderr.flush()
        return 1
    _write_bytes(sys.stdout, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())