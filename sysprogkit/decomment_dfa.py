"""Strip C comments with an explicit finite-state machine.

Each comment becomes one space. Newlines inside comments are kept. String
and character literals are copied unchanged. A ``/`` at the very end of the
input is written out, a ``//`` comment may run to the end of input, and only
an unterminated block comment is an error.
"""

from __future__ import annotations

import enum
import sys

from sysprogkit.decomment import UnterminatedCommentError

__all__ = ["decomment_dfa", "main"]


class _State(enum.Enum):
    CODE = enum.auto()
    POSSIBLE_COMMENT = enum.auto()
    COMMENT_SINGLE = enum.auto()
    COMMENT_MULTI = enum.auto()
    COMMENT_MULTI_STAR = enum.auto()
    STRING = enum.auto()
    STRING_ESCAPE = enum.auto()
    CHAR = enum.auto()
    CHAR_ESCAPE = enum.auto()


# literal state -> (closing quote, escape state)
_LITERALS = {
    _State.STRING: ('"', _State.STRING_ESCAPE),
    _State.CHAR: ("'", _State.CHAR_ESCAPE),
}
_ESCAPES = {escape: literal for literal, (_, escape) in _LITERALS.items()}


def _code_char(ch: str, out: list[str]) -> _State:
    """Handle a character read in plain code (never called with ``/``)."""
    out.append(ch)
    if ch == '"':
        return _State.STRING
    if ch == "'":
        return _State.CHAR
    return _State.CODE


def decomment_dfa(text: str) -> str:
    """Return ``text`` with its C comments removed.

    Raises :class:`UnterminatedCommentError` if the input ends inside a
    block comment; the error carries the line the comment started on.
    """
    out: list[str] = []
    line = 1
    comment_start = 0
    state = _State.CODE

    for ch in text:
        if state is _State.CODE:
            if ch == "/":
                state = _State.POSSIBLE_COMMENT
            else:
                state = _code_char(ch, out)
                if ch == "\n":
                    line += 1
        elif state is _State.POSSIBLE_COMMENT:
            if ch == "*":
                comment_start = line
                out.append(" ")
                state = _State.COMMENT_MULTI
            elif ch == "/":
                out.append(" ")
                state = _State.COMMENT_SINGLE
            else:
                out.append("/")
                state = _code_char(ch, out)
                if ch == "\n":
                    line += 1
        elif state is _State.COMMENT_SINGLE:
            if ch == "\n":
                out.append("\n")
                line += 1
                state = _State.CODE
        elif state is _State.COMMENT_MULTI:
            if ch == "*":
                state = _State.COMMENT_MULTI_STAR
            elif ch == "\n":
                out.append("\n")
                line += 1
        elif state is _State.COMMENT_MULTI_STAR:
            if ch == "/":
                state = _State.CODE
            elif ch != "*":
                if ch == "\n":
                    out.append("\n")
                    line += 1
                state = _State.COMMENT_MULTI
        elif state in _LITERALS:
            quote, escape = _LITERALS[state]
            out.append(ch)
            if ch == "\\":
                state = escape
            elif ch == quote:
                state = _State.CODE
            elif ch == "\n":
                line += 1
        else:
            out.append(ch)
            state = _ESCAPES[state]
            if ch == "\n":
                line += 1

    if state is _State.POSSIBLE_COMMENT:
        out.append("/")
    elif state in (_State.COMMENT_MULTI, _State.COMMENT_MULTI_STAR):
        raise UnterminatedCommentError(comment_start, "".join(out))
    return "".join(out)


def _write(stream, text: str) -> None:
    stream.flush()
    stream.buffer.write(text.encode("latin-1"))
    stream.buffer.flush()


def main(argv: list[str] | None = None) -> int:
    """Read standard input, write it without comments to standard output."""
    data = sys.stdin.buffer.read().decode("latin-1")
    try:
        result = decomment_dfa(data)
    except UnterminatedCommentError as exc:
        _write(sys.stdout, exc.output)
        sys.stderr.write(f"Error: {exc}\n")
        sys.stderr.flush()
        return 1
    _write(sys.stdout, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())