import io
import sys

import pytest

from sysprogkit.decomment import UnterminatedCommentError, decomment
from sysprogkit.decomment_dfa import decomment_dfa, main


@pytest.mark.parametrize(
    "text",
    [
        "",
        "int main(void) { return 0; }\n",
        'printf( "**Hello World!***/n" );\n',
        "a / b * c\n",
        "'/' '*'\n",
        '"\\"/* not a comment */"\n',
    ],
)
def test_text_without_comments_is_unchanged(text):
    assert decomment_dfa(text) == text


@pytest.mark.parametrize(
    "text",
    [
        "#include /*Header File 1*/<stdio.h>\n",
        "/* Program Author */\n/*\n * / * Prints * /\n */\nint x;\n",
        'printf( /*"**Hello World!/**/***This is not a comment*/ );\n',
        "x = 1; // trailing comment\ny = 2;\n",
        "/ T*his is also not a commen*t/\n",
        'printf( "/\\"Hello World!\\"**\\n"  /*This should be \n\t\tfine*/\n);\n',
        "a //* tricky\nb /** x **/ c\n",
    ],
)
def test_agrees_with_stream_decommenter(text):
    assert decomment_dfa(text) == decomment(text)


@pytest.mark.parametrize(
    "text",
    [
        "/* one\ntwo\nthree */ x\n",
        "a // b\nc /* d\n*/ e\n",
        '"str\ning" /*\n*/\n',
    ],
)
def test_newlines_are_preserved(text):
    assert decomment_dfa(text).count("\n") == text.count("\n")


def test_trailing_slash_is_kept():
    assert decomment_dfa("a/") == "a/"


def test_line_comment_may_end_at_eof():
    assert decomment_dfa("x // y") == "x  "


def test_unterminated_block_comment_reports_start_line():
    text = "a\n/* b\nc"
    with pytest.raises(UnterminatedCommentError) as info:
        decomment_dfa(text)
    assert info.value.line == 2
    assert info.value.output.count("\n") == text.count("\n")
    assert info.value.output.startswith("a\n")


def test_unterminated_literal_is_not_an_error():
    text = 'puts("open\n'
    assert decomment_dfa(text) == text


def _run_main(monkeypatch, data: bytes):
    stdout = io.TextIOWrapper(io.BytesIO(), encoding="latin-1")
    stderr = io.StringIO()
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
    monkeypatch.setattr(sys, "stdout", stdout)
    monkeypatch.setattr(sys, "stderr", stderr)
    code = main([])
    stdout.flush()
    return code, stdout.buffer.getvalue(), stderr.getvalue()


def test_main_success(monkeypatch):
    data = b"int a; /* c */\n"
    code, out, err = _run_main(monkeypatch, data)
    assert code == 0
    assert out == decomment_dfa(data.decode("latin-1")).encode("latin-1")
    assert err == ""


def test_main_reports_unterminated_comment(monkeypatch):
    code, out, err = _run_main(monkeypatch, b"x /* never closed")
    assert code == 1
    assert out.startswith(b"x ")
    assert err == "Error: line 1: unterminated comment\n"