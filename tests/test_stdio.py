import io
import sys

from minxp import stdio


def test_stdout_write_reaches_stdout(capsys):
    count = stdio.stdout().write(b"abc")
    captured = capsys.readouterr()
    assert count == 3
    assert captured.out == "abc"
    assert captured.err == ""


def test_stderr_write_reaches_stderr(capsys):
    stdio.stderr().write_all(b"oops")
    captured = capsys.readouterr()
    assert captured.err == "oops"
    assert captured.out == ""


def test_print_and_println(capsys):
    stdio.print("first ")
    stdio.println("second")
    assert capsys.readouterr().out == "first second\n"


def test_println_without_text_is_newline(capsys):
    stdio.println()
    assert capsys.readouterr().out == "\n"


def test_eprint_and_eprintln(capsys):
    stdio.eprint("a")
    stdio.eprintln("b")
    captured = capsys.readouterr()
    assert captured.err == "ab\n"
    assert captured.out == ""


def test_println_non_ascii_round_trip(capsys):
    stdio.println("héllo wörld")
    assert capsys.readouterr().out == "héllo wörld\n"


def test_lock_writes_through(capsys):
    with stdio.stdout().lock() as out:
        out.write_all(b"locked ")
        out.write_fmt("text")
        out.flush()
    assert capsys.readouterr().out == "locked text"


def test_write_without_stream_returns_zero(monkeypatch):
    monkeypatch.setattr(sys, "stdout", None)
    assert stdio.stdout().write(b"lost") == 0


def test_write_to_text_only_stream(monkeypatch):
    sink = io.StringIO()
    monkeypatch.setattr(sys, "stdout", sink)
    assert stdio.stdout().write(b"hi") == 2
    stdio.println("there")
    assert sink.getvalue() == "hithere\n"


def test_stderr_does_not_touch_stdout(monkeypatch):
    out_sink = io.StringIO()
    err_sink = io.StringIO()
    monkeypatch.setattr(sys, "stdout", out_sink)
    monkeypatch.setattr(sys, "stderr", err_sink)
    stdio.eprintln("warn")
    assert err_sink.getvalue() == "warn\n"
    assert out_sink.getvalue() == ""