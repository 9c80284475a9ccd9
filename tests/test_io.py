import pytest

from minxp.io import Error, Read, Seek, SeekFrom, Whence, Write


class Memory(Read, Write, Seek):
    def __init__(self, data=b"", chunk=None):
        self.data = bytearray(data)
        self.pos = 0
        self.chunk = chunk
        self.calls = 0

    def read(self, size):
        out = bytes(self.data[self.pos:self.pos + size])
        self.pos += len(out)
        return out

    def write(self, buf):
        self.calls += 1
        if self.chunk is not None:
            buf = buf[:self.chunk]
        self.data[self.pos:self.pos + len(buf)] = buf
        self.pos += len(buf)
        return len(buf)

    def flush(self):
        pass

    def seek(self, pos):
        if pos.whence is Whence.START:
            self.pos = pos.offset
        elif pos.whence is Whence.CURRENT:
            self.pos += pos.offset
        else:
            self.pos = len(self.data) + pos.offset
        return self.pos


class Stuck(Write):
    def __init__(self):
        self.calls = 0

    def write(self, buf):
        self.calls += 1
        return 0

    def flush(self):
        pass


class Failing(Write):
    def __init__(self):
        self.calls = 0

    def write(self, buf):
        self.calls += 1
        raise Error("broken sink")

    def flush(self):
        pass


def test_error_keeps_reason():
    err = Error("cannot open file: 2")
    assert err.reason == "cannot open file: 2"
    assert str(err) == "cannot open file: 2"


def test_seek_from_constructors():
    assert SeekFrom.start(4) == SeekFrom(Whence.START, 4)
    assert SeekFrom.end(-2).whence is Whence.END
    assert SeekFrom.current(-3).offset == -3
    assert not (SeekFrom.start(3) == SeekFrom.current(3))


def test_seek_from_start_rejects_negative():
    with pytest.raises(ValueError):
        SeekFrom.start(-1)


def test_write_all_uses_several_partial_writes():
    sink = Memory(chunk=2)
    payload = b"hello world"
    assert Write.write_all(sink, payload) is None
    assert bytes(sink.data) == payload
    assert sink.calls > 1


def test_write_all_raises_when_nothing_is_written():
    sink = Stuck()
    with pytest.raises(Error):
        Write.write_all(sink, b"data")
    assert sink.calls == 1


def test_write_all_of_empty_buffer_writes_nothing():
    sink = Memory()
    assert Write.write_all(sink, b"") is None
    assert sink.calls == 0


def test_write_fmt_encodes_utf8():
    sink = Memory()
    text = "zażółć"
    assert Write.write_fmt(sink, text) is None
    assert bytes(sink.data).decode("utf-8") == text


def test_write_fmt_ignores_sink_errors():
    sink = Failing()
    assert Write.write_fmt(sink, "anything") is None
    assert sink.calls == 1


def test_read_to_end_after_seek():
    payload = b"0123456789"
    stream = Memory(payload)
    assert stream.seek(SeekFrom.start(3)) == 3
    assert Read.read_to_end(stream) == payload[3:]


def test_read_to_end_of_large_data():
    payload = bytes(range(256)) * 600
    assert Read.read_to_end(Memory(payload)) == payload


def test_read_exact_success_and_short():
    payload = b"abcdef"
    stream = Memory(payload)
    assert Read.read_exact(stream, 4) == payload[:4]
    with pytest.raises(Error):
        Read.read_exact(stream, 4)


def test_seek_position_tracks_reads():
    stream = Memory(b"some bytes here")
    chunk = stream.read(5)
    assert Seek.seek_position(stream) == len(chunk)


def test_seek_relative_and_end():
    payload = b"abcdefgh"
    stream = Memory(payload)
    stream.seek(SeekFrom.start(2))
    assert Seek.seek_relative(stream, 3) == 5
    assert stream.seek(SeekFrom.end(0)) == len(payload)
    assert stream.seek(SeekFrom.end(-1)) == len(payload) - 1