import pytest

from minxp.fs.file import (
    File,
    OpenOptions,
    copy,
    read,
    read_to_string,
    remove_file,
    write,
)
from minxp.io import Error, SeekFrom
from minxp.path import Path


@pytest.fixture
def target(tmp_path):
    return tmp_path / "data.bin"


def test_write_then_read_round_trip(target):
    write(target, b"hello world")
    assert read(target) == b"hello world"


def test_write_accepts_text_and_path_objects(target):
    write(Path(str(target)), "héllo")
    assert read_to_string(str(target)) == "héllo"


def test_read_to_string_rejects_invalid_utf8(target):
    write(target, b"\xff\xfe\xfd")
    with pytest.raises(Error, match="UTF-8"):
        read_to_string(target)


def test_create_empties_existing_file(target):
    write(target, b"a much longer first version")
    write(target, b"short")
    assert read(target) == b"short"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(Error, match="cannot open file"):
        read(tmp_path / "missing")


def test_copy_returns_size_and_copies(tmp_path, target):
    payload = b"copy me please"
    write(target, payload)
    destination = tmp_path / "copy.bin"
    assert copy(target, destination) == len(payload)
    assert read(destination) == payload


def test_copy_missing_source_raises(tmp_path):
    with pytest.raises(Error, match="failed to copy"):
        copy(tmp_path / "missing", tmp_path / "out")


def test_remove_file(target):
    write(target, b"x")
    remove_file(target)
    assert not target.exists()


def test_remove_missing_file_raises(tmp_path):
    with pytest.raises(Error, match="failed to delete file"):
        remove_file(tmp_path / "missing")


def test_create_without_write_is_rejected(target):
    with pytest.raises(Error, match="create but not write or append"):
        OpenOptions().read(True).create(True).open(target)


def test_create_new_without_write_is_rejected(target):
    with pytest.raises(Error, match="create_new but not write or append"):
        OpenOptions().read(True).create_new(True).open(target)


def test_create_new_fails_on_existing_file(target):
    write(target, b"present")
    with pytest.raises(Error, match="cannot open file"):
        File.create_new(target)
    assert read(target) == b"present"


def test_create_new_makes_fresh_file(target):
    with File.create_new(target) as file:
        file.write_all(b"fresh")
        file.seek(SeekFrom.start(0))
        assert file.read_to_end() == b"fresh"


def test_append_writes_at_end(target):
    write(target, b"abc")
    with File.options().append(True).open(target) as file:
        file.write_all(b"def")
    assert read(target) == b"abcdef"


def test_truncate_option_empties_file(target):
    write(target, b"content")
    with File.options().write(True).truncate(True).open(target) as file:
        assert file.metadata().len() == 0
    assert read(target) == b""


def test_seek_positions(target):
    payload = b"0123456789"
    write(target, payload)
    with File.open(target) as file:
        assert file.seek(SeekFrom.end(0)) == len(payload)
        assert file.seek(SeekFrom.start(2)) == 2
        assert file.seek_relative(3) == 5
        assert file.seek_position() == 5
        assert file.read(2) == payload[5:7]


def test_read_to_end_from_middle(target):
    payload = b"0123456789"
    write(target, payload)
    with File.open(target) as file:
        file.seek(SeekFrom.start(4))
        assert file.read_to_end() == payload[4:]
        assert file.read_to_end() == b""


def test_read_exact(target):
    write(target, b"abcdef")
    with File.open(target) as file:
        assert file.read_exact(3) == b"abc"
        with pytest.raises(Error, match="file smaller than buffer"):
            file.read_exact(10)


def test_file_metadata_len(target):
    payload = b"twelve bytes"
    with File.create(target) as file:
        file.write_all(payload)
        file.flush()
        assert file.metadata().len() == len(payload)
        assert file.metadata().is_file()


def test_closed_file_raises(target):
    with File.create(target) as file:
        file.write_all(b"x")
    with pytest.raises(Error, match="file is closed"):
        file.read(1)
    file.close()
    assert read(target) == b"x"


def test_write_to_read_only_handle_fails(target):
    write(target, b"x")
    with File.open(target) as file:
        with pytest.raises(Error, match="failed to write to file"):
            file.write(b"y")
    assert read(target) == b"x"