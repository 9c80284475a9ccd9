import sys
from unittest import mock

import pytest

from minxp import process


class _Exited(Exception):
    def __init__(self, code):
        super().__init__(code)
        self.code = code


def _fake_exit(code):
    raise _Exited(code)


def test_abort_uses_code_197():
    with mock.patch("os._exit", side_effect=_fake_exit):
        with pytest.raises(_Exited) as info:
            process.abort()
    assert info.value.code == 197


def test_exit_passes_code():
    with mock.patch("os._exit", side_effect=_fake_exit):
        with pytest.raises(_Exited) as info:
            process.exit(3)
    assert info.value.code == 3


def test_exit_passes_negative_code():
    with mock.patch("os._exit", side_effect=_fake_exit):
        with pytest.raises(_Exited) as info:
            process.exit(-1)
    assert info.value.code == -1


def test_exit_flushes_standard_streams(monkeypatch):
    fake_out = mock.MagicMock()
    fake_err = mock.MagicMock()
    monkeypatch.setattr(sys, "stdout", fake_out)
    monkeypatch.setattr(sys, "stderr", fake_err)
    with mock.patch("os._exit") as fake_exit:
        process.exit(0)
    assert fake_out.flush.call_count == 1
    assert fake_err.flush.call_count == 1
    assert fake_exit.call_args == mock.call(0)


def test_exit_rejects_out_of_range_code():
    with mock.patch("os._exit") as fake_exit:
        with pytest.raises(ValueError):
            process.exit(2**31)
    assert fake_exit.call_count == 0