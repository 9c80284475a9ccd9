import pytest

from minxp.osstr import OsString


def test_default_is_empty():
    s = OsString()
    assert s.is_empty()
    assert len(s) == 0


def test_encoded_bytes_round_trip():
    text = "C:\\Użytkownicy\\plik.txt"
    s = OsString(text)
    data = s.as_encoded_bytes()
    assert data == text.encode("utf-8")
    assert OsString.from_encoded_bytes(data) == s


def test_from_encoded_bytes_rejects_invalid_utf8():
    with pytest.raises(UnicodeDecodeError):
        OsString.from_encoded_bytes(b"\xff\xfe")


def test_into_string_and_to_str():
    s = OsString("some sort of string")
    assert s.into_string() == "some sort of string"
    assert s.to_str() == "some sort of string"
    assert s.display() == "some sort of string"
    assert str(s) == "some sort of string"


def test_push_appends():
    s = OsString("C:")
    s.push("\\Users")
    s.push(OsString("\\Something"))
    assert s == "C:\\Users\\Something"


def test_push_stops_at_nul():
    s = OsString("a")
    s.push("b\x00c")
    assert s == "ab"


def test_push_rejects_other_types():
    with pytest.raises(TypeError):
        OsString("a").push(5)


def test_clear():
    s = OsString("abc")
    s.clear()
    assert s.is_empty()


def test_truncate():
    text = "C:\\Users\\Something"
    s = OsString(text)
    s.truncate(2)
    assert s == text[:2]
    s.truncate(100)
    assert s == text[:2]
    with pytest.raises(ValueError):
        s.truncate(-1)


def test_ascii_case_conversion():
    s = OsString("abc")
    upper = s.to_ascii_uppercase()
    assert upper == "ABC"
    assert s == "abc"
    assert upper.to_ascii_lowercase() == s


def test_ascii_case_leaves_non_ascii_alone():
    text = "é"
    assert OsString(text).to_ascii_uppercase() == text
    assert OsString(text.upper()).to_ascii_lowercase() == text.upper()


def test_make_ascii_case_in_place():
    text = "MiXeD"
    s = OsString(text)
    s.make_ascii_lowercase()
    assert s.eq_ignore_ascii_case(text)
    assert s.is_ascii()
    lowered = OsString(s)
    s.make_ascii_uppercase()
    assert s.to_ascii_lowercase() == lowered
    assert not (s == lowered)


def test_is_ascii():
    assert OsString("plain").is_ascii()
    assert not OsString("zażółć").is_ascii()


def test_eq_ignore_ascii_case():
    s = OsString("Something.TXT")
    assert s.eq_ignore_ascii_case("something.txt")
    assert s.eq_ignore_ascii_case(OsString("SOMETHING.txt"))
    assert not s.eq_ignore_ascii_case("something.tx")


def test_equality_and_ordering():
    a = OsString("alpha")
    b = OsString("beta")
    assert a == OsString("alpha")
    assert a == "alpha"
    assert a < b
    assert sorted([b, a]) == [a, b]


def test_repr_is_quoted():
    assert repr(OsString("x")) == repr("x")


def test_not_hashable():
    with pytest.raises(TypeError):
        hash(OsString("x"))