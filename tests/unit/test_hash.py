"""Tests for hash module."""

import pytest
from hypothesis import given, strategies as st

from dynui.core.hash import context_hash, fingerprint, rolling_hash32, to_base36

json_values = st.recursive(
    st.none() | st.booleans() | st.integers(min_value=-(2**53), max_value=2**53) | st.text(max_size=20),
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(max_size=8), children, max_size=4),
    max_leaves=20,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 0),
        ("a", 97),
        ("ab", 3105),
        ("hello", 99162322),
        # wraps to the most negative 32-bit integer
        ("polygenelubricants", -(2**31)),
    ],
)
def test_rolling_hash32(text, expected):
    assert rolling_hash32(text) == expected


@pytest.mark.unit
def test_rolling_hash32_astral_uses_code_units():
    # U+1F600 is the surrogate pair D83D DE00
    assert rolling_hash32("\U0001F600") == 0xD83D * 31 + 0xDE00


@pytest.mark.unit
@pytest.mark.parametrize("value, expected", [(0, "0"), (35, "z"), (36, "10"), (1295, "zz"), (2**31, "zik0zk")])
def test_to_base36(value, expected):
    assert to_base36(value) == expected


@pytest.mark.unit
def test_to_base36_rejects_negative():
    with pytest.raises(ValueError):
        to_base36(-1)


@pytest.mark.unit
@given(json_values)
def test_context_hash_is_short_base36(value):
    digest = context_hash(value)

    assert 0 < len(digest) <= 12
    assert set(digest) <= set("0123456789abcdefghijklmnopqrstuvwxyz")
    assert context_hash(value) == digest


@pytest.mark.unit
def test_context_hash_depends_on_key_order():
    # The digest is over the serialized text
    assert context_hash({"a": 1, "b": 2}) != context_hash({"b": 2, "a": 1})


@pytest.mark.unit
def test_fingerprint():
    digest = fingerprint({"q": 1}, None)

    assert len(digest) == 16
    assert fingerprint({"q": 1}, None) == digest
    assert fingerprint({"q": 2}, None) != digest
    # parts are delimited
    assert fingerprint("ab", "c") != fingerprint("a", "bc")
