"""Tests for binding resolution."""

import pytest
from hypothesis import given, strategies as st

from dynui.binding import (
    get_nested_value,
    set_nested_value,
    resolve_value,
    has_binding,
    extract_bindings,
    to_display_string,
    interpolate_template,
    resolve_props,
)


names = st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=8)
paths = st.lists(names, min_size=1, max_size=5)
scalars = st.one_of(st.integers(), st.text(max_size=10), st.booleans(), st.floats(allow_nan=False))


def _nest(segments, value):
    result = value
    for segment in reversed(segments):
        result = {segment: result}
    return result


# ============================================================================
# get_nested_value
# ============================================================================

@pytest.mark.unit
def test_get_simple_path():
    assert get_nested_value({"user": {"name": "Ada"}}, "user.name") == "Ada"


@pytest.mark.unit
def test_get_indexed_segment():
    data = {"orders": [{"total": 10}, {"total": 25}]}
    assert get_nested_value(data, "orders[1].total") == 25


@pytest.mark.unit
def test_get_numeric_segment_indexes_lists():
    assert get_nested_value({"items": ["a", "b"]}, "items.1") == "b"


@pytest.mark.unit
def test_get_index_out_of_range_is_none():
    assert get_nested_value({"orders": [{"total": 10}]}, "orders[3].total") is None


@pytest.mark.unit
def test_get_missing_intermediate_is_none():
    assert get_nested_value({"user": None}, "user.name") is None
    assert get_nested_value({}, "a.b.c") is None


@pytest.mark.unit
def test_get_falsy_inputs():
    assert get_nested_value(None, "a") is None
    assert get_nested_value({"a": 1}, "") is None


@pytest.mark.unit
def test_get_through_scalar_is_none():
    assert get_nested_value({"a": 5}, "a.b") is None


@pytest.mark.unit
@given(paths, scalars)
def test_get_returns_terminal_value(segments, value):
    data = _nest(segments, value)
    assert get_nested_value(data, ".".join(segments)) == value


@pytest.mark.unit
@given(paths, st.integers(min_value=0, max_value=3))
def test_get_none_intermediate_never_raises(segments, cut):
    cut = min(cut, len(segments) - 1)
    data = _nest(segments[:cut], None) if cut else None
    assert get_nested_value(data, ".".join(segments + ["tail"])) is None


# ============================================================================
# set_nested_value
# ============================================================================

@pytest.mark.unit
def test_set_creates_intermediates():
    obj = {}
    result = set_nested_value(obj, "a.b.c", 1)
    assert result is obj
    assert obj == {"a": {"b": {"c": 1}}}


@pytest.mark.unit
def test_set_replaces_scalar_intermediate():
    obj = {"a": 5}
    set_nested_value(obj, "a.b", 1)
    assert obj == {"a": {"b": 1}}


@pytest.mark.unit
def test_set_does_not_parse_brackets():
    obj = {}
    set_nested_value(obj, "items[0].name", "x")
    assert obj == {"items[0]": {"name": "x"}}
    assert get_nested_value(obj, "items[0].name") is None


@pytest.mark.unit
@given(st.dictionaries(names, scalars, max_size=3), paths, scalars)
def test_set_then_get_round_trip(base, segments, value):
    obj = set_nested_value(dict(base), ".".join(segments), value)
    assert get_nested_value(obj, ".".join(segments)) == value


# ============================================================================
# resolve_value / has_binding / extract_bindings
# ============================================================================

@pytest.mark.unit
def test_resolve_data_binding():
    assert resolve_value("$data.stars", {"stars": 12}) == 12


@pytest.mark.unit
def test_resolve_item_binding_requires_item():
    assert resolve_value("$item.name", {}, {"name": "alice"}) == "alice"
    assert resolve_value("$item.name", {}) == "$item.name"


@pytest.mark.unit
def test_resolve_passes_through_non_bindings():
    assert resolve_value(42, {}) == 42
    assert resolve_value("plain text", {}) == "plain text"
    assert resolve_value("total: $data.stars", {"stars": 1}) == "total: $data.stars"


@pytest.mark.unit
def test_resolve_missing_binding_is_none():
    assert resolve_value("$data.nope", {"stars": 1}) is None


@pytest.mark.unit
def test_has_binding():
    assert has_binding("see $data.a")
    assert has_binding("$item.b")
    assert not has_binding("$database")
    assert not has_binding(3)


@pytest.mark.unit
def test_extract_bindings_data_first():
    assert extract_bindings("$data.a.b and $item.c") == ["$data.a.b", "$item.c"]
    assert extract_bindings("$item.c then $data.a") == ["$data.a", "$item.c"]


@pytest.mark.unit
def test_extract_bindings_non_string():
    assert extract_bindings(None) == []


# ============================================================================
# Templates
# ============================================================================

@pytest.mark.unit
def test_interpolate_template():
    data = {"user": {"name": "Ada"}, "count": 3}
    assert interpolate_template("Hi ${$data.user.name} (${ $data.count })", data) == "Hi Ada (3)"


@pytest.mark.unit
def test_interpolate_unresolved_is_empty():
    assert interpolate_template("[${$data.missing}]", {}) == "[]"


@pytest.mark.unit
def test_interpolate_item():
    assert interpolate_template("${$item.name}", {}, {"name": "bob"}) == "bob"


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        (True, "true"),
        (3.0, "3"),
        (2.5, "2.5"),
        ("x", "x"),
        ([1, 2], "[1,2]"),
        ({"a": 1}, '{"a":1}'),
    ],
)
def test_to_display_string(value, expected):
    assert to_display_string(value) == expected


# ============================================================================
# resolve_props
# ============================================================================

@pytest.mark.unit
def test_resolve_props_recurses_into_mappings():
    data = {"stars": 5, "owner": {"name": "acme"}}
    props = {"value": "$data.stars", "meta": {"owner": "$data.owner.name"}, "label": "Stars"}

    assert resolve_props(props, data) == {"value": 5, "meta": {"owner": "acme"}, "label": "Stars"}


@pytest.mark.unit
def test_resolve_props_lists_elementwise():
    data = {"a": 1, "b": 2}
    props = {"values": ["$data.a", "$data.b", "literal", {"nested": "$data.a"}]}

    # list elements are resolved but not descended into
    assert resolve_props(props, data) == {"values": [1, 2, "literal", {"nested": "$data.a"}]}


@pytest.mark.unit
def test_resolve_props_returns_new_dict():
    props = {"value": "$data.a"}
    resolved = resolve_props(props, {"a": 1})
    assert resolved is not props
    assert props == {"value": "$data.a"}


@pytest.mark.unit
@given(st.dictionaries(names, st.one_of(st.integers(), names, st.lists(st.integers(), max_size=3)), max_size=5))
def test_resolve_props_idempotent_without_bindings(props):
    once = resolve_props(props, {"x": 1})
    assert resolve_props(once, {"x": 1}) == once
