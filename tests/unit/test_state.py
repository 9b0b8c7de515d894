"""Tests for versioned UI state."""

import pytest

from dynui.analysis import InputContext
from dynui.components import ComponentKind, node
from dynui.generation import UIState, create_ui_state, evolve_ui, increment_version
from dynui.generation.state import INITIAL_VERSION


@pytest.mark.unit
def test_create_state(github_data, simple_schema):
    state = create_ui_state(github_data, simple_schema)

    assert state.version == INITIAL_VERSION == "1.0.0"
    assert state.history == []
    assert state.ui_schema == simple_schema
    assert state.created_at.endswith("Z")
    assert 0 < len(state.context_hash) <= 12


@pytest.mark.unit
def test_same_input_same_hash(github_data, simple_schema):
    first = create_ui_state(github_data, simple_schema)
    second = create_ui_state(dict(github_data), simple_schema)

    assert first.context_hash == second.context_hash


@pytest.mark.unit
def test_different_input_different_hash(github_data, simple_schema):
    changed = dict(github_data, stars=1248)
    renamed = {("star_count" if k == "stars" else k): v for k, v in github_data.items()}

    original = create_ui_state(github_data, simple_schema).context_hash
    assert create_ui_state(changed, simple_schema).context_hash != original
    assert create_ui_state(renamed, simple_schema).context_hash != original


@pytest.mark.unit
def test_wrapped_input_hash(simple_schema):
    wrapped = InputContext(type="demo", data={"a": 1})

    state = create_ui_state(wrapped, simple_schema)

    assert state.context_hash == create_ui_state({"type": "demo", "data": {"a": 1}}, simple_schema).context_hash


@pytest.mark.unit
@pytest.mark.parametrize(
    "version, expected",
    [("1.0.0", "1.0.1"), ("2.3.9", "2.3.10"), ("0.0.41", "0.0.42")],
)
def test_increment_version(version, expected):
    assert increment_version(version) == expected


@pytest.mark.unit
@pytest.mark.parametrize("version", ["1.0", "1.0.0.0", "a.b.c"])
def test_increment_version_rejects_malformed(version):
    with pytest.raises(ValueError):
        increment_version(version)


@pytest.mark.unit
def test_evolve_add_appends_to_root(github_data, simple_schema):
    state = create_ui_state(github_data, simple_schema)
    badge = node(ComponentKind.BADGE, label="new")

    result = evolve_ui(state, "add", "root.children[4]", badge)

    assert result is state
    assert state.version == "1.0.1"
    assert state.ui_schema.children[-1] == badge
    assert len(state.ui_schema.children) == 2

    assert len(state.history) == 1
    entry = state.history[0]
    assert entry.version == "1.0.0"
    assert entry.diff.operation == "add"
    assert entry.diff.path == "root.children[4]"
    assert entry.diff.value == badge


@pytest.mark.unit
def test_evolve_other_operations_only_record(github_data, simple_schema):
    state = create_ui_state(github_data, simple_schema)

    evolve_ui(state, "remove", "root.children[0]")
    evolve_ui(state, "update", "root.props.cols", node(ComponentKind.BADGE, label="x"))

    assert state.version == "1.0.2"
    assert [h.version for h in state.history] == ["1.0.0", "1.0.1"]
    assert len(state.ui_schema.children) == 1


@pytest.mark.unit
def test_evolve_add_to_leaf_root(github_data):
    state = create_ui_state(github_data, node(ComponentKind.CONTAINER))

    evolve_ui(state, "add", "root", node(ComponentKind.BADGE, label="first"))

    assert [c.props["label"] for c in state.ui_schema.children] == ["first"]


@pytest.mark.unit
def test_state_wire_form(github_data, simple_schema):
    state = evolve_ui(create_ui_state(github_data, simple_schema), "add", "root", node(ComponentKind.BADGE, label="b"))

    wire = state.to_wire()

    assert set(wire) == {"version", "contextHash", "schema", "createdAt", "history"}
    assert wire["schema"]["component"] == "Container"
    assert wire["history"][0]["diff"]["value"] == {"component": "Badge", "props": {"label": "b"}}

    restored = UIState.model_validate(wire)
    assert restored.version == "1.0.1"
    assert restored.ui_schema == state.ui_schema
