"""
Tests for tool records and the tool store.
"""

import dataclasses

import pytest

from compareGraph.core.tool_store import ToolRecord, ToolStore
from conftest import make_record


def test_put_is_idempotent_per_id():
    store = ToolStore()
    ids = ["a", "b", "a", "c", "b", "a"]
    for i, tool_id in enumerate(ids):
        store.put(tool_id, make_record(tool_id, name=f"{tool_id}-{i}"))

    assert len(store) == len(set(ids))
    # First load wins, later puts never overwrite
    assert store.get("a").name == "a-0"
    assert store.get("b").name == "b-1"


def test_put_reports_insertion():
    store = ToolStore()
    record = make_record("x")
    assert store.put("x", record) is True
    assert store.put("x", make_record("x", name="other")) is False
    assert store.get("x") is record


def test_values_keep_insertion_order():
    store = ToolStore()
    for tool_id in ["zeta", "alpha", "mid"]:
        store.put(tool_id, make_record(tool_id))

    assert store.ids() == ["zeta", "alpha", "mid"]
    assert [record.tool_id for record in store.values()] == ["zeta", "alpha", "mid"]


def test_remove_missing_id_is_harmless():
    store = ToolStore()
    store.put("a", make_record("a"))

    assert store.remove("missing") is False
    assert store.remove("a") is True
    assert len(store) == 0
    assert not store.has("a")
    assert store.get("a") is None


def test_record_from_catalog_payload():
    payload = {
        "toolId": "react",
        "name": "React",
        "categories": ["Frontend", "UI"],
        "predefinedComparisons": ["vue", "svelte"],
        "learningCurve": "intermediate",
    }
    record = ToolRecord.from_dict(payload)

    assert record.tool_id == "react"
    assert record.display_name == "React"
    assert record.categories == ("Frontend", "UI")
    assert record.predefined_comparisons == ("vue", "svelte")
    assert record.get("learningCurve") == "intermediate"
    assert record.to_dict() == payload


def test_record_name_falls_back_to_id():
    record = ToolRecord.from_dict({"toolId": "nameless"})
    assert record.display_name == "nameless"
    assert record.categories == ()
    assert record.predefined_comparisons == ()


@pytest.mark.parametrize("payload", [
    {},
    {"toolId": ""},
    {"toolId": 42},
    {"toolId": "x", "categories": "not-a-list"},
    {"toolId": "x", "predefinedComparisons": [None, 5]},
    {"toolId": "x", "categories": ["Web", 3]},
    ["toolId", "x"],
])
def test_invalid_payloads_are_rejected(payload):
    with pytest.raises(ValueError):
        ToolRecord.from_dict(payload)


def test_records_are_immutable():
    record = make_record("a", name="Alpha", extra_field="value")

    with pytest.raises(dataclasses.FrozenInstanceError):
        record.name = "changed"
    with pytest.raises(TypeError):
        record.attributes["extra_field"] = "changed"
