# tests/utils/test_path.py

from dataclasses import dataclass

from pyrsistent import freeze, pmap

from dynamic_tokens.utils.path import (
    expand_object,
    get_property,
    has_property,
    merge_object,
    resolve_path,
    set_property,
)
from tests.test_utils import make_hp_actor


def test_resolve_path_walks_actor_root() -> None:
    actor = make_hp_actor(7, 10)
    assert resolve_path(actor, "system.attributes.hp.value") == 7
    assert resolve_path(actor, "system.attributes.hp")["max"] == 10
    assert resolve_path(actor, "name") == "Hero"


def test_resolve_path_missing_segment_is_none() -> None:
    actor = make_hp_actor(7, 10)
    assert resolve_path(actor, "system.resources.hitPoints") is None
    assert resolve_path(actor, "system.attributes.hp.value.deeper") is None
    assert resolve_path({}, "a") is None


def test_resolve_path_on_plain_objects() -> None:
    @dataclass
    class Box:
        inner: object

    assert resolve_path(Box(inner={"x": 1}), "inner.x") == 1


def test_get_property_prefers_flat_keys() -> None:
    diff = {"system.attributes.hp.value": 3}
    assert get_property(diff, "system.attributes.hp.value") == 3
    nested = {"system": {"attributes": {"hp": {"value": 4}}}}
    assert get_property(nested, "system.attributes.hp.value") == 4


def test_has_property_counts_explicit_none() -> None:
    assert has_property({"a": {"b": None}}, "a.b")
    assert has_property({"a.b": None}, "a.b")
    assert not has_property({"a": {"c": 1}}, "a.b")
    assert not has_property({"a": 5}, "a.b")
    assert not has_property({}, "a")


def test_set_property_creates_intermediate_maps() -> None:
    data = set_property(pmap(), "a.b.c", 1)
    assert data == freeze({"a": {"b": {"c": 1}}})
    data = set_property(data, "a.b.d", [1, 2])
    assert data["a"]["b"]["d"] == freeze([1, 2])
    assert data["a"]["b"]["c"] == 1


def test_expand_and_merge() -> None:
    assert expand_object({"a.b": 1, "c": {"d.e": 2}}) == freeze(
        {"a": {"b": 1}, "c": {"d": {"e": 2}}}
    )
    original = freeze({"hp": {"value": 10, "max": 10}, "ac": 15})
    merged = merge_object(original, {"hp.value": 4})
    assert merged == freeze({"hp": {"value": 4, "max": 10}, "ac": 15})
    assert original["hp"]["value"] == 10


def test_lookup_handles_mixed_dotted_keys() -> None:
    diff = {"system.attributes": {"hp": {"value": 1}}}
    assert has_property(diff, "system.attributes.hp.value")
    assert get_property(diff, "system.attributes.hp.value") == 1
    assert not has_property(diff, "system.attributes.hp.max")
