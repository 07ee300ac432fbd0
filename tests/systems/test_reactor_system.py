from dataclasses import replace

import pytest
from pyrsistent import freeze

from dynamic_tokens.events import TokenUpdate
from dynamic_tokens.systems.reactor import apply_token_update, changed_percent, react
from dynamic_tokens.types import ResolutionStrategy
from tests.test_utils import (
    HP_PATH,
    OTHER_USER,
    hp_changes,
    make_config,
    make_event,
    make_hp_actor,
    make_threshold_token,
    make_world_state,
    react_scenario,
)


def test_hp_drop_swaps_image() -> None:
    state, event = react_scenario(50)
    assert react(state, event, make_config()) == [TokenUpdate.texture("token-1", "b.png")]


def test_no_write_when_image_already_matches() -> None:
    state, event = react_scenario(50, src="b.png")
    assert react(state, event, make_config()) == []


def test_non_initiating_client_does_nothing() -> None:
    actor = make_hp_actor(10)
    state = make_world_state([actor], [make_threshold_token()])
    event = make_event(actor, user_id=OTHER_USER)
    assert react(state, event, make_config()) == []


def test_zero_max_skips_token() -> None:
    state, event = react_scenario(5, max_hp=0)
    assert react(state, event, make_config()) == []


def test_null_max_skips_token() -> None:
    state, event = react_scenario(5, max_hp=None)
    assert react(state, event, make_config()) == []


def test_unrelated_change_is_ignored() -> None:
    actor = make_hp_actor(10)
    state = make_world_state([actor], [make_threshold_token()])
    event = make_event(actor, changes={"system": {"attributes": {"ac": {"value": 12}}}})
    assert react(state, event, make_config()) == []
    max_only = make_event(actor, changes={"system": {"attributes": {"hp": {"max": 50}}}})
    assert react(state, max_only, make_config()) == []


def test_flat_diff_keys_count_as_change() -> None:
    actor = make_hp_actor(10)
    state = make_world_state([actor], [make_threshold_token()])
    event = make_event(actor, changes={"system.attributes.hp.value": 10})
    assert react(state, event, make_config()) == [TokenUpdate.texture("token-1", "a.png")]


def test_missing_attribute_container_skips() -> None:
    actor = make_hp_actor(10)
    state = make_world_state([actor], [make_threshold_token()])
    config = make_config(attribute_path="system.resources.hitPoints")
    event = make_event(actor, changes=hp_changes(3, "system.resources.hitPoints"))
    assert react(state, event, config) == []


def test_percent_above_all_thresholds_leaves_token() -> None:
    state, event = react_scenario(
        90, thresholds=[{"threshold": 25, "img": "a.png"}, {"threshold": 50, "img": "b.png"}]
    )
    assert react(state, event, make_config()) == []


def test_descending_strategy_falls_back_to_top_image() -> None:
    state, event = react_scenario(
        90,
        src="a.png",
        thresholds=[{"threshold": 25, "img": "a.png"}, {"threshold": 50, "img": "b.png"}],
    )
    config = make_config(strategy=ResolutionStrategy.DESCENDING)
    assert react(state, event, config) == [TokenUpdate.texture("token-1", "b.png")]


def test_reversed_polarity_resolves_from_damage() -> None:
    actor = make_hp_actor(80, 100, reversed=True)
    state = make_world_state([actor], [make_threshold_token()])
    assert react(state, make_event(actor), make_config()) == [
        TokenUpdate.texture("token-1", "a.png")
    ]


def test_fan_out_uses_each_token_thresholds() -> None:
    actor = make_hp_actor(60)
    tokens = [
        make_threshold_token("token-1"),
        make_threshold_token(
            "token-2",
            src="x.png",
            thresholds=[{"threshold": 60, "img": "y.png"}, {"threshold": 100, "img": "x.png"}],
        ),
        make_threshold_token("token-3", thresholds=None),
        make_threshold_token("token-4", thresholds=[]),
    ]
    state = make_world_state([actor], tokens)
    assert react(state, make_event(actor), make_config()) == [
        TokenUpdate.texture("token-1", "b.png"),
        TokenUpdate.texture("token-2", "y.png"),
    ]


def test_only_active_scene_tokens_of_this_actor_react() -> None:
    actor = make_hp_actor(10)
    tokens = [
        make_threshold_token("token-1"),
        make_threshold_token("token-other-scene", scene_id="scene-2"),
        make_threshold_token("token-other-actor", actor_id="actor-2"),
    ]
    state = make_world_state([actor], tokens)
    assert react(state, make_event(actor), make_config()) == [
        TokenUpdate.texture("token-1", "a.png")
    ]
    no_scene = replace(state, active_scene_id=None)
    assert react(no_scene, make_event(actor), make_config()) == []


def test_malformed_token_does_not_block_siblings() -> None:
    actor = make_hp_actor(10)
    tokens = [
        make_threshold_token("token-1", thresholds=[{"threshold": "bad", "img": 3}]),
        make_threshold_token("token-2"),
    ]
    state = make_world_state([actor], tokens)
    assert react(state, make_event(actor), make_config()) == [
        TokenUpdate.texture("token-2", "a.png")
    ]


def test_token_attribute_override_tracks_its_own_path() -> None:
    actor = make_hp_actor(90)
    actor = replace(
        actor,
        system=actor.system.set("stress", freeze({"value": 1, "max": 10})),
    )
    tokens = [
        make_threshold_token("token-hp"),
        make_threshold_token("token-stress", attribute="system.stress"),
    ]
    state = make_world_state([actor], tokens)

    hp_event = make_event(actor, changes=hp_changes(90))
    assert react(state, hp_event, make_config()) == []

    stress_event = make_event(actor, changes={"system": {"stress": {"value": 1}}})
    assert react(state, stress_event, make_config()) == [
        TokenUpdate.texture("token-stress", "a.png")
    ]


def test_actor_attribute_override_replaces_default() -> None:
    actor = make_hp_actor(90, attribute="system.health")
    actor = replace(
        actor,
        system=actor.system.set("health", freeze({"value": 1, "max": 4})),
    )
    state = make_world_state([actor], [make_threshold_token()])
    assert react(state, make_event(actor, changes=hp_changes(90)), make_config()) == []

    event = make_event(actor, changes={"system": {"health": {"value": 1}}})
    assert react(state, event, make_config()) == [
        TokenUpdate.texture("token-1", "a.png")
    ]


def test_changed_percent() -> None:
    actor = make_hp_actor(30, 40)
    assert changed_percent(actor, hp_changes(30), HP_PATH) == pytest.approx(75.0)
    assert changed_percent(actor, {}, HP_PATH) is None


def test_apply_token_update() -> None:
    state, event = react_scenario(10)
    updates = react(state, event, make_config())
    for update in updates:
        state = apply_token_update(state, update)
    assert state.tokens["token-1"].texture.src == "a.png"
    assert react(state, event, make_config()) == []


def test_apply_token_update_unknown_token_or_field() -> None:
    state, _ = react_scenario(10)
    assert apply_token_update(state, TokenUpdate.texture("missing", "a.png")) is state
    with pytest.raises(ValueError):
        apply_token_update(
            state, TokenUpdate(token_id="token-1", changes=freeze({"img.src": "a.png"}))
        )
