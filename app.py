import asyncio
import os
from typing import Any, Dict, Optional

import streamlit as st
from pyrsistent import thaw

from dynamic_tokens.config import configure_logging, settings
from dynamic_tokens.documents import make_actor, make_token
from dynamic_tokens.editor import (
    Rows,
    add_row,
    remove_row,
    rows_for_token,
    save_thresholds,
    update_row,
)
from dynamic_tokens.module import DynamicTokens
from dynamic_tokens.state import State
from dynamic_tokens.settings import HP_PATH_SETTING, MODULE_ID, RESOLUTION_SETTING
from dynamic_tokens.types import ResolutionStrategy
from dynamic_tokens.utils.path import resolve_path
from dynamic_tokens.world import WorldStore

USER_ID = "gm"
ACTOR_ID = "hero"
TOKEN_ID = "hero-token"
SCENE_ID = "scene"
MAX_HP = 40

configure_logging(settings.log_level)
st.set_page_config(layout="wide", page_title="Dynamic Tokens")


def make_world() -> tuple[WorldStore, DynamicTokens]:
    world = WorldStore()
    module = DynamicTokens(user_id=USER_ID, world=world)
    module.install(world.hooks)
    asyncio.run(world.hooks.call_all("init"))
    world.add_actor(
        make_actor(
            ACTOR_ID,
            name="Hero",
            system={"attributes": {"hp": {"value": MAX_HP, "max": MAX_HP}}},
        )
    )
    world.add_token(
        make_token(
            TOKEN_ID,
            actor_id=ACTOR_ID,
            scene_id=SCENE_ID,
            name="Hero",
            src="tokens/hero.png",
            flags={
                MODULE_ID: {
                    "thresholds": [
                        {"threshold": 25, "img": "tokens/hero-bloodied.png"},
                        {"threshold": 50, "img": "tokens/hero-hurt.png"},
                        {"threshold": 100, "img": "tokens/hero.png"},
                    ]
                }
            },
        )
    )
    world.view_scene(SCENE_ID)
    return world, module


def set_default_session() -> None:
    if "world" not in st.session_state:
        world, module = make_world()
        st.session_state["world"] = world
        st.session_state["module"] = module
        st.session_state["rows"] = rows_for_token(world.state.tokens[TOKEN_ID])


def display_rows(rows: Rows) -> Rows:
    for idx, row in enumerate(rows):
        cols = st.columns([1, 3, 1])
        with cols[0]:
            threshold = st.text_input(
                "HP ≤ %", value=str(row.threshold), key=f"threshold_{idx}"
            )
        with cols[1]:
            img = st.text_input(
                "Image", value=row.img, placeholder="path/to/image.png", key=f"img_{idx}"
            )
        rows = update_row(rows, idx, threshold=threshold, img=img)
        with cols[2]:
            if st.button("🗑️", key=f"remove_{idx}", use_container_width=True):
                return remove_row(rows, idx)
    if st.button("➕ Add Threshold", key="add_btn", use_container_width=True):
        rows = add_row(rows)
    return rows


def state_as_json(state: State) -> Dict[str, Any]:
    return {
        "active_scene_id": state.active_scene_id,
        "actors": {
            aid: {"name": a.name, "system": thaw(a.system), "flags": thaw(a.flags)}
            for aid, a in state.actors.items()
        },
        "tokens": {
            tid: {
                "actor_id": t.actor_id,
                "scene_id": t.scene_id,
                "texture": {"src": t.texture.src},
                "flags": thaw(t.flags),
            }
            for tid, t in state.tokens.items()
        },
    }


def display_token_image(src: Optional[str]) -> None:
    if src and os.path.exists(src):
        st.image(src, use_container_width=True)
    else:
        st.info(f"{src or 'No image'}", icon="🖼️")


# --------- Main App ---------
set_default_session()
world: WorldStore = st.session_state["world"]
module: DynamicTokens = st.session_state["module"]

tab_token, tab_settings, tab_state = st.tabs(["Token", "Settings", "State"])

with tab_settings:
    hp_path: str = st.text_input(
        "HP Attribute Path",
        value=module.registry.get(MODULE_ID, HP_PATH_SETTING),
        key="hp_path",
    )
    strategies = [strategy.value for strategy in ResolutionStrategy]
    resolution: str = st.selectbox(
        "Threshold Matching",
        strategies,
        index=strategies.index(module.registry.get(MODULE_ID, RESOLUTION_SETTING)),
        key="resolution",
    )
    if st.button("Save", key="save_settings_btn", use_container_width=True):
        module.registry.set(MODULE_ID, HP_PATH_SETTING, hp_path)
        module.registry.set(MODULE_ID, RESOLUTION_SETTING, resolution)
        st.toast("Settings saved", icon="💾")

with tab_token:
    left_col, right_col = st.columns([0.6, 0.4])

    with left_col:
        st.subheader("Dynamic Tokens")
        rows: Rows = display_rows(st.session_state["rows"])
        st.session_state["rows"] = rows
        if st.button("💾 Save Thresholds", key="save_rows_btn", use_container_width=True):
            token = save_thresholds(world.state.tokens[TOKEN_ID], rows)
            world.add_token(token)
            st.session_state["rows"] = rows_for_token(token)

    with right_col:
        actor = world.state.actors[ACTOR_ID]
        path = module.registry.get(MODULE_ID, HP_PATH_SETTING)
        current = resolve_path(actor, f"{path}.value")
        hp: int = st.slider(
            "Hit Points",
            0,
            MAX_HP,
            int(current) if isinstance(current, (int, float)) else MAX_HP,
            key="hp",
        )
        if hp != current:
            try:
                asyncio.run(
                    world.update_actor(ACTOR_ID, {f"{path}.value": hp}, USER_ID)
                )
            except ValueError as exc:
                st.error(f"Cannot update {path}.value: {exc}", icon="⚠️")
        st.info(f"**Health Point:** {hp} / {MAX_HP}", icon="❤️")
        display_token_image(world.state.tokens[TOKEN_ID].texture.src)
        st.caption(f"{len(world.writes)} image write(s)")

with tab_state:
    st.json(state_as_json(world.state), expanded=2)
