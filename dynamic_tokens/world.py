"""In-memory host world.

``WorldStore`` owns the current :class:`dynamic_tokens.state.State` for one
client and plays the host's part: actor updates are merged into the actor
and announced on the ``updateActor`` hook, and token writes requested by the
module are applied through
:func:`dynamic_tokens.systems.reactor.apply_token_update`. Every write is
recorded in ``writes`` so callers can observe exactly what was persisted.
"""

import logging
from dataclasses import replace
from typing import Any, List, Mapping, Optional

from pyrsistent import pmap

from dynamic_tokens.documents import Actor, Token
from dynamic_tokens.events import TokenUpdate
from dynamic_tokens.hooks import Hooks
from dynamic_tokens.state import State
from dynamic_tokens.systems.reactor import apply_token_update
from dynamic_tokens.types import ActorID, SceneID, UserID
from dynamic_tokens.utils.path import expand_object, merge_object

logger = logging.getLogger(__name__)

UPDATE_ACTOR_HOOK = "updateActor"


def merge_actor_changes(actor: Actor, changes: Mapping[str, Any]) -> Actor:
    """Return ``actor`` with a (nested or dotted) diff merged in.

    Raises:
        ValueError: If the diff names a field actors do not have.
    """
    expanded = expand_object(changes)
    for key, value in expanded.items():
        if key == "system":
            actor = replace(actor, system=merge_object(actor.system, value))
        elif key == "flags":
            actor = replace(actor, flags=merge_object(actor.flags, value))
        elif key == "name":
            actor = replace(actor, name=str(value))
        else:
            raise ValueError(f"Actor has no field {key!r}")
    return actor


class WorldStore:
    """Documents visible to the local client, plus its hook bus."""

    def __init__(self, state: Optional[State] = None, hooks: Optional[Hooks] = None):
        self.state: State = state if state is not None else State()
        self.hooks: Hooks = hooks if hooks is not None else Hooks()
        self.writes: List[TokenUpdate] = []

    def add_actor(self, actor: Actor) -> None:
        self.state = replace(self.state, actors=self.state.actors.set(actor.id, actor))

    def add_token(self, token: Token) -> None:
        self.state = replace(self.state, tokens=self.state.tokens.set(token.id, token))

    def view_scene(self, scene_id: Optional[SceneID]) -> None:
        self.state = replace(self.state, active_scene_id=scene_id)

    async def update_token(self, update: TokenUpdate) -> None:
        """Persist a partial token update."""
        self.state = apply_token_update(self.state, update)
        self.writes.append(update)
        logger.info("Updated token %s: %s", update.token_id, dict(update.changes))

    async def update_actor(
        self,
        actor_id: ActorID,
        changes: Mapping[str, Any],
        user_id: UserID,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Actor:
        """Merge ``changes`` into the actor and fire ``updateActor``.

        Raises:
            KeyError: If ``actor_id`` is unknown.
        """
        actor = merge_actor_changes(self.state.actors[actor_id], changes)
        self.state = replace(self.state, actors=self.state.actors.set(actor_id, actor))
        await self.hooks.call_all(
            UPDATE_ACTOR_HOOK, actor, changes, options or pmap(), user_id
        )
        return actor
