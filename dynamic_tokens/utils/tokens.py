"""Token queries over a :class:`dynamic_tokens.state.State` snapshot."""

from typing import List

from dynamic_tokens.documents import Token
from dynamic_tokens.state import State
from dynamic_tokens.types import ActorID


def tokens_for_actor(state: State, actor_id: ActorID) -> List[Token]:
    """All tokens representing ``actor_id`` in any scene, ordered by id."""
    return sorted(
        (token for token in state.tokens.values() if token.actor_id == actor_id),
        key=lambda token: token.id,
    )


def active_tokens(state: State, actor_id: ActorID) -> List[Token]:
    """Tokens of ``actor_id`` placed in the active scene (none without one)."""
    if state.active_scene_id is None:
        return []
    return [
        token
        for token in tokens_for_actor(state, actor_id)
        if token.scene_id == state.active_scene_id
    ]
