"""Host documents: actors and the tokens that represent them.

Documents are frozen dataclasses mirroring the host's persisted records. The
actor's game-system data lives under ``system`` as a nested persistent map so
attribute paths such as ``system.attributes.hp`` can be walked from the actor
root. Module configuration is stored in ``flags`` keyed by scope (the module
identifier) and then by key.

Examples
--------
>>> from dynamic_tokens.documents import make_actor, make_token
>>> actor = make_actor("a1", system={"attributes": {"hp": {"value": 7, "max": 10}}})
>>> token = make_token("t1", actor_id="a1", scene_id="s1", src="hero.png")
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pyrsistent import freeze, pmap
from pyrsistent.typing import PMap

from dynamic_tokens.components import Texture
from dynamic_tokens.types import ActorID, SceneID, TokenID

Flags = PMap[str, PMap[str, Any]]


@dataclass(frozen=True)
class Actor:
    """Character or creature whose tracked attribute drives token images.

    Attributes:
        id (ActorID): Host document id.
        name (str): Display name.
        system (PMap[str, Any]): Game-system data root (frozen nested maps).
        flags (Flags): Namespaced key/value store.
    """

    id: ActorID
    name: str = ""
    system: PMap[str, Any] = pmap()
    flags: Flags = pmap()


@dataclass(frozen=True)
class Token:
    """A placed representation of an actor in a scene.

    Attributes:
        id (TokenID): Host document id.
        actor_id (ActorID | None): Actor the token represents.
        scene_id (SceneID | None): Scene the token is placed in.
        name (str): Display name.
        texture (Texture): Image currently shown.
        flags (Flags): Namespaced key/value store (thresholds live here).
    """

    id: TokenID
    actor_id: Optional[ActorID] = None
    scene_id: Optional[SceneID] = None
    name: str = ""
    texture: Texture = Texture()
    flags: Flags = pmap()


def make_actor(
    actor_id: ActorID,
    name: str = "",
    system: Optional[Mapping[str, Any]] = None,
    flags: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> Actor:
    """Build an ``Actor`` from plain (JSON-like) data."""
    return Actor(
        id=actor_id,
        name=name,
        system=freeze(dict(system or {})),
        flags=freeze(dict(flags or {})),
    )


def make_token(
    token_id: TokenID,
    actor_id: Optional[ActorID] = None,
    scene_id: Optional[SceneID] = None,
    src: Optional[str] = None,
    name: str = "",
    flags: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> Token:
    """Build a ``Token`` from plain (JSON-like) data."""
    return Token(
        id=token_id,
        actor_id=actor_id,
        scene_id=scene_id,
        name=name,
        texture=Texture(src=src),
        flags=freeze(dict(flags or {})),
    )
