"""Immutable world snapshot.

:class:`State` holds every document the reactor may read: actors and their
tokens, plus the scene currently being viewed. Like the rest of the package
it is a value object; writes produce a new ``State`` (see
:func:`dynamic_tokens.systems.reactor.apply_token_update`).

Design notes:

* Document stores are **persistent maps** (``pyrsistent.PMap``) keyed by
    document id.
* Only tokens placed in ``active_scene_id`` are considered *active* for an
    actor; with no active scene no token reacts.
"""

from dataclasses import dataclass
from typing import Any, Optional
from pyrsistent import PMap, pmap

from dynamic_tokens.documents import Actor, Token
from dynamic_tokens.types import ActorID, SceneID, TokenID


@dataclass(frozen=True)
class State:
    """Immutable world state.

    Attributes:
        actors (PMap[ActorID, Actor]): Actor documents.
        tokens (PMap[TokenID, Token]): Token documents across all scenes.
        active_scene_id (SceneID | None): Scene whose tokens are live.
    """

    actors: PMap[ActorID, Actor] = pmap()
    tokens: PMap[TokenID, Token] = pmap()
    active_scene_id: Optional[SceneID] = None

    @property
    def description(self) -> PMap[str, Any]:
        """Sparse serialization of non-empty fields.

        Returns:
            PMap[str, Any]: Field name to value for every populated field.
        """
        description: PMap[str, Any] = pmap()
        for field in self.__dataclass_fields__:
            value = getattr(self, field)
            if isinstance(value, type(pmap())) and len(value) == 0:
                continue
            if value is None:
                continue
            description = description.set(field, value)
        return description
