"""Typed values crossing the host boundary.

``UpdateEvent`` is what the host hands to the ``updateActor`` hook;
``TokenUpdate`` is a partial write the reactor wants applied to a token.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from pyrsistent import freeze, pmap
from pyrsistent.typing import PMap

from dynamic_tokens.documents import Actor
from dynamic_tokens.resolver import DEFAULT_STRATEGY
from dynamic_tokens.types import AttributePath, ResolutionStrategy, TokenID, UserID

TEXTURE_SRC = "texture.src"


@dataclass(frozen=True)
class UpdateEvent:
    """An actor update as observed by one client.

    Attributes:
        actor (Actor): Actor document *after* the update was applied.
        changes (Mapping[str, Any]): Diff payload (nested or dotted keys).
        options (Mapping[str, Any]): Host update options, passed through.
        user_id (UserID): Client that initiated the update.
    """

    actor: Actor
    changes: Mapping[str, Any]
    user_id: UserID
    options: Mapping[str, Any] = field(default_factory=pmap)


@dataclass(frozen=True)
class TokenUpdate:
    """Partial update for one token, keyed by dotted field path."""

    token_id: TokenID
    changes: PMap[str, Any]

    @classmethod
    def texture(cls, token_id: TokenID, src: str) -> "TokenUpdate":
        return cls(token_id=token_id, changes=freeze({TEXTURE_SRC: src}))


@dataclass(frozen=True)
class ReactorConfig:
    """Per-event configuration, resolved from settings once per event.

    Attributes:
        user_id (UserID): The local client; only its own updates are acted on.
        attribute_path (AttributePath): Default tracked attribute path.
        strategy (ResolutionStrategy): Threshold matching strategy.
    """

    user_id: UserID
    attribute_path: AttributePath = "system.attributes.hp"
    strategy: ResolutionStrategy = DEFAULT_STRATEGY
