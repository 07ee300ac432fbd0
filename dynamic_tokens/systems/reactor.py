"""Change reactor: actor updates to token image writes.

``react`` is a pure function of the world snapshot, the update event and a
``ReactorConfig``. It returns the writes the local client should issue; the
host adapter (:mod:`dynamic_tokens.module`) performs them. Processing order:

1. Only the initiating client acts (``event.user_id == config.user_id``).
2. The tracked attribute path is chosen per token: token flag, then actor
    flag, then the configured default.
3. A path only counts as changed if the diff carries ``<path>.value``.
4. The percentage is read from the post-update actor, once per distinct path.
5. Each active token with thresholds resolves its own image.
6. A write is emitted only when the image differs from the current one.

Every guard failure skips a single token; siblings are still processed.
"""

import logging
from dataclasses import fields, is_dataclass, replace
from typing import Any, Dict, List, Mapping, Optional

from pyrsistent import pmap

from dynamic_tokens.documents import Actor, Token
from dynamic_tokens.events import ReactorConfig, TokenUpdate, UpdateEvent
from dynamic_tokens.resolver import resolve_image
from dynamic_tokens.state import State
from dynamic_tokens.types import AttributePath
from dynamic_tokens.utils.health import compute_percent, read_resource
from dynamic_tokens.utils.path import has_property, set_property
from dynamic_tokens.utils.thresholds import get_attribute_override, get_thresholds
from dynamic_tokens.utils.tokens import active_tokens

logger = logging.getLogger(__name__)


def changed_percent(
    actor: Actor, changes: Mapping[str, Any], path: AttributePath
) -> Optional[float]:
    """Percentage for ``path`` if this diff touched ``<path>.value``, else ``None``."""
    if not has_property(changes, f"{path}.value"):
        logger.debug("Actor %s: no change at %s.value", actor.id, path)
        return None
    percent = compute_percent(read_resource(actor, path))
    if percent is None:
        logger.debug("Actor %s: no usable value/max at %s", actor.id, path)
    return percent


def react_token(
    token: Token,
    percent: Optional[float],
    config: ReactorConfig,
) -> Optional[TokenUpdate]:
    """Resolve one token's image; return a write only if it would change it."""
    if percent is None:
        return None
    thresholds = get_thresholds(token)
    if not thresholds:
        return None
    img = resolve_image(percent, thresholds, config.strategy)
    if img is None:
        logger.debug("Token %s: no threshold covers %.1f%%", token.id, percent)
        return None
    if token.texture.src == img:
        return None
    return TokenUpdate.texture(token.id, img)


def react(state: State, event: UpdateEvent, config: ReactorConfig) -> List[TokenUpdate]:
    """Return the token writes this client should issue for ``event``.

    Args:
        state (State): World snapshot used to find the actor's active tokens.
        event (UpdateEvent): The actor update (actor is post-update).
        config (ReactorConfig): Local user and resolved settings.

    Returns:
        List[TokenUpdate]: Writes in token order; empty when nothing changes.
    """
    if event.user_id != config.user_id:
        return []

    actor = event.actor
    actor_path = get_attribute_override(actor) or config.attribute_path
    percents: Dict[AttributePath, Optional[float]] = {}
    updates: List[TokenUpdate] = []

    for token in active_tokens(state, actor.id):
        path = get_attribute_override(token) or actor_path
        if path not in percents:
            percents[path] = changed_percent(actor, event.changes, path)
        update = react_token(token, percents[path], config)
        if update is not None:
            updates.append(update)

    return updates


def _replace_path(obj: Any, path: str, value: Any) -> Any:
    head, _, rest = path.partition(".")
    if is_dataclass(obj) and not isinstance(obj, type):
        if head not in {f.name for f in fields(obj)}:
            raise ValueError(f"{type(obj).__name__} has no field {head!r}")
        if not rest:
            return replace(obj, **{head: value})
        return replace(obj, **{head: _replace_path(getattr(obj, head), rest, value)})
    if isinstance(obj, Mapping):
        return set_property(pmap(obj), path, value)
    raise ValueError(f"Cannot set {path!r} on {type(obj).__name__}")


def apply_token_update(state: State, update: TokenUpdate) -> State:
    """Apply ``update`` to its token; unknown tokens leave ``state`` unchanged.

    Raises:
        ValueError: If a dotted key names a field the token does not have.
    """
    token = state.tokens.get(update.token_id)
    if token is None:
        return state
    for key, value in update.changes.items():
        token = _replace_path(token, key, value)
    return replace(state, tokens=state.tokens.set(token.id, token))

