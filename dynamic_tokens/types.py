"""Common type aliases and enumerations.

Document identifiers are opaque strings as issued by the host. ``ImageFn`` is
the extension point used by the resolver registry to plug in alternative
threshold-matching strategies.
"""

from enum import StrEnum, auto
from typing import Callable, Optional, Sequence, TYPE_CHECKING


if TYPE_CHECKING:
    from dynamic_tokens.components import Threshold

ActorID = str
TokenID = str
SceneID = str
UserID = str

AttributePath = str
"""Dot-delimited path relative to an actor's root, e.g. ``system.attributes.hp``."""

ImageFn = Callable[[float, Sequence["Threshold"]], Optional[str]]


class ResolutionStrategy(StrEnum):
    """Threshold matching strategies (values are persisted in settings)."""

    ASCENDING = auto()
    DESCENDING = auto()


class SettingScope(StrEnum):
    """Where a registered setting is stored."""

    WORLD = auto()
    CLIENT = auto()
