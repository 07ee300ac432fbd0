"""Health percentage helpers."""

import math
from typing import Any, Mapping, Optional

from dynamic_tokens.components import Resource
from dynamic_tokens.types import AttributePath
from dynamic_tokens.utils.path import resolve_path

REVERSED_KEY = "reversed"


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def read_resource(actor: Any, path: AttributePath) -> Optional[Resource]:
    """Read the ``{value, max}`` container at ``path`` under ``actor``."""
    container = resolve_path(actor, path)
    if not isinstance(container, Mapping):
        return None
    return Resource(
        value=_as_number(container.get("value")),
        max=_as_number(container.get("max")),
        reversed=container.get(REVERSED_KEY) is True,
    )


def compute_percent(resource: Optional[Resource]) -> Optional[float]:
    """Return the health percentage or ``None`` when it is undefined.

    ``value / max * 100`` normally, ``(1 - value / max) * 100`` under reversed
    polarity. The result is not clamped.
    """
    if resource is None or resource.value is None:
        return None
    if resource.max is None or resource.max == 0:
        return None
    ratio = resource.value / resource.max
    if resource.reversed:
        return (1 - ratio) * 100
    return ratio * 100
