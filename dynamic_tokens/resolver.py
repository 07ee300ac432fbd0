"""Threshold resolution strategies.

A token carries any number of ``Threshold`` entries; given the actor's health
percentage a strategy picks the image to display, or ``None`` to leave the
token untouched. Entries are always re-sorted (stably) so the stored order is
irrelevant.

Two strategies are provided:

* ``ascending_image_fn`` (default): lowest threshold that still covers the
    percentage. Above every threshold nothing changes.
* ``descending_image_fn``: first covering threshold scanning from the top,
    falling back to the highest threshold's image when none covers it.

Both agree whenever a single threshold covers the percentage; they differ at
the boundary and for overlapping ranges.
"""

from typing import Dict, Optional, Sequence, Union

from dynamic_tokens.components import Threshold
from dynamic_tokens.types import ImageFn, ResolutionStrategy


def ascending_image_fn(percent: float, thresholds: Sequence[Threshold]) -> Optional[str]:
    """Image of the lowest threshold ``>= percent`` or ``None`` above all of them."""
    for entry in sorted(thresholds, key=lambda t: t.threshold):
        if entry.threshold >= percent:
            return entry.img
    return None


def descending_image_fn(
    percent: float, thresholds: Sequence[Threshold]
) -> Optional[str]:
    """First threshold ``>= percent`` from the top, else the highest threshold's image."""
    ordered = sorted(thresholds, key=lambda t: t.threshold, reverse=True)
    if not ordered:
        return None
    for entry in ordered:
        if entry.threshold >= percent:
            return entry.img
    return ordered[0].img


RESOLUTION_STRATEGY_REGISTRY: Dict[ResolutionStrategy, ImageFn] = {
    ResolutionStrategy.ASCENDING: ascending_image_fn,
    ResolutionStrategy.DESCENDING: descending_image_fn,
}
"""Registry of strategy names to resolution callables."""

DEFAULT_STRATEGY = ResolutionStrategy.ASCENDING


def get_image_fn(strategy: Union[ResolutionStrategy, str]) -> ImageFn:
    """Look up a strategy by enum member or name.

    Raises:
        ValueError: If ``strategy`` names no registered strategy.
    """
    try:
        return RESOLUTION_STRATEGY_REGISTRY[ResolutionStrategy(strategy)]
    except (ValueError, KeyError):
        raise ValueError(f"Unknown resolution strategy: {strategy!r}") from None


def resolve_image(
    percent: float,
    thresholds: Optional[Sequence[Threshold]],
    strategy: Union[ResolutionStrategy, str] = DEFAULT_STRATEGY,
) -> Optional[str]:
    """Map a health percentage to an image path.

    Args:
        percent (float): Health percentage, conceptually ``0-100`` (not clamped).
        thresholds (Sequence[Threshold] | None): Entries in any order.
        strategy (ResolutionStrategy | str): Matching strategy, ascending by default.

    Returns:
        str | None: Image path, or ``None`` when no image change should occur.
    """
    if not thresholds:
        return None
    return get_image_fn(strategy)(percent, thresholds)
