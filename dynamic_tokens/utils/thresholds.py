"""Threshold and attribute-override flag accessors.

Flag payloads are host data and may be malformed (hand-edited worlds, older
module versions). Readers here coerce what they can and drop the rest;
they never raise.
"""

import logging
import math
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from dynamic_tokens.components import Threshold
from dynamic_tokens.documents import Actor, Token
from dynamic_tokens.settings import MODULE_ID
from dynamic_tokens.types import AttributePath
from dynamic_tokens.utils.flags import get_flag, set_flag

logger = logging.getLogger(__name__)

THRESHOLDS_FLAG = "thresholds"
ATTRIBUTE_FLAG = "attribute"


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def coerce_threshold(entry: Any) -> Optional[Threshold]:
    """Return a ``Threshold`` for a stored entry, or ``None`` if it is unusable."""
    if isinstance(entry, Threshold):
        return entry
    if not isinstance(entry, Mapping):
        return None
    threshold = entry.get("threshold")
    img = entry.get("img")
    if not _is_number(threshold) or not isinstance(img, str) or not img:
        return None
    return Threshold(threshold=float(threshold), img=img)


def coerce_thresholds(entries: Iterable[Any]) -> Tuple[Threshold, ...]:
    coerced = []
    for entry in entries:
        threshold = coerce_threshold(entry)
        if threshold is None:
            logger.debug("Dropping malformed threshold entry %r", entry)
            continue
        coerced.append(threshold)
    return tuple(coerced)


def get_thresholds(token: Token) -> Tuple[Threshold, ...]:
    """Thresholds configured on ``token`` (empty when unset or malformed)."""
    stored = get_flag(token, MODULE_ID, THRESHOLDS_FLAG)
    if stored is None or isinstance(stored, (str, bytes, Mapping)):
        return ()
    try:
        entries = list(stored)
    except TypeError:
        return ()
    return coerce_thresholds(entries)


def set_thresholds(token: Token, thresholds: Iterable[Threshold]) -> Token:
    """Persist ``thresholds`` on ``token`` as plain ``{threshold, img}`` records."""
    records = [{"threshold": t.threshold, "img": t.img} for t in thresholds]
    return set_flag(token, MODULE_ID, THRESHOLDS_FLAG, records)


def get_attribute_override(document: Union[Actor, Token]) -> Optional[AttributePath]:
    """Per-document attribute path override, if a non-empty one is set."""
    stored = get_flag(document, MODULE_ID, ATTRIBUTE_FLAG)
    if isinstance(stored, str) and stored.strip():
        return stored.strip()
    return None
