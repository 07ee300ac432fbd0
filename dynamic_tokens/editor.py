"""Threshold editor state for the token configuration form.

The form shows one row per threshold: a percentage input and an image path
(with a file picker). Rows hold raw form values; they only become
``Threshold`` components when saved, at which point blank percentages default
to 100, image paths are trimmed and unusable rows are dropped. All functions
return new row tuples.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple, Union

from dynamic_tokens.components import Threshold
from dynamic_tokens.documents import Token
from dynamic_tokens.utils.thresholds import get_thresholds, set_thresholds

logger = logging.getLogger(__name__)

DEFAULT_ROW_THRESHOLD = 100.0

RawThreshold = Union[str, float, int, None]


@dataclass(frozen=True)
class ThresholdRow:
    """One editable row: raw percentage input and image path."""

    threshold: RawThreshold = DEFAULT_ROW_THRESHOLD
    img: str = ""


Rows = Tuple[ThresholdRow, ...]


def rows_from_thresholds(thresholds: Iterable[Threshold]) -> Rows:
    return tuple(ThresholdRow(threshold=t.threshold, img=t.img) for t in thresholds)


def rows_for_token(token: Token) -> Rows:
    """Rows rendered for ``token`` (in stored order)."""
    return rows_from_thresholds(get_thresholds(token))


def add_row(rows: Rows) -> Rows:
    """Append a fresh row (100%, no image)."""
    return rows + (ThresholdRow(),)


def _check_index(rows: Rows, index: int) -> None:
    if not 0 <= index < len(rows):
        raise ValueError(f"Row index {index} out of range for {len(rows)} rows")


def remove_row(rows: Rows, index: int) -> Rows:
    _check_index(rows, index)
    return rows[:index] + rows[index + 1 :]


def update_row(
    rows: Rows,
    index: int,
    threshold: Optional[RawThreshold] = None,
    img: Optional[str] = None,
) -> Rows:
    """Replace the given fields of row ``index``."""
    _check_index(rows, index)
    row = rows[index]
    if threshold is not None:
        row = replace(row, threshold=threshold)
    if img is not None:
        row = replace(row, img=img)
    return rows[:index] + (row,) + rows[index + 1 :]


def set_row_image(rows: Rows, index: int, path: str) -> Rows:
    """File-picker callback: store the chosen path on row ``index``."""
    return update_row(rows, index, img=path)


def parse_threshold(raw: RawThreshold) -> Optional[float]:
    """Blank input means 100; non-numeric input yields ``None``."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return DEFAULT_ROW_THRESHOLD
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def thresholds_from_rows(rows: Iterable[ThresholdRow]) -> Tuple[Threshold, ...]:
    """Convert form rows to ``Threshold`` components, dropping unusable rows."""
    thresholds = []
    for row in rows:
        img = row.img.strip()
        if not img:
            continue
        value = parse_threshold(row.threshold)
        if value is None:
            logger.debug("Dropping row with non-numeric threshold %r", row.threshold)
            continue
        thresholds.append(Threshold(threshold=value, img=img))
    return tuple(thresholds)


def save_thresholds(token: Token, rows: Iterable[ThresholdRow]) -> Token:
    """Persist the form rows on ``token``'s flags."""
    return set_thresholds(token, thresholds_from_rows(rows))
