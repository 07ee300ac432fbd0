"""Tracked resource component.

``Resource`` is the ``{value, max}`` container found on an actor at the
configured attribute path. Under *reversed polarity* ``value`` counts
depletion (e.g. a damage counter) instead of the remaining amount.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Resource:
    """Current and maximum amount of a tracked attribute.

    Attributes:
        value: Current amount; ``None`` when the host carries no value.
        max: Upper bound used to normalize ``value``. ``None`` or zero means no
            percentage can be computed.
        reversed: If True ``value`` counts damage taken rather than health left.
    """

    value: Optional[float]
    max: Optional[float]
    reversed: bool = False
