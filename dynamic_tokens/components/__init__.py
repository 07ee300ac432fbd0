"""dynamic_tokens.components
=================================

Aggregate import surface for the value objects shared by the resolver, the
reactor and the threshold editor::

    from dynamic_tokens.components import Threshold, Resource

All component classes are frozen ``@dataclass`` value objects; they carry no
behavior beyond their fields.
"""

from .resource import Resource
from .texture import Texture
from .threshold import Threshold

__all__ = [
    "Resource",
    "Texture",
    "Threshold",
]
