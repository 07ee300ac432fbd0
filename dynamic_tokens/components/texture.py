from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Texture:
    """Token image metadata. ``src`` is the path the host renders."""

    src: Optional[str] = None
