from dataclasses import dataclass


@dataclass(frozen=True)
class Threshold:
    """A (percentage, image) pair.

    Attributes:
        threshold:
            Health percentage in ``[0, 100]`` at or below which ``img`` applies.
        img:
            Non-empty image path swapped onto the token.
    """

    threshold: float
    img: str
