from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class FadeAnimation:
    """Transient clear effect at a grid position, fading from alpha 1 to 0."""
    pos: Tuple[int,int]
    color_index: int
    alpha: float = 1.0
