from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class Tile:
    """A single hex tile. Tiles carry no identity beyond their color index."""
    color_index: int
