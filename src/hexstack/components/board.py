from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from hexstack.components.tile import Tile

Position = Tuple[int, int]  # (col, row)


@dataclass(slots=True)
class Board:
    """Sparse hex grid stored column-major: ``cells[col][row]``.

    Row 0 is the top of a column, ``rows - 1`` the bottom. Only board_ops
    mutates ``cells``; everything else reads through ``tile_at``.
    """
    cols: int
    rows: int
    num_colors: int
    cells: List[List[Optional[Tile]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[None] * self.rows for _ in range(self.cols)]

    def is_inside(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def tile_at(self, col: int, row: int) -> Optional[Tile]:
        if not self.is_inside(col, row):
            return None
        return self.cells[col][row]
