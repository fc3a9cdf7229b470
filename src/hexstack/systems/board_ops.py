from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Set, Tuple

from esper import World

from hexstack.components.board import Board
from hexstack.components.tile import Tile
from hexstack.constants import (
    HEX_COL_SPACING,
    HEX_HIT_RADIUS_SQ,
    HEX_ODD_COL_OFFSET,
    HEX_ROW_SPACING,
)
from hexstack.errors import ConfigError

Position = Tuple[int, int]  # (col, row)
Snapshot = Tuple[Tuple[Optional[int], ...], ...]

# Column parity decides which rows the side neighbours sit on: odd columns are
# drawn half a row lower, so their side neighbours are on the same row and the row below.
_EVEN_COL_DIRECTIONS: Tuple[Position, ...] = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (0, 1))
_ODD_COL_DIRECTIONS: Tuple[Position, ...] = ((-1, 0), (0, -1), (1, 0), (-1, 1), (1, 1), (0, 1))


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    color_index: int


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def find_board(world: World) -> Board | None:
    for _, board in world.get_component(Board):
        return board
    return None


def random_tile(rng: random.Random, num_colors: int) -> Tile:
    return Tile(color_index=rng.randrange(num_colors))


def initialize_board(
    cols: int,
    rows: int,
    num_colors: int,
    initial_rows: int,
    *,
    rng: random.Random | None = None,
) -> Board:
    """Allocate an empty board and fill the bottom ``initial_rows`` rows with random tiles."""
    if cols < 1 or rows < 1:
        raise ConfigError(f"Board must be at least 1x1 (got {cols}x{rows})")
    if num_colors < 1:
        raise ConfigError(f"num_colors must be >= 1 (got {num_colors})")
    if initial_rows < 0 or initial_rows > rows:
        raise ConfigError(f"initial_rows must be within 0..{rows} (got {initial_rows})")
    rng = rng or random.Random()
    board = Board(cols=cols, rows=rows, num_colors=num_colors)
    for col in range(cols):
        for row in range(rows - initial_rows, rows):
            board.cells[col][row] = random_tile(rng, num_colors)
    return board


def install_board(world: World, board: Board) -> int:
    """Attach ``board`` to the world, replacing any board already present."""
    for entity, _ in list(world.get_component(Board)):
        world.add_component(entity, board)
        return entity
    return world.create_entity(board)


def place_tile(board: Board, col: int, row: int, color_index: int | None) -> None:
    if not board.is_inside(col, row):
        raise IndexError(f"({col}, {row}) is outside a {board.cols}x{board.rows} board")
    board.cells[col][row] = None if color_index is None else Tile(color_index=color_index)


# ----------------------------------------------------------------------------
# Geometry
# ----------------------------------------------------------------------------

def hex_center(col: int, row: int, size: float, origin: Tuple[float, float] = (0.0, 0.0)) -> Tuple[float, float]:
    """Planar center of a cell in the column-staggered layout."""
    x = origin[0] + col * size * HEX_COL_SPACING
    y = origin[1] + row * size * HEX_ROW_SPACING
    if col % 2 == 1:
        y += size * HEX_ODD_COL_OFFSET
    return x, y


def nearest_cell(
    board: Board,
    x: float,
    y: float,
    size: float,
    origin: Tuple[float, float] = (0.0, 0.0),
) -> Position | None:
    """Return the cell whose center is closest to (x, y) within the hit radius.

    Scans column-major then row-major; on equal distance the first cell scanned wins.
    """
    limit = size * size * HEX_HIT_RADIUS_SQ
    best: Position | None = None
    best_dist = float("inf")
    for col in range(board.cols):
        for row in range(board.rows):
            cx, cy = hex_center(col, row, size, origin)
            dx = x - cx
            dy = y - cy
            dist = dx * dx + dy * dy
            if dist < best_dist and dist < limit:
                best_dist = dist
                best = (col, row)
    return best


def neighbors(board: Board, col: int, row: int) -> List[Position]:
    directions = _EVEN_COL_DIRECTIONS if col % 2 == 0 else _ODD_COL_DIRECTIONS
    result: List[Position] = []
    for dc, dr in directions:
        c, r = col + dc, row + dr
        if board.is_inside(c, r):
            result.append((c, r))
    return result


def group_centroid(positions: Iterable[Position], size: float, origin: Tuple[float, float] = (0.0, 0.0)) -> Tuple[float, float]:
    points = [hex_center(col, row, size, origin) for col, row in positions]
    if not points:
        return origin
    return (
        sum(x for x, _ in points) / len(points),
        sum(y for _, y in points) / len(points),
    )


# ----------------------------------------------------------------------------
# Connectivity
# ----------------------------------------------------------------------------

def find_connected_group(board: Board, col: int, row: int) -> Set[Position]:
    """Flood fill over same-colored tiles reachable from (col, row)."""
    start = board.tile_at(col, row)
    if start is None:
        return set()
    color = start.color_index
    group: Set[Position] = set()
    visited: Set[Position] = set()
    stack: List[Position] = [(col, row)]
    while stack:
        pos = stack.pop()
        if pos in visited:
            continue
        visited.add(pos)
        tile = board.cells[pos[0]][pos[1]]
        if tile is None or tile.color_index != color:
            continue
        group.add(pos)
        for neighbor in neighbors(board, pos[0], pos[1]):
            if neighbor not in visited:
                stack.append(neighbor)
    return group


# ----------------------------------------------------------------------------
# Mutation
# ----------------------------------------------------------------------------

def clear_tiles(board: Board, positions: Iterable[Position]) -> List[Tuple[Position, int]]:
    """Empty the given cells and return (position, color_index) for each tile removed."""
    cleared: List[Tuple[Position, int]] = []
    for col, row in positions:
        tile = board.tile_at(col, row)
        if tile is None:
            continue
        board.cells[col][row] = None
        cleared.append(((col, row), tile.color_index))
    return cleared


def apply_gravity(board: Board) -> List[GravityMove]:
    """Pack every column toward the bottom row, keeping tile order."""
    moves: List[GravityMove] = []
    for col in range(board.cols):
        column = board.cells[col]
        write_row = board.rows - 1
        for row in range(board.rows - 1, -1, -1):
            tile = column[row]
            if tile is None:
                continue
            if row != write_row:
                column[write_row] = tile
                column[row] = None
                moves.append(GravityMove(source=(col, row), target=(col, write_row), color_index=tile.color_index))
            write_row -= 1
    return moves


def push_row_and_insert(board: Board, new_color_fn: Callable[[], int]) -> List[Position]:
    """Shift each column down one row and put a fresh tile in row 0.

    Whatever sat in the bottom row is dropped; callers check for that first.
    """
    inserted: List[Position] = []
    for col in range(board.cols):
        column = board.cells[col]
        column[1:] = column[:-1]
        column[0] = Tile(color_index=new_color_fn())
        inserted.append((col, 0))
    return inserted


# ----------------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------------

def is_column_top_occupied(board: Board, col: int) -> bool:
    return board.tile_at(col, 0) is not None


def any_column_top_occupied(board: Board) -> bool:
    return any(is_column_top_occupied(board, col) for col in range(board.cols))


def occupied_count(board: Board) -> int:
    return sum(1 for column in board.cells for tile in column if tile is not None)


def occupancy_ratio(board: Board) -> float:
    total = board.cols * board.rows
    if total == 0:
        return 0.0
    return occupied_count(board) / total


def has_full_bottom_pair(board: Board) -> bool:
    """True when some column has both of its last two rows occupied."""
    if board.rows < 2:
        return any(board.cells[col][board.rows - 1] is not None for col in range(board.cols))
    return any(
        board.cells[col][board.rows - 1] is not None and board.cells[col][board.rows - 2] is not None
        for col in range(board.cols)
    )


def board_snapshot(board: Board) -> Snapshot:
    """Immutable column-major copy of the color indices (None for empty cells)."""
    return tuple(
        tuple(None if tile is None else tile.color_index for tile in column)
        for column in board.cells
    )
