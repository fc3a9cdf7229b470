from hexstack.events.bus import EVENT_POINTER, EVENT_TILE_CLICK, EVENT_TILE_HOVER
from hexstack.systems.board_ops import get_board, hex_center
from hexstack.systems.input import GESTURE_HOVER_MOVE, GESTURE_TAP
from hexstack.world import get_hex_layout

from tests.helpers import empty_board, fill_column, playing_game, run_state


def _center(game, col, row):
    layout = get_hex_layout(game.world)
    return hex_center(col, row, layout.size, (layout.origin_x, layout.origin_y))


def _layout(game, size=20.0, origin=(40.0, 30.0)):
    layout = get_hex_layout(game.world)
    layout.size = size
    layout.origin_x, layout.origin_y = origin


def test_tap_on_a_cell_emits_tile_click(tmp_path):
    game = playing_game(tmp_path, board=empty_board())
    _layout(game)
    clicks = []
    game.event_bus.subscribe(EVENT_TILE_CLICK, lambda sender, **kw: clicks.append((kw["col"], kw["row"])))

    x, y = _center(game, 3, 5)
    game.event_bus.emit(EVENT_POINTER, x=x + 2, y=y - 3, gesture=GESTURE_TAP)

    assert clicks == [(3, 5)]


def test_tap_outside_the_grid_is_dropped(tmp_path):
    game = playing_game(tmp_path, board=empty_board())
    _layout(game)
    clicks = []
    game.event_bus.subscribe(EVENT_TILE_CLICK, lambda sender, **kw: clicks.append(kw))

    game.event_bus.emit(EVENT_POINTER, x=-500, y=-500, gesture=GESTURE_TAP)
    game.event_bus.emit(EVENT_POINTER, x=None, y=10, gesture=GESTURE_TAP)

    assert clicks == []


def test_hover_outside_the_grid_clears_preview(tmp_path):
    game = playing_game(tmp_path, board=empty_board())
    _layout(game)
    hovers = []
    game.event_bus.subscribe(EVENT_TILE_HOVER, lambda sender, **kw: hovers.append((kw["col"], kw["row"])))

    x, y = _center(game, 1, 1)
    game.event_bus.emit(EVENT_POINTER, x=x, y=y, gesture=GESTURE_HOVER_MOVE)
    game.event_bus.emit(EVENT_POINTER, x=9999, y=9999, gesture=GESTURE_HOVER_MOVE)

    assert hovers == [(1, 1), (None, None)]


def test_pointer_tap_clears_a_group_end_to_end(tmp_path):
    board = empty_board()
    fill_column(board, 2, range(6, 9), 1)
    game = playing_game(tmp_path, board=board)
    _layout(game)

    x, y = _center(game, 2, 7)
    game.event_bus.emit(EVENT_POINTER, x=x, y=y, gesture=GESTURE_HOVER_MOVE)
    assert len(run_state(game).hover_group) == 3
    game.event_bus.emit(EVENT_POINTER, x=x, y=y, gesture=GESTURE_TAP)

    assert run_state(game).score == 30
    assert get_board(game.world).tile_at(2, 7) is None


def test_cell_at_without_a_board(tmp_path):
    from hexstack.game import create_game

    game = create_game(save_path=tmp_path / "progress.json")
    assert game.input.cell_at(10, 10) is None
