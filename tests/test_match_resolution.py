from hexstack.components.game_state import Screen
from hexstack.events.bus import EVENT_GRAVITY_APPLIED, EVENT_LEVEL_COMPLETE
from hexstack.systems.board_ops import board_snapshot, get_board

from tests.helpers import empty_board, fill_column, playing_game, run_state


def _stacked_board():
    # Three 0s sitting on two 1s in column 0 with a 2 above them.
    board = empty_board(7, 9, 3)
    fill_column(board, 0, range(7, 9), 1)
    fill_column(board, 0, range(4, 7), 0)
    fill_column(board, 0, [3], 2)
    return board


def test_gravity_waits_for_the_settle_delay(tmp_path):
    game = playing_game(tmp_path, board=_stacked_board(), settle_delay_ms=150)
    game.match.attempt_match(0, 5)

    game.loop.advance(0.05)
    game.loop.advance(0.05)
    assert run_state(game).animating
    assert get_board(game.world).tile_at(0, 3) is not None

    game.loop.advance(0.05)
    game.loop.advance(0.05)
    run = run_state(game)
    assert not run.animating
    assert board_snapshot(get_board(game.world))[0] == (None,) * 6 + (2, 1, 1)


def test_gravity_is_applied_once_per_clear(tmp_path):
    game = playing_game(tmp_path, board=_stacked_board())
    applied = []
    game.event_bus.subscribe(EVENT_GRAVITY_APPLIED, lambda sender, **kw: applied.append(kw["moves"]))

    game.match.attempt_match(0, 5)
    for _ in range(5):
        game.loop.advance(0.02)

    assert len(applied) == 1
    assert [(m.source, m.target) for m in applied[0]] == [((0, 3), (0, 6))]


def test_settle_countdown_freezes_while_paused(tmp_path):
    game = playing_game(tmp_path, board=_stacked_board(), settle_delay_ms=150)
    game.match.attempt_match(0, 5)
    game.flow.toggle_pause()

    for _ in range(10):
        game.loop.advance(0.05)

    assert run_state(game).animating
    game.flow.toggle_pause()
    for _ in range(4):
        game.loop.advance(0.05)
    assert not run_state(game).animating


def test_level_complete_is_reported_after_gravity(tmp_path):
    game = playing_game(tmp_path, board=_stacked_board())
    run_state(game).target_score = 30
    order = []
    game.event_bus.subscribe(EVENT_GRAVITY_APPLIED, lambda sender, **kw: order.append("gravity"))
    game.event_bus.subscribe(EVENT_LEVEL_COMPLETE, lambda sender, **kw: order.append(("complete", kw["level"], kw["score"])))

    game.match.attempt_match(0, 5)
    game.loop.advance(0.016)

    assert order == ["gravity", ("complete", 1, 30)]
    assert game.flow.screen == Screen.LEVEL_COMPLETE


def test_resolve_without_pending_clear_does_nothing(tmp_path):
    game = playing_game(tmp_path, board=_stacked_board())
    applied = []
    game.event_bus.subscribe(EVENT_GRAVITY_APPLIED, lambda sender, **kw: applied.append(kw))
    game.match_resolution.resolve()
    assert applied == []
