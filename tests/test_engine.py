import numpy as np

from canvas_tetris.engine import GameEngine, GameEvent, GameStatus
from canvas_tetris.piece import Piece


O_PIECE = 6
T_PIECE = 4
I_PIECE = 7


def make_engine(seed=0):
    engine = GameEngine(seed=seed)
    engine.next_type = O_PIECE
    return engine


def place(engine, type_id, x, y=0):
    engine.active = Piece.from_type(type_id, x=x, y=y)
    return engine.active


def test_new_engine_starts_running_with_centred_piece():
    engine = GameEngine(seed=1)
    assert engine.status is GameStatus.RUNNING
    assert engine.score == 0
    assert engine.level == 1
    assert engine.drop_interval_ms == 1000
    assert engine.active.y == 0
    assert engine.active.x == 10 // 2 - engine.active.width // 2
    assert 1 <= engine.next_type <= 7


def test_same_seed_gives_same_sequence():
    a = GameEngine(seed=42)
    b = GameEngine(seed=42)
    for _ in range(5):
        assert np.array_equal(a.active.matrix, b.active.matrix)
        assert a.next_type == b.next_type
        a.hard_drop()
        b.hard_drop()


def test_move_horizontal_stops_at_wall():
    engine = make_engine()
    place(engine, O_PIECE, x=1)
    assert engine.move_horizontal(-1)
    assert engine.active.x == 0
    assert not engine.move_horizontal(-1)
    assert engine.active.x == 0


def test_move_horizontal_blocked_by_stack():
    engine = make_engine()
    place(engine, O_PIECE, x=4, y=5)
    engine.board.set_cell(6, 6, 1)
    assert not engine.move_horizontal(1)
    assert engine.active.x == 4


def test_soft_drop_advances_and_resets_timer():
    engine = make_engine()
    place(engine, O_PIECE, x=4)
    engine.drop_counter_ms = 500
    assert engine.soft_drop()
    assert engine.active.y == 1
    assert engine.drop_counter_ms == 0
    assert not engine.board.grid.any()


def test_soft_drop_locks_on_floor_and_spawns_next():
    engine = make_engine()
    place(engine, T_PIECE, x=0, y=18)
    engine.next_type = I_PIECE
    engine.soft_drop()
    assert engine.board.get_cell(18, 1) == T_PIECE
    assert engine.board.get_cell(19, 0) == T_PIECE
    assert engine.active.matrix.max() == I_PIECE
    assert (engine.active.x, engine.active.y) == (3, 0)


def test_hard_drop_lands_o_piece_on_floor():
    engine = make_engine()
    place(engine, O_PIECE, x=4)
    engine.drop_counter_ms = 300
    engine.hard_drop()
    assert engine.board.grid[18:, 4:6].tolist() == [[6, 6], [6, 6]]
    assert engine.board.filled_rows() == 2
    assert engine.score == 0
    assert engine.drop_counter_ms == 0


def test_filling_two_rows_with_o_pieces_scores_400():
    engine = make_engine()
    for x in (4, 0, 2, 6):
        place(engine, O_PIECE, x=x)
        engine.hard_drop()
        assert engine.score == 0
    assert engine.board.filled_rows() == 2
    place(engine, O_PIECE, x=8)
    engine.hard_drop()
    assert engine.score == 400
    assert engine.level == 1
    assert engine.lines == 2
    assert not engine.board.grid.any()


def test_two_line_clear_shifts_stack_down():
    engine = make_engine()
    engine.board.grid[18:, :] = 1
    engine.board.grid[18:, 4:6] = 0
    engine.board.grid[17, 0] = 3
    place(engine, O_PIECE, x=4)
    engine.hard_drop()
    assert engine.score == 400
    assert engine.last_cleared == 2
    assert engine.board.get_cell(19, 0) == 3
    assert engine.board.filled_rows() == 1


def test_rotate_in_open_space():
    engine = make_engine()
    piece = place(engine, T_PIECE, x=4, y=5)
    assert engine.rotate(1)
    assert piece.matrix.tolist() == [[0, 4, 0], [0, 4, 4], [0, 4, 0]]
    assert piece.x == 4


def test_rotate_kicks_away_from_left_wall():
    engine = make_engine()
    piece = place(engine, I_PIECE, x=-2, y=5)
    piece.rotate(1)  # vertical in matrix column 2, flush with the wall
    assert engine.rotate(1)
    assert piece.matrix[2].tolist() == [7, 7, 7, 7]
    # Kicks +1, -2, +3 accumulate to a net shift of +2.
    assert piece.x == 0


def test_rotate_rolls_back_when_no_kick_fits():
    engine = make_engine()
    piece = place(engine, T_PIECE, x=4, y=10)
    before = piece.matrix.copy()
    engine.board.grid[:] = 1
    for x, y, _ in piece.cells():
        engine.board.grid[y, x] = 0
    assert not engine.rotate(1)
    assert np.array_equal(piece.matrix, before)
    assert piece.x == 4


def test_tick_drops_only_after_interval_exceeded():
    engine = make_engine()
    place(engine, O_PIECE, x=4)
    assert not engine.tick(1000)
    assert engine.active.y == 0
    assert engine.tick(1)
    assert engine.active.y == 1
    assert engine.drop_counter_ms == 0


def test_commands_ignored_while_paused():
    engine = make_engine()
    place(engine, O_PIECE, x=4)
    assert engine.pause()
    assert engine.status is GameStatus.PAUSED
    assert not engine.move_horizontal(1)
    assert not engine.soft_drop()
    assert not engine.hard_drop()
    assert not engine.rotate(1)
    assert not engine.tick(5000)
    assert (engine.active.x, engine.active.y) == (4, 0)
    assert not engine.board.grid.any()


def test_resume_clears_drop_counter():
    engine = make_engine()
    engine.drop_counter_ms = 700
    engine.toggle_pause()
    assert engine.paused
    engine.toggle_pause()
    assert engine.running
    assert engine.drop_counter_ms == 0


def test_snapshot_is_plain_data():
    engine = make_engine()
    place(engine, O_PIECE, x=4)
    snap = engine.snapshot()
    assert snap["active"] == {"matrix": [[6, 6], [6, 6]], "x": 4, "y": 0}
    assert snap["next"] == O_PIECE
    assert snap["status"] == "running"
    assert len(snap["board"]) == 20 and len(snap["board"][0]) == 10


def test_events_are_published():
    engine = make_engine()
    events = []
    engine.subscribe(lambda event, _engine: events.append(event))
    engine.board.grid[19, :] = 1
    engine.board.grid[19, 4:6] = 0
    place(engine, O_PIECE, x=4)
    engine.hard_drop()
    assert events == [GameEvent.LINES_CLEARED, GameEvent.LOCKED]
    engine.restart()
    assert events[-1] is GameEvent.RESTARTED
