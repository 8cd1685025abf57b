import pytest

pygame = pytest.importorskip("pygame")

from canvas_tetris.engine import GameEngine
from canvas_tetris.piece import Piece
from canvas_tetris.run_pygame import CELL_COLORS, GameRunner, caption, hex_to_rgb


def key(code):
    return pygame.event.Event(pygame.KEYDOWN, key=code)


@pytest.fixture
def runner():
    r = GameRunner(GameEngine(seed=11))
    r.restart()
    return r


def test_hex_colours_map_to_rgb():
    assert hex_to_rgb("#FF0D72") == (255, 13, 114)
    assert CELL_COLORS[0] == (0, 0, 0)
    assert CELL_COLORS[6] == (255, 225, 56)


def test_frame_queue_drives_gravity(runner):
    y = runner.engine.active.y
    runner.run_frame(0)
    runner.run_frame(1001)
    assert runner.engine.active.y == y + 1


def test_restart_leaves_single_queued_frame(runner):
    runner.restart()
    runner.restart()
    assert len(runner._frames) == 1


def test_arrow_keys_dispatch_to_engine(runner):
    runner.engine.active = Piece.from_type(6, x=4, y=3)
    runner.handle_event(key(pygame.K_LEFT))
    runner.handle_event(key(pygame.K_DOWN))
    assert (runner.engine.active.x, runner.engine.active.y) == (3, 4)


def test_p_toggles_pause(runner):
    runner.handle_event(key(pygame.K_p))
    assert runner.engine.paused
    assert caption(runner.engine).startswith("Tetris - Paused - ")
    runner.handle_event(key(pygame.K_p))
    assert runner.engine.running


def test_escape_stops_running(runner):
    runner._running = True
    runner.handle_event(key(pygame.K_ESCAPE))
    assert not runner.running


def test_caption_reports_score_and_level():
    engine = GameEngine(seed=0)
    engine.score = 400
    assert caption(engine) == "Tetris - Score: 400 Level: 1"
