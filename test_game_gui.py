"""
Tests for the pygame front-end, run on SDL's dummy video driver
"""
import os
import random
import sys

import numpy as np
import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from game import Direction, Game2048
from game_gui import COLORS, GameGUI, direction_for_key, get_text_color, get_tile_color


@pytest.fixture
def gui():
    game = Game2048(rng=random.Random(0))
    game.board = np.array([[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4], dtype=np.int32)
    game.slots = 14
    window = GameGUI(game)
    yield window
    pygame.quit()


def test_arrow_keys_map_to_directions():
    assert direction_for_key(pygame.K_LEFT) is Direction.LEFT
    assert direction_for_key(pygame.K_RIGHT) is Direction.RIGHT
    assert direction_for_key(pygame.K_UP) is Direction.UP
    assert direction_for_key(pygame.K_DOWN) is Direction.DOWN
    assert direction_for_key(pygame.K_w) is Direction.UP
    assert direction_for_key(pygame.K_SPACE) is None


def test_tile_colors():
    assert get_tile_color(0) == COLORS['empty_cell']
    assert get_tile_color(8) == COLORS[8]
    assert get_tile_color(8192) == COLORS[2048]
    assert get_text_color(4) == COLORS['text_dark']
    assert get_text_color(16) == COLORS['text_light']


def test_keypress_moves_tiles(gui):
    assert gui.handle_keypress(pygame.K_LEFT) is True
    assert gui.game.board[0, 0] == 4
    assert gui.game.last_move is Direction.LEFT
    gui.draw_board()


def test_keypress_ignores_other_keys(gui):
    assert gui.handle_keypress(pygame.K_SPACE) is True
    assert gui.game.board[0].tolist() == [2, 2, 0, 0]


def test_restart_and_quit(gui):
    assert gui.handle_keypress(pygame.K_r) is True
    assert np.count_nonzero(gui.game.board) == 1
    assert gui.game.slots == 15
    assert gui.handle_keypress(pygame.K_ESCAPE) is False
