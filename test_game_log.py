"""
Tests for the replay event log
"""
import logging
import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from game import Direction, Game2048
from game_log import EVENT_LOGGER, log_close, log_setup
from test_game import ScriptedRandom


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "log.txt"


def read_lines(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read().splitlines()


def test_move_and_spawn_records(log_path):
    handler = log_setup(str(log_path))
    try:
        game = Game2048(rng=ScriptedRandom([5, 755]))
        # the 4 at (1, 1) slides to (1, 0)
        assert game.make_move(Direction.LEFT)
    finally:
        log_close(handler)

    assert read_lines(log_path) == ["4,4", "15,5", "1", "14,755"]


def test_unchanged_move_is_not_logged(log_path):
    handler = log_setup(str(log_path))
    try:
        game = Game2048(rng=ScriptedRandom([0]))
        # the only tile sits in the top left corner
        assert game.make_move(Direction.LEFT) is False
        assert game.make_move(Direction.UP) is False
    finally:
        log_close(handler)

    assert read_lines(log_path) == ["4,4", "15,0"]


def test_debug_lines(log_path):
    handler = log_setup(str(log_path), debug=True)
    try:
        game = Game2048(rng=ScriptedRandom([5, 755]))
        game.make_move(Direction.LEFT)
    finally:
        log_close(handler)

    assert read_lines(log_path) == [
        "4,4",
        "Insert 4 to (1x1) [slots=15]",
        "15,5",
        "Move 1...",
        "Changed: y; slots: 15",
        "1",
        "Insert 2 to (1x2) [slots=14]",
        "14,755",
    ]


def test_log_file_is_truncated(log_path):
    log_path.write_text("stale\n", encoding="utf-8")
    handler = log_setup(str(log_path))
    try:
        Game2048(rng=ScriptedRandom([0]))
    finally:
        log_close(handler)

    assert read_lines(log_path) == ["4,4", "15,0"]


def test_log_close_detaches_handler(log_path):
    handler = log_setup(str(log_path))
    log_close(handler)
    assert handler not in logging.getLogger(EVENT_LOGGER).handlers


def test_log_close_restores_logger(log_path):
    logger = logging.getLogger(EVENT_LOGGER)
    level, propagate = logger.level, logger.propagate

    handler = log_setup(str(log_path), debug=True)
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    log_close(handler)

    assert logger.level == level
    assert logger.propagate is propagate


def test_event_logger_is_the_game_logger():
    import game
    assert logging.getLogger(EVENT_LOGGER) is game.logger
