"""
plaintext event log of a game, for offline replay and debugging

one record per line:
    board dimensions     "4,4"
    after each spawn     "<slots remaining>,<random draw>"
    after each move      "<direction code>"
"""
import logging

import game


EVENT_LOGGER = game.logger.name
DEFAULT_LOG_FILE = "log.txt"

# logger settings to put back when a handler is closed
_saved = {}


def log_setup(path=DEFAULT_LOG_FILE, debug=False):
    """
    send game events to a fresh log file

    args:
        path: file to write, truncated if it exists
        debug: also write the per-spawn, per-move and per-key diagnostic lines

    returns:
        the file handler, close it with log_close()
    """
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(EVENT_LOGGER)
    _saved[handler] = (logger.level, logger.propagate)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.addHandler(handler)
    # keep events out of whatever the root logger prints
    logger.propagate = False

    return handler


def log_close(handler):
    """detach and flush a handler returned by log_setup(), restoring the logger"""
    logger = logging.getLogger(EVENT_LOGGER)
    logger.removeHandler(handler)
    handler.close()

    level, propagate = _saved.pop(handler, (logging.NOTSET, True))
    logger.setLevel(level)
    logger.propagate = propagate
