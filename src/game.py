"""
core game logic and mechanics
"""
import enum
import logging
import random

import numpy as np


logger = logging.getLogger(__name__)

# dimension of the game board
BOARD_SIZE = 4

# probability (/ 100) to spawn 4 instead of 2
SPAWN_RATE = 10


class Direction(enum.Enum):
    """the four moves, valued with the codes written to the event log"""
    LEFT = 1
    RIGHT = 2
    DOWN = 3
    UP = 4

    @property
    def vertical(self):
        """true when the move runs along columns"""
        return self in (Direction.UP, Direction.DOWN)

    @property
    def flipped(self):
        """true when lines are scanned from the high index end"""
        return self in (Direction.RIGHT, Direction.DOWN)


def line_cells(direction, line, size=BOARD_SIZE):
    """
    cells of one line in move order, starting at the edge tiles move toward

    args:
        direction: the move being made
        line: row index (LEFT/RIGHT) or column index (UP/DOWN)
        size: board dimension

    returns:
        list of (row, col) pairs
    """
    steps = range(size - 1, -1, -1) if direction.flipped else range(size)
    if direction.vertical:
        return [(k, line) for k in steps]
    return [(line, k) for k in steps]


def slide_line(board, cells):
    """
    compact and merge one line in place

    each leading cell takes the first tile found further along the line.
    a tile moved into an empty leading cell can still merge with the next
    matching tile behind the gap; a merged tile is not revisited.

    returns:
        (changed, merges)
    """
    changed = False
    merges = 0

    for j in range(len(cells) - 1):
        idx = cells[j]
        val = board[idx]

        for nidx in cells[j + 1:]:
            nxt = board[nidx]
            if not nxt:
                continue

            if val and nxt == val:
                # matched value, double
                board[idx] = val * 2
                board[nidx] = 0
                changed = True
                merges += 1
                break
            elif not val:
                # nothing here yet, move and keep scanning
                board[idx] = nxt
                board[nidx] = 0
                changed = True
                val = nxt
            else:
                # blocked
                break

    return changed, merges


class Game2048:
    def __init__(self, rng=None):
        """
        initialize 4x4 2048 game

        args:
            rng: source of random integers with a randrange(n) method,
                a fresh random.Random when omitted
        """
        self.size = BOARD_SIZE
        self.rng = rng if rng is not None else random.Random()
        self.reset()

    def reset(self):
        """clear the board and place the first tile"""
        self.board = np.zeros((self.size, self.size), dtype=np.int32)
        self.slots = self.size * self.size
        self.last_move = None
        self.rand = None

        # log how large of a board this game is played on
        logger.info("%d,%d", self.size, self.size)

        self.spawn()

    @property
    def grid(self):
        """read-only view of the board for renderers"""
        view = self.board.view()
        view.flags.writeable = False
        return view

    def empty_cells(self):
        """empty (row, col) pairs in row-major order"""
        return [(int(r), int(c)) for r, c in np.argwhere(self.board == 0)]

    def spawn(self):
        """
        spawn a 2 or 4 into an empty cell chosen by one random draw

        the draw r in [0, slots * 100) picks the empty cell r % slots and
        the tile roll r // slots in [0, 100).

        returns:
            ((row, col), value)
        """
        assert self.slots > 0, "spawn on a full board"

        self.rand = self.rng.randrange(self.slots * 100)

        slot = self.rand % self.slots
        tile = self.rand // self.slots

        # right now there are only 2 and 4
        value = 4 if tile < SPAWN_RATE else 2

        position = self.empty_cells()[slot]
        self.board[position] = value
        self.slots -= 1

        logger.debug("Insert %d to (%dx%d) [slots=%d]", value, position[0], position[1], self.slots)

        # log randomness for replication
        logger.info("%d,%d", self.slots, self.rand)

        return position, value

    def apply_move(self, direction):
        """
        slide and merge every line toward the edge of the move

        returns:
            true if any tile moved or merged, the board is untouched otherwise
        """
        logger.debug("Move %d...", direction.value)

        changed = False
        for line in range(self.size):
            line_changed, merges = slide_line(self.board, line_cells(direction, line, self.size))
            changed = changed or line_changed
            self.slots += merges

        logger.debug("Changed: %s; slots: %d", "y" if changed else "n", self.slots)

        if changed:
            self.last_move = direction
            logger.info("%d", direction.value)

        return changed

    def make_move(self, direction):
        """
        apply a move and spawn a new tile if the board changed

        a changed move always leaves an empty cell behind: a slide needs a
        gap and a merge frees one.
        """
        moved = self.apply_move(direction)
        if moved:
            self.spawn()
        return moved

