"""
terminal front-end: curses rendering, keyboard input and the main loop
"""
import argparse
import curses
import logging
import random
import sys
from types import MappingProxyType

from game import BOARD_SIZE, Direction, Game2048
from game_log import DEFAULT_LOG_FILE, EVENT_LOGGER, log_close, log_setup


logger = logging.getLogger(f"{EVENT_LOGGER}.terminal")


# maximum number of digits per entry
ENTRY_DIGITS = 6

# where the board is drawn
BOARD_X = 5
BOARD_Y = 3

# color pair per tile exponent. pretty arbitrary.
#   0, 2, 4, 8, 16, 32, 64, 128, 256, 512, 1024, 2048, 4096, 8192, 16384, 32768, 65536, 131072, more
COLOR_MAP = (
    8, 7, 6, 1, 4, 5, 3, 7, 6, 1, 4, 2, 5, 3, 2, 2, 2, 7, 8,
)

# foreground of color pairs 1..8, all on black
PAIR_COLORS = (
    curses.COLOR_RED,
    curses.COLOR_GREEN,
    curses.COLOR_BLUE,
    curses.COLOR_MAGENTA,
    curses.COLOR_CYAN,
    curses.COLOR_YELLOW,
    curses.COLOR_WHITE,
    curses.COLOR_BLACK,
)

KEY_MAP = MappingProxyType({
    ord('a'): Direction.LEFT,
    ord('d'): Direction.RIGHT,
    ord('s'): Direction.DOWN,
    ord('w'): Direction.UP,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_UP: Direction.UP,
})

QUIT_KEYS = (ord('q'), ord('Q'))


def direction_for_key(key):
    """
    map a curses key code to a move

    letters are accepted in either case.

    returns:
        the Direction, or None if the key is not a move
    """
    if ord('A') <= key <= ord('Z'):
        key = key | 0x20
    return KEY_MAP.get(key)


def key_label(key):
    """printable form of a key code for the debug log"""
    if 0x20 <= key < 0x7f:
        return chr(key | 0x20) if chr(key).isalpha() else chr(key)
    return f"#{key}"


def tile_exponent(value):
    """log2 of a tile, 0 for an empty cell"""
    return int(value).bit_length() - 1 if value else 0


def color_index(value):
    """color pair number for a tile value"""
    return COLOR_MAP[min(tile_exponent(value), len(COLOR_MAP) - 1)]


def format_entry(value):
    """right-aligned entry text, blank for empty cells"""
    if not value:
        return " " * ENTRY_DIGITS
    return f"{int(value):>{ENTRY_DIGITS}}"


def grid_line(size=BOARD_SIZE):
    """cell walls, e.g. '|        |        |'"""
    return "|" + (" " * (ENTRY_DIGITS + 2) + "|") * size


def separator_line(size=BOARD_SIZE):
    """separator between grid rows, e.g. '+--------+--------+'"""
    return "+" + ("-" * (ENTRY_DIGITS + 2) + "+") * size


def init_colors():
    """set up color pairs 1..8 if the terminal has colors"""
    if not curses.has_colors():
        return
    curses.start_color()
    for pair, fg in enumerate(PAIR_COLORS, start=1):
        curses.init_pair(pair, fg, curses.COLOR_BLACK)


def write_entry(stdscr, value):
    """write one entry at the cursor in the color of its value"""
    attr = curses.color_pair(color_index(value)) if value and curses.has_colors() else 0
    stdscr.addstr(format_entry(value), attr)


def display_board(stdscr, grid, x=BOARD_X, y=BOARD_Y):
    """draw the board with its top left corner at (x, y)"""
    size = len(grid)
    sep = separator_line(size)
    walls = grid_line(size)

    try:
        for i, row in enumerate(grid):
            stdscr.addstr(y + i * 4, x, sep)
            stdscr.addstr(y + i * 4 + 1, x, walls)
            stdscr.move(y + i * 4 + 2, x)
            for value in row:
                stdscr.addstr("| ")
                write_entry(stdscr, value)
                stdscr.addstr(" ")
            stdscr.addstr("|")
            stdscr.addstr(y + i * 4 + 3, x, walls)

        stdscr.addstr(y + size * 4, x, sep)
    except curses.error:
        # board does not fit the terminal, draw what we can
        pass


def handle_key(game, key):
    """
    feed one key press to the game

    returns:
        (quit, dirty) where dirty means the board changed and needs a redraw
    """
    direction = direction_for_key(key)
    logger.debug("read '%s', move '%d' (%s)", key_label(key),
                 direction.value if direction else 0, "y" if direction else "n")

    if key in QUIT_KEYS:
        return True, False

    if key == curses.KEY_RESIZE:
        return False, True

    if direction is None:
        return False, False

    return False, game.make_move(direction)


def run(stdscr, game):
    """input loop, returns when the player quits or input ends"""
    init_colors()

    dirty = True
    while True:
        if dirty:
            stdscr.clear()
            display_board(stdscr, game.grid)
            stdscr.refresh()

        key = stdscr.getch()
        if key == curses.ERR:
            break

        done, dirty = handle_key(game, key)
        if done:
            break


def _play(stdscr, game):
    # curses.wrapper already set cbreak, noecho and keypad
    curses.nonl()
    try:
        curses.curs_set(0)
    except curses.error:
        # cursor visibility is not supported everywhere
        pass
    run(stdscr, game)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='2048 in the terminal')
    parser.add_argument('--log-file', type=str, default=DEFAULT_LOG_FILE,
                        help=f'Event log to write (default: {DEFAULT_LOG_FILE})')
    parser.add_argument('--no-log', action='store_true', help='Do not write an event log')
    parser.add_argument('--debug', action='store_true', help='Add diagnostic lines to the event log')
    parser.add_argument('--seed', type=int, default=None, help='Seed for tile spawns')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    handler = None
    if not args.no_log:
        try:
            handler = log_setup(args.log_file, debug=args.debug)
        except OSError as e:
            print(f"Failed to open log file {args.log_file}: {e}", file=sys.stderr)
            return 1

    try:
        game = Game2048(rng=random.Random(args.seed))
        curses.wrapper(_play, game)
    except curses.error as e:
        print(f"Failed to initialize curses library: {e}", file=sys.stderr)
        return 1
    finally:
        if handler is not None:
            log_close(handler)

    return 0


if __name__ == "__main__":
    sys.exit(main())
