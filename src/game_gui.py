import sys
from types import MappingProxyType

import pygame

from game import BOARD_SIZE, Direction, Game2048


COLORS = MappingProxyType({
    'background': (248, 250, 252),
    'grid_background': (165, 174, 185),
    'empty_cell': (203, 213, 225),
    'text_dark': (51, 65, 85),
    'text_light': (255, 255, 255),
    # tile colors
    2: (219, 234, 254),
    4: (191, 219, 254),
    8: (147, 197, 253),
    16: (96, 165, 250),
    32: (59, 130, 246),
    64: (37, 99, 235),
    128: (29, 78, 216),
    256: (30, 64, 175),
    512: (30, 58, 138),
    1024: (23, 37, 84),
    2048: (15, 23, 42),
})

KEY_MAP = MappingProxyType({
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_UP: Direction.UP,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_s: Direction.DOWN,
    pygame.K_w: Direction.UP,
})


def direction_for_key(key):
    """pygame key to a Direction, None if it is not a move"""
    return KEY_MAP.get(key)


def get_tile_color(value):
    """get background color for a tile value"""
    if value in COLORS:
        return COLORS[value]
    elif value > 2048:
        return COLORS[2048]  # 2048 color for higher values
    else:
        return COLORS['empty_cell']


def get_text_color(value):
    """get text color for a tile value"""
    if value <= 4:
        return COLORS['text_dark']
    else:
        return COLORS['text_light']


class GameGUI:
    def __init__(self, game=None):
        """initialize game GUI"""
        pygame.init()
        self.game = game if game is not None else Game2048()

        # GUI settings
        self.cell_size = 100
        self.cell_margin = 10
        self.header_height = 80

        # window size
        grid_size = BOARD_SIZE * self.cell_size + (BOARD_SIZE + 1) * self.cell_margin
        self.window_width = grid_size
        self.window_height = grid_size + self.header_height

        # create window
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("2048")

        # fonts
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        self.clock = pygame.time.Clock()

    def draw_board(self):
        """draw the game board"""
        self.screen.fill(COLORS['background'])

        self.draw_header()

        grid_y = self.header_height
        grid_rect = pygame.Rect(0, grid_y, self.window_width, self.window_width)
        pygame.draw.rect(self.screen, COLORS['grid_background'], grid_rect)

        grid = self.game.grid
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                self.draw_cell(row, col, int(grid[row, col]))

    def draw_header(self):
        """draw the key help"""
        lines = ("Arrow keys or WASD to move tiles", "Press R to restart, ESC to quit")
        for i, text in enumerate(lines):
            surface = self.font_small.render(text, True, COLORS['text_dark'])
            self.screen.blit(surface, (20, 20 + i * 25))

    def draw_cell(self, row, col, value):
        """draw a single cell of the grid"""
        x = col * (self.cell_size + self.cell_margin) + self.cell_margin
        y = row * (self.cell_size + self.cell_margin) + self.cell_margin + self.header_height

        cell_rect = pygame.Rect(x, y, self.cell_size, self.cell_size)
        pygame.draw.rect(self.screen, get_tile_color(value), cell_rect, border_radius=8)

        if value != 0:
            # choose font size based on number of digits
            if value < 100:
                font = self.font_large
            elif value < 1000:
                font = self.font_medium
            else:
                font = self.font_small

            text_surface = font.render(str(value), True, get_text_color(value))
            text_rect = text_surface.get_rect()
            text_rect.center = (x + self.cell_size // 2, y + self.cell_size // 2)
            self.screen.blit(text_surface, text_rect)

    def handle_keypress(self, key):
        """keyboard input, returns False to quit"""
        if key == pygame.K_ESCAPE:
            return False

        if key == pygame.K_r:
            self.game.reset()
            print("Game restarted!")
            return True

        direction = direction_for_key(key)
        if direction is not None:
            self.game.make_move(direction)

        return True

    def run(self):
        """main loop"""
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self.handle_keypress(event.key)

            self.draw_board()
            pygame.display.flip()

            # frame rate
            self.clock.tick(60)

        pygame.quit()


def main():
    try:
        gui = GameGUI()
        gui.run()
    except pygame.error as e:
        print(f"Failed to initialize display: {e}", file=sys.stderr)
        pygame.quit()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
