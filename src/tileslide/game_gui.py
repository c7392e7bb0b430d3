"""
pygame frontend for the same game loop the terminal uses
"""
import pygame

from tileslide.game import Game, GameState, KeyEvent
from tileslide.logging_config import get_logger


logger = get_logger(__name__)


COLORS = {
    'background': (248, 250, 252),
    'grid_background': (165, 174, 185),
    'empty_cell': (203, 213, 225),
    'text_dark': (51, 65, 85),
    'text_light': (255, 255, 255),
    'spawn_outline': (234, 179, 8),
    'game_over': (200, 0, 0),
}

# tile background per color class (class 0 is only used by empty cells)
TILE_COLORS = (
    (203, 213, 225),
    (219, 234, 254),
    (191, 219, 254),
    (147, 197, 253),
    (96, 165, 250),
    (59, 130, 246),
    (37, 99, 235),
    (29, 78, 216),
    (30, 64, 175),
    (30, 58, 138),
    (23, 37, 84),
    (15, 23, 42),
    (76, 29, 149),
    (59, 7, 100),
)

KEYMAP = {
    pygame.K_UP: KeyEvent.UP,
    pygame.K_DOWN: KeyEvent.DOWN,
    pygame.K_LEFT: KeyEvent.LEFT,
    pygame.K_RIGHT: KeyEvent.RIGHT,
    pygame.K_r: KeyEvent.RESTART,
    pygame.K_ESCAPE: KeyEvent.QUIT,
}


def get_tile_color(value, color):
    """background color for a tile"""
    if value == 0:
        return COLORS['empty_cell']
    return TILE_COLORS[color % len(TILE_COLORS)]


def get_text_color(value):
    """text color for a tile value"""
    if value <= 4:
        return COLORS['text_dark']
    return COLORS['text_light']


class GameGUI:
    def __init__(self, config=None):
        """initialize game window"""
        pygame.init()
        self.game = Game(config)

        # GUI settings
        self.cell_size = 100
        self.cell_margin = 10
        self.header_height = 120

        # window size follows the board shape
        self.grid_width = self.game.config.width * self.cell_size + (self.game.config.width + 1) * self.cell_margin
        self.grid_height = self.game.config.height * self.cell_size + (self.game.config.height + 1) * self.cell_margin
        self.window_width = max(self.grid_width, 360)
        self.window_height = self.grid_height + self.header_height

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("tileslide")

        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        self.clock = pygame.time.Clock()

    def draw_board(self, snapshot):
        """draw the whole frame"""
        self.screen.fill(COLORS['background'])

        self.draw_header(snapshot)

        grid_rect = pygame.Rect(0, self.header_height, self.grid_width, self.grid_height)
        pygame.draw.rect(self.screen, COLORS['grid_background'], grid_rect)

        for row in range(snapshot.height):
            for col in range(snapshot.width):
                self.draw_cell(snapshot, row, col)

    def draw_header(self, snapshot):
        """score and key help"""
        score_text = self.font_large.render(f"Score: {snapshot.score}", True, COLORS['text_dark'])
        self.screen.blit(score_text, (20, 20))

        if snapshot.game_over:
            instruction_text = "Game Over! Press R to restart"
            color = COLORS['game_over']
        else:
            instruction_text = "Use arrow keys to move tiles"
            color = COLORS['text_dark']

        instruction_surface = self.font_small.render(instruction_text, True, color)
        self.screen.blit(instruction_surface, (20, 70))

        restart_text = self.font_small.render("Press R to restart, ESC to quit", True, COLORS['text_dark'])
        self.screen.blit(restart_text, (20, 95))

    def draw_cell(self, snapshot, row, col):
        """draw a single cell of the grid"""
        value = snapshot.values[row][col]

        x = col * (self.cell_size + self.cell_margin) + self.cell_margin
        y = row * (self.cell_size + self.cell_margin) + self.cell_margin + self.header_height

        cell_rect = pygame.Rect(x, y, self.cell_size, self.cell_size)
        pygame.draw.rect(self.screen, get_tile_color(value, snapshot.colors[row][col]), cell_rect, border_radius=8)

        if snapshot.is_last_spawn(row, col):
            pygame.draw.rect(self.screen, COLORS['spawn_outline'], cell_rect, width=3, border_radius=8)

        if value != 0:
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
        """keyboard input, returns False once the player quits"""
        event = KEYMAP.get(key, KeyEvent.OTHER)
        state = self.game.handle(event)
        if event is KeyEvent.RESTART:
            print("Game restarted!")
        return state is not GameState.EXIT

    def run(self):
        """main loop"""
        print("tileslide started!")
        print("Use arrow keys to move tiles")
        print("Press R to restart, ESC to quit")
        print()

        running = True
        try:
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.game.handle(KeyEvent.QUIT)
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        running = self.handle_keypress(event.key)
                    if not running:
                        break

                if not running:
                    break

                self.draw_board(self.game.snapshot())
                pygame.display.flip()
                self.clock.tick(60)
        finally:
            pygame.quit()

        logger.debug("window closed")
        return 0


def main(config=None):
    return GameGUI(config).run()
