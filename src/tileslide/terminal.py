"""
curses frontend: color palette, key mapping and board rendering
"""
import curses

from tileslide.game import Game, KeyEvent
from tileslide.logging_config import get_logger


logger = get_logger(__name__)

# width of one cell in characters
CELL_WIDTH = 7
GAME_OVER_MESSAGE = "GAME OVER"

RESTART_KEY = 'r'
QUIT_KEY = 'q'

# (foreground, background) per color class, -1 is the terminal default
PALETTE = (
    (curses.COLOR_WHITE, -1),
    (curses.COLOR_GREEN, -1),
    (curses.COLOR_MAGENTA, -1),
    (curses.COLOR_BLUE, -1),
    (curses.COLOR_CYAN, -1),
    (curses.COLOR_YELLOW, -1),
    (curses.COLOR_BLACK, curses.COLOR_WHITE),
    (curses.COLOR_GREEN, curses.COLOR_WHITE),
    (curses.COLOR_MAGENTA, curses.COLOR_WHITE),
    (curses.COLOR_BLUE, curses.COLOR_WHITE),
    (curses.COLOR_CYAN, curses.COLOR_WHITE),
    (curses.COLOR_YELLOW, curses.COLOR_WHITE),
    (curses.COLOR_BLACK, curses.COLOR_YELLOW),
    (curses.COLOR_GREEN, curses.COLOR_YELLOW),
)

KEYMAP = {
    curses.KEY_UP: KeyEvent.UP,
    curses.KEY_DOWN: KeyEvent.DOWN,
    curses.KEY_LEFT: KeyEvent.LEFT,
    curses.KEY_RIGHT: KeyEvent.RIGHT,
    ord(RESTART_KEY): KeyEvent.RESTART,
    ord(QUIT_KEY): KeyEvent.QUIT,
}


def key_to_event(key):
    return KEYMAP.get(key, KeyEvent.OTHER)


def init_palette(palette=PALETTE):
    """
    register one color pair per color class

    pair 0 is reserved by curses, so class i lives in pair i + 1

    returns:
        tuple of curses attributes indexed by color class
    """
    curses.start_color()
    curses.use_default_colors()
    for index, (fg, bg) in enumerate(palette):
        curses.init_pair(index + 1, fg, bg)
    return tuple(curses.color_pair(index + 1) for index in range(len(palette)))


def window_size(height, width):
    """(rows, cols) of the board window: grid, separator, key map, score and border"""
    rows = height + 6
    cols = max(width * CELL_WIDTH + 2, len(GAME_OVER_MESSAGE) + 2, 20)
    return rows, cols


class TerminalRenderer:
    """draws board snapshots into a curses window"""

    def __init__(self, win, attributes, hline=ord('-')):
        self.win = win
        self.attributes = attributes
        self.hline = hline

    @classmethod
    def create(cls, height, width, attributes, hline=ord('-')):
        rows, cols = window_size(height, width)
        return cls(curses.newwin(rows, cols, 0, 0), attributes, hline)

    def cell_attribute(self, snapshot, y, x):
        attr = self.attributes[snapshot.colors[y][x] % len(self.attributes)]
        if snapshot.is_last_spawn(y, x):
            attr |= curses.A_BOLD | curses.A_BLINK
        return attr

    def render(self, snapshot):
        win = self.win
        win.erase()
        win.box()

        for y in range(snapshot.height):
            for x in range(snapshot.width):
                text = str(snapshot.values[y][x])
                pad = (CELL_WIDTH - len(text)) // 2
                win.addstr(y + 1, x * CELL_WIDTH + 1 + max(pad, 0), text,
                           self.cell_attribute(snapshot, y, x))

        line = snapshot.height + 1
        win.hline(line, 1, self.hline, snapshot.width * CELL_WIDTH)

        line += 1
        win.addstr(line, 1, f"{RESTART_KEY}  Restart")
        win.addstr(line + 1, 1, f"{QUIT_KEY}  Quit")
        win.addstr(line + 2, 1, f"Scores: {snapshot.score}")

        if snapshot.game_over:
            _, cols = win.getmaxyx()
            win.addstr(0, max((cols - len(GAME_OVER_MESSAGE)) // 2, 0), GAME_OVER_MESSAGE)

        win.refresh()


def play(stdscr, config=None):
    """curses.wrapper target: one process-long run of the game loop"""
    try:
        curses.curs_set(0)
    except curses.error:
        # some terminals cannot hide the cursor
        pass
    stdscr.keypad(True)
    attributes = init_palette()
    stdscr.refresh()

    game = Game(config)
    renderer = TerminalRenderer.create(game.config.height, game.config.width,
                                       attributes, hline=curses.ACS_HLINE)
    logger.debug("terminal session started")
    return game.run(lambda: key_to_event(stdscr.getch()), renderer.render)


def main(config=None):
    return curses.wrapper(play, config)
