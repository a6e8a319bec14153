"""
Terminal display for watching the solver play.

Draws a bordered frame once, then updates single cells in place with
ANSI cursor movement and 24-bit colours.
"""
import sys
from typing import Dict, Optional, TextIO, Tuple

import numpy as np


Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
MINE_COLOR: Color = (0, 255, 0)

# Pale yellow through red as the count grows
COUNT_COLORS: Dict[int, Color] = {
    1: (221, 208, 122),
    2: (224, 177, 89),
    3: (226, 161, 70),
    4: (229, 129, 48),
    5: (232, 102, 32),
    6: (234, 69, 18),
    7: (247, 25, 4),
    8: (255, 0, 0),
}


# ============================================================================
# Terminal Display
# ============================================================================

class TerminalDisplay:
    """
    Live ANSI view of a board, updated as the solver commits cells.

    Implements the solver's cell observer interface; it only writes
    to its stream and never feeds anything back.
    """

    def __init__(
        self, width: int, height: int, stream: Optional[TextIO] = None
    ) -> None:
        """
        Initialize the display.

        Args:
            width: Board width in cells.
            height: Board height in cells.
            stream: Output stream (default: stdout).
        """
        self.width = width
        self.height = height
        self.stream = stream or sys.stdout

    def start(self) -> None:
        """Clear to the top-left corner and draw the empty frame."""
        edge = "+-" + "--" * self.width + "+\n"
        row = "| " + "  " * self.width + "|\n"
        self.stream.write("\x1b[0;0H" + edge + row * self.height + edge)
        self.stream.flush()

    def on_cell_resolved(self, x: int, y: int, count: Optional[int]) -> None:
        """Draw a committed cell; count is None for a mine."""
        if count is None:
            color, text = MINE_COLOR, "* "
        elif count == 0:
            color, text = WHITE, "_ "
        else:
            color, text = COUNT_COLORS.get(count, WHITE), f"{count} "

        self.stream.write(
            f"\x1b[{y + 2};{x * 2 + 2}H{_set_color(color)}{text}"
            f"{_set_color(WHITE)}"
        )
        self.reset_cursor()

    def reset_cursor(self) -> None:
        """Park the cursor below the frame."""
        self.stream.write(f"\x1b[{self.height + 2};0H\n")
        self.stream.flush()


def _set_color(color: Color) -> str:
    red, green, blue = color
    return f"\x1b[38;2;{red};{green};{blue}m"


# ============================================================================
# Plain Text Rendering
# ============================================================================

def render_text(observation: np.ndarray) -> str:
    """
    Render an observation array as plain text.

    Args:
        observation: Array from MineField.get_observation().

    Returns:
        One line per row: '.' hidden, '*' mine, ' ' zero, else the count.
    """
    lines = []
    for row in observation:
        row_str = ""
        for val in row:
            if val == -1:
                row_str += "."
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str)
    return "\n".join(lines)
