"""Click-driven feedback color cycling."""

from typing import List

from .models import CellColor


# Fixed cyclic order; WRONG wraps back to EMPTY
COLOR_CYCLE: List[CellColor] = [
    CellColor.EMPTY,
    CellColor.CORRECT,
    CellColor.MISPLACED,
    CellColor.WRONG,
]


def next_color(color: CellColor) -> CellColor:
    """
    Advance a color one step in the feedback cycle.

    EMPTY -> CORRECT -> MISPLACED -> WRONG -> EMPTY -> ...

    Applying it len(COLOR_CYCLE) times returns the original color.

    Args:
        color: The current color of the cell

    Returns:
        The next color in the cycle
    """
    idx = COLOR_CYCLE.index(color)
    return COLOR_CYCLE[(idx + 1) % len(COLOR_CYCLE)]


def steps_to(current: CellColor, target: CellColor) -> int:
    """Number of clicks needed to move a cell from `current` to `target`."""
    return (COLOR_CYCLE.index(target) - COLOR_CYCLE.index(current)) % len(COLOR_CYCLE)
