"""Guess grid: cells, rows and the grid state machine."""

from .models import (
    WORD_LENGTH,
    CellColor,
    GridPhase,
    ErrorCode,
    AssistantError,
    Cell,
    GuessRow,
    CommittedRow,
)
from .cycle import COLOR_CYCLE, next_color, steps_to
from .state import GridStateMachine

__all__ = [
    # Models
    "WORD_LENGTH",
    "CellColor",
    "GridPhase",
    "ErrorCode",
    "AssistantError",
    "Cell",
    "GuessRow",
    "CommittedRow",
    # Color cycling
    "COLOR_CYCLE",
    "next_color",
    "steps_to",
    # State machine
    "GridStateMachine",
]
