"""Data models for the guess grid."""

from enum import Enum
from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator


WORD_LENGTH = 5


class CellColor(str, Enum):
    """Feedback color of a single cell. EMPTY means no feedback assigned yet."""
    CORRECT = "correct"
    MISPLACED = "misplaced"
    WRONG = "wrong"
    EMPTY = "empty"


class GridPhase(str, Enum):
    """Lifecycle phase of the grid state machine."""
    IDLE = "idle"
    EDITING = "editing"
    SUBMITTING = "submitting"
    ERROR = "error"


ErrorCode = Literal[
    "incomplete_word",
    "incomplete_feedback",
    "engine_query_failed",
    "engine_reset_failed",
]


class AssistantError(BaseModel):
    """A recoverable, user-visible error."""
    code: ErrorCode
    message: str


class Cell(BaseModel):
    """One letter slot and its feedback color. Immutable; edits build a new cell."""

    model_config = ConfigDict(frozen=True)

    letter: Optional[str] = Field(None, pattern=r'^[A-Z]$')
    color: CellColor = CellColor.EMPTY

    @model_validator(mode="after")
    def _blank_is_empty(self) -> "Cell":
        # A blank slot never carries feedback
        if self.letter is None and self.color != CellColor.EMPTY:
            raise ValueError("A blank cell must have EMPTY color")
        return self

    @property
    def is_blank(self) -> bool:
        return self.letter is None


def _blank_cells() -> List[Cell]:
    return [Cell() for _ in range(WORD_LENGTH)]


class GuessRow(BaseModel):
    """Exactly five cells: one guess being typed or one committed guess."""

    model_config = ConfigDict(frozen=True)

    cells: List[Cell] = Field(
        default_factory=_blank_cells,
        min_length=WORD_LENGTH,
        max_length=WORD_LENGTH,
    )

    @property
    def word(self) -> str:
        """Letters of the row, with blanks rendered as spaces."""
        return "".join(c.letter or " " for c in self.cells)

    @property
    def colors(self) -> List[CellColor]:
        return [c.color for c in self.cells]

    @property
    def letter_count(self) -> int:
        return sum(1 for c in self.cells if not c.is_blank)

    @property
    def is_blank(self) -> bool:
        return self.letter_count == 0

    @property
    def is_complete(self) -> bool:
        """True when every slot has a letter and a non-EMPTY color."""
        return all(not c.is_blank and c.color != CellColor.EMPTY for c in self.cells)


class CommittedRow(GuessRow):
    """A row promoted into history. Frozen once built."""

    @model_validator(mode="after")
    def _fully_specified(self) -> "CommittedRow":
        if not self.is_complete:
            raise ValueError("Committed rows need five letters and five colors")
        return self

    @classmethod
    def from_word(cls, word: str, colors: List[CellColor]) -> "CommittedRow":
        """Build a committed row from a word and its per-letter colors."""
        if len(word) != WORD_LENGTH or len(colors) != WORD_LENGTH:
            raise ValueError(f"Word and colors must both have length {WORD_LENGTH}")
        return cls(cells=[
            Cell(letter=letter.upper(), color=color)
            for letter, color in zip(word, colors)
        ])
