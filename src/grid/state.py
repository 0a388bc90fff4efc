import logging
from typing import List, Dict, Optional
from pydantic import BaseModel, Field

from .models import (
    WORD_LENGTH,
    AssistantError,
    Cell,
    CellColor,
    CommittedRow,
    GridPhase,
    GuessRow,
)
from .cycle import next_color


logger = logging.getLogger(__name__)


class GridStateMachine(BaseModel):
    """
    Owns the committed guess history and the single in-progress row.

    Every mutation goes through the methods below; rows and cells are
    replaced rather than edited in place, so the blank-implies-EMPTY rule
    is re-validated on every write.

    Attributes:
        history: Committed rows in guess order (append-only until reset)
        current: The row currently being typed and colored
        phase: Where the machine is in its lifecycle
        error: The local validation error of the last failed submit
    """

    history: List[CommittedRow] = Field(default_factory=list)
    current: GuessRow = Field(default_factory=GuessRow)
    phase: GridPhase = GridPhase.IDLE
    error: Optional[AssistantError] = None

    @staticmethod
    def _check_index(index: int) -> None:
        if not 0 <= index < WORD_LENGTH:
            raise IndexError(f"Slot index {index} out of range [0, {WORD_LENGTH})")

    @staticmethod
    def _normalize(char: Optional[str]) -> Optional[str]:
        """Uppercase a single letter; None, '' and ' ' mean blank."""
        if char is None or char == "" or char == " ":
            return None
        if len(char) != 1 or not (char.isascii() and char.isalpha()):
            raise ValueError(f"Expected a single letter or blank, got {char!r}")
        return char.upper()

    def _replace_cell(self, index: int, cell: Cell) -> None:
        cells = list(self.current.cells)
        cells[index] = cell
        self.current = GuessRow(cells=cells)

    def _after_edit(self) -> None:
        """Phase bookkeeping shared by every in-progress edit."""
        # A pending engine request does not block editing the next row
        if self.phase == GridPhase.SUBMITTING:
            return
        self.error = None
        self.phase = GridPhase.IDLE if self.current.is_blank else GridPhase.EDITING

    def set_letter(self, index: int, char: Optional[str]) -> None:
        """
        Write a letter (or a blank) into a slot of the in-progress row.

        The slot's color always restarts at EMPTY; a new letter has to be
        marked again.

        Args:
            index: Slot index in [0, 5)
            char: A single alphabetic character, or None/'' for blank

        Raises:
            IndexError: If index is outside the row
            ValueError: If char is not a single letter or blank
        """
        self._check_index(index)
        letter = self._normalize(char)
        self._replace_cell(index, Cell(letter=letter, color=CellColor.EMPTY))
        self._after_edit()

    def cycle_color(self, index: int) -> None:
        """Advance a slot's color one step. No-op on a blank slot."""
        self._check_index(index)
        cell = self.current.cells[index]
        if cell.is_blank:
            return
        self._replace_cell(index, Cell(letter=cell.letter, color=next_color(cell.color)))
        self._after_edit()

    def type_letter(self, char: str) -> None:
        """Write into the first blank slot; ignored when the row is full."""
        for i, cell in enumerate(self.current.cells):
            if cell.is_blank:
                self.set_letter(i, char)
                return

    def backspace(self) -> None:
        """Blank the last non-blank slot."""
        for i in range(WORD_LENGTH - 1, -1, -1):
            if not self.current.cells[i].is_blank:
                self.set_letter(i, None)
                return

    def enter_text(self, text: str) -> None:
        """
        Replace the row from a text value, as a single input box would.

        Characters past the fifth are dropped and slots past the end of the
        text become blank. Slots whose letter does not change keep their color.

        Raises:
            ValueError: If text contains anything but letters (row untouched)
        """
        text = text[:WORD_LENGTH]
        letters = [self._normalize(ch) for ch in text]
        if any(letter is None for letter in letters):
            raise ValueError(f"Expected only letters, got {text!r}")
        letters.extend([None] * (WORD_LENGTH - len(letters)))

        for i, letter in enumerate(letters):
            if self.current.cells[i].letter != letter:
                self.set_letter(i, letter)

    def submit(self) -> Optional[AssistantError]:
        """
        Validate the in-progress row and promote it into history.

        Checks run in order and the first failure wins. On failure nothing
        but the phase and error change.

        Returns:
            The validation error if the submit was rejected, None if the
            row was committed
        """
        error = None
        if self.current.letter_count != WORD_LENGTH:
            error = AssistantError(
                code="incomplete_word",
                message=(
                    f"Not enough letters: {self.current.letter_count}/{WORD_LENGTH}"
                ),
            )
        elif any(c == CellColor.EMPTY for c in self.current.colors):
            missing = [i + 1 for i, c in enumerate(self.current.colors) if c == CellColor.EMPTY]
            error = AssistantError(
                code="incomplete_feedback",
                message=f"Mark a color for every letter (missing: {missing})",
            )

        if error is not None:
            self.error = error
            self.phase = GridPhase.ERROR
            logger.debug("Submit rejected: %s", error.code)
            return error

        row = CommittedRow(cells=[c.model_copy() for c in self.current.cells])
        self.history.append(row)
        self.current = GuessRow()
        self.error = None
        self.phase = GridPhase.SUBMITTING
        logger.debug("Committed %s (%d rows)", row.word, len(self.history))
        return None

    def settle(self) -> None:
        """
        Apply the end of the latest engine request.

        The engine outcome replaces any local validation error raised while
        the request was in flight, so ERROR is left as well as SUBMITTING.
        """
        if self.phase in (GridPhase.SUBMITTING, GridPhase.ERROR):
            self.error = None
            self.phase = GridPhase.IDLE if self.current.is_blank else GridPhase.EDITING

    def reset(self) -> None:
        """Clear history and the in-progress row unconditionally."""
        self.history = []
        self.current = GuessRow()
        self.error = None
        self.phase = GridPhase.IDLE
        logger.debug("Grid reset")

    def load_history(self, rows: List[CommittedRow]) -> None:
        """Start over from a previously committed history."""
        self.reset()
        self.history = list(rows)

    def get_history(self) -> List[CommittedRow]:
        """Get a copy of the committed history."""
        return self.history.copy()

    def get_state(self) -> Dict:
        """
        Get the current grid state as a dictionary.

        Returns:
            Dictionary containing grid state
        """
        return {
            "phase": self.phase.value,
            "history": [
                {"word": row.word, "colors": [c.value for c in row.colors]}
                for row in self.history
            ],
            "current": {
                "letters": [c.letter for c in self.current.cells],
                "colors": [c.value for c in self.current.colors],
            },
            "error": self.error.message if self.error else None,
        }
