"""Translation between grid rows and the engine's request encoding."""

from typing import Dict, List

from ..grid.models import WORD_LENGTH, CellColor, CommittedRow
from .errors import InternalInvariantViolation
from .models import GuessPayload, WireColor


# Canonical mapping, case-sensitive on the wire. EMPTY has no wire form.
WIRE_COLORS: Dict[CellColor, WireColor] = {
    CellColor.CORRECT: "correct",
    CellColor.MISPLACED: "misplaced",
    CellColor.WRONG: "wrong",
}

_FROM_WIRE: Dict[str, CellColor] = {wire: color for color, wire in WIRE_COLORS.items()}


def encode_row(row: CommittedRow) -> GuessPayload:
    """
    Encode one committed row as a request entry.

    Args:
        row: A committed row from history

    Returns:
        GuessPayload with the lower-cased word and its positional mask

    Raises:
        InternalInvariantViolation: If the row has a blank letter or an EMPTY color
    """
    if len(row.cells) != WORD_LENGTH:
        raise InternalInvariantViolation(
            f"Committed row has {len(row.cells)} cells, expected {WORD_LENGTH}"
        )

    letters: List[str] = []
    mask: List[WireColor] = []
    for i, cell in enumerate(row.cells):
        if cell.letter is None:
            raise InternalInvariantViolation(f"Committed row has a blank letter at slot {i}")
        if cell.color not in WIRE_COLORS:
            raise InternalInvariantViolation(
                f"Committed row '{row.word}' has {cell.color.value} color at slot {i}"
            )
        letters.append(cell.letter.lower())
        mask.append(WIRE_COLORS[cell.color])

    return GuessPayload(word="".join(letters), mask=mask)


def encode_history(history: List[CommittedRow]) -> List[GuessPayload]:
    """Encode the full history in guess order. The whole list is sent on every call."""
    return [encode_row(row) for row in history]


def decode_mask(mask: List[str]) -> List[CellColor]:
    """
    Map a wire mask back to cell colors.

    Raises:
        ValueError: If an entry is not one of the wire color names
    """
    colors = []
    for entry in mask:
        if entry not in _FROM_WIRE:
            raise ValueError(f"Unknown feedback color on the wire: {entry!r}")
        colors.append(_FROM_WIRE[entry])
    return colors


def decode_payload(payload: GuessPayload) -> CommittedRow:
    """Rebuild a committed row from a request entry (used when resuming a session)."""
    return CommittedRow.from_word(payload.word.upper(), decode_mask(payload.mask))
