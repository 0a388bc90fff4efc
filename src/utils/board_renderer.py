from typing import Dict, List, Optional

from ..grid import CellColor, Cell, GuessRow
from ..assistant import PuzzleAssistant, Suggestion

# ANSI backgrounds matching the game's tiles
_BACKGROUND: Dict[CellColor, str] = {
    CellColor.CORRECT: "\u001b[42m",    # green
    CellColor.MISPLACED: "\u001b[43m",  # yellow
    CellColor.WRONG: "\u001b[100m",     # gray
}
_MARK: Dict[CellColor, str] = {
    CellColor.CORRECT: "G",
    CellColor.MISPLACED: "Y",
    CellColor.WRONG: "X",
    CellColor.EMPTY: ".",
}
_RESET = "\u001b[0m"


def render_cell(cell: Cell, color: bool = True) -> str:
    """Render one cell as a 3-character tile."""
    letter = cell.letter or "_"
    if color and cell.color in _BACKGROUND:
        return f"{_BACKGROUND[cell.color]} {letter} {_RESET}"
    return f" {letter} "


def render_row(row: GuessRow, color: bool = True) -> str:
    """Render a row of tiles followed by its feedback marks."""
    tiles = "".join(render_cell(c, color) for c in row.cells)
    marks = "".join(_MARK[c.color] for c in row.cells)
    return f"{tiles}   {marks}"


def render_suggestions(suggestions: List[Suggestion], limit: int) -> str:
    """Render the ranked suggestions, best first."""
    if not suggestions:
        return "(no suggestions)"
    lines = []
    for i, s in enumerate(suggestions[:limit], start=1):
        lines.append(f"{i:>2}. {s.word.upper()}  {s.score:.3f}")
    if len(suggestions) > limit:
        lines.append(f"    ... and {len(suggestions) - limit} more")
    return "\n".join(lines)


def render_board(assistant: PuzzleAssistant, color: bool = True, max_rows: Optional[int] = None) -> str:
    """
    Render the whole session: history, the in-progress row, padding rows,
    suggestions and the current message.

    Args:
        assistant: The session to render
        color: Use ANSI backgrounds for feedback colors
        max_rows: Minimum number of rows to draw (defaults to config.max_rows)

    Returns:
        Multi-line string ready to print
    """
    max_rows = max_rows or assistant.config.max_rows
    history = assistant.history

    lines = ["=" * 24]
    for row in history:
        lines.append(render_row(row, color))

    # In-progress row is marked with an arrow
    lines.append(f"{render_row(assistant.current, color)}  <")

    for _ in range(max_rows - len(history) - 1):
        lines.append(render_row(GuessRow(), color))
    lines.append("=" * 24)

    status = assistant.grid.phase.value
    if assistant.pending:
        status += " (waiting for engine...)"
    lines.append(f"Status: {status}")

    if assistant.message:
        lines.append(f"! {assistant.message}")

    lines.append("")
    lines.append("Suggestions:")
    lines.append(render_suggestions(assistant.suggestions, assistant.config.max_suggestions))

    return "\n".join(lines)
