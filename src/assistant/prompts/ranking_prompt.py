from typing import Dict, List

from ..models import GuessPayload


_MARKS: Dict[str, str] = {"correct": "G", "misplaced": "Y", "wrong": "X"}


def format_guess(entry: GuessPayload) -> str:
    """Format one guess as `WORD  G Y X X G  (correct, misplaced, ...)`."""
    marks = " ".join(_MARKS[m] for m in entry.mask)
    return f"{entry.word.upper()}  {marks}  ({', '.join(entry.mask)})"


def format_letter_summary(history: List[GuessPayload]) -> str:
    """Summarize which letters are known placed, present, or excluded."""
    placed: Dict[int, str] = {}
    present = set()
    excluded = set()

    for entry in history:
        for i, (letter, mark) in enumerate(zip(entry.word.upper(), entry.mask)):
            if mark == "correct":
                placed[i] = letter
            elif mark == "misplaced":
                present.add(letter)

    # A letter is only excluded if no guess ever marked it correct or misplaced
    known = set(placed.values()) | present
    for entry in history:
        for letter, mark in zip(entry.word.upper(), entry.mask):
            if mark == "wrong" and letter not in known:
                excluded.add(letter)

    pattern = "".join(placed.get(i, "_") for i in range(5))
    lines = [f"- Pattern: {pattern}"]
    if present:
        lines.append(f"- In the word, position unknown: {' '.join(sorted(present))}")
    if excluded:
        lines.append(f"- Not in the word: {' '.join(sorted(excluded))}")
    return "\n".join(lines)


def build_ranking_prompt(history: List[GuessPayload], max_suggestions: int) -> str:
    """
    Build the user prompt asking for the next guesses.

    Args:
        history: Every committed guess so far, in order
        max_suggestions: How many suggestions to ask for

    Returns:
        Formatted prompt string
    """
    lines = []

    if not history:
        lines.append("## New puzzle")
        lines.append("No guesses yet.")
        lines.append("")
    else:
        lines.append(f"## Guesses so far ({len(history)})")
        for i, entry in enumerate(history, start=1):
            lines.append(f"{i}. {format_guess(entry)}")
        lines.append("")

        lines.append("### What we know")
        lines.append(format_letter_summary(history))
        lines.append("")

    lines.append(f"Suggest up to {max_suggestions} next guesses, best first.")
    lines.append("Respond with a <suggestions> tag.")

    return "\n".join(lines)
