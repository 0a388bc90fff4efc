"""
Main entry point for the interactive Wordle assistant.

Usage:
    python -m src.main
    python -m src.main config.yaml --save sessions/today.json --verbose
    python -m src.main --base-url http://127.0.0.1:8080
    python -m src.main --resume sessions/today.json
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Set

import yaml

from .grid import CellColor, steps_to
from .assistant import AssistantConfig, HTTPEngineConfig, LLMEngineConfig, PuzzleAssistant
from .utils.board_renderer import render_board


HELP = """Commands:
  WORD        type letters into the current row (extra letters are dropped)
  c N [N ..]  cycle the color of slot N (1-5): empty > green > yellow > gray
  m GYXXG     mark all slots at once (G=correct, Y=misplaced, X=wrong)
  -           delete the last letter
  <enter>     submit the row (also: submit)
  reset       start over
  state       print the session state
  help        show this help
  quit        leave"""

_MARK_COLORS: Dict[str, CellColor] = {
    "G": CellColor.CORRECT,
    "Y": CellColor.MISPLACED,
    "X": CellColor.WRONG,
}


def load_config(config_path: str) -> AssistantConfig:
    """Load assistant configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return AssistantConfig(**data)


def apply_command(assistant: PuzzleAssistant, line: str) -> str:
    """
    Apply one line of player input.

    Edits are applied directly; engine-backed actions are returned for the
    caller to schedule.

    Returns:
        One of "edit", "submit", "reset", "state", "help", "quit"

    Raises:
        ValueError: If the input cannot be understood
    """
    cmd = line.strip()
    lowered = cmd.lower()

    if lowered in ("quit", "exit", "q"):
        return "quit"
    if lowered in ("", "submit"):
        return "submit"
    if lowered in ("reset", "state", "help"):
        return lowered
    if cmd == "-":
        assistant.backspace()
        return "edit"

    parts = cmd.split()
    if parts[0].lower() == "c" and len(parts) > 1:
        for part in parts[1:]:
            if not part.isdigit():
                raise ValueError(f"Expected a slot number, got {part!r}")
            assistant.cycle_color(int(part) - 1)
        return "edit"

    if parts[0].lower() == "m" and len(parts) == 2:
        marks = parts[1].upper()
        if len(marks) > 5 or any(m not in _MARK_COLORS for m in marks):
            raise ValueError(f"Marks must be up to 5 of G, Y, X, got {parts[1]!r}")
        for i, mark in enumerate(marks):
            cell = assistant.current.cells[i]
            for _ in range(steps_to(cell.color, _MARK_COLORS[mark])):
                assistant.cycle_color(i)
        return "edit"

    if len(parts) == 1:
        assistant.enter_text(cmd)
        return "edit"

    raise ValueError(f"Unknown command: {cmd!r} (type 'help')")


async def run_session(assistant: PuzzleAssistant, save_path: Optional[Path] = None) -> None:
    """Read commands until the player quits; engine calls run in the background."""
    tasks: Set[asyncio.Task] = set()

    def redraw(a: PuzzleAssistant) -> None:
        print()
        print(render_board(a))

    def spawn(coro) -> None:
        task = asyncio.create_task(coro)
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    assistant.on_update = redraw
    print(HELP)
    await assistant.start()

    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break

        try:
            action = apply_command(assistant, line)
        except (ValueError, IndexError) as e:
            print(f"Invalid input: {e}")
            continue

        if action == "quit":
            break
        if action == "help":
            print(HELP)
            continue
        if action == "state":
            print(assistant.get_state())
            continue

        if action == "submit":
            spawn(assistant.submit())
        elif action == "reset":
            spawn(assistant.reset())

        # Let a new task run its local step before redrawing
        await asyncio.sleep(0)
        print(render_board(assistant))

    if tasks:
        await asyncio.gather(*tasks)

    if save_path:
        assistant.save_session(save_path)
        print(f"Session saved to: {save_path}")


def main():
    parser = argparse.ArgumentParser(
        description="Interactive Wordle assistant backed by a solving engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  max_rows: 6
  max_suggestions: 10
  engine:
    kind: http
    base_url: http://127.0.0.1:8080
    timeout: 10
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults apply without one)"
    )
    parser.add_argument(
        "--base-url",
        help="Override the HTTP engine URL"
    )
    parser.add_argument(
        "--model",
        help="Use a chat model (LiteLLM name) as the engine instead of HTTP"
    )
    parser.add_argument(
        "--resume",
        help="Resume from a saved session JSON file"
    )
    parser.add_argument(
        "--save",
        help="Save the session to this JSON file on exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log engine traffic"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else AssistantConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if args.model:
        config.engine = LLMEngineConfig(model=args.model)
    elif args.base_url:
        if isinstance(config.engine, HTTPEngineConfig):
            config.engine = config.engine.model_copy(update={"base_url": args.base_url})
        else:
            config.engine = HTTPEngineConfig(base_url=args.base_url)

    if args.resume:
        try:
            assistant = PuzzleAssistant.resume(args.resume, config=config)
        except Exception as e:
            print(f"Error resuming from {args.resume}: {e}", file=sys.stderr)
            return 1
        if args.verbose:
            print(f"Resumed {len(assistant.history)} guesses from {args.resume}")
    else:
        assistant = PuzzleAssistant.create(config=config)

    save_path = Path(args.save) if args.save else None

    try:
        asyncio.run(run_session(assistant, save_path))
    except KeyboardInterrupt:
        print("\nInterrupted")
        if save_path:
            assistant.save_session(save_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
