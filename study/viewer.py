"""Interactive terminal flashcard viewer."""

from __future__ import annotations

import random
import re
import sys
from dataclasses import replace
from typing import TextIO

from study.models import Flashcard, FlashcardDeck, ViewerState


CLEAR_SCREEN = "\033[2J\033[H"
COMMANDS_LINE = "Commands: [f]lip  [n]ext  [p]rev  [r]andom  [j]ump <num>  [q]uit"

_INT_RE = re.compile(r"-?\d+")


def render_card(card: Flashcard, state: ViewerState, total: int) -> str:
    """Text shown for the current card (without the clear-screen prefix)."""
    lines = [
        f"Flashcard {state.index + 1}/{total}",
        "-------------------------",
        f"Q: {card.question}",
        "",
    ]
    if state.show_answer:
        lines.append(f"A: {card.answer}")
    else:
        lines.append("A: [hidden] (press 'f' to flip)")
    lines.append("")
    lines.append(COMMANDS_LINE)
    return "\n".join(lines) + "\n"


def is_quit(command: str) -> bool:
    return command in ("q", "quit")


def _is_jump(command: str) -> bool:
    # covers "jump ..." as well as "j 3"; "jx" style lines are jumps with no number
    return len(command) > 2 and command.startswith("j")


def _goto(state: ViewerState, target: int | None, deck_size: int) -> ViewerState:
    """Move to 1-based card `target` if it is in range, else stay put."""
    if target is None or not 1 <= target <= deck_size:
        return state
    return ViewerState(index=target - 1, show_answer=False)


def _jump_target(command: str) -> int | None:
    # "j 3", "jump 5", "j#12": keep digits and minus signs, read the leading integer
    numstr = "".join(c for c in command if c in "0123456789-")
    m = _INT_RE.match(numstr)
    return int(m.group(0)) if m else None


def _number_target(command: str) -> int | None:
    if _INT_RE.fullmatch(command):
        return int(command)
    return None


def apply_command(
    state: ViewerState,
    command: str,
    deck_size: int,
    rng: random.Random,
) -> ViewerState:
    """
    Apply one trimmed command to the viewer state.

    Unknown or malformed commands leave the state unchanged; quitting is
    handled by the caller via is_quit().
    """
    if command in ("f", "flip"):
        return replace(state, show_answer=not state.show_answer)
    if command in ("n", "next"):
        return ViewerState(index=(state.index + 1) % deck_size, show_answer=False)
    if command in ("p", "prev"):
        return ViewerState(index=(state.index - 1 + deck_size) % deck_size, show_answer=False)
    if command in ("r", "random"):
        return ViewerState(index=rng.randrange(deck_size), show_answer=False)
    if _is_jump(command):
        return _goto(state, _jump_target(command), deck_size)
    return _goto(state, _number_target(command), deck_size)


def view(
    deck: FlashcardDeck,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    rng: random.Random | None = None,
) -> ViewerState | None:
    """
    Browse `deck` interactively until 'q'/'quit' or end of input.

    Returns the final state, or None when the deck is empty.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    if len(deck) == 0:
        stdout.write("No flashcards to view.\n")
        return None

    rng = rng or random.Random()
    state = ViewerState()

    while True:
        stdout.write(CLEAR_SCREEN)
        stdout.write(render_card(deck[state.index], state, len(deck)))
        stdout.flush()

        line = stdin.readline()
        if not line:
            break
        command = line.rstrip("\r\n")
        if not command:
            continue
        command = command.lstrip(" \t")

        if is_quit(command):
            break
        state = apply_command(state, command, len(deck), rng)

    stdout.write(CLEAR_SCREEN)
    stdout.flush()
    return state
