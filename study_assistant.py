#!/usr/bin/env python3
"""
Terminal AI study assistant: summaries and flashcards for pasted study text.

Behavior:
- Asks whether you want a summary, flashcards, or both.
- Reads study text from stdin (end a line with '\\' to continue on the next one).
- Summarizes via the OpenAI chat completions API and prints the result.
- Generates flashcards and opens an interactive viewer in the terminal.

Usage:
  python study_assistant.py
  python study_assistant.py --choice 2          # skip the menu, flashcards only
  python study_assistant.py --model gpt-4.1     # override the model

Required env vars:
  OPENAI_API_KEY          -> API key for the LLM provider

Optional env vars:
  OPENAI_MODEL            -> default: gpt-4.1-mini
  OPENAI_BASE_URL         -> API base URL (default: https://api.openai.com/v1)
  AI_STUDY_DEBUG_TRACE    -> print tracebacks for errors
"""

from __future__ import annotations

import argparse
import os
import re
import sys
import traceback
from pathlib import Path
from typing import TextIO

from dotenv import load_dotenv

from study.chat_client import ChatClient
from study.decoders import generate_flashcards, summarize_content
from study.models import SummaryResult
from study.viewer import view

# Load environment variables from root .env if it exists
load_dotenv(Path(__file__).parent / ".env")


CHOICE_SUMMARY = 1
CHOICE_FLASHCARDS = 2
CHOICE_BOTH = 3


def _truthy_env(name: str) -> bool:
    v = os.environ.get(name, "").strip().lower()
    return v not in {"", "0", "false", "no", "off"}


def _read_line(stream: TextIO) -> str | None:
    """Read one line without its newline; None at end of input."""
    line = stream.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def parse_choice(raw: str | None) -> int:
    """Leading integer of the menu answer; anything else means 'both'."""
    if raw is None:
        return CHOICE_BOTH
    m = re.match(r"\s*([+-]?\d+)", raw)
    if not m:
        return CHOICE_BOTH
    choice = int(m.group(1))
    if choice not in (CHOICE_SUMMARY, CHOICE_FLASHCARDS, CHOICE_BOTH):
        return CHOICE_BOTH
    return choice


def read_choice(stdin: TextIO, stdout: TextIO) -> int:
    stdout.write("What do you want?\n")
    stdout.write("1 = Summary only\n")
    stdout.write("2 = Flashcards only\n")
    stdout.write("3 = Both summary + flashcards\n")
    stdout.write("Enter choice (1/2/3): ")
    stdout.flush()
    return parse_choice(_read_line(stdin))


def read_study_text(stdin: TextIO, stdout: TextIO, stderr: TextIO) -> str | None:
    """
    Read pasted study text.

    A line ending in '\\' continues on the next line; an empty line or end of
    input stops the continuation. Returns None (after telling the user) when
    nothing was entered.
    """
    stdout.write("\nPaste your study text below.\n")
    stdout.write("When you're done, press Enter on an empty line to finish input.\n")
    stdout.write("Then press Enter.\n\n")
    stdout.flush()

    line = _read_line(stdin)
    if line is None:
        stderr.write("No input detected. Exiting.\n")
        return None
    if not line:
        stderr.write("No text entered. Exiting.\n")
        return None

    text = line
    while text.endswith("\\"):
        text = text[:-1] + "\n"
        line = _read_line(stdin)
        if not line:
            break
        text += line

    if not text:
        stderr.write("No text entered. Exiting.\n")
        return None
    return text


def format_summary(result: SummaryResult) -> str:
    """Render a summary, its key points and definitions for the terminal."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== SUMMARY ===")
    lines.append(result.summary)
    lines.append("")
    lines.append("Key points:")
    for kp in result.key_points:
        lines.append(f"- {kp}")
    lines.append("")
    lines.append("Definitions:")
    for d in result.definitions:
        lines.append(f"{d.term}: {d.definition}")
    return "\n".join(lines) + "\n"


def _report_error(e: Exception, stderr: TextIO) -> None:
    stderr.write(f"Error: {e}\n")
    if _truthy_env("AI_STUDY_DEBUG_TRACE"):
        stderr.write(traceback.format_exc())


def run(
    choice: int,
    text: str,
    client: ChatClient,
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
) -> None:
    """Summary first, then flashcards, as selected by `choice`."""
    if choice in (CHOICE_SUMMARY, CHOICE_BOTH):
        stderr.write("[INFO] Summarizing...\n")
        summary = summarize_content(text, client=client)
        stdout.write(format_summary(summary))
        stdout.flush()

    if choice in (CHOICE_FLASHCARDS, CHOICE_BOTH):
        stderr.write("[INFO] Generating flashcards...\n")
        deck = generate_flashcards(text, client=client)
        view(deck, stdin=stdin, stdout=stdout)


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    client: ChatClient | None = None,
) -> int:
    """Main entry point."""
    ap = argparse.ArgumentParser(description="Summarize study text and review it with flashcards")
    ap.add_argument(
        "--choice",
        type=int,
        choices=[CHOICE_SUMMARY, CHOICE_FLASHCARDS, CHOICE_BOTH],
        default=None,
        help="1 = summary, 2 = flashcards, 3 = both (default: ask)",
    )
    ap.add_argument(
        "--model",
        type=str,
        default=None,
        help="Chat model to use (default: $OPENAI_MODEL or gpt-4.1-mini)",
    )
    args = ap.parse_args(argv)

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    client = client or ChatClient(model=args.model)

    try:
        choice = args.choice if args.choice is not None else read_choice(stdin, stdout)
        text = read_study_text(stdin, stdout, stderr)
        if text is None:
            return 0
        run(choice, text, client, stdin, stdout, stderr)
    except Exception as e:
        _report_error(e, stderr)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
