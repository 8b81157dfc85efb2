"""Data models for the study assistant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Definition:
    """A term and its definition as phrased by the model."""
    term: str = ""
    definition: str = ""


@dataclass(frozen=True)
class SummaryResult:
    """Structured summary of a piece of study text."""
    summary: str = ""
    key_points: tuple[str, ...] = ()
    definitions: tuple[Definition, ...] = ()


@dataclass(frozen=True)
class Flashcard:
    question: str = ""
    answer: str = ""


@dataclass(frozen=True)
class FlashcardDeck:
    """Ordered, read-only collection of flashcards from one generation call."""
    cards: tuple[Flashcard, ...] = ()

    def __len__(self) -> int:
        return len(self.cards)

    def __getitem__(self, index: int) -> Flashcard:
        return self.cards[index]

    def __iter__(self) -> Iterator[Flashcard]:
        return iter(self.cards)


@dataclass(frozen=True)
class ViewerState:
    """Position in a deck and whether the current answer is revealed."""
    index: int = 0
    show_answer: bool = False
