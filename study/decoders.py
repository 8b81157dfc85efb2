"""Prompts and decoders: study text -> chat completion -> typed records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final

from study.chat_client import ChatClient
from study.errors import MalformedResponse
from study.json_extract import extract_json_block
from study.models import Definition, Flashcard, FlashcardDeck, SummaryResult


SUMMARY_PROMPT: Final[str] = (
    "\n"
    "You are an AI study assistant.\n"
    "\n"
    "TASK:\n"
    "1. Read the following text.\n"
    "2. Write a concise summary (150–250 words) in simple language.\n"
    "3. List 3–5 key points.\n"
    "4. If there are definitions, include them in your own words.\n"
    "\n"
    "Return ONLY valid JSON with this structure:\n"
    "{\n"
    '  "summary": "string",\n'
    '  "key_points": ["string", "string"],\n'
    '  "definitions": [\n'
    '    {"term": "string", "definition": "string"}\n'
    "  ]\n"
    "}\n"
    "\n"
    "TEXT:\n"
)

FLASHCARD_PROMPT: Final[str] = (
    "\n"
    "You are an AI that creates study flashcards.\n"
    "\n"
    "Given the TEXT below, create 10–20 flashcards that help a student study.\n"
    "\n"
    "Rules:\n"
    "- Questions should be clear and specific.\n"
    "- Answers should be brief (1–3 sentences).\n"
    "- Mix definitions, concepts, and reasoning questions.\n"
    "\n"
    "Return ONLY valid JSON with this structure:\n"
    "{\n"
    '  "flashcards": [\n'
    '    {"question": "string", "answer": "string"}\n'
    "  ]\n"
    "}\n"
    "\n"
    "TEXT:\n"
)


_CONFIG_CACHE: dict[str, Any] | None = None


def _load_config() -> dict[str, Any]:
    """Load prompt overrides from prompts.json if it exists (cached)."""
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    path = Path("prompts.json")
    if not path.exists():
        _CONFIG_CACHE = {}
        return _CONFIG_CACHE
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError):
        data = {}
    _CONFIG_CACHE = data if isinstance(data, dict) else {}
    return _CONFIG_CACHE


def _template(key: str, default: str) -> str:
    value = _load_config().get(key)
    return value if isinstance(value, str) else default


def build_summary_prompt(text: str) -> str:
    return _template("summary_prompt", SUMMARY_PROMPT) + text


def build_flashcard_prompt(text: str) -> str:
    return _template("flashcard_prompt", FLASHCARD_PROMPT) + text


def extract_content(raw_body: str) -> str:
    """
    Return the assistant text from a chat completion envelope.

    Reads choices[0].message.content. A list of content parts is joined
    from each part's string `text` field; other parts are skipped.

    Raises: MalformedResponse for any other envelope shape.
    """
    try:
        envelope = json.loads(raw_body)
    except (json.JSONDecodeError, RecursionError) as e:
        raise MalformedResponse(f"Response body is not valid JSON: {e}") from e

    try:
        content = envelope["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponse(
            "Response is missing choices[0].message.content"
        ) from e

    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            part["text"]
            for part in content
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
    raise MalformedResponse("Unexpected content format in OpenAI response.")


def _parse_payload(raw_body: str) -> dict[str, Any]:
    """Envelope -> content -> brace-delimited block -> JSON object."""
    block = extract_json_block(extract_content(raw_body))
    try:
        payload = json.loads(block)
    except (json.JSONDecodeError, RecursionError) as e:
        raise MalformedResponse(f"Assistant JSON could not be parsed: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedResponse("Assistant JSON is not an object.")
    return payload


def _str_field(obj: dict[str, Any], key: str) -> str:
    value = obj.get(key)
    return value if isinstance(value, str) else ""


def _list_field(obj: dict[str, Any], key: str) -> list[Any]:
    value = obj.get(key)
    return value if isinstance(value, list) else []


def decode_summary(raw_body: str) -> SummaryResult:
    """Decode a chat completion body into a SummaryResult, defaulting missing fields."""
    payload = _parse_payload(raw_body)
    key_points = tuple(kp for kp in _list_field(payload, "key_points") if isinstance(kp, str))
    definitions = tuple(
        Definition(term=_str_field(d, "term"), definition=_str_field(d, "definition"))
        for d in _list_field(payload, "definitions")
        if isinstance(d, dict)
    )
    return SummaryResult(
        summary=_str_field(payload, "summary"),
        key_points=key_points,
        definitions=definitions,
    )


def decode_flashcards(raw_body: str) -> FlashcardDeck:
    """Decode a chat completion body into a FlashcardDeck of any size."""
    payload = _parse_payload(raw_body)
    cards = tuple(
        Flashcard(question=_str_field(fc, "question"), answer=_str_field(fc, "answer"))
        for fc in _list_field(payload, "flashcards")
        if isinstance(fc, dict)
    )
    return FlashcardDeck(cards=cards)


def summarize_content(text: str, client: ChatClient | None = None) -> SummaryResult:
    """
    Ask the model for a summary, key points and definitions of `text`.

    Raises: StudyError subclasses from the chat client or the decoder.
    """
    client = client or ChatClient()
    raw = client.call(build_summary_prompt(text))
    return decode_summary(raw)


def generate_flashcards(text: str, client: ChatClient | None = None) -> FlashcardDeck:
    """Ask the model for question/answer flashcards covering `text`."""
    client = client or ChatClient()
    raw = client.call(build_flashcard_prompt(text))
    return decode_flashcards(raw)
