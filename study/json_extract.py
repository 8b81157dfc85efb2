"""Pure helpers for pulling a JSON object out of noisy model output."""

from __future__ import annotations

from study.errors import MalformedResponse


def extract_json_block(content: str) -> str:
    """
    Return the span from the first '{' to the last '}' inclusive.

    Models often wrap JSON in prose ("Sure, here is your JSON:") or in
    ```json fences. The outermost braces are assumed to delimit the payload;
    the result is not validated as JSON here.

    Raises: MalformedResponse if no brace-delimited object is present.
    """
    first = content.find("{")
    last = content.rfind("}")
    if first == -1 or last == -1 or last <= first:
        raise MalformedResponse(
            "Assistant response did not contain a valid JSON object:\n" + content
        )
    return content[first:last + 1]
