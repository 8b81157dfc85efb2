"""Error kinds raised by the LLM round-trip pipeline."""

from __future__ import annotations


class StudyError(Exception):
    pass


class MissingCredential(StudyError):
    pass


class TransportError(StudyError):
    pass


class RemoteError(StudyError):
    """Non-2xx reply from the chat completion endpoint."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"OpenAI API returned HTTP code {status_code}\nResponse: {body}"
        )


class MalformedResponse(StudyError):
    pass
