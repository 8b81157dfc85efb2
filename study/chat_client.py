"""Chat client: one request/response against the OpenAI chat completions API."""

from __future__ import annotations

import os
from typing import Final

import httpx
from openai import APIConnectionError, APIStatusError, DefaultHttpxClient, OpenAI

from study.errors import MissingCredential, RemoteError, TransportError


DEFAULT_MODEL: Final[str] = "gpt-4.1-mini"
DEFAULT_BASE_URL: Final[str] = "https://api.openai.com/v1"


def build_request_body(model: str, prompt: str) -> dict:
    """Request body for a single-turn completion."""
    return {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
    }


class ChatClient:
    """
    Issues a chat completion and returns the raw response body.

    Configuration is read from the environment at call time unless given
    explicitly:
        OPENAI_API_KEY   -> required
        OPENAI_MODEL     -> default: gpt-4.1-mini
        OPENAI_BASE_URL  -> default: https://api.openai.com/v1

    `transport` replaces the network layer (tests pass an httpx.MockTransport).
    """

    def __init__(
        self,
        model: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.model = model
        self.base_url = base_url
        self.api_key = api_key
        self.transport = transport

    def _resolve_api_key(self) -> str:
        key = self.api_key or os.environ.get("OPENAI_API_KEY")
        if not key:
            raise MissingCredential("OPENAI_API_KEY environment variable not set.")
        return key

    def _open(self, api_key: str) -> OpenAI:
        base_url = self.base_url or os.environ.get("OPENAI_BASE_URL") or DEFAULT_BASE_URL
        http_client = None
        if self.transport is not None:
            http_client = DefaultHttpxClient(transport=self.transport)
        # Retries are left to the caller; a failed request surfaces immediately.
        return OpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            http_client=http_client,
        )

    def call(self, prompt: str) -> str:
        """
        Send `prompt` as a single user message and return the body verbatim.

        Raises:
            MissingCredential: no API key configured
            TransportError: the request failed before a response arrived
            RemoteError: the response status was outside [200, 300)
        """
        api_key = self._resolve_api_key()
        model = self.model or os.environ.get("OPENAI_MODEL") or DEFAULT_MODEL
        body = build_request_body(model, prompt)

        with self._open(api_key) as client:
            try:
                resp = client.chat.completions.with_raw_response.create(**body)
            except APIStatusError as e:
                raise RemoteError(e.status_code, e.response.text) from e
            except APIConnectionError as e:
                cause = e.__cause__
                msg = str(cause).strip() if cause is not None else ""
                raise TransportError(msg or str(e)) from e
            return resp.http_response.text
