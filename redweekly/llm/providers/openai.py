from __future__ import annotations

from typing import Any

import httpx

from redweekly.llm.errors import LLMConfigurationError, LLMProviderError

SYSTEM_PROMPT = "You are a helpful assistant."


class OpenAIChatProvider:
    """Single-turn client for an OpenAI-compatible chat completions URL."""

    def __init__(
        self,
        *,
        endpoint: str | None,
        api_key: str | None,
        model_name: str | None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.endpoint = endpoint or ""
        self.api_key = api_key or ""
        self.model_name = model_name or ""
        self.timeout_seconds = timeout_seconds

    def complete(self, prompt: str) -> str:
        if not (self.endpoint and self.api_key and self.model_name):
            raise LLMConfigurationError("summary endpoint, API key and model must all be configured")

        body = {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        }
        return first_choice_text(self._post_json(body))

    def _post_json(self, body: dict[str, Any]) -> dict[str, Any]:
        try:
            with httpx.Client(timeout=self.timeout_seconds) as client:
                response = client.post(
                    self.endpoint,
                    json=body,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.TimeoutException as exc:
            raise LLMProviderError("summary request timed out", retryable=True) from exc
        except httpx.HTTPError as exc:
            raise LLMProviderError(f"summary request failed: {exc}", retryable=True) from exc

        status = response.status_code
        if status >= 400:
            # Rate limits and server errors are worth another attempt; the rest are not.
            raise LLMProviderError(
                f"summary endpoint answered {status}: {response.text[:200]}",
                retryable=status == 429 or status >= 500,
                status_code=status,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise LLMProviderError("summary response was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise LLMProviderError("summary response must be a JSON object")
        return payload


def first_choice_text(payload: dict[str, Any]) -> str:
    """``choices[0].message.content`` when it is a string, else ``""``."""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message")
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""
