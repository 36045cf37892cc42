from __future__ import annotations

import time
from typing import Protocol

from redweekly.llm.errors import LLMProviderError, SummaryUnavailable

SUMMARY_INSTRUCTION = "根据最近一周的工作记录，总结一下本周的工作内容不要超过100字，不要引用原文。下面是最近一周的工作记录："


class ChatProvider(Protocol):
    def complete(self, prompt: str) -> str: ...


def build_summary_prompt(report_text: str) -> str:
    return f"{SUMMARY_INSTRUCTION}\n{report_text}"


class SummaryAnnotator:
    def __init__(
        self,
        provider: ChatProvider,
        *,
        max_retries: int = 2,
        retry_backoff_seconds: float = 0.5,
    ) -> None:
        self.provider = provider
        self.max_retries = max_retries
        self.retry_backoff_seconds = retry_backoff_seconds

    def summarize(self, report_text: str) -> str:
        prompt = build_summary_prompt(report_text)
        attempts = 0
        while True:
            attempts += 1
            try:
                summary = self.provider.complete(prompt).strip()
                break
            except LLMProviderError as exc:
                if not exc.retryable or attempts > self.max_retries:
                    raise
                sleep_for = self.retry_backoff_seconds * (2 ** (attempts - 1))
                if sleep_for > 0:
                    time.sleep(sleep_for)

        if not summary:
            raise SummaryUnavailable("summary model returned no text")
        return summary
