from __future__ import annotations


class LLMError(RuntimeError):
    """Any failure on the summary path; callers drop the summary paragraph."""


class LLMConfigurationError(LLMError):
    pass


class SummaryUnavailable(LLMError):
    """The endpoint answered but gave no summary text."""


class LLMProviderError(LLMError):
    def __init__(self, message: str, *, retryable: bool = False, status_code: int | None = None):
        super().__init__(message)
        self.retryable = retryable
        self.status_code = status_code
