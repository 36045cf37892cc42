from __future__ import annotations

from redweekly.llm.providers.openai import OpenAIChatProvider
from redweekly.llm.summary import SummaryAnnotator

__all__ = ["OpenAIChatProvider", "SummaryAnnotator"]
