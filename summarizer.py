"""
Summarizers - produce a short plain-language summary of a project.

The service treats every summarizer as unreliable: failures and slow
responses never block a write.
"""

from abc import ABC, abstractmethod
from typing import Optional

from config import SUMMARY_MODEL, get_client
from errors import EnrichmentError
from logging_config import get_logger
from models import ProjectRecord

logger = get_logger(__name__)

SUMMARY_PROMPT = """Summarize this academic research project in 2-3 sentences for a general audience.
State what problem it addresses and how. Do not invent results.

Title: {title}
Year: {year}
Description: {description}"""


class Summarizer(ABC):
    """Abstract summarizer."""

    @abstractmethod
    def summarize(self, record: ProjectRecord) -> Optional[str]:
        """Summary text, or None when nothing useful was produced."""
        pass


class LLMSummarizer(Summarizer):
    """Summarizes through a chat-completion API ("provider/model" key)."""

    def __init__(self, model_key: str = None, max_tokens: int = 200):
        self.model_key = model_key or SUMMARY_MODEL
        self.max_tokens = max_tokens

    def summarize(self, record: ProjectRecord) -> Optional[str]:
        client, cfg = get_client(self.model_key)
        prompt = SUMMARY_PROMPT.format(
            title=record.title,
            year=record.year,
            description=record.description,
        )

        try:
            resp = client.chat.completions.create(
                model=cfg["model"],
                messages=[{"role": "user", "content": prompt}],
                temperature=cfg["temperature"],
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            raise EnrichmentError(f"{self.model_key} request failed: {e}") from e

        text = (resp.choices[0].message.content or "").strip()
        return text or None


class StaticSummarizer(Summarizer):
    """Returns a fixed summary. For tests and offline runs."""

    def __init__(self, text: Optional[str] = None):
        self.text = text
        self.calls = 0

    def summarize(self, record: ProjectRecord) -> Optional[str]:
        self.calls += 1
        return self.text
