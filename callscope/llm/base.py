"""
callscope/llm/base.py
Abstract base class for all insight-generation backends.
To add a new backend: subclass InsightAdapter and implement generate().
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from callscope.models.record import CallRecord

# Only the first N calls are sent to the model
INSIGHT_RECORD_LIMIT = 50

SYSTEM_INSTRUCTION = (
    "You are a senior telecommunications analyst. "
    "Provide concise, data-driven insights based on the provided logs."
)

INSTRUCTION_PREAMBLE = (
    "Analyze these call logs and provide a brief professional summary "
    "(3-4 bullet points) of patterns like peak call times, frequent contacts, "
    "or average call efficiency. Use Markdown."
)


class InsightAdapter(ABC):
    """
    All text-generation backends implement this interface.
    callscope calls generate() and gets back a string or None.
    The caller never knows which backend is running.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Returns True if the backend is reachable and ready."""
        ...

    @abstractmethod
    def generate(self, prompt: str) -> Optional[str]:
        """
        Generate a natural-language summary for the prompt.
        Returns None on failure. Never raises — catch internally and return None.
        """
        ...

    def build_prompt(
        self,
        calls: Sequence[CallRecord],
        limit: int = INSIGHT_RECORD_LIMIT,
    ) -> str:
        """
        Shared prompt builder. Renders at most `limit` calls, one per line,
        after the fixed instruction preamble.
        """
        return f"{INSTRUCTION_PREAMBLE}\n\n{format_call_lines(calls, limit)}"


def format_call_lines(calls: Sequence[CallRecord], limit: int = INSIGHT_RECORD_LIMIT) -> str:
    return '\n'.join(
        f"Num: {c.number}, Time: {c.timestamp}, Dur: {c.duration_formatted}"
        for c in list(calls)[:max(limit, 0)]
    )
