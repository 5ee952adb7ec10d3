"""
callscope/insights.py
Hands a bounded slice of parsed calls to an insight backend and
normalizes the outcome.

Fails closed: any backend failure becomes INSIGHT_FAILURE. The parsed
calls and aggregates are never affected. No retry, no timeout here —
those belong to the adapter.
"""

import logging
from typing import Optional, Sequence, TYPE_CHECKING

from callscope.llm.base import INSIGHT_RECORD_LIMIT
from callscope.models.record import CallRecord

if TYPE_CHECKING:
    from callscope.llm.base import InsightAdapter

logger = logging.getLogger(__name__)

INSIGHT_FAILURE = "Failed to generate AI insights."


def get_call_insights(
    calls: Sequence[CallRecord],
    adapter: "InsightAdapter",
    limit: int = INSIGHT_RECORD_LIMIT,
) -> Optional[str]:
    """
    Returns None for an empty call list (nothing to summarize),
    the generated text on success, INSIGHT_FAILURE otherwise.
    """
    if not calls:
        return None

    try:
        prompt = adapter.build_prompt(calls, limit=limit)
        text   = adapter.generate(prompt)
    except Exception as e:
        logger.error(f"Insight generation error: {e}")
        return INSIGHT_FAILURE

    if not text:
        logger.error("Insight backend returned no text")
        return INSIGHT_FAILURE

    logger.info(f"Insight generated from {min(len(calls), limit)} calls")
    return text
