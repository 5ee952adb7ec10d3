"""
callscope/aggregators/call_aggregator.py
Call-level aggregation.

Derives summary totals, the top contacts ranking and the
connected/missed split from a parsed call list. Every function is
pure: same input list, same output, input never mutated.

NOTE ON RANKING TIES:
  Numbers are folded into an insertion-ordered dict, then sorted with
  Python's stable sort on talk time. Equal talk time keeps the order in
  which each number first appeared in the log.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from callscope.models.record import CallRecord, NumberStats, StatusSlice, SummaryStats
from callscope.parsers.log_parser import format_seconds

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5


def summarize(records: Sequence[CallRecord]) -> SummaryStats:
    """Totals over the full call list. Empty list → zero-valued stats."""
    total_dials   = len(records)
    total_seconds = sum(r.duration_seconds for r in records)
    connected     = sum(1 for r in records if r.duration_seconds > 0)

    return SummaryStats(
        total_dials         = total_dials,
        total_talk_seconds  = total_seconds,
        formatted_talk_time = format_seconds(total_seconds),
        unique_numbers      = len({r.number for r in records}),
        connected_calls     = connected,
        missed_calls        = total_dials - connected,
    )


def top_contacts(records: Sequence[CallRecord], n: int = DEFAULT_TOP_N) -> List[NumberStats]:
    """
    Rank numbers by summed talk time, descending, and keep the first n.

    Returns fewer than n entries when fewer distinct numbers exist.
    """
    if n <= 0:
        return []

    # ── STEP 1: fold calls by number, first appearance fixes order ──
    dials:     Dict[str, int] = {}
    talk_time: Dict[str, int] = {}
    for call in records:
        dials[call.number]     = dials.get(call.number, 0) + 1
        talk_time[call.number] = talk_time.get(call.number, 0) + call.duration_seconds

    # ── STEP 2: rank ────────────────────────────────────────────────
    stats = [
        NumberStats(
            number              = num,
            dials               = count,
            talk_time           = talk_time[num],
            formatted_talk_time = format_seconds(talk_time[num]),
        )
        for num, count in dials.items()
    ]
    ranked = sorted(stats, key=lambda s: s.talk_time, reverse=True)[:n]
    logger.debug(f"Top contacts: {len(ranked)} of {len(stats)} numbers")
    return ranked


def call_status_split(records: Sequence[CallRecord]) -> List[StatusSlice]:
    """Connected vs missed counts, in that order."""
    stats = summarize(records)
    return [
        StatusSlice(name='Connected', value=stats.connected_calls),
        StatusSlice(name='Missed',    value=stats.missed_calls),
    ]
