"""
callscope — call log parsing and analytics.

Core entry points are pure functions over immutable records:
  parse_raw_logs(raw) → List[CallRecord]
  summarize(records)  → SummaryStats
  top_contacts(records, n=5) → List[NumberStats]
"""

__version__ = "1.0.0"

from callscope.aggregators.call_aggregator import call_status_split, summarize, top_contacts
from callscope.models.record import CallRecord, NumberStats, StatusSlice, SummaryStats
from callscope.parsers.log_parser import format_seconds, parse_log_file, parse_raw_logs

parse = parse_raw_logs

__all__ = [
    "CallRecord",
    "NumberStats",
    "StatusSlice",
    "SummaryStats",
    "call_status_split",
    "format_seconds",
    "parse",
    "parse_log_file",
    "parse_raw_logs",
    "summarize",
    "top_contacts",
]
