"""
callscope/models/record.py
Shared dataclass schema. The parser, aggregator, report and API
all use these types. Do not add logic here — data only.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CallRecord:
    """One validated call event from a raw log."""
    number:             str         # digits only, leading '+' dropped
    timestamp:          str         # verbatim "M/D/YYYY h:mm AM"
    duration_seconds:   int
    duration_formatted: str         # "HH:MM:SS", "00:00:00" when absent


@dataclass(frozen=True)
class SummaryStats:
    total_dials:         int = 0
    total_talk_seconds:  int = 0
    formatted_talk_time: str = '00:00:00'
    unique_numbers:      int = 0
    connected_calls:     int = 0
    missed_calls:        int = 0


@dataclass(frozen=True)
class NumberStats:
    """Per-number rollup used by the top contacts view."""
    number:              str
    dials:               int
    talk_time:           int        # summed seconds
    formatted_talk_time: str


@dataclass(frozen=True)
class StatusSlice:
    name:  str                      # Connected / Missed
    value: int
