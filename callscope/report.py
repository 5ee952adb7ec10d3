"""
callscope/report.py
Structured analysis report.

Input: List[CallRecord] (parser), optional insight text (insights.py).
Output: one report object holding every derived view, suitable for
the CLI, the HTTP API and JSON export.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from callscope.aggregators.call_aggregator import (
    DEFAULT_TOP_N,
    call_status_split,
    summarize,
    top_contacts,
)
from callscope.models.record import CallRecord, NumberStats, StatusSlice, SummaryStats


@dataclass
class AnalysisReport:
    summary:      SummaryStats
    top_contacts: List[NumberStats]
    call_status:  List[StatusSlice]
    calls:        List[CallRecord]  = field(default_factory=list)
    insight:      Optional[str]     = None
    generated_at: str               = ''


def build_report(
    records: Sequence[CallRecord],
    top_n: int = DEFAULT_TOP_N,
    insight: Optional[str] = None,
) -> AnalysisReport:
    """Build every derived view from one parsed call list."""
    return AnalysisReport(
        summary      = summarize(records),
        top_contacts = top_contacts(records, n=top_n),
        call_status  = call_status_split(records),
        calls        = list(records),
        insight      = insight,
        generated_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    )


def report_to_dict(report: AnalysisReport) -> Dict:
    """Convert AnalysisReport to a JSON-serializable dict."""
    def _dataclass_to_dict(obj):
        if hasattr(obj, "__dataclass_fields__"):
            return {k: _dataclass_to_dict(getattr(obj, k)) for k in obj.__dataclass_fields__}
        if isinstance(obj, list):
            return [_dataclass_to_dict(x) for x in obj]
        return obj

    return _dataclass_to_dict(report)
