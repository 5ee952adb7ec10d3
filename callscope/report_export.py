"""
callscope/report_export.py
JSON export of an AnalysisReport.

The export wraps report_to_dict() with:
  - format version
  - metadata: generated_at, call/number/top-contact counts, run parameters
  - content_hash_sha256 over everything else, so a saved export can be
    checked for edits later (see verify_export).
"""

import hashlib
import json
from typing import Any, Dict, Optional

from callscope.report import AnalysisReport, report_to_dict


EXPORT_FORMAT_VERSION = "1.0"
HASH_FIELD = "content_hash_sha256"


def _metadata(report: AnalysisReport, parameters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "generated_at":       report.generated_at,
        "record_count":       report.summary.total_dials,
        "unique_numbers":     report.summary.unique_numbers,
        "top_contacts_count": len(report.top_contacts),
        "parameters":         dict(parameters or {}),
    }


def _digest(body: Dict[str, Any]) -> str:
    canonical = json.dumps(body, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def export_to_dict(
    report: AnalysisReport,
    parameters: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    body = {
        "export_format_version": EXPORT_FORMAT_VERSION,
        "report_metadata":       _metadata(report, parameters),
        "report":                report_to_dict(report),
    }
    body[HASH_FIELD] = _digest(body)
    return body


def export_to_json(
    report: AnalysisReport,
    parameters: Optional[Dict[str, Any]] = None,
    indent: Optional[int] = 2,
) -> str:
    return json.dumps(export_to_dict(report, parameters), indent=indent)


def verify_export(exported: Dict[str, Any]) -> bool:
    """True if the stored hash still matches the export body."""
    body = {k: v for k, v in exported.items() if k != HASH_FIELD}
    return exported.get(HASH_FIELD) == _digest(body)
