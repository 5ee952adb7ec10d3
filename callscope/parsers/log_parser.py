"""
callscope/parsers/log_parser.py
Parses freeform call-log text pasted from a phone or dialer export.

FORMAT:
  Records are separated by runs of two or more whitespace characters.
  Fields inside a record are separated by single spaces:

    [+]<digits> M/D/YYYY h:mm AM|PM[,[ ]HH:MM:SS]

  e.g.  +14155551234 1/2/2024 9:05 AM,00:03:30   14155551234 1/3/2024 10:00 AM

Tokens that do not match the full record grammar are dropped silently.
Malformed lines are noise, not fatal input. No call content in logs.
"""

from pathlib import Path
from typing import List, Optional
import logging
import re

from callscope.models.record import CallRecord

logger = logging.getLogger(__name__)

# BOMs for encoding detection
BOM_UTF8 = b'\xef\xbb\xbf'
BOM_UTF16_LE = b'\xff\xfe'
BOM_UTF16_BE = b'\xfe\xff'

# Decoded BOM; str.strip() leaves it in place
BOM_CHAR = '\ufeff'

NO_DURATION = '00:00:00'

RECORD_SEPARATOR = re.compile(r'\s{2,}')

# [0-9] rather than \d so non-ASCII digits never match.
# Month 1-12, day 1-31, each one or two digits.
MONTH = r'(?:0?[1-9]|1[0-2])'
DAY   = r'(?:0?[1-9]|[12][0-9]|3[01])'

ENTRY_PATTERN = re.compile(
    r'\+?([0-9]+)\s+'
    rf'({MONTH}/{DAY}/[0-9]{{4}}\s+[0-9]{{1,2}}:[0-9]{{2}}\s+[AP]M)'
    r'(?:,\s*([0-9]{2}:[0-9]{2}:[0-9]{2}))?'
)


def split_candidates(raw: Optional[str]) -> List[str]:
    """Trim the blob and split it into candidate tokens on 2+ whitespace runs."""
    text = (raw or '').lstrip(BOM_CHAR).strip()
    if not text:
        return []
    return RECORD_SEPARATOR.split(text)


def parse_raw_logs(raw: Optional[str]) -> List[CallRecord]:
    """
    Parse a raw call-log blob into CallRecords, in source order.
    Never raises. Duplicates are kept; nothing is sorted.
    """
    records: List[CallRecord] = []
    candidates = split_candidates(raw)

    for token in candidates:
        match = ENTRY_PATTERN.fullmatch(token.strip())
        if not match:
            continue

        number, timestamp, duration = match.groups()
        records.append(CallRecord(
            number             = number,
            timestamp          = timestamp,
            duration_seconds   = decode_duration(duration) if duration else 0,
            duration_formatted = duration or NO_DURATION,
        ))

    dropped = len(candidates) - len(records)
    if dropped:
        logger.debug(f"Dropped {dropped} unmatched tokens")
    logger.info(f"Parsed {len(records)} calls from {len(candidates)} tokens")
    return records


def parse_log_file(path: Path) -> List[CallRecord]:
    """
    Read a call-log text file and parse it.
    Supports UTF-8, UTF-8-BOM, UTF-16-LE/BE. Unreadable file → [].
    """
    try:
        content = read_log_text(path)
    except OSError as e:
        logger.error(f"File read error {path.name}: {e}")
        return []
    return parse_raw_logs(content)


def decode_duration(text: str) -> int:
    h, m, s = (int(part) for part in text.split(':'))
    return h * 3600 + m * 60 + s


def format_seconds(total_seconds: int) -> str:
    """Zero-padded HH:MM:SS. Hours are not wrapped at 24."""
    hours, rem = divmod(max(int(total_seconds), 0), 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def read_log_text(path: Path) -> str:
    """Decode a log file by BOM. Raises OSError if it cannot be read."""
    raw = path.read_bytes()
    if raw.startswith(BOM_UTF8):
        return raw[len(BOM_UTF8):].decode('utf-8', errors='replace')
    if raw.startswith(BOM_UTF16_LE):
        return raw[len(BOM_UTF16_LE):].decode('utf-16-le', errors='replace')
    if raw.startswith(BOM_UTF16_BE):
        return raw[len(BOM_UTF16_BE):].decode('utf-16-be', errors='replace')
    try:
        return raw.decode('utf-8', errors='strict')
    except UnicodeDecodeError:
        return raw.decode('utf-8', errors='replace')
