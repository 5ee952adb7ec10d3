"""
callscope/cli.py
Command-line interface for CallScope.

USAGE:
  python -m callscope.cli --input calls.txt
  python -m callscope.cli --input calls.txt --top 10 --json
  python -m callscope.cli --input calls.txt --insights --model llama3.1:8b
  cat calls.txt | python -m callscope.cli --input -
  python -m callscope.cli --list-models
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from callscope.config import load_config
from callscope.insights import get_call_insights
from callscope.parsers.log_parser import parse_raw_logs, read_log_text
from callscope.report import AnalysisReport, build_report
from callscope.report_export import export_to_json

logger = logging.getLogger(__name__)

GREEN  = '\033[92m'
YELLOW = '\033[93m'
RED    = '\033[91m'
CYAN   = '\033[96m'
RESET  = '\033[0m'
BOLD   = '\033[1m'


def build_parser(config: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog        = 'callscope',
        description = 'CallScope — call log parser and analytics',
        formatter_class = argparse.RawDescriptionHelpFormatter,
        epilog = """
INPUT FORMAT:
  Records separated by two or more spaces or newlines:
    +14155551234 1/2/2024 9:05 AM,00:03:30   14155551234 1/3/2024 10:00 AM
  Malformed records are skipped.
        """
    )

    parser.add_argument(
        '--input', '-i',
        help    = "Call log text file, or '-' to read stdin",
    )
    parser.add_argument(
        '--top', '-n',
        type    = int,
        default = config['top_n'],
        help    = f"Number of top contacts to show (default: {config['top_n']})",
    )
    parser.add_argument(
        '--json',
        action  = 'store_true',
        help    = 'Print the report as JSON instead of a table',
    )
    parser.add_argument(
        '--insights',
        action  = 'store_true',
        default = config['insights_enabled'],
        help    = 'Ask a local Ollama model for a short summary',
    )
    parser.add_argument(
        '--model', '-m',
        default = config['model'],
        help    = f"Ollama model name (default: {config['model']})",
    )
    parser.add_argument(
        '--ollama-host',
        default = config['ollama_host'],
        help    = f"Ollama host URL (default: {config['ollama_host']})",
    )
    parser.add_argument(
        '--list-models',
        action  = 'store_true',
        help    = 'List locally available Ollama models and exit',
    )
    parser.add_argument(
        '--verbose', '-v',
        action  = 'store_true',
        help    = 'Enable debug logging',
    )
    return parser


def main(argv: Optional[List[str]] = None):
    config = load_config()
    parser = build_parser(config)
    args   = parser.parse_args(argv)

    # ── LOGGING SETUP ────────────────────────────────────────
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level   = log_level,
        format  = '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt = '%H:%M:%S',
        stream  = sys.stderr,
    )

    # ── LIST MODELS ──────────────────────────────────────────
    if args.list_models:
        from callscope.llm.ollama_adapter import OllamaAdapter
        adapter = OllamaAdapter(host=args.ollama_host)
        models  = adapter.list_available_models()
        if models:
            _print(f"\n{BOLD}Available Ollama models:{RESET}")
            for m in models:
                _print(f"  • {m}")
        else:
            _print(f"{YELLOW}No models found. Is Ollama running?{RESET}")
        sys.exit(0)

    if not args.input:
        parser.error('--input is required')
    if args.top < 0:
        parser.error('--top must be >= 0')

    # ── PARSE ────────────────────────────────────────────────
    t0 = time.time()
    if args.input == '-':
        calls = parse_raw_logs(sys.stdin.read())
    else:
        path = Path(args.input)
        if not path.is_file():
            _print(f"{RED}Error: File not found: {path}{RESET}")
            sys.exit(1)
        try:
            text = read_log_text(path)
        except OSError as e:
            _print(f"{RED}Error: Cannot read {path}: {e}{RESET}")
            sys.exit(1)
        calls = parse_raw_logs(text)

    # ── INSIGHTS ─────────────────────────────────────────────
    insight = None
    if args.insights and calls:
        from callscope.llm.ollama_adapter import OllamaAdapter
        adapter = OllamaAdapter(
            model       = args.model,
            host        = args.ollama_host,
            timeout_sec = int(config['timeout_sec']),
        )
        insight = get_call_insights(calls, adapter, limit=int(config['insight_limit']))

    report = build_report(calls, top_n=args.top, insight=insight)

    if args.json:
        print(export_to_json(report, parameters={
            'input': args.input,
            'top_n': args.top,
            'insights': bool(args.insights),
        }))
        return

    _banner()
    _ok(f"{len(calls)} call records parsed in {_elapsed(t0)}")
    if not calls:
        _print(f"\n{YELLOW}No valid call records found in input.{RESET}")
        _print("Check that records look like: +14155551234 1/2/2024 9:05 AM,00:03:30")
    _print_report(report)


# ── PRINT HELPERS ────────────────────────────────────────────

def _print_report(report: AnalysisReport):
    s = report.summary
    _print(f"\n{BOLD}Summary{RESET}")
    _print(f"  Total dials    : {s.total_dials:,}")
    _print(f"  Talk time      : {s.formatted_talk_time}")
    _print(f"  Unique numbers : {s.unique_numbers:,}")

    _print(f"\n{BOLD}Call status{RESET}")
    for status in report.call_status:
        color = GREEN if status.name == 'Connected' else RED
        _print(f"  {color}{status.name:<10}{RESET}: {status.value:,}")

    if report.top_contacts:
        _print(f"\n{BOLD}Top contacts by talk time{RESET}")
        _print(f"  {'Number':<18} {'Dials':>6}  {'Talk time':>10}")
        for c in report.top_contacts:
            _print(f"  {c.number:<18} {c.dials:>6}  {c.formatted_talk_time:>10}")

    if report.insight:
        _print(f"\n{BOLD}AI insight{RESET}")
        _print(report.insight)
    _print("")


def _banner():
    _print(f"\n{BOLD}{CYAN}  CallScope — call log analytics{RESET}\n")

def _ok(msg):    _print(f"  {GREEN}✓{RESET} {msg}")
def _print(msg): print(msg)

def _elapsed(t0: float) -> str:
    s = time.time() - t0
    return f"{s:.1f}s" if s < 60 else f"{int(s//60)}m {int(s%60)}s"


if __name__ == '__main__':
    main()
