"""
tests/test_aggregators.py
Summary, top contacts and connected/missed split.
"""

import pytest

from callscope.aggregators.call_aggregator import call_status_split, summarize, top_contacts
from callscope.models.record import CallRecord, NumberStats, StatusSlice, SummaryStats
from callscope.parsers.log_parser import format_seconds, parse_raw_logs


def _call(number: str, seconds: int = 0) -> CallRecord:
    return CallRecord(
        number             = number,
        timestamp          = '1/2/2024 9:05 AM',
        duration_seconds   = seconds,
        duration_formatted = format_seconds(seconds),
    )


@pytest.fixture
def mixed_calls():
    return [
        _call('111', 120),
        _call('222', 0),
        _call('111', 300),
        _call('333', 45),
        _call('222', 0),
    ]


# ── SUMMARY ──────────────────────────────────────────────────

class TestSummarize:

    def test_empty(self):
        stats = summarize([])
        assert stats == SummaryStats()
        assert stats.formatted_talk_time == '00:00:00'

    def test_totals(self, mixed_calls):
        stats = summarize(mixed_calls)
        assert stats.total_dials == 5
        assert stats.total_talk_seconds == 465
        assert stats.formatted_talk_time == '00:07:45'
        assert stats.unique_numbers == 3
        assert stats.connected_calls == 3
        assert stats.missed_calls == 2

    def test_scenario_from_raw_text(self):
        raw = "+14155551234 1/2/2024 9:05 AM,00:03:30   14155551234 1/3/2024 10:00 AM"
        stats = summarize(parse_raw_logs(raw))
        assert stats.total_dials == 2
        assert stats.connected_calls == 1
        assert stats.missed_calls == 1
        assert stats.unique_numbers == 1

    def test_talk_time_past_24_hours(self):
        stats = summarize([_call('1', 20 * 3600), _call('2', 10 * 3600)])
        assert stats.formatted_talk_time == '30:00:00'

    def test_large_totals(self):
        stats = summarize([_call(str(i), 10 ** 8) for i in range(20)])
        assert stats.total_talk_seconds == 2 * 10 ** 9

    @pytest.mark.parametrize('calls', [
        [],
        [_call('1')],
        [_call('1', 5), _call('1', 0), _call('2', 7)],
        [_call(str(i), i) for i in range(10)],
    ])
    def test_invariants(self, calls):
        stats = summarize(calls)
        assert stats.missed_calls + stats.connected_calls == stats.total_dials
        assert stats.unique_numbers <= stats.total_dials
        has_duplicates = len({c.number for c in calls}) < len(calls)
        assert (stats.unique_numbers == stats.total_dials) == (not has_duplicates)

    def test_idempotent(self, mixed_calls):
        assert summarize(mixed_calls) == summarize(mixed_calls)


# ── TOP CONTACTS ─────────────────────────────────────────────

class TestTopContacts:

    def test_empty(self):
        assert top_contacts([]) == []

    def test_rollup(self, mixed_calls):
        top = top_contacts(mixed_calls)
        assert top[0] == NumberStats('111', 2, 420, '00:07:00')
        assert [s.number for s in top] == ['111', '333', '222']
        assert top[2].dials == 2 and top[2].talk_time == 0

    def test_six_numbers_keeps_top_five(self):
        calls = [_call(f'100{i}', i * 10) for i in range(1, 7)]
        top = top_contacts(calls)
        assert [s.talk_time for s in top] == [60, 50, 40, 30, 20]
        assert '1001' not in [s.number for s in top]

    def test_fewer_than_n_not_padded(self):
        assert len(top_contacts([_call('1', 5), _call('2', 3)])) == 2

    def test_custom_n(self, mixed_calls):
        assert [s.number for s in top_contacts(mixed_calls, n=1)] == ['111']
        assert top_contacts(mixed_calls, n=0) == []

    def test_ties_keep_first_appearance_order(self):
        calls = [
            _call('C', 30), _call('A', 60), _call('B', 30),
            _call('A', 0), _call('D', 30), _call('C', 0),
        ]
        assert [s.number for s in top_contacts(calls)] == ['A', 'C', 'B', 'D']

    def test_input_not_mutated(self, mixed_calls):
        before = list(mixed_calls)
        top_contacts(mixed_calls)
        summarize(mixed_calls)
        assert mixed_calls == before

    def test_idempotent(self, mixed_calls):
        assert top_contacts(mixed_calls) == top_contacts(mixed_calls)


# ── STATUS SPLIT ─────────────────────────────────────────────

class TestCallStatusSplit:

    def test_split(self, mixed_calls):
        assert call_status_split(mixed_calls) == [
            StatusSlice('Connected', 3),
            StatusSlice('Missed', 2),
        ]

    def test_empty(self):
        assert [s.value for s in call_status_split([])] == [0, 0]
