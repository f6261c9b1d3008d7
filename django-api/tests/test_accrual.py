"""Unit tests for the attendance accrual rules.

Run with: pytest tests/test_accrual.py -v
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from support import START, at, check_in, check_out

from attendance.domain.accrual import accumulate, chronological, elapsed_minutes
from attendance.domain.value_objects import TicketId


class TestAccumulate:
    """Pairing of check-ins with check-outs."""

    def test_empty_history(self):
        accrual = accumulate([])
        assert accrual.total_hours == 0
        assert accrual.is_checked_in is False
        assert accrual.last_check_in is None
        assert accrual.history == ()

    def test_single_session(self):
        accrual = accumulate([check_in(at(9)), check_out(at(10, 30))])
        assert accrual.total_hours == 1.5
        assert accrual.is_checked_in is False

    def test_second_check_in_replaces_the_first(self):
        """Duration is measured from the most recent pending check-in."""
        accrual = accumulate([check_in(at(9)), check_in(at(9, 15)), check_out(at(11, 15))])
        assert accrual.total_hours == 2.0
        assert accrual.is_checked_in is False

    def test_unmatched_check_in_counts_nothing_but_is_present(self):
        accrual = accumulate([check_in(at(9))])
        assert accrual.total_hours == 0
        assert accrual.is_checked_in is True
        assert accrual.last_check_in == at(9)

    def test_orphan_check_out(self):
        accrual = accumulate([check_out(at(9))])
        assert accrual.total_hours == 0
        assert accrual.is_checked_in is False
        assert accrual.last_check_in is None

    def test_identical_check_in_timestamps_add_nothing(self):
        accrual = accumulate([check_in(at(9)), check_in(at(9))])
        assert accrual.total_hours == 0
        assert accrual.is_checked_in is True

    def test_events_are_sorted_before_pairing(self):
        accrual = accumulate([check_out(at(12)), check_in(at(10))])
        assert accrual.total_hours == 2.0
        assert [e.timestamp for e in accrual.history] == [at(10), at(12)]

    def test_multiple_sessions_add_up(self):
        accrual = accumulate(
            [
                check_in(at(9)),
                check_out(at(10)),
                check_in(at(13)),
                check_out(at(14, 30)),
            ]
        )
        assert accrual.total_minutes == 150
        assert accrual.total_hours == 2.5

    def test_partial_minutes_are_truncated(self):
        accrual = accumulate([check_in(at(9)), check_out(at(9, 1, 59))])
        assert accrual.total_minutes == 1

    def test_span_under_a_minute_adds_nothing(self):
        accrual = accumulate([check_in(at(9)), check_out(at(9, 0, 30))])
        assert accrual.total_minutes == 0

    def test_check_out_closes_only_one_check_in(self):
        accrual = accumulate([check_in(at(9)), check_out(at(10)), check_out(at(11))])
        assert accrual.total_hours == 1.0

    def test_recheck_in_after_check_out_is_present(self):
        accrual = accumulate([check_in(at(9)), check_out(at(10)), check_in(at(11))])
        assert accrual.total_hours == 1.0
        assert accrual.is_checked_in is True
        assert accrual.last_check_in == at(11)

    def test_check_in_and_out_at_same_instant_is_not_present(self):
        """Presence requires the latest check-in to be strictly later."""
        accrual = accumulate([check_in(at(9)), check_out(at(9))])
        assert accrual.total_minutes == 0
        assert accrual.is_checked_in is False

    def test_history_keeps_insertion_order_for_ties(self):
        first = check_in(at(9))
        second = check_out(at(9))
        assert accumulate([first, second]).history == (first, second)

    @pytest.mark.parametrize("offsets", [[0, 30, 45, 90], [120, 0, 5, 60, 61], [10]])
    def test_total_is_never_negative(self, offsets):
        ticket = TicketId(uuid4())
        events = []
        for i, minutes in enumerate(offsets):
            builder = check_in if i % 2 == 0 else check_out
            events.append(builder(START + timedelta(minutes=minutes), ticket))
        assert accumulate(events).total_minutes >= 0


class TestHelpers:
    def test_elapsed_minutes_truncates_toward_zero(self):
        assert elapsed_minutes(at(9), at(9, 2, 59)) == 2
        assert elapsed_minutes(at(9, 2, 59), at(9)) == -2

    def test_chronological_is_stable(self):
        a = check_in(at(10))
        b = check_out(at(9))
        c = check_out(at(10))
        assert chronological([a, b, c]) == [b, a, c]
