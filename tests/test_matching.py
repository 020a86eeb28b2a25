"""Tests for continuity.matching module."""

from datetime import date

from continuity import FOUND, MISSING, Event
from continuity.matching import compare_month, match_events


def _event(day: date, **kwargs) -> Event:
    """Create an Event with defaults."""
    defaults = dict(municipality='Adeje', venue='Plaza Central', event_type='Baile Normal')
    defaults.update(kwargs)
    return Event(date=day, **defaults)


class TestRegularMatch:
    """Tests for events repeating 52 weeks later."""

    def test_prefers_smaller_distance(self):
        ref = _event(date(2023, 6, 10))
        one_week_late = _event(date(2024, 6, 15))
        exact = _event(date(2024, 6, 8))
        results = match_events([ref], [one_week_late, exact])
        assert len(results) == 1
        assert results[0].status == FOUND
        assert results[0].matched is exact
        assert results[0].distance == 0

    def test_accepts_distance_seven(self):
        ref = _event(date(2023, 6, 10))
        cand = _event(date(2024, 6, 15))
        results = match_events([ref], [cand])
        assert results[0].found
        assert results[0].distance == 7

    def test_rejects_two_weeks_off(self):
        ref = _event(date(2023, 6, 10))
        cand = _event(date(2024, 6, 22))
        results = match_events([ref], [cand])
        assert results[0].status == MISSING
        assert results[0].matched is None
        assert results[0].distance is None

    def test_tie_goes_to_first_in_pool(self):
        ref = _event(date(2023, 6, 10))
        early = _event(date(2024, 6, 1), venue='')
        late = _event(date(2024, 6, 15), venue='')
        results = match_events([ref], [early, late])
        assert results[0].matched is early
        results = match_events([ref], [late, early])
        assert results[0].matched is late

    def test_empty_venue_matches_any_candidate_venue(self):
        ref = _event(date(2023, 6, 10), venue='')
        cand = _event(date(2024, 6, 8), venue='Auditorio')
        results = match_events([ref], [cand])
        assert results[0].found


class TestCarnivalMatch:
    """Tests for Carnival events anchored on Carnival Tuesday."""

    def test_carnival_2023_to_2024(self):
        # 3 days before Carnival Tuesday (2023-02-21 / 2024-02-13)
        ref = _event(date(2023, 2, 18), municipality='Santa Cruz', venue='', event_type='Carnaval')
        cand = _event(date(2024, 2, 10), municipality='Santa Cruz', venue='', event_type='Carnaval')
        other = _event(date(2024, 2, 17), municipality='Santa Cruz', venue='', event_type='Carnaval')
        results = match_events([ref], [other, cand])
        assert results[0].found
        assert results[0].matched is cand
        assert results[0].is_carnival
        assert results[0].distance == 0

    def test_carnival_overrides_fixed_offset(self):
        ref = _event(date(2024, 2, 10), municipality='Santa Cruz', venue='', event_type='Carnaval')
        cand = _event(date(2025, 3, 1), municipality='Santa Cruz', venue='', event_type='Baile')
        assert abs((cand.date - ref.date).days - 364) >= 20
        results = match_events([ref], [cand])
        assert results[0].found
        assert results[0].distance == 0

    def test_regular_event_not_moved_with_carnival(self):
        ref = _event(date(2024, 2, 10), municipality='Santa Cruz', venue='')
        cand = _event(date(2025, 3, 1), municipality='Santa Cruz', venue='')
        results = match_events([ref], [cand])
        assert results[0].status == MISSING
        assert not results[0].is_carnival


class TestGreedyAssignment:
    """Tests for one-to-one greedy assignment."""

    def test_candidate_used_once(self):
        first = _event(date(2023, 6, 10), venue='')
        second = _event(date(2023, 6, 10), venue='', performers=('Otra',))
        cand = _event(date(2024, 6, 8))
        results = match_events([first, second], [cand])
        assert [r.status for r in results] == [FOUND, MISSING]
        assert results[0].reference is first

    def test_references_processed_by_date(self):
        late = _event(date(2023, 6, 17))
        early = _event(date(2023, 6, 10))
        # Within reach of both references (distance 7 and 0)
        cand = _event(date(2024, 6, 15))
        results = match_events([late, early], [cand])
        assert [r.reference for r in results] == [early, late]
        # The earlier reference takes the shared candidate even though the
        # later one would match it exactly
        assert results[0].found
        assert results[0].distance == 7
        assert results[1].status == MISSING

    def test_injective_over_many_references(self):
        refs = [_event(date(2023, 6, d), venue='') for d in (3, 10, 17, 24)]
        pool = [_event(date(2024, 6, d), venue='') for d in (1, 8, 15)]
        results = match_events(refs, pool)
        matched = [id(r.matched) for r in results if r.found]
        assert len(matched) == len(set(matched))
        assert len(matched) == 3

    def test_zero_candidates_all_missing(self):
        refs = [_event(date(2023, 6, 10)), _event(date(2023, 6, 17))]
        results = match_events(refs, [])
        assert all(r.status == MISSING for r in results)

    def test_no_references(self):
        assert match_events([], [_event(date(2024, 6, 8))]) == []

    def test_pool_input_not_mutated(self):
        pool = [_event(date(2024, 6, 8))]
        match_events([_event(date(2023, 6, 10))], pool)
        assert len(pool) == 1


class TestCompareMonth:
    """Tests for the full month query."""

    def test_sample_snapshot(self, snapshot_events):
        comparison = compare_month(snapshot_events, 2024, 6)
        assert comparison.year == 2024
        assert comparison.month == 6
        assert comparison.carnival_tuesday == date(2024, 2, 13)
        assert len(comparison.found) == 2
        assert len(comparison.missing) == 1
        assert comparison.missing[0].reference.municipality == 'Arona'
        assert comparison.stats == {
            'found': 2, 'missing': 1, 'total': 3, 'coverage': 67, 'carnival': 0,
        }

    def test_deterministic(self, snapshot_events):
        first = compare_month(snapshot_events, 2024, 6)
        second = compare_month(snapshot_events, 2024, 6)
        assert first == second

    def test_no_history(self, snapshot_events):
        comparison = compare_month(snapshot_events, 2024, 3)
        assert comparison.results == []
        assert comparison.stats['total'] == 0
        assert comparison.stats['coverage'] == 0

    def test_missing_counted_without_candidates(self):
        events = [_event(date(2023, 6, 10))]
        comparison = compare_month(events, 2024, 6)
        assert comparison.stats['missing'] == 1
        assert comparison.stats['found'] == 0

    def test_february_candidate_found_for_march_reference(self):
        # Carnival 2025 is late (Tuesday 2025-03-04), 2026 is early (2026-02-17)
        ref = _event(date(2025, 3, 1), municipality='Santa Cruz', venue='', event_type='Carnaval')
        cand = _event(date(2026, 2, 14), municipality='Santa Cruz', venue='', event_type='Carnaval')
        comparison = compare_month([ref, cand], 2026, 3)
        assert comparison.found[0].matched == cand
