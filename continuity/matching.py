"""Greedy one-to-one matching of last year's events against this year's."""

import logging
from datetime import date
from typing import Iterable, Mapping, Optional

from continuity import FOUND, MISSING, Event, MatchResult, MonthComparison
from continuity.computus import carnival_tuesday
from continuity.pool import build_pool, reference_events
from continuity.reporter import aggregate
from continuity.scoring import is_acceptable, is_carnival, score

log = logging.getLogger(__name__)


def _pick_best_candidate(
    reference: Event,
    pool: tuple[Event, ...],
    consumed: set[int],
    carnival_tuesdays: Optional[Mapping[int, date]],
) -> tuple[int, int] | None:
    """Find the closest acceptable candidate still available in the pool.

    Ties on distance go to the earliest pool position: a later candidate
    only wins with a strictly smaller distance.

    Returns:
        Tuple (pool index, distance), or None if nothing is acceptable.
    """
    best: tuple[int, int] | None = None

    for idx, candidate in enumerate(pool):
        if idx in consumed:
            continue
        distance = score(reference, candidate, carnival_tuesdays)
        if not is_acceptable(distance):
            continue
        if best is None or distance < best[1]:
            best = (idx, distance)

    return best


def match_events(
    references: Iterable[Event],
    pool: Iterable[Event],
    carnival_tuesdays: Optional[Mapping[int, date]] = None,
) -> list[MatchResult]:
    """Match last year's events against the current-year candidate pool.

    References are processed by ascending date (stable). Each one takes its
    best acceptable candidate, which is then consumed so no candidate is
    matched twice. This is a single greedy pass: when two references compete
    for the same candidate, the earlier reference wins even if a different
    pairing would match more events overall.

    Args:
        references: Events from the same month last year.
        pool: Candidate events from the current year, in tie-break order.
        carnival_tuesdays: Optional precomputed Carnival Tuesday per year.

    Returns:
        One MatchResult per reference event, in processing order.
    """
    snapshot = tuple(pool)
    consumed: set[int] = set()
    results: list[MatchResult] = []

    for reference in sorted(references, key=lambda e: e.date):
        carnival = is_carnival(reference)
        best = _pick_best_candidate(reference, snapshot, consumed, carnival_tuesdays)

        if best is None:
            log.debug("Sin equivalente: %s %s", reference.date, reference.municipality)
            results.append(MatchResult(
                reference=reference,
                matched=None,
                status=MISSING,
                is_carnival=carnival,
            ))
            continue

        idx, distance = best
        consumed.add(idx)
        log.debug(
            "Localizada: %s -> %s (%s, distancia %d)",
            reference.date, snapshot[idx].date, reference.municipality, distance,
        )
        results.append(MatchResult(
            reference=reference,
            matched=snapshot[idx],
            status=FOUND,
            is_carnival=carnival,
            distance=distance,
        ))

    return results


def compare_month(
    events: Iterable[Event],
    target_year: int,
    target_month: int,
) -> MonthComparison:
    """Run the continuity check for one month.

    Compares the events of ``target_month`` in ``target_year - 1`` against
    the current-year candidates around that month.

    Args:
        events: All events from the store snapshot.
        target_year: Current year.
        target_month: Target month, 1-12.

    Returns:
        MonthComparison with per-event results and aggregate counters.
    """
    events = list(events)
    references = reference_events(events, target_year, target_month)
    pool = build_pool(events, target_year, target_month)

    carnival_tuesdays = {
        target_year - 1: carnival_tuesday(target_year - 1),
        target_year: carnival_tuesday(target_year),
    }
    results = match_events(references, pool, carnival_tuesdays)
    stats = aggregate(results)

    log.info(
        "Comparacion %02d/%d: %d de %d localizadas (%d%%), %d candidatas",
        target_month, target_year, stats['found'], stats['total'],
        stats['coverage'], len(pool),
    )
    return MonthComparison(
        year=target_year,
        month=target_month,
        carnival_tuesday=carnival_tuesdays[target_year],
        results=results,
        stats=stats,
    )
