"""Eligibility rules and distance scoring for reference/candidate pairs."""

import unicodedata
from datetime import date
from typing import Mapping, Optional

from continuity import Event
from continuity.computus import carnival_tuesday

# 52 weeks: the expected shift of a recurring event, keeping the weekday
WEEKS_52_DAYS = 364

# Largest distance (in days) still accepted as the same event
MAX_DISTANCE = 7

CARNIVAL_KEYWORD = 'carnaval'


def normalize(text: Optional[str]) -> str:
    """Normalize text for comparison.

    Lower-cases, removes accents/diacritics via NFD decomposition and
    strips surrounding whitespace. None becomes an empty string.

    Args:
        text: Raw text, e.g. a municipality or venue.

    Returns:
        Normalized string.
    """
    if not text:
        return ''
    decomposed = unicodedata.normalize('NFD', text.lower())
    # Remove combining marks (category 'Mn')
    stripped = ''.join(ch for ch in decomposed if unicodedata.category(ch) != 'Mn')
    return stripped.strip()


def is_carnival(event: Event) -> bool:
    """Check whether an event belongs to the Carnival season.

    Args:
        event: Event to classify.

    Returns:
        True if its type or venue mentions "carnaval".
    """
    return (
        CARNIVAL_KEYWORD in normalize(event.event_type)
        or CARNIVAL_KEYWORD in normalize(event.venue)
    )


def is_eligible(reference: Event, candidate: Event) -> bool:
    """Check the hard matching rules between a reference and a candidate.

    1. Same municipality (normalized).
    2. Same weekday, no tolerance.
    3. Same venue (normalized), unless either venue is empty.

    Args:
        reference: Event from last year.
        candidate: Event from the current year.

    Returns:
        True if the candidate may be scored against the reference.
    """
    if normalize(candidate.municipality) != normalize(reference.municipality):
        return False

    if candidate.date.weekday() != reference.date.weekday():
        return False

    ref_venue = normalize(reference.venue)
    cand_venue = normalize(candidate.venue)
    if ref_venue and cand_venue and ref_venue != cand_venue:
        return False

    return True


def _carnival_tuesday_for(year: int, carnival_tuesdays: Optional[Mapping[int, date]]) -> date:
    if carnival_tuesdays and year in carnival_tuesdays:
        return carnival_tuesdays[year]
    return carnival_tuesday(year)


def calculate_distance(
    reference: Event,
    candidate: Event,
    carnival_tuesdays: Optional[Mapping[int, date]] = None,
) -> int:
    """Calculate how far a candidate is from the expected re-booking date.

    Carnival events are compared by their offset to each year's Carnival
    Tuesday, since that date moves with Easter. All other events are
    expected exactly 52 weeks later.

    Args:
        reference: Event from last year.
        candidate: Event from the current year.
        carnival_tuesdays: Optional precomputed Carnival Tuesday per year.

    Returns:
        Distance in days (0 = perfect match).
    """
    if is_carnival(reference):
        ref_anchor = _carnival_tuesday_for(reference.date.year, carnival_tuesdays)
        cand_anchor = _carnival_tuesday_for(candidate.date.year, carnival_tuesdays)
        offset_prev = (reference.date - ref_anchor).days
        offset_curr = (candidate.date - cand_anchor).days
        return abs(offset_curr - offset_prev)

    return abs((candidate.date - reference.date).days - WEEKS_52_DAYS)


def score(
    reference: Event,
    candidate: Event,
    carnival_tuesdays: Optional[Mapping[int, date]] = None,
) -> Optional[int]:
    """Score a candidate against a reference event.

    Returns:
        The distance in days, or None if the candidate is ineligible.
    """
    if not is_eligible(reference, candidate):
        return None
    return calculate_distance(reference, candidate, carnival_tuesdays)


def is_acceptable(distance: Optional[int]) -> bool:
    """Check whether a score is close enough to count as a match."""
    return distance is not None and distance <= MAX_DISTANCE
