"""Easter and Carnival Tuesday dates (Gregorian computus)."""

from datetime import date, timedelta

# Carnival Tuesday is 47 days before Easter Sunday
CARNIVAL_OFFSET_DAYS = 47


def easter_sunday(year: int) -> date:
    """Compute the date of Easter Sunday for a Gregorian year.

    Uses the anonymous Gregorian algorithm (Meeus/Jones/Butcher), which is
    pure integer arithmetic and valid for any year from 1583 on.

    Args:
        year: Calendar year.

    Returns:
        Date of Easter Sunday.
    """
    a = year % 19                     # Golden number - 1
    b, c = divmod(year, 100)          # Century, year of century
    d, e = divmod(b, 4)               # Leap year corrections
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30  # Epact
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # Sunday letter offset
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def carnival_tuesday(year: int) -> date:
    """Return Carnival Tuesday (Easter Sunday - 47 days) for a year."""
    return easter_sunday(year) - timedelta(days=CARNIVAL_OFFSET_DAYS)
