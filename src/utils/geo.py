"""Great-circle distance and calendar-day helpers for occurrence matching.

Distances are statute miles on a spherical Earth of mean radius
3958.7613 mi, matching the figure the search API has always used.  Day
differences are computed on provider-local calendar dates, never on
timestamps, so a 23:30 show and a 00:30 show the next night are one day
apart regardless of time zone.
"""

from __future__ import annotations

import math
from datetime import date

EARTH_RADIUS_MILES = 3958.7613


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance between two points in statute miles."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def days_between(start: date, end: date) -> int:
    """Signed whole days from *start* to *end* (negative if *end* is earlier)."""
    return (end - start).days


def max_diff_days(max_days: int) -> int:
    """Convert an inclusive trip length into the largest allowed day gap.

    A 3-day trip covers e.g. Fri/Sat/Sun, so events may be at most two
    calendar days apart.
    """
    return max(0, max_days - 1)
