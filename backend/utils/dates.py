import re
from datetime import datetime, time, timedelta

from django.utils import timezone

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value):
    """Return a ``date`` for a strict ``YYYY-MM-DD`` string, else None."""
    if not isinstance(value, str) or not ISO_DATE_RE.match(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def is_valid_date(value) -> bool:
    return parse_iso_date(value) is not None


def today_string() -> str:
    return timezone.localdate().isoformat()


def day_bounds(day=None):
    """Local-time window ``[start, next_start)`` for ``day`` (default: today)."""
    day = day or timezone.localdate()
    start = timezone.make_aware(datetime.combine(day, time.min))
    end = timezone.make_aware(datetime.combine(day + timedelta(days=1), time.min))
    return start, end
