"""Calendar helpers shared by the generator and the aggregator."""

from datetime import date, datetime, time, timedelta


def start_of_week(today: date, first_weekday: int = 6) -> date:
    """Return the first day of the week containing ``today``.

    Args:
        today: Any day in the week
        first_weekday: Weekday the week starts on (0=Monday .. 6=Sunday)

    Returns:
        The date of the week's first day (``today`` itself when it is one)
    """
    if not 0 <= first_weekday <= 6:
        raise ValueError(f"first_weekday must be 0-6, got {first_weekday}")
    return today - timedelta(days=(today.weekday() - first_weekday) % 7)


def week_start_datetime(now: datetime, first_weekday: int = 6) -> datetime:
    """Midnight at the start of the week containing ``now``."""
    return datetime.combine(start_of_week(now.date(), first_weekday), time.min)


def format_short_date(value: date) -> str:
    """Format as M/D/YY without zero padding (e.g. 3/7/25)."""
    return f"{value.month}/{value.day}/{value:%y}"


def streak_length(days: list[date] | set[date], today: date) -> int:
    """Count consecutive active days ending today.

    A streak still counts when the last active day was yesterday, since
    today's workout may not be done yet.
    """
    active = set(days)
    cursor = today if today in active else today - timedelta(days=1)
    streak = 0
    while cursor in active:
        streak += 1
        cursor -= timedelta(days=1)
    return streak
