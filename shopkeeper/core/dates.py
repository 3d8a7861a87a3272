from datetime import date, datetime, timedelta


def normalize_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            return date.fromisoformat(value_text)
        except ValueError:
            return None
    return None


def previous_day(day: date) -> date:
    return day - timedelta(days=1)


def resolve_today(value=None) -> date:
    """Parse an explicit "today" override, falling back to the local date."""
    return normalize_date(value) or date.today()
