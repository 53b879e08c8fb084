from datetime import date, datetime


def _day_suffix(day: int) -> str:
    if 11 <= day <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def display_date(value: date | datetime | None = None) -> str:
    """Format a date for the "last updated" label, e.g. ``17th October, 2026.``"""
    value = value or datetime.now().astimezone()
    return f"{value.day}{_day_suffix(value.day)} {value.strftime('%B')}, {value.year}."
