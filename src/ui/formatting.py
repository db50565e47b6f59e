# src/ui/formatting.py

"""Display helpers shared by the TUI and the CLI table."""

from datetime import datetime


def format_difference(value: int) -> tuple[str, str]:
    """Return the display text and Rich style for a sales change.

    Positive changes get a ``+`` prefix and green, negative ones red,
    zero is unstyled.
    """
    if value > 0:
        return f"+{value}", "green"
    if value < 0:
        return str(value), "red"
    return "0", ""


def format_last_updated(value: datetime | None) -> str:
    """Render a scrape time in local time, or ``Never``."""
    if value is None:
        return "Never"
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M:%S")
