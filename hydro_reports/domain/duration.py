"""Human-readable durations for report cells."""

from __future__ import annotations

from datetime import timedelta

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

DAY_WORD = "кун"
HOUR_WORD = "соат"
MINUTE_WORD = "минут"
ZERO_DURATION = f"0 {MINUTE_WORD}"


def format_duration(span: timedelta) -> str:
    """Render ``span`` as "X кун, Y соат, Z минут", omitting zero parts.

    Seconds are truncated; zero and negative spans render as "0 минут".
    """
    total_minutes = int(span.total_seconds() // 60)
    if total_minutes <= 0:
        return ZERO_DURATION

    days, remainder = divmod(total_minutes, MINUTES_PER_DAY)
    hours, minutes = divmod(remainder, MINUTES_PER_HOUR)

    parts: list[str] = []
    for amount, word in ((days, DAY_WORD), (hours, HOUR_WORD), (minutes, MINUTE_WORD)):
        if amount > 0:
            parts.append(f"{amount} {word}")
    return ", ".join(parts)
