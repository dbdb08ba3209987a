"""Time formatting and bound helpers for the round clock."""

SECONDS_PER_MINUTE = 60
TICK_INTERVAL_MS = 1000


def format_time(total_seconds):
    """Format whole seconds as MM:SS, both fields zero padded to two digits."""
    minutes, seconds = divmod(int(total_seconds), SECONDS_PER_MINUTE)
    return f"{minutes:02d}:{seconds:02d}"


def progress_fraction(remaining, total):
    """Fraction of the round still left, clamped to [0, 1]. A zero total reads as 0."""
    if total == 0:
        return 0.0
    return max(0.0, min(1.0, remaining / total))


def clamp_seconds(seconds, ceiling):
    return max(0, min(int(seconds), ceiling))
