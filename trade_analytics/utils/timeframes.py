"""Window string to timedelta conversion."""

from datetime import timedelta


def window_to_timedelta(window: str) -> timedelta:
    """Convert a window string (e.g. '90s', '30m', '2h', '1d', '1w') to a timedelta."""
    w = window.strip().lower()
    if not w or not w[:-1].isdigit():
        raise ValueError(f"Unsupported window: {window}")
    n = int(w[:-1])
    if w.endswith("s"):
        return timedelta(seconds=n)
    if w.endswith("m"):
        return timedelta(minutes=n)
    if w.endswith("h"):
        return timedelta(hours=n)
    if w.endswith("d"):
        return timedelta(days=n)
    if w.endswith("w"):
        return timedelta(weeks=n)
    raise ValueError(f"Unsupported window: {window}")
