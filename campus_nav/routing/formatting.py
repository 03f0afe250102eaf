METERS_PER_MILE = 1609.34


def format_duration(seconds: float) -> str:
    """``"1h 5m"`` from one hour up, ``"42m"`` below it."""
    seconds = max(0, int(seconds))
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"


def format_distance(meters: float) -> str:
    km = meters / 1000
    miles = meters / METERS_PER_MILE
    return f"{km:.2f} km ({miles:.2f} mi)"
