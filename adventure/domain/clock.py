import time

def now_ms() -> int:
    """Horodatage epoch en millisecondes (format des snapshots)."""
    return int(time.time() * 1000)
