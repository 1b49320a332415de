import time


def unix_now() -> int:
    return int(time.time())


def clean(value: object) -> str:
    """Stringify a loosely typed value, None becomes an empty string."""
    return "" if value is None else str(value).strip()
