from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_iso_timestamp(value) -> str:
    """Convert epoch milliseconds or an ISO-8601 string to `YYYY-MM-DDTHH:MM:SS.mmmZ` (UTC).

    Naive ISO strings are read as UTC. Raises ValueError for anything else.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        dt = _EPOCH + timedelta(milliseconds=value)
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValueError(f"Invalid timestamp: {value!r}")
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        dt = dt.astimezone(timezone.utc)
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def safe_json(obj):
    """Recursively convert non-JSON-safe types (bytes, sets, tuples)."""
    if isinstance(obj, (bytes, bytearray)):
        return obj.decode("utf-8", errors="replace")
    if isinstance(obj, dict):
        return {k: safe_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [safe_json(v) for v in obj]
    return obj
