def isoformat_utc(value):
    """Render a naive UTC datetime the way browsers print ``Date.toISOString()``."""
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"
