from datetime import datetime, timezone
from typing import Optional


def from_epoch_ms(value) -> Optional[datetime]:
    """Stats API timestamps are epoch milliseconds; None when absent or garbage."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def discord_timestamp(value, style: str = "F") -> Optional[str]:
    dt = from_epoch_ms(value)
    if dt is None:
        return None
    return f"<t:{int(dt.timestamp())}:{style}>"


def format_uptime(seconds: float) -> str:
    """Same shape as the old bot: '<h>H <m>M <s>S' (days fold into hours)."""
    total = max(0, int(seconds))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours}H {minutes}M {secs}S"
