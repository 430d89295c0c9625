"""Human-readable formatting for port details."""


def format_lifetime(seconds: int | None) -> str:
    if seconds is None:
        return "-"
    days, rem = divmod(seconds, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_memory(kilobytes: float | None) -> str:
    if kilobytes is None:
        return "-"
    if kilobytes >= 1024 * 1024:
        return f"{kilobytes / (1024 * 1024):.1f} GB"
    if kilobytes >= 1024:
        return f"{kilobytes / 1024:.1f} MB"
    return f"{kilobytes:.0f} KB"


def format_cpu(percent: float | None) -> str:
    if percent is None:
        return "-"
    return f"{percent:.1f}%"
