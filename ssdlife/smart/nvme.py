"""NVMe health log fields from smartctl output."""

import re


def percentage_used(text: str) -> int | None:
    """Percentage Used from the NVMe SMART/Health log, or None."""
    match = re.search(r"^Percentage Used:\s*(\d+)%", text, re.MULTILINE)
    if not match:
        return None
    return int(match.group(1))


def critical_warning(text: str) -> int | None:
    """Critical Warning bit field from the NVMe SMART/Health log, or None."""
    match = re.search(r"^Critical Warning:\s*(0x[0-9a-fA-F]+|\d+)", text, re.MULTILINE)
    if not match:
        return None
    return int(match.group(1), 0)
