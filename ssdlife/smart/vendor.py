"""Life readings from vendor tools for drives smartctl cannot judge."""

import re
from typing import TYPE_CHECKING

from ssdlife.lib.process import CommandError, run_command
from ssdlife.smart.normalize import normalize

if TYPE_CHECKING:
    from ssdlife.core.context import Context


class VendorToolError(Exception):
    """Vendor tool missing, failing or printing nothing usable."""

    pass


# "Percentage Life Remaining : 98%", "Drive Life Remaining: 98 %"
LIFE_REMAINING = re.compile(r"Life\s+Remaining\s*[:=]\s*(\d+)\s*%?", re.IGNORECASE)


def parse_life_remaining(text: str) -> int:
    """
    Life remaining percentage from msecli output.

    Raises:
        VendorToolError: If no life remaining line is present
    """
    match = LIFE_REMAINING.search(text)
    if not match:
        raise VendorToolError("No life remaining value in vendor tool output")
    return int(match.group(1))


def micron_percent_used(
    device: str,
    tool: str | None,
    context: "Context",
    timeout: float | None = 30,
) -> int:
    """
    Percent life used of a Micron data-centre drive via msecli.

    Args:
        device: Block device path
        tool: Path to the msecli binary
        context: Execution context
        timeout: Seconds before msecli is abandoned

    Returns:
        Percent of life used

    Raises:
        VendorToolError: If msecli is unavailable or its output unusable
    """
    if not tool:
        raise VendorToolError("This model needs the Micron msecli tool; pass its path with --vendor-tool")
    if not context.is_executable(tool):
        raise VendorToolError(f"Vendor tool {tool} is missing or not executable")

    try:
        text = run_command([tool, "-L", "-n", device], context=context, timeout=timeout)
    except CommandError as e:
        raise VendorToolError(str(e)) from e

    return normalize(parse_life_remaining(text), 0)


# Model keys whose policy sets custom_check, and the routine reading them
CUSTOM_CHECKS = {
    "micron_dc": micron_percent_used,
}
