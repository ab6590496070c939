"""Process utilities for the probe."""

import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ssdlife.core.context import Context


class CommandError(Exception):
    """Error running a command."""

    pass


def run_command(
    cmd: list[str],
    context: "Context | None" = None,
    timeout: float | None = 30,
    ok_status: int = 0,
) -> str:
    """
    Run a command and return its output.

    Args:
        cmd: Command and arguments
        context: Execution context (for testing)
        timeout: Seconds before the command is abandoned
        ok_status: Bitmask of exit status bits that still count as
            success (smartctl reports attribute state in its status)

    Returns:
        Command stdout

    Raises:
        CommandError: If the command cannot run, times out or fails
    """
    if context is None:
        from ssdlife.core.context import Context
        context = Context()

    try:
        result = context.run(cmd, check=False, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"Command timed out after {timeout}s: {' '.join(cmd)}") from e
    except OSError as e:
        raise CommandError(f"Command failed: {' '.join(cmd)}: {e}") from e

    if result.returncode & ~ok_status:
        detail = (result.stderr or result.stdout or "").strip().splitlines()
        reason = detail[-1] if detail else f"exit status {result.returncode}"
        raise CommandError(f"Command failed: {' '.join(cmd)}: {reason}")

    return result.stdout


def check_tool(
    name: str,
    context: "Context | None" = None,
    required: bool = False,
) -> bool:
    """
    Check if a tool exists in PATH.

    Args:
        name: Tool name to check
        context: Execution context (for testing)
        required: Raise if tool is missing

    Returns:
        True if tool exists

    Raises:
        CommandError: If required=True and tool is missing
    """
    if context is None:
        from ssdlife.core.context import Context
        context = Context()

    exists = context.check_tool(name)

    if required and not exists:
        raise CommandError(f"Required tool not found: {name}")

    return exists
