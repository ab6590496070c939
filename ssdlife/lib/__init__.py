"""Shared utility library for ssdlife."""

from ssdlife.lib.process import CommandError, check_tool, run_command

__all__ = [
    "CommandError",
    "check_tool",
    "run_command",
]
