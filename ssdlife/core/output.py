"""Structured output helper for the life check."""

import json
from typing import Any


class Output:
    """Helper for structured check output."""

    def __init__(self):
        self.data: dict[str, Any] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self._summary: str | None = None
        self._printed: bool = False

    def emit(self, data: dict[str, Any]) -> None:
        """Store structured output data."""
        self.data.update(data)

    def error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    def warning(self, message: str) -> None:
        """Record a warning message."""
        self.warnings.append(message)

    def set_summary(self, summary: str) -> None:
        """Set a one-line summary."""
        self._summary = summary

    @property
    def summary(self) -> str:
        """Get summary or generate from data."""
        if self._summary:
            return self._summary
        if self.errors:
            return f"Error: {self.errors[0]}"
        if self.warnings:
            return f"Warning: {self.warnings[0]}"
        return "ok"

    def to_json(self) -> str:
        """Return data, summary and messages as JSON string."""
        payload = dict(self.data)
        payload["summary"] = self.summary
        if self.errors:
            payload["errors"] = self.errors
        if self.warnings:
            payload["warnings"] = self.warnings
        return json.dumps(payload, indent=2, default=str)

    def to_plain(self, verbose: bool = False) -> str:
        """Return summary line, followed by details when verbose."""
        lines = [self.summary]
        if not verbose:
            return "\n".join(lines)

        for key, value in self.data.items():
            if value is None:
                continue
            self._render_value(lines, key, value, indent=1)

        for warning in self.warnings:
            lines.append(f"  [WARNING] {warning}")

        return "\n".join(lines)

    def render(self, format: str = "plain", verbose: bool = False) -> None:
        """Print output in the specified format.

        Args:
            format: Output format - "json" or "plain"
            verbose: Include details below the summary line (plain only)
        """
        if self._printed:
            return
        self._printed = True

        if format == "json":
            print(self.to_json())
        else:
            print(self.to_plain(verbose=verbose))

    def _render_value(self, lines: list, key: str, value: Any, indent: int = 0) -> None:
        """Recursively render a value with proper formatting."""
        prefix = "  " * indent
        display_key = str(key).replace("_", " ").title()

        if isinstance(value, dict):
            lines.append(f"{prefix}{display_key}:")
            for k, v in value.items():
                self._render_value(lines, k, v, indent + 1)
        elif isinstance(value, list):
            if not value:
                lines.append(f"{prefix}{display_key}: (none)")
            else:
                lines.append(f"{prefix}{display_key}:")
                for item in value:
                    lines.append(f"{prefix}  - {item}")
        elif isinstance(value, bool):
            lines.append(f"{prefix}{display_key}: {'yes' if value else 'no'}")
        else:
            lines.append(f"{prefix}{display_key}: {value}")
