"""JSONL logging for check runs."""

import contextlib
import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any


# Log level ordering
LOG_LEVELS = {"debug": 0, "info": 1, "warning": 2, "error": 3}

LOG_NAME = "ssdlife"


def get_log_path(base_path: Path, log_date: date | None = None) -> Path:
    """
    Get the log file path for a run.

    Args:
        base_path: Base directory for logs
        log_date: Day the log belongs to (default: today)

    Returns:
        Path to the log file: {base}/{date}/ssdlife.jsonl
    """
    if log_date is None:
        log_date = date.today()
    return Path(base_path) / log_date.isoformat() / f"{LOG_NAME}.jsonl"


class CheckLogger:
    """
    JSONL logger for check runs.

    Writes structured log entries to a JSONL file. A logger created
    without a path discards everything, so callers can log
    unconditionally.
    """

    def __init__(self, check: str, log_path: Path | None = None):
        """
        Initialize logger.

        Args:
            check: Name recorded in every entry (usually the device path)
            log_path: Path to log file (None disables logging)
        """
        self.check = check
        self.log_path = log_path
        self.failure: str | None = None
        self._file = None

    @classmethod
    def for_dir(cls, check: str, log_dir: str | Path | None) -> "CheckLogger":
        """Create a logger writing below log_dir, or a disabled one."""
        if not log_dir:
            return cls(check)
        return cls(check, log_path=get_log_path(Path(log_dir)))

    @property
    def enabled(self) -> bool:
        """True if entries are written anywhere."""
        return self.log_path is not None

    def _ensure_file(self) -> None:
        """Ensure log file is open."""
        if self._file is None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_path, "a")

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        if not self.enabled:
            return
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "check": self.check,
            "message": message,
            **extra,
        }
        try:
            self._ensure_file()
            self._file.write(json.dumps(entry, default=str) + "\n")
            self._file.flush()
        except OSError as e:
            # Later entries are dropped; failure holds the reason
            self.failure = f"Run log disabled: {e}"
            self.log_path = None
            broken, self._file = self._file, None
            if broken is not None:
                with contextlib.suppress(OSError):
                    broken.close()

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message."""
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message."""
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "CheckLogger":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


def query_logs(
    base_path: Path,
    log_date: date | None = None,
    min_level: str = "debug",
    check: str | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """
    Query log entries.

    Args:
        base_path: Base directory for logs
        log_date: Date to query (default: today)
        min_level: Minimum log level to include
        check: Only return entries recorded for this check name
        limit: Maximum number of entries to return

    Returns:
        List of log entries matching criteria
    """
    log_file = get_log_path(base_path, log_date)

    if not log_file.exists():
        return []

    min_level_num = LOG_LEVELS.get(min_level, 0)
    results = []

    with open(log_file) as f:
        for line in f:
            if not line.strip():
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError:
                continue
            if check is not None and entry.get("check") != check:
                continue
            entry_level = LOG_LEVELS.get(entry.get("level", "debug"), 0)
            if entry_level >= min_level_num:
                results.append(entry)
                if limit and len(results) >= limit:
                    break

    return results
