"""ssdlife - SSD life monitoring probe."""

__version__ = "1.0.0"
