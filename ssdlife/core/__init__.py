"""Core ssdlife functionality."""

from ssdlife.core.config import ConfigError, load_config
from ssdlife.core.context import Context
from ssdlife.core.logging import CheckLogger
from ssdlife.core.output import Output

__all__ = [
    "CheckLogger",
    "ConfigError",
    "Context",
    "Output",
    "load_config",
]
