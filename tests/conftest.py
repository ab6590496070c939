"""Shared test fixtures."""

import subprocess
import sys
from pathlib import Path

import pytest

# Add project root to path for package imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class MockContext:
    """Mock Context for testing checks without real system access."""

    def __init__(
        self,
        tools_available: list[str] | None = None,
        command_outputs: dict[tuple, str | Exception | subprocess.CompletedProcess] | None = None,
        files: list[str] | None = None,
        executables: list[str] | None = None,
        euid: int = 0,
    ):
        self.tools_available = set(tools_available or [])
        self.command_outputs = command_outputs or {}
        self.files = set(files or [])
        self.executables = set(executables or [])
        self.euid = euid
        self.commands_run: list[list[str]] = []
        self.timeouts: list[float | None] = []

    def check_tool(self, name: str) -> bool:
        """Check if tool is in mocked available list."""
        return name in self.tools_available

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        timeout: float | None = None,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """Return mocked command output."""
        self.commands_run.append(cmd)
        self.timeouts.append(timeout)
        key = tuple(cmd)
        if key not in self.command_outputs:
            raise KeyError(f"No mock output for command: {cmd}")

        output = self.command_outputs[key]
        if isinstance(output, Exception):
            raise output

        # Allow passing CompletedProcess directly for more control (e.g., non-zero returncode)
        if isinstance(output, subprocess.CompletedProcess):
            return output

        return subprocess.CompletedProcess(
            cmd,
            returncode=0,
            stdout=output,
            stderr="",
        )

    def file_exists(self, path: str) -> bool:
        """Check if path is in mocked files."""
        return path in self.files or path in self.executables

    def is_executable(self, path: str) -> bool:
        """Check if path is a mocked executable."""
        return path in self.executables

    def geteuid(self) -> int:
        """Return mocked effective user id."""
        return self.euid


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


def load_fixture(category: str, name: str) -> str:
    """Load a fixture file by category and name."""
    fixture_path = FIXTURES_DIR / category / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()


def smartctl_context(mock_context, device: str, info: str, attrs: str | None = None, **kwargs):
    """MockContext for one drive answering smartctl -i and -A from fixtures."""
    outputs = {("smartctl", "-i", device): load_fixture("smartctl", info)}
    if attrs is not None:
        outputs[("smartctl", "-A", device)] = load_fixture("smartctl", attrs)
    outputs.update(kwargs.pop("command_outputs", {}))
    return mock_context(
        tools_available=kwargs.pop("tools_available", ["smartctl"]),
        command_outputs=outputs,
        files=kwargs.pop("files", [device]),
        **kwargs,
    )
