"""Command-line interface for ssdlife."""

import argparse
import sys
from pathlib import Path

from ssdlife import __version__
from ssdlife.check import check_device
from ssdlife.core.config import ConfigError, load_config
from ssdlife.core.context import Context
from ssdlife.core.logging import CheckLogger
from ssdlife.core.output import Output
from ssdlife.smart.models import PolicyError, rules_from_config
from ssdlife.smart.verdict import Verdict, validate_thresholds


class ProbeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits UNKNOWN on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(int(Verdict.UNKNOWN), f"SSD UNKNOWN: {message}\n")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = ProbeArgumentParser(
        prog="ssdlife",
        description="Report how much of an SSD's rated life is used",
        epilog="Exit codes: 0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ssdlife {__version__}",
    )
    parser.add_argument("device", nargs="?", help="Drive to check (e.g. /dev/sda, /dev/nvme0)")
    parser.add_argument(
        "-w",
        "--warning",
        type=int,
        metavar="PERCENT",
        help="Percent life used that raises a warning (default: 80)",
    )
    parser.add_argument(
        "-c",
        "--critical",
        type=int,
        metavar="PERCENT",
        help="Percent life used that is critical (default: 90)",
    )
    parser.add_argument(
        "-t",
        "--vendor-tool",
        metavar="PATH",
        help="Vendor tool for models smartctl cannot judge (Micron msecli)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Timeout per external command in seconds (default: 30)",
    )
    parser.add_argument("--config", type=Path, help="YAML config file")
    parser.add_argument("--log-dir", type=Path, help="Write a JSONL run log below this directory")
    parser.add_argument("--format", choices=["plain", "json"], default="plain")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show details below the status line")
    parser.add_argument(
        "--list-models",
        action="store_true",
        help="List supported ATA models in match order and exit",
    )
    return parser


def list_models(rules, policies, output: Output) -> int:
    """Emit the model table in match order."""
    models = []
    for rule in rules:
        policy = policies[rule.key]
        models.append({
            "key": rule.key,
            "patterns": list(rule.patterns),
            "field": policy.telemetry_field,
            "kind": policy.value_kind.value,
            "custom_check": policy.custom_check,
        })
    output.emit({"models": models})
    output.set_summary(f"{len(models)} supported models")
    return 0


def _settings_problem(warning, critical, timeout) -> str | None:
    """Error message for unusable thresholds or timeout, or None."""
    try:
        warning, critical = int(warning), int(critical)
    except (TypeError, ValueError):
        return "Thresholds must be integers"
    problem = validate_thresholds(warning, critical)
    if problem:
        return problem
    numeric = isinstance(timeout, (int, float)) and not isinstance(timeout, bool)
    if not numeric or not 0 < timeout < float("inf"):
        return f"Timeout must be a positive number of seconds, got {timeout!r}"
    return None


def _unknown(output: Output, problem: str, opts) -> int:
    output.error(problem)
    output.set_summary(f"SSD UNKNOWN: {problem}")
    output.render(opts.format, opts.verbose)
    return int(Verdict.UNKNOWN)


def run(args: list[str], output: Output, context: Context) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context

    Returns:
        0 = OK, 1 = WARNING, 2 = CRITICAL, 3 = UNKNOWN
    """
    parser = create_parser()
    opts = parser.parse_args(args)

    try:
        config = load_config(opts.config)
    except ConfigError as e:
        return _unknown(output, str(e), opts)

    warning = opts.warning if opts.warning is not None else config["warning"]
    critical = opts.critical if opts.critical is not None else config["critical"]
    timeout = opts.timeout if opts.timeout is not None else config["timeout"]
    vendor_tool = opts.vendor_tool or config["vendor_tool"]
    log_dir = opts.log_dir or config["log_dir"]

    try:
        rules, policies = rules_from_config(config["models"])
    except PolicyError as e:
        return _unknown(output, f"script configuration error: {e}", opts)

    if opts.list_models:
        code = list_models(rules, policies, output)
        output.render(opts.format, verbose=True)
        return code

    if not opts.device:
        parser.error("the following arguments are required: device")

    problem = _settings_problem(warning, critical, timeout)
    if problem:
        return _unknown(output, problem, opts)
    warning, critical = int(warning), int(critical)

    with CheckLogger.for_dir(opts.device, log_dir) as logger:
        result = check_device(
            opts.device,
            context,
            warning=warning,
            critical=critical,
            vendor_tool=vendor_tool,
            timeout=timeout,
            rules=rules,
            policies=policies,
            logger=logger,
        )

    output.emit(result.to_dict())
    output.emit({"warning": warning, "critical": critical})
    if logger.failure:
        output.warning(logger.failure)
    if result.verdict is Verdict.UNKNOWN:
        output.error(result.message)
    output.set_summary(result.summary)
    output.render(opts.format, opts.verbose)
    return int(result.verdict)


def main(argv: list[str] | None = None) -> int:
    """Console script entry point."""
    if argv is None:
        argv = sys.argv[1:]
    return run(argv, Output(), Context())


if __name__ == "__main__":
    sys.exit(main())
