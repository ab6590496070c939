"""
Life check for a single SSD.

check_device() runs the preflight checks, then takes the NVMe or the
ATA path. The ATA path identifies the model, looks up its policy and
either reads the configured attribute or hands over to a vendor tool.
Every failure ends in a CheckResult; nothing here raises for bad
drives, missing tools or inconsistent tables.
"""

import re
from typing import TYPE_CHECKING, Iterable, Mapping

from ssdlife.core.logging import CheckLogger
from ssdlife.lib.process import CommandError, run_command
from ssdlife.smart import nvme
from ssdlife.smart.attributes import (
    ExtractionError,
    failing_attributes,
    find_record,
    labelled_value,
    model_text_from_info,
)
from ssdlife.smart.extract import extract
from ssdlife.smart.models import MODEL_RULES, POLICY_TABLE, ModelRule, PolicyEntry, PolicyError, identify, lookup
from ssdlife.smart.normalize import NormalizationError, normalize
from ssdlife.smart.vendor import CUSTOM_CHECKS, VendorToolError
from ssdlife.smart.verdict import CheckResult, Verdict, evaluate

if TYPE_CHECKING:
    from ssdlife.core.context import Context


# smartctl exit status bits 0 and 1 mean the command line or device open
# failed; higher bits describe drive state and still come with output.
SMARTCTL_OK_STATUS = 0xFC

SOLID_STATE = "Solid State Device"


def read_info(device: str, context: "Context", timeout: float | None = 30) -> str:
    """Identity section of smartctl."""
    return run_command(["smartctl", "-i", device], context=context, timeout=timeout, ok_status=SMARTCTL_OK_STATUS)


def read_attributes(device: str, context: "Context", timeout: float | None = 30) -> str:
    """Attribute table (ATA) or health log (NVMe) of smartctl."""
    return run_command(["smartctl", "-A", device], context=context, timeout=timeout, ok_status=SMARTCTL_OK_STATUS)


def is_nvme(device: str, info_text: str) -> bool:
    """True for NVMe devices."""
    if "nvme" in device.rsplit("/", 1)[-1]:
        return True
    return re.search(r"^NVMe Version:", info_text, re.MULTILINE) is not None or "NVMe" in (
        labelled_value(info_text, "Model Number") or ""
    )


def preflight(device: str, context: "Context") -> CheckResult | None:
    """UNKNOWN result if the check cannot run at all, else None."""
    if context.geteuid() != 0:
        return CheckResult(Verdict.UNKNOWN, "must be run as root to read SMART data", device)
    if not context.check_tool("smartctl"):
        return CheckResult(Verdict.UNKNOWN, "smartctl not found. Install smartmontools package.", device)
    if not device:
        return CheckResult(Verdict.UNKNOWN, "no device given", device)
    if not context.file_exists(device):
        return CheckResult(Verdict.UNKNOWN, f"device {device} not found", device)
    return None


def check_nvme(
    device: str,
    context: "Context",
    warning: int,
    critical: int,
    timeout: float | None = 30,
) -> CheckResult:
    """Judge an NVMe drive by its Percentage Used field."""
    try:
        text = read_attributes(device, context, timeout)
    except CommandError as e:
        return CheckResult(Verdict.UNKNOWN, str(e), device, source="nvme")

    flags = nvme.critical_warning(text)
    if flags:
        return CheckResult(
            Verdict.CRITICAL,
            f"{device} reports critical warning 0x{flags:02x}",
            device,
            source="nvme",
        )

    percent = nvme.percentage_used(text)
    if percent is None:
        return CheckResult(Verdict.UNKNOWN, f"{device}: no Percentage Used in SMART data", device, source="nvme")

    # Percentage Used keeps counting past 100 once rated endurance is used up
    return _judge(
        device,
        percent,
        warning,
        critical,
        bounded=False,
        source="nvme",
        telemetry_field="Percentage Used",
    )


def check_ata(
    device: str,
    info_text: str,
    context: "Context",
    warning: int,
    critical: int,
    vendor_tool: str | None = None,
    timeout: float | None = 30,
    rules: Iterable[ModelRule] = MODEL_RULES,
    policies: Mapping[str, PolicyEntry] = POLICY_TABLE,
    logger: CheckLogger | None = None,
) -> CheckResult:
    """
    Judge an ATA SSD by the life attribute its model policy names.

    Args:
        device: Block device path
        info_text: smartctl -i output for the device
        context: Execution context
        warning: Percent used at which to warn
        critical: Percent used at which to go critical
        vendor_tool: Path to the vendor tool for custom-check models
        timeout: Seconds allowed per external command
        rules: Model rules in priority order
        policies: Policy per model key
        logger: Run log

    Returns:
        CheckResult for the drive
    """
    logger = logger or CheckLogger(device)

    model_text = model_text_from_info(info_text)
    key = identify(model_text, rules)
    if key is None:
        shown = model_text.replace("\n", " / ") or "unknown model"
        logger.warning("Model not supported", model_text=model_text)
        return CheckResult(
            Verdict.UNKNOWN,
            f"{device}: model '{shown}' not supported; add it to 'models' in the ssdlife config",
            device,
        )

    try:
        policy = lookup(key, policies)
    except PolicyError as e:
        logger.error("Policy lookup failed", model=key, error=str(e))
        return CheckResult(Verdict.UNKNOWN, f"script configuration error: {e}", device, model_key=key)

    logger.info(
        "Model identified",
        model=key,
        telemetry_field=policy.telemetry_field,
        value_kind=policy.value_kind.value,
        custom_check=policy.custom_check,
    )

    try:
        text = read_attributes(device, context, timeout)
    except CommandError as e:
        return CheckResult(Verdict.UNKNOWN, str(e), device, model_key=key, source="ata")

    failing = failing_attributes(text)
    if failing:
        names = ", ".join(f"{r.name} ({r.when_failed})" for r in failing)
        return CheckResult(
            Verdict.CRITICAL,
            f"{device} has failing SMART attributes: {names}",
            device,
            model_key=key,
            source="ata",
        )

    if policy.custom_check:
        custom = CUSTOM_CHECKS.get(key)
        if custom is None:
            return CheckResult(
                Verdict.UNKNOWN,
                f"script configuration error: no custom check for model '{key}'",
                device,
                model_key=key,
            )
        try:
            percent = custom(device, vendor_tool, context, timeout=timeout)
        except (VendorToolError, NormalizationError) as e:
            return CheckResult(Verdict.UNKNOWN, f"{device}: {e}", device, model_key=key, source="vendor")
        return _judge(device, percent, warning, critical, model_key=key, source="vendor")

    if not policy.readable:
        return CheckResult(
            Verdict.UNKNOWN,
            f"script configuration error: model '{key}' has no readable life attribute",
            device,
            model_key=key,
        )

    try:
        record = find_record(text, policy.telemetry_field)
        value, threshold = extract(record, policy.value_kind)
        percent = normalize(value, threshold)
    except (ExtractionError, NormalizationError) as e:
        return CheckResult(
            Verdict.UNKNOWN,
            f"{device}: {e}",
            device,
            model_key=key,
            source="ata",
            telemetry_field=policy.telemetry_field,
        )

    return _judge(
        device,
        percent,
        warning,
        critical,
        model_key=key,
        source="ata",
        telemetry_field=policy.telemetry_field,
    )


def check_device(
    device: str,
    context: "Context",
    warning: int = 80,
    critical: int = 90,
    vendor_tool: str | None = None,
    timeout: float | None = 30,
    rules: Iterable[ModelRule] = MODEL_RULES,
    policies: Mapping[str, PolicyEntry] = POLICY_TABLE,
    logger: CheckLogger | None = None,
) -> CheckResult:
    """
    Check one drive and return its verdict.

    Same inputs always give the same result; nothing is cached between
    calls.
    """
    logger = logger or CheckLogger(device)

    result = preflight(device, context)
    if result is None:
        result = _check(device, context, warning, critical, vendor_tool, timeout, rules, policies, logger)

    level = "info" if result.verdict is Verdict.OK else "warning"
    getattr(logger, level)(
        "Check finished",
        verdict=result.verdict.name,
        percent_used=result.percent_used,
        model=result.model_key,
        detail=result.message,
    )
    return result


def _check(device, context, warning, critical, vendor_tool, timeout, rules, policies, logger) -> CheckResult:
    try:
        info_text = read_info(device, context, timeout)
    except CommandError as e:
        return CheckResult(Verdict.UNKNOWN, str(e), device)

    if is_nvme(device, info_text):
        return check_nvme(device, context, warning, critical, timeout)

    rotation = labelled_value(info_text, "Rotation Rate")
    if rotation != SOLID_STATE:
        return CheckResult(
            Verdict.UNKNOWN,
            f"{device} is not an SSD (rotation rate: {rotation or 'not reported'})",
            device,
        )

    return check_ata(
        device,
        info_text,
        context,
        warning,
        critical,
        vendor_tool=vendor_tool,
        timeout=timeout,
        rules=rules,
        policies=policies,
        logger=logger,
    )


def _judge(
    device: str,
    percent: int,
    warning: int,
    critical: int,
    bounded: bool = True,
    **details,
) -> CheckResult:
    verdict = evaluate(percent, warning, critical, bounded=bounded)
    if verdict is Verdict.UNKNOWN:
        message = f"{device} computed {percent}% life used, outside 0-100"
    else:
        message = f"{device} {percent}% life used (warning {warning}%, critical {critical}%)"
    return CheckResult(verdict, message, device, percent_used=percent, **details)
