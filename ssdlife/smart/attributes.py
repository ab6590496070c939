"""Parsing of smartctl attribute tables and identity sections."""

import re
from dataclasses import dataclass


class ExtractionError(Exception):
    """Telemetry is missing or not usable."""

    pass


class AttributeNotFound(ExtractionError):
    """The attribute dump has no line for the requested attribute."""

    pass


# WHEN_FAILED column markers
FAILING_NOW = "FAILING_NOW"
FAILED_IN_PAST = "In_the_past"

# ID# ATTRIBUTE_NAME FLAG VALUE WORST THRESH TYPE UPDATED WHEN_FAILED RAW_VALUE
ATTRIBUTE_LINE = re.compile(
    r"^\s*(?P<id>\d+)\s+(?P<name>\S+)\s+(?P<flag>0x[0-9a-fA-F]+)\s+"
    r"(?P<value>\S+)\s+(?P<worst>\S+)\s+(?P<threshold>\S+)\s+"
    r"(?P<type>\S+)\s+(?P<updated>\S+)\s+(?P<when_failed>\S+)\s+(?P<raw>.+?)\s*$"
)

LABELLED_LINE = r"^{label}:\s*(.*?)\s*$"


@dataclass(frozen=True)
class TelemetryRecord:
    """One attribute line of a smartctl attribute table."""

    id: int
    name: str
    flag: str
    value: str
    worst: str
    threshold: str
    type: str
    updated: str
    when_failed: str
    raw: str

    @property
    def failing(self) -> bool:
        """True if the drive flags this attribute as failing or failed."""
        return self.when_failed in (FAILING_NOW, FAILED_IN_PAST)


def parse_attribute_line(line: str) -> TelemetryRecord | None:
    """Parse one attribute table line, or None for any other line."""
    match = ATTRIBUTE_LINE.match(line)
    if not match:
        return None
    fields = match.groupdict()
    # "33 (Min/Max 20/45)" style raw values keep only the leading token
    raw = fields["raw"].split()[0]
    return TelemetryRecord(
        id=int(fields["id"]),
        name=fields["name"],
        flag=fields["flag"],
        value=fields["value"],
        worst=fields["worst"],
        threshold=fields["threshold"],
        type=fields["type"],
        updated=fields["updated"],
        when_failed=fields["when_failed"],
        raw=raw,
    )


def parse_attributes(text: str) -> list[TelemetryRecord]:
    """Parse every attribute line in a smartctl -A dump."""
    records = []
    for line in text.splitlines():
        record = parse_attribute_line(line)
        if record is not None:
            records.append(record)
    return records


def find_record(text: str, name: str) -> TelemetryRecord:
    """
    Isolate the record whose attribute name equals name.

    Raises:
        AttributeNotFound: If no attribute line carries that name
    """
    for record in parse_attributes(text):
        if record.name == name:
            return record
    raise AttributeNotFound(f"Attribute {name} not found in SMART data")


def failing_attributes(text: str) -> list[TelemetryRecord]:
    """Attributes flagged FAILING_NOW or In_the_past."""
    return [r for r in parse_attributes(text) if r.failing]


def labelled_value(text: str, label: str) -> str | None:
    """Value of the first "Label: value" line, or None."""
    match = re.search(LABELLED_LINE.format(label=re.escape(label)), text, re.MULTILINE)
    if not match:
        return None
    return match.group(1)


def model_text_from_info(info_text: str) -> str:
    """
    Drive model text used for model identification.

    Both the drivedb family name and the reported model take part, so
    either one can carry the identifying vendor string.
    """
    parts = []
    for label in ("Model Family", "Device Model"):
        value = labelled_value(info_text, label)
        if value:
            parts.append(value)
    return "\n".join(parts)
