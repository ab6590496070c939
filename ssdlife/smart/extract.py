"""Selection of the value/threshold pair a policy asks for."""

from decimal import Decimal, InvalidOperation

from ssdlife.smart.attributes import ExtractionError, TelemetryRecord
from ssdlife.smart.models import ValueKind


def _number(field: str, text: str) -> Decimal:
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise ExtractionError(f"{field} value '{text}' is not numeric") from None
    if not number.is_finite():
        raise ExtractionError(f"{field} value '{text}' is not numeric")
    return number


def extract(record: TelemetryRecord, kind: ValueKind) -> tuple[Decimal, Decimal]:
    """
    Pick the life value and its threshold from one attribute record.

    Args:
        record: Attribute line of the drive's life attribute
        kind: Column the drive reports life in

    Returns:
        (value, threshold); raw values always use threshold 0

    Raises:
        ExtractionError: For NOT_READABLE or non-numeric columns
    """
    if kind is ValueKind.WORST:
        return _number("WORST", record.worst), _number("THRESH", record.threshold)
    if kind is ValueKind.RAW:
        return _number("RAW_VALUE", record.raw), Decimal(0)
    if kind is ValueKind.NORM:
        return _number("VALUE", record.value), _number("THRESH", record.threshold)
    raise ExtractionError(f"Attribute {record.name} cannot be read generically ({kind.value})")
