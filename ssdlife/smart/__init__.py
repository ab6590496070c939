"""SSD life telemetry: model rules, extraction and normalization."""

from ssdlife.smart.attributes import (
    AttributeNotFound,
    ExtractionError,
    TelemetryRecord,
    find_record,
    model_text_from_info,
    parse_attributes,
)
from ssdlife.smart.extract import extract
from ssdlife.smart.models import (
    MODEL_RULES,
    POLICY_TABLE,
    ModelRule,
    PolicyEntry,
    PolicyError,
    ValueKind,
    identify,
    lookup,
    verify_table,
)
from ssdlife.smart.normalize import NormalizationError, normalize
from ssdlife.smart.verdict import CheckResult, Verdict, evaluate

__all__ = [
    "AttributeNotFound",
    "CheckResult",
    "ExtractionError",
    "MODEL_RULES",
    "ModelRule",
    "NormalizationError",
    "POLICY_TABLE",
    "PolicyEntry",
    "PolicyError",
    "TelemetryRecord",
    "ValueKind",
    "Verdict",
    "evaluate",
    "extract",
    "find_record",
    "identify",
    "lookup",
    "model_text_from_info",
    "normalize",
    "parse_attributes",
    "verify_table",
]
