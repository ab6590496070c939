"""
Supported ATA SSD models and how their life attribute is read.

Two tables drive the check:

- MODEL_RULES: ordered (key, patterns) pairs. The first rule with a
  pattern found in the drive's model text wins, so specific rules must
  come before generic ones that would also match the same drive.
- POLICY_TABLE: model key -> attribute name, value kind and whether a
  vendor tool has to be used instead of the attribute table.

verify_table() checks both tables agree and runs at import time.
"""

import enum
from dataclasses import dataclass
from typing import Any, Iterable, Mapping


class PolicyError(Exception):
    """Model rules and policies are inconsistent or incomplete."""

    pass


NOT_READABLE = "not-readable"


class ValueKind(enum.Enum):
    """Which attribute column carries the life value."""

    WORST = "worst"
    RAW = "raw"
    NORM = "norm"
    NOT_READABLE = NOT_READABLE


@dataclass(frozen=True)
class ModelRule:
    """A model key and the substrings identifying it."""

    key: str
    patterns: tuple[str, ...]

    def matches(self, model_text: str) -> bool:
        """True if any pattern occurs in model_text, ignoring case."""
        text = model_text.casefold()
        return any(pattern.casefold() in text for pattern in self.patterns)


@dataclass(frozen=True)
class PolicyEntry:
    """How to read life for one model key."""

    telemetry_field: str
    value_kind: ValueKind
    custom_check: bool = False

    @property
    def readable(self) -> bool:
        """True if the attribute table alone yields a life value."""
        return self.telemetry_field != NOT_READABLE and self.value_kind is not ValueKind.NOT_READABLE


# Order matters: Micron data-centre drives before the Crucial/Micron
# consumer family, Phison-based drives before the generic "SATA SSD".
MODEL_RULES: tuple[ModelRule, ...] = (
    ModelRule("micron_dc", ("Micron 5100", "Micron 5200", "Micron 5300", "Micron_5100", "Micron_5200", "Micron_5300")),
    ModelRule("crucial_micron", ("Crucial", "Micron", "CT250", "CT500", "CT1000", "CT2000")),
    ModelRule("samsung", ("Samsung",)),
    ModelRule("intel", ("Intel",)),
    ModelRule("kingston", ("Kingston",)),
    ModelRule("sandisk", ("SanDisk", "WD Blue / Red / Green SSDs", "WDC WDS")),
    ModelRule("phison", ("Phison",)),
    ModelRule("generic_sata", ("SATA SSD",)),
)

POLICY_TABLE: dict[str, PolicyEntry] = {
    "micron_dc": PolicyEntry(NOT_READABLE, ValueKind.NOT_READABLE, custom_check=True),
    "crucial_micron": PolicyEntry("Percent_Lifetime_Remain", ValueKind.NORM),
    "samsung": PolicyEntry("Wear_Leveling_Count", ValueKind.WORST),
    "intel": PolicyEntry("Media_Wearout_Indicator", ValueKind.NORM),
    "kingston": PolicyEntry("SSD_Life_Left", ValueKind.NORM),
    "sandisk": PolicyEntry("Percent_Lifetime_Remain", ValueKind.RAW),
    "phison": PolicyEntry("SSD_Life_Left", ValueKind.NORM),
    "generic_sata": PolicyEntry("Remaining_Lifetime_Perc", ValueKind.RAW),
}


def identify(model_text: str, rules: Iterable[ModelRule] = MODEL_RULES) -> str | None:
    """
    Return the key of the first rule matching model_text.

    Args:
        model_text: Model family and device model text
        rules: Rules in priority order

    Returns:
        Model key, or None if no rule matches
    """
    if not model_text or not model_text.strip():
        return None
    for rule in rules:
        if rule.matches(model_text):
            return rule.key
    return None


def lookup(key: str, policies: Mapping[str, PolicyEntry] = POLICY_TABLE) -> PolicyEntry:
    """
    Policy for a model key.

    Raises:
        PolicyError: If the key has no policy
    """
    try:
        return policies[key]
    except KeyError:
        raise PolicyError(f"No policy for model key '{key}'") from None


def verify_table(rules: Iterable[ModelRule], policies: Mapping[str, PolicyEntry]) -> None:
    """
    Check that every rule resolves to exactly one policy.

    Raises:
        PolicyError: On duplicate keys, empty patterns or missing policies
    """
    seen = set()
    for rule in rules:
        if rule.key in seen:
            raise PolicyError(f"Duplicate model rule '{rule.key}'")
        seen.add(rule.key)
        if not rule.patterns:
            raise PolicyError(f"Model rule '{rule.key}' has no patterns")
        if any(not pattern.strip() for pattern in rule.patterns):
            raise PolicyError(f"Model rule '{rule.key}' has an empty pattern")
        if rule.key not in policies:
            raise PolicyError(f"No policy for model key '{rule.key}'")


def rules_from_config(
    entries: list[dict[str, Any]] | None,
) -> tuple[tuple[ModelRule, ...], dict[str, PolicyEntry]]:
    """
    Merge user supplied models with the built-in tables.

    User rules are evaluated before every built-in rule. An entry reusing
    a built-in key replaces that built-in rule and policy.

    Args:
        entries: Dicts with key, patterns, field and kind

    Returns:
        (rules, policies) ready for identify() and lookup()

    Raises:
        PolicyError: If an entry is malformed or the result is inconsistent
    """
    if not entries:
        return MODEL_RULES, dict(POLICY_TABLE)

    if not isinstance(entries, list):
        raise PolicyError("'models' must be a list")

    user_rules = []
    policies = dict(POLICY_TABLE)
    for entry in entries:
        if not isinstance(entry, dict):
            raise PolicyError(f"Model entry must be a mapping, got {entry!r}")
        missing = {"key", "patterns", "field", "kind"} - set(entry)
        if missing:
            raise PolicyError(f"Model entry {entry!r} is missing: {', '.join(sorted(missing))}")

        patterns = entry["patterns"]
        if isinstance(patterns, str):
            patterns = [patterns]
        try:
            kind = ValueKind(entry["kind"])
        except ValueError:
            raise PolicyError(
                f"Model '{entry['key']}' has unknown kind '{entry['kind']}'"
            ) from None

        key = str(entry["key"])
        user_rules.append(ModelRule(key, tuple(str(p) for p in patterns)))
        policies[key] = PolicyEntry(str(entry["field"]), kind)

    user_keys = {rule.key for rule in user_rules}
    rules = tuple(user_rules) + tuple(r for r in MODEL_RULES if r.key not in user_keys)
    verify_table(rules, policies)
    return rules, policies


verify_table(MODEL_RULES, POLICY_TABLE)
