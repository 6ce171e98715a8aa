"""Wildcard matching of operation keys.

Used both by permission grants and by event subscribers:

    "*"                   matches every key
    "payment.approve"     matches only "payment.approve"
    "payment.*"           matches "payment.create", "payment.approve"
    "accounting.entry.*"  matches "accounting.entry.create", not "accounting.period.close"
"""

WILDCARD = "*"


def is_pattern(value: str) -> bool:
    """True for "*" and "prefix.*" patterns."""
    return value == WILDCARD or value.endswith(".*")


def match_pattern(pattern: str, operation_key: str) -> bool:
    """Check whether pattern covers operation_key."""
    if pattern == WILDCARD or pattern == operation_key:
        return True
    if pattern.endswith(".*"):
        prefix = pattern[:-2]
        return operation_key.startswith(prefix + ".")
    return False
