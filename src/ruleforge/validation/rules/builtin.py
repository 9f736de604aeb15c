"""Built-in type, format and bounds rules.

Every rule has the signature (value, label, *params) -> RuleOutcome:
- required: value must be present and non-empty
- string / number / integer / min / max: type and numeric bounds
- length / array / stringArray: string and array length bounds
- email / url / date / datetime / phone / md5 / json: formats
"""

import json
import math
import re
from datetime import date as date_type
from datetime import datetime
from typing import Any
from urllib.parse import urlparse

from ruleforge.validation.types import RuleOutcome


# =============================================================================
# Format Patterns
# =============================================================================

# Email: anything@anything.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Phone: mainland China mobile number
PHONE_PATTERN = re.compile(r"^1[3-9]\d{9}$")

# MD5: 32 hex characters
MD5_PATTERN = re.compile(r"^[a-f0-9]{32}$", re.IGNORECASE)

# Datetime: ISO date followed by at least hours and minutes
DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}")


# =============================================================================
# Helpers
# =============================================================================


def is_empty(value: Any) -> bool:
    """Check if a value counts as missing (None or empty string)."""
    return value is None or (isinstance(value, str) and value == "")


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def to_number(value: Any) -> float | int | None:
    """Convert a value to a number, or None if it is not numeric.

    Numeric strings are accepted; booleans, digit separators and
    non-finite values are not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = value
    elif isinstance(value, str):
        if "_" in value:
            return None
        try:
            num = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if isinstance(num, float) and not math.isfinite(num):
        return None
    return num


def _check_bounds(num: float | int, label: str, min_value: Any, max_value: Any) -> RuleOutcome:
    if min_value is not None and num < min_value:
        return RuleOutcome.fail(f"{label} must not be less than {min_value}")
    if max_value is not None and num > max_value:
        return RuleOutcome.fail(f"{label} must not be greater than {max_value}")
    return RuleOutcome.ok()


# =============================================================================
# Presence and Types
# =============================================================================


def required(value: Any, label: str) -> RuleOutcome:
    if is_empty(value):
        return RuleOutcome.fail(f"{label} is required")
    return RuleOutcome.ok()


def string(value: Any, label: str) -> RuleOutcome:
    if not isinstance(value, str):
        return RuleOutcome.fail(f"{label} must be a string")
    return RuleOutcome.ok()


def number(value: Any, label: str, min_value: Any = None, max_value: Any = None) -> RuleOutcome:
    num = to_number(value)
    if num is None:
        return RuleOutcome.fail(f"{label} must be a number")
    return _check_bounds(num, label, min_value, max_value)


def integer(value: Any, label: str, min_value: Any = None, max_value: Any = None) -> RuleOutcome:
    num = to_number(value)
    if num is None or num != int(num):
        return RuleOutcome.fail(f"{label} must be an integer")
    return _check_bounds(num, label, min_value, max_value)


def minimum(value: Any, label: str, bound: Any = 0) -> RuleOutcome:
    num = to_number(value)
    if num is None:
        return RuleOutcome.fail(f"{label} must be a number")
    return _check_bounds(num, label, bound, None)


def maximum(value: Any, label: str, bound: Any = None) -> RuleOutcome:
    num = to_number(value)
    if num is None:
        return RuleOutcome.fail(f"{label} must be a number")
    return _check_bounds(num, label, None, bound)


# =============================================================================
# Lengths
# =============================================================================


def length(value: Any, label: str, min_length: int = 0, max_length: int = 255) -> RuleOutcome:
    if not isinstance(value, str):
        return RuleOutcome.fail(f"{label} must be a string")
    if len(value) < min_length:
        return RuleOutcome.fail(f"{label} must be at least {min_length} characters")
    if max_length is not None and len(value) > max_length:
        return RuleOutcome.fail(f"{label} must be at most {max_length} characters")
    return RuleOutcome.ok()


def array(value: Any, label: str, min_length: int = 0, max_length: int | None = None) -> RuleOutcome:
    if not is_array(value):
        return RuleOutcome.fail(f"{label} must be an array")
    if len(value) < min_length:
        return RuleOutcome.fail(f"{label} must contain at least {min_length} items")
    if max_length is not None and len(value) > max_length:
        return RuleOutcome.fail(f"{label} must contain at most {max_length} items")
    return RuleOutcome.ok()


def string_array(
    value: Any, label: str, min_length: int = 0, max_length: int | None = None
) -> RuleOutcome:
    outcome = array(value, label, min_length, max_length)
    if not outcome.valid:
        return outcome
    if any(not isinstance(item, str) for item in value):
        return RuleOutcome.fail(f"{label} must contain only strings")
    return RuleOutcome.ok()


# =============================================================================
# Formats
# =============================================================================


def email(value: Any, label: str) -> RuleOutcome:
    if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
        return RuleOutcome.fail(f"{label} must be a valid email address")
    return RuleOutcome.ok()


def url(value: Any, label: str) -> RuleOutcome:
    if isinstance(value, str):
        try:
            parsed = urlparse(value)
        except ValueError:
            parsed = None
        if parsed is not None and parsed.scheme and parsed.netloc:
            return RuleOutcome.ok()
    return RuleOutcome.fail(f"{label} must be a valid URL")


def phone(value: Any, label: str) -> RuleOutcome:
    if not isinstance(value, str) or not PHONE_PATTERN.match(value):
        return RuleOutcome.fail(f"{label} must be a valid phone number")
    return RuleOutcome.ok()


def md5(value: Any, label: str) -> RuleOutcome:
    if not isinstance(value, str) or not MD5_PATTERN.match(value):
        return RuleOutcome.fail(f"{label} must be an MD5 hash")
    return RuleOutcome.ok()


def _parse_iso(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def date(value: Any, label: str) -> RuleOutcome:
    if isinstance(value, date_type):
        return RuleOutcome.ok()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return RuleOutcome.ok()
    if isinstance(value, str) and _parse_iso(value) is not None:
        return RuleOutcome.ok()
    return RuleOutcome.fail(f"{label} must be a valid date")


def datetime_(value: Any, label: str) -> RuleOutcome:
    if isinstance(value, datetime):
        return RuleOutcome.ok()
    if (
        isinstance(value, str)
        and DATETIME_PATTERN.match(value.strip())
        and _parse_iso(value) is not None
    ):
        return RuleOutcome.ok()
    return RuleOutcome.fail(f"{label} must be a valid datetime")


def json_(value: Any, label: str) -> RuleOutcome:
    # Already-decoded JSON values pass
    if not isinstance(value, str):
        return RuleOutcome.ok()
    try:
        json.loads(value)
    except ValueError:
        return RuleOutcome.fail(f"{label} must be valid JSON")
    return RuleOutcome.ok()
