"""
Input sanitization and validation helpers.

Every string taken from a request is escaped before use, then checked.
Failures raise InvalidInput so the handler stops before touching the store.
"""

import re
import uuid
from datetime import date
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email

from jobmatch.core.errors import InvalidInput

EMPTY_FIELD = "One of the field is empty"

# INTEGER / SERIAL column range
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

_ESCAPES = {
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
}
_ESCAPE_RE = re.compile(r"[&\"'<>/\\`]")
_NUMERIC_RE = re.compile(r"^[+-]?\d+(\.\d+)?$")
_ALPHA_RE = re.compile(r"^[A-Za-z]+$")


def escape(value: Any) -> str:
    """HTML-escape a request value; None becomes the empty string."""
    if value is None:
        return ""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], str(value))


def is_empty(value: Optional[str]) -> bool:
    return value is None or value == ""


def is_uuid4(value: str) -> bool:
    try:
        parsed = uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        return False
    # uuid.UUID accepts braces/urn forms and missing hyphens; require canonical text
    return parsed.version == 4 and str(parsed) == value.lower()


def is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_numeric(value: Any) -> bool:
    return bool(_NUMERIC_RE.match(str(value)))


def is_alpha(value: str) -> bool:
    return bool(_ALPHA_RE.match(value))


def require_fields(*values: Optional[str]) -> None:
    """Raise the shared 'empty field' error if any value is empty."""
    if any(is_empty(v) for v in values):
        raise InvalidInput(EMPTY_FIELD)


def clean_uid(raw: Optional[str]) -> str:
    """Escape and validate a jobseeker/employer uid."""
    uid = escape(raw)
    if is_empty(uid):
        raise InvalidInput(EMPTY_FIELD)
    if not is_uuid4(uid):
        raise InvalidInput("Invalid UUID")
    # stored uids are lowercase
    return str(uuid.UUID(uid))


def clean_email(raw: Optional[str]) -> str:
    email = escape(raw)
    if is_empty(email):
        raise InvalidInput(EMPTY_FIELD)
    if not is_email(email):
        raise InvalidInput("Invalid email address")
    return email


def clean_int(raw: Any, name: str) -> int:
    """Validate a numeric id or count and return it as int."""
    text = escape(raw)
    if is_empty(text):
        raise InvalidInput(EMPTY_FIELD)
    if not is_numeric(text) or "." in text:
        raise InvalidInput(f"Invalid {name}")
    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        raise InvalidInput(f"Invalid {name}")
    return value


def clean_date(raw: Optional[str], name: str = "date") -> str:
    """Escape and check an ISO-8601 calendar date (YYYY-MM-DD)."""
    value = escape(raw)
    if is_empty(value):
        raise InvalidInput(EMPTY_FIELD)
    try:
        date.fromisoformat(value)
    except ValueError:
        raise InvalidInput(f"Invalid {name}")
    return value


def clean_optional_int(raw: Any, name: str) -> Optional[int]:
    if raw is None or raw == "":
        return None
    return clean_int(raw, name)
