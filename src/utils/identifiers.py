"""Parsing of numeric path identifiers."""

from core.exceptions import InvalidIdentifierError

# Primary keys are 32-bit serial integers
MAX_ID = 2**31 - 1


def parse_numeric_id(raw_id: str, resource: str) -> int:
    """Parse a path segment as a numeric primary key.

    Args:
        raw_id: Path segment as received.
        resource: Resource name used in the error message.

    Returns:
        The integer id.

    Raises:
        InvalidIdentifierError: If the segment is not an integer in range.
    """
    candidate = raw_id.strip() if isinstance(raw_id, str) else ""
    digits = candidate[1:] if candidate[:1] in ("+", "-") else candidate
    # int() alone would also take "1_0" and non-ASCII digits
    if not (digits.isascii() and digits.isdigit()):
        raise InvalidIdentifierError(resource, raw_id)
    value = int(candidate)
    if abs(value) > MAX_ID:
        raise InvalidIdentifierError(resource, raw_id)
    return value
