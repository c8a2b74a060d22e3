"""Length limits of the free-text fields callers choose."""

from .errors import FieldTooLongError

#: Longest integration name, integration identifier or environment name.
MAX_TEXT_LENGTH = 255


def check_length(field: str, value: str, limit: int = MAX_TEXT_LENGTH) -> str:
    """Return `value` unless it is longer than `limit` characters.

    Raises:
        FieldTooLongError: If it is.
    """
    if len(value) > limit:
        raise FieldTooLongError(field, limit)
    return value
