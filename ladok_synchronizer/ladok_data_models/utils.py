from datetime import date, datetime
from typing import Any, Optional
import re

from ..exceptions import DecodeError

LADOK_DATE_FORMAT = '%Y-%m-%d'
DIGITS_REGEX = re.compile(r'[0-9]+')
# Ladok identifiers are unsigned 32-bit
MAX_ID = 2 ** 32 - 1
KTH_LAROSATE_ID = 29


def decode_id(value: Any, field: str = None) -> int:
    """
    Decodes an identifier that Ladok serializes either as a number or
    as a quoted numeric string, depending on which endpoint produced
    it. `42` and `"42"` both decode to 42.

    :param value: the raw JSON value
    :param field: the name of the field, only used in error messages
    :raises DecodeError: if the value is zero, out of range,
        non-numeric or of any other JSON type
    :return: a strictly positive integer
    """
    if isinstance(value, bool):
        raise DecodeError(value, field)
    if isinstance(value, int):
        as_int = value
    elif isinstance(value, str) and DIGITS_REGEX.fullmatch(value.strip()):
        as_int = int(value.strip())
    else:
        raise DecodeError(value, field)

    if not 0 < as_int <= MAX_ID:
        raise DecodeError(value, field)
    return as_int


def decode_optional_id(value: Any, field: str = None) -> Optional[int]:
    """Same as `decode_id` but passes a missing value through as None."""
    if value is None:
        return None
    return decode_id(value, field)


def parse_ladok_date(value: Optional[str],
                     field: str = 'Examinationsdatum') -> Optional[date]:
    """Parses a plain YYYY-MM-DD date, raising DecodeError otherwise."""
    if not value:
        return None
    try:
        return datetime.strptime(value, LADOK_DATE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise DecodeError(value, field) from e


def format_ladok_date(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(LADOK_DATE_FORMAT)
