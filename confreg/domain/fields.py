"""
Field extraction - Typed values from an untyped form-parameter map.

The HTTP layer hands over whatever the client submitted: usually strings, but
multipart bodies may also carry uploaded files. Every extractor accepts only a
scalar ``str``; anything else is treated as absent.

Two policies coexist:
- yes/no fields are strict: only the exact literals "yes" and "no" are valid.
- categorical fields fall back to their enumeration's default member.
"""

from collections.abc import Mapping
from typing import TypeVar

from .exceptions import InvalidValue, MissingField
from .registration import Choice

C = TypeVar("C", bound=Choice)

_BOOL_LITERALS = {"yes": True, "no": False}


def extract_str(
    params: Mapping[str, object], field: str, default: str | None = None
) -> str:
    """
    Return the raw string value of ``field``.

    An absent field yields ``default`` when one is given.

    Raises:
        MissingField: If the field is absent without a default, or is not
            a scalar string
    """
    value = params.get(field, default)
    if not isinstance(value, str):
        raise MissingField(field)
    return value


def extract_required_str(params: Mapping[str, object], field: str) -> str:
    """Return the stripped value of ``field``; blank counts as missing."""
    value = extract_str(params, field).strip()
    if not value:
        raise MissingField(field)
    return value


def extract_optional_str(params: Mapping[str, object], field: str) -> str | None:
    """Return the stripped value of ``field``, or None if absent or blank."""
    value = params.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidValue(field, type(value).__name__)
    return value.strip() or None


def extract_bool(params: Mapping[str, object], field: str) -> bool:
    """
    Interpret a yes/no field.

    Exactly "yes" and "no" are accepted. There is no case folding and no
    trimming: " yes" and "Yes" are both invalid.

    Raises:
        MissingField: If the field is absent or not a scalar string
        InvalidValue: For any other literal
    """
    value = extract_str(params, field)
    try:
        return _BOOL_LITERALS[value]
    except KeyError:
        raise InvalidValue(field, value) from None


def extract_choice(params: Mapping[str, object], field: str, choice: type[C]) -> C:
    """
    Resolve a categorical field against ``choice``.

    Unknown literals resolve to ``choice.default()``.

    Raises:
        MissingField: If the field is absent or not a scalar string
    """
    return choice(extract_str(params, field))
