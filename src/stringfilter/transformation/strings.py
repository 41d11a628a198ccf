"""
String Filters - Pure Transform Functions

Stateless validation and transformation filters for string values.
Every filter follows the (value, **options) -> value calling convention
so the orchestration layer can chain them interchangeably.
"""

import logging
import numbers
import sys
from collections.abc import Mapping
from typing import Any, List, Optional

from .exceptions import InvalidConfiguration, ValidationError

logger = logging.getLogger(__name__)

MAX_LENGTH = sys.maxsize

_QUOTES = ("'", '"')
_COMMENT_OPEN = "<!--"
_COMMENT_CLOSE = "-->"


def coerce_to_string(value: Any) -> str:
    """
    Strictly coerce a value to a string

    Only strings and objects that define their own __str__ are accepted.
    None, booleans, numbers, bytes and objects relying on the default
    object representation are rejected rather than silently stringified.

    Args:
        value: Value to coerce

    Returns:
        str: The value itself, or its explicit textual representation

    Raises:
        ValidationError: If the value has no lossless string representation
    """
    if isinstance(value, str):
        return value

    if (
        value is None
        or isinstance(value, (bool, numbers.Number, bytes, bytearray))
        or type(value).__str__ is object.__str__
    ):
        raise ValidationError(f"Value {value!r} is not a string", value)

    try:
        return str(value)
    except Exception as e:
        raise ValidationError(
            f"Value {object.__repr__(value)} could not be converted to a string: {e}",
            value,
        ) from e


def validate(
    value: Any,
    allow_null: bool = False,
    min_length: int = 1,
    max_length: int = MAX_LENGTH,
) -> Optional[str]:
    """
    Verify that a value is a string within the given length bounds

    Length is measured in UTF-8 bytes, not characters.

    Args:
        value: Value to filter
        allow_null: Return None for a None value instead of failing
        min_length: Minimum allowed byte length (inclusive)
        max_length: Maximum allowed byte length (inclusive)

    Returns:
        str | None: The coerced string, or None when allowed

    Raises:
        InvalidConfiguration: If either length bound is negative
        ValidationError: If the value is None (and not allowed), is not a
            string, or its length falls outside the bounds
    """
    if min_length < 0:
        raise InvalidConfiguration(
            f"min_length {min_length!r} was not a positive integer value", min_length
        )
    if max_length < 0:
        raise InvalidConfiguration(
            f"max_length {max_length!r} was not a positive integer value", max_length
        )

    if value is None:
        if allow_null:
            return None
        raise ValidationError("Value None failed filtering, allow_null is set to False")

    text = coerce_to_string(value)

    length = len(text.encode("utf-8", errors="surrogatepass"))
    if length < min_length or length > max_length:
        logger.debug(f"Length check failed for {text!r}: {length}")
        raise ValidationError(
            f"Value '{text}' with length '{length}' is less than '{min_length}' "
            f"or greater than '{max_length}'",
            value,
        )

    return text


def split(value: Any, delimiter: str = ",") -> List[str]:
    """
    Split a string on every occurrence of a literal delimiter

    'foo,bar,,baz' -> ['foo', 'bar', '', 'baz']

    Args:
        value: String to split (must already be a str)
        delimiter: Non-empty delimiter, matched literally

    Returns:
        List[str]: All pieces in order, empty pieces included
    """
    if not isinstance(value, str):
        raise ValidationError(f"Value {value!r} is not a string", value)

    if not isinstance(delimiter, str) or not delimiter:
        raise InvalidConfiguration(
            f"Delimiter {delimiter!r} is not a non-empty string", delimiter
        )

    return value.split(delimiter)


def translate(value: str, value_map: Mapping[str, Any]) -> Any:
    """
    Translate a value using an exact-match lookup table

    Args:
        value: Key to look up (case-sensitive)
        value_map: Mapping of input values to their translations

    Returns:
        Any: The mapped value as stored in the table
    """
    if not isinstance(value_map, Mapping):
        raise InvalidConfiguration(
            f"Translation map {value_map!r} is not a mapping", value_map
        )

    try:
        return value_map[value]
    except (KeyError, TypeError):
        raise ValidationError(
            f"The value '{value}' was not found in the translation map", value
        ) from None


def concat(value: Any, prefix: str = "", suffix: str = "") -> str:
    """Prepend prefix and append suffix to the strictly coerced value"""
    return f"{prefix}{coerce_to_string(value)}{suffix}"


def strip_markup(value: Optional[str]) -> Optional[str]:
    """
    Remove HTML/XML-like tags from a string

    None is passed through as None rather than becoming an empty string.
    Text outside of tags is kept verbatim (no entity decoding), including
    the contents of script and style elements.

    Boundary rules for malformed markup:
    - '<' followed by whitespace, or at the end of input, is literal text
    - quoted attribute values may contain '>' without closing the tag
    - '<' inside a tag nests; the tag closes on the matching '>'
    - an unterminated tag or comment removes the rest of the input
    - a stray '>' outside a tag is literal text

    Args:
        value: Input string or None

    Returns:
        str | None: Text with tags removed, or None
    """
    if value is None:
        return None

    if not isinstance(value, str):
        raise ValidationError(f"Value {value!r} is not a string", value)

    pieces = []
    position = 0
    length = len(value)

    while position < length:
        tag_start = value.find("<", position)
        if tag_start == -1:
            pieces.append(value[position:])
            break

        pieces.append(value[position:tag_start])
        following = value[tag_start + 1 : tag_start + 2]

        if not following or following.isspace():
            pieces.append("<")
            position = tag_start + 1
        elif value.startswith(_COMMENT_OPEN, tag_start):
            comment_end = value.find(_COMMENT_CLOSE, tag_start + len(_COMMENT_OPEN))
            if comment_end == -1:
                break
            position = comment_end + len(_COMMENT_CLOSE)
        else:
            position = _find_tag_end(value, tag_start)

    return "".join(pieces)


def _find_tag_end(text: str, tag_start: int) -> int:
    """Index just past the '>' closing the tag opened at tag_start"""
    depth = 0
    quote = None

    for index in range(tag_start + 1, len(text)):
        char = text[index]
        if quote:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "<":
            depth += 1
        elif char == ">":
            if depth == 0:
                return index + 1
            depth -= 1

    return len(text)
