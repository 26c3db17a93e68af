# Usageopt CLI Toolkit — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains the string coercion functions behind `TypedValue`.

Numeric coercion is strict: the whole text must be a number. Trailing
characters, including whitespace and the line separators of a value given
several times, are rejected instead of being silently dropped.

Functions:
- coerce_int: Convert a string to an int.
- coerce_float: Convert a string to a float (decimal, exponent, hex, inf, nan).
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string to an Enum member by name or value.
- coerce_value: General-purpose coercion to a target type (including unions,
  literals, enums and datetimes).
"""
import re
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

_INT_PATTERN = re.compile(r"\s*[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"\s*[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_HEX_FLOAT_PATTERN = re.compile(
    r"\s*[+-]?0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?",
    re.IGNORECASE,
)


def coerce_int(value: str) -> int:
    """
    Convert a string to an int, requiring the whole string to be consumed.

    Raises:
        ValueError: If the text is not a base-10 integer.
    """
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"'{value}' is not a valid integer")
    return int(value)


def coerce_float(value: str) -> float:
    """
    Convert a string to a float, requiring the whole string to be consumed.

    Raises:
        ValueError: If the text is not a floating point number.
    """
    if _FLOAT_PATTERN.fullmatch(value):
        return float(value)
    if _HEX_FLOAT_PATTERN.fullmatch(value):
        return float.fromhex(value.strip())
    raise ValueError(f"'{value}' is not a valid number")


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts various truthy and falsy representations such as 'true', 'yes', '0', 'off', etc.

    Args:
        value (str): The input string or boolean.

    Returns:
        bool: Parsed boolean result.

    Raises:
        ValueError: If the text is not a recognized boolean spelling.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "t", "1", "yes", "y", "on"}:
        return True
    elif normalized in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, value, or coerced base type.

    Args:
        value (Any): The input value to convert.
        enum_type (EnumMeta): The target Enum class.

    Returns:
        Enum: The corresponding Enum instance.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = coerce_value(value, base_type)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Attempt to convert a string to the given target type.

    Handles int and float strictly, passes str through untouched, and supports
    Union, Literal, Enum, bool and datetime. Any other target type is called
    with the string.

    Args:
        value (str): The input string to convert.
        target_type (Any): The desired type.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if target_type is str or target_type is Any:
        return value

    if origin is Literal:
        if value not in args:
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            try:
                return coerce_value(value, arg)
            except ValueError:
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is int:
        return coerce_int(value)

    if target_type is float:
        return coerce_float(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(
                f"Value '{value}' could not be parsed as a datetime"
            ) from error

    if not callable(target_type):
        raise ValueError(f"Unsupported target type: {target_type!r}")

    try:
        return target_type(value)
    except (TypeError, ValueError) as error:
        raise ValueError(
            f"Value '{value}' could not be converted to {target_type!r}: {error}"
        ) from error
