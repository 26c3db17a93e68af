# Usageopt CLI Toolkit — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `TypedValue`, the deferred-conversion container returned for every
option lookup and for the positional arguments.

A `TypedValue` stores the raw text of each occurrence and converts it only when
asked. Occurrences are joined with a line separator, so scalar conversion of an
option given several times sees the joined text (and usually fails), while
`as_list()` converts every occurrence separately.

Example:
    value = TypedValue("3")
    value.as_type(int)            # 3
    value.convert(int).ok         # True
    value.value_or(1.5)           # 3.0
    TypedValue().value_or(10)     # 10
    bool(TypedValue())            # False
    bool(TypedValue(""))          # True
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, get_args, get_origin

from usageopt.coerce import coerce_value
from usageopt.exceptions import ConversionError

T = TypeVar("T")

SEPARATOR = "\n"


@dataclass(frozen=True)
class Conversion(Generic[T]):
    """
    Tagged result of a conversion: either a value or the reason it failed.

    Attributes:
        value (T | None): The converted value when `ok`.
        error (str | None): Why the conversion failed, None on success.
    """

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise `ConversionError` with the failure reason."""
        if self.error is not None:
            raise ConversionError(self.error)
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.ok


class TypedValue:
    """
    Stores zero or more raw strings and converts them on access.

    Args:
        text (str | None): Initial occurrence, if any.
    """

    def __init__(self, text: str | None = None) -> None:
        self._text: str = ""
        self._count: int = 0
        if text is not None:
            self.add(text)

    def add(self, text: str) -> None:
        """Record one more occurrence."""
        if self._count == 0:
            self._text = text
        else:
            self._text += SEPARATOR + text
        self._count += 1

    @property
    def count(self) -> int:
        """Number of occurrences stored."""
        return self._count

    @property
    def text(self) -> str:
        """All occurrences joined with a line separator."""
        return self._text

    def lines(self) -> list[str]:
        """Return each occurrence as a separate string."""
        if self._count == 0:
            return []
        return self._text.split(SEPARATOR)

    def convert(self, target_type: Any = str) -> Conversion[Any]:
        """
        Convert the stored text without raising.

        `list[T]` converts every occurrence to `T`. A `bool` target reads an
        occurrence without text, such as a switch, as True.

        Args:
            target_type (Any): The desired type, e.g. `int`, `float`, `str`,
                `bool`, an Enum, `datetime` or `list[int]`.

        Returns:
            Conversion: The value on success, the reason otherwise.
        """
        if self._count == 0:
            return Conversion(error="null value")

        if get_origin(target_type) is list:
            (item_type,) = get_args(target_type) or (str,)
            return self._convert_lines(item_type)

        if target_type is bool and not any(self.lines()):
            return Conversion(value=True)

        try:
            return Conversion(value=coerce_value(self._text, target_type))
        except ValueError as error:
            return Conversion(error=str(error))

    def _convert_lines(self, item_type: Any) -> Conversion[Any]:
        values = []
        for line in self.lines():
            if item_type is bool and not line:
                values.append(True)
                continue
            try:
                values.append(coerce_value(line, item_type))
            except ValueError as error:
                return Conversion(error=str(error))
        return Conversion(value=values)

    def as_type(self, target_type: Any = str) -> Any:
        """
        Convert the stored text to `target_type`.

        Raises:
            ConversionError: If the value is unset or the text does not convert.
        """
        return self.convert(target_type).unwrap()

    def as_list(self, item_type: Any = str) -> list[Any]:
        """
        Convert every occurrence to `item_type`.

        A single occurrence yields a one-element list.

        Raises:
            ConversionError: If the value is unset or an occurrence does not convert.
        """
        if self._count == 0:
            raise ConversionError("null value")
        return self._convert_lines(item_type).unwrap()

    def as_int(self) -> int:
        return self.as_type(int)

    def as_float(self) -> float:
        return self.as_type(float)

    def as_str(self) -> str:
        return self.as_type(str)

    def value_or(self, default: Any, target_type: Any = None) -> Any:
        """
        Return the converted value, or `default` if unset or not convertible.

        The target type is taken from the default when not given. A `str`
        default returns the raw text without any conversion. A `bool` default
        returns True for a switch that was given, since a switch has no text.
        """
        if target_type is None:
            if default is None or isinstance(default, str):
                return self.text_or(default)
            target_type = type(default)
        conversion = self.convert(target_type)
        return conversion.value if conversion.ok else default

    def text_or(self, default: str | None = None) -> str | None:
        """Return the raw joined text, or `default` if unset."""
        if self._count == 0:
            return default
        return self._text

    def __bool__(self) -> bool:
        return self._count > 0

    def __iter__(self):
        return iter(self.lines())

    def __len__(self) -> int:
        return self._count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedValue):
            return False
        return self._count == other._count and self._text == other._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        if self._count == 0:
            return "TypedValue()"
        return f"TypedValue({self.lines()!r})"
