"""Typed values stored in the INFO annotation maps of variants and calls.

A stored annotation is always a list of one scalar type. Scalars set on their
own are stored as one-element lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union


@dataclass(frozen=True)
class Value:
    """A single typed scalar. Exactly one field is set."""
    int_value: Optional[int] = None
    number_value: Optional[float] = None
    string_value: Optional[str] = None

    @property
    def kind(self) -> str:
        if self.int_value is not None:
            return 'int'
        if self.number_value is not None:
            return 'float'
        if self.string_value is not None:
            return 'str'
        return 'null'

    def unwrap(self) -> Any:
        if self.int_value is not None:
            return self.int_value
        if self.number_value is not None:
            return self.number_value
        return self.string_value


@dataclass(frozen=True)
class IntList:
    values: Tuple[int, ...]


@dataclass(frozen=True)
class FloatList:
    values: Tuple[float, ...]


@dataclass(frozen=True)
class StringList:
    values: Tuple[str, ...]


ListValue = Union[IntList, FloatList, StringList]

LIST_TYPES = {
    int: IntList,
    float: FloatList,
    str: StringList,
}


def scalar_type(value: Any) -> type:
    """Return the storable scalar type of value (int, float or str).

    Raises:
        TypeError: if value is not an int, float or str. bool is rejected even
            though it subclasses int.
    """
    if isinstance(value, bool):
        raise TypeError("Boolean values cannot be stored in an annotation map")
    for kind in (int, float, str):
        if isinstance(value, kind):
            return kind
    raise TypeError(f"Unsupported annotation value type: {type(value).__name__}")


def make_list_value(values: Iterable[Any]) -> ListValue:
    """Build the typed list variant matching the element type of values.

    Raises:
        ValueError: if values is empty
        TypeError: if elements are unsupported or of mixed types
    """
    values = tuple(values)
    if not values:
        raise ValueError("Cannot infer an annotation type from an empty list")

    kind = scalar_type(values[0])
    for value in values[1:]:
        if scalar_type(value) is not kind:
            raise TypeError(f"Mixed annotation value types: {kind.__name__} and {type(value).__name__}")
    return LIST_TYPES[kind](values)
