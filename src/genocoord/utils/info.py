"""Read and write typed values in the INFO maps of Variant and VariantCall records."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Union

from ..models.annotations import (LIST_TYPES, IntList, ListValue, Value,
                                  make_list_value, scalar_type)

Scalar = Union[int, float, str]


def set_values_value(value: Scalar) -> Value:
    """Wrap a single scalar in the matching field of a Value.

    Raises:
        TypeError: if value is not an int, float or str
    """
    kind = scalar_type(value)
    if kind is int:
        return Value(int_value=value)
    if kind is float:
        return Value(number_value=value)
    return Value(string_value=value)


def set_info_field(key: str, value: Union[Scalar, Sequence[Scalar]], record) -> None:
    """Store value (a scalar or a sequence of scalars) under key in record.info.

    Any value previously stored under key is replaced. The stored type follows
    the values, so ints and floats stay distinct.

    Raises:
        TypeError: for unsupported or mixed value types
        ValueError: for an empty sequence
    """
    if isinstance(value, (list, tuple)):
        values = value
    else:
        values = (value,)
    record.info[key] = make_list_value(values)


def list_values(annotation: ListValue, value_type: Optional[type] = None) -> List[Any]:
    """Return the values of a stored annotation as a list.

    A scalar stored with set_info_field reads back as a one-element list.

    Args:
        annotation: a stored IntList, FloatList or StringList
        value_type: if given, the expected element type (int, float or str);
            int annotations are widened when float is requested

    Raises:
        TypeError: if the annotation does not hold value_type elements
    """
    if value_type is None or isinstance(annotation, LIST_TYPES[value_type]):
        return list(annotation.values)
    if value_type is float and isinstance(annotation, IntList):
        return [float(v) for v in annotation.values]
    raise TypeError(f"Annotation holds {type(annotation).__name__}, not {value_type.__name__} values")


def get_info_field(key: str, record, value_type: Optional[type] = None) -> List[Any]:
    """Values stored under key in record.info.

    Raises:
        KeyError: if key is not set on record
    """
    return list_values(record.info[key], value_type)
