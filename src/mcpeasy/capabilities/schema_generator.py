"""
JSON Schema generation from method signatures.

NOTE: Only parameters annotated with Property end up in the schema. Everything else is skipped on
purpose and will receive None at invocation time.
"""
import collections.abc
import types
from typing import Any, Callable, Union, get_args, get_origin

from .base import describe_parameters
from .schemas import ArgumentSchema, JsonType, PropertyDescriptor


_SCALAR_TYPES: dict[type, JsonType] = {
    str: "string",
    bool: "boolean",
    int: "integer",
    float: "number",
}

_ARRAY_TYPES = (list, tuple, set, frozenset, collections.abc.Sequence, collections.abc.Set)


def _strip_optional(python_type: Any) -> Any:
    """Optional[T] -> T. Other unions are left alone."""
    origin = get_origin(python_type)
    if origin is Union or origin is types.UnionType:
        non_none = [arg for arg in get_args(python_type) if arg is not type(None)]
        if len(non_none) == 1:
            return non_none[0]
    return python_type


def json_type_for(python_type: Any) -> JsonType:
    """Map a Python type to a JSON Schema type. Unknown types are objects."""
    python_type = _strip_optional(python_type)
    python_type = get_origin(python_type) or python_type

    if python_type in _SCALAR_TYPES:
        return _SCALAR_TYPES[python_type]

    if isinstance(python_type, type):
        # str is a Sequence, it was matched above
        if issubclass(python_type, collections.abc.Mapping):
            return "object"
        if issubclass(python_type, _ARRAY_TYPES):
            return "array"

    return "object"


def generate_schema(func: Callable) -> ArgumentSchema:
    """
    Generate the input schema for a tool method.

    Args:
        func: Method (bound or taken from the class body) to analyze

    Returns:
        ArgumentSchema with properties in parameter declaration order
    """
    properties: dict[str, PropertyDescriptor] = {}
    required: list[str] = []

    for info in describe_parameters(func):
        marker = info.property_marker
        if marker is None:
            continue

        property_name = marker.name or info.identifier
        properties[property_name] = PropertyDescriptor(
            type=json_type_for(info.annotation),
            description=marker.description or None,
            format=marker.format or None
        )

        if marker.required and property_name not in required:
            required.append(property_name)

    return ArgumentSchema(properties=properties, required=required)
