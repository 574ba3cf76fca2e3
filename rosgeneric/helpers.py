"""Template environment and template helpers for generating code from ROS specs."""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from types import MappingProxyType
from typing import Any

import jinja2

from .spec import Field, MessageSpecification

ROS_TYPE_TO_CPP_TYPE_MAP: Mapping[str, str] = MappingProxyType(
    {
        "bool": "uint8_t",
        "int8": "int8_t",
        "uint8": "uint8_t",
        "byte": "uint8_t",
        "char": "uint8_t",
        "int16": "int16_t",
        "uint16": "uint16_t",
        "int32": "int32_t",
        "uint32": "uint32_t",
        "int64": "int64_t",
        "uint64": "uint64_t",
        "float32": "float",
        "float64": "double",
        "string": (
            "std::basic_string<char, std::char_traits<char>, typename "
            "std::allocator_traits<ContainerAllocator>::template rebind_alloc<char>>"
        ),
        "time": "::ros::Time",
        "duration": "::ros::Duration",
    }
)


def prepare_environment(
    message_template: str,
    service_template: str,
    typename_conversion_mapping: Mapping[str, str] | None = None,
) -> jinja2.Environment:
    """Build an environment holding the ``message`` and ``service`` templates.

    Both templates are compiled at once, so syntax errors surface here. When a
    mapping is given, the ``typename_conversion`` filter translates ROS type
    names through it.
    """
    env = jinja2.Environment(
        loader=jinja2.DictLoader({"message": message_template, "service": service_template})
    )
    env.globals.update(
        has_header=has_header,
        is_fixed_length=is_fixed_length,
        is_intrinsic_type=is_intrinsic_type,
        is_vector=is_vector_type,
        is_fixed_array=is_fixed_size_array_type,
    )
    env.filters["fixed_size_array_size"] = fixed_size_array_size
    if typename_conversion_mapping is not None:
        env.filters["typename_conversion"] = partial(
            typename_conversion, dict(typename_conversion_mapping)
        )
    env.get_template("message")
    env.get_template("service")
    return env


def typename_conversion(mapping: Mapping[str, str], ros_type: str) -> str:
    """Return the native name for ``ros_type``, or the name itself if unmapped."""
    if not isinstance(ros_type, str):
        raise TypeError(f"type name must be a string, got {type(ros_type).__name__}")
    return mapping.get(ros_type, ros_type)


def _as_message(value: Any) -> MessageSpecification | None:
    if isinstance(value, MessageSpecification):
        return value
    try:
        return MessageSpecification.from_dict(value)
    except ValueError:
        return None


def _as_field(value: Any) -> Field | None:
    if isinstance(value, Field):
        return value
    try:
        return Field.from_dict(value)
    except ValueError:
        return None


def has_header(value: Any) -> bool:
    """True if ``value`` is a message specification with a ``Header`` field."""
    spec = _as_message(value)
    return spec is not None and any(f.field_type == "Header" for f in spec.fields)


def is_fixed_length(value: Any) -> bool:
    """True if ``value`` is a message specification of fixed length."""
    spec = _as_message(value)
    return spec is not None and spec.is_fixed_length


def is_intrinsic_type(value: Any) -> bool:
    """True if ``value`` is a field of a built-in ROS type."""
    f = _as_field(value)
    return f is not None and f.is_intrinsic_type()


def is_vector_type(value: Any) -> bool:
    """True if ``value`` is a variable-length array field."""
    f = _as_field(value)
    return f is not None and f.is_vector_type()


def is_fixed_size_array_type(value: Any) -> bool:
    """True if ``value`` is a fixed-length array field."""
    f = _as_field(value)
    return f is not None and f.is_fixed_size_array_type()


def fixed_size_array_size(value: Any) -> int:
    """The length of a fixed-array field, or 0 for anything else."""
    f = _as_field(value)
    return f.fixed_size_array_size() if f is not None else 0