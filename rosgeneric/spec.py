"""Template-facing descriptions of ROS messages, fields, constants and services.

Every type converts to and from plain dictionaries. Templates see these
dictionaries, and the template helpers read them back.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ROS_TYPENAMES: tuple[str, ...] = (
    "bool",
    "int8",
    "uint8",
    "byte",
    "char",
    "int16",
    "uint16",
    "int32",
    "uint32",
    "int64",
    "uint64",
    "float32",
    "float64",
    "string",
    "time",
    "duration",
)


def _is_size(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _mapping(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a mapping for {what}, got {type(data).__name__}")
    return data


def _required(data: Mapping, key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _required_str(data: Mapping, key: str) -> str:
    value = _required(data, key)
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _optional_str(data: Mapping, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string or null")
    return value


def _required_bool(data: Mapping, key: str) -> bool:
    value = _required(data, key)
    if not isinstance(value, bool):
        raise ValueError(f"field `{key}` must be a boolean")
    return value


def _required_list(data: Mapping, key: str) -> list:
    value = _required(data, key)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"field `{key}` must be a list")
    return list(value)


class ArrayKind(Enum):
    """Whether a field is a scalar, a variable-length vector or a fixed array."""

    NOT_AN_ARRAY = "NotAnArray"
    VECTOR = "Vector"
    ARRAY = "Array"


@dataclass(frozen=True)
class ArrayInfo:
    """The array shape of a field; ``size`` is set only for fixed arrays."""

    kind: ArrayKind = ArrayKind.NOT_AN_ARRAY
    size: int | None = None

    def __post_init__(self) -> None:
        if self.kind is ArrayKind.ARRAY:
            if not _is_size(self.size):
                raise ValueError(f"fixed array size must be a non-negative int, got {self.size!r}")
        elif self.size is not None:
            raise ValueError(f"{self.kind.value} carries no size")

    @classmethod
    def not_an_array(cls) -> ArrayInfo:
        return cls(ArrayKind.NOT_AN_ARRAY)

    @classmethod
    def vector(cls) -> ArrayInfo:
        return cls(ArrayKind.VECTOR)

    @classmethod
    def array(cls, size: int) -> ArrayInfo:
        return cls(ArrayKind.ARRAY, size)

    def to_dict(self) -> str | dict[str, int]:
        """Return ``"NotAnArray"``, ``"Vector"`` or ``{"Array": size}``."""
        if self.kind is ArrayKind.ARRAY:
            return {self.kind.value: self.size}
        return self.kind.value

    @classmethod
    def from_dict(cls, data: Any) -> ArrayInfo:
        if isinstance(data, str):
            kind = cls._kind(data)
            if kind is ArrayKind.ARRAY:
                raise ValueError("variant `Array` requires a size")
            return cls(kind)
        if isinstance(data, Mapping) and len(data) == 1:
            ((tag, payload),) = data.items()
            kind = cls._kind(tag)
            if kind is ArrayKind.ARRAY:
                return cls.array(payload)
            if payload is not None:
                raise ValueError(f"variant `{tag}` carries no value")
            return cls(kind)
        raise ValueError(f"invalid array info: {data!r}")

    @staticmethod
    def _kind(tag: Any) -> ArrayKind:
        try:
            return ArrayKind(tag)
        except ValueError:
            raise ValueError(f"unknown variant `{tag}`") from None


@dataclass
class Field:
    """One field of a message, as a template sees it."""

    name: str
    field_type: str
    package: str | None = None
    array_info: ArrayInfo = field(default_factory=ArrayInfo.not_an_array)

    def is_intrinsic_type(self) -> bool:
        return self.field_type in ROS_TYPENAMES

    def is_vector_type(self) -> bool:
        return self.array_info.kind is ArrayKind.VECTOR

    def is_fixed_size_array_type(self) -> bool:
        return self.array_info.kind is ArrayKind.ARRAY

    def fixed_size_array_size(self) -> int:
        """The length of a fixed array, or 0 for anything else."""
        return self.array_info.size if self.is_fixed_size_array_type() else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "field_type": self.field_type,
            "package": self.package,
            "array_info": self.array_info.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Field:
        data = _mapping(data, "Field")
        return cls(
            name=_required_str(data, "name"),
            field_type=_required_str(data, "field_type"),
            package=_optional_str(data, "package"),
            array_info=ArrayInfo.from_dict(_required(data, "array_info")),
        )


@dataclass
class Constant:
    """A constant declared in a message, with its value as text."""

    name: str
    constant_type: str
    constant_value: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "constant_type": self.constant_type,
            "constant_value": self.constant_value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Constant:
        data = _mapping(data, "Constant")
        return cls(
            name=_required_str(data, "name"),
            constant_type=_required_str(data, "constant_type"),
            constant_value=_required_str(data, "constant_value"),
        )


@dataclass
class MessageSpecification:
    """Everything a message template needs to know about one message."""

    short_name: str
    package: str
    fields: list[Field] = field(default_factory=list)
    constants: list[Constant] = field(default_factory=list)
    md5sum_first: str = ""
    md5sum_second: str = ""
    description: str = ""
    is_fixed_length: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "short_name": self.short_name,
            "package": self.package,
            "fields": [f.to_dict() for f in self.fields],
            "constants": [c.to_dict() for c in self.constants],
            "md5sum_first": self.md5sum_first,
            "md5sum_second": self.md5sum_second,
            "description": self.description,
            "is_fixed_length": self.is_fixed_length,
        }

    @classmethod
    def from_dict(cls, data: Any) -> MessageSpecification:
        data = _mapping(data, "MessageSpecification")
        return cls(
            short_name=_required_str(data, "short_name"),
            package=_required_str(data, "package"),
            fields=[Field.from_dict(f) for f in _required_list(data, "fields")],
            constants=[Constant.from_dict(c) for c in _required_list(data, "constants")],
            md5sum_first=_required_str(data, "md5sum_first"),
            md5sum_second=_required_str(data, "md5sum_second"),
            description=_required_str(data, "description"),
            is_fixed_length=_required_bool(data, "is_fixed_length"),
        )


@dataclass
class ServiceSpecification:
    """Everything a service template needs to know about one service."""

    short_name: str
    package: str
    request_name: str
    response_name: str
    md5sum: str

    def to_dict(self) -> dict[str, str]:
        return {
            "short_name": self.short_name,
            "package": self.package,
            "request_name": self.request_name,
            "response_name": self.response_name,
            "md5sum": self.md5sum,
        }

    @classmethod
    def from_dict(cls, data: Any) -> ServiceSpecification:
        data = _mapping(data, "ServiceSpecification")
        return cls(
            short_name=_required_str(data, "short_name"),
            package=_required_str(data, "package"),
            request_name=_required_str(data, "request_name"),
            response_name=_required_str(data, "response_name"),
            md5sum=_required_str(data, "md5sum"),
        )