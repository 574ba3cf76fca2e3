"""Base types for ROS messages and services."""

from dataclasses import dataclass
from typing import ClassVar


class RosMessage:
    """Base of every ROS message type.

    Subclasses must set ``ROS_TYPE_NAME`` (``pkg_name/type_name``, e.g.
    ``std_msgs/Header``). ``MD5SUM`` and ``DEFINITION`` are optional and only
    needed by backends that speak the native ROS1 protocol.
    """

    ROS_TYPE_NAME: ClassVar[str]
    MD5SUM: ClassVar[str] = ""
    DEFINITION: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not isinstance(getattr(cls, "ROS_TYPE_NAME", None), str):
            raise TypeError(f"{cls.__name__} must define a string ROS_TYPE_NAME")


@dataclass(frozen=True)
class EmptyMessage(RosMessage):
    """A message with no content, for services with no arguments or results."""

    ROS_TYPE_NAME: ClassVar[str] = ""
    MD5SUM: ClassVar[str] = ""
    DEFINITION: ClassVar[str] = ""


class RosService:
    """Base of every ROS service type, corresponding to a ``.srv`` file.

    Subclasses must set ``ROS_SERVICE_NAME`` (e.g. ``rospy_tutorials/AddTwoInts``),
    ``MD5SUM`` and the ``Request`` and ``Response`` message classes.
    """

    ROS_SERVICE_NAME: ClassVar[str]
    MD5SUM: ClassVar[str]
    Request: ClassVar[type]
    Response: ClassVar[type]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for name in ("ROS_SERVICE_NAME", "MD5SUM"):
            if not isinstance(getattr(cls, name, None), str):
                raise TypeError(f"{cls.__name__} must define a string {name}")
        for name in ("Request", "Response"):
            message_type = getattr(cls, name, None)
            if not (isinstance(message_type, type) and issubclass(message_type, RosMessage)):
                raise TypeError(f"{cls.__name__}.{name} must be a RosMessage subclass")


@dataclass(frozen=True)
class ShapeShifter(RosMessage):
    """Raw message bytes, for publishing and subscribing without deserializing."""

    ROS_TYPE_NAME: ClassVar[str] = "*"
    MD5SUM: ClassVar[str] = "*"
    DEFINITION: ClassVar[str] = ""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", memoryview(self.data).tobytes())