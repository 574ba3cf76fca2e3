"""Error types shared by every ROS backend."""

from __future__ import annotations


class RosError(Exception):
    """Base class of every error a ROS backend reports."""

    message_format = "{}"

    def __init__(self, detail: object = "") -> None:
        self.detail = detail
        super().__init__(self.message_format.format(detail))


class Disconnected(RosError):
    """Communication with the backend is fully lost.

    Backends are expected to heal themselves: once the connection returns,
    existing publishers, subscribers and services resume working.
    """

    message_format = "No connection to ROS backend"

    def __init__(self) -> None:
        super().__init__("")


class Timeout(RosError):
    """An operation took unexpectedly long and is assumed to have failed."""

    message_format = "Operation timed out: {}"


class SerializationError(RosError):
    """A message could not be converted to or from its wire form.

    Also raised when checksums of a message type do not match.
    """

    message_format = "Serialization error: {}"


class ServerError(RosError):
    """The backend's server side reported an error."""

    message_format = "Rosbridge server reported an error: {}"


class RosIOError(RosError):
    """A fundamental networking failure: ports unavailable, lookups failing."""

    message_format = "IO error: {}"

    def __init__(self, error: object) -> None:
        super().__init__(error)
        if isinstance(error, BaseException):
            self.__cause__ = error


class InvalidName(RosError):
    """A name was used that does not meet ROS naming requirements."""

    message_format = "Name does not meet ROS requirements: {}"


class Unexpected(RosError):
    """Any failure that fits none of the other categories.

    Its text is the text of the wrapped error, unchanged.
    """

    def __init__(self, error: object) -> None:
        super().__init__(error)
        if isinstance(error, BaseException):
            self.__cause__ = error