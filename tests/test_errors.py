import pytest

from rosgeneric.errors import (
    Disconnected,
    InvalidName,
    RosError,
    RosIOError,
    SerializationError,
    ServerError,
    Timeout,
    Unexpected,
)


def test_disconnected_message():
    assert str(Disconnected()) == "No connection to ROS backend"


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (Timeout, "Operation timed out: "),
        (SerializationError, "Serialization error: "),
        (ServerError, "Rosbridge server reported an error: "),
        (InvalidName, "Name does not meet ROS requirements: "),
        (RosIOError, "IO error: "),
    ],
)
def test_messages_carry_detail(cls, prefix):
    err = cls("details here")
    assert str(err) == prefix + "details here"
    assert err.detail == "details here"


@pytest.mark.parametrize(
    "cls, args, expected",
    [
        (Disconnected, (), "No connection to ROS backend"),
        (Timeout, ("t",), "Operation timed out: t"),
        (SerializationError, ("s",), "Serialization error: s"),
        (ServerError, ("x",), "Rosbridge server reported an error: x"),
        (RosIOError, ("io",), "IO error: io"),
        (InvalidName, ("n",), "Name does not meet ROS requirements: n"),
        (Unexpected, (ValueError("u"),), "u"),
    ],
)
def test_all_errors_are_ros_errors(cls, args, expected):
    err = cls(*args)
    with pytest.raises(RosError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == expected


def test_io_error_wraps_os_error():
    inner = ConnectionRefusedError("refused")
    err = RosIOError(inner)
    assert err.__cause__ is inner
    assert str(err) == "IO error: " + str(inner)


def test_unexpected_is_transparent():
    inner = ValueError("something odd")
    err = Unexpected(inner)
    assert str(err) == str(inner)
    assert err.__cause__ is inner
    assert err.detail is inner


def test_specific_error_caught_by_its_class():
    err = Timeout("call to /add_two_ints")
    assert err.detail == "call to /add_two_ints"
    assert str(err) == "Operation timed out: call to /add_two_ints"
    with pytest.raises(Timeout) as info:
        raise err
    assert info.value.detail == "call to /add_two_ints"