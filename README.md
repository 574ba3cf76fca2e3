# rosgeneric

Backend-agnostic building blocks for ROS-style programs in asyncio.

- `rosgeneric.errors`: one exception hierarchy under `RosError`. It holds
  `Disconnected`, `Timeout`, `SerializationError`, `ServerError`, `RosIOError`,
  `InvalidName` and `Unexpected`.
- `rosgeneric.messages`: the base classes `RosMessage` and `RosService`. It
  also has `EmptyMessage` for services that take no arguments or return
  nothing, and `ShapeShifter`, which carries raw bytes.
- `rosgeneric.traits`: the abstract async interfaces `Publish`, `Subscribe`,
  `TopicProvider`, `Service`, `ServiceProvider` and `Ros`.
- `rosgeneric.mock`: `MockRos`, an in-memory backend for topics and services,
  meant for unit tests.
- `rosgeneric.spec` and `rosgeneric.helpers`: specifications of messages,
  fields, constants and services, and a Jinja2 environment with template
  functions and filters for generating source code from them.

## Installation

```
pip install rosgeneric
```

## Message and service types

A message type subclasses `RosMessage` and sets `ROS_TYPE_NAME`. `MD5SUM` and
`DEFINITION` are optional. A service type subclasses `RosService` and sets
`ROS_SERVICE_NAME`, `MD5SUM`, `Request` and `Response`. A class that leaves out
a required attribute raises `TypeError` when it is defined.

```python
from dataclasses import dataclass
from typing import ClassVar

from rosgeneric.messages import RosMessage, RosService


@dataclass
class String(RosMessage):
    ROS_TYPE_NAME: ClassVar[str] = "std_msgs/String"
    data: str = ""


@dataclass
class SetBoolRequest(RosMessage):
    ROS_TYPE_NAME: ClassVar[str] = "std_srvs/SetBoolRequest"
    data: bool = False


@dataclass
class SetBoolResponse(RosMessage):
    ROS_TYPE_NAME: ClassVar[str] = "std_srvs/SetBoolResponse"
    success: bool = False
    message: str = ""


class SetBool(RosService):
    ROS_SERVICE_NAME = "std_srvs/SetBool"
    MD5SUM = ""
    Request = SetBoolRequest
    Response = SetBoolResponse
```

## Testing ROS code with the mock backend

`MockRos` serializes every message and every service request and response
with `pickle`. Message types therefore need to be picklable, which in practice
means defined at module level.

```python
import asyncio
from rosgeneric.mock import MockRos


async def talker(ros):
    publisher = await ros.advertise("/chatter", String)
    await publisher.publish(String(data="Hello, world!"))


async def main():
    ros = MockRos()
    subscriber = await ros.subscribe("/chatter", String)
    await talker(ros)
    received = await subscriber.next()
    assert received.data == "Hello, world!"

    await ros.advertise_service(
        "/set_bool", SetBool,
        lambda req: SetBoolResponse(success=req.data, message="You set my bool!"),
    )
    response = await ros.call_service("/set_bool", SetBool, SetBoolRequest(data=True))
    assert response.success


asyncio.run(main())
```

How the mock behaves:

- Publishers and subscribers on the same topic name share one broadcast
  channel. A subscriber only receives messages published after it was created.
  Subscribers are also async iterators (`async for msg in subscriber`).
- Each channel keeps at most 16 messages. A subscriber that falls further
  behind gets `Disconnected` and then continues from the oldest message still
  kept.
- A received message that is not an instance of the subscribed type raises
  `SerializationError`.
- `service_client(topic, service_type)` returns a reusable `MockServiceClient`.
  Calling a service that was never advertised raises `Disconnected`.
- The service function runs in a worker thread. An exception it raises
  reaches the caller as `SerializationError`.
- Advertising a service again under the same name replaces the earlier one.
  Topics and services are never torn down. `copy.copy(ros)` gives a handle
  that shares them.

## Generating code from specifications

`rosgeneric.spec` describes what a template sees. It provides
`MessageSpecification`, `ServiceSpecification`, `Field`, `Constant` and
`ArrayInfo`, which is one of `ArrayInfo.not_an_array()`, `ArrayInfo.vector()`
or `ArrayInfo.array(size)`. Each converts to and from plain dictionaries
through `to_dict()` and `from_dict()`, and `from_dict()` raises `ValueError`
on malformed input.

`rosgeneric.helpers.prepare_environment(message_template, service_template,
typename_conversion_mapping=None)` returns a `jinja2.Environment` with the two
templates registered as `"message"` and `"service"`. Both templates are
compiled at once, so syntax errors are raised straight away. Templates can use
these names:

- functions `has_header`, `is_fixed_length`, `is_intrinsic_type`, `is_vector`
  and `is_fixed_array`
- the filter `fixed_size_array_size`
- the filter `typename_conversion`, present only when a mapping is passed; it
  leaves unmapped names unchanged

The helpers take either spec objects or their dictionaries. Input that is not
a valid specification gives `False`, or `0` for `fixed_size_array_size`.
`rosgeneric.helpers.ROS_TYPE_TO_CPP_TYPE_MAP` maps the built-in ROS types to
C++ type names for use as a conversion mapping.

```python
from rosgeneric.helpers import ROS_TYPE_TO_CPP_TYPE_MAP, prepare_environment
from rosgeneric.spec import ArrayInfo, Field, MessageSpecification

env = prepare_environment(
    "struct {{ spec.short_name }} {"
    "{% for f in spec.fields %} {{ f.field_type|typename_conversion }} {{ f.name }};{% endfor %} };",
    "",
    ROS_TYPE_TO_CPP_TYPE_MAP,
)
spec = MessageSpecification(
    short_name="Point", package="geometry_msgs",
    fields=[Field("x", "float64"), Field("y", "float64", array_info=ArrayInfo.not_an_array())],
)
print(env.get_template("message").render(spec=spec.to_dict()))
# struct Point { double x; double y; };
```

## What this package does not do

- It has no backend that talks to a real ROS system. `MockRos` is the only
  implementation of the interfaces.
- It does not find or parse `.msg`, `.srv` or `.action` files, and it does not
  compute MD5 sums. Specifications must be built by the caller.
- It ships no message templates and no command-line generator. Rendering a
  template and writing the output is left to the caller.

## Running the tests

```
pip install -e ".[test]"
pytest
```