"""An in-memory ROS backend for exercising ROS behaviour in tests.

Messages travel through per-topic broadcast channels and services are plain
callables kept in a table. Data is serialized on the way in and out, so
publishers and subscribers never share message objects.
"""

from __future__ import annotations

import asyncio
import logging
import pickle
from collections import deque
from typing import Any, Callable, Generic, TypeVar

from .errors import Disconnected, SerializationError
from .traits import Publish, Ros, Service, ServiceFn, Subscribe

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CHANNEL_CAPACITY = 10

_ErasedCallback = Callable[[bytes], bytes]


def _serialize(value: Any) -> bytes:
    try:
        return pickle.dumps(value)
    except Exception as error:  # pickling raises several unrelated types
        raise SerializationError(str(error)) from error


def _deserialize(data: bytes, expected_type: type) -> Any:
    try:
        value = pickle.loads(data)
    except Exception as error:
        raise SerializationError(str(error)) from error
    if not isinstance(value, expected_type):
        raise SerializationError(
            f"expected {expected_type.__name__}, got {type(value).__name__}"
        )
    return value


class _Broadcast:
    """A bounded multi-consumer channel; slow receivers lose the oldest data."""

    def __init__(self, capacity: int) -> None:
        # The buffer is sized to the next power of two, as broadcast queues commonly are.
        size = 1
        while size < capacity:
            size *= 2
        self.capacity = size
        self._buffer: deque[bytes] = deque(maxlen=size)
        self._next_seq = 0
        self._waiters: list[asyncio.Future] = []

    @property
    def oldest_seq(self) -> int:
        return self._next_seq - len(self._buffer)

    def send(self, data: bytes) -> None:
        self._buffer.append(data)
        self._next_seq += 1
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)

    def receiver(self) -> _Receiver:
        return _Receiver(self, self._next_seq)

    async def wait(self) -> None:
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        finally:
            if waiter in self._waiters:
                self._waiters.remove(waiter)


class _Receiver:
    """A read position in a broadcast channel."""

    def __init__(self, channel: _Broadcast, position: int) -> None:
        self._channel = channel
        self._position = position

    def resubscribe(self) -> _Receiver:
        return self._channel.receiver()

    async def recv(self) -> bytes:
        channel = self._channel
        while True:
            oldest = channel.oldest_seq
            if self._position < oldest:
                skipped = oldest - self._position
                self._position = oldest
                raise Disconnected() from RuntimeError(f"receiver lagged by {skipped}")
            if self._position < channel._next_seq:
                data = channel._buffer[self._position - oldest]
                self._position += 1
                return data
            await channel.wait()


class MockPublisher(Publish[T], Generic[T]):
    """The publisher returned by :meth:`MockRos.advertise`."""

    def __init__(self, channel: _Broadcast, message_type: type) -> None:
        self._channel = channel
        self.message_type = message_type

    async def publish(self, data: T) -> None:
        self._channel.send(_serialize(data))
        logger.debug(
            "Sent data on topic %s", getattr(self.message_type, "ROS_TYPE_NAME", "")
        )


class MockSubscriber(Subscribe[T], Generic[T]):
    """The subscriber returned by :meth:`MockRos.subscribe`."""

    def __init__(self, receiver: _Receiver, message_type: type) -> None:
        self._receiver = receiver
        self.message_type = message_type

    async def next(self) -> T:
        data = await self._receiver.recv()
        message = _deserialize(data, self.message_type)
        logger.debug(
            "Received data on topic %s", getattr(self.message_type, "ROS_TYPE_NAME", "")
        )
        return message


class MockServiceClient(Service):
    """The client returned by :meth:`MockRos.service_client`; callable many times."""

    def __init__(self, callback: _ErasedCallback, service_type: type) -> None:
        self._callback = callback
        self.service_type = service_type

    async def call(self, request: Any) -> Any:
        data = _serialize(request)
        try:
            response = await asyncio.to_thread(self._callback, data)
        except SerializationError:
            raise
        except Exception as error:
            raise SerializationError(str(error)) from error
        return _deserialize(response, self.service_type.Response)


class MockRos(Ros):
    """A mock ROS backend usable wherever a real backend is expected.

    Copies of a MockRos share its topics and services. Topics are never torn
    down and advertised services stay active until replaced.
    """

    def __init__(self) -> None:
        self._topics: dict[str, tuple[_Broadcast, _Receiver]] = {}
        self._services: dict[str, _ErasedCallback] = {}

    def __copy__(self) -> MockRos:
        other = MockRos.__new__(MockRos)
        other._topics = self._topics
        other._services = self._services
        return other

    def _new_channel(self, topic: str) -> tuple[_Broadcast, _Receiver]:
        channel = _Broadcast(_CHANNEL_CAPACITY)
        entry = (channel, channel.receiver())
        self._topics[topic] = entry
        return entry

    async def advertise(self, topic: str, message_type: type) -> MockPublisher:
        existing = self._topics.get(topic)
        if existing is not None:
            logger.debug("Issued new publisher to existing topic %s", topic)
            return MockPublisher(existing[0], message_type)
        channel, _ = self._new_channel(topic)
        logger.debug("Created new publisher and channel for topic %s", topic)
        return MockPublisher(channel, message_type)

    async def subscribe(self, topic: str, message_type: type) -> MockSubscriber:
        existing = self._topics.get(topic)
        if existing is not None:
            logger.debug("Issued new subscriber to existing topic %s", topic)
            return MockSubscriber(existing[1].resubscribe(), message_type)
        _, receiver = self._new_channel(topic)
        logger.debug("Created new subscriber and channel for topic %s", topic)
        return MockSubscriber(receiver.resubscribe(), message_type)

    async def call_service(self, topic: str, service_type: type, request: Any) -> Any:
        client = await self.service_client(topic, service_type)
        return await client.call(request)

    async def service_client(self, topic: str, service_type: type) -> MockServiceClient:
        callback = self._services.get(topic)
        if callback is None:
            raise Disconnected()
        return MockServiceClient(callback, service_type)

    async def advertise_service(
        self, topic: str, service_type: type, server: ServiceFn
    ) -> None:
        request_type = service_type.Request

        def erased(message: bytes) -> bytes:
            request = _deserialize(message, request_type)
            response = server(request)
            return _serialize(response)

        self._services[topic] = erased