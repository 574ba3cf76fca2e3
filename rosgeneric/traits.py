"""Abstract interfaces for publish/subscribe and service backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

ServiceFn = Callable[[Any], Any]
"""A callable that takes a service request and returns its response."""


class Publish(ABC, Generic[T]):
    """Something that publishes messages of one type to a topic."""

    @abstractmethod
    async def publish(self, data: T) -> None:
        """Send one message on the topic."""


class Subscribe(ABC, Generic[T]):
    """Something that receives messages of one type from a topic.

    It is also an async iterator over the messages received.
    """

    @abstractmethod
    async def next(self) -> T:
        """Wait for and return the next message."""

    def __aiter__(self) -> Subscribe[T]:
        return self

    async def __anext__(self) -> T:
        return await self.next()


class TopicProvider(ABC):
    """Creates publishers and subscribers for topics identified by name."""

    @abstractmethod
    async def advertise(self, topic: str, message_type: type) -> Publish:
        """Advertise a topic and return a publisher for ``message_type``."""

    @abstractmethod
    async def subscribe(self, topic: str, message_type: type) -> Subscribe:
        """Subscribe to a topic and return a subscriber for ``message_type``."""


class Service(ABC):
    """Something that can be called as a service."""

    @abstractmethod
    async def call(self, request: Any) -> Any:
        """Call the service with ``request`` and return its response."""


class ServiceProvider(ABC):
    """Creates service clients and service servers."""

    @abstractmethod
    async def call_service(self, topic: str, service_type: type, request: Any) -> Any:
        """Call a service once and return its response."""

    @abstractmethod
    async def service_client(self, topic: str, service_type: type) -> Service:
        """Return a persistent client for repeatedly calling a service."""

    @abstractmethod
    async def advertise_service(self, topic: str, service_type: type, server: ServiceFn) -> Any:
        """Make ``server`` available to clients and return a handle to it."""


class Ros(TopicProvider, ServiceProvider):
    """All standard ROS functionality: topics and services together.

    Any class deriving from both TopicProvider and ServiceProvider counts as Ros.
    """

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is Ros:
            mro = getattr(subclass, "__mro__", ())
            if TopicProvider in mro and ServiceProvider in mro:
                return True
        return NotImplemented