import asyncio
import inspect

import pytest

from rosgeneric.errors import Disconnected
from rosgeneric.traits import (
    Publish,
    Ros,
    Service,
    ServiceProvider,
    Subscribe,
    TopicProvider,
)


class QueuePublisher(Publish):
    def __init__(self, queue):
        self.queue = queue

    async def publish(self, data):
        await self.queue.put(data)


class QueueSubscriber(Subscribe):
    def __init__(self, queue):
        self.queue = queue

    async def next(self):
        return await self.queue.get()


class ListSubscriber(Subscribe):
    def __init__(self, items):
        self.items = list(items)

    async def next(self):
        if not self.items:
            raise Disconnected()
        return self.items.pop(0)


class QueueTopics(TopicProvider):
    def __init__(self):
        self.queues = {}

    async def advertise(self, topic, message_type):
        return QueuePublisher(self.queues.setdefault(topic, asyncio.Queue()))

    async def subscribe(self, topic, message_type):
        return QueueSubscriber(self.queues.setdefault(topic, asyncio.Queue()))


class FnClient(Service):
    def __init__(self, fn):
        self.fn = fn

    async def call(self, request):
        return self.fn(request)


class DictServices(ServiceProvider):
    def __init__(self):
        self.servers = {}

    async def call_service(self, topic, service_type, request):
        client = await self.service_client(topic, service_type)
        return await client.call(request)

    async def service_client(self, topic, service_type):
        if topic not in self.servers:
            raise Disconnected()
        return FnClient(self.servers[topic])

    async def advertise_service(self, topic, service_type, server):
        self.servers[topic] = server


class FullNode(QueueTopics, DictServices):
    def __init__(self):
        QueueTopics.__init__(self)
        DictServices.__init__(self)


@pytest.mark.parametrize(
    "abstract", [Publish, Subscribe, TopicProvider, Service, ServiceProvider, Ros]
)
def test_abstract_classes_cannot_be_instantiated(abstract):
    with pytest.raises(TypeError):
        abstract()


def test_incomplete_subclass_cannot_be_instantiated():
    class HalfProvider(TopicProvider):
        async def advertise(self, topic, message_type):
            return None

    with pytest.raises(TypeError):
        HalfProvider()
    assert not Ros.__subclasscheck__(HalfProvider)


@pytest.mark.asyncio
async def test_interface_methods_are_coroutines():
    assert inspect.iscoroutinefunction(Publish.publish)
    assert inspect.iscoroutinefunction(Subscribe.next)
    assert inspect.iscoroutinefunction(ServiceProvider.advertise_service)

    queue = asyncio.Queue()
    await QueuePublisher(queue).publish("data")
    iterator = Subscribe.__aiter__(QueueSubscriber(queue))
    assert await anext(iterator) == "data"


def test_ros_recognises_topic_and_service_provider():
    class Combined(QueueTopics, DictServices):
        __init__ = FullNode.__init__

    assert Ros.__instancecheck__(Combined())
    assert Ros.__subclasscheck__(Combined)
    assert Ros.__instancecheck__(FullNode())


def test_ros_rejects_partial_providers():
    class TopicsOnly(QueueTopics):
        pass

    class ServicesOnly(DictServices):
        pass

    assert not Ros.__subclasscheck__(TopicsOnly)
    assert not Ros.__subclasscheck__(ServicesOnly)
    assert not Ros.__instancecheck__(TopicsOnly())


@pytest.mark.asyncio
async def test_subscriber_async_iteration_until_error():
    received = []
    with pytest.raises(Disconnected):
        async for item in Subscribe.__aiter__(ListSubscriber(["a", "b", "c"])):
            received.append(item)
    assert received == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_generic_node_usage():
    async def run(ros: Ros):
        publisher = await ros.advertise("/chatter", str)
        await publisher.publish("Hello, world!")

    node = FullNode()
    subscriber = await node.subscribe("/chatter", str)
    await run(node)
    received = await anext(Subscribe.__aiter__(subscriber))
    assert received == "Hello, world!"


@pytest.mark.asyncio
async def test_generic_service_usage():
    class PartialServices(ServiceProvider):
        call_service = DictServices.call_service

    with pytest.raises(TypeError):
        PartialServices()
    assert not Ros.__subclasscheck__(PartialServices)

    node = FullNode()
    assert Ros.__instancecheck__(node)
    await node.advertise_service("double", int, lambda x: x * 2)
    assert await node.call_service("double", int, 21) == 42
    with pytest.raises(Disconnected):
        await node.service_client("missing", int)