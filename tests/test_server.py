import threading

import pytest

import svcmsg
from svcmsg import server
from svcmsg.protocol.message import Message
from svcmsg.protocol.payload import MessageType
from svcmsg.registry import Registry, ServiceInfo


@pytest.fixture
def echo_service():

    service = server.Server('echo_service', '127.0.0.1', 0, handler=server.echo)
    service.start()

    registry = Registry()
    registry.register_service('echo_service', ServiceInfo('echo_service', '127.0.0.1', service.port))

    yield registry

    service.shutdown()


def test_echo_key_values(echo_service):

    pairs = {'firstName': 'Mickey', 'lastName': 'Mouse', 'city': 'Orlando', 'state': 'FL'}
    message = Message.key_values('echo', pairs)
    response = Message()

    assert message.send('echo_service', response, registry=echo_service) == True
    assert response.request_name == 'echo'
    assert response.type is MessageType.KEY_VALUES
    assert response.key_values_payload == pairs
    assert response.one_way == False


def test_echo_text(echo_service):

    svcmsg.set_registry(echo_service)

    message = Message.text('serverInfo', 'hello there')
    response = Message()

    assert message.send('echo_service', response) == True
    assert response.text_payload == 'hello there'


def test_one_way():

    received = list()
    arrived = threading.Event()

    def handler(request):
        received.append(request)
        arrived.set()
        return server.echo(request)

    with server.Server('sink', '127.0.0.1', 0, handler=handler) as service:

        registry = Registry()
        registry.register_service('sink', ServiceInfo('sink', '127.0.0.1', service.port))

        message = Message.key_values('echo', {'firstName': 'Mickey'})
        assert message.send('sink', registry=registry) == True
        assert message.one_way == True

        assert arrived.wait(5) == True

    request = received[0]
    assert request.one_way == True
    assert request.service_name == 'sink'
    assert request.request_name == 'echo'
    assert request.key_values_payload == {'firstName': 'Mickey'}


def test_no_response():

    def handler(request):
        return None

    with server.Server('quiet', '127.0.0.1', 0, handler=handler) as service:

        registry = Registry()
        registry.register_service('quiet', ServiceInfo('quiet', '127.0.0.1', service.port))

        # The server closes the connection without responding; the two-way
        # send fails rather than blocking forever.

        message = Message.text('serverInfo')
        assert message.send('quiet', Message(), registry=registry) == False


def test_handler_exception():

    def handler(request):
        raise RuntimeError('handler failure')

    with server.Server('fragile', '127.0.0.1', 0, handler=handler) as service:

        registry = Registry()
        registry.register_service('fragile', ServiceInfo('fragile', '127.0.0.1', service.port))

        message = Message.text('serverInfo')
        assert message.send('fragile', Message(), registry=registry) == False

        # The server survives to handle the next request.

        assert message.send('fragile', registry=registry) == True


def test_connection_refused():

    service = server.Server('gone', '127.0.0.1', 0)
    port = service.port
    service.shutdown()

    registry = Registry()
    registry.register_service('gone', ServiceInfo('gone', '127.0.0.1', port))

    message = Message.text('serverInfo')
    assert message.send('gone', registry=registry) == False


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
