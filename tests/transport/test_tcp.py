import socket
import threading

import pytest

from svcmsg.transport import tcp
from svcmsg.transport import TransportClosed, TransportConnectionError, TransportPortError


def test_read_exact():

    left, right = socket.socketpair()
    connection = tcp.Connection(left)

    assert connection.is_open == True

    right.sendall(b'01234')
    right.sendall(b'56789abc')

    assert connection.read(10) == b'0123456789'
    assert connection.read(3) == b'abc'

    right.close()

    with pytest.raises(TransportClosed):
        connection.read(1)

    connection.close()
    assert connection.is_open == False

    with pytest.raises(TransportClosed):
        connection.read(1)

    with pytest.raises(TransportClosed):
        connection.write(b'x')

    # Closing twice is harmless.
    connection.close()


def test_listener_connect():

    listener = tcp.Listener('127.0.0.1', 0)
    assert listener.port > 0

    accepted = list()

    def accept():
        accepted.append(listener.accept())

    thread = threading.Thread(target=accept)
    thread.start()

    with tcp.connect('127.0.0.1', listener.port) as client:
        thread.join(5)
        server_side = accepted[0]

        client.write(b'ping')
        assert server_side.read(4) == b'ping'

        server_side.write(b'pong')
        assert client.read(4) == b'pong'

        server_side.close()

    assert client.is_open == False
    listener.close()

    with pytest.raises(TransportClosed):
        listener.accept()


def test_listener_port_in_use():

    listener = tcp.Listener('127.0.0.1', 0)

    with pytest.raises(TransportPortError):
        tcp.Listener('127.0.0.1', listener.port)

    listener.close()


def test_connect_refused():

    listener = tcp.Listener('127.0.0.1', 0)
    port = listener.port
    listener.close()

    with pytest.raises(TransportConnectionError):
        tcp.connect('127.0.0.1', port)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
