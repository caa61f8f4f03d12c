"""ZeroMQ STREAM transport.

A ZMQ_STREAM socket speaks raw TCP to its peer, so this backend is wire
compatible with :mod:`svcmsg.transport.tcp`; the peer does not need to know
ZeroMQ is involved. Each inbound ZeroMQ message is an arbitrary slice of the
TCP stream, so received data is buffered here to provide read-exactly-N.

    [routing id, data]   -- data from the peer
    [routing id, b'']    -- connection established, or connection closed
"""

from __future__ import annotations

import atexit
import logging
from typing import Optional

import zmq

from ..base import (
    ByteTransport,
    TransportClosed,
    TransportConnectionError,
    TransportError,
)


_logger = logging.getLogger(__name__)

zmq_context = zmq.Context()

# ZeroMQ retries a refused connection forever in the background; a bounded
# wait on the connection notification is the only way to notice failure.

connect_timeout = 5.0


class Connection(ByteTransport):
    """Client connection to a raw TCP peer via a ZMQ_STREAM socket."""

    def __init__(self, host: str, port: int, timeout: Optional[float] = None):
        self.host = host
        self.port = int(port)

        if timeout is None:
            timeout = connect_timeout

        self.socket = zmq_context.socket(zmq.STREAM)
        self.socket.setsockopt(zmq.LINGER, 0)
        self._buffer = bytearray()
        self._routing_id: Optional[bytes] = None

        try:
            self.socket.connect(f"tcp://{host}:{self.port}")
        except zmq.ZMQError as exc:
            self.socket.close()
            self.socket = None
            raise TransportConnectionError(
                f"unable to connect to {host}:{self.port}: {exc}"
            ) from exc

        if not self.socket.poll(int(timeout * 1000), zmq.POLLIN):
            self.socket.close()
            self.socket = None
            raise TransportConnectionError(
                f"no connection to {host}:{self.port} in {timeout:.2f} sec"
            )

        routing_id, notice = self.socket.recv_multipart()
        self._routing_id = routing_id

        if notice:
            # Some libzmq builds have connect notifications disabled; in that
            # case the first frame is already peer data.
            self._buffer.extend(notice)

        _logger.debug("zmq stream connected to %s:%d", host, self.port)

    def __repr__(self) -> str:
        return f"zmq.stream.Connection({self.host!r}, {self.port})"

    @property
    def is_open(self) -> bool:
        return self.socket is not None

    def read(self, length: int) -> bytes:
        while len(self._buffer) < length:
            if self.socket is None:
                raise TransportClosed("read from a closed connection")

            try:
                routing_id, data = self.socket.recv_multipart()
            except zmq.ZMQError as exc:
                raise TransportError(f"recv failed: {exc}") from exc

            if routing_id != self._routing_id:
                continue

            if data == b"":
                self._close_socket()
                raise TransportClosed(
                    f"connection closed with {length - len(self._buffer)} bytes outstanding"
                )

            self._buffer.extend(data)

        data = bytes(self._buffer[:length])
        del self._buffer[:length]
        return data

    def write(self, data: bytes) -> None:
        if self.socket is None:
            raise TransportClosed("write to a closed connection")

        try:
            self.socket.send_multipart((self._routing_id, data))
        except zmq.ZMQError as exc:
            raise TransportError(f"send failed: {exc}") from exc

    def close(self) -> None:
        if self.socket is None:
            return

        # An empty frame asks ZeroMQ to disconnect the peer.
        try:
            self.socket.send_multipart((self._routing_id, b""))
        except zmq.ZMQError:
            pass

        self._close_socket()

    def _close_socket(self) -> None:
        sock = self.socket
        self.socket = None
        if sock is not None:
            sock.close()


def connect(host: str, port: int, timeout: Optional[float] = None) -> Connection:
    return Connection(host, port, timeout)


def _cleanup() -> None:
    try:
        zmq_context.term()
    except zmq.ZMQError:
        pass


atexit.register(_cleanup)
