""" Plain TCP stream sockets. A :class:`Connection` is opened for a single
    exchange and closed afterwards; nothing is pooled or reused. The
    :class:`Listener` is the accepting half, used by :mod:`svcmsg.server`.
"""

import logging
import socket

from .base import (
    ByteTransport,
    TransportClosed,
    TransportConnectionError,
    TransportError,
    TransportPortError,
)


_logger = logging.getLogger(__name__)


class Connection(ByteTransport):
    """ Wrap a connected :class:`socket.socket`. Reads and writes block; any
        timeout is whatever the caller configured on the socket, by default
        there is none.
    """

    def __init__(self, sock, peer=None):
        self.socket = sock
        self.peer = peer


    def __repr__(self):
        return 'tcp.Connection(' + repr(self.peer) + ')'


    @property
    def is_open(self):
        return self.socket is not None


    def read(self, length):

        if self.socket is None:
            raise TransportClosed('read from a closed connection')

        chunks = list()
        remaining = length

        while remaining > 0:
            try:
                chunk = self.socket.recv(remaining)
            except OSError as e:
                raise TransportError('recv failed: ' + str(e)) from e

            if chunk == b'':
                raise TransportClosed('connection closed with %d bytes outstanding' % (remaining))

            chunks.append(chunk)
            remaining -= len(chunk)

        return b''.join(chunks)


    def write(self, data):

        if self.socket is None:
            raise TransportClosed('write to a closed connection')

        try:
            self.socket.sendall(data)
        except OSError as e:
            raise TransportError('send failed: ' + str(e)) from e


    def close(self):

        sock = self.socket
        self.socket = None

        if sock is None:
            return

        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Already disconnected by the peer.
            pass

        sock.close()


# end of class Connection



class Listener:
    """ Accept incoming connections on *address* and *port*. A *port* of zero
        lets the operating system pick one; the chosen port is available as
        the :attr:`port` attribute once the listener is constructed.
    """

    backlog = 16

    def __init__(self, address='', port=0):

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        try:
            sock.bind((address, int(port)))
        except OSError as e:
            sock.close()
            raise TransportPortError('unable to bind %s:%s: %s' % (address, port, e)) from e

        sock.listen(self.backlog)

        self.address = address
        self.socket = sock
        self.port = sock.getsockname()[1]


    def accept(self):
        """ Block until a client connects, and return a :class:`Connection`
            for it. Raises :class:`TransportClosed` once the listener has been
            closed.
        """

        if self.socket is None:
            raise TransportClosed('listener is closed')

        try:
            sock, peer = self.socket.accept()
        except OSError as e:
            raise TransportClosed('accept failed: ' + str(e)) from e

        return Connection(sock, peer)


    def close(self):

        sock = self.socket
        self.socket = None

        if sock is None:
            return

        # Shutting down the socket wakes any thread blocked in accept().

        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass

        sock.close()


# end of class Listener



def connect(host, port, timeout=None):
    """ Open a :class:`Connection` to *host* and *port*. The optional
        *timeout* applies to the connection attempt only; the returned
        connection is always blocking.
    """

    try:
        sock = socket.create_connection((host, int(port)), timeout)
    except OSError as e:
        raise TransportConnectionError('unable to connect to %s:%s: %s' % (host, port, e)) from e

    sock.settimeout(None)
    _logger.debug("connected to %s:%s", host, port)
    return Connection(sock, (host, int(port)))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
