"""Transport layer implementations.

The backend used by :func:`connect` is chosen once, at import time, from the
``SVCMSG_TRANSPORT`` environment variable: ``tcp`` (the default) for plain
sockets, or ``zmq`` for ZeroMQ STREAM sockets. Both speak the same bytes on
the wire. Servers always listen with :class:`tcp.Listener`.
"""

import os

from .base import (
    ByteTransport,
    TransportError,
    TransportClosed,
    TransportConnectionError,
    TransportPortError,
)
from . import tcp

_BACKEND = os.environ.get("SVCMSG_TRANSPORT", "tcp")

if _BACKEND == "tcp":
    backend = tcp
elif _BACKEND == "zmq":
    from .zmq import stream as backend
else:
    raise ImportError(f"unknown SVCMSG_TRANSPORT backend: {_BACKEND!r}")


def connect(host, port, timeout=None) -> ByteTransport:
    """Open a fresh connection to *host* and *port* using the selected backend."""
    return backend.connect(host, port, timeout)
