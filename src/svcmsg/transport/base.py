"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`svcmsg.protocol` so the protocol remains
transport-agnostic: the wire codec only ever calls :meth:`ByteTransport.read`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Transport agnostic exceptions. These derive from OSError so that anything
# reading a transport can treat them the same as a failed socket call.

class TransportError(OSError):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class TransportClosed(TransportError):
    """The peer closed the connection before the requested bytes arrived."""


class TransportPortError(TransportError):
    """No suitable port could be bound or connected."""


class ByteTransport(ABC):
    """Minimal contract for a bidirectional, blocking byte stream."""

    @abstractmethod
    def read(self, length: int) -> bytes:
        """Block until exactly *length* bytes are available and return them.

        Raises :class:`TransportClosed` if the stream ends first.
        """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write all of *data*, or raise :class:`TransportError`."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
        return False
