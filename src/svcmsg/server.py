"""Server-side request dispatch.

A :class:`Server` listens on a TCP port on behalf of one named service. Each
accepted connection carries exactly one request: the request is
reconstructed, handed to :meth:`Server.req_handler`, and the returned
:class:`~svcmsg.protocol.message.Message` (if any) is written back before the
connection is closed. One-way requests never get a response.
"""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from typing import Callable, Optional

from .protocol.message import Message
from .transport import TransportClosed
from .transport.tcp import Listener


_logger = logging.getLogger(__name__)


Handler = Callable[[Message], Optional[Message]]


class Server:
    """Receive requests for *service_name*, respond to them.

    The *handler* is called with every reconstructed request; subclasses may
    instead override :meth:`req_handler`. A *port* of zero binds any free
    port; the bound port is available as :attr:`port`.
    """

    workers = 8

    def __init__(self, service_name: str, address: str = '', port: int = 0,
                 handler: Optional[Handler] = None):
        self.service_name = service_name
        self.handler = handler

        self.listener = Listener(address, port)
        self.address = address
        self.port = self.listener.port

        self.shutdown_requested = False
        self.pool = concurrent.futures.ThreadPoolExecutor(max_workers=self.workers)
        self.thread = threading.Thread(target=self.run, daemon=True)

    def start(self) -> Server:
        self.thread.start()
        _logger.info("service %r listening on port %d", self.service_name, self.port)
        return self

    def shutdown(self) -> None:
        self.shutdown_requested = True
        self.listener.close()

        if self.thread.is_alive() and self.thread is not threading.current_thread():
            self.thread.join()

        self.pool.shutdown(wait=True)

    def __enter__(self):
        return self.start()

    def __exit__(self, *exc_info):
        self.shutdown()
        return False

    # --- request handling hooks ---
    def req_handler(self, request: Message) -> Optional[Message]:
        """Override in subclasses, or supply a *handler* at construction.

        Return:
          - Message -> written back to the client
          - None    -> no response
        """

        if self.handler is None:
            _logger.warning("service %r has no handler for %r", self.service_name, request.request_name)
            return None

        return self.handler(request)

    # --- internal ---
    def _req_incoming(self, connection) -> None:
        try:
            request = Message.reconstruct(connection)
            if request is None:
                return

            request.service_name = self.service_name

            try:
                response = self.req_handler(request)
            except Exception:
                _logger.exception("handler for %r failed", request.request_name)
                return

            if request.one_way or response is None:
                return

            connection.write(response.serialize())

        except OSError as e:
            _logger.error("unable to respond to request: %s", e)

        finally:
            connection.close()

    def run(self) -> None:
        while not self.shutdown_requested:
            try:
                connection = self.listener.accept()
            except TransportClosed:
                break

            self.pool.submit(self._req_incoming, connection)


def echo(request: Message) -> Message:
    """Handler that returns the request payload under the same request name."""

    response = Message(request.request_name, request.type)
    response.payload = request.payload
    return response
