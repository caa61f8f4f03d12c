""" A class representation of a svcmsg message. A :class:`Message` is the
    primary object used for sending and receiving; a new instance should be
    created for each message sent. On the receiving end, a :class:`Message`
    is reconstructed by reading a transport, and the response (if any) is
    another freshly constructed :class:`Message`.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from .. import registry as registries
from .. import transport as transports
from ..transport.base import ByteTransport
from . import fields
from . import payload as payloads
from . import wire
from .payload import KeyValues, MessageType, Payload, Text


_logger = logging.getLogger(__name__)


Connect = Callable[[str, int], ByteTransport]


class Message:
    """ The :class:`Message` encapsulates one logical request or response:
        the name of the request, a set of headers, and a payload. The
        payload is one of :class:`svcmsg.protocol.payload.Text`,
        :class:`svcmsg.protocol.payload.KeyValues`, or
        :class:`svcmsg.protocol.payload.Unknown`; the message type is
        whichever of those the payload is.

        :ivar headers: Protocol metadata and any caller-supplied fields.
        :ivar one_way: True if no response is expected for this message.
        :ivar service_name: For a message handled by a
            :class:`svcmsg.server.Server`, the name of the service that
            received it; None otherwise.
    """

    def __init__(self, request_name: Optional[str] = None,
                 message_type: MessageType = MessageType.UNKNOWN):

        self.headers: Dict[str, str] = dict()
        self.one_way = False
        self.service_name: Optional[str] = None
        self._payload: Payload = payloads.empty(message_type)

        if request_name is not None:
            self.headers[fields.REQUEST] = request_name


    @classmethod
    def text(cls, request_name: str, text: Optional[str] = None) -> Message:
        message = cls(request_name, MessageType.TEXT)
        message.payload = Text(text)
        return message


    @classmethod
    def key_values(cls, request_name: str, pairs: Optional[Dict[str, str]] = None) -> Message:
        message = cls(request_name, MessageType.KEY_VALUES)
        if pairs is not None:
            pairs = dict(pairs)
        message.payload = KeyValues(pairs)
        return message


    @classmethod
    def reconstruct(cls, transport: Optional[ByteTransport]) -> Optional[Message]:
        """ Read a complete message from *transport* and return it. None is
            returned if there is no transport, the transport is closed, or the
            bytes read do not form a valid message.
        """

        if transport is None or not transport.is_open:
            _logger.error("no open transport to reconstruct a message from")
            return None

        message = cls()
        if message.reconstitute(transport):
            return message

        return None


    def __bytes__(self):
        return self.serialize()


    def __repr__(self):
        one_way = ' one-way' if self.one_way else ''
        return 'Message(' + repr(self.request_name) + ', ' + repr(self.payload) + one_way + ')'


    @property
    def type(self) -> MessageType:
        return self._payload.type


    @type.setter
    def type(self, message_type: MessageType) -> None:
        """ Changing the message type discards the current payload.
        """

        self._payload = payloads.empty(message_type)


    @property
    def request_name(self) -> str:
        return self.headers.get(fields.REQUEST, '')


    @property
    def payload(self) -> Payload:
        return self._payload


    @payload.setter
    def payload(self, payload: Payload) -> None:
        if not isinstance(payload, (payloads.Text, payloads.KeyValues, payloads.Unknown)):
            raise TypeError('not a payload: ' + repr(payload))

        self._payload = payload


    @property
    def text_payload(self) -> Optional[str]:
        if isinstance(self._payload, Text):
            return self._payload.text
        return None


    @text_payload.setter
    def text_payload(self, text: Optional[str]) -> None:
        if self.type is not MessageType.TEXT:
            raise TypeError('cannot set a text payload on a ' + self.type.name + ' message')

        self._payload = Text(text)


    @property
    def key_values_payload(self) -> Optional[Dict[str, str]]:
        if isinstance(self._payload, KeyValues):
            return self._payload.pairs
        return None


    @key_values_payload.setter
    def key_values_payload(self, pairs: Optional[Dict[str, str]]) -> None:
        if self.type is not MessageType.KEY_VALUES:
            raise TypeError('cannot set a key/value payload on a ' + self.type.name + ' message')

        if pairs is not None:
            pairs = dict(pairs)
        self._payload = KeyValues(pairs)


    def serialize(self) -> bytes:
        """ Flatten this message to the bytes that will go on the wire.
        """

        return wire.serialize(self.headers, self._payload, self.one_way)


    def reconstitute(self, transport: Optional[ByteTransport]) -> bool:
        """ Populate this message by reading one frame from *transport*. The
            existing state of this message is only replaced if a complete,
            valid frame is read. Returns True on success, False otherwise.
        """

        if transport is None:
            _logger.error("no transport given to reconstitute")
            return False

        try:
            frame = wire.deserialize(transport)
        except wire.FramingError as e:
            _logger.error("unable to reconstitute message: %s", e)
            return False

        self.headers = frame.headers
        self._payload = frame.payload
        self.one_way = frame.one_way
        return True


    def send(self, service_name: str, response: Optional[Message] = None,
             registry: Optional[registries.Registry] = None,
             connect: Optional[Connect] = None) -> bool:
        """ Send this message to the service named *service_name*. If a
            *response* :class:`Message` is provided, block until the reply
            arrives and populate *response* with it; otherwise, the message
            is marked one-way and no reply is read.

            The *registry* used to resolve the service defaults to the
            process-wide registry; *connect* is the callable used to open
            the connection, and defaults to :func:`svcmsg.transport.connect`.

            Returns True if the message was delivered (and, for a two-way
            send, a valid response received). Failures are logged and
            reported as False; no exception is raised.
        """

        if self.type is MessageType.UNKNOWN:
            _logger.error("unable to send message, no message type set")
            return False

        connection = transport_for_service(service_name, registry, connect)

        if connection is None:
            _logger.error("unable to connect to service %r", service_name)
            return False

        try:
            if response is None:
                self.one_way = True

            data = self.serialize()
            _logger.debug("sending to %r: %r", service_name, data)

            try:
                connection.write(data)
            except OSError as e:
                _logger.error("unable to write to %r: %s", service_name, e)
                return False

            if response is None:
                return True

            return response.reconstitute(connection)

        finally:
            connection.close()


# end of class Message



def transport_for_service(service_name: str,
                          registry: Optional[registries.Registry] = None,
                          connect: Optional[Connect] = None) -> Optional[ByteTransport]:
    """ Resolve *service_name* and open a fresh connection to it. None is
        returned, and the reason logged, if the registry is not initialized,
        the service is not registered, or the connection cannot be opened.
    """

    if registry is None:
        registry = registries.get_registry()

    if registry is None:
        _logger.error("messaging not initialized")
        return None

    info = registry.info_for_service(service_name)

    if info is None:
        _logger.error("service %r is not registered", service_name)
        return None

    if connect is None:
        connect = transports.connect

    try:
        return connect(info.host, info.port)
    except OSError as e:
        _logger.error("unable to open connection to %r at %s:%s: %s", service_name, info.host, info.port, e)
        return None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
