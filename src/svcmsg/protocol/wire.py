""" Wire format for svcmsg messages. A frame on the wire looks like::

        [10 bytes: decimal header length, right-padded with spaces]
        [header length bytes: "k1=v1;k2=v2;...;kn=vn"]
        [payload_length bytes: payload text, or "k1=v1;...;kn=vn"]

    The payload length is not part of the framing proper; it travels as the
    ``payload_length`` header field, and is only consulted when parsing.

    Key/value pairs are flattened with no escaping of any kind: keys and
    values containing ``=`` or ``;`` will not survive the trip. Changing that
    would change the wire format, so it is left alone.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, NamedTuple, Optional

from . import fields
from . import payload as payloads
from .payload import KeyValues, MessageType, Payload, Text


_logger = logging.getLogger(__name__)


class FramingError(ValueError):
    """ The bytes read from a transport do not describe a valid frame.
    """


class Frame(NamedTuple):
    headers: Dict[str, str]
    payload: Payload
    one_way: bool


def flatten(pairs: Optional[Mapping[str, str]]) -> str:
    """ Flatten an ordered mapping of strings as ``k1=v1;k2=v2``. There is
        no trailing delimiter; an empty or absent mapping is the empty string.
    """

    if not pairs:
        return ''

    flattened = list()
    for key,value in pairs.items():
        flattened.append(str(key) + fields.DELIMITER_KEY_VALUE + str(value))

    return fields.DELIMITER_PAIR.join(flattened)


def unflatten(text: Optional[str]) -> Dict[str, str]:
    """ The inverse of :func:`flatten`. Empty segments are skipped, as are
        any segments that do not split into exactly one key and one value;
        ``a=``, ``=b`` and ``a=b=c`` are all silently dropped. The returned
        dictionary may therefore be empty, it is up to the caller to decide
        whether that is an error.
    """

    pairs = dict()

    if not text:
        return pairs

    for segment in text.split(fields.DELIMITER_PAIR):
        tokens = segment.split(fields.DELIMITER_KEY_VALUE)
        tokens = [token for token in tokens if token != '']

        if len(tokens) == 2:
            key,value = tokens
            pairs[key] = value

    return pairs


def encode_length(length: int) -> str:
    """ Render *length* as the fixed-width header length prefix.
    """

    length = int(length)
    if length < 0:
        raise FramingError('negative length: ' + str(length))

    encoded = str(length)
    if len(encoded) > fields.HEADER_LENGTH_WIDTH:
        raise FramingError('length does not fit in the prefix: ' + encoded)

    return encoded.ljust(fields.HEADER_LENGTH_WIDTH, ' ')


def decode_length(prefix) -> int:
    """ Parse a header length prefix. Only trailing spaces are stripped; any
        other whitespace, sign, or non-digit content is an error.
    """

    try:
        prefix = prefix.decode(fields.ENCODING)
    except AttributeError:
        pass
    except UnicodeDecodeError as e:
        raise FramingError('header length prefix is not text') from e

    prefix = prefix.rstrip(' ')

    if not (prefix.isascii() and prefix.isdigit()):
        raise FramingError('header length prefix is not numeric: ' + repr(prefix))

    return int(prefix)


def render(payload: Payload) -> str:
    """ Return the string form of a payload, as it will appear on the wire.
    """

    if isinstance(payload, Text):
        return payload.text or ''
    if isinstance(payload, KeyValues):
        return flatten(payload.pairs)

    return ''


def serialize(headers: Mapping[str, str], payload: Payload, one_way: bool = False) -> bytes:
    """ Serialize a header mapping and payload as a complete frame. The
        supplied *headers* are not modified; the protocol fields are added
        to a working copy. Calling this method repeatedly with the same
        arguments yields identical bytes.
    """

    headers = dict(headers)
    headers[fields.PAYLOAD_TYPE] = payload.type.value

    rendered = render(payload)
    rendered = rendered.encode(fields.ENCODING)

    if one_way:
        headers[fields.ONE_WAY] = fields.TRUE

    if fields.REQUEST not in headers:
        headers[fields.REQUEST] = ''

    headers[fields.PAYLOAD_LENGTH] = str(len(rendered))

    header = flatten(headers)
    header = header.encode(fields.ENCODING)
    prefix = encode_length(len(header))
    prefix = prefix.encode(fields.ENCODING)

    return prefix + header + rendered


def _payload_length(headers: Mapping[str, str]) -> int:
    """ Return the number of payload bytes that should be read, which is
        zero if the declared payload length is missing, not a number, or out
        of range. Frames are never chunked, so a declared length beyond the
        maximum segment length is ignored rather than read in pieces.
    """

    declared = headers.get(fields.PAYLOAD_LENGTH)

    if not declared:
        return 0

    try:
        length = int(declared)
    except ValueError:
        _logger.debug("ignoring non-numeric payload length %r", declared)
        return 0

    if 0 < length <= fields.MAX_SEGMENT_LENGTH:
        return length

    if length != 0:
        _logger.debug("ignoring out of range payload length %d", length)

    return 0


def _read(transport, length: int, what: str) -> bytes:
    try:
        data = transport.read(length)
    except OSError as e:
        raise FramingError('reading ' + what + ' failed: ' + str(e)) from e

    if len(data) != length:
        raise FramingError('short read for ' + what)

    return data


def _decode(data: bytes, what: str) -> str:
    try:
        return data.decode(fields.ENCODING)
    except UnicodeDecodeError as e:
        raise FramingError(what + ' is not valid ' + fields.ENCODING) from e


def deserialize(transport) -> Frame:
    """ Read one complete frame from *transport*, a
        :class:`svcmsg.transport.base.ByteTransport`. A :class:`FramingError`
        is raised if the frame is malformed or the transport fails part way
        through; no partial frame is ever returned.
    """

    prefix = _read(transport, fields.HEADER_LENGTH_WIDTH, 'header length')
    header_length = decode_length(prefix)
    _logger.debug("header length prefix read: %d", header_length)

    if header_length == 0:
        raise FramingError('header length is empty')

    header = _read(transport, header_length, 'header')
    header = _decode(header, 'header')
    headers = unflatten(header)

    if not headers:
        raise FramingError('unable to parse header')

    message_type = payloads.from_header(headers.get(fields.PAYLOAD_TYPE))

    if message_type is MessageType.UNKNOWN:
        raise FramingError('unable to identify message type from header')

    payload = payloads.empty(message_type)
    length = _payload_length(headers)

    if length > 0:
        raw = _read(transport, length, 'payload')
        raw = _decode(raw, 'payload')

        if message_type is MessageType.TEXT:
            payload = Text(raw)
        else:
            payload = KeyValues(unflatten(raw))

    one_way = headers.get(fields.ONE_WAY) == fields.TRUE

    return Frame(headers, payload, one_way)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
