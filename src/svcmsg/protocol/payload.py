""" Message payloads. A payload is exactly one of three variants: a
    :class:`Text` payload carrying a string, a :class:`KeyValues` payload
    carrying an ordered string-to-string mapping, or :class:`Unknown`, the
    placeholder for a message whose type has not been established. The
    :class:`MessageType` of a message is derived from its payload variant,
    so the two can never disagree.

    An empty payload is represented by the variant with None as its content;
    ``Text()`` and ``KeyValues()`` are both valid, empty payloads.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Optional, Union

from . import fields


class MessageType(enum.Enum):
    UNKNOWN = fields.PAYLOAD_UNKNOWN
    TEXT = fields.PAYLOAD_TEXT
    KEY_VALUES = fields.PAYLOAD_KVP


@dataclass(frozen=True)
class Text:
    text: Optional[str] = None

    type = MessageType.TEXT


@dataclass(frozen=True)
class KeyValues:
    pairs: Optional[Dict[str, str]] = None

    type = MessageType.KEY_VALUES


@dataclass(frozen=True)
class Unknown:

    type = MessageType.UNKNOWN


Payload = Union[Text, KeyValues, Unknown]


def empty(message_type: MessageType) -> Payload:
    """ Return the empty payload variant for the requested *message_type*.
    """

    if message_type is MessageType.TEXT:
        return Text()
    if message_type is MessageType.KEY_VALUES:
        return KeyValues()
    if message_type is MessageType.UNKNOWN:
        return Unknown()

    raise TypeError('not a MessageType: ' + repr(message_type))


def from_header(value: Optional[str]) -> MessageType:
    """ Interpret the ``payload_type`` header *value*. Anything other than the
        text or key/value designations, including a missing value, resolves
        to :attr:`MessageType.UNKNOWN`.
    """

    if value == fields.PAYLOAD_TEXT:
        return MessageType.TEXT
    if value == fields.PAYLOAD_KVP:
        return MessageType.KEY_VALUES

    return MessageType.UNKNOWN


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
