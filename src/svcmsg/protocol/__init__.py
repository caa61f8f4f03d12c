""" The svcmsg protocol layer: payload variants, the wire codec, and the
    :class:`~svcmsg.protocol.message.Message` built on top of them. Only the
    message itself knows about transports; the codec reads from anything
    that provides ``read(n)``.
"""

from . import fields
from . import payload
from . import wire
from . import message

from .payload import MessageType, Text, KeyValues, Unknown
from .message import Message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
