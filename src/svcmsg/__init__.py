""" Python implementation of svcmsg, a minimal request/response messaging
    protocol over stream sockets. A client builds a :class:`Message`, and
    sends it to a named service; the service name is resolved to a host and
    port through a :class:`Registry`, typically established once at startup
    via :func:`initialize`.
"""

# Submodules used by multiple other components.

from . import config
from . import registry
from . import transport
from . import protocol

# Primary public-facing interfaces.

from .config import ConfigurationError
from .protocol import Message, MessageType, Text, KeyValues, Unknown
from .registry import Registry, ServiceInfo
from .registry import initialize, is_initialized, get_registry, set_registry
from .server import Server

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
