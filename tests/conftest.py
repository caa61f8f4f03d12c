import io
import pytest

import svcmsg
from svcmsg.transport import ByteTransport, TransportClosed


class MemoryTransport(ByteTransport):
    """ In-memory stand-in for a connection: reads are served from the
        *inbound* bytes, writes are accumulated in :attr:`written`.
    """

    def __init__(self, inbound=b''):
        self.inbound = io.BytesIO(inbound)
        self.written = bytearray()
        self.closed = False
        self.reads = 0

    @property
    def is_open(self):
        return not self.closed

    def read(self, length):
        self.reads += 1
        data = self.inbound.read(length)
        if len(data) != length:
            raise TransportClosed('only %d of %d bytes available' % (len(data), length))
        return data

    def write(self, data):
        if self.closed:
            raise TransportClosed('write to a closed transport')
        self.written.extend(data)

    def close(self):
        self.closed = True


class Connector:
    """ A stand-in for :func:`svcmsg.transport.connect` that hands out a
        pre-built transport and remembers where it was asked to connect.
    """

    def __init__(self, transport):
        self.transport = transport
        self.calls = list()

    def __call__(self, host, port):
        self.calls.append((host, port))
        return self.transport


@pytest.fixture
def memory():
    return MemoryTransport


@pytest.fixture
def connector():
    return Connector


@pytest.fixture(autouse=True)
def reset_registry():

    svcmsg.set_registry(None)
    yield
    svcmsg.set_registry(None)


@pytest.fixture
def services_ini(tmp_path):
    """ Write a service table with one valid service, and one whose section
        is missing its port.
    """

    contents = '''
[services]
echo_service = echo
broken_service = broken

[echo]
host = localhost
port = 9999

[broken]
host = localhost
'''

    path = tmp_path / 'services.ini'
    path.write_text(contents)
    return path


@pytest.fixture
def registry():

    registry = svcmsg.Registry()
    registry.register_service('echo_service', svcmsg.ServiceInfo('echo_service', 'localhost', 9999))
    return registry


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
