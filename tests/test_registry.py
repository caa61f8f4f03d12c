import pytest

import svcmsg
from svcmsg import config
from svcmsg.registry import Registry, ServiceInfo


def test_registry_basics():

    registry = Registry()
    assert len(registry) == 0
    assert registry.is_service_registered('echo_service') == False
    assert registry.info_for_service('echo_service') is None

    info = ServiceInfo('echo_service', 'localhost', 9000)
    registry.register_service('echo_service', info)

    assert registry.is_service_registered('echo_service') == True
    assert 'echo_service' in registry
    assert registry.info_for_service('echo_service') is info
    assert list(registry) == ['echo_service']

    # Last write wins.

    replacement = ServiceInfo('echo_service', 'otherhost', 9001)
    registry.register_service('echo_service', replacement)
    assert registry.info_for_service('echo_service') == replacement
    assert len(registry) == 1

    repr(registry)


def test_service_info_immutable():

    info = ServiceInfo('echo_service', 'localhost', 9000)
    assert info.service_name == 'echo_service'
    assert info.host == 'localhost'
    assert info.port == 9000

    with pytest.raises(AttributeError):
        info.port = 9001


def test_independent_registries():

    first = Registry()
    second = Registry()
    first.register_service('a', ServiceInfo('a', 'localhost', 1))

    assert 'a' in first
    assert 'a' not in second


def test_from_config_skips_malformed(services_ini):

    registry = Registry.from_config(services_ini)

    assert len(registry) == 1
    assert registry.is_service_registered('echo_service')
    assert not registry.is_service_registered('broken_service')
    assert registry.info_for_service('echo_service') == ServiceInfo('echo_service', 'localhost', 9999)


def test_from_config_bad_ports(tmp_path):

    contents = '''
[services]
words = words
huge = huge
missing = nowhere
ok = ok

[words]
host = localhost
port = eighty

[huge]
host = localhost
port = 65536

[ok]
host = 127.0.0.1
port = 65535
'''

    path = tmp_path / 'services.ini'
    path.write_text(contents)

    registry = Registry.from_config(path)
    assert list(registry) == ['ok']
    assert registry.info_for_service('ok').port == 65535


def test_from_config_no_services(tmp_path):

    path = tmp_path / 'services.ini'

    path.write_text('[services]\nbroken = broken\n\n[broken]\nhost = localhost\n')
    with pytest.raises(config.ConfigurationError):
        Registry.from_config(path)

    path.write_text('[something_else]\nkey = value\n')
    with pytest.raises(config.ConfigurationError):
        Registry.from_config(path)

    path.write_text('this is not an ini file')
    with pytest.raises(config.ConfigurationError):
        Registry.from_config(path)

    with pytest.raises(config.ConfigurationError):
        Registry.from_config(tmp_path / 'does_not_exist.ini')


def test_initialize(services_ini):

    assert svcmsg.is_initialized() == False
    assert svcmsg.get_registry() is None

    registry = svcmsg.initialize(services_ini)

    assert svcmsg.is_initialized() == True
    assert svcmsg.get_registry() is registry
    assert registry.is_service_registered('echo_service')


def test_initialize_failure(tmp_path, services_ini):

    with pytest.raises(svcmsg.ConfigurationError):
        svcmsg.initialize(tmp_path / 'does_not_exist.ini')

    assert svcmsg.is_initialized() == False

    # A failed initialization leaves an existing registry alone.

    registry = svcmsg.initialize(services_ini)

    with pytest.raises(svcmsg.ConfigurationError):
        svcmsg.initialize(tmp_path / 'does_not_exist.ini')

    assert svcmsg.get_registry() is registry


def test_initialize_default_path(tmp_path, services_ini, monkeypatch):

    monkeypatch.setattr(config.directory, 'found', str(tmp_path))

    assert config.default_path() == str(services_ini)

    registry = svcmsg.initialize()
    assert registry.is_service_registered('echo_service')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
