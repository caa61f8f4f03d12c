""" The service registry maps logical service names to the host and port where
    that service can be reached. A :class:`Registry` is an ordinary object;
    as many as are useful can exist at once, and any of them can be handed to
    :meth:`svcmsg.Message.send`. For convenience there is also a process-wide
    registry, established once at startup via :func:`initialize`, which is
    used whenever a caller does not supply one explicitly.

    Registries are populated during initialization and treated as read-only
    afterwards. No locking is done; concurrent calls to :func:`initialize`
    or :meth:`Registry.register_service` while other threads are resolving
    services must be avoided by the caller.
"""

import logging
from typing import NamedTuple

from . import config


_logger = logging.getLogger(__name__)


class ServiceInfo(NamedTuple):
    service_name: str
    host: str
    port: int


class Registry:
    """ A mapping from service name to :class:`ServiceInfo`. Registering a
        name that is already present replaces the prior entry.
    """

    def __init__(self):
        self._services = dict()


    def __contains__(self, service_name):
        return service_name in self._services


    def __iter__(self):
        return iter(tuple(self._services.keys()))


    def __len__(self):
        return len(self._services)


    def __repr__(self):
        return 'Registry(' + repr(list(self._services.values())) + ')'


    @classmethod
    def from_config(cls, path):
        """ Build a new :class:`Registry` from the INI file at *path*. Service
            sections that are malformed are skipped; as long as one service
            remains, that is good enough. A
            :class:`svcmsg.config.ConfigurationError` is raised if the file
            cannot be read, or if no services could be registered.
        """

        parser = config.read(path)
        registry = cls()

        for name,host,port in config.services(parser):
            registry.register_service(name, ServiceInfo(name, host, port))

        if len(registry) == 0:
            _logger.debug("no services registered from %s", path)
            raise config.ConfigurationError('no services registered')

        return registry


    def register_service(self, service_name, info):
        self._services[service_name] = info


    def is_service_registered(self, service_name):
        return service_name in self._services


    def info_for_service(self, service_name):
        """ Return the :class:`ServiceInfo` for *service_name*, or None if no
            such service is registered.
        """

        return self._services.get(service_name)


# end of class Registry



_registry = None


def initialize(path=None):
    """ Read the service table at *path*, or the :func:`svcmsg.config.default_path`
        if no path is specified, and install the resulting :class:`Registry`
        as the process-wide registry. The new registry is also returned.
        Any :class:`svcmsg.config.ConfigurationError` is propagated, and the
        previously installed registry, if any, is left in place.
    """

    if path is None:
        path = config.default_path()

    _logger.debug("reading service configuration from %s", path)
    registry = Registry.from_config(path)
    set_registry(registry)

    _logger.info("messaging initialized with %d service(s)", len(registry))
    return registry



def set_registry(registry):
    """ Establish *registry* as the process-wide registry.
    """

    global _registry
    _registry = registry



def get_registry():
    """ Return the process-wide registry, or None if it has not been
        initialized.
    """

    return _registry



def is_initialized():
    return _registry is not None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
