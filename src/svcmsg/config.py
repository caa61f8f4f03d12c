""" Configuration handling. The only configuration consumed here is the
    service table, an INI file of the form::

        [services]
        echo_service = echo

        [echo]
        host = localhost
        port = 9000

    The ``services`` section maps logical service names to the names of
    further sections, each of which provides a ``host`` and a ``port``.
"""

import configparser
import logging
import os


_logger = logging.getLogger(__name__)

SERVICES = 'services'
HOST = 'host'
PORT = 'port'

filename = 'services.ini'


class ConfigurationError(ValueError):
    """ The service configuration could not be read, or describes no usable
        services.
    """


def directory(default=None):
    """ Return the directory location where we should be loading
        configuration files. This defaults to ``$HOME/.svcmsg``, but can be
        overridden by calling this method with a valid path, or by setting
        the ``SVCMSG_HOME`` environment variable. Note that changes to the
        environment variable will be ignored unless it is set prior to the
        first invocation of this method.
    """

    if default is not None:
        default = str(default)
        default = os.path.expandvars(default)

        if os.path.isabs(default):
            pass
        else:
            raise ValueError('the default directory must be an absolute path')

        os.environ['SVCMSG_HOME'] = default
        directory.found = default


    found = directory.found

    if found is not None:
        return found

    try:
        found = os.environ['SVCMSG_HOME']
    except KeyError:
        pass
    else:
        directory.found = found
        return found

    try:
        home = os.environ['HOME']
    except KeyError:
        raise RuntimeError('SVCMSG_HOME and HOME environment variables not set, cannot determine svcmsg configuration directory')

    found = os.path.join(home, '.svcmsg')

    directory.found = found
    return found

directory.found = None



def default_path():
    """ Return the location of the service table in the configuration
        :func:`directory`.
    """

    return os.path.join(directory(), filename)



def read(path):
    """ Parse the INI file at *path*, returning a
        :class:`configparser.ConfigParser`. Keys are case-preserving and no
        interpolation is performed. A :class:`ConfigurationError` is raised
        if the file cannot be read or parsed.
    """

    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str

    try:
        with open(path, 'r') as handle:
            parser.read_file(handle)
    except OSError as e:
        raise ConfigurationError('unable to read configuration file ' + repr(str(path)) + ': ' + str(e)) from e
    except configparser.Error as e:
        raise ConfigurationError('unable to parse configuration file ' + repr(str(path)) + ': ' + str(e)) from e

    return parser



def services(parser):
    """ Yield a (name, host, port) tuple for every well-formed entry in the
        ``services`` section of *parser*. Entries whose section is missing,
        lacks a host or port, or whose port is not a valid TCP port number
        are skipped with a warning.
    """

    if not parser.has_section(SERVICES):
        raise ConfigurationError('no [' + SERVICES + '] section in configuration')

    for name,section in parser.items(SERVICES):

        if not parser.has_section(section):
            _logger.warning("service %r: no section [%s], skipping", name, section)
            continue

        host = parser.get(section, HOST, fallback='').strip()
        port = parser.get(section, PORT, fallback='').strip()

        if host == '' or port == '':
            _logger.warning("service %r: section [%s] needs both host and port, skipping", name, section)
            continue

        try:
            port = int(port)
        except ValueError:
            _logger.warning("service %r: port %r is not an integer, skipping", name, port)
            continue

        if port < 0 or port > 0xFFFF:
            _logger.warning("service %r: port %d out of range, skipping", name, port)
            continue

        yield (name, host, port)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
