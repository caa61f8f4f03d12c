""" Serve the echo_service and stooge_info_service entries from services.ini.
    Run this first, then run echo_client.py in another terminal.
"""

import logging
import os
import time

import svcmsg
from svcmsg import server


here = os.path.dirname(os.path.abspath(__file__))


def list_stooges(request):
    response = svcmsg.Message.key_values(request.request_name)
    response.key_values_payload = {'Moe': 'Howard', 'Larry': 'Fine', 'Curly': 'Howard'}
    return response


def main():

    logging.basicConfig(level=logging.INFO)
    registry = svcmsg.initialize(os.path.join(here, 'services.ini'))

    echo = registry.info_for_service('echo_service')
    stooges = registry.info_for_service('stooge_info_service')

    servers = list()
    servers.append(server.Server('echo_service', '', echo.port, handler=server.echo))
    servers.append(server.Server('stooge_info_service', '', stooges.port, handler=list_stooges))

    for service in servers:
        service.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass

    for service in servers:
        service.shutdown()


if __name__ == '__main__':
    main()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
