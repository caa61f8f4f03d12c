""" Send a key/value message to the echo service and print the response,
    then ask the stooge information service for its list.
"""

import logging
import os
import sys

import svcmsg


here = os.path.dirname(os.path.abspath(__file__))


def print_key_values(pairs):
    for key,value in (pairs or dict()).items():
        print("key='" + key + "', value='" + value + "'")


def main():

    logging.basicConfig(level=logging.INFO)
    svcmsg.initialize(os.path.join(here, 'services.ini'))

    message = svcmsg.Message.key_values('echo')
    message.key_values_payload = {'firstName': 'Mickey', 'lastName': 'Mouse', 'city': 'Orlando', 'state': 'FL'}

    response = svcmsg.Message()
    if message.send('echo_service', response):
        print_key_values(response.key_values_payload)
    else:
        print('error: unable to send message to service echo_service')
        return 1

    message = svcmsg.Message('listStooges', svcmsg.MessageType.KEY_VALUES)
    response = svcmsg.Message()
    if message.send('stooge_info_service', response):
        print_key_values(response.key_values_payload)
    else:
        print('error: unable to send message to service stooge_info_service')
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
