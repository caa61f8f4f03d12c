"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Framing.

HEADER_LENGTH_WIDTH = 10
MAX_SEGMENT_LENGTH = 32767
ENCODING = 'utf-8'

# Flattening of key/value pairs. There is no escaping; keys and values must
# not contain either delimiter.

DELIMITER_KEY_VALUE = '='
DELIMITER_PAIR = ';'

# Header keys.

ONE_WAY = '1way'
PAYLOAD_LENGTH = 'payload_length'
PAYLOAD_TYPE = 'payload_type'
REQUEST = 'request'

# Header values.

PAYLOAD_KVP = 'kvp'
PAYLOAD_TEXT = 'text'
PAYLOAD_UNKNOWN = 'unknown'
TRUE = 'true'
