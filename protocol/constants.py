"""Protocol constants and messenger defaults.

Wire-level constants must match on every peer sharing a broadcast
domain; the defaults can be overridden through configuration.
"""

# Separator between address segments, e.g. "/oscmessenger/move"
ADDRESS_DELIMITER = '/'

# Default destination for outbound commands (limited broadcast)
DEFAULT_BROADCAST_ADDRESS = '255.255.255.255'

# Default UDP port for both sending and receiving
DEFAULT_PORT = 9000

# Default local address the receive socket binds to
DEFAULT_BIND_ADDRESS = '0.0.0.0'

# Namespace prefix for command addresses
DEFAULT_ADDRESS_ROOT = '/oscmessenger'

# Identical messages arriving within this many seconds are dropped
DEFAULT_DUPLICATE_WINDOW = 0.3

# Number of recent messages kept for duplicate detection
DEFAULT_HISTORY_CAPACITY = 30

# Copies of each command sent back-to-back
DEFAULT_REDUNDANT_SEND_COUNT = 5

# Listener tick period in seconds (one frame at 60 Hz)
DEFAULT_TICK_INTERVAL = 1 / 60

# Largest datagram the receive socket reads
MAX_DATAGRAM_SIZE = 65535

# Receive socket timeout, bounds how long stop() waits for the receive thread
RECEIVE_TIMEOUT = 0.2

# Numeric equality policies for duplicate detection
NUMERIC_EQUALITY_STRICT = 'strict'
NUMERIC_EQUALITY_VALUE = 'value'
NUMERIC_EQUALITY_POLICIES = (NUMERIC_EQUALITY_STRICT, NUMERIC_EQUALITY_VALUE)

# Integers outside this range are sent with the OSC int64 tag 'h'
INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1
