# OSC address mapping and endpoint defaults
# Modify these to match the address schema and ports of the avatar application.
#
# Inbound and outbound parameters share one address space:
#     /avatar/parameters/<name>   one argument: float32, int32 or bool
AVATAR_PARAMETER_PREFIX = "/avatar/parameters/"

# Default endpoints (the avatar app listens on 9000 and sends on 9001)
DEFAULT_TARGET_HOST = "127.0.0.1"
DEFAULT_TARGET_PORT = 9000
DEFAULT_LISTEN_HOST = "127.0.0.1"
DEFAULT_LISTEN_PORT = 9001

# Listener poll loop timing (seconds)
POLL_INTERVAL  = 0.01   # nothing to read yet
ERROR_BACKOFF  = 0.1    # unexpected socket error
JOIN_TIMEOUT   = 1.0    # upper bound on waiting for the worker in stop()

RECV_BUFFER_SIZE = 4096


def parameter_address(name: str) -> str:
    return AVATAR_PARAMETER_PREFIX + name


def parameter_name(address: str) -> str | None:
    """Return the parameter name for an avatar address, or None for any other address."""
    if not address.startswith(AVATAR_PARAMETER_PREFIX):
        return None
    return address[len(AVATAR_PARAMETER_PREFIX):]
