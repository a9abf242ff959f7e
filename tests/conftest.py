import socket

import pytest

from state.schema import OscConfig


@pytest.fixture
def receiver():
    """A loopback UDP socket standing in for the avatar app's OSC input."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


@pytest.fixture
def target_config(receiver):
    """OscConfig whose target is the `receiver` socket; listens on an OS-picked port."""
    port = receiver.getsockname()[1]
    return OscConfig(target_host="127.0.0.1", target_port=port, listen_host="127.0.0.1", listen_port=0)
