from pythonosc import udp_client

from osc.codec import build_message
from state.schema import OscConfig, ParameterType


def send_parameter(name: str, value: float, kind: ParameterType, config: OscConfig) -> None:
    """
    Send one avatar parameter update to the configured target.

    A fresh client (and socket) is created for every call; nothing is
    pooled. Address resolution and send errors (OSError) are raised
    straight to the caller. UDP gives no delivery guarantee.

    Args:
        name:   parameter name, without the /avatar/parameters/ prefix
        value:  value to send; Int truncates, Bool is value > 0.5
        kind:   wire type of the single argument
        config: endpoint config, only target_host / target_port are used
    """
    message = build_message(name, kind, value)
    client = udp_client.UDPClient(config.target_host, config.target_port)
    client.send(message)
