"""
Wire codec between OSC datagrams and Parameter values.

Decoding walks bundles recursively and keeps only `/avatar/parameters/*`
messages whose first argument is a float, int or bool. Anything else
(other addresses, no arguments, strings, blobs, garbage bytes) is skipped
rather than reported as an error: the peer sends plenty of traffic we
don't care about.
"""

import math

from pythonosc import osc_bundle, osc_message
from pythonosc.osc_message_builder import OscMessageBuilder

from osc.mapping import parameter_address, parameter_name
from state.schema import Parameter, ParameterType

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


def decode(dgram: bytes) -> list[Parameter]:
    """
    Decode one UDP datagram into the parameters it carries, in wire order.

    A bundle may carry several updates; applying the list in order means
    the last message wins for a repeated name.
    """
    try:
        if osc_bundle.OscBundle.dgram_is_bundle(dgram):
            packet = osc_bundle.OscBundle(dgram)
        elif osc_message.OscMessage.dgram_is_message(dgram):
            packet = osc_message.OscMessage(dgram)
        else:
            return []
    except (osc_bundle.ParseError, osc_message.ParseError, UnicodeDecodeError):
        return []

    parameters: list[Parameter] = []
    _collect(packet, parameters)
    return parameters


def _collect(packet, out: list[Parameter]) -> None:
    if isinstance(packet, osc_bundle.OscBundle):
        for content in packet:
            _collect(content, out)
        return

    param = _decode_message(packet)
    if param is not None:
        out.append(param)


def _decode_message(message: osc_message.OscMessage) -> Parameter | None:
    name = parameter_name(message.address)
    if name is None:
        return None

    params = message.params
    if not params:
        return None
    arg = params[0]

    # bool first: it's an int subclass
    if isinstance(arg, bool):
        return Parameter(name, ParameterType.BOOL, 1.0 if arg else 0.0)
    if isinstance(arg, int):
        return Parameter(name, ParameterType.INT, float(arg))
    if isinstance(arg, float):
        return Parameter(name, ParameterType.FLOAT, arg)
    return None


def build_message(name: str, kind: ParameterType, value: float) -> osc_message.OscMessage:
    """Build a single-argument avatar parameter message typed according to `kind`."""
    builder = OscMessageBuilder(address=parameter_address(name))

    if kind == ParameterType.INT:
        builder.add_arg(_to_int32(value), OscMessageBuilder.ARG_TYPE_INT)
    elif kind == ParameterType.BOOL:
        on = value > 0.5
        builder.add_arg(on, OscMessageBuilder.ARG_TYPE_TRUE if on else OscMessageBuilder.ARG_TYPE_FALSE)
    else:
        builder.add_arg(float(value), OscMessageBuilder.ARG_TYPE_FLOAT)

    return builder.build()


def _to_int32(value: float) -> int:
    """Truncate toward zero, saturating at the int32 range. NaN becomes 0."""
    value = float(value)
    if math.isnan(value):
        return 0
    return int(max(INT32_MIN, min(INT32_MAX, value)))


def encode(name: str, kind: ParameterType, value: float) -> bytes:
    return build_message(name, kind, value).dgram
