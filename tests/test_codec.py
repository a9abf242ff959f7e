import pytest
from pythonosc.osc_bundle_builder import IMMEDIATELY, OscBundleBuilder
from pythonosc.osc_message_builder import OscMessageBuilder

from osc import codec
from state.schema import Parameter, ParameterType


def built(address: str, *args):
    builder = OscMessageBuilder(address=address)
    for arg in args:
        builder.add_arg(arg)
    return builder.build()


def message(address: str, *args) -> bytes:
    return built(address, *args).dgram


def bundle(*contents) -> bytes:
    builder = OscBundleBuilder(IMMEDIATELY)
    for content in contents:
        builder.add_content(content)
    return builder.build().dgram


@pytest.mark.parametrize("kind, value, expected", [
    (ParameterType.FLOAT,  0.5,   0.5),
    (ParameterType.FLOAT, -2.25, -2.25),
    (ParameterType.INT,    3.9,   3.0),
    (ParameterType.INT,   -3.9,  -3.0),
    (ParameterType.BOOL,   1.0,   1.0),
    (ParameterType.BOOL,   0.6,   1.0),
    (ParameterType.BOOL,   0.5,   0.0),
])
def test_round_trip(kind, value, expected):
    decoded = codec.decode(codec.encode("Mood", kind, value))
    assert decoded == [Parameter("Mood", kind, expected)]


def test_float_round_trip_is_float32_precision():
    [param] = codec.decode(codec.encode("Wave", ParameterType.FLOAT, 0.1))
    assert param.parameter_type == ParameterType.FLOAT
    assert param.value == pytest.approx(0.1, abs=1e-7)


def test_encode_addresses_avatar_parameters():
    msg = codec.build_message("Ears", ParameterType.BOOL, 1.0)
    assert msg.address == "/avatar/parameters/Ears"
    assert msg.params == [True]


def test_decode_message_types():
    assert codec.decode(message("/avatar/parameters/A", 0.25)) == [Parameter("A", ParameterType.FLOAT, 0.25)]
    assert codec.decode(message("/avatar/parameters/B", 7)) == [Parameter("B", ParameterType.INT, 7.0)]
    assert codec.decode(message("/avatar/parameters/C", False)) == [Parameter("C", ParameterType.BOOL, 0.0)]


def test_only_first_argument_is_used():
    assert codec.decode(message("/avatar/parameters/A", 3, 0.5)) == [Parameter("A", ParameterType.INT, 3.0)]


@pytest.mark.parametrize("dgram", [
    message("/avatar/change", "avtr_123"),
    message("/input/Jump", 1),
    message("/avatar/parameters/Name", "hello"),
    message("/avatar/parameters/Empty"),
    b"not osc at all",
    b"/avatar/parameters/Truncated\x00",
    b"",
])
def test_ignored_packets(dgram):
    assert codec.decode(dgram) == []


def test_bundle_yields_every_parameter_in_order():
    dgram = bundle(
        built("/avatar/parameters/A", 0.1),
        built("/avatar/change", "avtr_123"),
        built("/avatar/parameters/B", True),
        built("/avatar/parameters/A", 0.75),
    )
    decoded = codec.decode(dgram)
    assert [p.name for p in decoded] == ["A", "B", "A"]
    assert decoded[-1] == Parameter("A", ParameterType.FLOAT, 0.75)


def test_nested_bundles():
    inner = OscBundleBuilder(IMMEDIATELY)
    inner.add_content(built("/avatar/parameters/Inner", 2))
    dgram = bundle(built("/avatar/parameters/Outer", 1.0), inner.build())

    decoded = codec.decode(dgram)
    assert decoded == [
        Parameter("Outer", ParameterType.FLOAT, 1.0),
        Parameter("Inner", ParameterType.INT, 2.0),
    ]


@pytest.mark.parametrize("value, expected", [
    (3e9,          2147483647.0),
    (-3e9,        -2147483648.0),
    (float("inf"), 2147483647.0),
    (float("nan"), 0.0),
])
def test_int_encoding_saturates(value, expected):
    decoded = codec.decode(codec.encode("Count", ParameterType.INT, value))
    assert decoded == [Parameter("Count", ParameterType.INT, expected)]


def test_non_utf8_address_is_ignored():
    dgram = b"/avatar/parameters/\xff\xfe\x00\x00,f\x00\x00?\x80\x00\x00"
    assert codec.decode(dgram) == []
