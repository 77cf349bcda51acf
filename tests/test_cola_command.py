import pytest

from colavision.cola_command import CoLaCommand, CoLaCommandType
from colavision.cola_error import CoLaError


def test_named_response_is_decoded():
    raw = b"sRA DeviceIdent \x00\x01"
    cmd = CoLaCommand(raw)
    assert cmd.type is CoLaCommandType.READ_VARIABLE_RESPONSE
    assert cmd.name == "DeviceIdent"
    assert cmd.error == CoLaError.OK
    assert cmd.parameter_offset == len(b"sRA DeviceIdent ")
    assert cmd.buffer == raw


@pytest.mark.parametrize(
    "prefix, expected",
    [
        (b"sRN", CoLaCommandType.READ_VARIABLE),
        (b"sRA", CoLaCommandType.READ_VARIABLE_RESPONSE),
        (b"sWN", CoLaCommandType.WRITE_VARIABLE),
        (b"sWA", CoLaCommandType.WRITE_VARIABLE_RESPONSE),
        (b"sMN", CoLaCommandType.METHOD_INVOCATION),
        (b"sAN", CoLaCommandType.METHOD_RETURN_VALUE),
    ],
)
def test_prefixes_map_to_types(prefix, expected):
    cmd = CoLaCommand(prefix + b" Run ")
    assert cmd.type is expected
    assert cmd.name == "Run"
    assert cmd.parameter_offset == len(prefix) + len(b" Run ")


def test_empty_parameters_offset_at_end():
    raw = b"sWA BlobTcpPortAPI "
    cmd = CoLaCommand(raw)
    assert cmd.parameter_offset == len(raw)
    assert cmd.error == CoLaError.OK


def test_error_telegram():
    cmd = CoLaCommand(b"sFA\x00\x05")
    assert cmd.type is CoLaCommandType.COLA_ERROR
    assert cmd.error is CoLaError.INVALID_DATA
    assert cmd.parameter_offset == 3
    assert cmd.name == ""


def test_error_telegram_with_unlisted_code_keeps_value():
    cmd = CoLaCommand(b"sFA\x12\x34")
    assert cmd.type is CoLaCommandType.COLA_ERROR
    assert cmd.error == 0x1234


def test_truncated_error_telegram():
    cmd = CoLaCommand(b"sFA\x00")
    assert cmd.type is CoLaCommandType.UNKNOWN
    assert cmd.error is CoLaError.UNKNOWN
    assert cmd.parameter_offset == 3


def test_missing_space_after_type():
    cmd = CoLaCommand(b"sRAx")
    assert cmd.type is CoLaCommandType.UNKNOWN
    assert cmd.error is CoLaError.UNKNOWN
    assert cmd.parameter_offset == 3


def test_type_only():
    cmd = CoLaCommand(b"sRA")
    assert cmd.type is CoLaCommandType.UNKNOWN
    assert cmd.parameter_offset == 3


def test_missing_name_terminator():
    raw = b"sRA name"
    cmd = CoLaCommand(raw)
    assert cmd.type is CoLaCommandType.UNKNOWN
    assert cmd.error is CoLaError.UNKNOWN
    assert cmd.parameter_offset == len(raw)
    assert cmd.name == ""


@pytest.mark.parametrize("raw", [b"", b"sX", b"xyz abc ", b"sZZ name "])
def test_unknown_prefix(raw):
    cmd = CoLaCommand(raw)
    assert cmd.type is CoLaCommandType.UNKNOWN
    assert cmd.error is CoLaError.UNKNOWN
    assert cmd.parameter_offset == 0


def test_bytearray_input_is_copied():
    raw = bytearray(b"sAN SetAccessMode \x01")
    cmd = CoLaCommand(raw)
    raw[0] = 0
    assert cmd.buffer == b"sAN SetAccessMode \x01"
    assert cmd.name == "SetAccessMode"


def test_network_error_command():
    cmd = CoLaCommand.network_error()
    assert cmd.type is CoLaCommandType.NETWORK_ERROR
    assert cmd.error is CoLaError.NETWORK_ERROR
    assert cmd.name == ""
    assert cmd.buffer == b""
    assert cmd.parameter_offset == 0