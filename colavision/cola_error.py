"""CoLa error codes and their human readable descriptions."""

from __future__ import annotations

from enum import IntEnum


class CoLaError(IntEnum):
    """Error codes reported by a CoLa device or by the local network layer."""

    NETWORK_ERROR = -1
    OK = 0
    METHOD_IN_ACCESS_DENIED = 1
    METHOD_IN_UNKNOWN_INDEX = 2
    VARIABLE_UNKNOWN_INDEX = 3
    LOCAL_CONDITION_FAILED = 4
    INVALID_DATA = 5
    UNKNOWN_ERROR = 6
    BUFFER_OVERFLOW = 7
    BUFFER_UNDERFLOW = 8
    ERROR_UNKNOWN_TYPE = 9
    VARIABLE_WRITE_ACCESS_DENIED = 10
    UNKNOWN_CMD_FOR_NAMESERVER = 11
    UNKNOWN_COLA_COMMAND = 12
    METHOD_IN_SERVER_BUSY = 13
    FLEX_OUT_OF_BOUNDS = 14
    EVENT_REG_UNKNOWN_INDEX = 15
    COLA_VALUE_UNDERFLOW = 16
    COLA_A_INVALID_CHARACTER = 17
    OSAI_NO_MESSAGE = 18
    OSAI_NO_ANSWER_MESSAGE = 19
    INTERNAL = 20
    HUB_ADDRESS_CORRUPTED = 21
    HUB_ADDRESS_DECODING = 22
    HUB_ADDRESS_ADDRESS_EXCEEDED = 23
    HUB_ADDRESS_BLANK_EXPECTED = 24
    ASYNC_METHODS_ARE_SUPPRESSED = 25
    COMPLEX_ARRAYS_NOT_SUPPORTED = 32
    SESSION_NO_RESOURCES = 33
    SESSION_UNKNOWN_ID = 34
    CANNOT_CONNECT = 35
    INVALID_PORT = 36
    SCAN_ALREADY_ACTIVE = 37
    OUT_OF_TIMERS = 38
    WRITE_MODE_NOT_ENABLED = 39
    SET_PORT_FAILED = 40
    IO_LINK_FUNC_TEMP_NOT_AVAILABLE = 256
    UNKNOWN = 32767


_MESSAGES: dict[CoLaError, str] = {
    CoLaError.NETWORK_ERROR: "network error.",
    CoLaError.METHOD_IN_ACCESS_DENIED: "access to method not allowed.",
    CoLaError.METHOD_IN_UNKNOWN_INDEX: "unknown method.",
    CoLaError.VARIABLE_UNKNOWN_INDEX: "unknown variable.",
    CoLaError.LOCAL_CONDITION_FAILED: "preconditions violated.",
    CoLaError.INVALID_DATA: "invalid data given for variable.",
    CoLaError.UNKNOWN_ERROR: "unknown error reason.",
    CoLaError.BUFFER_OVERFLOW: "data too long.",
    CoLaError.BUFFER_UNDERFLOW: "premature end of data.",
    CoLaError.ERROR_UNKNOWN_TYPE: "unknown type.",
    CoLaError.VARIABLE_WRITE_ACCESS_DENIED: "write-access denied.",
    CoLaError.UNKNOWN_CMD_FOR_NAMESERVER: "unknown command.",
    CoLaError.UNKNOWN_COLA_COMMAND: (
        "The CoLa protocol specification does not define the given command, command is unknown."
    ),
    CoLaError.METHOD_IN_SERVER_BUSY: "previous method call is still in progress.",
    CoLaError.FLEX_OUT_OF_BOUNDS: "array too long.",
    CoLaError.EVENT_REG_UNKNOWN_INDEX: "unknown event.",
    CoLaError.COLA_VALUE_UNDERFLOW: "value too large.",
    CoLaError.COLA_A_INVALID_CHARACTER: "invalid CoLa-A character.",
    CoLaError.OSAI_NO_MESSAGE: "OS out of message ressources.",
    CoLaError.OSAI_NO_ANSWER_MESSAGE: "OS out of answer message ressources on variable write.",
    CoLaError.INTERNAL: "Internal firmware error/method or variable declared but not defined.",
    CoLaError.HUB_ADDRESS_CORRUPTED: "Sopas Hubaddress length corrupt.",
    CoLaError.HUB_ADDRESS_DECODING: "Sopas Hubaddress syntax error.",
    CoLaError.HUB_ADDRESS_ADDRESS_EXCEEDED: "Too many hubs in the address.",
    CoLaError.HUB_ADDRESS_BLANK_EXPECTED: "malformed HUB address.",
    CoLaError.ASYNC_METHODS_ARE_SUPPRESSED: "internal error, no asynchronous methods supported.",
    CoLaError.COMPLEX_ARRAYS_NOT_SUPPORTED: "internal error, no complex array supported.",
    CoLaError.SESSION_NO_RESOURCES: "ressource error, out of sessions.",
    CoLaError.SESSION_UNKNOWN_ID: "invalid session id.",
    CoLaError.CANNOT_CONNECT: "failed to connect (probably to a Hub device).",
    CoLaError.INVALID_PORT: "CoLa2 routing error.",
    CoLaError.SCAN_ALREADY_ACTIVE: "UDP Scan is already running",
    CoLaError.OUT_OF_TIMERS: "ressource error, out of timers.",
    CoLaError.WRITE_MODE_NOT_ENABLED: "Writing not possible, device is in RUN mode",
    CoLaError.SET_PORT_FAILED: "internal scan error, cannot set port.",
    CoLaError.IO_LINK_FUNC_TEMP_NOT_AVAILABLE: "IoLink error: function temporarily not available",
    CoLaError.UNKNOWN: "Unknown Sopas Scan error",
}

_DEFAULT_MESSAGE = "Unknown error"


def decode_error(error: int) -> str:
    """Return a description of a CoLa error code.

    Codes without a specific description, including ``OK``, give
    ``"Unknown error"``.
    """
    try:
        code = CoLaError(int(error))
    except ValueError:
        return _DEFAULT_MESSAGE
    return _MESSAGES.get(code, _DEFAULT_MESSAGE)