"""Decoding of CoLa command telegrams."""

from __future__ import annotations

import enum
import struct

from colavision.cola_error import CoLaError


class CoLaCommandType(enum.Enum):
    """Kinds of CoLa telegrams."""

    UNKNOWN = "UNKNOWN"
    READ_VARIABLE = "sRN"
    READ_VARIABLE_RESPONSE = "sRA"
    WRITE_VARIABLE = "sWN"
    WRITE_VARIABLE_RESPONSE = "sWA"
    METHOD_INVOCATION = "sMN"
    METHOD_RETURN_VALUE = "sAN"
    COLA_ERROR = "sFA"
    NETWORK_ERROR = "NETWORK_ERROR"


_TYPE_BY_PREFIX = {
    t.value: t
    for t in CoLaCommandType
    if t not in (CoLaCommandType.UNKNOWN, CoLaCommandType.NETWORK_ERROR)
}

_NAMED_TYPES = frozenset(_TYPE_BY_PREFIX.values()) - {CoLaCommandType.COLA_ERROR}


def _as_error(code: int) -> CoLaError | int:
    try:
        return CoLaError(code)
    except ValueError:
        return code


class CoLaCommand:
    """A CoLa telegram decoded from its raw bytes.

    Attributes:
        buffer: the raw telegram bytes.
        type: the telegram kind.
        name: the echoed variable or method name, empty if none.
        parameter_offset: index in ``buffer`` where the parameters begin.
        error: ``CoLaError.OK`` for a well-formed named telegram, the device
            error code for an error telegram, ``CoLaError.UNKNOWN`` otherwise.
    """

    __slots__ = ("buffer", "type", "name", "parameter_offset", "error")

    def __init__(self, buffer: bytes | bytearray = b"") -> None:
        self.buffer = bytes(buffer)
        self.type = CoLaCommandType.UNKNOWN
        self.name = ""
        self.parameter_offset = 0
        self.error: CoLaError | int = CoLaError.UNKNOWN
        if not self._decode():
            self.type = CoLaCommandType.UNKNOWN
            self.error = CoLaError.UNKNOWN

    def _decode(self) -> bool:
        data = self.buffer
        prefix = data[:3].decode("latin-1")
        pos = len(prefix)
        self.type = _TYPE_BY_PREFIX.get(prefix, CoLaCommandType.UNKNOWN)

        if self.type is CoLaCommandType.COLA_ERROR:
            self.parameter_offset = pos
            if len(data) < pos + 2:
                self.error = CoLaError.UNKNOWN
                return False
            (code,) = struct.unpack_from(">H", data, pos)
            self.error = _as_error(code)
            return True

        if self.type in _NAMED_TYPES:
            if pos >= len(data) or data[pos] != 0x20:
                self.parameter_offset = pos
                self.error = CoLaError.UNKNOWN
                return False
            pos += 1
            end = data.find(b" ", pos)
            if end < 0:
                self.parameter_offset = len(data)
                self.error = CoLaError.UNKNOWN
                return False
            self.name = data[pos:end].decode("latin-1")
            self.parameter_offset = end + 1
            self.error = CoLaError.OK
            return True

        self.parameter_offset = 0
        self.error = CoLaError.UNKNOWN
        return False

    @classmethod
    def network_error(cls) -> CoLaCommand:
        """Return a command standing for a failed network exchange."""
        command = cls(b"")
        command.type = CoLaCommandType.NETWORK_ERROR
        command.error = CoLaError.NETWORK_ERROR
        command.name = ""
        command.parameter_offset = 0
        return command

    def __repr__(self) -> str:
        return (
            f"CoLaCommand(type={self.type.name}, name={self.name!r}, "
            f"error={self.error!r}, parameter_offset={self.parameter_offset})"
        )