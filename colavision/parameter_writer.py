"""Builder for CoLa command telegrams."""

from __future__ import annotations

import hashlib
import struct
from functools import reduce
from operator import xor

from colavision.cola_command import CoLaCommand, CoLaCommandType

_MAX_FLEX_LENGTH = 0xFFFF

_HEADER_PREFIX = {
    CoLaCommandType.READ_VARIABLE: b"sRN ",
    CoLaCommandType.READ_VARIABLE_RESPONSE: b"sRA ",
    CoLaCommandType.WRITE_VARIABLE: b"sWN ",
    CoLaCommandType.WRITE_VARIABLE_RESPONSE: b"sWA ",
    CoLaCommandType.METHOD_INVOCATION: b"sMN ",
    CoLaCommandType.METHOD_RETURN_VALUE: b"sAN ",
    CoLaCommandType.COLA_ERROR: b"sFA",
}


def _to_bytes(text: str | bytes) -> bytes:
    return text.encode("utf-8") if isinstance(text, str) else bytes(text)


def password_md5_udint(password: str | bytes) -> int:
    """Fold the MD5 digest of a password into a 32-bit value.

    The four 32-bit words of the digest are XOR-ed byte-wise; the first
    resulting byte becomes the least significant byte of the value.
    """
    digest = hashlib.md5(_to_bytes(password)).digest()
    folded = [reduce(xor, digest[lane::4]) for lane in range(4)]
    return int.from_bytes(bytes(folded), "little")


class CoLaParameterWriter:
    """Builds a CoLa command: a type and name header followed by big-endian parameters.

    Every ``parameter_*`` method returns the writer, so calls can be chained.
    Values outside the range of their wire type raise ``ValueError``.
    """

    def __init__(self, command_type: CoLaCommandType, name: str) -> None:
        self.command_type = command_type
        self.name = name
        self._buffer = bytearray()
        prefix = _HEADER_PREFIX.get(command_type)
        if prefix is not None:
            self._buffer += prefix
            self._buffer += _to_bytes(name)
            self._buffer += b" "

    def _pack(self, fmt: str, value: int | float) -> CoLaParameterWriter:
        try:
            self._buffer += struct.pack(fmt, value)
        except struct.error as exc:
            raise ValueError(f"value {value!r} does not fit format {fmt!r}") from exc
        return self

    def parameter_sint(self, value: int) -> CoLaParameterWriter:
        """Append a signed 8-bit integer."""
        return self._pack(">b", value)

    def parameter_usint(self, value: int) -> CoLaParameterWriter:
        """Append an unsigned 8-bit integer."""
        return self._pack(">B", value)

    def parameter_int(self, value: int) -> CoLaParameterWriter:
        """Append a signed 16-bit integer."""
        return self._pack(">h", value)

    def parameter_uint(self, value: int) -> CoLaParameterWriter:
        """Append an unsigned 16-bit integer."""
        return self._pack(">H", value)

    def parameter_dint(self, value: int) -> CoLaParameterWriter:
        """Append a signed 32-bit integer."""
        return self._pack(">i", value)

    def parameter_udint(self, value: int) -> CoLaParameterWriter:
        """Append an unsigned 32-bit integer."""
        return self._pack(">I", value)

    def parameter_real(self, value: float) -> CoLaParameterWriter:
        """Append an IEEE-754 single precision float."""
        return self._pack(">f", value)

    def parameter_lreal(self, value: float) -> CoLaParameterWriter:
        """Append an IEEE-754 double precision float."""
        return self._pack(">d", value)

    def parameter_bool(self, value: bool) -> CoLaParameterWriter:
        """Append a boolean as one byte, 1 for true and 0 for false."""
        return self.parameter_usint(1 if value else 0)

    def parameter_password_md5(self, password: str | bytes) -> CoLaParameterWriter:
        """Append a password as its folded MD5 hash, written as a 32-bit value."""
        return self.parameter_udint(password_md5_udint(password))

    def parameter_flex_string(self, text: str | bytes) -> CoLaParameterWriter:
        """Append a string preceded by its 16-bit length; longer strings are truncated."""
        data = _to_bytes(text)[:_MAX_FLEX_LENGTH]
        self.parameter_uint(len(data))
        self._buffer += data
        return self

    def build(self) -> CoLaCommand:
        """Return the command built so far."""
        return CoLaCommand(bytes(self._buffer))