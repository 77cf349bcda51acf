"""Sequential reading of parameters from a CoLa command."""

from __future__ import annotations

import struct

from colavision.cola_command import CoLaCommand


class CoLaParameterReader:
    """Reads big-endian CoLa parameters from a command, starting at its first parameter.

    Every read advances the position; reading past the end of the buffer
    raises ``IndexError``.
    """

    def __init__(self, command: CoLaCommand) -> None:
        self._command = command
        self._position = command.parameter_offset

    @property
    def position(self) -> int:
        """Current offset into the command buffer."""
        return self._position

    def rewind(self) -> None:
        """Move back to the first parameter."""
        self._position = self._command.parameter_offset

    def _unpack(self, fmt: str) -> int | float:
        size = struct.calcsize(fmt)
        self._check(size)
        (value,) = struct.unpack_from(fmt, self._command.buffer, self._position)
        self._position += size
        return value

    def _check(self, size: int) -> None:
        if self._position + size > len(self._command.buffer):
            raise IndexError(
                f"reading {size} bytes at offset {self._position} exceeds "
                f"buffer of {len(self._command.buffer)} bytes"
            )

    def read_sint(self) -> int:
        """Read a signed 8-bit integer."""
        return int(self._unpack(">b"))

    def read_usint(self) -> int:
        """Read an unsigned 8-bit integer."""
        return int(self._unpack(">B"))

    def read_int(self) -> int:
        """Read a signed 16-bit integer."""
        return int(self._unpack(">h"))

    def read_uint(self) -> int:
        """Read an unsigned 16-bit integer."""
        return int(self._unpack(">H"))

    def read_dint(self) -> int:
        """Read a signed 32-bit integer."""
        return int(self._unpack(">i"))

    def read_udint(self) -> int:
        """Read an unsigned 32-bit integer."""
        return int(self._unpack(">I"))

    def read_real(self) -> float:
        """Read an IEEE-754 single precision float."""
        return float(self._unpack(">f"))

    def read_lreal(self) -> float:
        """Read an IEEE-754 double precision float."""
        return float(self._unpack(">d"))

    def read_bool(self) -> bool:
        """Read one byte; only the value 1 counts as true."""
        return self.read_usint() == 1

    def read_flex_string(self) -> str:
        """Read a string preceded by its 16-bit length."""
        return self.read_fixed_string(self.read_uint())

    def read_fixed_string(self, length: int) -> str:
        """Read a string of ``length`` bytes."""
        if length:
            self._check(length)
            start = self._position
            text = self._command.buffer[start:start + length].decode("latin-1")
        else:
            text = ""
        self._position += length
        return text