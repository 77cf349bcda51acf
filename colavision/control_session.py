"""A control session that prepares CoLa commands and sends them."""

from __future__ import annotations

from typing import Protocol

from colavision.cola_command import CoLaCommand, CoLaCommandType
from colavision.parameter_writer import CoLaParameterWriter


class _ProtocolHandler(Protocol):
    def send(self, command: CoLaCommand) -> CoLaCommand: ...


class ControlSession:
    """Creates empty read, write and call commands and sends them through a protocol handler."""

    def __init__(self, protocol_handler: _ProtocolHandler) -> None:
        self._protocol_handler = protocol_handler

    def prepare_read(self, name: str) -> CoLaCommand:
        """Return a read request for a variable."""
        return CoLaParameterWriter(CoLaCommandType.READ_VARIABLE, name).build()

    def prepare_write(self, name: str) -> CoLaCommand:
        """Return a write request for a variable, without a value."""
        return CoLaParameterWriter(CoLaCommandType.WRITE_VARIABLE, name).build()

    def prepare_call(self, name: str) -> CoLaCommand:
        """Return a method invocation without arguments."""
        return CoLaParameterWriter(CoLaCommandType.METHOD_INVOCATION, name).build()

    def send(self, command: CoLaCommand) -> CoLaCommand:
        """Send a command and return the response."""
        return self._protocol_handler.send(command)