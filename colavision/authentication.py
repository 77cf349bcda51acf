"""Legacy user-level login and logout for CoLa devices."""

from __future__ import annotations

from typing import Protocol

from colavision.cola_command import CoLaCommand, CoLaCommandType
from colavision.cola_error import CoLaError
from colavision.parameter_reader import CoLaParameterReader
from colavision.parameter_writer import CoLaParameterWriter


class _Control(Protocol):
    def send_command(self, command: CoLaCommand) -> CoLaCommand: ...


class AuthenticationLegacy:
    """Logs in with an MD5-folded password through ``SetAccessMode`` and logs out with ``Run``."""

    def __init__(self, control: _Control) -> None:
        self._control = control

    def _invoke(self, command: CoLaCommand) -> bool:
        response = self._control.send_command(command)
        if response.error != CoLaError.OK:
            return False
        return CoLaParameterReader(response).read_bool()

    def login(self, user_level: int, password: str | bytes) -> bool:
        """Switch to ``user_level``; return whether the device accepted the password."""
        command = (
            CoLaParameterWriter(CoLaCommandType.METHOD_INVOCATION, "SetAccessMode")
            .parameter_sint(int(user_level))
            .parameter_password_md5(password)
            .build()
        )
        return self._invoke(command)

    def logout(self) -> bool:
        """Return the device to run mode; return whether it confirmed."""
        command = CoLaParameterWriter(CoLaCommandType.METHOD_INVOCATION, "Run").build()
        return self._invoke(command)