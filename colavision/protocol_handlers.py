"""Framing of CoLa commands for the CoLa-2 and CoLa-B binary protocols."""

from __future__ import annotations

import struct
from functools import reduce
from operator import xor
from typing import Protocol

from colavision.cola_command import CoLaCommand

_STX = 0x02
_MAGIC = bytes([_STX] * 4)
_CLIENT_ID = b"svb"


class Transport(Protocol):
    """A byte stream to a device.

    ``send`` returns the number of bytes written. ``recv`` returns up to
    ``max_bytes`` bytes, and an empty result when the stream is closed or
    failed. ``read`` returns exactly ``n_bytes`` bytes, or fewer if the
    stream ended first.
    """

    def send(self, data: bytes) -> int: ...

    def recv(self, max_bytes: int) -> bytes: ...

    def read(self, n_bytes: int) -> bytes: ...


def xor_checksum(data: bytes | bytearray) -> int:
    """Return the XOR of all bytes in ``data``."""
    return reduce(xor, data, 0)


def _check_timeout(session_timeout: int) -> None:
    if not 0 <= session_timeout <= 0xFF:
        raise ValueError("session timeout must be between 0 and 255 seconds")


def _await_magic(transport: Transport) -> bool:
    """Consume the stream up to and including a run of four STX bytes."""
    run = 0
    while run < len(_MAGIC):
        chunk = transport.recv(len(_MAGIC) - run)
        if not chunk:
            return False
        for byte in chunk:
            run = run + 1 if byte == _STX else 0
    return True


def _read_framed(transport: Transport, extra: int) -> bytes | None:
    """Read a length-prefixed frame body plus ``extra`` trailing bytes."""
    if not _await_magic(transport):
        return None
    raw_length = transport.read(4)
    if len(raw_length) != 4:
        return None
    (length,) = struct.unpack(">I", raw_length)
    body = transport.read(length + extra)
    if len(body) != length + extra:
        return None
    return bytes(body)


class CoLa2ProtocolHandler:
    """Sends CoLa commands over a CoLa-2 session.

    Each telegram carries the session id and a request id; a response whose
    ids do not match the request is treated as a network error.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._req_id = 0
        self._session_id = 0

    @property
    def req_id(self) -> int:
        """Id of the most recent request."""
        return self._req_id

    @property
    def session_id(self) -> int:
        """Id of the current session, 0 before a session is opened."""
        return self._session_id

    def _next_req_id(self) -> int:
        self._req_id = (self._req_id + 1) & 0xFFFF
        return self._req_id

    def _frame(self, payload: bytes) -> bytes:
        # length covers HubCntr, NoC, session id, request id and payload
        header = _MAGIC + struct.pack(
            ">IBBIH",
            len(payload) + 2 + 6,
            0,
            0,
            self._session_id,
            self._next_req_id(),
        )
        return header + payload

    def _read_response(self) -> tuple[int, int, bytes] | None:
        body = _read_framed(self._transport, 0)
        if body is None or len(body) < 2:
            return None
        body = body[2:]  # HubCntr and NoC
        if len(body) < 6:
            return None
        session_id, req_id = struct.unpack_from(">IH", body)
        return session_id, req_id, body[6:]

    def _transmit(self, frame: bytes) -> bool:
        return self._transport.send(frame) == len(frame)

    def send(self, command: CoLaCommand) -> CoLaCommand:
        """Send a command and return the device's response."""
        # the leading 's' of the command is not part of a CoLa-2 telegram
        if not self._transmit(self._frame(command.buffer[1:])):
            return CoLaCommand.network_error()
        response = self._read_response()
        if response is None:
            return CoLaCommand.network_error()
        session_id, req_id, payload = response
        if not payload or session_id != self._session_id or req_id != self._req_id:
            return CoLaCommand.network_error()
        return CoLaCommand(b"s" + payload)

    def open_session(self, session_timeout: int) -> bool:
        """Open a session that expires after ``session_timeout`` seconds of silence."""
        _check_timeout(session_timeout)
        payload = b"Ox" + struct.pack(">BH", session_timeout, len(_CLIENT_ID)) + _CLIENT_ID
        if not self._transmit(self._frame(payload)):
            return False
        response = self._read_response()
        if response is None:
            return False
        session_id, req_id, _ = response
        if req_id != self._req_id:
            return False
        self._session_id = session_id
        return True

    def close_session(self) -> None:
        """Close the current session."""
        self.send(CoLaCommand(b"sCx"))


class CoLaBProtocolHandler:
    """Sends CoLa commands framed with a length prefix and an XOR checksum.

    CoLa-B telegrams carry no session id; opening and closing a session only
    tracks whether the caller considers the channel in use.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._session_open = False

    @property
    def session_open(self) -> bool:
        """Whether ``open_session`` was called without a later ``close_session``."""
        return self._session_open

    def send(self, command: CoLaCommand) -> CoLaCommand:
        """Send a command and return the device's response."""
        payload = command.buffer
        frame = _MAGIC + struct.pack(">I", len(payload)) + payload + bytes([xor_checksum(payload)])
        if self._transport.send(frame) != len(frame):
            return CoLaCommand.network_error()
        body = _read_framed(self._transport, 1)
        if not body or len(body) < 2:
            return CoLaCommand.network_error()
        return CoLaCommand(body[:-1])  # drop the checksum byte

    def open_session(self, session_timeout: int) -> bool:
        """Mark the channel as in use; no telegram is needed, so this always succeeds."""
        _check_timeout(session_timeout)
        self._session_open = True
        return self._session_open

    def close_session(self) -> None:
        """Mark the channel as no longer in use."""
        self._session_open = False