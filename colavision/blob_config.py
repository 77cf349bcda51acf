"""Writing the blob (data stream) server settings of a device."""

from __future__ import annotations

from typing import Protocol

from colavision.cola_command import CoLaCommand, CoLaCommandType
from colavision.cola_error import CoLaError, decode_error
from colavision.parameter_writer import CoLaParameterWriter

_TRANSPORT_PROTOCOLS = {"TCP": 0, "UDP": 1}


class _Control(Protocol):
    def send_command(self, command: CoLaCommand) -> CoLaCommand: ...


class BlobConfigError(Exception):
    """The device refused to write a blob server variable."""

    def __init__(self, variable: str, error: CoLaError | int) -> None:
        self.variable = variable
        self.error = error
        super().__init__(
            f"Failure writing {variable}: {int(error)} ({decode_error(int(error))})"
        )


def _check_range(value: int, low: int, high: int, what: str) -> None:
    if not low <= value <= high:
        raise ValueError(f"the {what} must be a value between {low} and {high}, got {value}")


def _write(control: _Control, writer: CoLaParameterWriter) -> None:
    response = control.send_command(writer.build())
    if response.error != CoLaError.OK:
        raise BlobConfigError(writer.name, response.error)


def _writer(variable: str) -> CoLaParameterWriter:
    return CoLaParameterWriter(CoLaCommandType.WRITE_VARIABLE, variable)


def set_transport_protocol(control: _Control, transport_protocol: str) -> None:
    """Select ``"TCP"`` or ``"UDP"`` as the blob transport protocol."""
    try:
        code = _TRANSPORT_PROTOCOLS[transport_protocol]
    except KeyError:
        raise ValueError(
            f"transport protocol must be 'TCP' or 'UDP', got {transport_protocol!r}"
        ) from None
    _write(control, _writer("BlobTransportProtocolAPI").parameter_usint(code))


def set_blob_udp_receiver_port(control: _Control, receiver_port: int) -> None:
    """Set the UDP port the data is sent to (1025 to 65535)."""
    _check_range(receiver_port, 1025, 65535, "receiver port")
    _write(control, _writer("BlobUdpReceiverPortAPI").parameter_uint(receiver_port))


def set_blob_udp_control_port(control: _Control, control_port: int) -> None:
    """Set the UDP control port (1025 to 65535)."""
    _check_range(control_port, 1025, 65535, "udp control port")
    _write(control, _writer("BlobUdpControlPortAPI").parameter_uint(control_port))


def set_blob_tcp_port(control: _Control, tcp_port: int) -> None:
    """Set the TCP streaming port (1025 to 65535)."""
    _check_range(tcp_port, 1025, 65535, "tcp port")
    _write(control, _writer("BlobTcpPortAPI").parameter_uint(tcp_port))


def set_blob_udp_max_packet_size(control: _Control, max_packet_size: int) -> None:
    """Set the largest UDP packet size in bytes (100 to 65535)."""
    _check_range(max_packet_size, 100, 65535, "UDP max packet size")
    _write(control, _writer("BlobUdpMaxPacketSizeAPI").parameter_uint(max_packet_size))


def set_blob_udp_idle_time_between_packets(control: _Control, time_between_packets: int) -> None:
    """Set the idle time between UDP packets (0 to 10000)."""
    _check_range(time_between_packets, 0, 10000, "time between packets")
    _write(
        control,
        _writer("BlobUdpIdleTimeBetweenPacketsAPI").parameter_uint(time_between_packets),
    )


def set_blob_udp_receiver_ip(control: _Control, receiver_ip: str) -> None:
    """Set the IP address the UDP data is sent to."""
    _write(control, _writer("BlobUdpReceiverIPAPI").parameter_flex_string(receiver_ip))


def set_blob_udp_heartbeat_interval(control: _Control, heartbeat_interval: int) -> None:
    """Set the UDP heartbeat interval (0 to 10000000)."""
    _check_range(heartbeat_interval, 0, 10_000_000, "heartbeat interval")
    _write(control, _writer("BlobUdpHeartbeatInterval").parameter_udint(heartbeat_interval))


def set_blob_udp_header_enabled(control: _Control, header_enabled: bool) -> None:
    """Enable or disable the UDP blob header."""
    _write(control, _writer("BlobUdpHeaderEnabled").parameter_bool(header_enabled))


def set_blob_udp_auto_transmit(control: _Control, auto_transmit: bool) -> None:
    """Enable or disable automatic UDP transmission."""
    _write(control, _writer("BlobUdpAutoTransmit").parameter_bool(auto_transmit))


def set_blob_udp_fec_enabled(control: _Control, fec_enabled: bool) -> None:
    """Enable or disable UDP forward error correction."""
    _write(control, _writer("BlobUdpFECEnabled").parameter_bool(fec_enabled))