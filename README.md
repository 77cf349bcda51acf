# colavision

A Python client library for the CoLa command protocol used by 3D
time-of-flight cameras. It also has helpers that configure the device's data
stream server, a JSON configuration loader, and geometry routines for point
clouds.

## Installation

```
pip install colavision
```

To also install the test tools:

```
pip install colavision[test]
```

## Modules

- `colavision.cola_error`: the `CoLaError` integer enum of protocol error codes.
  `decode_error(code)` returns a readable message. Codes that have no
  message of their own, `OK` among them, give `"Unknown error"`.
- `colavision.cola_command`: `CoLaCommandType` and `CoLaCommand`.
  `CoLaCommand(buffer)` decodes a raw telegram. It exposes `buffer`, `type`,
  `name`, `parameter_offset` and `error`. A malformed telegram gets type
  `UNKNOWN` and error `CoLaError.UNKNOWN`. `CoLaCommand.network_error()`
  returns the command that stands for a failed exchange.
- `colavision.parameter_writer`: `CoLaParameterWriter(command_type, name)`.
  It is a chainable builder with `parameter_sint`, `parameter_usint`,
  `parameter_int`, `parameter_uint`, `parameter_dint`, `parameter_udint`,
  `parameter_real`, `parameter_lreal`, `parameter_bool`,
  `parameter_flex_string` and `parameter_password_md5`, and `build()` returns
  the `CoLaCommand`. Values outside their wire type's range raise `ValueError`.
  Flex strings longer than 65535 bytes are truncated.
  `password_md5_udint(password)` returns the 32-bit MD5-folded password value.
- `colavision.parameter_reader`: `CoLaParameterReader(command)` reads the same
  big-endian types back, starting at the first parameter. It has `read_sint`
  through `read_lreal`, plus `read_bool`, `read_flex_string`,
  `read_fixed_string(length)` and `rewind()`. Reading past the end raises
  `IndexError`.
- `colavision.protocol_handlers`: the `Transport` protocol, with `send`,
  `recv` and `read`, and two handlers that frame commands over such a
  transport:
  - `CoLa2ProtocolHandler` frames with a session id and a request id.
    `open_session(timeout)` sends an open-session telegram and stores the
    session id. `send()` returns a network-error command if the ids of the
    response do not match the request.
  - `CoLaBProtocolHandler` frames with a length prefix and an XOR checksum.
    Its sessions involve no telegrams.

  `xor_checksum(data)` is also exported. Session timeouts outside 0–255 raise
  `ValueError`.
- `colavision.control_session`: `ControlSession(protocol_handler)`.
  `prepare_read`, `prepare_write` and `prepare_call` build empty requests, and
  `send` passes a command to the handler.
- `colavision.authentication`: `AuthenticationLegacy(control)` with `login`
  and `logout`. `login(user_level, password)` calls `SetAccessMode` with the
  MD5-folded password. `logout()` calls `Run`. Both return the device's
  boolean answer, or `False` on an error response. `control` is any object
  with a `send_command(command)` method.
- `colavision.blob_config`: setters for the blob (data stream) server.
  - `set_transport_protocol` takes `"TCP"` or `"UDP"`.
  - `set_blob_tcp_port`, `set_blob_udp_receiver_port` and
    `set_blob_udp_control_port` take a port between 1025 and 65535.
  - `set_blob_udp_max_packet_size` takes a size between 100 and 65535.
  - `set_blob_udp_idle_time_between_packets` takes a value between 0 and 10000.
  - `set_blob_udp_heartbeat_interval` takes a value between 0 and 10000000.
  - `set_blob_udp_receiver_ip`, `set_blob_udp_header_enabled`,
    `set_blob_udp_auto_transmit` and `set_blob_udp_fec_enabled` take an IP
    address string or a boolean.

  Invalid arguments raise `ValueError`. A write that the device rejects raises
  `BlobConfigError`, which carries the `variable` and the `error` code.
- `colavision.config`: `read_json(filename="config.json")` returns a `Config`
  holding `SickSettings` and `CloudSettings`.
  - The file must have the `sick_settings`, `frame` and `projectonPlane`
    sections.
  - Camera settings that are missing take their defaults.
  - `originPlane` and `planeCutInclination` are optional lists of 3-vectors.
  - A missing file, invalid JSON or a wrong value type raises `ConfigError`.
- `colavision.geometry`:
  - `orthogonal_lsq(points)` returns a `Line3D` and the largest scatter
    eigenvalue.
  - `fit_plane_pca(points)` returns a `PlaneFrame`.
  - `project_to_plane_2d` and `lift_from_plane_2d` convert between 3D points
    and coordinates in the plane.
  - `fit_circle_2d(points)` returns a `CircleFit2D`.
  - `largest_arc_coverage(points, cx, cy)` returns an angle.
  - `dbscan(points, eps, min_points)` returns cluster labels.
  - `get_arc_steel_bars(points)` returns `ArcPlane` results. It finds
    semicircular or full-circle arcs among dense clusters of at least 280
    points.
  - `get_intersection_points(lines, arcs)` intersects each line with the plane
    of each arc.

## Example

Build a method-call command and read it back:

```python
from colavision.cola_command import CoLaCommandType
from colavision.parameter_writer import CoLaParameterWriter
from colavision.parameter_reader import CoLaParameterReader

command = (
    CoLaParameterWriter(CoLaCommandType.METHOD_INVOCATION, "SetAccessMode")
    .parameter_sint(3)
    .parameter_password_md5("password")
    .build()
)
print(command.name)            # SetAccessMode

reader = CoLaParameterReader(command)
print(reader.read_sint())      # 3
```

Send a request through a handler. Here `transport` is an object of your own
that follows the `Transport` protocol, for example a wrapper around a TCP
socket:

```python
from colavision.protocol_handlers import CoLa2ProtocolHandler
from colavision.control_session import ControlSession

handler = CoLa2ProtocolHandler(transport)
handler.open_session(5)
session = ControlSession(handler)
response = session.send(session.prepare_read("DeviceIdent"))
handler.close_session()
```

## What this package does not do

- It opens no network connections itself, because no `Transport` is included.
- It does not receive or decode the camera's image data stream, and it does
  not grab frames.
- It does not render point clouds to images and does not display them.
- It has no line detection on whole point clouds beyond the single-line fit in
  `orthogonal_lsq`.
- It provides no command-line program.

## Running the tests

```
pytest
```