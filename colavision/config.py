"""Reading the application configuration from a JSON file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

Vector3 = tuple[float, float, float]


class ConfigError(Exception):
    """The configuration file is missing, malformed or incomplete."""


@dataclass
class SickSettings:
    """Settings for the camera connection and acquisition."""

    transport_protocol: str = "TCP"
    device_ip_addr: str = "192.168.7.200"
    receiver_ip: str = "192.168.1.2"
    store_data: bool = False
    file_prefix: str = ""
    streaming_port: int = 2114
    cnt: int = 10
    visionary_type: str = ""
    show_help_and_exit: bool = False


@dataclass
class CloudSettings:
    """Settings for processing point clouds."""

    scale: float = 1.0
    origin_plane_projection: Vector3 = (0.0, 0.0, 0.0)
    normal: Vector3 = (0.0, 0.0, 1.0)
    origin_cut_planes: list[Vector3] = field(default_factory=list)
    inclination_cut_planes: list[Vector3] = field(default_factory=list)


@dataclass
class Config:
    """The whole application configuration."""

    sick_settings: SickSettings = field(default_factory=SickSettings)
    cloud_settings: CloudSettings = field(default_factory=CloudSettings)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key)
    if not isinstance(section, dict):
        raise ConfigError(f"Missing or invalid '{key}' section in config.json")
    return section


def _text(section: dict[str, Any], key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value


def _flag(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean")
    return value


def _integer(section: dict[str, Any], key: str, default: int, high: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= high:
        raise ConfigError(f"'{key}' must be an integer between 0 and {high}")
    return value


def _real(section: dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    if not _is_number(value):
        raise ConfigError(f"'{key}' must be a number")
    return float(value)


def _vector(value: Any, what: str) -> Vector3:
    if not isinstance(value, list) or len(value) < 3 or not all(_is_number(v) for v in value[:3]):
        raise ConfigError(f"{what} must be a list of three numbers")
    x, y, z = value[:3]
    return (float(x), float(y), float(z))


def _vectors(data: dict[str, Any], key: str) -> list[Vector3]:
    items = data.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise ConfigError(f"'{key}' must be a list")
    return [_vector(item, f"entry of '{key}'") for item in items]


def read_json(filename: str | Path = "config.json") -> Config:
    """Read the configuration from ``filename``.

    Missing camera settings take their defaults; the ``sick_settings``,
    ``frame`` and ``projectonPlane`` sections must be present.
    """
    path = Path(filename)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        raise ConfigError(f"Config file '{filename}' not found.") from None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Error parsing config.json: {exc}") from exc
    if not isinstance(data, dict) or "sick_settings" not in data:
        raise ConfigError("Missing 'sick_settings' section in config.json")

    s = _section(data, "sick_settings")
    sick = SickSettings(
        transport_protocol=_text(s, "transportProtocol", "TCP"),
        device_ip_addr=_text(s, "deviceIpAddr", "192.168.7.200"),
        receiver_ip=_text(s, "receiverIp", "192.168.1.2"),
        store_data=_flag(s, "storeData", False),
        file_prefix=_text(s, "filePrefix", ""),
        streaming_port=_integer(s, "streamingPort", 2114, 0xFFFF),
        cnt=_integer(s, "cnt", 10, 0xFFFFFFFF),
        show_help_and_exit=_flag(s, "showHelpAndExit", False),
    )

    frame = _section(data, "frame")
    plane = _section(data, "projectonPlane")
    cloud = CloudSettings(
        scale=_real(frame, "scale", 1.0),
        origin_plane_projection=_vector(plane.get("origin"), "'projectonPlane.origin'"),
        normal=_vector(plane.get("normal"), "'projectonPlane.normal'"),
        origin_cut_planes=_vectors(data, "originPlane"),
        inclination_cut_planes=_vectors(data, "planeCutInclination"),
    )
    return Config(sick_settings=sick, cloud_settings=cloud)