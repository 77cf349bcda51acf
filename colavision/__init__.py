"""CoLa protocol commands and framing, device configuration, and point-cloud geometry."""

__version__ = "0.1.0"