"""Per-ride fare estimation from raw GPS pings."""

__version__ = "0.1.0"
