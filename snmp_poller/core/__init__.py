"""Core module - contains enums and configuration."""
from .enums import IfStatus, OidOutputFormat, SnmpValueType, TruthValue
from .config import Settings, get_settings, settings

__all__ = [
    "IfStatus",
    "OidOutputFormat",
    "SnmpValueType",
    "TruthValue",
    "Settings",
    "get_settings",
    "settings",
]
