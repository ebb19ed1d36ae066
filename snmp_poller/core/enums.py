"""
Enumeration definitions for the SNMP poller.

All enums are defined here to maintain consistency and type safety.
"""
from enum import Enum, IntEnum


class OidOutputFormat(str, Enum):
    """
    How the transport renders result OIDs.

    - NUMERIC: net-snmp numeric form with a leading dot (``.1.3.6.1.2.1.1.5.0``)
    - DOTTED: plain dotted form as pysnmp prints it (``1.3.6.1.2.1.1.5.0``)

    ``sub_oid_walk`` positions count segments of the rendered string, so with
    NUMERIC the leading empty segment is index 0.
    """

    NUMERIC = "numeric"
    DOTTED = "dotted"

    def render(self, oid: str) -> str:
        """Render a dotted OID (with or without leading dot) in this format."""
        bare = oid.strip(".")
        if self is OidOutputFormat.NUMERIC:
            return f".{bare}"
        return bare


class SnmpValueType(str, Enum):
    """net-snmp textual type tags understood by the value parser."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    GAUGE32 = "Gauge32"
    HEX_STRING = "Hex-STRING"
    COUNTER32 = "Counter32"
    COUNTER64 = "Counter64"
    TIMETICKS = "Timeticks"
    IP_ADDRESS = "IpAddress"
    OID = "OID"


class TruthValue(IntEnum):
    """SNMPv2-TC TruthValue."""

    TRUE = 1
    FALSE = 2


class IfStatus(IntEnum):
    """IF-MIB ifAdminStatus / ifOperStatus codes."""

    UP = 1
    DOWN = 2
    TESTING = 3
    UNKNOWN = 4  # 僅 ifOperStatus
    DORMANT = 5
    NOT_PRESENT = 6
    LOWER_LAYER_DOWN = 7

    @property
    def label(self) -> str:
        """MIB label, e.g. ``lowerLayerDown``."""
        head, *rest = self.name.lower().split("_")
        return head + "".join(part.capitalize() for part in rest)
