"""
MIB extension — CDP neighbours (Cisco only, CISCO-CDP-MIB::cdpCacheTable).

Table index: cdpCacheIfIndex.cdpCacheDeviceIndex. Columns are walked
with sub_oid_walk keyed by cdpCacheIfIndex.
"""
from __future__ import annotations

from typing import Any

from snmp_poller.mibs import register_mib
from snmp_poller.mibs.base import BaseMib
from snmp_poller.oid_maps import (
    CDP_CAPABILITY_BITS,
    CISCO_CDP_CACHE_CAPABILITIES,
    CISCO_CDP_CACHE_DEVICE_ID,
    CISCO_CDP_CACHE_DEVICE_PORT,
    CISCO_CDP_CACHE_PLATFORM,
)


def decode_capabilities(hex_value: str) -> list[str]:
    """``"00000028"`` → ``["switch", "igmp"]``."""
    bitmap = int(hex_value, 16) if hex_value else 0
    return [label for bit, label in CDP_CAPABILITY_BITS.items() if bitmap & bit]


@register_mib("cisco_cdp")
class CiscoCdpMib(BaseMib):
    """CISCO-CDP-MIB cache table, keyed by local ifIndex."""

    def _column(self, column_oid: str) -> dict[str, Any]:
        return self.session.sub_oid_walk(column_oid, self.index_position(column_oid))

    def device_ids(self) -> dict[str, str]:
        return self._column(CISCO_CDP_CACHE_DEVICE_ID)

    def device_ports(self) -> dict[str, str]:
        return self._column(CISCO_CDP_CACHE_DEVICE_PORT)

    def platforms(self) -> dict[str, str]:
        return self._column(CISCO_CDP_CACHE_PLATFORM)

    def capabilities(self, decode: bool = False) -> dict[str, Any]:
        """cdpCacheCapabilities as hex strings, or label lists with ``decode=True``."""
        caps = self._column(CISCO_CDP_CACHE_CAPABILITIES)
        if not decode:
            return caps
        return {k: decode_capabilities(v) for k, v in caps.items()}

    def neighbours(self) -> dict[str, dict[str, str]]:
        """``{ifIndex: {"remote_system": ..., "remote_port": ..., "platform": ...}}``."""
        device_ids = self.device_ids()
        ports = self.device_ports()
        platforms = self.platforms()
        return {
            if_index: {
                "remote_system": device_id,
                "remote_port": ports.get(if_index, ""),
                "platform": platforms.get(if_index, ""),
            }
            for if_index, device_id in device_ids.items()
        }
