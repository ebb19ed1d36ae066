"""
MIB extension — LLDP neighbours (LLDP-MIB, IEEE 802.1AB).

Local port table index: lldpLocPortNum (first degree).

Remote table index structure:
    lldpRemTimeMark.lldpRemLocalPortNum.lldpRemIndex

Remote columns are keyed by lldpRemLocalPortNum, so one neighbour per
local port is kept (the last one the agent returns).
"""
from __future__ import annotations

import logging
from typing import Any

from snmp_poller.mibs import register_mib
from snmp_poller.mibs.base import BaseMib
from snmp_poller.oid_maps import (
    LLDP_LOC_PORT_DESC,
    LLDP_LOC_PORT_ID,
    LLDP_REM_CHASSIS_ID,
    LLDP_REM_PORT_DESC,
    LLDP_REM_PORT_ID,
    LLDP_REM_SYS_NAME,
)

logger = logging.getLogger(__name__)


@register_mib("lldp")
class LldpMib(BaseMib):
    """LLDP-MIB local port and remote system tables."""

    def _remote(self, column_oid: str) -> dict[str, Any]:
        # offset 1 skips lldpRemTimeMark
        return self.session.sub_oid_walk(column_oid, self.index_position(column_oid, 1))

    def local_port_ids(self) -> dict[str, str]:
        return self.session.walk1d(LLDP_LOC_PORT_ID)

    def local_port_descriptions(self) -> dict[str, str]:
        return self.session.walk1d(LLDP_LOC_PORT_DESC)

    def remote_sys_names(self) -> dict[str, str]:
        return self._remote(LLDP_REM_SYS_NAME)

    def remote_port_ids(self) -> dict[str, str]:
        return self._remote(LLDP_REM_PORT_ID)

    def remote_port_descriptions(self) -> dict[str, str]:
        return self._remote(LLDP_REM_PORT_DESC)

    def remote_chassis_ids(self) -> dict[str, str]:
        return self._remote(LLDP_REM_CHASSIS_ID)

    def neighbours(self) -> dict[str, dict[str, str]]:
        """
        One entry per local port with a neighbour::

            {"49": {"local_port": "Te1/1/1", "remote_system": "core-sw1",
                    "remote_port": "Ethernet1/1"}}

        remote_port prefers lldpRemPortDesc and falls back to lldpRemPortId.
        """
        local_desc = self.local_port_descriptions()
        sys_names = self.remote_sys_names()
        port_descs = self.remote_port_descriptions()
        port_ids = self.remote_port_ids()

        result: dict[str, dict[str, str]] = {}
        for port_num, sys_name in sys_names.items():
            remote_port = port_descs.get(port_num) or port_ids.get(port_num, "")
            local_port = local_desc.get(port_num)
            if local_port is None:
                logger.debug("LLDP neighbour on unknown local port %s", port_num)
                local_port = port_num
            result[port_num] = {
                "local_port": local_port,
                "remote_system": sys_name,
                "remote_port": remote_port,
            }
        return result
