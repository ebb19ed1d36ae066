"""
MIB extension — SNMPv2-MIB system group.

All values are scalars fetched with GET.
"""
from __future__ import annotations

from snmp_poller.mibs import register_mib
from snmp_poller.mibs.base import BaseMib
from snmp_poller.oid_maps import (
    SYS_CONTACT,
    SYS_DESCR,
    SYS_LOCATION,
    SYS_NAME,
    SYS_OBJECT_ID,
    SYS_SERVICES,
    SYS_UPTIME,
)


@register_mib("system")
class SystemMib(BaseMib):
    """SNMPv2-MIB::system."""

    def description(self) -> str:
        return self.session.get(SYS_DESCR)

    def object_id(self) -> str:
        return self.session.get(SYS_OBJECT_ID)

    def uptime(self) -> int:
        """sysUpTime in hundredths of a second."""
        return self.session.get(SYS_UPTIME)

    def contact(self) -> str:
        return self.session.get(SYS_CONTACT)

    def name(self) -> str:
        return self.session.get(SYS_NAME)

    def location(self) -> str:
        return self.session.get(SYS_LOCATION)

    def services(self) -> int:
        """sysServices layer bitmap (bit n-1 set = layer n)."""
        return self.session.get(SYS_SERVICES)
