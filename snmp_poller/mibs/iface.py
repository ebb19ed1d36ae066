"""
MIB extension — IF-MIB (ifTable + ifXTable).

Every table is a first-degree walk keyed by ifIndex (as a string).
Enumerated columns come back as their numeric codes; pass
``translate_labels=True`` to get the MIB labels instead.
"""
from __future__ import annotations

import string

from snmp_poller.core.enums import IfStatus
from snmp_poller.mibs import register_mib
from snmp_poller.mibs.base import BaseMib
from snmp_poller.oid_maps import (
    IF_ADMIN_STATUS,
    IF_ALIAS,
    IF_CONNECTOR_PRESENT,
    IF_DESCR,
    IF_HIGH_SPEED,
    IF_IN_ERRORS,
    IF_IN_OCTETS,
    IF_LAST_CHANGE,
    IF_MTU,
    IF_NAME,
    IF_OPER_STATUS,
    IF_OUT_ERRORS,
    IF_OUT_OCTETS,
    IF_PHYS_ADDRESS,
    IF_PROMISCUOUS_MODE,
    IF_SPEED,
    IF_TYPE,
    IF_TYPE_MAP,
)
from snmp_poller.values import pp_truth_value, translate

IF_STATUS_LABELS: dict[int, str] = {s.value: s.label for s in IfStatus}


def format_mac(value: str) -> str:
    """
    Normalise ifPhysAddress to ``aa:bb:cc:dd:ee:ff``.

    The transport sends it as Hex-STRING (``001A2B3C4D5E``) unless every
    octet happens to be printable, in which case it arrives as six raw
    characters.
    """
    if not value:
        return ""
    if len(value) % 2 == 0 and all(c in string.hexdigits for c in value):
        octets = bytes.fromhex(value)
    else:
        octets = value.encode("latin-1")
    return ":".join(f"{b:02x}" for b in octets)


@register_mib("iface")
class IfaceMib(BaseMib):
    """IF-MIB interface tables."""

    def names(self) -> dict[str, str]:
        """ifName, e.g. ``Gi1/0/1``."""
        return self.session.walk1d(IF_NAME)

    def descriptions(self) -> dict[str, str]:
        """ifDescr, e.g. ``GigabitEthernet1/0/1``."""
        return self.session.walk1d(IF_DESCR)

    def aliases(self) -> dict[str, str]:
        """ifAlias (the configured port description)."""
        return self.session.walk1d(IF_ALIAS)

    def types(self, translate_labels: bool = False) -> dict[str, int | str]:
        types = self.session.walk1d(IF_TYPE)
        if not translate_labels:
            return types
        return {k: IF_TYPE_MAP.get(v, str(v)) for k, v in types.items()}

    def mtus(self) -> dict[str, int]:
        return self.session.walk1d(IF_MTU)

    def speeds(self) -> dict[str, int]:
        """ifSpeed in bits/sec; saturates at 4294967295, see high_speeds()."""
        return self.session.walk1d(IF_SPEED)

    def high_speeds(self) -> dict[str, int]:
        """ifHighSpeed in Mbps."""
        return self.session.walk1d(IF_HIGH_SPEED)

    def physical_addresses(self) -> dict[str, str]:
        return {k: format_mac(v) for k, v in self.session.walk1d(IF_PHYS_ADDRESS).items()}

    def admin_states(self, translate_labels: bool = False) -> dict[str, int | str]:
        states = self.session.walk1d(IF_ADMIN_STATUS)
        return translate(states, IF_STATUS_LABELS) if translate_labels else states

    def oper_states(self, translate_labels: bool = False) -> dict[str, int | str]:
        states = self.session.walk1d(IF_OPER_STATUS)
        return translate(states, IF_STATUS_LABELS) if translate_labels else states

    def last_changes(self) -> dict[str, int]:
        """ifLastChange as sysUpTime ticks."""
        return self.session.walk1d(IF_LAST_CHANGE)

    def in_octets(self) -> dict[str, int]:
        return self.session.walk1d(IF_IN_OCTETS)

    def out_octets(self) -> dict[str, int]:
        return self.session.walk1d(IF_OUT_OCTETS)

    def in_errors(self) -> dict[str, int]:
        return self.session.walk1d(IF_IN_ERRORS)

    def out_errors(self) -> dict[str, int]:
        return self.session.walk1d(IF_OUT_ERRORS)

    def promiscuous_mode(self) -> dict[str, bool]:
        return pp_truth_value(self.session.walk1d(IF_PROMISCUOUS_MODE))

    def connector_present(self) -> dict[str, bool]:
        return pp_truth_value(self.session.walk1d(IF_CONNECTOR_PRESENT))
