"""
OID Constants & Value Mapping Tables.

所有 SNMP OID 常數集中管理於此，MIB extension 只需引用。
OIDs are written in net-snmp numeric form (leading dot).
"""
from __future__ import annotations

# =============================================================================
# Standard MIBs (跨廠商通用)
# =============================================================================

# SNMPv2-MIB (system group, scalars)
SYS_DESCR = ".1.3.6.1.2.1.1.1.0"
SYS_OBJECT_ID = ".1.3.6.1.2.1.1.2.0"
SYS_UPTIME = ".1.3.6.1.2.1.1.3.0"
SYS_CONTACT = ".1.3.6.1.2.1.1.4.0"
SYS_NAME = ".1.3.6.1.2.1.1.5.0"
SYS_LOCATION = ".1.3.6.1.2.1.1.6.0"
SYS_SERVICES = ".1.3.6.1.2.1.1.7.0"

# IF-MIB::ifTable (indexed by ifIndex)
IF_DESCR = ".1.3.6.1.2.1.2.2.1.2"
IF_TYPE = ".1.3.6.1.2.1.2.2.1.3"
IF_MTU = ".1.3.6.1.2.1.2.2.1.4"
IF_SPEED = ".1.3.6.1.2.1.2.2.1.5"             # bits/sec
IF_PHYS_ADDRESS = ".1.3.6.1.2.1.2.2.1.6"
IF_ADMIN_STATUS = ".1.3.6.1.2.1.2.2.1.7"
IF_OPER_STATUS = ".1.3.6.1.2.1.2.2.1.8"       # 1=up, 2=down, 3=testing
IF_LAST_CHANGE = ".1.3.6.1.2.1.2.2.1.9"
IF_IN_OCTETS = ".1.3.6.1.2.1.2.2.1.10"
IF_IN_ERRORS = ".1.3.6.1.2.1.2.2.1.14"
IF_OUT_OCTETS = ".1.3.6.1.2.1.2.2.1.16"
IF_OUT_ERRORS = ".1.3.6.1.2.1.2.2.1.20"

# IF-MIB::ifXTable (indexed by ifIndex)
IF_NAME = ".1.3.6.1.2.1.31.1.1.1.1"
IF_HIGH_SPEED = ".1.3.6.1.2.1.31.1.1.1.15"    # Mbps (for >1G)
IF_PROMISCUOUS_MODE = ".1.3.6.1.2.1.31.1.1.1.16"  # TruthValue
IF_CONNECTOR_PRESENT = ".1.3.6.1.2.1.31.1.1.1.17"  # TruthValue
IF_ALIAS = ".1.3.6.1.2.1.31.1.1.1.18"

# LLDP-MIB (IEEE 802.1AB)
# lldpLocPortTable index: lldpLocPortNum
LLDP_LOC_PORT_ID = ".1.0.8802.1.1.2.1.3.7.1.3"
LLDP_LOC_PORT_DESC = ".1.0.8802.1.1.2.1.3.7.1.4"
# lldpRemTable index: lldpRemTimeMark.lldpRemLocalPortNum.lldpRemIndex
LLDP_REM_CHASSIS_ID = ".1.0.8802.1.1.2.1.4.1.1.5"
LLDP_REM_PORT_ID = ".1.0.8802.1.1.2.1.4.1.1.7"
LLDP_REM_PORT_DESC = ".1.0.8802.1.1.2.1.4.1.1.8"
LLDP_REM_SYS_NAME = ".1.0.8802.1.1.2.1.4.1.1.9"

# =============================================================================
# Vendor-Specific: Cisco (Enterprise 9)
# =============================================================================

# CISCO-CDP-MIB::cdpCacheTable index: cdpCacheIfIndex.cdpCacheDeviceIndex
CISCO_CDP_CACHE_DEVICE_ID = ".1.3.6.1.4.1.9.9.23.1.2.1.1.6"
CISCO_CDP_CACHE_DEVICE_PORT = ".1.3.6.1.4.1.9.9.23.1.2.1.1.7"
CISCO_CDP_CACHE_PLATFORM = ".1.3.6.1.4.1.9.9.23.1.2.1.1.8"
CISCO_CDP_CACHE_CAPABILITIES = ".1.3.6.1.4.1.9.9.23.1.2.1.1.9"

# =============================================================================
# Value Mapping Tables
# =============================================================================

# IF-MIB::ifType (common subset of IANAifType)
IF_TYPE_MAP: dict[int, str] = {
    1: "other",
    6: "ethernetCsmacd",
    24: "softwareLoopback",
    53: "propVirtual",          # Port-Channel / VLAN SVI on some vendors
    117: "gigabitEthernet",
    131: "tunnel",
    135: "l2vlan",
    136: "l3ipvlan",
    161: "ieee8023adLag",
}

# CISCO-CDP-MIB::cdpCacheCapabilities (32-bit bitmap, sent as 4-octet Hex-STRING)
CDP_CAPABILITY_BITS: dict[int, str] = {
    0x01: "router",
    0x02: "transparentBridge",
    0x04: "sourceRouteBridge",
    0x08: "switch",
    0x10: "host",
    0x20: "igmp",
    0x40: "repeater",
}
