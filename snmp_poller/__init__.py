"""
SNMP v2c polling client.

以 GET / WALK 查詢 SNMP agent，將 net-snmp 文字格式的值轉成 Python 型別，
並提供每個 session 的結果快取與 MIB extension registry。

架構：
    SnmpEngine      — pysnmp transport (get/walk, raw ``TYPE: value`` strings)
    MockSnmpEngine  — replays an snmpwalk dump, same interface
    parse_value     — raw value → str / int
    SnmpSession     — get / walk1d / sub_oid_walk + result cache
    mibs            — per-MIB extensions (system, iface, lldp, cisco_cdp)
"""
from snmp_poller.engine import (
    IndexOutOfRangeError,
    InvalidValueError,
    NonUniformTreeError,
    SnmpEngine,
    SnmpEngineConfig,
    SnmpError,
    SnmpNoSuchObjectError,
    SnmpTarget,
    SnmpTimeoutError,
    TransportError,
    UnknownExtensionError,
    UnsupportedTypeError,
)
from snmp_poller.mock_engine import MockSnmpEngine
from snmp_poller.session import SnmpSession
from snmp_poller.values import TRUTH_VALUES, parse_value, pp_truth_value, translate

__version__ = "0.3.0"

__all__ = [
    "IndexOutOfRangeError",
    "InvalidValueError",
    "MockSnmpEngine",
    "NonUniformTreeError",
    "SnmpEngine",
    "SnmpEngineConfig",
    "SnmpError",
    "SnmpNoSuchObjectError",
    "SnmpSession",
    "SnmpTarget",
    "SnmpTimeoutError",
    "TRUTH_VALUES",
    "TransportError",
    "UnknownExtensionError",
    "UnsupportedTypeError",
    "parse_value",
    "pp_truth_value",
    "translate",
]
