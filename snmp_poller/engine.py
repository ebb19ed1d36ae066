"""
SNMP Engine — pysnmp transport for the poller.

提供兩個 transport 操作（session 只依賴這兩個）：
- get()  — 取得單一 OID 的 raw value（net-snmp 文字格式 ``TYPE: value``）
- walk() — 走訪整個 OID 子樹（使用 GETBULK），回傳 (oid, raw value) list

Both are synchronous: each call runs one event loop around the pysnmp
v3arch asyncio API. ``aget()`` / ``awalk()`` expose the coroutines for
callers that already run inside an event loop.

NOTE: pysnmp imports are deferred to call time so that replay mode
(SNMP_MOCK=true) does not touch pysnmp at all.
"""
from __future__ import annotations

import asyncio
import logging
import string
from dataclasses import dataclass
from typing import Any

from snmp_poller.core.enums import OidOutputFormat

logger = logging.getLogger(__name__)

# pysnmp classes that mark "no value here" instead of a real value
_END_OF_TREE = ("NoSuchObject", "NoSuchInstance", "EndOfMibView")

_PRINTABLE = frozenset(string.printable.encode("ascii"))


class SnmpError(Exception):
    """Base SNMP error."""


class TransportError(SnmpError):
    """Agent unreachable, request failed, or the agent returned an error status."""


class SnmpTimeoutError(TransportError):
    """SNMP request timed out after all retries."""


class SnmpNoSuchObjectError(TransportError):
    """Requested OID does not exist on the device."""


class UnsupportedTypeError(SnmpError):
    """Raw value carries a type tag the value parser does not handle."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unhandled SNMP return type: {type_name!r}")
        self.type_name = type_name


class InvalidValueError(SnmpError):
    """Raw value has a known type tag but a payload that does not parse."""

    def __init__(self, type_name: str, value: str) -> None:
        super().__init__(f"Malformed {type_name} value: {value!r}")
        self.type_name = type_name
        self.value = value


class NonUniformTreeError(SnmpError):
    """walk1d() was asked for a tree that is not first-degree indexed."""

    def __init__(self, oid: str, expected: str, found: str) -> None:
        super().__init__(
            f"Requested OID tree {oid} is not a first degree indexed SNMP value "
            f"(expected parent {expected}, got {found})"
        )
        self.oid = oid
        self.expected = expected
        self.found = found


class IndexOutOfRangeError(SnmpError, IndexError):
    """sub_oid_walk() position is beyond the segments of a result OID."""

    def __init__(self, oid: str, position: int) -> None:
        super().__init__(f"Position {position} is out of range for OID {oid}")
        self.oid = oid
        self.position = position


class UnknownExtensionError(SnmpError, KeyError):
    """No MIB extension is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown MIB extension: {name!r}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


@dataclass
class SnmpTarget:
    """Connection parameters for a single SNMP request.

    ``timeout`` is in microseconds, as the poller configures it.
    """

    host: str
    community: str
    port: int = 161
    timeout: int = 1_000_000
    retries: int = 5

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1_000_000


@dataclass
class SnmpEngineConfig:
    """Engine-level configuration."""

    max_repetitions: int = 25
    walk_timeout: float = 120.0
    oid_output_format: OidOutputFormat = OidOutputFormat.NUMERIC


def _format_timeticks(ticks: int) -> str:
    """Render hundredths of a second the way net-snmp does: ``1 day, 2:03:04.05``."""
    seconds, centis = divmod(ticks, 100)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    clock = f"{hours}:{minutes:02d}:{seconds:02d}.{centis:02d}"
    if days == 1:
        return f"1 day, {clock}"
    if days:
        return f"{days} days, {clock}"
    return clock


def render_value(val: Any) -> str:
    """
    Render a pysnmp value in net-snmp textual notation (``TYPE: value``).

    OctetStrings become ``STRING: "..."`` when every byte is printable and
    ``Hex-STRING: 00 1A FF`` otherwise. Classes without a known tag are
    rendered ``ClassName: prettyPrint()`` and rejected later by the parser.
    """
    from pysnmp.proto import rfc1902

    # IpAddress / Opaque / Bits subclass OctetString and TimeTicks etc.
    # subclass Integer, so specific classes are checked first.
    if isinstance(val, rfc1902.IpAddress):
        return f"IpAddress: {val.prettyPrint()}"
    if isinstance(val, rfc1902.TimeTicks):
        ticks = int(val)
        return f"Timeticks: ({ticks}) {_format_timeticks(ticks)}"
    if isinstance(val, rfc1902.Counter64):
        return f"Counter64: {int(val)}"
    if isinstance(val, rfc1902.Counter32):
        return f"Counter32: {int(val)}"
    if isinstance(val, (rfc1902.Gauge32, rfc1902.Unsigned32)):
        return f"Gauge32: {int(val)}"
    if isinstance(val, rfc1902.Integer32):
        return f"INTEGER: {int(val)}"
    if isinstance(val, rfc1902.ObjectIdentifier):
        return f"OID: {OidOutputFormat.NUMERIC.render(str(val))}"
    if isinstance(val, rfc1902.OctetString) and not isinstance(
        val, (rfc1902.Bits, rfc1902.Opaque),
    ):
        octets = val.asOctets()
        if all(b in _PRINTABLE for b in octets):
            return f'STRING: "{octets.decode("ascii")}"'
        return "Hex-STRING: " + " ".join(f"{b:02X}" for b in octets)

    pretty = val.prettyPrint() if hasattr(val, "prettyPrint") else str(val)
    return f"{val.__class__.__name__}: {pretty}"


class SnmpEngine:
    """
    Thin wrapper around the pysnmp v3arch asyncio API (SNMP v2c only).

    Each request gets its own pysnmp engine, closed when the request
    finishes, so instances share no process-wide state.
    """

    def __init__(self, config: SnmpEngineConfig | None = None) -> None:
        self._config = config or SnmpEngineConfig()

    @property
    def config(self) -> SnmpEngineConfig:
        return self._config

    def format_oid(self, oid: str) -> str:
        """Render an OID in this engine's output format."""
        return self._config.oid_output_format.render(oid)

    # ── Synchronous transport interface ─────────────────────────────

    def get(self, target: SnmpTarget, oid: str) -> str:
        """
        SNMP GET for one scalar OID.

        Returns:
            The raw value in ``TYPE: value`` notation.

        Raises:
            SnmpTimeoutError: if request times out.
            SnmpNoSuchObjectError: if the agent has no value for the OID.
            TransportError: on other SNMP errors.
        """
        return asyncio.run(self.aget(target, oid))

    def walk(self, target: SnmpTarget, oid: str) -> list[tuple[str, str]]:
        """
        Full SNMP walk of a subtree using GETBULK.

        Returns:
            List of (oid_str, raw_value) tuples within the subtree, in the
            order the agent returned them.

        Raises:
            SnmpTimeoutError: if any GETBULK (or the whole walk) times out.
            TransportError: on other errors.
        """
        return asyncio.run(self.awalk(target, oid))

    # ── Async implementation ────────────────────────────────────────

    async def _make_transport(self, target: SnmpTarget) -> Any:
        """Create UDP transport for target."""
        from pysnmp.hlapi.v3arch.asyncio import UdpTransportTarget

        return await UdpTransportTarget.create(
            (target.host, target.port),
            timeout=target.timeout_seconds,
            retries=target.retries,
        )

    @staticmethod
    def _raise_for_indication(error_indication: Any, what: str) -> None:
        err_str = str(error_indication)
        if "timeout" in err_str.lower():
            raise SnmpTimeoutError(f"SNMP {what} timeout: {err_str}")
        raise TransportError(f"SNMP {what} error: {err_str}")

    async def aget(self, target: SnmpTarget, oid: str) -> str:
        """Coroutine behind :meth:`get`."""
        from pysnmp.hlapi.v3arch.asyncio import (
            CommunityData,
            ContextData,
            ObjectIdentity,
            ObjectType,
            SnmpEngine as PySnmpEngine,
            get_cmd,
        )

        engine = PySnmpEngine()
        try:
            transport = await self._make_transport(target)
            error_indication, error_status, error_index, var_binds = await get_cmd(
                engine,
                CommunityData(target.community, mpModel=1),
                transport,
                ContextData(),
                ObjectType(ObjectIdentity(oid.strip("."))),
            )
        finally:
            engine.close_dispatcher()

        if error_indication:
            self._raise_for_indication(error_indication, f"GET {target.host} {oid}")

        if error_status:
            raise TransportError(
                f"SNMP GET error status: {error_status.prettyPrint()} "
                f"at {var_binds[int(error_index) - 1][0] if error_index else '?'}"
            )

        if not var_binds:
            raise SnmpNoSuchObjectError(f"SNMP GET {target.host}: empty response for {oid}")

        val = var_binds[0][1]
        if val.__class__.__name__ in _END_OF_TREE:
            raise SnmpNoSuchObjectError(
                f"SNMP GET {target.host}: {val.__class__.__name__} for {oid}"
            )

        raw = render_value(val)
        logger.debug("GET %s %s -> %s", target.host, oid, raw)
        return raw

    async def awalk(self, target: SnmpTarget, oid: str) -> list[tuple[str, str]]:
        """Coroutine behind :meth:`walk`, bounded by ``walk_timeout``."""
        try:
            return await asyncio.wait_for(
                self._walk_impl(target, oid),
                timeout=self._config.walk_timeout,
            )
        except asyncio.TimeoutError as e:
            raise SnmpTimeoutError(
                f"SNMP WALK {target.host} {oid}: exceeded {self._config.walk_timeout}s"
            ) from e

    async def _walk_impl(self, target: SnmpTarget, oid: str) -> list[tuple[str, str]]:
        """Internal walk implementation."""
        from pysnmp.hlapi.v3arch.asyncio import (
            CommunityData,
            ContextData,
            ObjectIdentity,
            ObjectType,
            SnmpEngine as PySnmpEngine,
            bulk_cmd,
        )

        prefix = oid.strip(".")
        results: list[tuple[str, str]] = []
        community = CommunityData(target.community, mpModel=1)
        context = ContextData()
        current_oid = prefix

        engine = PySnmpEngine()
        try:
            transport = await self._make_transport(target)
            while True:
                error_indication, error_status, error_index, var_binds = await bulk_cmd(
                    engine,
                    community,
                    transport,
                    context,
                    0,  # non-repeaters
                    self._config.max_repetitions,
                    ObjectType(ObjectIdentity(current_oid)),
                )

                if error_indication:
                    self._raise_for_indication(
                        error_indication, f"WALK {target.host} prefix={prefix}",
                    )

                if error_status:
                    raise TransportError(
                        f"SNMP WALK error status: {error_status.prettyPrint()}"
                    )

                if not var_binds:
                    break

                out_of_scope = False
                for var_bind in var_binds:
                    oid_str = str(var_bind[0])
                    val = var_bind[1]

                    # Walked past our subtree
                    if not oid_str.startswith(prefix + "."):
                        out_of_scope = True
                        break

                    if val.__class__.__name__ in _END_OF_TREE:
                        out_of_scope = True
                        break

                    results.append((self.format_oid(oid_str), render_value(val)))
                    current_oid = oid_str

                if out_of_scope:
                    break
        finally:
            engine.close_dispatcher()

        logger.debug(
            "WALK %s %s: %d entries", target.host, prefix, len(results),
        )
        return results
