"""
SNMP Session — typed GET/WALK queries with a per-session result cache.

A session owns one target configuration (host, community, timeout,
retries) and one result cache keyed by the requested OID:

- get()          — single value
- walk1d()       — first-degree indexed table, keyed by the last OID segment
- sub_oid_walk() — table keyed by the OID segment at a given position
- real_walk()    — unparsed (oid, raw value) pairs, not cached

快取規則：
- 變更 host 或 community 會清空整個快取（新的快取週期）
- disable_cache() 只停用查詢快取；查詢結果仍會寫入快取
- 查詢失敗時不會寫入快取
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from snmp_poller.engine import (
    IndexOutOfRangeError,
    NonUniformTreeError,
    SnmpEngine,
    SnmpEngineConfig,
    SnmpTarget,
)
from snmp_poller.values import TypedValue, parse_value

if TYPE_CHECKING:
    from snmp_poller.core.config import Settings
    from snmp_poller.mibs.base import BaseMib

logger = logging.getLogger(__name__)

WalkResult = TypedValue | dict[str, TypedValue]


def _copy(value: WalkResult) -> WalkResult:
    # Callers get their own table; the cached one stays untouched.
    return dict(value) if isinstance(value, dict) else value


class Transport(Protocol):
    """What a session needs from its transport (SnmpEngine, MockSnmpEngine)."""

    def get(self, target: SnmpTarget, oid: str) -> str: ...

    def walk(self, target: SnmpTarget, oid: str) -> list[tuple[str, str]]: ...

    def format_oid(self, oid: str) -> str: ...


class SnmpSession:
    """
    SNMP v2c query session against one agent.

    Setters return the session so configuration can be chained::

        session = SnmpSession().set_host("10.0.0.1").set_community("private")
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        community: str = "public",
        *,
        engine: Transport | None = None,
        port: int = 161,
        timeout: int = 1_000_000,
        retries: int = 5,
    ) -> None:
        self._engine: Transport = engine if engine is not None else SnmpEngine()
        self._host = host
        self._community = community
        self._port = port
        self._timeout = timeout
        self._retries = retries
        self._cache_enabled = True
        self._result_cache: dict[str, WalkResult] = {}
        self._last_result: str | list[tuple[str, str]] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> SnmpSession:
        """Build a session (and its transport) from poller settings."""
        if settings.snmp_mock:
            from snmp_poller.mock_engine import MockSnmpEngine

            engine: Transport = MockSnmpEngine.from_file(
                settings.snmp_mock_file,
                oid_output_format=settings.snmp_oid_output_format,
            )
            logger.info("SNMP session using MOCK engine (%s)", settings.snmp_mock_file)
        else:
            engine = SnmpEngine(
                SnmpEngineConfig(
                    max_repetitions=settings.snmp_max_repetitions,
                    walk_timeout=settings.snmp_walk_timeout,
                    oid_output_format=settings.snmp_oid_output_format,
                )
            )
        return cls(
            settings.snmp_host,
            settings.snmp_community,
            engine=engine,
            port=settings.snmp_port,
            timeout=settings.snmp_timeout_us,
            retries=settings.snmp_retries,
        )

    def __repr__(self) -> str:
        return f"<SnmpSession {self._host}:{self._port} cached={len(self._result_cache)}>"

    # ── Configuration ───────────────────────────────────────────────

    @property
    def engine(self) -> Transport:
        return self._engine

    @property
    def host(self) -> str:
        return self._host

    @host.setter
    def host(self, value: str) -> None:
        self._host = value
        self.clear_cache()

    @property
    def community(self) -> str:
        return self._community

    @community.setter
    def community(self, value: str) -> None:
        self._community = value
        self.clear_cache()

    @property
    def port(self) -> int:
        return self._port

    @port.setter
    def port(self, value: int) -> None:
        self._port = value

    @property
    def timeout(self) -> int:
        """Per-request timeout in microseconds."""
        return self._timeout

    @timeout.setter
    def timeout(self, value: int) -> None:
        self._timeout = value

    @property
    def retries(self) -> int:
        return self._retries

    @retries.setter
    def retries(self, value: int) -> None:
        self._retries = value

    def set_host(self, host: str) -> SnmpSession:
        self.host = host
        return self

    def set_community(self, community: str) -> SnmpSession:
        self.community = community
        return self

    def set_port(self, port: int) -> SnmpSession:
        self.port = port
        return self

    def set_timeout(self, timeout: int) -> SnmpSession:
        self.timeout = timeout
        return self

    def set_retries(self, retries: int) -> SnmpSession:
        self.retries = retries
        return self

    @property
    def target(self) -> SnmpTarget:
        """Transport parameters for the next request."""
        return SnmpTarget(
            host=self._host,
            community=self._community,
            port=self._port,
            timeout=self._timeout,
            retries=self._retries,
        )

    # ── Cache ───────────────────────────────────────────────────────

    def enable_cache(self) -> SnmpSession:
        self._cache_enabled = True
        return self

    def disable_cache(self) -> SnmpSession:
        """Force transport queries; results are still stored in the cache."""
        self._cache_enabled = False
        return self

    def is_cache_enabled(self) -> bool:
        return self._cache_enabled

    def clear_cache(self) -> None:
        """Drop every cached result and the last raw result."""
        self._result_cache = {}
        self._last_result = None

    @property
    def result_cache(self) -> dict[str, WalkResult]:
        """Snapshot of the cached results, keyed by requested OID."""
        return {oid: _copy(value) for oid, value in self._result_cache.items()}

    @property
    def last_result(self) -> str | list[tuple[str, str]] | None:
        """The unaltered transport output of the last query."""
        return self._last_result

    def _cached(self, oid: str) -> tuple[bool, Any]:
        if self._cache_enabled and oid in self._result_cache:
            logger.debug("cache hit for %s on %s", oid, self._host)
            return True, _copy(self._result_cache[oid])
        return False, None

    # ── Queries ─────────────────────────────────────────────────────

    @staticmethod
    def parse_value(raw: str) -> TypedValue:
        return parse_value(raw)

    def real_walk(self, oid: str) -> list[tuple[str, str]]:
        """Walk ``oid`` and return the raw (oid, value) pairs untouched."""
        self._last_result = self._engine.walk(self.target, oid)
        return self._last_result

    def get(self, oid: str) -> TypedValue:
        """Get a single SNMP value."""
        hit, value = self._cached(oid)
        if hit:
            return value

        self._last_result = self._engine.get(self.target, oid)
        result = parse_value(self._last_result)
        self._result_cache[oid] = result
        return result

    def walk1d(self, oid: str) -> dict[str, TypedValue]:
        """
        Get indexed SNMP values (first degree).

        Walks the tree below ``oid`` and returns ``{last_segment: value}``.
        For example walking ``.1.0.8802.1.1.2.1.3.7.1.4``::

            .1.0.8802.1.1.2.1.3.7.1.4.1 = STRING: "GigabitEthernet1/0/1"
            .1.0.8802.1.1.2.1.3.7.1.4.2 = STRING: "GigabitEthernet1/0/2"

        yields ``{"1": "GigabitEthernet1/0/1", "2": "GigabitEthernet1/0/2"}``.

        Raises:
            NonUniformTreeError: entries do not all share one parent OID.
        """
        hit, value = self._cached(oid)
        if hit:
            return value

        self._last_result = self._engine.walk(self.target, oid)

        result: dict[str, TypedValue] = {}
        oid_prefix: str | None = None
        for result_oid, raw in self._last_result:
            prefix, _, index = result_oid.rpartition(".")
            if oid_prefix is None:
                oid_prefix = prefix
            elif prefix != oid_prefix:
                raise NonUniformTreeError(oid, oid_prefix, prefix)
            result[index] = parse_value(raw)

        self._result_cache[oid] = result
        return dict(result)

    def sub_oid_walk(self, oid: str, position: int) -> dict[str, TypedValue]:
        """
        Get indexed SNMP values keyed by the OID segment at ``position``.

        Positions count the segments of the returned OID string, split on
        ``"."`` and starting at zero. For example with
        ``sub_oid_walk(".1.3.6.1.4.1.9.9.23.1.2.1.1.9", 15)``::

            .1.3.6.1.4.1.9.9.23.1.2.1.1.9.10101.5 = Hex-STRING: 00 00 00 01
            .1.3.6.1.4.1.9.9.23.1.2.1.1.9.10105.2 = Hex-STRING: 00 00 00 01

        yields ``{"10101": "00000001", "10105": "00000001"}``.

        Raises:
            IndexOutOfRangeError: ``position`` is past the end of a result OID.
        """
        hit, value = self._cached(oid)
        if hit:
            return value

        self._last_result = self._engine.walk(self.target, oid)

        result: dict[str, TypedValue] = {}
        for result_oid, raw in self._last_result:
            segments = result_oid.split(".")
            if not 0 <= position < len(segments):
                raise IndexOutOfRangeError(result_oid, position)
            key = segments[position]
            # Last write wins; distinct rows sharing this position collapse.
            if key in result:
                logger.debug(
                    "sub_oid_walk %s: key %s at position %d overwritten by %s",
                    oid, key, position, result_oid,
                )
            result[key] = parse_value(raw)

        self._result_cache[oid] = result
        return dict(result)

    # ── MIB extensions ──────────────────────────────────────────────

    def get_extension(self, name: str) -> BaseMib:
        """Instantiate the MIB extension registered as ``name`` for this session."""
        from snmp_poller.mibs import get_mib_factory

        return get_mib_factory(name)(self)
