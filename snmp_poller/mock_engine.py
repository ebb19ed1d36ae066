"""
Mock SNMP Engine.

Drop-in replacement for SnmpEngine that replays a recorded net-snmp
``snmpwalk -On`` dump without sending any UDP packets. Used when
SNMP_MOCK=true, and by the tests.

Dump format, one varbind per line::

    .1.3.6.1.2.1.1.5.0 = STRING: "core-sw1"
    .1.3.6.1.2.1.2.2.1.8.1 = INTEGER: up(1)

Lines without ``=`` continue the previous (multi-line STRING) value.
Values like ``No Such Object available on this agent`` are skipped.
"""
from __future__ import annotations

import logging
from pathlib import Path

from snmp_poller.core.enums import OidOutputFormat
from snmp_poller.engine import SnmpNoSuchObjectError, SnmpTarget

logger = logging.getLogger(__name__)

_NO_VALUE_MARKERS = (
    "No Such Object",
    "No Such Instance",
    "No more variables left",
)


def _oid_key(oid: str) -> tuple[int, ...]:
    return tuple(int(part) for part in oid.strip(".").split("."))


def parse_walk_dump(text: str) -> dict[str, str]:
    """Parse snmpwalk output into ``{dotted_oid: raw_value}``."""
    records: dict[str, str] = {}
    last_oid: str | None = None

    for line in text.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        oid, sep, raw = line.partition(" = ")
        if not sep:
            # Continuation of a multi-line STRING value
            if last_oid is not None:
                records[last_oid] += "\n" + line
            continue

        oid = oid.strip().strip(".")
        raw = raw.strip()
        if any(marker in raw for marker in _NO_VALUE_MARKERS):
            last_oid = None
            continue

        try:
            _oid_key(oid)
        except ValueError:
            logger.warning("Skipping non-numeric OID in walk dump: %s", oid)
            last_oid = None
            continue

        # net-snmp prints an empty string as a bare ""
        if raw == '""':
            raw = 'STRING: ""'
        records[oid] = raw
        last_oid = oid

    return records


class MockSnmpEngine:
    """
    Mock SNMP engine — same interface as SnmpEngine.

    Every target gets the same recorded data; host and community are
    only logged.
    """

    def __init__(
        self,
        records: dict[str, str],
        oid_output_format: OidOutputFormat = OidOutputFormat.NUMERIC,
    ) -> None:
        self._records = {
            oid.strip("."): raw
            for oid, raw in sorted(records.items(), key=lambda item: _oid_key(item[0]))
        }
        self._oid_output_format = oid_output_format
        logger.info(
            "MockSnmpEngine initialized with %d OIDs (no real SNMP traffic)",
            len(self._records),
        )

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        oid_output_format: OidOutputFormat = OidOutputFormat.NUMERIC,
    ) -> MockSnmpEngine:
        """Load an snmpwalk dump from disk."""
        text = Path(path).read_text(encoding="utf-8")
        return cls(parse_walk_dump(text), oid_output_format=oid_output_format)

    def __len__(self) -> int:
        return len(self._records)

    def format_oid(self, oid: str) -> str:
        return self._oid_output_format.render(oid)

    def get(self, target: SnmpTarget, oid: str) -> str:
        """Mock SNMP GET — exact OID match only."""
        try:
            raw = self._records[oid.strip(".")]
        except KeyError:
            raise SnmpNoSuchObjectError(
                f"SNMP GET {target.host}: NoSuchObject for {oid}"
            ) from None
        logger.debug("mock GET %s %s -> %s", target.host, oid, raw)
        return raw

    def walk(self, target: SnmpTarget, oid: str) -> list[tuple[str, str]]:
        """Mock SNMP WALK — every recorded OID strictly below ``oid``, in OID order."""
        prefix = oid.strip(".") + "."
        results = [
            (self.format_oid(record_oid), raw)
            for record_oid, raw in self._records.items()
            if record_oid.startswith(prefix)
        ]
        logger.debug("mock WALK %s %s: %d entries", target.host, oid, len(results))
        return results
