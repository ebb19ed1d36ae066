"""Unit tests for SnmpEngine (pysnmp calls patched, no UDP traffic)."""
from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pysnmp.proto import rfc1902, rfc1905

from snmp_poller.core.enums import OidOutputFormat
from snmp_poller.engine import (
    IndexOutOfRangeError,
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
    render_value,
)

_API = "pysnmp.hlapi.v3arch.asyncio"


def _vb(oid: str, value):
    return (rfc1902.ObjectName(oid), value)


@pytest.fixture
def target():
    return SnmpTarget(host="10.0.0.1", community="public")


@pytest.fixture
def pysnmp_api():
    """Patch the pysnmp entry points SnmpEngine imports at call time."""
    with patch(f"{_API}.SnmpEngine") as engine_cls, \
            patch(f"{_API}.UdpTransportTarget.create", new=AsyncMock(return_value=MagicMock())) as create, \
            patch(f"{_API}.get_cmd", new_callable=AsyncMock) as get_cmd, \
            patch(f"{_API}.bulk_cmd", new_callable=AsyncMock) as bulk_cmd:
        yield SimpleNamespace(
            engine_cls=engine_cls,
            create=create,
            get_cmd=get_cmd,
            bulk_cmd=bulk_cmd,
        )


# ── render_value ─────────────────────────────────────────────────


class TestRenderValue:
    def test_printable_octet_string(self):
        assert render_value(rfc1902.OctetString(b"core-sw1")) == 'STRING: "core-sw1"'

    def test_binary_octet_string(self):
        value = rfc1902.OctetString(hexValue="001a2b3c4d5e")
        assert render_value(value) == "Hex-STRING: 00 1A 2B 3C 4D 5E"

    def test_integer(self):
        assert render_value(rfc1902.Integer32(6)) == "INTEGER: 6"

    def test_unsigned_types(self):
        assert render_value(rfc1902.Gauge32(1000)) == "Gauge32: 1000"
        assert render_value(rfc1902.Unsigned32(7)) == "Gauge32: 7"
        assert render_value(rfc1902.Counter32(42)) == "Counter32: 42"
        assert render_value(rfc1902.Counter64(2**40)) == f"Counter64: {2**40}"

    def test_timeticks(self):
        assert render_value(rfc1902.TimeTicks(123456789)) == (
            "Timeticks: (123456789) 14 days, 6:56:07.89"
        )

    def test_ip_address(self):
        assert render_value(rfc1902.IpAddress("10.0.0.1")) == "IpAddress: 10.0.0.1"

    def test_object_identifier(self):
        assert render_value(rfc1902.ObjectIdentifier("1.3.6.1.4.1.9")) == "OID: .1.3.6.1.4.1.9"

    def test_unknown_class_keeps_class_name(self):
        assert render_value(rfc1902.Opaque(b"\x9f\x78")).startswith("Opaque: ")


# ── Configuration ────────────────────────────────────────────────


class TestConfiguration:
    def test_defaults(self):
        config = SnmpEngine().config
        assert config.max_repetitions == 25
        assert config.oid_output_format is OidOutputFormat.NUMERIC

    @pytest.mark.parametrize(
        "fmt, expected",
        [
            (OidOutputFormat.NUMERIC, ".1.3.6.1"),
            (OidOutputFormat.DOTTED, "1.3.6.1"),
        ],
    )
    def test_format_oid(self, fmt, expected):
        engine = SnmpEngine(SnmpEngineConfig(oid_output_format=fmt))
        assert engine.format_oid("1.3.6.1") == expected
        assert engine.format_oid(".1.3.6.1") == expected

    def test_target_timeout_seconds(self):
        assert SnmpTarget("h", "c", timeout=2_500_000).timeout_seconds == 2.5


class TestErrorHierarchy:
    def test_transport_errors(self):
        assert issubclass(SnmpTimeoutError, TransportError)
        assert issubclass(SnmpNoSuchObjectError, TransportError)
        assert issubclass(TransportError, SnmpError)

    def test_shaping_errors(self):
        assert issubclass(UnsupportedTypeError, SnmpError)
        assert issubclass(NonUniformTreeError, SnmpError)
        assert issubclass(IndexOutOfRangeError, IndexError)
        assert issubclass(UnknownExtensionError, KeyError)

    def test_error_attributes(self):
        err = NonUniformTreeError(".1.2", ".1.2", ".1.3")
        assert err.expected == ".1.2"
        assert err.found == ".1.3"
        assert IndexOutOfRangeError(".1.2", 9).position == 9
        assert UnsupportedTypeError("BITS").type_name == "BITS"


# ── GET ──────────────────────────────────────────────────────────


class TestGet:
    def test_returns_rendered_value(self, pysnmp_api, target):
        pysnmp_api.get_cmd.return_value = (
            None, 0, 0, [_vb("1.3.6.1.2.1.1.5.0", rfc1902.OctetString(b"sw1"))],
        )

        assert SnmpEngine().get(target, ".1.3.6.1.2.1.1.5.0") == 'STRING: "sw1"'
        pysnmp_api.create.assert_awaited_once_with(
            ("10.0.0.1", 161), timeout=1.0, retries=5,
        )
        pysnmp_api.engine_cls.return_value.close_dispatcher.assert_called_once()

    def test_timeout(self, pysnmp_api, target):
        pysnmp_api.get_cmd.return_value = (
            "No SNMP response received before timeout", 0, 0, [],
        )

        with pytest.raises(SnmpTimeoutError):
            SnmpEngine().get(target, ".1.3.6.1.2.1.1.5.0")
        pysnmp_api.engine_cls.return_value.close_dispatcher.assert_called_once()

    def test_other_indication(self, pysnmp_api, target):
        pysnmp_api.get_cmd.return_value = ("Unknown transport domain", 0, 0, [])

        with pytest.raises(TransportError) as exc_info:
            SnmpEngine().get(target, ".1.3.6.1.2.1.1.5.0")
        assert not isinstance(exc_info.value, SnmpTimeoutError)

    def test_error_status(self, pysnmp_api, target):
        pysnmp_api.get_cmd.return_value = (
            None,
            rfc1902.Integer32(2),
            1,
            [_vb("1.3.6.1.2.1.1.5.0", rfc1902.OctetString(b""))],
        )

        with pytest.raises(TransportError, match="error status"):
            SnmpEngine().get(target, ".1.3.6.1.2.1.1.5.0")

    def test_no_such_instance(self, pysnmp_api, target):
        pysnmp_api.get_cmd.return_value = (
            None, 0, 0, [_vb("1.3.6.1.2.1.1.5.1", rfc1905.noSuchInstance)],
        )

        with pytest.raises(SnmpNoSuchObjectError):
            SnmpEngine().get(target, ".1.3.6.1.2.1.1.5.1")

    def test_empty_response(self, pysnmp_api, target):
        pysnmp_api.get_cmd.return_value = (None, 0, 0, [])

        with pytest.raises(SnmpNoSuchObjectError):
            SnmpEngine().get(target, ".1.3.6.1.2.1.1.5.0")

    @pytest.mark.asyncio
    async def test_aget_inside_event_loop(self, pysnmp_api, target):
        pysnmp_api.get_cmd.return_value = (
            None, 0, 0, [_vb("1.3.6.1.2.1.1.7.0", rfc1902.Integer32(6))],
        )

        assert await SnmpEngine().aget(target, "1.3.6.1.2.1.1.7.0") == "INTEGER: 6"


# ── WALK ─────────────────────────────────────────────────────────


class TestWalk:
    def test_collects_subtree_across_bulk_requests(self, pysnmp_api, target):
        pysnmp_api.bulk_cmd.side_effect = [
            (None, 0, 0, [
                _vb("1.3.6.1.2.1.2.2.1.2.1", rfc1902.OctetString(b"Gi1/0/1")),
                _vb("1.3.6.1.2.1.2.2.1.2.2", rfc1902.OctetString(b"Gi1/0/2")),
            ]),
            (None, 0, 0, [
                _vb("1.3.6.1.2.1.2.2.1.2.49", rfc1902.OctetString(b"Te1/1/1")),
                _vb("1.3.6.1.2.1.2.2.1.3.1", rfc1902.Integer32(6)),
            ]),
        ]

        result = SnmpEngine().walk(target, ".1.3.6.1.2.1.2.2.1.2")

        assert result == [
            (".1.3.6.1.2.1.2.2.1.2.1", 'STRING: "Gi1/0/1"'),
            (".1.3.6.1.2.1.2.2.1.2.2", 'STRING: "Gi1/0/2"'),
            (".1.3.6.1.2.1.2.2.1.2.49", 'STRING: "Te1/1/1"'),
        ]
        assert pysnmp_api.bulk_cmd.await_count == 2
        pysnmp_api.engine_cls.return_value.close_dispatcher.assert_called_once()

    def test_stops_at_end_of_mib_view(self, pysnmp_api, target):
        pysnmp_api.bulk_cmd.return_value = (None, 0, 0, [
            _vb("1.3.6.1.2.1.1.5.0", rfc1902.OctetString(b"sw1")),
            _vb("1.3.6.1.2.1.1.6.0", rfc1905.endOfMibView),
        ])

        result = SnmpEngine().walk(target, "1.3.6.1.2.1.1")

        assert result == [(".1.3.6.1.2.1.1.5.0", 'STRING: "sw1"')]

    def test_empty_subtree(self, pysnmp_api, target):
        pysnmp_api.bulk_cmd.return_value = (None, 0, 0, [])

        assert SnmpEngine().walk(target, ".1.3.6.1.2.1.99") == []

    def test_dotted_output(self, pysnmp_api, target):
        pysnmp_api.bulk_cmd.return_value = (None, 0, 0, [
            _vb("1.3.6.1.2.1.1.5.0", rfc1902.OctetString(b"sw1")),
            _vb("1.3.6.1.2.1.2.1.0", rfc1902.Integer32(3)),
        ])
        engine = SnmpEngine(SnmpEngineConfig(oid_output_format=OidOutputFormat.DOTTED))

        assert engine.walk(target, "1.3.6.1.2.1.1") == [("1.3.6.1.2.1.1.5.0", 'STRING: "sw1"')]

    def test_request_timeout(self, pysnmp_api, target):
        pysnmp_api.bulk_cmd.return_value = (
            "No SNMP response received before timeout", 0, 0, [],
        )

        with pytest.raises(SnmpTimeoutError):
            SnmpEngine().walk(target, ".1.3.6.1.2.1.1")

    def test_whole_walk_timeout(self, pysnmp_api, target):
        async def _hang(*args, **kwargs):
            await asyncio.sleep(5)

        pysnmp_api.bulk_cmd.side_effect = _hang
        engine = SnmpEngine(SnmpEngineConfig(walk_timeout=0.05))

        with pytest.raises(SnmpTimeoutError, match="exceeded"):
            engine.walk(target, ".1.3.6.1.2.1.1")
