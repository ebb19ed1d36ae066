"""Root conftest — shared fixtures for all tests."""
from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Keep a developer's .env / shell from leaking into Settings()
for _var in ("SNMP_MOCK", "SNMP_MOCK_FILE", "SNMP_HOST", "SNMP_COMMUNITY"):
    os.environ.pop(_var, None)

from snmp_poller.core.enums import OidOutputFormat  # noqa: E402
from snmp_poller.engine import SnmpEngine  # noqa: E402
from snmp_poller.mock_engine import MockSnmpEngine  # noqa: E402
from snmp_poller.session import SnmpSession  # noqa: E402

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def walk_file() -> Path:
    """Path to the recorded access switch snmpwalk dump."""
    return DATA_DIR / "switch.snmpwalk"


@pytest.fixture
def mock_engine(walk_file: Path) -> MockSnmpEngine:
    return MockSnmpEngine.from_file(walk_file)


@pytest.fixture
def mock_session(mock_engine: MockSnmpEngine) -> SnmpSession:
    """Session replaying the recorded switch."""
    return SnmpSession("10.1.1.1", "public", engine=mock_engine)


@pytest.fixture
def engine_mock() -> MagicMock:
    """Transport double with SnmpEngine's interface and numeric OID output."""
    engine = MagicMock(spec=SnmpEngine)
    engine.format_oid.side_effect = OidOutputFormat.NUMERIC.render
    return engine


@pytest.fixture
def session(engine_mock: MagicMock) -> SnmpSession:
    return SnmpSession("10.0.0.1", "public", engine=engine_mock)
