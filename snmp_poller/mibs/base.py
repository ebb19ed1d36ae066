"""
BaseMib — SNMP MIB extension 基底類別。

Each extension wraps the OIDs of one MIB and shapes session query
results into something friendlier (labels, booleans, joined tables).
Extensions hold a reference to the session; they never own it.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snmp_poller.session import SnmpSession


class BaseMib:
    """Base for all MIB extensions."""

    # Set by @register_mib
    mib_name: str = ""

    def __init__(self, session: SnmpSession) -> None:
        self._session = session

    @property
    def session(self) -> SnmpSession:
        return self._session

    def __repr__(self) -> str:
        return f"<{type(self).__name__} mib={self.mib_name!r} host={self._session.host}>"

    def index_position(self, table_oid: str, offset: int = 0) -> int:
        """
        sub_oid_walk() position of the ``offset``-th index component below
        ``table_oid``, counted in the transport's OID output format.
        """
        rendered = self._session.engine.format_oid(table_oid)
        return len(rendered.split(".")) + offset
