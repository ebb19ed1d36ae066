"""
SNMP value parsing.

Turns one raw transport value in net-snmp textual notation
(``STRING: "foo"``, ``INTEGER: up(1)``, ``Hex-STRING: 00 1A``, ...) into a
native ``str`` or ``int``, plus the small translation helpers MIB
extensions use on the results.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Mapping, TypeVar

from snmp_poller.core.enums import SnmpValueType, TruthValue
from snmp_poller.engine import InvalidValueError, UnsupportedTypeError

logger = logging.getLogger(__name__)

TypedValue = str | int

# PHP-ish is_numeric: optional sign, digits, optional fraction/exponent
_NUMERIC_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_TIMETICKS_RE = re.compile(r"^\((\d+)\)")

TRUTH_VALUES: dict[int, bool] = {
    TruthValue.TRUE: True,
    TruthValue.FALSE: False,
}

K = TypeVar("K")


def _to_int(value: str) -> int:
    """int() that also accepts the float forms net-snmp never sends but is_numeric allows."""
    try:
        return int(value)
    except ValueError:
        return int(float(value))


def _parse_integer(value: str) -> int:
    # Enumerated INTEGERs come back as label(code); keep the code only.
    if _NUMERIC_RE.match(value):
        return _to_int(value)
    return int(value[value.index("(") + 1:-1])


def _parse_string(value: str) -> str:
    # Inner quotes are not escaped on the wire, so only the outer pair goes.
    if value.startswith('"'):
        return value[1:-1]
    return value


def _parse_timeticks(value: str) -> int:
    m = _TIMETICKS_RE.match(value)
    if m:
        return int(m.group(1))
    return int(value)


_PARSERS = {
    SnmpValueType.STRING: _parse_string,
    SnmpValueType.INTEGER: _parse_integer,
    SnmpValueType.GAUGE32: int,
    SnmpValueType.HEX_STRING: lambda value: value.replace(" ", ""),
    SnmpValueType.COUNTER32: int,
    SnmpValueType.COUNTER64: int,
    SnmpValueType.TIMETICKS: _parse_timeticks,
    SnmpValueType.IP_ADDRESS: str,
    SnmpValueType.OID: str,
}


def parse_value(raw: str) -> TypedValue:
    """
    Parse the result of an SNMP query into a Python value.

    For example ``STRING: "blah"`` is parsed to ``'blah'`` and
    ``INTEGER: up(1)`` to ``1``.

    Raises:
        UnsupportedTypeError: the type tag is not one the parser knows.
        InvalidValueError: the tag is known but the value does not parse.
    """
    type_name, _, value = raw.partition(":")
    value = value.strip()

    try:
        parser = _PARSERS[SnmpValueType(type_name)]
    except ValueError:
        raise UnsupportedTypeError(type_name) from None

    try:
        return parser(value)
    except (ValueError, OverflowError) as e:
        raise InvalidValueError(type_name, value) from e


def translate(values: Any, translator: Mapping[Any, Any]) -> Any:
    """
    Translate a scalar, or every value of a mapping, through ``translator``.

    >>> translate({"1": 1, "2": 2}, {1: "up", 2: "down"})
    {'1': 'up', '2': 'down'}
    """
    if not isinstance(values, Mapping):
        return translator[values]
    return {k: translator[v] for k, v in values.items()}


def pp_truth_value(values: int | Mapping[K, int]) -> bool | dict[K, bool]:
    """Convert TruthValue codes (1 → True, 2 → False), element-wise for mappings."""
    return translate(values, TRUTH_VALUES)
