"""
MIB extension registry.

Extensions are registered under a name and looked up through
``SnmpSession.get_extension(name)``::

    iface = session.get_extension("iface")
    iface.names()            # {"1": "GigabitEthernet1/0/1", ...}

Bundled extensions are imported lazily on the first lookup.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, TypeVar

from snmp_poller.engine import UnknownExtensionError

if TYPE_CHECKING:
    from snmp_poller.mibs.base import BaseMib
    from snmp_poller.session import SnmpSession

logger = logging.getLogger(__name__)

MibFactory = Callable[["SnmpSession"], "BaseMib"]
M = TypeVar("M", bound="type[BaseMib]")

MIB_REGISTRY: dict[str, MibFactory] = {}

_builtins_loaded = False


def register_mib(name: str) -> Callable[[M], M]:
    """Class decorator: register a BaseMib subclass under ``name`` (case-insensitive)."""

    def decorator(cls: M) -> M:
        key = name.lower()
        if key in MIB_REGISTRY and MIB_REGISTRY[key] is not cls:
            logger.warning("MIB extension %r re-registered by %s", name, cls.__name__)
        MIB_REGISTRY[key] = cls
        cls.mib_name = key
        return cls

    return decorator


def _load_builtin_mibs() -> None:
    """Import bundled extensions so their decorators run."""
    global _builtins_loaded
    if _builtins_loaded:
        return
    from snmp_poller.mibs import cisco_cdp, iface, lldp, system  # noqa: F401

    _builtins_loaded = True


def get_mib_factory(name: str) -> MibFactory:
    """Return the factory registered as ``name``.

    Raises:
        UnknownExtensionError: nothing is registered under that name.
    """
    _load_builtin_mibs()
    try:
        return MIB_REGISTRY[name.lower()]
    except KeyError:
        raise UnknownExtensionError(name) from None


def available_mibs() -> list[str]:
    """Names of every registered extension, sorted."""
    _load_builtin_mibs()
    return sorted(MIB_REGISTRY)


__all__ = [
    "MIB_REGISTRY",
    "MibFactory",
    "available_mibs",
    "get_mib_factory",
    "register_mib",
]
