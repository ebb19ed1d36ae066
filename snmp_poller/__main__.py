#!/usr/bin/env python3
"""
Poll an SNMP agent from the command line and print the result as JSON.

Usage:
    python -m snmp_poller get .1.3.6.1.2.1.1.5.0
    python -m snmp_poller walk1d .1.3.6.1.2.1.31.1.1.1.1 --host 10.1.1.1
    python -m snmp_poller subwalk .1.3.6.1.4.1.9.9.23.1.2.1.1.6 15
    python -m snmp_poller realwalk .1.3.6.1.2.1.1
    python -m snmp_poller mib iface oper_states
    python -m snmp_poller --mock-file tests/data/switch.snmpwalk mib lldp neighbours

Defaults for --host / --community / --timeout / --retries / --port come
from Settings (SNMP_HOST, SNMP_COMMUNITY, ... or .env).
"""
from __future__ import annotations

import argparse
import inspect
import json
import logging
import sys
from typing import Any

from snmp_poller.core.config import get_settings
from snmp_poller.engine import SnmpError
from snmp_poller.session import SnmpSession

logger = logging.getLogger("snmp_poller")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="snmp-poller",
        description="SNMP v2c GET/WALK with typed, JSON output",
    )
    parser.add_argument("--host", default=settings.snmp_host, help="agent host (default: %(default)s)")
    parser.add_argument("--community", default=settings.snmp_community, help="v2c community")
    parser.add_argument("--port", type=int, default=settings.snmp_port, help="agent UDP port (default: %(default)s)")
    parser.add_argument("--timeout", type=int, default=settings.snmp_timeout_us, help="timeout in microseconds (default: %(default)s)")
    parser.add_argument("--retries", type=int, default=settings.snmp_retries, help="retry count (default: %(default)s)")
    parser.add_argument("--mock-file", default=None, help="replay this snmpwalk dump instead of polling")
    parser.add_argument("--debug", action="store_true", default=settings.app_debug, help="verbose logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p_get = sub.add_parser("get", help="single value")
    p_get.add_argument("oid")

    p_walk = sub.add_parser("walk1d", help="first-degree indexed walk")
    p_walk.add_argument("oid")

    p_sub = sub.add_parser("subwalk", help="walk keyed by the OID segment at POSITION")
    p_sub.add_argument("oid")
    p_sub.add_argument("position", type=int)

    p_real = sub.add_parser("realwalk", help="raw (oid, value) pairs")
    p_real.add_argument("oid")

    p_mib = sub.add_parser("mib", help="call a MIB extension method")
    p_mib.add_argument("name", help="extension name, e.g. iface")
    p_mib.add_argument("method", help="zero-argument method, e.g. names")

    return parser


def build_session(args: argparse.Namespace) -> SnmpSession:
    settings = get_settings()
    if args.mock_file:
        settings = settings.model_copy(
            update={"snmp_mock": True, "snmp_mock_file": args.mock_file},
        )
    session = SnmpSession.from_settings(settings)
    return (
        session.set_host(args.host)
        .set_community(args.community)
        .set_port(args.port)
        .set_timeout(args.timeout)
        .set_retries(args.retries)
    )


def _required_params(method: Any) -> list[str]:
    return [
        name
        for name, param in inspect.signature(method).parameters.items()
        if param.default is param.empty
        and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]


def run(args: argparse.Namespace, session: SnmpSession) -> Any:
    if args.command == "get":
        return session.get(args.oid)
    if args.command == "walk1d":
        return session.walk1d(args.oid)
    if args.command == "subwalk":
        return session.sub_oid_walk(args.oid, args.position)
    if args.command == "realwalk":
        return [list(pair) for pair in session.real_walk(args.oid)]

    extension = session.get_extension(args.name)
    method = getattr(extension, args.method, None)
    if method is None or args.method.startswith("_") or not callable(method):
        raise SystemExit(f"Error: {args.name} has no method {args.method!r}")
    required = _required_params(method)
    if required:
        raise SystemExit(
            f"Error: {args.name}.{args.method} needs arguments: {', '.join(required)}"
        )
    return method()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        session = build_session(args)
        result = run(args, session)
    except (SnmpError, OSError) as e:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
