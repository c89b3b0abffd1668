"""CLI entry point for hostident.

Resolves the given hosts and writes their identity records to stdout as a
JSON array. Diagnostics go to stderr.

Exit codes: ``0`` when every host produced a record, ``1`` when at least one
host failed, ``2`` on configuration or usage errors.

Examples:
    ```bash
    hostident SRV1 10.0.0.7 "db01\\SQLEXPRESS"
    hostident --turbo --file hosts.txt
    hostident --config config/resolver.yaml --username "CORP\\svc" SRV1
    python -m hostident --strict --log-level DEBUG SRV1
    ```
"""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from hostident.core.exceptions import ConfigurationError
from hostident.core.logger import Logger, StructuredFormatter
from hostident.core.yaml import load_yaml
from hostident.resolver import NetworkNameResolver, ResolverConfig


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="hostident",
        description="Resolve hosts into reconciled network identities",
    )

    parser.add_argument(
        "hosts",
        nargs="*",
        help="Host descriptors (names, FQDNs, IPs, host\\instance, host,port)",
    )

    parser.add_argument(
        "--file",
        type=Path,
        help="Read host descriptors from a file, one per line (# comments allowed)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Resolver config path (YAML)",
    )

    parser.add_argument(
        "--turbo",
        action="store_true",
        help="DNS only: skip reachability and remote identity",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail a host on any degradation instead of logging a warning",
    )

    parser.add_argument(
        "--username",
        help="User for remote identity queries (password from --password-env)",
    )

    parser.add_argument(
        "--password-env",
        help="Environment variable holding the remote password (default: HOSTIDENT_PASSWORD)",
    )

    parser.add_argument(
        "--workers",
        type=int,
        help="Hosts resolved in parallel (default: 1)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )

    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit log lines as JSON objects",
    )

    args = parser.parse_args(argv)
    if not args.hosts and args.file is None:
        parser.error("no hosts given (use positional arguments or --file)")
    return args


def setup_logging(level: str, *, json_output: bool = False) -> None:
    """Configure the root logger on stderr.

    Installs a ``StructuredFormatter`` so that ``Logger`` output and plain
    ``logging.getLogger()`` calls in the utils layer share one format. In
    JSON mode messages are already serialized and printed as-is.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s") if json_output else StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def read_hosts(hosts: Sequence[str], file: Path | None) -> list[str]:
    """Collect host descriptors from the command line and an optional file.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    descriptors = list(hosts)
    if file is not None:
        with file.open(encoding="utf-8") as f:
            for line in f:
                entry = line.strip()
                if not entry or entry.startswith("#"):
                    continue
                descriptors.append(entry)
    return descriptors


def build_config(args: argparse.Namespace) -> ResolverConfig:
    """Load the YAML config (if any) and apply command-line overrides.

    Raises:
        ConfigurationError: If the merged configuration is invalid.
        FileNotFoundError: If ``--config`` points to a missing file.
    """
    data: dict[str, Any] = load_yaml(args.config) if args.config else {}

    if args.turbo:
        data["turbo"] = True
    if args.strict:
        data["strict"] = True
    if args.workers is not None:
        data["max_workers"] = args.workers

    remote = data.setdefault("remote", {})
    if not isinstance(remote, dict):
        raise ConfigurationError("'remote' must be a mapping")
    if args.username:
        remote["username"] = args.username
    if args.password_env:
        remote["password_env"] = args.password_env

    return ResolverConfig.from_dict(data)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point: parse args, resolve every host, print the records."""
    args = parse_args(argv)
    setup_logging(args.log_level, json_output=args.log_json)
    cli_logger = Logger("cli", json_output=args.log_json)

    try:
        config = build_config(args)
        descriptors = read_hosts(args.hosts, args.file)
    except (ConfigurationError, OSError, UnicodeDecodeError) as e:
        cli_logger.error("config_failed", error=str(e))
        return 2

    resolver = NetworkNameResolver(
        config, logger=Logger(NetworkNameResolver.SERVICE_NAME, json_output=args.log_json)
    )

    try:
        results = resolver.resolve_many(descriptors)
    except KeyboardInterrupt:
        cli_logger.info("interrupted")
        return 130

    records = [result.record.to_dict() for result in results if result.record is not None]
    json.dump(records, sys.stdout, indent=2)
    sys.stdout.write("\n")

    failed = [result.input_name for result in results if not result.ok]
    if failed:
        cli_logger.warning("hosts_failed", count=len(failed), hosts=",".join(failed))
        return 1
    return 0


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
