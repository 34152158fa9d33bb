"""
Command-line entrypoint for the pool utilization audit.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

import yaml

from .audit import run_audit
from .config import LOG_LEVELS, OUTPUT_FORMATS, build_runtime_config, load_config_file, merge_config
from .errors import AuditError, InputUnavailableError
from .lease_window import MALFORMED_POLICIES, NEVER_POLICIES
from .report import format_json, format_text

log = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    try:
        file_cfg: Dict[str, Any] = {}
        if args.config:
            file_cfg = load_config_file(args.config)
        cli_cfg = {k: v for k, v in vars(args).items() if k not in {"config"}}
        cfg = build_runtime_config(merge_config(file_cfg, cli_cfg))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        configure_logging(args.log_level or "INFO")
        log.error("Failed to load config: %s", exc)
        return 1

    configure_logging(cfg.log_level)

    try:
        result = run_audit(cfg)
    except InputUnavailableError as exc:
        log.error("%s", exc)
        return 1
    except AuditError as exc:
        log.error("Audit aborted: %s", exc)
        return 2

    if cfg.output_format == "json":
        print(format_json(result.subnets, result.stats))
    else:
        text = format_text(result.subnets)
        if text:
            print(text)
    return 0


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dhcp-pool-audit",
        description="Report per-subnet DHCP pool utilization from dhcpd.conf and dhcpd.leases",
    )
    parser.add_argument("--config", help="Optional YAML or JSON settings file")
    parser.add_argument("--dhcpd-conf", help="Path to dhcpd.conf (default: first standard location found)")
    parser.add_argument("--leases", dest="leases_file", help="Path to dhcpd.leases (default: first standard location found)")
    parser.add_argument(
        "--never",
        dest="never_policy",
        choices=list(NEVER_POLICIES),
        default=None,
        help="How to treat 'ends never' leases (default: active)",
    )
    parser.add_argument(
        "--malformed",
        dest="malformed_policy",
        choices=list(MALFORMED_POLICIES),
        default=None,
        help="Skip leases with unparseable timestamps or abort the audit (default: skip)",
    )
    parser.add_argument("--format", dest="output_format", choices=list(OUTPUT_FORMATS), default=None, help="Report format")
    parser.add_argument("--now", help="Evaluate leases at this ISO-8601 instant instead of the current time")
    parser.add_argument("--log-level", type=str.upper, choices=list(LOG_LEVELS), default=None, help="Log level (default: INFO)")

    parsed = parser.parse_args(argv)
    return parsed


if __name__ == "__main__":
    sys.exit(main())
