"""
Run a full audit: configuration first, then the lease log.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict

from .aggregator import UtilizationAggregator
from .config import RuntimeConfig
from .dhcpd_conf import Subnet, parse_dhcpd_conf
from .errors import InputUnavailableError
from .leases import ScanStats, scan_leases

log = logging.getLogger(__name__)


@dataclass
class AuditResult:
    subnets: Dict[str, Subnet]
    stats: ScanStats


def check_inputs(cfg: RuntimeConfig) -> None:
    for label, path in (("dhcpd config", cfg.dhcpd_conf), ("lease file", cfg.leases_file)):
        if not os.path.isfile(path):
            raise InputUnavailableError(f"{label} not found: {path}")
        if not os.access(path, os.R_OK):
            raise InputUnavailableError(f"{label} is not readable: {path}")


def run_audit(cfg: RuntimeConfig) -> AuditResult:
    check_inputs(cfg)

    try:
        with open(cfg.dhcpd_conf, "r", encoding="utf-8", errors="replace") as handle:
            subnets = parse_dhcpd_conf(handle, source=cfg.dhcpd_conf)
    except OSError as exc:
        raise InputUnavailableError(f"Cannot read dhcpd config {cfg.dhcpd_conf}: {exc}") from exc

    aggregator = UtilizationAggregator(subnets)
    log.info(
        "Evaluating leases at %s (never policy: %s, malformed policy: %s)",
        cfg.now.isoformat() if cfg.now else "now",
        cfg.never_policy,
        cfg.malformed_policy,
    )
    try:
        with open(cfg.leases_file, "r", encoding="utf-8", errors="replace") as handle:
            stats = scan_leases(
                handle,
                aggregator,
                now=cfg.now,
                never_policy=cfg.never_policy,
                malformed_policy=cfg.malformed_policy,
                source=cfg.leases_file,
            )
    except OSError as exc:
        raise InputUnavailableError(f"Cannot read lease file {cfg.leases_file}: {exc}") from exc

    return AuditResult(subnets=aggregator.subnets, stats=stats)
