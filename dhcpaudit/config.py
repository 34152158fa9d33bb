"""
Configuration loading and merging helpers.
"""

from __future__ import annotations

import json
import pathlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

import yaml

from .lease_window import MALFORMED_POLICIES, NEVER_POLICIES

DEFAULT_CONF_PATHS = (
    "/etc/dhcp/dhcpd.conf",
    "/etc/dhcpd.conf",
    "/usr/local/etc/dhcpd.conf",
)
DEFAULT_LEASE_PATHS = (
    "/var/lib/dhcp/dhcpd.leases",
    "/var/lib/dhcpd/dhcpd.leases",
    "/var/lib/dhcp/db/dhcpd.leases",
)
OUTPUT_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class RuntimeConfig:
    dhcpd_conf: str
    leases_file: str
    never_policy: str = "active"
    malformed_policy: str = "skip"
    output_format: str = "text"
    now: Optional[datetime] = None
    log_level: str = "INFO"
    extra: Dict[str, Any] = field(default_factory=dict)


def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load a JSON or YAML settings file.
    """
    config_path = pathlib.Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    text = config_path.read_text()
    if config_path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Config file must define a mapping at the top level")
    return data


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combine two config dictionaries, keeping override values when provided.
    """
    merged = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def build_runtime_config(data: Dict[str, Any]) -> RuntimeConfig:
    """
    Normalize dictionary input into a RuntimeConfig.
    """
    never_policy = str(data.get("never_policy", "active") or "active").lower()
    if never_policy not in NEVER_POLICIES:
        raise ValueError(f"Invalid never_policy: {never_policy} (must be one of {', '.join(NEVER_POLICIES)})")

    malformed_policy = str(data.get("malformed_policy", "skip") or "skip").lower()
    if malformed_policy not in MALFORMED_POLICIES:
        raise ValueError(
            f"Invalid malformed_policy: {malformed_policy} (must be one of {', '.join(MALFORMED_POLICIES)})"
        )

    output_format = str(data.get("output_format", "text") or "text").lower()
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Invalid output_format: {output_format} (must be one of {', '.join(OUTPUT_FORMATS)})")

    log_level = str(data.get("log_level", "INFO") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Invalid log_level: {log_level} (must be one of {', '.join(LOG_LEVELS)})")

    return RuntimeConfig(
        dhcpd_conf=str(data.get("dhcpd_conf") or _first_existing(DEFAULT_CONF_PATHS)),
        leases_file=str(data.get("leases_file") or _first_existing(DEFAULT_LEASE_PATHS)),
        never_policy=never_policy,
        malformed_policy=malformed_policy,
        output_format=output_format,
        now=_parse_now(data.get("now")),
        log_level=log_level,
        extra={k: v for k, v in data.items() if k not in _known_keys()},
    )


def _known_keys() -> set:
    return {
        "dhcpd_conf",
        "leases_file",
        "never_policy",
        "malformed_policy",
        "output_format",
        "now",
        "log_level",
    }


def _first_existing(candidates: Sequence[str]) -> str:
    for candidate in candidates:
        if pathlib.Path(candidate).exists():
            return candidate
    return candidates[0]


def _parse_now(value: Any) -> Optional[datetime]:
    """
    Accept a datetime or an ISO-8601 string; naive values are taken as UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(_normalize_utc_suffix(str(value)))
        except ValueError as exc:
            raise ValueError(f"Invalid now timestamp: {value} (use ISO-8601)") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _normalize_utc_suffix(value: str) -> str:
    # fromisoformat only understands a trailing "Z" from Python 3.11 on
    value = value.strip()
    if value[-1:] in {"Z", "z"}:
        return value[:-1] + "+00:00"
    return value
