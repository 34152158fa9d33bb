"""
Render per-subnet utilization as text or JSON.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .dhcpd_conf import Subnet
from .leases import ScanStats


def utilization_rows(subnets: Dict[str, Subnet]) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for key in sorted(subnets):
        subnet = subnets[key]
        total = subnet.total
        if total <= 0:
            continue
        rows.append(
            {
                "subnet": key,
                "total": total,
                "in_use": subnet.in_use,
                "percent": round(100.0 * subnet.in_use / total, 1),
            }
        )
    return rows


def format_text(subnets: Dict[str, Subnet]) -> str:
    lines = [
        f"{row['subnet']} {row['in_use']} in use / {row['total']} total ({row['percent']:.1f}%)"
        for row in utilization_rows(subnets)
    ]
    return "\n".join(lines)


def format_json(subnets: Dict[str, Subnet], stats: Optional[ScanStats] = None) -> str:
    payload: Dict[str, Any] = {"subnets": utilization_rows(subnets)}
    if stats is not None:
        payload["leases"] = stats.as_dict()
    return json.dumps(payload, indent=2)
