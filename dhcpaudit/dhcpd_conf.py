"""
Extract subnet and range declarations from an ISC dhcpd configuration.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set

from .errors import ConfigurationError
from .ranges import AddressRange

log = logging.getLogger(__name__)

_IP = r"(\d+\.\d+\.\d+\.\d+)"
SUBNET_RE = re.compile(rf"^\s*subnet\s+{_IP}\s+netmask\s+{_IP}")
RANGE_RE = re.compile(rf"^\s*range\s+(?:dynamic-bootp\s+)?{_IP}\s+{_IP}")


@dataclass
class Subnet:
    key: str
    ranges: Set[AddressRange] = field(default_factory=set)
    in_use: int = 0

    @property
    def total(self) -> int:
        return sum(r.capacity for r in self.ranges)

    def add_range(self, addr_range: AddressRange) -> bool:
        """Attach a range; returns False when an identical one was already declared."""
        if addr_range in self.ranges:
            return False
        self.ranges.add(addr_range)
        return True


def subnet_key(network: str, netmask: str) -> str:
    return f"{network}/{netmask}"


def parse_dhcpd_conf(lines: Iterable[str], source: str = "<config>") -> Dict[str, Subnet]:
    """
    Scan configuration lines and return subnets keyed by "network/netmask".

    A range line seen before any subnet line raises ConfigurationError.
    Subnets that never receive a range are left out of the result.
    """
    subnets: Dict[str, Subnet] = {}
    current: Optional[str] = None

    for lineno, line in enumerate(lines, start=1):
        if line.lstrip().startswith("#"):
            continue

        match = SUBNET_RE.match(line)
        if match:
            current = subnet_key(match.group(1), match.group(2))
            log.debug("%s:%d: subnet %s", source, lineno, current)
            continue

        match = RANGE_RE.match(line)
        if not match:
            continue
        if current is None:
            raise ConfigurationError(f"{source}:{lineno}: range declared outside of any subnet")

        addr_range = AddressRange.from_strings(match.group(1), match.group(2))
        subnet = subnets.setdefault(current, Subnet(key=current))
        if subnet.add_range(addr_range):
            log.debug("%s:%d: range %s (%d addresses) in %s", source, lineno, addr_range, addr_range.capacity, current)
        else:
            log.debug("%s:%d: duplicate range %s in %s ignored", source, lineno, addr_range, current)

    log.info(
        "Parsed %d subnet(s) with %d range(s) from %s",
        len(subnets),
        sum(len(s.ranges) for s in subnets.values()),
        source,
    )
    return subnets
