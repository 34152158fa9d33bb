"""
Per-subnet in-use counting for active leases.
"""

from __future__ import annotations

import logging
from typing import Dict, Sequence

from .dhcpd_conf import Subnet
from .ranges import format_address

log = logging.getLogger(__name__)


class UtilizationAggregator:
    """Owns the subnet mapping and bumps in-use counters as active leases arrive."""

    def __init__(self, subnets: Dict[str, Subnet]):
        self._subnets = subnets

    @property
    def subnets(self) -> Dict[str, Subnet]:
        return self._subnets

    def record_active_lease(self, address: Sequence[int]) -> int:
        """
        Count one hit per (subnet, range) pair whose range contains address.

        Overlapping ranges count the same lease more than once.
        """
        matches = 0
        for subnet in self._subnets.values():
            for addr_range in subnet.ranges:
                if addr_range.contains(address):
                    subnet.in_use += 1
                    matches += 1
        if not matches:
            log.debug("Active lease %s is outside every configured range", format_address(address))
        return matches
