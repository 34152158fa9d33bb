"""
Stateful scanner for ISC dhcpd lease logs.

A lease block looks like::

    lease 10.1.1.81 {
      starts 3 2015/09/09 11:42:20;
      ends 3 2015/09/09 19:42:20;
      binding state active;
    }

Blocks are finalized when the next ``lease`` header arrives or the input ends.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional

from .aggregator import UtilizationAggregator
from .errors import LeaseTimestampError, UnboundedLeaseError
from .lease_window import is_active
from .ranges import Octets, format_address, parse_address

log = logging.getLogger(__name__)

LEASE_RE = re.compile(r"^\s*lease\s+(\d+\.\d+\.\d+\.\d+)\s*\{")
STARTS_RE = re.compile(r"^\s*starts\s+([^;]*)")
ENDS_RE = re.compile(r"^\s*ends\s+([^;]*)")


@dataclass
class LeaseRecord:
    address: Octets
    line: int
    starts: Optional[str] = None
    ends: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.starts is not None and self.ends is not None


@dataclass
class ScanStats:
    blocks: int = 0
    incomplete: int = 0
    inactive: int = 0
    active: int = 0
    matches: int = 0
    malformed: int = 0

    def as_dict(self) -> dict:
        return {
            "blocks": self.blocks,
            "incomplete": self.incomplete,
            "inactive": self.inactive,
            "active": self.active,
            "matches": self.matches,
            "malformed": self.malformed,
        }


class LeaseScanner:
    """
    Line-fed state machine: idle, or accumulating one LeaseRecord.

    A lease with an unparseable timestamp is logged and left uncounted unless
    malformed_policy is "strict", in which case the scan aborts.
    """

    def __init__(
        self,
        aggregator: UtilizationAggregator,
        now: Optional[datetime] = None,
        never_policy: str = "active",
        source: str = "<leases>",
        malformed_policy: str = "skip",
    ) -> None:
        self.aggregator = aggregator
        self.now = now or datetime.now(timezone.utc)
        self.never_policy = never_policy
        self.malformed_policy = malformed_policy
        self.source = source
        self.stats = ScanStats()
        self._current: Optional[LeaseRecord] = None
        self._lineno = 0

    def feed(self, line: str) -> None:
        self._lineno += 1
        match = LEASE_RE.match(line)
        if match:
            self._flush()
            self._current = LeaseRecord(address=parse_address(match.group(1)), line=self._lineno)
            self.stats.blocks += 1
            return

        if self._current is None:
            return
        match = STARTS_RE.match(line)
        if match:
            self._current.starts = match.group(1).strip()
            return
        match = ENDS_RE.match(line)
        if match:
            self._current.ends = match.group(1).strip()

    def close(self) -> ScanStats:
        self._flush()
        log.info(
            "Scanned %d lease block(s) in %s: %d active, %d inactive, %d incomplete, %d malformed, %d range match(es)",
            self.stats.blocks,
            self.source,
            self.stats.active,
            self.stats.inactive,
            self.stats.incomplete,
            self.stats.malformed,
            self.stats.matches,
        )
        return self.stats

    def _flush(self) -> None:
        record, self._current = self._current, None
        if record is None:
            return
        if not record.complete:
            self.stats.incomplete += 1
            log.debug("%s:%d: lease %s has no full time window, skipped", self.source, record.line, format_address(record.address))
            return

        assert record.starts is not None and record.ends is not None
        try:
            active = is_active(record.starts, record.ends, now=self.now, never_policy=self.never_policy)
        except LeaseTimestampError as exc:
            where = f"{self.source}:{record.line}: lease {format_address(record.address)}"
            if isinstance(exc, UnboundedLeaseError) or self.malformed_policy == "strict":
                raise type(exc)(f"{where}: {exc}") from exc
            self.stats.malformed += 1
            log.warning("%s: %s, not counted", where, exc)
            return

        if not active:
            self.stats.inactive += 1
            return
        self.stats.active += 1
        self.stats.matches += self.aggregator.record_active_lease(record.address)


def scan_leases(
    lines: Iterable[str],
    aggregator: UtilizationAggregator,
    now: Optional[datetime] = None,
    never_policy: str = "active",
    source: str = "<leases>",
    malformed_policy: str = "skip",
) -> ScanStats:
    scanner = LeaseScanner(
        aggregator,
        now=now,
        never_policy=never_policy,
        source=source,
        malformed_policy=malformed_policy,
    )
    for line in lines:
        scanner.feed(line)
    return scanner.close()
