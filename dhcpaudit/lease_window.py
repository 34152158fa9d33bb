"""
Lease timestamps and the "currently active" decision.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from .errors import LeaseTimestampError, UnboundedLeaseError

NEVER = "never"
NEVER_POLICIES = ("strict", "active", "inactive")
MALFORMED_POLICIES = ("skip", "strict")
LEASE_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"


def parse_lease_time(value: str) -> datetime:
    """
    Parse "<weekday> YYYY/MM/DD HH:MM:SS" as a UTC instant.
    """
    parts = value.strip().rstrip(";").split()
    if len(parts) != 3 or not parts[0].isdigit():
        raise LeaseTimestampError(f"Malformed lease timestamp: {value!r}")
    try:
        parsed = datetime.strptime(f"{parts[1]} {parts[2]}", LEASE_TIME_FORMAT)
    except ValueError as exc:
        raise LeaseTimestampError(f"Malformed lease timestamp: {value!r}") from exc
    return parsed.replace(tzinfo=timezone.utc)


def is_never(value: str) -> bool:
    return value.strip().rstrip(";").strip() == NEVER


def is_active(starts: str, ends: str, now: Optional[datetime] = None, never_policy: str = "active") -> bool:
    """
    True when now lies within [starts, ends], both bounds inclusive.

    An "ends never" lease raises under the strict policy, counts once started
    under "active" and is never counted under "inactive".
    """
    if never_policy not in NEVER_POLICIES:
        raise ValueError(f"Unknown never policy: {never_policy}")
    if now is None:
        now = datetime.now(timezone.utc)

    start = parse_lease_time(starts)
    if is_never(ends):
        if never_policy == "strict":
            raise UnboundedLeaseError("Lease end time 'never' is not supported in strict mode")
        if never_policy == "inactive":
            return False
        return start <= now

    end = parse_lease_time(ends)
    return start <= now <= end
