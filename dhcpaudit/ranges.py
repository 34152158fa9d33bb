"""
IPv4 address ranges modelled as per-octet tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

Octets = Tuple[int, int, int, int]

_WEIGHTS = (256 ** 3, 256 ** 2, 256, 1)


def parse_address(text: str) -> Octets:
    """
    Split a dotted quad into four integer octets.

    Octet values are not range checked; only the shape is.
    """
    parts = text.strip().split(".")
    if len(parts) != 4:
        raise ValueError(f"Invalid IPv4 address: {text!r}")
    try:
        a, b, c, d = (int(part) for part in parts)
    except ValueError as exc:
        raise ValueError(f"Invalid IPv4 address: {text!r}") from exc
    return (a, b, c, d)


def format_address(octets: Sequence[int]) -> str:
    return ".".join(str(o) for o in octets)


def capacity(start: Sequence[int], end: Sequence[int]) -> int:
    """Number of addresses from start to end inclusive."""
    return sum((e - s) * w for s, e, w in zip(start, end, _WEIGHTS)) + 1


def contains(addr_range: "AddressRange", address: Sequence[int]) -> bool:
    """
    Octet-wise box test: every octet of address lies between the matching
    octets of the range bounds.
    """
    return all(
        lo <= octet <= hi
        for lo, octet, hi in zip(addr_range.start, address, addr_range.end)
    )


@dataclass(frozen=True)
class AddressRange:
    start: Octets
    end: Octets

    @classmethod
    def from_strings(cls, start: str, end: str) -> "AddressRange":
        return cls(start=parse_address(start), end=parse_address(end))

    @property
    def capacity(self) -> int:
        return capacity(self.start, self.end)

    def contains(self, address: Sequence[int]) -> bool:
        return contains(self, address)

    def __str__(self) -> str:
        return f"{format_address(self.start)}-{format_address(self.end)}"
