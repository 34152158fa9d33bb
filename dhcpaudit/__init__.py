"""
DHCP address-pool utilization audit for ISC dhcpd configs and lease logs.
"""

__all__ = [
    "aggregator",
    "audit",
    "cli",
    "config",
    "dhcpd_conf",
    "errors",
    "lease_window",
    "leases",
    "ranges",
    "report",
]

__version__ = "0.1.0"
