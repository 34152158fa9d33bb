"""
Exceptions raised while auditing pool utilization.
"""


class AuditError(RuntimeError):
    """Base class for failures that abort an audit run."""


class InputUnavailableError(AuditError):
    """A configuration or lease file cannot be opened."""


class ConfigurationError(AuditError, ValueError):
    """The dhcpd configuration is structurally invalid."""


class LeaseTimestampError(AuditError, ValueError):
    """A lease carries a timestamp that cannot be evaluated."""


class UnboundedLeaseError(LeaseTimestampError):
    """A lease ends "never" while such leases are configured to be rejected."""
