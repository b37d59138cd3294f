"""
Error types for Target-DNS.
"""


class TargetDNSError(Exception):
    """Base class for errors raised by a reconciliation run."""


class ConfigurationError(TargetDNSError):
    """Required configuration or credentials are missing."""


class FetchError(TargetDNSError):
    """Reading the inventory or the zone failed."""


class ApplyError(TargetDNSError):
    """Submitting the batch of DNS changes failed."""
