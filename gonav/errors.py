"""Exception types raised by gonav."""

from __future__ import annotations


class GonavError(Exception):
    """Base class for gonav errors."""


class ScanCancelled(GonavError):
    """Raised when a scan is interrupted through its cancel signal."""


class OracleError(GonavError):
    """Raised when the implementation oracle cannot answer a lookup."""


class ConfigError(GonavError):
    """Raised for invalid configuration values."""
