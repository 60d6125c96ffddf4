"""
Exceptions raised by the receipt analyzer.
"""


class ReceiptAnalyzerError(Exception):
    """Base class for receipt analyzer errors."""


class InvalidEventError(ReceiptAnalyzerError, ValueError):
    """The triggering event does not describe an uploaded S3 object."""


class ConfigurationError(ReceiptAnalyzerError):
    """Required configuration is missing."""
