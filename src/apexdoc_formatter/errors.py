class ApexDocFormatterError(Exception):
    """Base class for all formatter errors."""


class ConfigurationError(ApexDocFormatterError, ValueError):
    """Raised when layout options are missing or invalid.

    Never recovered internally: guessing a width would silently produce
    wrong layouts, so callers see this immediately.
    """


class CodePrinterError(ApexDocFormatterError):
    """Raised by a code printer that cannot parse or lay out a snippet."""
