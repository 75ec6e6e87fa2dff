"""Reformat ApexDoc documentation comments."""

from .engine import FormatterEngine
from .errors import ApexDocFormatterError, CodePrinterError, ConfigurationError
from .models import FormatResult, FormatResults, FormatterConfig
from .pipeline import DocCommentFormatter

__version__ = "0.1.0"

__all__ = [
    "ApexDocFormatterError",
    "CodePrinterError",
    "ConfigurationError",
    "DocCommentFormatter",
    "FormatResult",
    "FormatResults",
    "FormatterConfig",
    "FormatterEngine",
]
