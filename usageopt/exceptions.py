# Usageopt CLI Toolkit — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by usageopt.

Problems found in a usage text or in a command line are accumulated into the
error log of an `OptionStore` and never raised. The exceptions below cover the
remaining cases, which are programmer errors at an access site.

Exception Hierarchy:
- UsageOptError
    ├── UnknownOptionError
    └── ConversionError
"""


class UsageOptError(Exception):
    """Base exception for usageopt."""


class UnknownOptionError(UsageOptError, KeyError):
    """Raised when a flag spelling that the usage text never declared is looked up."""

    def __init__(self, flag: str):
        super().__init__(f"unknown option: {flag}")
        self.flag = flag

    def __str__(self) -> str:
        return str(self.args[0])


class ConversionError(UsageOptError, ValueError):
    """Raised when a stored value cannot be converted to the requested type."""
