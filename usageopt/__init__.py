"""
Usageopt CLI Toolkit

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .exceptions import ConversionError, UnknownOptionError, UsageOptError
from .logger import logger
from .option import ArgumentPolicy, OptionDescriptor
from .option_store import OptionStore
from .option_table import OptionTable
from .scanner import OptionScanner, ScanOrdering
from .typed_value import Conversion, TypedValue
from .usage_parser import UsageTextParser

__all__ = [
    "ArgumentPolicy",
    "Conversion",
    "ConversionError",
    "OptionDescriptor",
    "OptionScanner",
    "OptionStore",
    "OptionTable",
    "ScanOrdering",
    "TypedValue",
    "UnknownOptionError",
    "UsageOptError",
    "UsageTextParser",
    "logger",
]
