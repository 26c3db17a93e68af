# Usageopt CLI Toolkit — (c) 2025 rtj.dev LLC — MIT Licensed
"""Shared console instances for usageopt output sinks."""
from rich.console import Console

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)
