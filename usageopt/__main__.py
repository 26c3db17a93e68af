"""
Usageopt CLI Toolkit

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import sys
from pathlib import Path

from usageopt.console import error_console
from usageopt.option_store import OptionStore
from usageopt.scanner import ScanOrdering
from usageopt.utils import get_program_invocation, setup_logging

USAGE = """\
usage: {program} [OPTION...] -u FILE [--] [ARG...]

Show how a usage text is understood and how a command line is parsed against it.

-u --usage=FILE    read the usage text to check from FILE ('-' for stdin)
-p --permute       keep scanning options after non-option arguments
-s --strict        stop reading the usage text at the first bad line
-l --log-level=LEVEL
    console log level, WARNING by default
-j --json-logs     log JSON records instead of Rich console output
-h --help          show this help and exit

Arguments after '--' are parsed against the usage text read from FILE."""


def read_usage_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="UTF-8")


def main(argv: list[str] | None = None) -> int:
    tool = OptionStore(USAGE.format(program=get_program_invocation()))
    tool.parse(sys.argv[1:] if argv is None else argv)
    if not tool.good():
        tool.report_error()
        return 2

    if tool["help"]:
        tool.usage()
        return 0

    try:
        setup_logging(
            mode="json" if tool["json-logs"] else None,
            console_log_level=tool.get("log-level", "WARNING").upper(),
        )
    except ValueError as error:
        error_console.print(f"Invalid logging setup: {error}", markup=False)
        return 2

    usage_path = tool.get("usage")
    if usage_path is None:
        error_console.print("Missing argument for: --usage", markup=False)
        return 2
    try:
        usage_text = read_usage_text(usage_path)
    except OSError as error:
        error_console.print(f"Cannot read usage text: {error}", markup=False)
        return 2

    ordering = ScanOrdering.PERMUTE if tool["permute"] else ScanOrdering.REQUIRE_ORDER
    store = OptionStore(usage_text, ordering=ordering, halt_on_error=bool(tool["strict"]))
    store.parse(tool.arguments.lines())
    store.debug_report()
    store.report_error()
    return 0 if store.good() else 1


if __name__ == "__main__":
    sys.exit(main())
