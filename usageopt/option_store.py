# Usageopt CLI Toolkit — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `OptionStore`, a command line option parser whose options
are read from a human readable usage text instead of being declared one by one.

The usage text is parsed once into an `OptionTable`. Each call to `parse()`
scans an argv list against that table and fills one `TypedValue` per option
given, plus one for the positional arguments. Values are converted lazily when
they are read.

Key Features:
- Options declared by the same text that is shown to the user
- Short and long spellings resolving to the same option
- Options given several times accumulate every occurrence in order
- Lazy, strict type conversion through `TypedValue`
- Accumulated, non-raising error reporting for bad usage text and bad argv
- Rich-powered usage, error and diagnostic output

Example Usage:
    store = OptionStore(
        '''
        -w --warning          print warnings
        -p --precision=NUM    number of digits
        -f FILE
            read input from FILE
        '''
    )
    store.parse(["-w", "--precision=3", "5", "3"])

    if not store.good():
        store.report_error()

    bool(store["warning"])            # True
    store["p"].as_type(int)           # 3
    store.arguments.as_list(int)      # [5, 3]
    store["f"].value_or("input.txt")  # "input.txt"
"""
from __future__ import annotations

import sys
from typing import IO, Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from usageopt.console import console as default_console
from usageopt.console import error_console
from usageopt.exceptions import UnknownOptionError
from usageopt.logger import logger
from usageopt.option_table import OptionTable
from usageopt.scanner import OptionScanner, ScanEventKind, ScanOrdering
from usageopt.typed_value import TypedValue
from usageopt.usage_parser import UsageTextParser


class OptionStore:
    """
    Command line options defined by a usage text.

    Args:
        usage (str): The usage text. May be loaded later with `load()`.
        ordering (ScanOrdering | str): How non-option tokens are handled by
            `parse()`.
        halt_on_error (bool): Stop reading the usage text at the first bad line.
        console (Console | None): Console used for `usage()` and `debug_report()`.
    """

    def __init__(
        self,
        usage: str = "",
        *,
        ordering: ScanOrdering | str = ScanOrdering.REQUIRE_ORDER,
        halt_on_error: bool = False,
        console: Console | None = None,
    ) -> None:
        self.console: Console = console or default_console
        self.ordering: ScanOrdering = ScanOrdering(ordering)
        self.halt_on_error: bool = halt_on_error
        self._usage: str = ""
        self._table: OptionTable = OptionTable()
        self._usage_errors: list[str] = []
        self._parse_errors: list[str] = []
        self._values: dict[int, TypedValue] = {}
        self._arguments: TypedValue = TypedValue()
        self.load(usage)

    def load(self, usage: str) -> OptionStore:
        """
        (Re)build the option table from a usage text.

        Any previously parsed values and errors are discarded.
        """
        self._usage = usage
        result = UsageTextParser(halt_on_error=self.halt_on_error).parse(usage)
        self._table = result.table
        self._usage_errors = result.errors
        self._reset()
        logger.debug("Loaded usage text: %s", self._table)
        return self

    def _reset(self) -> None:
        self._parse_errors = []
        self._values = {}
        self._arguments = TypedValue()

    @property
    def table(self) -> OptionTable:
        return self._table

    @property
    def errors(self) -> list[str]:
        """The error log: usage text errors followed by the errors of the last parse."""
        return self._usage_errors + self._parse_errors

    def good(self) -> bool:
        """Return True if no error has been recorded."""
        return not self.errors

    def usage(self, file: IO[str] | None = None) -> None:
        """
        Print the usage text exactly as it was given, tabs and trailing
        whitespace included.

        Args:
            file (IO[str] | None): Output sink, the store console by default.
        """
        target = file or self.console.file
        target.write(self._usage + "\n")

    def report_error(self, file: IO[str] | None = None) -> None:
        """
        Print the error log if there is anything in it.

        Args:
            file (IO[str] | None): Output sink, stderr by default.
        """
        if self.good():
            return
        target = file or error_console.file
        target.write("\n".join(self.errors) + "\n")

    def parse(self, args: list[str] | None = None) -> OptionStore:
        """
        Scan a command line and store the options and arguments found.

        Values and errors from a previous call are discarded first. Unknown
        options and missing arguments are added to the error log.

        Args:
            args (list[str] | None): Command line tokens without the program
                name. Defaults to `sys.argv[1:]`.

        Returns:
            OptionStore: self, for chaining.
        """
        if args is None:
            args = sys.argv[1:]
        self._reset()

        result = OptionScanner(self._table, self.ordering).scan(list(args))
        for event in result.events:
            if event.kind is not ScanEventKind.OPTION:
                self._add_parse_error(event.message)
                continue

            descriptor = event.descriptor
            index = self._table.index_of(descriptor.name) if descriptor else None
            if index is None:
                self._add_parse_error(f"unknown short option: {event.flag}")
                break

            value = self._values.setdefault(index, TypedValue())
            value.add(event.argument if event.argument is not None else "")

        for token in result.positional:
            self._arguments.add(token)
        return self

    def _add_parse_error(self, message: str) -> None:
        logger.warning("%s", message)
        self._parse_errors.append(message)

    def _resolve(self, flag: str) -> int:
        index = self._table.index_of(flag)
        if index is None and flag.startswith("-"):
            index = self._table.index_of(flag.lstrip("-"))
        if index is None:
            raise UnknownOptionError(flag)
        return index

    def __getitem__(self, flag: str) -> TypedValue:
        """
        Access an option by its short or long spelling.

        `"w"`, `"-w"`, `"warning"` and `"--warning"` all resolve to the same
        option. An option that was declared but not given returns an unset
        `TypedValue`.

        Raises:
            UnknownOptionError: If the usage text does not declare `flag`.
        """
        index = self._resolve(flag)
        return self._values.get(index, TypedValue())

    def get(self, flag: str, default: Any = None, target_type: Any = None) -> Any:
        """Shorthand for `store[flag].value_or(default, target_type)`."""
        return self[flag].value_or(default, target_type)

    def __contains__(self, flag: object) -> bool:
        if not isinstance(flag, str):
            return False
        try:
            self._resolve(flag)
        except UnknownOptionError:
            return False
        return True

    @property
    def arguments(self) -> TypedValue:
        """Positional arguments left after option scanning."""
        return self._arguments

    def values(self) -> dict[str, TypedValue]:
        """Return the options given on the command line, keyed by preferred spelling."""
        values = {}
        for index, value in self._values.items():
            descriptor = self._table.get(index)
            if descriptor is not None:
                values[descriptor.name] = value
        return values

    def debug_report(self, console: Console | None = None) -> None:
        """
        Print how the usage text was understood and what the last parse captured.

        For development use; the layout is not stable.
        """
        target = console or self.console
        short_options = escape(self._table.short_option_string)
        target.print(f"[bold]short option string:[/bold] {short_options}")

        table = Table(title="options", box=box.SIMPLE)
        table.add_column("index", justify="right")
        table.add_column("short")
        table.add_column("long")
        table.add_column("argument")
        table.add_column("values")
        for descriptor in self._table:
            value = self._values.get(descriptor.index)
            table.add_row(
                str(descriptor.index),
                escape(descriptor.short or ""),
                escape(descriptor.long or ""),
                str(descriptor.policy),
                escape(", ".join(repr(line) for line in value)) if value else "",
            )
        target.print(table)

        long_options = self._table.long_options
        if long_options:
            target.print("[bold]long options:[/bold]")
            for name, descriptor in long_options.items():
                target.print(
                    f"  --{name}\t{descriptor.policy}\t{descriptor.index}",
                    markup=False,
                )

        if self._arguments:
            target.print("[bold]arguments:[/bold]")
            for argument in self._arguments:
                target.print(f"  {argument}", markup=False)

        if self.errors:
            target.print("[bold red]errors:[/bold red]")
            for error in self.errors:
                target.print(f"  {error}", markup=False)

    def __str__(self) -> str:
        """Return a human-readable summary of the store state."""
        return (
            f"OptionStore(options={len(self._table)}, "
            f"flags={len(self._table.flags)}, errors={len(self.errors)})"
        )

    def __repr__(self) -> str:
        return str(self)
