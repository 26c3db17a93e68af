# Usageopt CLI Toolkit — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `OptionScanner`, a getopt_long style scan of an argv list against an
`OptionTable`.

The scan position lives in a `ScanState` created for each call to `scan()`, so
nothing is shared between calls and repeated or interleaved scans are safe.

Supported syntax:
- Long options: `--name`, `--name=value`, `--name value` (required arguments
  only) and unambiguous abbreviations such as `--prec` for `--precision`.
- Short options: `-x`, clusters like `-wv`, attached values `-fFILE` and
  separate values `-f FILE` (required arguments only).
- `--` ends option scanning. A lone `-` is an ordinary argument.

Problems are reported as `ScanEvent`s rather than raised so the caller decides
how to react to a malformed command line.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum

from usageopt.logger import logger
from usageopt.option import ArgumentPolicy, OptionDescriptor
from usageopt.option_table import OptionTable


class ScanOrdering(Enum):
    """
    How non-option tokens interleaved with options are handled.

    Members:
        REQUIRE_ORDER: Stop scanning at the first non-option token.
        PERMUTE: Set non-option tokens aside and keep scanning, like GNU getopt.
    """

    REQUIRE_ORDER = "require_order"
    PERMUTE = "permute"

    def __str__(self) -> str:
        return self.value


class ScanEventKind(Enum):
    OPTION = "option"
    UNKNOWN = "unknown"
    MISSING_ARGUMENT = "missing_argument"
    UNEXPECTED_ARGUMENT = "unexpected_argument"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class ScanEvent:
    """
    One recognized option or one problem found while scanning.

    Attributes:
        kind (ScanEventKind): What was found.
        flag (str): The spelling as given, without dashes (a prefix for
            abbreviated or ambiguous long options).
        is_long (bool): Whether the flag was given in long form.
        descriptor (OptionDescriptor | None): The matched option, if any.
        argument (str | None): The option argument, None when there is none.
    """

    kind: ScanEventKind
    flag: str
    is_long: bool = False
    descriptor: OptionDescriptor | None = None
    argument: str | None = None

    @property
    def display_flag(self) -> str:
        return f"--{self.flag}" if self.is_long else self.flag

    @property
    def message(self) -> str:
        if self.kind is ScanEventKind.UNKNOWN:
            return f"Unknown option: {self.display_flag}"
        if self.kind is ScanEventKind.MISSING_ARGUMENT:
            return f"Missing argument for: {self.display_flag}"
        if self.kind is ScanEventKind.UNEXPECTED_ARGUMENT:
            return f"Unexpected argument for: {self.display_flag}"
        if self.kind is ScanEventKind.AMBIGUOUS:
            return f"Ambiguous option: {self.display_flag}"
        return f"Option: {self.display_flag}"


@dataclass
class ScanState:
    """Cursor over the argv list for a single scan."""

    index: int = 0
    cluster_offset: int = 0
    set_aside: list[str] = field(default_factory=list)

    def advance(self, count: int = 1) -> None:
        self.index += count
        self.cluster_offset = 0


@dataclass
class ScanResult:
    events: list[ScanEvent] = field(default_factory=list)
    positional: list[str] = field(default_factory=list)


class OptionScanner:
    """
    Scans argv-style token lists against an option table.

    Args:
        table (OptionTable): The options to recognize.
        ordering (ScanOrdering): How non-option tokens are handled. When the
            `POSIXLY_CORRECT` environment variable is set, `REQUIRE_ORDER` is
            used regardless.
    """

    def __init__(
        self,
        table: OptionTable,
        ordering: ScanOrdering = ScanOrdering.REQUIRE_ORDER,
    ) -> None:
        self.table = table
        self.ordering = ordering

    @property
    def effective_ordering(self) -> ScanOrdering:
        if os.environ.get("POSIXLY_CORRECT") is not None:
            return ScanOrdering.REQUIRE_ORDER
        return self.ordering

    def scan(self, args: list[str]) -> ScanResult:
        """
        Scan `args` and return the option events and positional arguments.

        Args:
            args (list[str]): Command line tokens, program name excluded.

        Returns:
            ScanResult: Events in command line order and the remaining tokens.
        """
        state = ScanState()
        result = ScanResult()
        ordering = self.effective_ordering

        while state.index < len(args):
            token = args[state.index]
            if token == "--":
                state.advance()
                break
            if not token.startswith("-") or token == "-":
                if ordering is ScanOrdering.PERMUTE:
                    state.set_aside.append(token)
                    state.advance()
                    continue
                break
            if token.startswith("--"):
                result.events.append(self._scan_long(args, state))
            else:
                result.events.extend(self._scan_cluster(args, state))

        result.positional = state.set_aside + list(args[state.index :])
        logger.debug(
            "Scanned %d token(s): %d event(s), %d positional",
            len(args),
            len(result.events),
            len(result.positional),
        )
        return result

    def _scan_long(self, args: list[str], state: ScanState) -> ScanEvent:
        token = args[state.index]
        state.advance()
        name, has_value, value = token[2:].partition("=")
        argument: str | None = value if has_value else None

        matches = self.table.find_long(name) if name else []
        if not matches:
            return ScanEvent(ScanEventKind.UNKNOWN, name, is_long=True)
        if len(matches) > 1:
            return ScanEvent(ScanEventKind.AMBIGUOUS, name, is_long=True)

        descriptor = matches[0]
        policy = descriptor.policy
        if policy is ArgumentPolicy.NONE and argument is not None:
            return ScanEvent(
                ScanEventKind.UNEXPECTED_ARGUMENT,
                name,
                is_long=True,
                descriptor=descriptor,
            )
        if policy is ArgumentPolicy.REQUIRED and argument is None:
            if state.index >= len(args):
                return ScanEvent(
                    ScanEventKind.MISSING_ARGUMENT,
                    name,
                    is_long=True,
                    descriptor=descriptor,
                )
            argument = args[state.index]
            state.advance()
        return ScanEvent(
            ScanEventKind.OPTION,
            name,
            is_long=True,
            descriptor=descriptor,
            argument=argument,
        )

    def _scan_cluster(self, args: list[str], state: ScanState) -> list[ScanEvent]:
        token = args[state.index]
        events: list[ScanEvent] = []
        state.cluster_offset = 1
        while state.cluster_offset < len(token):
            char = token[state.cluster_offset]
            state.cluster_offset += 1
            rest = token[state.cluster_offset :]

            descriptor = self.table.find_short(char)
            if descriptor is None:
                events.append(ScanEvent(ScanEventKind.UNKNOWN, char))
                continue

            if descriptor.policy is ArgumentPolicy.NONE:
                events.append(
                    ScanEvent(ScanEventKind.OPTION, char, descriptor=descriptor)
                )
                continue

            if rest:
                events.append(
                    ScanEvent(
                        ScanEventKind.OPTION, char, descriptor=descriptor, argument=rest
                    )
                )
            elif descriptor.policy is ArgumentPolicy.OPTIONAL:
                events.append(
                    ScanEvent(ScanEventKind.OPTION, char, descriptor=descriptor)
                )
            elif state.index + 1 < len(args):
                events.append(
                    ScanEvent(
                        ScanEventKind.OPTION,
                        char,
                        descriptor=descriptor,
                        argument=args[state.index + 1],
                    )
                )
                state.advance()
            else:
                events.append(
                    ScanEvent(ScanEventKind.MISSING_ARGUMENT, char, descriptor=descriptor)
                )
            break

        state.advance()
        return events
