# Usageopt CLI Toolkit — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `UsageTextParser`, which turns a man-page style usage text into an
`OptionTable`.

Only lines whose first word starts with `-` declare options; every other line is
prose and is ignored. For example:

    -a, --all          show all elements, no argument required
    -b, --batch        the description may be separated by several spaces
    -c                 no long option and no argument required
    -d --delta=NUM     set delta number, needs an argument
    -e --epsilon[=NUM] takes an optional argument
        a comma after the short option is accepted or not
        lines that do not start with '-' are ignored

    -f FILE
        delete a file, no long option, needs an argument; in this case
        the explanation must go on a separate line

Without a long option the argument requirement of a short option is guessed
from the number of words: `-f FILE` alone on its line takes an argument, while
`-c no long option ...` is a switch because more words follow.

Malformed declarations and duplicate flags are accumulated as error strings.
Nothing is raised, so a single pass reports every problem in the text.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from usageopt.logger import logger
from usageopt.option import ArgumentPolicy
from usageopt.option_table import OptionTable


@dataclass
class DeclaredOption:
    """The flags and policy read from one declaration line."""

    short: str | None = None
    long: str | None = None
    policy: ArgumentPolicy = ArgumentPolicy.NONE
    words: int = 0


@dataclass
class UsageParseResult:
    """Outcome of parsing a usage text."""

    table: OptionTable
    errors: list[str] = field(default_factory=list)

    @property
    def good(self) -> bool:
        return not self.errors


class InvalidDeclaration(Exception):
    """Internal signal for a malformed declaration line."""


class UsageTextParser:
    """
    Parses usage text line by line into an option table and an error log.

    Args:
        halt_on_error (bool): Stop at the first line that produced an error
            instead of checking the remaining lines.
    """

    MAX_WORDS = 2

    def __init__(self, halt_on_error: bool = False) -> None:
        self.halt_on_error: bool = halt_on_error

    def parse(self, usage: str) -> UsageParseResult:
        """
        Parse a full usage text.

        Args:
            usage (str): The usage text.

        Returns:
            UsageParseResult: The populated table and the accumulated errors.
        """
        result = UsageParseResult(table=OptionTable())
        for number, line in enumerate(usage.split("\n")):
            if self.halt_on_error and result.errors:
                logger.debug("Stopped reading usage text at line %d", number)
                break
            self.parse_line(number, line.rstrip("\r"), result)
        return result

    def parse_line(self, number: int, line: str, result: UsageParseResult) -> None:
        """Parse one usage line into `result`, recording errors instead of raising."""
        try:
            declared = self.read_declaration(line)
        except InvalidDeclaration:
            logger.warning("Invalid option declaration at line %d: %r", number, line)
            result.errors.append(f"invalid option at line: {number}\n{line}")
            return

        if declared is None:
            return

        _, errors = result.table.register(
            declared.short, declared.long, declared.policy, line=number
        )
        for error in errors:
            logger.warning("%s (line %d)", error, number)
        result.errors.extend(errors)

    def read_declaration(self, line: str) -> DeclaredOption | None:
        """
        Read the option declared by one line.

        Returns:
            DeclaredOption | None: None for blank and prose lines.

        Raises:
            InvalidDeclaration: If the line starts like a declaration but is
                malformed.
        """
        words = line.split()
        if not words or not words[0].startswith("-"):
            return None

        declared = DeclaredOption()
        for word in words:
            declared.words += 1
            if declared.words > self.MAX_WORDS:
                # Only the count matters from here on: it tells `-f FILE` from
                # `-f some explanation`.
                break
            if not word.startswith("-"):
                continue
            if len(word) == 1:
                raise InvalidDeclaration(line)
            if word.startswith("--"):
                declared.long, declared.policy = self._read_long(word)
            else:
                declared.short = self._read_short(word, declared.short)

        if declared.long is None:
            declared.policy = (
                ArgumentPolicy.REQUIRED
                if declared.words == self.MAX_WORDS
                else ArgumentPolicy.NONE
            )
        return declared

    def _read_long(self, word: str) -> tuple[str, ArgumentPolicy]:
        position = word.find("=")
        if position < 0:
            name, policy = word[2:], ArgumentPolicy.NONE
        elif word[position - 1] == "[":
            if not word.endswith("]"):
                raise InvalidDeclaration(word)
            name, policy = word[2 : position - 1], ArgumentPolicy.OPTIONAL
        else:
            name, policy = word[2:position], ArgumentPolicy.REQUIRED
        if not name:
            raise InvalidDeclaration(word)
        return name, policy

    def _read_short(self, word: str, current: str | None) -> str:
        if current is not None:
            raise InvalidDeclaration(word)
        if len(word) > 3 or (len(word) == 3 and word[2] != ","):
            raise InvalidDeclaration(word)
        return word[1]
