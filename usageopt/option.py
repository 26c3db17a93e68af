# Usageopt CLI Toolkit — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the option model shared by the usage text parser, the option table and
the command line scanner.

- `ArgumentPolicy`: whether an option takes no argument, a required argument or
  an optional argument. Mirrors the `no_argument` / `required_argument` /
  `optional_argument` values of getopt_long and accepts a few aliases.
- `OptionDescriptor`: the canonical representation of one logical option, with
  its short and long spellings and the index every spelling resolves to.

Example:
    ArgumentPolicy("required") → ArgumentPolicy.REQUIRED
    ArgumentPolicy(":")        → ArgumentPolicy.REQUIRED (via alias)
    ArgumentPolicy("::")       → ArgumentPolicy.OPTIONAL (via alias)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ArgumentPolicy(Enum):
    """
    Argument requirement of an option.

    Members:
        NONE: The option is a switch and never takes an argument.
        REQUIRED: The option always takes an argument.
        OPTIONAL: The option takes an argument only when attached to it
            (`--name=value` or `-xvalue`).

    Aliases:
        - "no" / "switch" / "" → "none"
        - ":" → "required"
        - "::" → "optional"
    """

    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"

    @classmethod
    def choices(cls) -> list[ArgumentPolicy]:
        """Return a list of all argument policies."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "": "none",
            "no": "none",
            "switch": "none",
            ":": "required",
            "::": "optional",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgumentPolicy:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def takes_argument(self) -> bool:
        return self is not ArgumentPolicy.NONE

    @property
    def getopt_suffix(self) -> str:
        """The suffix getopt uses after a short option character."""
        if self is ArgumentPolicy.REQUIRED:
            return ":"
        if self is ArgumentPolicy.OPTIONAL:
            return "::"
        return ""

    def __str__(self) -> str:
        """Return the string representation of the argument policy."""
        return self.value


@dataclass(frozen=True)
class OptionDescriptor:
    """
    Represents one logical option declared in a usage text.

    Attributes:
        short (str | None): Single-character short spelling, without the dash.
        long (str | None): Long spelling, without the leading dashes.
        policy (ArgumentPolicy): Argument requirement shared by both spellings.
        index (int): Unique index every registered spelling resolves to.
        line (int | None): 0-based usage text line the option was declared on.
    """

    short: str | None
    long: str | None
    policy: ArgumentPolicy
    index: int
    line: int | None = None

    def __post_init__(self) -> None:
        if not self.short and not self.long:
            raise ValueError("an option needs a short or a long spelling")
        if self.short is not None and len(self.short) != 1:
            raise ValueError(f"short option must be one character: {self.short!r}")

    @property
    def spellings(self) -> tuple[str, ...]:
        """Return the registered spellings, short first."""
        return tuple(flag for flag in (self.short, self.long) if flag)

    @property
    def name(self) -> str:
        """Return the preferred spelling: the long one when present."""
        return self.long or self.short or ""

    def get_flags_text(self) -> str:
        """Render the option the way it would appear in help text."""
        flags = []
        if self.short:
            flags.append(f"-{self.short}")
        if self.long:
            if self.policy is ArgumentPolicy.REQUIRED:
                flags.append(f"--{self.long}=ARG")
            elif self.policy is ArgumentPolicy.OPTIONAL:
                flags.append(f"--{self.long}[=ARG]")
            else:
                flags.append(f"--{self.long}")
        elif self.policy is ArgumentPolicy.REQUIRED:
            flags.append("ARG")
        elif self.policy is ArgumentPolicy.OPTIONAL:
            flags.append("[ARG]")
        return " ".join(flags)

    def to_definition(self) -> dict[str, object]:
        return {
            "index": self.index,
            "short": self.short,
            "long": self.long,
            "policy": self.policy.value,
            "line": self.line,
        }
