# Usageopt CLI Toolkit — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `OptionTable`, the normalized registry of options built from a usage
text.

The table keeps the declared `OptionDescriptor`s in order and a single flag map
in which short spellings ("a") and long spellings ("all") coexist as keys. Every
spelling of one logical option resolves to the same index. Registering a
spelling twice is reported back to the caller as a duplicate error instead of
raising, so a usage text can be checked in one pass.

Note that a short spelling and a long spelling may collide (`-a` and `--a`).
This is not meaningful in practice and is reported as a duplicate as well.
"""
from __future__ import annotations

from typing import Any, Iterator

from usageopt.logger import logger
from usageopt.option import ArgumentPolicy, OptionDescriptor


class OptionTable:
    """Ordered option descriptors plus the flag spelling → index map."""

    def __init__(self) -> None:
        self._descriptors: dict[int, OptionDescriptor] = {}
        self._flag_map: dict[str, int] = {}
        self._short_options: dict[str, OptionDescriptor] = {}
        self._long_options: dict[str, OptionDescriptor] = {}
        self._next_index: int = 0

    def register(
        self,
        short: str | None,
        long: str | None,
        policy: ArgumentPolicy,
        line: int | None = None,
    ) -> tuple[OptionDescriptor | None, list[str]]:
        """
        Register one declared option.

        Each spelling is registered independently: a duplicate short spelling
        does not stop the long spelling of the same declaration from being
        registered, and the other way around.

        Args:
            short (str | None): Short spelling without the dash.
            long (str | None): Long spelling without the dashes.
            policy (ArgumentPolicy): Argument requirement of the option.
            line (int | None): Usage text line the option came from.

        Returns:
            tuple[OptionDescriptor | None, list[str]]: The new descriptor (None when
            no spelling could be registered) and the duplicate errors found.
        """
        errors: list[str] = []
        registered_short = None
        registered_long = None

        if short:
            if short in self._flag_map:
                errors.append(f"duplicate short option: {short}")
            else:
                registered_short = short
        if long:
            if long in self._flag_map or long == registered_short:
                errors.append(f"duplicate long option: {long}")
            else:
                registered_long = long

        if not registered_short and not registered_long:
            return None, errors

        descriptor = OptionDescriptor(
            short=registered_short,
            long=registered_long,
            policy=policy,
            index=self._next_index,
            line=line,
        )
        self._next_index += 1
        self._descriptors[descriptor.index] = descriptor
        if registered_short:
            self._flag_map[registered_short] = descriptor.index
            self._short_options[registered_short] = descriptor
        if registered_long:
            self._flag_map[registered_long] = descriptor.index
            self._long_options[registered_long] = descriptor
        logger.debug(
            "Registered option %d: %s (%s)",
            descriptor.index,
            descriptor.get_flags_text(),
            policy,
        )
        return descriptor, errors

    def index_of(self, flag: str) -> int | None:
        """Return the index a spelling resolves to, or None when unregistered."""
        return self._flag_map.get(flag)

    def get(self, index: int) -> OptionDescriptor | None:
        return self._descriptors.get(index)

    def find_short(self, char: str) -> OptionDescriptor | None:
        return self._short_options.get(char)

    def find_long(self, name: str) -> list[OptionDescriptor]:
        """
        Resolve a long spelling, allowing unambiguous abbreviations.

        An exact match always wins. Otherwise every option whose long spelling
        starts with `name` is returned, so the caller can tell a unique
        abbreviation (one match) from an ambiguous one (several matches).
        """
        exact = self._long_options.get(name)
        if exact is not None:
            return [exact]
        return [
            descriptor
            for long_name, descriptor in self._long_options.items()
            if long_name.startswith(name)
        ]

    @property
    def flags(self) -> dict[str, int]:
        return dict(self._flag_map)

    @property
    def short_option_string(self) -> str:
        """Return the option string getopt would be given for the short options."""
        return ":" + "".join(
            f"{char}{descriptor.policy.getopt_suffix}"
            for char, descriptor in self._short_options.items()
        )

    @property
    def long_options(self) -> dict[str, OptionDescriptor]:
        """Long option names mapped to their options, in declaration order."""
        return dict(self._long_options)

    def to_definition_list(self) -> list[dict[str, Any]]:
        """Return a list of option definitions, in declaration order."""
        return [descriptor.to_definition() for descriptor in self]

    def __iter__(self) -> Iterator[OptionDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, flag: object) -> bool:
        return flag in self._flag_map

    def __str__(self) -> str:
        return f"OptionTable(options={len(self)}, flags={len(self._flag_map)})"

    def __repr__(self) -> str:
        return str(self)
