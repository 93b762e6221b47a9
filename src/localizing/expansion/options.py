"""Expansion configuration.

Provides a single frozen dataclass with every knob the macro driver and the
declaration synthesizer read. Constructing ``ExpansionOptions()`` with no
arguments reproduces the 0.9.x behaviour.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from localizing.constants import DEFAULT_INDENT, DEFAULT_SEPARATOR
from localizing.enums import GenerationMode

__all__ = ["ExpansionOptions"]


@dataclass(frozen=True, slots=True)
class ExpansionOptions:
    """Immutable configuration for one or many expansions.

    Attributes:
        mode: Lookup call shape (default: GenerationMode.CURRENT).
        default_separator: Separator used between prefix and case name when
            the attribute supplies none (default: "_").
        indent: Indent unit for generated function bodies and for members
            of bodies that have none to copy from (default: four spaces).
        warn_implicit_separator: Emit the separator-default advisory when a
            prefix is given without a separator (default: True).

    Example:
        >>> options = ExpansionOptions(mode=GenerationMode.LEGACY)
        >>> options.default_separator
        '_'
    """

    mode: GenerationMode = GenerationMode.CURRENT
    default_separator: str = DEFAULT_SEPARATOR
    indent: str = DEFAULT_INDENT
    warn_implicit_separator: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            TypeError: If mode is not a GenerationMode.
            ValueError: If indent is empty or contains non-blank characters,
                or if default_separator contains a quote or line break.
        """
        if not isinstance(self.mode, GenerationMode):
            msg = f"mode must be a GenerationMode, got {type(self.mode).__name__}"
            raise TypeError(msg)
        if not self.indent or self.indent.strip(" \t"):
            msg = "indent must be a non-empty run of spaces or tabs"
            raise ValueError(msg)
        if any(ch in self.default_separator for ch in ('"', "\\", "\n", "\r")):
            msg = "default_separator must not contain quotes, backslashes or line breaks"
            raise ValueError(msg)
