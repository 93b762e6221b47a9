"""Generated member declarations and their Swift rendering.

A key case becomes either a ConstantBinding (default value without format
specifiers) or a FormattingFunction (one typed parameter per resolved
argument index). Both carry the same ResourceLookup.

Lookup call shapes:

    LEGACY   NSLocalizedString(K, tableName: T, bundle: B, value: D, comment: C)
    CURRENT  String(localized: K, defaultValue: D[, table: T][, bundle: B][, comment: C])

CURRENT omits table, bundle and comment when they equal their defaults
(``nil``, ``.main``, ``""``). LEGACY always writes every argument.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeAlias

from localizing.constants import (
    ARGUMENT_PREFIX,
    DEFAULT_BUNDLE,
    DEFAULT_BUNDLE_ALIASES,
    DEFAULT_COMMENT,
    DEFAULT_INDENT,
    DEFAULT_TABLE,
    TEMP_VARIABLE,
)
from localizing.enums import ArgType, GenerationMode

__all__ = [
    "ConstantBinding",
    "FormattingFunction",
    "GeneratedDeclaration",
    "ResourceLookup",
]


@dataclass(frozen=True, slots=True)
class ResourceLookup:
    """Arguments of one resource lookup call, as expression source text.

    Attributes:
        key: Quoted key literal, e.g. '"about.key1"'
        default_value: Default value literal as written in the key-enumeration
        table: Table expression ("nil" for the default table)
        bundle: Bundle expression (".main" for the main bundle)
        comment: Translator comment literal
    """

    key: str
    default_value: str
    table: str = DEFAULT_TABLE
    bundle: str = DEFAULT_BUNDLE
    comment: str = DEFAULT_COMMENT

    @property
    def uses_default_table(self) -> bool:
        return self.table == DEFAULT_TABLE

    @property
    def uses_default_bundle(self) -> bool:
        return self.bundle in DEFAULT_BUNDLE_ALIASES

    def render(self, mode: GenerationMode) -> str:
        """Render the lookup call expression."""
        if mode is GenerationMode.LEGACY:
            return (
                f"NSLocalizedString({self.key}, tableName: {self.table}, "
                f"bundle: {self.bundle}, value: {self.default_value}, "
                f"comment: {self.comment})"
            )

        parts = [f"localized: {self.key}", f"defaultValue: {self.default_value}"]
        if not self.uses_default_table:
            parts.append(f"table: {self.table}")
        if not self.uses_default_bundle:
            parts.append(f"bundle: {self.bundle}")
        if self.comment != DEFAULT_COMMENT:
            parts.append(f"comment: {self.comment}")
        return f"String({', '.join(parts)})"


@dataclass(frozen=True, slots=True)
class ConstantBinding:
    """``static let name = <lookup>``.

    Attributes:
        name: Member name as written in the key-enumeration (escaping kept)
        lookup: Resource lookup bound to the name
    """

    name: str
    lookup: ResourceLookup

    def render(self, mode: GenerationMode, indent: str = DEFAULT_INDENT) -> str:  # noqa: ARG002
        return f"static let {self.name} = {self.lookup.render(mode)}"


@dataclass(frozen=True, slots=True)
class FormattingFunction:
    """``static func name(_ arg1: T1, ...) -> String`` formatting its lookup.

    Attributes:
        name: Member name as written in the key-enumeration (escaping kept)
        lookup: Resource lookup producing the format template
        parameters: Parameter types in argument index order
    """

    name: str
    lookup: ResourceLookup
    parameters: tuple[ArgType, ...]

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """arg1, arg2, ... one per parameter."""
        return tuple(f"{ARGUMENT_PREFIX}{i}" for i in range(1, len(self.parameters) + 1))

    def render(self, mode: GenerationMode, indent: str = DEFAULT_INDENT) -> str:
        """Render the four-line function declaration.

        Example:
            >>> fn = FormattingFunction("key3", ResourceLookup('"key3"', '"%@"'), (ArgType.STRING,))
            >>> print(fn.render(GenerationMode.CURRENT))
            static func key3(_ arg1: String) -> String {
                let temp = String(localized: "key3", defaultValue: "%@")
                return String(format: temp, arg1)
            }
        """
        names = self.parameter_names
        signature = ", ".join(
            f"_ {name}: {arg_type}" for name, arg_type in zip(names, self.parameters, strict=True)
        )
        arguments = ", ".join((TEMP_VARIABLE, *names))
        return "\n".join((
            f"static func {self.name}({signature}) -> String {{",
            f"{indent}let {TEMP_VARIABLE} = {self.lookup.render(mode)}",
            f"{indent}return String(format: {arguments})",
            "}",
        ))


GeneratedDeclaration: TypeAlias = ConstantBinding | FormattingFunction
