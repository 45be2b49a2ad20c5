"""Scoped symbol tables for variables and functions."""

from __future__ import annotations

import struct
import sys
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Iterator, Optional, Union

HASH_SIZE = 97
MAX_PARAMS = 16
MAX_SYMBOLS = 1000
DEFAULT_LOG_PATH = "symbol_tables.txt"

TABLE_BORDER = "+-------+----------------+--------+-------------+---------+------------+"
TABLE_HEADER = "| Scope | Symbol         | Type   | Initialized | Value   | Is Func    |"


class Type(Enum):
    """Base types of the language."""

    INT = 0
    FLOAT = 1
    CHAR = 2
    STRING = 3
    VOID = 4
    ERROR = 5


class SymbolKind(Enum):
    """What a symbol names."""

    VAR = 0
    FUNC = 1


@dataclass(frozen=True)
class TypeSpec:
    """A base type together with its const qualifier."""

    base: Type
    is_const: bool = False


@dataclass(frozen=True)
class Param:
    """A named, typed function parameter."""

    name: str
    spec: TypeSpec


Value = Union[int, float, str, None]


@dataclass
class Symbol:
    """A declared variable or function."""

    name: str
    kind: SymbolKind
    spec: TypeSpec
    scope_level: int = 0
    value: Value = None
    has_value: bool = False
    is_used: bool = False
    params: tuple[Param, ...] = field(default_factory=tuple)

    @property
    def param_count(self) -> int:
        return len(self.params)


class SemanticError(Exception):
    """Raised for declaration, lookup and type errors in the symbol table."""


_TYPE_NAMES = {
    Type.INT: "int",
    Type.FLOAT: "float",
    Type.CHAR: "char",
    Type.STRING: "string",
    Type.VOID: "void",
}

_DEFAULT_VALUES: dict[Type, Value] = {
    Type.INT: 0,
    Type.FLOAT: 0.0,
    Type.CHAR: "\0",
    Type.STRING: None,
}


def _hash(name: str) -> int:
    h = 0
    for byte in name.encode("utf-8"):
        signed = byte - 256 if byte >= 128 else byte
        h = (h * 33 + signed) & 0xFFFFFFFF
    return h % HASH_SIZE


def _to_single(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def type_to_string(base: Type) -> str:
    """Return the source-language name of a base type ("error" if none)."""
    return _TYPE_NAMES.get(base, "error")


def spec_to_string(spec: TypeSpec) -> str:
    """Return the type with a "const " prefix where it applies."""
    return ("const " if spec.is_const else "") + type_to_string(spec.base)


def _quote_string(text: str) -> str:
    if len(text) > 15:
        return '"%s..."' % text[:12]
    return '"%s"' % text


def format_value(symbol: Symbol) -> str:
    """Render a symbol's stored value as it appears in a table row."""
    if symbol.kind is not SymbolKind.VAR or not symbol.has_value:
        return "0.00"
    base = symbol.spec.base
    if base is Type.INT:
        return "%d.00" % symbol.value
    if base is Type.FLOAT:
        return "%.2f" % symbol.value
    if base is Type.CHAR:
        return "'%s'" % symbol.value
    if base is Type.STRING:
        return "null" if symbol.value is None else _quote_string(symbol.value)
    return "0.00"


def format_row(symbol: Symbol, value_text: str) -> str:
    """Render one table row for a symbol with the given value text."""
    type_text = _TYPE_NAMES.get(symbol.spec.base, "unknown")
    return "| %-5d | %-14s | %-6s | %-11d | %-7s | %-10d |" % (
        symbol.scope_level,
        symbol.name,
        type_text,
        1 if symbol.has_value else 0,
        value_text,
        1 if symbol.kind is SymbolKind.FUNC else 0,
    )


def format_scope(scope: "Scope") -> str:
    """Render the symbol table of a single scope, heading included."""
    symbols = list(scope)
    if len(symbols) > MAX_SYMBOLS:
        warnings.warn("Too many symbols in scope to export", RuntimeWarning)
        symbols = symbols[:MAX_SYMBOLS]
    lines = [
        "",
        "==== Scope Level %d Symbol Table ====" % scope.level,
        TABLE_BORDER,
        TABLE_HEADER,
        TABLE_BORDER,
    ]
    lines.extend(format_row(sym, format_value(sym)) for sym in symbols)
    lines.append(TABLE_BORDER)
    return "\n".join(lines) + "\n"


class Scope:
    """One level of nesting: a hashed set of symbols and a parent link."""

    def __init__(self, parent: Optional["Scope"] = None) -> None:
        self.parent = parent
        self.level = 0 if parent is None else parent.level + 1
        self._buckets: dict[int, list[Symbol]] = {}

    def add(self, symbol: Symbol) -> None:
        """Insert a symbol at the head of its bucket."""
        self._buckets.setdefault(_hash(symbol.name), []).insert(0, symbol)

    def find(self, name: str) -> Optional[Symbol]:
        """Return the most recent symbol with this name in this scope only."""
        for symbol in self._buckets.get(_hash(name), ()):
            if symbol.name == name:
                return symbol
        return None

    def __iter__(self) -> Iterator[Symbol]:
        for index in sorted(self._buckets):
            yield from self._buckets[index]


class SymbolTable:
    """A chain of scopes rooted at a global scope, with scope logging."""

    def __init__(self, log_path=DEFAULT_LOG_PATH) -> None:
        self.log_path = log_path
        self._first_export = True
        self.global_scope = Scope()
        self.current_scope = self.global_scope

    def _write_log(self, text: str) -> None:
        if self.log_path is None:
            return
        mode = "w" if self._first_export else "a"
        with open(self.log_path, mode, encoding="utf-8") as file:
            file.write(text)
        self._first_export = False

    def enter_scope(self) -> Scope:
        """Open a nested scope and make it current."""
        self.current_scope = Scope(self.current_scope)
        return self.current_scope

    def exit_scope(self) -> Optional[Scope]:
        """Log the current scope's table and return to its parent."""
        scope = self.current_scope
        if scope is self.global_scope:
            warnings.warn("Cannot exit global scope", RuntimeWarning)
            return None
        try:
            self._write_log(format_scope(scope))
        finally:
            self.current_scope = scope.parent
        return scope

    def export_global_scope(self) -> None:
        """Append the global scope's table to the log."""
        self._write_log(
            "\n==== Global Scope Symbol Table ====\n" + format_scope(self.global_scope)
        )

    def add_variable(self, name: str, spec: TypeSpec) -> Symbol:
        """Declare a variable in the current scope."""
        if self.current_scope.find(name) is not None:
            raise SemanticError("redeclaration of '%s'" % name)
        symbol = Symbol(
            name=name,
            kind=SymbolKind.VAR,
            spec=spec,
            scope_level=self.current_scope.level,
            value=_DEFAULT_VALUES.get(spec.base),
        )
        self.current_scope.add(symbol)
        return symbol

    def add_function(self, name: str, return_spec: TypeSpec, params=()) -> Symbol:
        """Declare a function; only allowed in the global scope."""
        if self.current_scope is not self.global_scope:
            raise SemanticError("functions can only be declared in global scope")
        if any(s.name == name and s.kind is SymbolKind.FUNC for s in self.global_scope):
            raise SemanticError("function '%s' redefined" % name)
        params = tuple(params)
        if len(params) > MAX_PARAMS:
            raise SemanticError(
                "function '%s' has more than %d parameters" % (name, MAX_PARAMS)
            )
        symbol = Symbol(
            name=name,
            kind=SymbolKind.FUNC,
            spec=return_spec,
            scope_level=0,
            params=params,
        )
        self.global_scope.add(symbol)
        return symbol

    def visible_scopes(self) -> list[Scope]:
        """Return the scope chain from the current scope out to the global one."""
        scopes = []
        scope: Optional[Scope] = self.current_scope
        while scope is not None:
            scopes.append(scope)
            scope = scope.parent
        return scopes

    def lookup(self, name: str) -> Optional[Symbol]:
        """Find a name, innermost scope first."""
        for scope in self.visible_scopes():
            symbol = scope.find(name)
            if symbol is not None:
                return symbol
        return None

    def _variable(self, name: str) -> Symbol:
        symbol = self.lookup(name)
        if symbol is None or symbol.kind is not SymbolKind.VAR:
            raise SemanticError("'%s' is not a variable" % name)
        return symbol

    def set_value(self, name: str, value: Value) -> None:
        """Store a value in a variable whose type matches it."""
        symbol = self._variable(name)
        base = symbol.spec.base
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        if base is Type.INT and isinstance(value, int) and not isinstance(value, bool):
            symbol.value = value
        elif base is Type.FLOAT and is_number:
            symbol.value = _to_single(float(value))
        elif base is Type.CHAR and isinstance(value, str) and len(value) == 1:
            symbol.value = value
        elif base is Type.STRING and (value is None or isinstance(value, str)):
            symbol.value = value
        else:
            raise SemanticError("Type mismatch assigning to %s" % name)
        symbol.has_value = True

    def get_value(self, name: str) -> Value:
        """Return a variable's value; warns and gives a zero value if unset."""
        symbol = self._variable(name)
        base = symbol.spec.base
        if base not in _DEFAULT_VALUES:
            raise SemanticError("Cannot get value from %s" % name)
        if base is Type.STRING:
            if not symbol.has_value or symbol.value is None:
                warnings.warn(
                    "Using uninitialized string variable %s" % name, RuntimeWarning
                )
                return ""
            return symbol.value
        if not symbol.has_value:
            warnings.warn("Using uninitialized variable %s" % name, RuntimeWarning)
            return _DEFAULT_VALUES[base]
        return symbol.value

    def unused_variables(self) -> list[Symbol]:
        """Return visible variables never marked as used, innermost first."""
        return [
            symbol
            for scope in self.visible_scopes()
            for symbol in scope
            if symbol.kind is SymbolKind.VAR and not symbol.is_used
        ]

    def check_unused_variables(self, out: Optional[IO[str]] = None) -> list[Symbol]:
        """Write a warning for each unused variable and return them."""
        out = sys.stderr if out is None else out
        unused = self.unused_variables()
        for symbol in unused:
            out.write(
                "Warning: Variable '%s' at scope level %d is declared but never used\n"
                % (symbol.name, symbol.scope_level)
            )
        if unused:
            out.write("\n")
        return unused

    def reset(self) -> None:
        """Discard all scopes and start again with an empty global scope."""
        self.global_scope = Scope()
        self.current_scope = self.global_scope