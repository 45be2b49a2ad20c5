"""Whole-program symbol table report, with values recovered from quadruples."""

from __future__ import annotations

import re
import struct
import warnings
from typing import Iterable

from quadgen.quadruple import QuadOp, Quadruple
from quadgen.symbols import (
    MAX_SYMBOLS,
    TABLE_BORDER,
    TABLE_HEADER,
    Symbol,
    SymbolKind,
    SymbolTable,
    Type,
    format_row,
    format_value,
)

MAX_SCOPES = 100

_ASSIGN_OPS = (QuadOp.ASSIGN, QuadOp.ASSIGN_STR, QuadOp.ASSIGN_CHAR)
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_DIGITS = "0123456789"


def _to_single(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _parse_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group()) if match else 0


def _parse_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group()) if match else 0.0


def _is_numeric_literal(text: str) -> bool:
    if text[:1] in _DIGITS and text:
        return True
    return len(text) >= 2 and text[0] == "-" and text[1] in _DIGITS


def _quote_string(text: str) -> str:
    if len(text) > 15:
        return '"%s..."' % text[:12]
    return '"%s"' % text


def _last_assignment(symbol: Symbol, quads: list[Quadruple]):
    for quad in reversed(quads):
        if (
            quad.op in _ASSIGN_OPS
            and quad.result is not None
            and quad.result == symbol.name
            and quad.arg1 is not None
        ):
            return quad
    return None


def resolve_value(symbol: Symbol, quadruples: Iterable[Quadruple]) -> str:
    """Return the value text for a symbol, preferring its last assignment.

    Literal assignments found in the quadruples are also stored back into
    the symbol.
    """
    if symbol.kind is not SymbolKind.VAR:
        return "0.00"
    quad = _last_assignment(symbol, list(quadruples))
    if quad is None:
        return format_value(symbol)

    arg = quad.arg1
    base = symbol.spec.base
    if quad.op == QuadOp.ASSIGN_STR:
        if base is Type.STRING:
            symbol.value = arg
            symbol.has_value = True
        return _quote_string(arg)
    if quad.op == QuadOp.ASSIGN_CHAR:
        if base is Type.CHAR and len(arg) >= 3:
            symbol.value = arg[1]
            symbol.has_value = True
        return arg
    if _is_numeric_literal(arg):
        if base is Type.INT:
            number = _parse_int(arg)
            symbol.value = number
            symbol.has_value = True
            return "%d.00" % number
        if base is Type.FLOAT:
            number = _to_single(_parse_float(arg))
            symbol.value = number
            symbol.has_value = True
            return "%.2f" % number
        return "0.00"
    return arg


def _collect_symbols(table: SymbolTable) -> list[Symbol]:
    limit = MAX_SYMBOLS * MAX_SCOPES
    inner = [s for s in table.visible_scopes() if s is not table.global_scope]
    scopes = [table.global_scope] + inner[:MAX_SCOPES]
    symbols: list[Symbol] = []
    for scope in scopes:
        for symbol in scope:
            if len(symbols) >= limit:
                warnings.warn("Too many symbols to print", RuntimeWarning)
                break
            symbols.append(symbol)
    return symbols


def format_symbol_table(table: SymbolTable, quadruples: Iterable[Quadruple]) -> str:
    """Render every visible symbol as a table: global scope first, then inner."""
    quads = list(quadruples)
    lines = [TABLE_BORDER, TABLE_HEADER, TABLE_BORDER]
    for symbol in _collect_symbols(table):
        value_text = resolve_value(symbol, quads)
        lines.append(format_row(symbol, value_text))
    lines.append(TABLE_BORDER)
    return "\n".join(lines) + "\n"


def print_symbol_table_to_file(
    table: SymbolTable, quadruples: Iterable[Quadruple], filename
) -> None:
    """Write the symbol table report to a file, replacing its contents."""
    text = format_symbol_table(table, quadruples)
    with open(filename, "w", encoding="utf-8") as file:
        file.write(text)