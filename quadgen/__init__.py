"""Quadruple intermediate code, scoped symbol tables and symbol table reports."""

__version__ = "0.1.0"
__all__ = ["quadruple", "symbols", "report"]