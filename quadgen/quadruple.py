"""Three-address code as quadruples: operations, storage and printing."""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import IO, Iterator, Optional, Union

MAX_QUADRUPLES = 10000

_TABLE_HEADER = "  #  | Operation     | Arg1      | Arg2      | Result"
_TABLE_RULE = "-----|---------------|-----------|-----------|----------"


class QuadOp(IntEnum):
    """Operations a quadruple can carry."""

    ADD = 0
    SUB = 1
    MUL = 2
    DIV = 3
    MOD = 4
    NEG = 5
    ASSIGN = 6
    LT = 7
    GT = 8
    LE = 9
    GE = 10
    EQ = 11
    NEQ = 12
    AND = 13
    OR = 14
    NOT = 15
    LABEL = 16
    JUMP = 17
    JUMPZ = 18
    JUMPNZ = 19
    PARAM = 20
    ARG = 21
    CALL = 22
    RETURN = 23
    ASSIGN_CHAR = 24
    ASSIGN_STR = 25
    CONCAT = 26
    STREQ = 27
    STRNEQ = 28
    INT_TO_FLOAT = 29
    CHAR_TO_STRING = 30


_OP_NAMES = {op: op.name for op in QuadOp}
_OP_NAMES[QuadOp.ASSIGN_CHAR] = "ASSIGN_CHR"


def op_name(op: Union[QuadOp, int]) -> str:
    """Return the printed name of an operation, or "UNKNOWN"."""
    try:
        return _OP_NAMES[QuadOp(op)]
    except ValueError:
        return "UNKNOWN"


def int_to_string(value: int) -> str:
    """Render an integer as decimal text."""
    return "%d" % value


def float_to_string(value: float) -> str:
    """Render a single-precision float with %g formatting."""
    single = struct.unpack("f", struct.pack("f", value))[0]
    return "%g" % single


@dataclass(frozen=True)
class Quadruple:
    """One instruction: an operation with up to two arguments and a result."""

    op: Union[QuadOp, int]
    arg1: Optional[str] = None
    arg2: Optional[str] = None
    result: Optional[str] = None


class QuadrupleError(Exception):
    """Raised when the quadruple list cannot take another entry."""


class QuadrupleList:
    """An ordered list of emitted quadruples with temp and label counters."""

    def __init__(self, capacity: int = MAX_QUADRUPLES) -> None:
        self.capacity = capacity
        self._quads: list[Quadruple] = []
        self._temp_count = 0
        self._label_count = 0

    def reset(self) -> None:
        """Drop all quadruples and restart the temp and label counters."""
        self._quads.clear()
        self._temp_count = 0
        self._label_count = 0

    def emit(
        self,
        op: Union[QuadOp, int],
        arg1: Optional[str] = None,
        arg2: Optional[str] = None,
        result: Optional[str] = None,
    ) -> Quadruple:
        """Append a quadruple and return it."""
        if len(self._quads) >= self.capacity:
            raise QuadrupleError("Too many quadruples")
        quad = Quadruple(op, arg1, arg2, result)
        self._quads.append(quad)
        return quad

    def new_temp(self) -> str:
        """Return a fresh temporary name: t0, t1, ..."""
        name = f"t{self._temp_count}"
        self._temp_count += 1
        return name

    def new_label(self) -> str:
        """Return a fresh label name: L0, L1, ..."""
        name = f"L{self._label_count}"
        self._label_count += 1
        return name

    def __len__(self) -> int:
        return len(self._quads)

    def __iter__(self) -> Iterator[Quadruple]:
        return iter(self._quads)

    def __getitem__(self, index):
        return self._quads[index]

    def format_rows(self) -> list[str]:
        """Return one formatted table row per quadruple."""
        return [
            "%4d | %-13s | %-9s | %-9s | %-9s"
            % (
                number,
                op_name(quad.op),
                "-" if quad.arg1 is None else quad.arg1,
                "-" if quad.arg2 is None else quad.arg2,
                "-" if quad.result is None else quad.result,
            )
            for number, quad in enumerate(self._quads)
        ]

    def print_quadruples(self, out: Optional[IO[str]] = None) -> None:
        """Write the quadruple table, framed by start and end markers."""
        out = sys.stdout if out is None else out
        out.write("\n=== Generated Quadruples ===\n")
        out.write(_TABLE_HEADER + "\n")
        out.write(_TABLE_RULE + "\n")
        for row in self.format_rows():
            out.write(row + "\n")
        out.write("=== End of Quadruples ===\n\n")

    def write_file(self, filename) -> None:
        """Write the quadruple table to a file, replacing its contents."""
        with open(filename, "w", encoding="utf-8") as file:
            file.write("==== QUADRUPLES ====\n")
            file.write(_TABLE_HEADER + "\n")
            file.write(_TABLE_RULE + "\n")
            for row in self.format_rows():
                file.write(row + "\n")