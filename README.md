# quadgen

quadgen provides parts for the back end of a small compiler. It has no third-party dependencies.

- **`quadgen.quadruple`** stores three-address code as quadruples. Each quadruple holds `op`, `arg1`, `arg2` and `result`. The module hands out fresh temporaries (`t0`, `t1`, ...) and labels (`L0`, `L1`, ...), and prints the code as a fixed-width table.
- **`quadgen.symbols`** is a symbol table with nested scopes. It holds:
  - typed variables, which may be `const`;
  - functions, which may only be declared in the global scope.

  It detects redeclarations and reports unused variables. It also logs the symbols of each scope when that scope is left.
- **`quadgen.report`** renders the symbol table as a report. Each variable's value is taken from its last assignment in a list of quadruples.

## Installation

```
pip install quadgen
```

## Emitting quadruples

```python
import sys
from quadgen.quadruple import QuadOp, QuadrupleList, int_to_string, float_to_string

code = QuadrupleList()                     # capacity defaults to 10000
t = code.new_temp()                        # "t0"
code.emit(QuadOp.ADD, "a", int_to_string(1), t)
code.emit(QuadOp.ASSIGN, t, None, "a")
end = code.new_label()                     # "L0"
code.emit(QuadOp.JUMPZ, "a", None, end)
code.emit(QuadOp.LABEL, None, None, end)

code.print_quadruples(sys.stdout)          # framed by start/end markers
code.write_file("quadruples.txt")          # replaces the file's contents
```

`QuadrupleList` can be used like a sequence. It supports `len()`, iteration and indexing, and it yields `Quadruple` objects.

- `format_rows()` returns the table rows without headers.
- In the table, an argument that is `None` is shown as `-`.
- `emit` raises `QuadrupleError` once the list is at capacity.
- `reset()` clears the list and restarts the temporary and label counters.

Helper functions:

- `op_name(op)` returns the printed name of an operation. For example, `QuadOp.ASSIGN_CHAR` prints as `ASSIGN_CHR`. A value outside `QuadOp` gives `"UNKNOWN"`.
- `float_to_string` rounds to single precision and formats the value with `%g`.

## Symbol tables

```python
from quadgen.symbols import SymbolTable, Type, TypeSpec, Param

table = SymbolTable("symbol_tables.txt")   # pass None to turn logging off
table.add_variable("x", TypeSpec(Type.INT))
table.set_value("x", 42)
table.get_value("x")                       # 42

table.add_function("f", TypeSpec(Type.VOID), [Param("n", TypeSpec(Type.INT))])

table.enter_scope()
table.add_variable("s", TypeSpec(Type.STRING, is_const=True))
table.exit_scope()                         # logs the scope, returns to the parent
table.export_global_scope()
```

### Logging

The first write to the log file replaces its contents. Every later write from the same table appends to it. `exit_scope` writes the table of the scope being left, and `export_global_scope` writes the table of the global scope.

### Errors

`SemanticError` is raised when:

- a name is declared twice in the same scope;
- a function is declared outside the global scope, or redefined;
- a function is given more than 16 parameters;
- `set_value` or `get_value` is called on a name that is not a variable;
- the value passed to `set_value` does not match the variable's type.

Values of the right type are:

| Variable type | Accepted value |
|---|---|
| int | an `int` |
| float | any number, stored at single precision |
| char | a one-character `str` |
| string | a `str` or `None` |

### Warnings

The following emit a `RuntimeWarning`:

- Reading a variable that has not been set. The call still returns a zero value: `0`, `0.0`, `"\0"`, or `""` for a string.
- Calling `exit_scope` in the global scope.

### Lookups and scopes

`lookup` searches the current scope first, then each enclosing scope in turn. `visible_scopes()` returns that chain. `reset()` starts again from an empty global scope.

### Unused variables

`unused_variables()` lists the visible variables that have never been marked as used, innermost scope first. `check_unused_variables(out)` writes a warning line for each of them, to stderr by default, and returns the list.

### Formatting helpers

- `type_to_string` and `spec_to_string` give type names such as `"const string"`.
- `format_value`, `format_row` and `format_scope` render the table rows that the log file uses.

## Symbol table report

```python
from quadgen.report import format_symbol_table, print_symbol_table_to_file

text = format_symbol_table(table, code)
print_symbol_table_to_file(table, code, "symbol_table.txt")
```

The report lists the global scope first. The nested scopes follow, from the current scope outwards.

For each variable, `resolve_value` takes the value from its last `ASSIGN`, `ASSIGN_STR` or `ASSIGN_CHAR` quadruple, if there is one. Otherwise it uses the value stored in the symbol.

Literal values found this way are also written back into the symbol. This covers:

- numbers, for int and float variables;
- strings;
- character literals such as `'a'`.

## What it does not do

quadgen has no front end and no command-line tool. It does not read, tokenize or parse source programs. The caller drives the symbol table and emits the quadruples itself.