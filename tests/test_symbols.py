import io

import pytest

from quadgen.symbols import (
    MAX_PARAMS,
    TABLE_BORDER,
    TABLE_HEADER,
    Param,
    Scope,
    SemanticError,
    Symbol,
    SymbolKind,
    SymbolTable,
    Type,
    TypeSpec,
    format_row,
    format_scope,
    format_value,
    spec_to_string,
    type_to_string,
)

INT = TypeSpec(Type.INT)
FLOAT = TypeSpec(Type.FLOAT)
CHAR = TypeSpec(Type.CHAR)
STRING = TypeSpec(Type.STRING)


@pytest.fixture
def table(tmp_path):
    return SymbolTable(log_path=tmp_path / "scopes.txt")


def test_type_names():
    assert type_to_string(Type.INT) == "int"
    assert type_to_string(Type.STRING) == "string"
    assert type_to_string(Type.ERROR) == "error"


def test_spec_to_string_const_prefix():
    assert spec_to_string(TypeSpec(Type.FLOAT, True)) == "const float"
    assert spec_to_string(TypeSpec(Type.CHAR)) == "char"


def test_add_and_lookup(table):
    sym = table.add_variable("x", INT)
    assert table.lookup("x") is sym
    assert sym.scope_level == 0
    assert sym.kind is SymbolKind.VAR
    assert table.lookup("missing") is None


def test_redeclaration_in_same_scope(table):
    table.add_variable("x", INT)
    with pytest.raises(SemanticError):
        table.add_variable("x", FLOAT)


def test_shadowing_and_exit(table):
    outer = table.add_variable("x", INT)
    table.enter_scope()
    inner = table.add_variable("x", FLOAT)
    assert table.lookup("x") is inner
    assert inner.scope_level == 1
    table.exit_scope()
    assert table.lookup("x") is outer


def test_visible_scopes_levels(table):
    table.enter_scope()
    table.enter_scope()
    assert [s.level for s in table.visible_scopes()] == [2, 1, 0]


def test_function_only_in_global(table):
    table.enter_scope()
    with pytest.raises(SemanticError):
        table.add_function("f", INT, [])


def test_function_redefinition(table):
    params = [Param("a", INT), Param("b", FLOAT)]
    f = table.add_function("f", INT, params)
    assert f.param_count == 2
    assert f.params[1].name == "b"
    with pytest.raises(SemanticError):
        table.add_function("f", FLOAT, [])


def test_variable_clashes_with_function(table):
    table.add_function("f", INT, [])
    with pytest.raises(SemanticError):
        table.add_variable("f", INT)


def test_too_many_params(table):
    params = [Param("p%d" % n, INT) for n in range(MAX_PARAMS + 1)]
    with pytest.raises(SemanticError):
        table.add_function("g", INT, params)


@pytest.mark.parametrize(
    "spec, value",
    [(INT, 42), (CHAR, "q"), (STRING, "hello"), (FLOAT, 2.5)],
)
def test_set_get_round_trip(table, spec, value):
    table.add_variable("v", spec)
    table.set_value("v", value)
    assert table.get_value("v") == value
    assert table.lookup("v").has_value


def test_float_is_single_precision(table):
    table.add_variable("f", FLOAT)
    table.set_value("f", 0.1)
    assert table.get_value("f") == pytest.approx(0.1, rel=1e-6)
    assert table.get_value("f") != 0.1


def test_set_type_mismatch(table):
    table.add_variable("n", INT)
    with pytest.raises(SemanticError):
        table.set_value("n", "text")
    assert table.lookup("n").has_value is False


def test_set_non_variable(table):
    table.add_function("f", INT, [])
    with pytest.raises(SemanticError):
        table.set_value("f", 1)
    with pytest.raises(SemanticError):
        table.set_value("nothing", 1)


def test_get_uninitialized_warns(table):
    table.add_variable("n", INT)
    table.add_variable("s", STRING)
    with pytest.warns(RuntimeWarning):
        assert table.get_value("n") == 0
    with pytest.warns(RuntimeWarning):
        assert table.get_value("s") == ""


def test_get_unknown_raises(table):
    with pytest.raises(SemanticError):
        table.get_value("ghost")


def test_format_value_default_and_int(table):
    sym = table.add_variable("n", INT)
    assert format_value(sym) == "0.00"
    table.set_value("n", 7)
    assert format_value(sym) == "7.00"


def test_format_value_long_string(table):
    sym = table.add_variable("s", STRING)
    text = "abcdefghijklmnopqrst"
    table.set_value("s", text)
    rendered = format_value(sym)
    assert rendered == '"' + text[:12] + '..."'


def test_format_value_short_string_and_null(table):
    sym = table.add_variable("s", STRING)
    table.set_value("s", None)
    assert format_value(sym) == "null"
    table.set_value("s", "hi")
    assert format_value(sym) == '"hi"'


def test_format_row_fields(table):
    f = table.add_function("main", TypeSpec(Type.VOID), [])
    row = format_row(f, "0.00")
    fields = [part.strip() for part in row.strip("|").split("|")]
    assert fields == ["0", "main", "void", "0", "0.00", "1"]
    assert len(row) == len(TABLE_HEADER)


def test_scope_iteration_contains_all():
    scope = Scope()
    names = ["alpha", "beta", "gamma", "delta"]
    for name in names:
        scope.add(Symbol(name, SymbolKind.VAR, INT))
    assert sorted(s.name for s in scope) == sorted(names)
    assert scope.find("gamma").name == "gamma"
    assert scope.find("omega") is None


def test_format_scope_layout(table):
    table.add_variable("x", INT)
    text = format_scope(table.global_scope)
    lines = text.splitlines()
    assert lines[1] == "==== Scope Level 0 Symbol Table ===="
    assert lines[2] == TABLE_BORDER and lines[3] == TABLE_HEADER
    assert lines[-1] == TABLE_BORDER
    assert len(lines) == 7


def test_exit_scope_writes_and_appends(tmp_path):
    log = tmp_path / "scopes.txt"
    log.write_text("stale\n")
    table = SymbolTable(log_path=log)
    table.enter_scope()
    table.add_variable("a", INT)
    table.exit_scope()
    first = log.read_text()
    assert "stale" not in first
    assert "==== Scope Level 1 Symbol Table ====" in first
    table.export_global_scope()
    second = log.read_text()
    assert second.startswith(first)
    assert "==== Global Scope Symbol Table ====" in second


def test_exit_global_scope_warns(table):
    with pytest.warns(RuntimeWarning):
        assert table.exit_scope() is None
    assert table.current_scope is table.global_scope


def test_unused_variables(table):
    table.add_variable("used", INT).is_used = True
    table.add_variable("idle", INT)
    table.add_function("f", INT, [])
    table.enter_scope()
    table.add_variable("inner", CHAR)
    names = [s.name for s in table.unused_variables()]
    assert names == ["inner", "idle"]
    out = io.StringIO()
    table.check_unused_variables(out)
    text = out.getvalue()
    assert "Warning: Variable 'inner' at scope level 1 is declared but never used" in text
    assert text.endswith("\n\n")


def test_check_unused_silent_when_none(table):
    out = io.StringIO()
    assert table.check_unused_variables(out) == []
    assert out.getvalue() == ""


def test_reset(table):
    table.add_variable("x", INT)
    table.enter_scope()
    table.reset()
    assert table.lookup("x") is None
    assert table.current_scope is table.global_scope
    assert len(table.visible_scopes()) == 1