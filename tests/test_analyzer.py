"""
End-to-end semantic analysis tests: source text -> parse -> analyze.
"""

import pytest

from analyzer import SemanticAnalyzer, analyze
from ast_nodes import Program
from parser import parse

from conftest import (
    CLEAN_PROGRAM_SPLC, FORWARD_GLOBAL_STRUCT_SPLC, FORWARD_LOCAL_STRUCT_SPLC, INCOMPLETE,
    REDECL, REDEF, SHADOWING_SPLC, UNDECL, analyze_source, error_kinds, error_names,
)


class TestBasicExamples:

    @pytest.mark.parametrize("source,kind,name,column", [
        ("int a; int a;", REDEF, "a", 12),
        ("int f(); int f();", REDECL, "f", 14),
        ("int z; int z(){}", REDEF, "z", 12),
        ("int g(){} int g(){}", REDEF, "g", 15),
        ("int c; int c();", REDECL, "c", 12),
        ("int h(int a, int a);", REDEF, "a", 18),
    ])
    def test_single_error(self, source, kind, name, column):
        result = analyze_source(source)
        assert error_kinds(result) == [kind]
        err = result.errors[0]
        assert err.name == name
        assert (err.line, err.column) == (1, column)

    def test_error_message_format(self):
        result = analyze_source("int a; int a;")
        assert result.errors[0].message == "Error at line 1:12: Redefinition of 'a'"

    def test_shadowing(self):
        result = analyze_source(SHADOWING_SPLC)
        assert result.ok
        assert [s.name for s in result.global_symbols] == ["x", "f"]

    def test_clean_program(self):
        result = analyze_source(CLEAN_PROGRAM_SPLC)
        assert result.ok, [e.message for e in result.errors]
        assert [s.name for s in result.variables()] == ["counter", "buf", "origin", "cells", "row"]
        assert [s.name for s in result.functions()] == ["add", "main"]
        assert result.symbol("cells").type.short_form() == "int*[4]"
        assert result.symbol("row").type.short_form() == "int[8]*"
        assert result.symbol("add").is_defined
        assert result.symbol("nope") is None


class TestFunctions:

    def test_declare_then_define(self):
        result = analyze_source("int f(int a);\nint f(char b) { return b; }")
        assert result.ok
        assert result.symbol("f").type.short_form() == "int(char)"

    def test_param_and_local_clash(self):
        result = analyze_source("int f(int a) {\n    int a;\n}")
        assert error_kinds(result) == [REDEF]
        assert result.errors[0].line == 2

    def test_duplicate_params_in_definition(self):
        result = analyze_source("int f(int a, int a) { }")
        assert error_kinds(result) == [REDEF]
        assert result.errors[0].column == 18

    def test_nested_block_may_shadow_param(self):
        assert analyze_source("int f(int a) { { int a; a; } }").ok

    def test_recursion_sees_own_name(self):
        assert analyze_source("int f(int n) { return f(n - 1); }").ok

    def test_body_of_rejected_definition_still_checked(self):
        result = analyze_source("int g() { } int g() { y; }")
        assert error_kinds(result) == [REDEF, UNDECL]
        assert error_names(result) == ["g", "y"]

    def test_params_are_local_to_function(self):
        result = analyze_source("int f(int a) { } int g() { a; }")
        assert error_kinds(result) == [UNDECL]

    def test_declaration_checks_params_before_return_type(self):
        source = "struct S { int a; };\nstruct S { int b; } f(int x, int x);"
        result = analyze_source(source)
        assert error_kinds(result) == [REDEF, REDEF]
        assert error_names(result) == ["x", "S"]


class TestUndeclaredUse:

    def test_undeclared_variable(self):
        result = analyze_source("int main() {\n    x = 1;\n}")
        assert error_kinds(result) == [UNDECL]
        assert (result.errors[0].line, result.errors[0].column) == (2, 5)

    def test_undeclared_call_target(self):
        result = analyze_source("int main() { foo(1); }")
        assert error_kinds(result) == [UNDECL]
        assert result.errors[0].name == "foo"

    def test_call_arguments_are_checked(self):
        result = analyze_source("int f(int a); int main() { f(b, c); }")
        assert error_names(result) == ["b", "c"]

    def test_field_names_are_not_references(self):
        source = """\
struct P { int x; };
int main() {
    struct P p;
    struct P *q;
    p.x = q->y;
    p.nothing;
}
"""
        assert analyze_source(source).ok

    def test_field_base_is_checked(self):
        result = analyze_source("int main() { r.x; }")
        assert error_names(result) == ["r"]

    def test_block_scope_ends_at_exit(self):
        result = analyze_source("int f(){ { int t; } t; }")
        assert error_kinds(result) == [UNDECL]
        assert result.errors[0].column == 21

    def test_initializer_sees_new_local(self):
        assert analyze_source("int f() { int n = n + 1; }").ok

    def test_control_flow_expressions(self):
        source = "int f() { while (a) { if (b) c; else d; } return e; }"
        assert error_names(analyze_source(source)) == ["a", "b", "c", "d", "e"]

    def test_use_before_global_definition(self):
        result = analyze_source("int f() { return g; }\nint g;")
        assert error_names(result) == ["g"]


class TestStructs:

    def test_forward_global_struct_is_legal(self):
        result = analyze_source(FORWARD_GLOBAL_STRUCT_SPLC)
        assert result.ok
        assert result.symbol("s").render_type() == "struct S{int x;}"

    def test_forward_local_struct_is_an_error(self):
        result = analyze_source(FORWARD_LOCAL_STRUCT_SPLC)
        assert error_kinds(result) == [INCOMPLETE]
        assert (result.errors[0].line, result.errors[0].name) == (3, "s")

    def test_global_struct_never_defined(self):
        result = analyze_source("int a;\nstruct S s;\nint b;")
        assert error_kinds(result) == [INCOMPLETE]
        assert result.errors[0].ident.site == (2, 10)

    def test_deferred_check_runs_last(self):
        result = analyze_source("struct S s;\nint a; int a;")
        assert error_kinds(result) == [REDEF, INCOMPLETE]

    def test_array_of_incomplete_struct(self):
        result = analyze_source("struct S arr[3];\nstruct S { int x; };")
        assert error_kinds(result) == [INCOMPLETE]
        assert result.symbol("arr") is None

    def test_pointer_to_incomplete_struct(self):
        assert analyze_source("struct S *p;").ok

    def test_struct_redefinition(self):
        result = analyze_source("struct S { int a; };\nstruct S { char b; };\nstruct S v;")
        assert error_kinds(result) == [REDEF]
        assert result.errors[0].line == 2
        assert result.symbol("v").render_type() == "struct S{int a;}"

    def test_struct_tags_do_not_clash_with_variables(self):
        assert analyze_source("struct P { int x; };\nint P;\nstruct P P2;").ok

    def test_bad_array_size(self):
        result = analyze_source("int a[0];")
        assert error_kinds(result) == [INCOMPLETE]
        assert result.symbol("a").type.short_form() == "int"

    def test_array_size_beyond_int_range(self):
        result = analyze_source("int a[99999999999];")
        assert error_kinds(result) == [INCOMPLETE]
        assert result.symbol("a").type.short_form() == "int"

    def test_incomplete_struct_param_in_definition(self):
        result = analyze_source("struct S;\nint f(struct S s) { }\nstruct S { int x; };")
        assert error_kinds(result) == [INCOMPLETE]
        assert (result.errors[0].name, result.errors[0].line) == ("s", 2)

    def test_incomplete_struct_param_in_declaration(self):
        assert analyze_source("struct S;\nint f(struct S s);\nstruct S { int x; };").ok


class TestAnalyzerApi:

    def test_listener_sees_each_error(self):
        seen = []
        result = analyze(parse("int a; int a; int b; int b;"), listener=seen.append)
        assert seen == result.errors
        assert len(seen) == 2

    def test_identifier_types_are_annotated(self):
        program = parse("int x;\nint f() { x; }")
        SemanticAnalyzer().analyze(program)
        expr = program.items[1].body[0].expr
        assert expr._type.short_form() == "int"
        assert program.items[1]._type.short_form() == "int()"

    def test_unknown_node(self):
        with pytest.raises(TypeError):
            SemanticAnalyzer().analyze(Program(["not a node"]))

    def test_empty_program(self):
        result = analyze(parse(""))
        assert result.ok
        assert result.global_symbols == []
