"""
Tests for the type model: short/full rendering, completeness, equality.
"""

from my_types import (
    CHAR, INT, TypeDesc, array_of, func_type, pointer_to, struct_type,
)


class TestShortForm:

    def test_primitives(self):
        assert INT.short_form() == "int"
        assert CHAR.short_form() == "char"

    def test_array_and_pointer(self):
        assert array_of(INT, 3).short_form() == "int[3]"
        assert pointer_to(CHAR).short_form() == "char*"
        assert array_of(pointer_to(INT), 3).short_form() == "int*[3]"
        assert pointer_to(array_of(INT, 3)).short_form() == "int[3]*"

    def test_struct_is_tag_only(self):
        s = struct_type("node")
        s.fields["v"] = INT
        s.complete = True
        assert s.short_form() == "struct node"

    def test_function(self):
        f = func_type(INT, [INT, array_of(CHAR, 4), pointer_to(struct_type("s"))])
        assert f.short_form() == "int(int,char[4],struct s*)"
        assert func_type(CHAR, []).short_form() == "char()"

    def test_repr_is_short_form(self):
        assert repr(pointer_to(INT)) == "int*"


class TestFullForm:

    def test_complete_struct_lists_members(self):
        s = struct_type("point")
        s.fields["x"] = INT
        s.fields["next"] = pointer_to(s)
        s.complete = True
        assert s.full_form() == "struct point{int x;struct point* next;}"

    def test_incomplete_struct_falls_back(self):
        assert struct_type("later").full_form() == "struct later"

    def test_complete_struct_without_fields_falls_back(self):
        s = struct_type("empty")
        s.complete = True
        assert s.full_form() == "struct empty"

    def test_non_struct_full_form_is_short_form(self):
        assert array_of(INT, 2).full_form() == "int[2]"


class TestCompleteness:

    def test_pointer_to_incomplete_struct_is_complete(self):
        assert pointer_to(struct_type("s")).is_complete()

    def test_array_of_incomplete_struct_is_incomplete(self):
        assert not array_of(struct_type("s"), 2).is_complete()
        assert not array_of(array_of(struct_type("s"), 2), 3).is_complete()

    def test_primitives_and_functions_are_complete(self):
        assert INT.is_complete()
        assert func_type(INT, [struct_type("s")]).is_complete()


class TestEquals:

    def test_structural_equality(self):
        assert array_of(pointer_to(INT), 3).equals(array_of(pointer_to(INT), 3))
        assert not array_of(pointer_to(INT), 3).equals(pointer_to(array_of(INT, 3)))
        assert not array_of(INT, 3).equals(array_of(INT, 4))

    def test_struct_by_tag(self):
        assert struct_type("a").equals(struct_type("a"))
        assert not struct_type("a").equals(struct_type("b"))

    def test_function_equality(self):
        assert func_type(INT, [CHAR]).equals(func_type(INT, [CHAR]))
        assert not func_type(INT, [CHAR]).equals(func_type(INT, [INT]))
        assert not func_type(INT, [CHAR]).equals(func_type(INT, []))

    def test_none(self):
        assert not INT.equals(None)

    def test_kind_field(self):
        assert TypeDesc('int').equals(INT)
