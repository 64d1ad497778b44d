"""
Signature reconstruction tests.

Tests for:
- Struct signatures showing only public fields
- Trait signatures with required and provided methods
- Function headers and method discovery inside bodies
"""

import pytest

from nrdoc.errors import StructuralError
from nrdoc.lexer import tokenize
from nrdoc.signatures import (
    PRIVATE_FIELDS,
    fn_signature,
    iter_methods,
    struct_signature,
    trait_info,
)


def first(tokens, text):
    return next(i for i, t in enumerate(tokens) if t.text == text)


class TestStructSignature:
    def test_mixed_fields(self):
        tokens = tokenize("/// A point.\nstruct Point { pub x: i32, y: i32 }")
        signature, end = struct_signature(tokens, first(tokens, "struct"))
        assert signature == "struct Point {\n    pub x : i32 ,\n    /* private fields */\n}"
        assert end == len(tokens) - 1

    def test_all_public_has_no_placeholder(self):
        tokens = tokenize("struct Pair {\n    pub a: u8,\n    pub b: u8,\n}")
        signature, _ = struct_signature(tokens, 0)
        assert PRIVATE_FIELDS not in signature
        assert signature == "struct Pair {\n    pub a : u8 ,\n    pub b : u8 ,\n}"

    def test_no_public_fields(self):
        tokens = tokenize("struct Secret { key: Field }")
        signature, _ = struct_signature(tokens, 0)
        assert signature == "struct Secret {\n    /* private fields */\n}"

    def test_empty_body(self):
        tokens = tokenize("struct Empty {}")
        signature, end = struct_signature(tokens, 0)
        assert signature == "struct Empty {\n    /* private fields */\n}"
        assert tokens[end].is_punct("}")

    def test_unit_struct(self):
        tokens = tokenize("struct Marker;")
        signature, end = struct_signature(tokens, 0)
        assert signature == "struct Marker;"
        assert tokens[end].is_punct(";")

    def test_generic_header(self):
        tokens = tokenize("struct Wrapper<T> { pub inner: T }")
        signature, _ = struct_signature(tokens, 0)
        assert signature == "struct Wrapper < T > {\n    pub inner : T\n}"

    def test_array_field_is_one_field(self):
        tokens = tokenize("struct Hash { pub bytes: [u8; 32], len: u32 }")
        signature, _ = struct_signature(tokens, 0)
        assert signature.splitlines()[1] == "    pub bytes : [ u8 ; 32 ] ,"
        assert signature.splitlines()[2] == "    " + PRIVATE_FIELDS

    def test_field_comments_are_left_out(self):
        tokens = tokenize("struct P {\n    /// The x.\n    pub x: i32,\n}")
        signature, _ = struct_signature(tokens, 0)
        assert "The x." not in signature


SHAPE = """\
trait Shape {
    /// Area of the shape.
    fn area(&self) -> f64;
    fn name(&self) -> &str { "shape" }
}
"""


class TestTraitInfo:
    def test_required_and_provided(self):
        tokens = tokenize(SHAPE)
        shape = trait_info(tokens, 0)
        assert [m.name for m in shape.required_methods] == ["area"]
        assert [m.name for m in shape.provided_methods] == ["name"]
        assert shape.required_methods[0].doc == "Area of the shape."
        assert shape.provided_methods[0].doc == ""
        assert all(m.is_method for m in shape.required_methods + shape.provided_methods)

    def test_signature_elides_default_bodies(self):
        shape = trait_info(tokenize(SHAPE), 0)
        assert shape.signature == (
            "trait Shape {\n"
            "    fn area ( & self ) -> f64;\n"
            "    fn name ( & self ) -> & str { ... }\n"
            "}"
        )

    def test_one_line_per_method(self):
        shape = trait_info(tokenize(SHAPE), 0)
        methods = len(shape.required_methods) + len(shape.provided_methods)
        assert len(shape.signature.splitlines()) == methods + 2

    def test_end_is_closing_brace(self):
        tokens = tokenize(SHAPE + "fn after() {}")
        shape = trait_info(tokens, 0)
        assert tokens[shape.end].is_punct("}")
        assert tokens[shape.end + 1].text == "fn"

    def test_method_lines(self):
        shape = trait_info(tokenize(SHAPE), 0)
        assert shape.required_methods[0].line == 3
        assert shape.provided_methods[0].line == 4

    def test_empty_trait(self):
        shape = trait_info(tokenize("trait Marker {}"), 0)
        assert shape.signature == "trait Marker {\n}"
        assert shape.required_methods == ()
        assert shape.provided_methods == ()

    def test_trait_without_body(self):
        with pytest.raises(StructuralError):
            trait_info(tokenize("trait Alias;"), 0)


def test_fn_signature_stops_before_body():
    tokens = tokenize("pub fn add(a: Field, b: Field) -> Field { a + b }")
    assert fn_signature(tokens, 1) == "fn add ( a : Field , b : Field ) -> Field"


def test_iter_methods_skips_nested_bodies():
    tokens = tokenize(
        "impl P {\n"
        "    fn a(self) -> u8 { if true { 1 } else { 2 } }\n"
        "    fn b(self);\n"
        "}"
    )
    found = [tokens[i + 1].text for i, _ in iter_methods(tokens, first(tokens, "{"))]
    assert found == ["a", "b"]
