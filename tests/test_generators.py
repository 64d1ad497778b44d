"""Tests for markdown generation."""

from nrdoc.generators import (
    HEADER,
    _slugify,
    generate_docs_readme,
    generate_file_markdown,
    generate_source_markdown,
)
from nrdoc.models import CodeLine


def test_slugify():
    assert _slugify("struct Point") == "struct-point"
    assert _slugify("fn v1.2") == "fn-v12"


def test_readme_lists_files_sorted():
    readme = generate_docs_readme(["zeta", "alpha"])
    assert readme.index("- [alpha](alpha.md)") < readme.index("- [zeta](zeta.md)")


def test_file_markdown_has_header_and_summary(extract):
    nodes = extract("/// A point. With more detail.\nstruct Point { pub x: i32 }\n/// Entry.\nfn main() {}")
    md = generate_file_markdown("main", nodes)

    assert md.startswith(HEADER)
    assert "# main" in md
    assert "| [`struct Point`](#struct-point) | A point |" in md
    assert "| [`fn main`](#fn-main) | Entry. |" in md


def test_file_markdown_groups_by_kind(extract):
    nodes = extract("fn f() {}\nstruct S;\nmod m {}")
    md = generate_file_markdown("lib", nodes)
    assert md.index("## Modules") < md.index("## Structs") < md.index("## Functions")
    assert "## Traits" not in md


def test_signature_is_fenced(extract):
    nodes = extract("fn f(x: u8) -> u8 { x }")
    md = generate_file_markdown("lib", nodes)
    assert "```rust\nfn f ( x : u8 ) -> u8\n```" in md
    assert "*Line 1*" in md


def test_trait_methods_and_implementations(extract):
    nodes = extract(
        "trait Shape {\n"
        "    /// Area.\n"
        "    fn area(&self) -> f64;\n"
        "}\n"
        "struct Square { pub side: f64 }\n"
        "impl Shape for Square {\n"
        "    fn area(&self) -> f64 { self.side * self.side }\n"
        "}\n"
    )
    md = generate_file_markdown("shapes", nodes)
    assert "**Required methods:**\n- `fn area ( & self ) -> f64`: Area." in md
    assert "**Provided methods:**" not in md
    assert "- `impl Shape for Square`\n  - `fn area ( & self ) -> f64`" in md


def test_module_content_is_nested(extract):
    nodes = extract("mod outer {\n    fn inner() {}\n}")
    md = generate_file_markdown("lib", nodes)
    assert "### mod outer" in md
    assert "#### Functions" in md
    assert "##### fn inner" in md


def test_leading_comment_is_rendered_first(extract):
    nodes = extract("//! Crate docs.\nfn f() {}")
    md = generate_file_markdown("lib", nodes)
    assert md.index("Crate docs.") < md.index("## Functions")


def test_empty_file():
    md = generate_file_markdown("empty", [])
    assert "*No documented items.*" in md


def test_source_listing_numbers_lines():
    code = [CodeLine(number=n, text=f"line {n}") for n in range(1, 11)]
    md = generate_source_markdown("lib", code)
    assert " 1 | line 1" in md
    assert "10 | line 10" in md
    assert md.startswith(HEADER)
