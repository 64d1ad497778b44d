"""
Documentation validation tests.

Tests for:
- Undocumented declarations as warnings, or errors in strict mode
- Undocumented trait methods
- Coverage per declaration kind, including nested modules
"""

from nrdoc.validators import compute_coverage, validate_docs


class TestValidateDocs:
    def test_fully_documented(self, extract):
        tree = extract("/// Documented.\nfn f() {}")
        result = validate_docs([tree])
        assert result.errors == []
        assert result.warnings == []

    def test_undocumented_is_warning(self, extract):
        tree = extract("fn f() {}")
        result = validate_docs([tree])
        assert result.errors == []
        assert result.warnings == ["function f (line 1): undocumented"]

    def test_strict_mode_makes_errors(self, extract):
        tree = extract("fn f() {}")
        result = validate_docs([tree], strict=True)
        assert result.errors == ["function f (line 1): undocumented"]
        assert result.warnings == []

    def test_undocumented_trait_method(self, extract):
        tree = extract("/// Doc.\ntrait T {\n    fn m(self);\n}")
        result = validate_docs([tree], strict=True)
        assert result.errors == []
        assert result.warnings == ["trait T: method m (line 3) undocumented"]

    def test_leading_comments_are_ignored(self, extract):
        tree = extract("//! Crate docs.\n")
        assert validate_docs([tree], strict=True).errors == []

    def test_nested_declarations_are_checked(self, extract):
        tree = extract("/// Doc.\nmod m {\n    fn hidden() {}\n}")
        result = validate_docs([tree])
        assert result.warnings == ["function hidden (line 3): undocumented"]


class TestCoverage:
    def test_coverage_by_kind(self, extract):
        tree = extract(
            "/// A.\nfn a() {}\n"
            "fn b() {}\n"
            "/// S.\nstruct S;\n"
        )
        coverage = compute_coverage([tree])
        assert coverage["function"] == 0.5
        assert coverage["struct"] == 1.0

    def test_nothing_of_a_kind_counts_as_covered(self):
        coverage = compute_coverage([[]])
        assert coverage == {"function": 1.0, "struct": 1.0, "trait": 1.0, "module": 1.0}

    def test_across_trees(self, extract):
        trees = [extract("/// A.\nfn a() {}"), extract("fn b() {}")]
        assert compute_coverage(trees)["function"] == 0.5
