"""Documentation validation and quality checks."""

from __future__ import annotations

from typing import Sequence

from .models import DocNode, Kind, ValidationResult, walk

# Kinds that count towards coverage; leading comments document nothing by name
_DECLARATIONS = (Kind.FUNCTION, Kind.STRUCT, Kind.TRAIT, Kind.MODULE)


def validate_docs(trees: Sequence[Sequence[DocNode]], strict: bool = False) -> ValidationResult:
    """Validate extracted documentation.

    Checks:
    1. Declarations should have a doc comment (warning in normal mode, error in strict)
    2. Trait methods should have a doc comment (warning)

    Args:
        trees: One documentation tree per extracted file
        strict: If True, undocumented declarations are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    for tree in trees:
        for node in walk(tree):
            if node.kind not in _DECLARATIONS:
                continue

            if not node.doc:
                msg = f"{node.kind.value} {node.name} (line {node.line}): undocumented"
                if strict:
                    result.errors.append(msg)
                else:
                    result.warnings.append(msg)

            for method in (*node.required_methods, *node.provided_methods):
                if not method.doc:
                    result.warnings.append(
                        f"trait {node.name}: method {method.name} (line {method.line}) undocumented"
                    )

    return result


def compute_coverage(trees: Sequence[Sequence[DocNode]]) -> dict[str, float]:
    """Compute documentation coverage by declaration kind.

    Returns:
        Dict mapping each kind ('function', 'struct', 'trait', 'module') to the
        documented fraction (0.0 - 1.0); 1.0 when there is nothing of that kind
    """
    totals = {kind: 0 for kind in _DECLARATIONS}
    documented = {kind: 0 for kind in _DECLARATIONS}

    for tree in trees:
        for node in walk(tree):
            if node.kind not in totals:
                continue
            totals[node.kind] += 1
            if node.doc:
                documented[node.kind] += 1

    return {
        kind.value: documented[kind] / totals[kind] if totals[kind] > 0 else 1.0
        for kind in _DECLARATIONS
    }
