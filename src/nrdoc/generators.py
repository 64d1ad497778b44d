"""Markdown generators for documentation trees."""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from .models import CodeLine, DocNode, Function, Implementation, Kind

HEADER = "<!-- AUTO-GENERATED. DO NOT EDIT. Run `nrdoc` to regenerate. -->"

# Section order and titles for grouped items
_SECTIONS = [
    (Kind.MODULE, "Modules", "mod"),
    (Kind.STRUCT, "Structs", "struct"),
    (Kind.TRAIT, "Traits", "trait"),
    (Kind.FUNCTION, "Functions", "fn"),
]
_PREFIX = {kind: prefix for kind, _, prefix in _SECTIONS}


def _slugify(name: str) -> str:
    """Convert a heading to a markdown anchor slug."""
    # GitHub-style: lowercase, replace dots/spaces with hyphens
    return name.lower().replace(".", "").replace(" ", "-")


def _heading(level: int, text: str) -> str:
    return f"{'#' * min(level, 6)} {text}"


def _brief(text: str) -> str:
    return text.split(". ")[0].replace("|", "\\|")


def generate_docs_readme(files: list[str]) -> str:
    """Generate the index page linking every documented file."""
    lines = [
        "# API Documentation",
        "",
        "Reference documentation extracted from source.",
        "",
        "## Files",
        "",
    ]

    for name in sorted(files):
        lines.append(f"- [{name}]({name}.md)")

    lines.extend(
        [
            "",
            "Do not edit generated files directly. Update the doc comments instead.",
            "",
        ]
    )

    return "\n".join(lines)


def _method_lines(title: str, methods: Sequence[Function]) -> list[str]:
    if not methods:
        return []
    lines = [f"**{title}:**"]
    for method in methods:
        entry = f"- `{method.signature}`"
        if method.doc:
            entry += f": {method.doc}"
        lines.append(entry)
    lines.append("")
    return lines


def _implementation_lines(implementations: Sequence[Implementation]) -> list[str]:
    if not implementations:
        return []
    lines = ["**Implementations:**"]
    for implementation in implementations:
        entry = f"- `{implementation.signature}`"
        if implementation.doc:
            entry += f": {implementation.doc}"
        lines.append(entry)
        for method in implementation.methods:
            lines.append(f"  - `{method.signature}`")
    lines.append("")
    return lines


def _render_items(nodes: Sequence[DocNode], level: int) -> list[str]:
    """Render leading comments, then items grouped by kind."""
    lines: list[str] = []

    for node in nodes:
        if node.kind is Kind.LEADING_COMMENT and node.doc:
            lines.append(node.doc)
            lines.append("")

    grouped: dict[Kind, list[DocNode]] = defaultdict(list)
    for node in nodes:
        grouped[node.kind].append(node)

    for kind, title, prefix in _SECTIONS:
        if not grouped[kind]:
            continue
        lines.append(_heading(level, title))
        lines.append("")
        for node in grouped[kind]:
            lines.extend(_render_node(node, level + 1, prefix))

    return lines


def _render_node(node: DocNode, level: int, prefix: str) -> list[str]:
    lines = [_heading(level, f"{prefix} {node.name}"), ""]

    if node.signature:
        lines.extend(["```rust", node.signature, "```", ""])

    if node.doc:
        lines.append(node.doc)
        lines.append("")

    if node.additional_doc:
        lines.append(node.additional_doc)
        lines.append("")

    lines.extend(_method_lines("Required methods", node.required_methods))
    lines.extend(_method_lines("Provided methods", node.provided_methods))
    lines.extend(_implementation_lines(node.implementations))

    if node.kind is Kind.MODULE:
        lines.extend(_render_items(node.content, level + 1))

    lines.append(f"*Line {node.line}*")
    lines.append("")
    lines.append("---")
    lines.append("")
    return lines


def generate_file_markdown(title: str, nodes: Sequence[DocNode]) -> str:
    """Generate the reference page for one source file."""
    lines = [
        HEADER,
        "",
        f"# {title}",
        "",
    ]

    items = [node for node in nodes if node.kind is not Kind.LEADING_COMMENT]
    if not items and not any(node.doc for node in nodes):
        lines.append("*No documented items.*")
        lines.append("")
        return "\n".join(lines)

    if items:
        lines.extend(
            [
                "| Item | Description |",
                "|------|-------------|",
            ]
        )
        for node in items:
            label = f"{_PREFIX[node.kind]} {node.name}"
            lines.append(f"| [`{label}`](#{_slugify(label)}) | {_brief(node.doc)} |")
        lines.append("")

    lines.extend(_render_items(nodes, 2))
    return "\n".join(lines)


def generate_source_markdown(title: str, code: Sequence[CodeLine]) -> str:
    """Generate a numbered source listing."""
    width = len(str(len(code))) if code else 1
    lines = [
        HEADER,
        "",
        f"# {title} (source)",
        "",
        "```rust",
    ]
    for line in code:
        lines.append(f"{line.number:>{width}} | {line.text}")
    lines.append("```")
    lines.append("")
    return "\n".join(lines)
