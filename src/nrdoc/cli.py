"""Documentation generator for Noir sources.

Generates:
    {output}/README.md            - Index of documented files
    {output}/{stem}.md            - Reference page per file
    {output}/{stem}.source.md     - Numbered source listing (--source)
    {output}/{stem}.json          - Raw documentation tree (--json)
"""

from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
from pathlib import Path

from .config import Config
from .errors import DocError
from .extractors import extract_file
from .generators import generate_docs_readme, generate_file_markdown, generate_source_markdown
from .models import DocNode, Kind, walk
from .modules import ModuleLoader, read_code_lines
from .validators import compute_coverage, validate_docs


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="nrdoc", description=__doc__.splitlines()[0])
    parser.add_argument("files", nargs="+", type=Path, help="Source files to document")
    parser.add_argument("-o", "--output", type=Path, default=Path(Config.OUTPUT_DIR))
    parser.add_argument("--module-dir", type=Path, help="Where `mod name;` files live")
    parser.add_argument(
        "--strict", action="store_true", default=Config.STRICT, help="Fail on undocumented items"
    )
    parser.add_argument("--source", action="store_true", help="Also write source listings")
    parser.add_argument("--json", action="store_true", help="Also write the raw trees as JSON")
    return parser.parse_args(argv)


def _count(nodes: list[DocNode]) -> str:
    declared = [n for n in walk(nodes) if n.kind is not Kind.LEADING_COMMENT]
    documented = sum(1 for n in declared if n.doc)
    return f"{documented}/{len(declared)} items documented"


def main(argv: list[str] | None = None):
    """Generate documentation for the given files."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    docs_dir: Path = args.output

    print("Extracting docs...")

    # Output pages are named by stem, so two inputs must not share one
    seen: dict[str, Path] = {}
    for path in args.files:
        if path.stem in seen:
            print(f"  ✗ {path}: same page name as {seen[path.stem]}", file=sys.stderr)
            sys.exit(1)
        seen[path.stem] = path

    trees: dict[str, list[DocNode]] = {}
    for path in args.files:
        loader = ModuleLoader(args.module_dir) if args.module_dir else None
        try:
            nodes = extract_file(path, loader)
        except DocError as e:
            print(f"  ✗ {path}: {e}", file=sys.stderr)
            sys.exit(1)
        trees[path.stem] = nodes
        print(f"  ✓ {path.stem}: {_count(nodes)}")

    # Validation
    validation = validate_docs(list(trees.values()), strict=args.strict)
    for warning in validation.warnings:
        print(f"  ⚠ {warning}", file=sys.stderr)
    if validation.errors:
        print("\nValidation errors:")
        for err in validation.errors:
            print(f"  ✗ {err}")
        sys.exit(1)

    coverage = compute_coverage(list(trees.values()))
    print(
        "\nCoverage: "
        + ", ".join(f"{kind} {fraction:.0%}" for kind, fraction in coverage.items())
    )

    # Clean and recreate docs directory
    if docs_dir.exists():
        shutil.rmtree(docs_dir)
    docs_dir.mkdir(parents=True)

    print("\nGenerated:")

    (docs_dir / "README.md").write_text(generate_docs_readme(list(trees)))
    print(f"  {docs_dir}/README.md")

    for path in args.files:
        stem = path.stem
        (docs_dir / f"{stem}.md").write_text(generate_file_markdown(stem, trees[stem]))
        print(f"  {docs_dir}/{stem}.md")

        if args.source:
            listing = generate_source_markdown(stem, read_code_lines(path))
            (docs_dir / f"{stem}.source.md").write_text(listing)
            print(f"  {docs_dir}/{stem}.source.md")

        if args.json:
            payload = [node.to_dict() for node in trees[stem]]
            (docs_dir / f"{stem}.json").write_text(json.dumps(payload, indent=2))
            print(f"  {docs_dir}/{stem}.json")

    print("\nDone!")


if __name__ == "__main__":
    main()
