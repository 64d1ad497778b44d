"""Pytest fixtures for nrdoc tests."""

from pathlib import Path

import pytest

from nrdoc.extractors import extract_source
from nrdoc.modules import ModuleLoader


@pytest.fixture
def loader(tmp_path) -> ModuleLoader:
    """ModuleLoader rooted at the test's temporary directory."""
    return ModuleLoader(tmp_path, ".nr")


@pytest.fixture
def write_module(tmp_path):
    """
    Factory fixture that writes `<name>.nr` files into the temporary directory.

    Example:
        def test_external(write_module, extract):
            write_module("helpers", "fn help() {}")
            nodes = extract("mod helpers;")
    """

    def _write(name: str, source: str) -> Path:
        path = tmp_path / f"{name}.nr"
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def extract(loader):
    """
    Extract a documentation tree from source text.

    External modules resolve against the same temporary directory that
    `write_module` writes to.

    Example:
        def test_function(extract):
            [node] = extract("fn main() {}")
            assert node.name == "main"
    """

    def _extract(source: str):
        return extract_source(source, loader)

    return _extract
