"""Reading source files and resolving external module names to files."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import Config
from .errors import ModuleCycleError, ModuleReadError, TokenizeError
from .lexer import tokenize
from .models import CodeLine, Token

log = logging.getLogger(__name__)


def read_source(path: str | Path) -> str:
    """Read a source file as UTF-8 text.

    Raises:
        ModuleReadError: If the file cannot be opened or decoded.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ModuleReadError(f"Cannot read {path}: {e}", path=str(path)) from e


def load_tokens(path: str | Path) -> tuple[Token, ...]:
    """Read and tokenize a source file."""
    source = read_source(path)
    try:
        return tokenize(source)
    except TokenizeError as e:
        raise TokenizeError(f"{path}: {e}", line=e.line, path=str(path)) from e


def read_code_lines(path: str | Path) -> list[CodeLine]:
    """Read a source file as numbered lines, starting at 1."""
    return [
        CodeLine(number=number, text=text)
        for number, text in enumerate(read_source(path).splitlines(), start=1)
    ]


class ModuleLoader:
    """Maps ``mod name;`` declarations to files and loads them.

    A module named ``name`` lives at ``<root>/<name><extension>``.

    Example:
        loader = ModuleLoader("src")
        tokens = loader.load("utils")  # src/utils.nr
    """

    def __init__(self, root: str | Path | None = None, extension: str | None = None):
        self.root = Path(root if root is not None else Config.MODULE_DIR)
        self.extension = extension if extension is not None else Config.MODULE_EXTENSION
        # Files currently being extracted, outermost first
        self._active: list[Path] = []

    def path_for(self, name: str) -> Path:
        return self.root / f"{name}{self.extension}"

    def load(self, name: str) -> tuple[Token, ...]:
        path = self.path_for(name)
        log.debug("Loading module %s from %s", name, path)
        return load_tokens(path)

    @contextmanager
    def tracking(self, path: str | Path) -> Iterator[Path]:
        """Mark a file as being extracted for the duration of the block.

        Raises:
            ModuleCycleError: If the file is already being extracted.
        """
        path = Path(path).resolve()
        if path in self._active:
            chain = " -> ".join(p.name for p in [*self._active, path])
            raise ModuleCycleError(f"Module cycle: {chain}", path=str(path))
        self._active.append(path)
        try:
            yield path
        finally:
            self._active.pop()
