"""Balanced scope scanning over a flat token sequence.

Every higher-level extractor finds item bodies through these helpers. Depth
is tracked with an explicit counter, so arbitrarily deep nesting never grows
the Python stack, and running out of tokens before the depth returns to
zero is a ``StructuralError``.
"""

from __future__ import annotations

from typing import Sequence

from .errors import StructuralError
from .models import Token, TokenKind

_OPENERS = frozenset({"(", "["})
_CLOSERS = frozenset({")", "]"})


def find_scope_open(tokens: Sequence[Token], index: int) -> int:
    """Return the index of the first ``{`` at or after ``index``."""
    for i in range(index, len(tokens)):
        if tokens[i].is_punct("{"):
            return i
    raise StructuralError(f"Expected '{{' after token {index}, found end of input", index=index)


def scope_end(tokens: Sequence[Token], open_index: int) -> int:
    """Return the index of the ``}`` balancing the ``{`` at ``open_index``."""
    depth = 0
    for i in range(open_index, len(tokens)):
        token = tokens[i]
        if token.is_punct("{"):
            depth += 1
        elif token.is_punct("}"):
            depth -= 1
            if depth == 0:
                return i
    raise StructuralError(
        f"Scope opened at token {open_index} is never closed", index=open_index
    )


def skip_scope(tokens: Sequence[Token], index: int) -> int:
    """Count the tokens after ``index`` up to and including the next scope's close.

    Used by the tree builder to jump over a body it has already consumed.
    """
    return scope_end(tokens, find_scope_open(tokens, index)) - index


def capture_scope(tokens: Sequence[Token], index: int) -> tuple[tuple[Token, ...], int]:
    """Return the tokens enclosed by the next scope and the index of its close."""
    open_index = find_scope_open(tokens, index)
    end = scope_end(tokens, open_index)
    return tuple(tokens[open_index + 1 : end]), end


def declaration_end(tokens: Sequence[Token], index: int) -> int:
    """Return the index of the ``{`` or ``;`` that ends a declaration header.

    Terminators inside ``()`` or ``[]`` (array types such as ``[u8; 32]``)
    do not count.
    """
    nesting = 0
    for i in range(index, len(tokens)):
        token = tokens[i]
        if token.kind is not TokenKind.PUNCT:
            continue
        if token.text in _OPENERS:
            nesting += 1
        elif token.text in _CLOSERS:
            nesting -= 1
        elif nesting == 0 and token.text in ("{", ";"):
            return i
        elif nesting == 0 and token.text == "}":
            break
    raise StructuralError(
        f"Declaration at token {index} has no body or terminator", index=index
    )
