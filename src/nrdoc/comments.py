"""Association of comment runs with declarations."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import DECLARATION_KEYWORDS, DocStyle, Token


def _join(pieces: Iterable[str]) -> str:
    return " ".join(piece.strip() for piece in pieces if piece.strip())


def _run_before(tokens: Sequence[Token], last: int, style: DocStyle | None) -> list[str]:
    """Texts of the unbroken run of ``style`` comments ending at ``last``."""
    first = last
    while first > 0 and tokens[first - 1].is_comment and tokens[first - 1].style is style:
        first -= 1
    return [token.text for token in tokens[first : last + 1]]


def _scan_back(tokens: Sequence[Token], index: int, style: DocStyle) -> list[str]:
    """Collect ``style`` comments before ``index``, stopping at the previous declaration.

    A closing brace also stops the scan; comments inside an earlier body
    belong to that body.
    """
    pieces = []
    for i in range(index - 2, -1, -1):
        token = tokens[i]
        if token.keyword in DECLARATION_KEYWORDS or token.is_punct("}"):
            break
        if token.is_comment and token.style is style:
            pieces.append(token.text)
    pieces.reverse()
    return pieces


def doc(tokens: Sequence[Token], index: int) -> str:
    """Documentation for the declaration starting at ``index``.

    A comment right before the declaration seeds the result, and the run
    extends backward over comments of the same style. Otherwise (``pub``
    or an attribute sits in between) outer doc comments are gathered back
    to the previous declaration keyword, whose documentation they are not.
    """
    if index <= 0:
        return ""
    previous = tokens[index - 1]
    if previous.is_comment:
        return _join(_run_before(tokens, index - 1, previous.style))
    return _join(_scan_back(tokens, index, DocStyle.OUTER))


def additional_doc(tokens: Sequence[Token], index: int) -> str:
    """Like :func:`doc`, but for inner doc comments (``//!``, ``/*! */``)."""
    if index <= 0:
        return ""
    previous = tokens[index - 1]
    if previous.is_comment and previous.style is DocStyle.INNER:
        return _join(_run_before(tokens, index - 1, DocStyle.INNER))
    return _join(_scan_back(tokens, index, DocStyle.INNER))


def body_doc(tokens: Sequence[Token], open_index: int) -> str:
    """Inner documentation at the top of the body opened at ``open_index``."""
    i = open_index + 1
    while i < len(tokens) and tokens[i].is_comment:
        i += 1
    return additional_doc(tokens, i)


def outer_doc(tokens: Sequence[Token], index: int) -> tuple[str, int]:
    """Merge the inner doc run starting at ``index``.

    Returns the merged text and the index of the last comment in the run.
    """
    last = index
    while (
        last + 1 < len(tokens)
        and tokens[last + 1].is_comment
        and tokens[last + 1].style is DocStyle.INNER
    ):
        last += 1
    return _join(token.text for token in tokens[index : last + 1]), last
