"""Signature reconstruction for functions, structs and traits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from .comments import doc
from .errors import StructuralError
from .models import Function, Keyword, Token, TokenKind
from .scanner import declaration_end, scope_end

PRIVATE_FIELDS = "/* private fields */"
ELIDED_BODY = "{ ... }"
INDENT = "    "

_NESTING = {"(": 1, "[": 1, "<": 1, "{": 1, ")": -1, "]": -1, ">": -1, "}": -1}


def render(tokens: Iterable[Token]) -> str:
    """Join token text with single spaces, leaving comments out."""
    return " ".join(token.text for token in tokens if not token.is_comment)


def fn_signature(tokens: Sequence[Token], index: int) -> str:
    """Signature of the function whose keyword is at ``index``."""
    return render(tokens[index : declaration_end(tokens, index)])


def method_name(tokens: Sequence[Token], index: int) -> str | None:
    """Name following the ``fn`` at ``index``, or None when there is none."""
    if index + 1 < len(tokens) and tokens[index + 1].kind is TokenKind.IDENT:
        return tokens[index + 1].text
    return None


def iter_methods(tokens: Sequence[Token], open_index: int) -> Iterator[tuple[int, int]]:
    """Yield ``(fn_index, terminator_index)`` for functions declared in a body.

    Only functions directly inside the body opened at ``open_index`` are
    reported. The terminator is the ``;`` of a bodiless declaration or the
    ``{`` of a default body, which is skipped.
    """
    end = scope_end(tokens, open_index)
    i = open_index + 1
    while i < end:
        token = tokens[i]
        if token.is_keyword(Keyword.FUNCTION):
            stop = declaration_end(tokens, i)
            yield i, stop
            i = scope_end(tokens, stop) + 1 if tokens[stop].is_punct("{") else stop + 1
        elif token.is_punct("{"):
            i = scope_end(tokens, i) + 1
        else:
            i += 1


def _fields(tokens: Sequence[Token]) -> Iterator[list[Token]]:
    """Split struct body tokens into fields, keeping each field's trailing comma."""
    field: list[Token] = []
    depth = 0
    for token in tokens:
        if token.is_comment:
            continue
        field.append(token)
        if token.kind is TokenKind.PUNCT:
            depth += _NESTING.get(token.text, 0)
            if depth == 0 and token.text == ",":
                yield field
                field = []
    if field:
        yield field


def struct_signature(tokens: Sequence[Token], index: int) -> tuple[str, int]:
    """Signature of the struct at ``index`` and the index where it ends.

    Only ``pub`` fields are shown. When no field is public, or some field
    was left out, a placeholder stands in for the hidden ones.
    """
    stop = declaration_end(tokens, index)
    header = render(tokens[index:stop])
    if tokens[stop].is_punct(";"):
        return f"{header};", stop

    end = scope_end(tokens, stop)
    lines = [f"{header} {{"]
    public = hidden = 0
    for field in _fields(tokens[stop + 1 : end]):
        if any(token.is_keyword(Keyword.PUBLIC) for token in field):
            lines.append(INDENT + render(field))
            public += 1
        else:
            hidden += 1
    if not public or hidden:
        lines.append(INDENT + PRIVATE_FIELDS)
    lines.append("}")
    return "\n".join(lines), end


@dataclass(frozen=True)
class TraitShape:
    signature: str
    required_methods: tuple[Function, ...]
    provided_methods: tuple[Function, ...]
    end: int


def trait_info(tokens: Sequence[Token], index: int) -> TraitShape:
    """Signature and methods of the trait at ``index``.

    Methods ending in ``;`` are required; methods with a default body are
    provided, and their body is elided from the signature.
    """
    open_index = declaration_end(tokens, index)
    if not tokens[open_index].is_punct("{"):
        raise StructuralError(f"Trait at token {index} has no body", index=index)
    lines = [f"{render(tokens[index:open_index])} {{"]
    required: list[Function] = []
    provided: list[Function] = []

    for fn_index, stop in iter_methods(tokens, open_index):
        name = method_name(tokens, fn_index)
        if name is None:
            continue
        signature = fn_signature(tokens, fn_index)
        method = Function(
            name=name,
            doc=doc(tokens, fn_index),
            signature=signature,
            is_method=True,
            line=tokens[fn_index].line,
        )
        if tokens[stop].is_punct(";"):
            required.append(method)
            lines.append(f"{INDENT}{signature};")
        else:
            provided.append(method)
            lines.append(f"{INDENT}{signature} {ELIDED_BODY}")

    lines.append("}")
    return TraitShape(
        signature="\n".join(lines),
        required_methods=tuple(required),
        provided_methods=tuple(provided),
        end=scope_end(tokens, open_index),
    )
