"""Source tokenizer.

Noir shares Rust's lexical structure, so tokens come from the Pygments
``RustLexer``. Its raw fragments are folded into the engine's ``Token``
stream: whitespace is dropped, comments carry their doc style, and
multi-fragment constructs (block comments, string literals, attributes)
become single tokens.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterator

from pygments.lexers.rust import RustLexer
from pygments.token import (
    Comment,
    Error,
    Keyword as KeywordType,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)

from .errors import TokenizeError
from .models import DocStyle, Keyword, Token, TokenKind

_KEYWORDS = {keyword.value: keyword for keyword in Keyword}
_LEXER = RustLexer()


def tokenize(source: str) -> tuple[Token, ...]:
    """Split source text into tokens.

    Raises:
        TokenizeError: On characters the lexer cannot classify, or on an
            unterminated block comment, string literal or attribute.
    """
    text = source.replace("\r\n", "\n")
    # Line comment rules expect a terminating newline
    if not text.endswith("\n"):
        text += "\n"
    return tuple(_fold(_LEXER.get_tokens_unprocessed(text), text))


def _fold(fragments, text: str) -> Iterator[Token]:
    newlines = [i for i, ch in enumerate(text) if ch == "\n"]
    stream = iter(fragments)

    for pos, ttype, value in stream:
        line = bisect_left(newlines, pos) + 1

        if ttype in Error:
            raise TokenizeError(f"Unexpected character {value!r} on line {line}", line=line)
        if ttype in Text:
            continue

        if ttype in Comment.Preproc:
            if value.startswith(("#[", "#![")):
                value = _take_attribute(stream, value, line)
            yield Token(TokenKind.OTHER, value, line=line)
        elif ttype in String.Doc or ttype in Comment:
            yield _comment(stream, ttype, value, line)
        elif ttype in String:
            if value in ('"', 'b"'):
                value = _take_string(stream, value, line)
            yield Token(TokenKind.LITERAL, value, line=line)
        elif ttype in Number or ttype in KeywordType.Constant:
            yield Token(TokenKind.LITERAL, value, line=line)
        elif ttype in KeywordType.Type:
            # Primitive types name things, same as any other type
            yield Token(TokenKind.IDENT, value, line=line)
        elif ttype in KeywordType.Pseudo:
            yield Token(TokenKind.PUNCT, value, line=line)
        elif ttype in KeywordType:
            yield Token(TokenKind.KEYWORD, value, keyword=_KEYWORDS.get(value), line=line)
        elif ttype in Name:
            yield Token(TokenKind.IDENT, value, line=line)
        elif ttype in Punctuation or ttype in Operator:
            yield Token(TokenKind.PUNCT, value, line=line)
        else:
            yield Token(TokenKind.OTHER, value, line=line)


def _comment(stream, ttype, value: str, line: int) -> Token:
    is_doc = ttype in String.Doc

    if value.startswith("//"):
        body = value.rstrip("\n")
        if body.startswith("//!"):
            return Token(TokenKind.COMMENT, body[3:], style=DocStyle.INNER, line=line)
        if is_doc:
            return Token(TokenKind.COMMENT, body[3:], style=DocStyle.OUTER, line=line)
        return Token(TokenKind.COMMENT, body[2:], line=line)

    # Block comments nest; fragments arrive until the matching */
    parts = [value]
    depth = 1
    for _, _, fragment in stream:
        parts.append(fragment)
        if fragment == "/*":
            depth += 1
        elif fragment == "*/":
            depth -= 1
            if depth == 0:
                break
    else:
        raise TokenizeError(f"Unterminated block comment starting on line {line}", line=line)

    raw = "".join(parts)
    if not is_doc:
        return Token(TokenKind.COMMENT, _block_body(raw[2:-2]), line=line)
    style = DocStyle.INNER if raw.startswith("/*!") else DocStyle.OUTER
    return Token(TokenKind.COMMENT, _block_body(raw[3:-2]), style=style, line=line)


def _block_body(body: str) -> str:
    """Strip the leading ``*`` decoration from each line of a block comment."""
    lines = []
    for line in body.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:].strip()
        if line:
            lines.append(line)
    return "\n".join(lines)


def _take_string(stream, opening: str, line: int) -> str:
    parts = [opening]
    for _, ttype, fragment in stream:
        parts.append(fragment)
        if ttype == String and fragment == '"':
            return "".join(parts)
    raise TokenizeError(f"Unterminated string starting on line {line}", line=line)


def _take_attribute(stream, opening: str, line: int) -> str:
    parts = [opening]
    depth = 1
    for _, ttype, fragment in stream:
        parts.append(fragment)
        if ttype in Comment.Preproc:
            if fragment == "[":
                depth += 1
            elif fragment == "]":
                depth -= 1
                if depth == 0:
                    return "".join(parts)
    raise TokenizeError(f"Unterminated attribute starting on line {line}", line=line)
