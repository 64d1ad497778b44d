"""Data models for documentation extraction."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Union


class TokenKind(str, Enum):
    KEYWORD = "keyword"
    IDENT = "ident"
    PUNCT = "punct"
    COMMENT = "comment"
    LITERAL = "literal"
    OTHER = "other"


class Keyword(str, Enum):
    """Keywords the extraction engine dispatches on."""

    FUNCTION = "fn"
    MODULE = "mod"
    STRUCT = "struct"
    TRAIT = "trait"
    IMPLEMENTATION = "impl"
    PUBLIC = "pub"


class DocStyle(str, Enum):
    INNER = "inner"  # //! and /*! */ document the enclosing item
    OUTER = "outer"  # /// and /** */ document the following item


DECLARATION_KEYWORDS = frozenset(
    {
        Keyword.FUNCTION,
        Keyword.MODULE,
        Keyword.STRUCT,
        Keyword.TRAIT,
        Keyword.IMPLEMENTATION,
    }
)


@dataclass(frozen=True)
class Token:
    """One lexical unit.

    Comment tokens keep only the comment body in ``text``; the markers are
    reflected by ``style`` (``None`` for plain ``//`` and ``/* */`` comments).
    """

    kind: TokenKind
    text: str
    keyword: Keyword | None = None
    style: DocStyle | None = None
    line: int = 0

    @property
    def is_comment(self) -> bool:
        return self.kind is TokenKind.COMMENT

    def is_keyword(self, keyword: Keyword) -> bool:
        return self.keyword is keyword

    def is_punct(self, text: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.text == text

    def __str__(self) -> str:
        return self.text


class Kind(str, Enum):
    FUNCTION = "function"
    MODULE = "module"
    STRUCT = "struct"
    TRAIT = "trait"
    LEADING_COMMENT = "leading_comment"


@dataclass(frozen=True)
class Function:
    """A function or method declaration found in a trait or impl body."""

    name: str
    doc: str
    signature: str
    is_method: bool = False
    line: int = 0


@dataclass(frozen=True)
class Implementation:
    """An ``impl`` block linked to a struct or trait by name."""

    signature: str  # "impl Shape for Circle"
    type_name: str  # "Circle"
    trait_name: str | None = None  # "Shape", None for inherent impls
    doc: str = ""
    methods: tuple[Function, ...] = ()
    line: int = 0


@dataclass(frozen=True)
class FunctionDetail:
    signature: str


@dataclass(frozen=True)
class ModuleDetail:
    content: tuple[DocNode, ...] = ()


@dataclass(frozen=True)
class StructDetail:
    signature: str
    additional_doc: str = ""
    implementations: tuple[Implementation, ...] = ()


@dataclass(frozen=True)
class TraitDetail:
    signature: str
    additional_doc: str = ""
    required_methods: tuple[Function, ...] = ()
    provided_methods: tuple[Function, ...] = ()
    implementations: tuple[Implementation, ...] = ()


@dataclass(frozen=True)
class BlankDetail:
    pass


Detail = Union[FunctionDetail, ModuleDetail, StructDetail, TraitDetail, BlankDetail]


@dataclass(frozen=True)
class DocNode:
    """One extracted declaration in the documentation tree."""

    kind: Kind
    name: str  # Empty for leading comments
    doc: str
    detail: Detail
    line: int = 0

    @property
    def signature(self) -> str | None:
        return getattr(self.detail, "signature", None)

    @property
    def additional_doc(self) -> str | None:
        return getattr(self.detail, "additional_doc", None)

    @property
    def implementations(self) -> tuple[Implementation, ...]:
        return getattr(self.detail, "implementations", ())

    @property
    def required_methods(self) -> tuple[Function, ...]:
        return getattr(self.detail, "required_methods", ())

    @property
    def provided_methods(self) -> tuple[Function, ...]:
        return getattr(self.detail, "provided_methods", ())

    @property
    def content(self) -> tuple[DocNode, ...]:
        return getattr(self.detail, "content", ())

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form, suitable for ``json.dumps``."""
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


def walk(nodes: Iterable[DocNode]) -> Iterator[DocNode]:
    """Yield every node of a tree, depth first, in source order."""
    for node in nodes:
        yield node
        yield from walk(node.content)


@dataclass(frozen=True)
class CodeLine:
    """A numbered line of source text."""

    number: int
    text: str


@dataclass
class ValidationResult:
    """Results from documentation validation."""

    errors: list[str] = field(default_factory=list)  # Build fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed
