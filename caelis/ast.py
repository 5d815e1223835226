"""Syntax tree nodes for caelis source files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class Span:
    """A slice of a source text, given by byte-free character offsets."""

    source: str = field(repr=False)
    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end <= len(self.source):
            raise ValueError(
                f"invalid span {self.start}..{self.end} for text of length {len(self.source)}"
            )

    def join(self, other: Span) -> Span:
        """Return the span running from the start of this one to the end of ``other``."""
        if other.source is not self.source and other.source != self.source:
            raise ValueError("cannot join spans of different sources")
        return Span(self.source, self.start, other.end)

    def __str__(self) -> str:
        return self.source[self.start : self.end]


@dataclass(frozen=True, eq=False)
class Name:
    """An identifier; two names are equal when their text is."""

    span: Span

    @property
    def text(self) -> str:
        return str(self.span)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Name):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class NamedType:
    """A type named by ``name`` and applied to ``args``."""

    span: Span
    name: Name
    args: tuple[TypeRef, ...] = ()


@dataclass(frozen=True)
class FunctionType:
    """The type of a function from ``arg`` to ``ret``."""

    span: Span
    arg: TypeRef
    ret: TypeRef


TypeRef = Union[NamedType, FunctionType]


@dataclass(frozen=True)
class SymbolRef:
    span: Span
    name: Name


@dataclass(frozen=True)
class Func:
    """A one-argument function literal."""

    span: Span
    arg_name: Name
    arg_type: TypeRef
    ret_type: Optional[TypeRef]
    body: Expr


@dataclass(frozen=True)
class Call:
    span: Span
    func: Expr
    arg: Expr


@dataclass(frozen=True)
class IfThenElse:
    span: Span
    condition: Expr
    then_branch: Expr
    else_branch: Expr


@dataclass(frozen=True)
class LetIn:
    span: Span
    defs: tuple[ValueDef, ...]
    body: Expr


@dataclass(frozen=True)
class Float:
    span: Span
    value: float


@dataclass(frozen=True)
class Int:
    span: Span
    value: int


Expr = Union[SymbolRef, Func, Call, IfThenElse, LetIn, Float, Int]


@dataclass(frozen=True)
class GenericDef:
    """Declares the generic arguments of ``name`` and their bounds."""

    span: Span
    name: Name
    args: tuple[tuple[Name, tuple[TypeRef, ...]], ...] = ()


@dataclass(frozen=True)
class ValueDef:
    span: Span
    name: Name
    body: Expr


@dataclass(frozen=True)
class TypeDef:
    span: Span
    name: Name
    fields: tuple[tuple[Name, TypeRef], ...] = ()


Def = Union[GenericDef, ValueDef, TypeDef]


@dataclass(frozen=True)
class Root:
    span: Span
    defs: tuple[Def, ...] = ()