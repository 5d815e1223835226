"""Builds syntax trees from caelis tokens."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, Optional, TypeVar

from caelis.ast import (
    Call,
    Def,
    Expr,
    Float,
    Func,
    FunctionType,
    GenericDef,
    IfThenElse,
    Int,
    LetIn,
    Name,
    NamedType,
    Span,
    SymbolRef,
    TypeDef,
    TypeRef,
    ValueDef,
)
from caelis.lexer import Token, TokenKind

T = TypeVar("T")


class ParseError(Exception):
    """Raised at the furthest point the parser could not get past."""

    def __init__(
        self,
        span: Span,
        found: Optional[Token],
        expected: Iterable[str],
        contexts: Iterable[tuple[str, Span]] = (),
    ) -> None:
        self.span = span
        self.found = found
        self.expected = tuple(expected)
        self.contexts = tuple(contexts)
        found_text = f"'{found.kind}'" if found is not None else "end of input"
        expected_text = ", ".join(self.expected) if self.expected else "something else"
        self.reason = f"found {found_text} expected {expected_text}"
        super().__init__(self.reason)


class _Backtrack(Exception):
    """Signals that a rule did not match; the caller rewinds."""


class Parser:
    """Recursive-descent parser over a token sequence."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = tuple(tokens)
        self._reset()

    def _reset(self) -> None:
        self._pos = 0
        self._err_pos = -1
        self._expected: set[str] = set()
        self._err_labels: list[tuple[str, int]] = []
        self._labels: list[tuple[str, int]] = []

    def parse(self) -> tuple[Def, ...]:
        """Parse every definition; raise ParseError if input is left over."""
        self._reset()
        defs = self._repeated(self._definition)
        if self._pos < len(self._tokens):
            self._note("end of input")
            raise self._error()
        return tuple(defs)

    # --- error bookkeeping -------------------------------------------------

    def _note(self, item: str) -> None:
        if self._pos > self._err_pos:
            self._err_pos = self._pos
            self._expected = {item}
            self._err_labels = [
                (label, start) for label, start in reversed(self._labels) if start < self._pos
            ]
        elif self._pos == self._err_pos:
            self._expected.add(item)

    def _error(self) -> ParseError:
        pos = self._err_pos
        count = len(self._tokens)
        if pos < count:
            found: Optional[Token] = self._tokens[pos]
            span = found.span
        else:
            found = None
            source = self._tokens[-1].span.source
            span = Span(source, len(source), len(source))
        last = self._tokens[min(pos, count - 1)].span
        contexts = [
            (label, self._tokens[start].span.join(last)) for label, start in self._err_labels
        ]
        return ParseError(span, found, sorted(self._expected), contexts)

    @contextmanager
    def _labelled(self, label: str) -> Iterator[None]:
        start = self._pos
        before = set(self._expected) if self._err_pos == start else set()
        self._labels.append((label, start))
        try:
            yield
        except _Backtrack:
            if self._err_pos == start:
                self._expected = before | {label}
            raise
        finally:
            self._labels.pop()

    # --- combinators -------------------------------------------------------

    def _expect(self, kind: TokenKind) -> Token:
        if self._pos < len(self._tokens) and self._tokens[self._pos].kind is kind:
            token = self._tokens[self._pos]
            self._pos += 1
            return token
        self._note(f"'{kind}'")
        raise _Backtrack

    def _attempt(self, rule: Callable[[], T]) -> Optional[T]:
        saved = self._pos
        try:
            return rule()
        except _Backtrack:
            self._pos = saved
            return None

    def _choice(self, *rules: Callable[[], T]) -> T:
        for rule in rules:
            result = self._attempt(rule)
            if result is not None:
                return result
        raise _Backtrack

    def _repeated(self, rule: Callable[[], T]) -> list[T]:
        items = []
        while (item := self._attempt(rule)) is not None:
            items.append(item)
        return items

    def _separated(self, rule: Callable[[], T], separator: TokenKind) -> list[T]:
        first = self._attempt(rule)
        if first is None:
            return []
        items = [first]
        while True:
            saved = self._pos
            try:
                self._expect(separator)
                items.append(rule())
            except _Backtrack:
                self._pos = saved
                return items

    # --- definitions -------------------------------------------------------

    def _definition(self) -> Def:
        return self._choice(self._generic_def, self._value_def, self._type_def)

    def _generic_def(self) -> GenericDef:
        with self._labelled("generic definition"):
            name = self._name()
            self._expect(TokenKind.DOLLAR_SIGN)
            args = self._separated(self._generic_arg, TokenKind.COMMA)
            end = self._expect(TokenKind.SEMICOLON)
            return GenericDef(name.span.join(end.span), name, tuple(args))

    def _generic_arg(self) -> tuple[Name, tuple[TypeRef, ...]]:
        with self._labelled("generic type argument"):
            name = self._name()
            bounds = self._separated(self._type_ref, TokenKind.AMPERSAND)
            return name, tuple(bounds)

    def _value_def(self) -> ValueDef:
        with self._labelled("value definition"):
            name = self._name()
            self._expect(TokenKind.EQUAL)
            body = self._expr()
            end = self._expect(TokenKind.SEMICOLON)
            return ValueDef(name.span.join(end.span), name, body)

    def _type_def(self) -> TypeDef:
        with self._labelled("type definition"):
            name = self._name()
            self._expect(TokenKind.PIPE)
            fields = self._separated(self._field_def, TokenKind.COMMA)
            end = self._expect(TokenKind.SEMICOLON)
            return TypeDef(name.span.join(end.span), name, tuple(fields))

    def _field_def(self) -> tuple[Name, TypeRef]:
        with self._labelled("field definition"):
            return self._name(), self._type_ref()

    # --- expressions -------------------------------------------------------

    def _expr(self) -> Expr:
        with self._labelled("expression"):
            return self._choice(self._if_then_else, self._let_in, self._call_chain)

    def _call_chain(self, min_power: int = 0) -> Expr:
        lhs = self._non_call()
        while True:
            arg = self._attempt(self._non_call)
            if arg is not None:
                lhs = Call(lhs.span.join(arg.span), lhs, arg)
                continue
            if min_power < 1:
                saved = self._pos
                try:
                    self._expect(TokenKind.PIPE_INTO)
                    rhs = self._call_chain(1)
                except _Backtrack:
                    self._pos = saved
                    break
                lhs = Call(lhs.span.join(rhs.span), lhs, rhs)
                continue
            break
        return lhs

    def _non_call(self) -> Expr:
        return self._choice(
            self._fn_def, self._constant, self._literal, self._pipe_from, self._parenthesized
        )

    def _pipe_from(self) -> Expr:
        self._expect(TokenKind.PIPE_FROM)
        return self._expr()

    def _parenthesized(self) -> Expr:
        self._expect(TokenKind.OPEN_PAREN)
        inner = self._expr()
        self._expect(TokenKind.CLOSE_PAREN)
        return inner

    def _fn_def(self) -> Func:
        with self._labelled("function definition"):
            arg_name = self._name()
            arg_type = self._type_ref()
            self._expect(TokenKind.ARROW)
            ret_type = self._attempt(self._type_ref)
            body = self._expr()
            return Func(arg_name.span.join(body.span), arg_name, arg_type, ret_type, body)

    def _if_then_else(self) -> IfThenElse:
        with self._labelled("branching expression"):
            start = self._expect(TokenKind.IF)
            condition = self._expr()
            self._expect(TokenKind.THEN)
            then_branch = self._expr()
            self._expect(TokenKind.ELSE)
            else_branch = self._expr()
            return IfThenElse(
                start.span.join(else_branch.span), condition, then_branch, else_branch
            )

    def _let_in(self) -> LetIn:
        with self._labelled("let expression"):
            start = self._expect(TokenKind.LET)
            defs = self._repeated(self._value_def)
            self._expect(TokenKind.IN)
            body = self._expr()
            return LetIn(start.span.join(body.span), tuple(defs), body)

    def _constant(self) -> SymbolRef:
        with self._labelled("name reference"):
            name = self._name()
            return SymbolRef(name.span, name)

    def _literal(self) -> Expr:
        with self._labelled("literal"):
            return self._number()

    def _number(self) -> Expr:
        with self._labelled("number literal"):
            return self._choice(self._float, self._int)

    def _float(self) -> Float:
        with self._labelled("float literal"):
            token = self._expect(TokenKind.FLOAT)
            return Float(token.span, float(token.text))

    def _int(self) -> Int:
        with self._labelled("int literal"):
            token = self._expect(TokenKind.INT)
            return Int(token.span, int(token.text))

    # --- types -------------------------------------------------------------

    def _type_ref(self) -> TypeRef:
        with self._labelled("type reference"):
            self._expect(TokenKind.COLON)
            return self._choice(self._simple_type, self._grouped_type)

    def _simple_type(self) -> NamedType:
        name = self._name()
        return NamedType(name.span, name, ())

    def _grouped_type(self) -> TypeRef:
        self._expect(TokenKind.OPEN_PAREN)
        inner = self._inner_type_ref()
        self._expect(TokenKind.CLOSE_PAREN)
        return inner

    def _inner_type_ref(self) -> TypeRef:
        lhs = self._non_fn_inner_type_ref()
        saved = self._pos
        try:
            self._expect(TokenKind.ARROW)
            rhs = self._inner_type_ref()
        except _Backtrack:
            self._pos = saved
            return lhs
        return FunctionType(lhs.span.join(rhs.span), lhs, rhs)

    def _non_fn_inner_type_ref(self) -> TypeRef:
        return self._choice(self._applied_type, self._grouped_type)

    def _applied_type(self) -> NamedType:
        name = self._name()
        args = self._repeated(self._non_fn_inner_type_ref)
        end = args[-1].span if args else name.span
        return NamedType(name.span.join(end), name, tuple(args))

    def _name(self) -> Name:
        with self._labelled("name"):
            return Name(self._expect(TokenKind.NAME).span)


def parse(tokens: Iterable[Token]) -> tuple[Def, ...]:
    """Parse ``tokens`` into the definitions they spell out."""
    return Parser(tokens).parse()