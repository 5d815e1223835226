import dataclasses

import pytest

from caelis.ast import (
    Call,
    Float,
    FunctionType,
    IfThenElse,
    LetIn,
    Name,
    NamedType,
    Root,
    Span,
    SymbolRef,
    TypeDef,
    ValueDef,
)

SOURCE = "main = f x; g = f x;"


def test_span_str_is_slice():
    span = Span(SOURCE, 0, 4)
    assert str(span) == "main"


def test_span_join_covers_both():
    left = Span(SOURCE, 7, 8)
    right = Span(SOURCE, 9, 10)
    joined = left.join(right)
    assert (joined.start, joined.end) == (left.start, right.end)
    assert str(joined) == SOURCE[7:10]


def test_span_join_rejects_other_source():
    with pytest.raises(ValueError):
        Span(SOURCE, 0, 1).join(Span("other text", 2, 3))


def test_span_rejects_out_of_range():
    with pytest.raises(ValueError):
        Span(SOURCE, 3, len(SOURCE) + 1)
    with pytest.raises(ValueError):
        Span(SOURCE, 5, 2)


def test_name_equality_by_text():
    first = Name(Span(SOURCE, 7, 8))
    second = Name(Span(SOURCE, 16, 17))
    assert first.span != second.span
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_name_text_and_str():
    name = Name(Span(SOURCE, 0, 4))
    assert name.text == "main"
    assert str(name) == name.text
    assert name != Name(Span(SOURCE, 12, 13))


def test_nodes_are_frozen():
    name = Name(Span(SOURCE, 0, 4))
    with pytest.raises(dataclasses.FrozenInstanceError):
        name.span = Span(SOURCE, 0, 1)


def test_call_tree_built_from_spans():
    f_span = Span(SOURCE, 7, 8)
    x_span = Span(SOURCE, 9, 10)
    func = SymbolRef(f_span, Name(f_span))
    arg = SymbolRef(x_span, Name(x_span))
    call = Call(f_span.join(x_span), func, arg)
    definition = ValueDef(Span(SOURCE, 0, 11), Name(Span(SOURCE, 0, 4)), call)
    root = Root(Span(SOURCE, 0, len(SOURCE)), (definition,))
    assert root.defs[0].body.func.name == Name(f_span)
    assert str(root.defs[0].body.span) == "f x"
    assert str(root.span) == SOURCE


def test_type_refs_and_defs():
    text = "Pair | a :A, f :(A -> A);"
    a_span = Span(text, 15, 16)
    a_type = NamedType(a_span, Name(a_span))
    fn_type = FunctionType(Span(text, 15, 21), a_type, a_type)
    type_def = TypeDef(
        Span(text, 0, len(text)),
        Name(Span(text, 0, 4)),
        ((Name(Span(text, 7, 8)), a_type), (Name(Span(text, 13, 14)), fn_type)),
    )
    assert [str(n) for n, _ in type_def.fields] == ["a", "f"]
    assert type_def.fields[1][1].arg == type_def.fields[1][1].ret
    assert a_type.args == ()


def test_branch_and_let_nodes():
    text = "if c then 1 else 2"
    c = SymbolRef(Span(text, 3, 4), Name(Span(text, 3, 4)))
    one = Float(Span(text, 10, 11), 1.0)
    two = Float(Span(text, 17, 18), 2.0)
    node = IfThenElse(Span(text, 0, len(text)), c, one, two)
    assert node.then_branch.value < node.else_branch.value
    let = LetIn(node.span, (), node)
    assert let.body is node
    assert let.defs == ()