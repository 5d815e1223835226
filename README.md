# caelis

A lexer and parser for Caelis. Caelis is a small functional language that is
written as definitions of values, record types and generic parameters.

## Installation

```
pip install .
```

## Command line

```
caelis program.cae
```

The command reads the file, tokenizes it and parses it. If the file is valid,
it prints the parsed definitions and exits with status 0. If the file cannot be
read, or if tokenizing or parsing fails, it writes a message to standard error
and exits with status 1. Only the first error is reported. The report gives
the file name, the line and column, the source line with the offending text
marked, and for parse errors the constructs that were being parsed when the
error happened.

## The language

```
# a record type with two fields
Point | x :F64, y :F64;

# generic parameters for a type
Pair $ a :Show & :Eq, b;

# a value definition
double = n :I64 -> :I64 mul n 2;

four = 2 |> double;

choose = c :Bool -> if c then 1.5 else let z = 0; in z;
```

- `name = expr;` defines a value.
- `Name | field :Type, ...;` defines a record type.
- `Name $ arg :Bound & :Bound, ...;` declares generic parameters.
- `x :T -> :R body` is a function. The return type is optional.
- A type is `:Name`, or a parenthesised type such as `:(List a -> b)`.
  Inside parentheses, `->` groups to the right.
- `f a` applies a function, `a |> f` pipes a value into a function, and
  `<| expr` groups everything that follows it.
- `if ... then ... else ...` and `let defs... in expr` work as you would expect.
- `#` starts a comment that runs to the end of the line.

The lexer has two quirks:

- Keywords are matched as prefixes before names. An identifier that starts
  with `let`, `in`, `if`, `then` or `else`, such as `index`, is therefore split
  into a keyword and a shorter name.
- Every number literal, with or without a fractional part, is lexed as a
  float token, and it parses to a `Float` node.

## Library use

```python
from caelis.lexer import tokenize
from caelis.parser import parse

tokens = tokenize("answer = 42;")
defs = parse(tokens)
```

- `caelis.lexer.tokenize(text)` returns a list of `Token`s. Each `Token` has a
  `kind` (a `TokenKind`) and a `span`. It raises `LexError` at the first
  character where no token can start.
- `caelis.parser.parse(tokens)`, or `Parser(tokens).parse()`, returns a tuple
  of definitions (`GenericDef`, `ValueDef`, `TypeDef`). It raises `ParseError`
  at the furthest position it could not get past. The error carries `span`,
  `found`, `expected`, `contexts` and `reason`.
- `caelis.ast` holds the frozen dataclass nodes. Every node has a `span`, a
  `Span` over the source text. `str(span)` gives that text.
- `caelis.cli.format_error(filename, source, error)` turns either error into a
  report that points at the offending source text.

## What it does not do

This package only tokenizes and parses. It does not check or infer types,
resolve names, or generate code. Its output is the syntax tree.