import pytest
from hypothesis import given, strategies as st

from korisp.errors import KorispSyntaxError
from korisp.reader.lexer import lex
from korisp.reader.parser import TokenStream, parse
from korisp.types.location import Location
from korisp.types.node import Node, NodeKind


def first(source):
    return parse(source).data[0]


@pytest.mark.parametrize(
    "source, kinds",
    [
        ("(a 1)", ["open", "atom", "atom", "close"]),
        ('@"b" "s"', ["string", "string"]),
        ("'x ;y", ["reader_macro", "atom", "reader_macro", "atom"]),
        ("|x a|b", ["reader_macro", "atom", "atom"]),
        ("# comment\n@[1]", ["open", "atom", "close"]),
    ],
)
def test_lexer_kinds(source, kinds):
    assert [t.kind for t in lex(source)] == kinds


def test_lexer_locations():
    tokens = list(lex("(a\n  b)"))
    assert [t.location for t in tokens] == [
        Location(1, 1),
        Location(1, 2),
        Location(2, 3),
        Location(2, 4),
    ]


@pytest.mark.parametrize(
    "source, expected",
    [
        ("42", Node.number(42)),
        ("-1.5", Node.number(-1.5)),
        ("1e3", Node.number(1000)),
        ('"hi"', Node.string("hi")),
        ('"a\\nb"', Node.string("a\nb")),
        ('"q\\"q"', Node.string('q"q')),
        ('@"buf"', Node.buffer("buf")),
        (":key", Node.keyword("key")),
        ("true", Node.boolean(True)),
        ("false", Node.boolean(False)),
        ("nil", Node.nil()),
        ("foo", Node.symbol("foo")),
        ("-", Node.symbol("-")),
        ("++", Node.symbol("++")),
        ("list/map", Node.symbol("list/map")),
        ("a:number", Node.symbol("a:number")),
        ("a:number|string", Node.symbol("a:number|string")),
        ("$0", Node.symbol("$0")),
    ],
)
def test_atoms(source, expected):
    assert first(source) == expected


@pytest.mark.parametrize(
    "source, kind",
    [
        ("(1)", NodeKind.PTUPLE),
        ("[1]", NodeKind.BTUPLE),
        ("@(1)", NodeKind.PARRAY),
        ("@[1]", NodeKind.BARRAY),
        ("{:a 1}", NodeKind.STRUCT),
        ("@{:a 1}", NodeKind.TABLE),
    ],
)
def test_collections(source, kind):
    assert first(source).kind is kind


@pytest.mark.parametrize(
    "source, head",
    [("'x", "quote"), ("~x", "quasiquote"), (",x", "unquote"), (";x", "splice"), ("|x", "short-fn")],
)
def test_reader_macros(source, head):
    node = first(source)
    assert node == Node.ptuple([Node.symbol(head), Node.symbol("x")])
    assert node.location == Location(1, 1)
    assert node.data[1].location == Location(1, 2)


def test_nested_locations():
    node = first("(a\n  (b c))")
    inner = node.data[1]
    assert inner.location == Location(2, 3)
    assert inner.data[1].location == Location(2, 6)


def test_program_is_main():
    program = parse("1 # one\n2")
    assert program.kind is NodeKind.MAIN
    assert program.data == [Node.number(1), Node.number(2)]
    assert list(TokenStream(lex("")).parse_all()) == []


@pytest.mark.parametrize(
    "source, location",
    [
        ("(a", Location(1, 1)),
        ("  )", Location(1, 3)),
        ("(a]", Location(1, 3)),
        ("{:a}", Location(1, 1)),
        ('x "abc', Location(1, 3)),
        ("'", Location(1, 1)),
        ('"\\q"', Location(1, 1)),
    ],
)
def test_syntax_errors(source, location):
    with pytest.raises(KorispSyntaxError) as excinfo:
        parse(source)
    assert excinfo.value.location == location


@given(st.integers(-10**9, 10**9))
def test_integers_read_back(n):
    assert first(str(n)) == Node.number(n)
