import pytest
from hypothesis import given, strategies as st

from korisp.errors import (
    KorispContractError,
    InvalidParameterType,
    NonLastParameterIsRest,
    RequiredParameterAfterOptional,
)
from korisp.types.node import Node
from korisp.types.parameters import (
    Arity,
    ArityKind,
    Parameter,
    Parameters,
    ParameterType,
)


def test_parse_full_contract():
    params = Parameters.parse("a b:string|number &opt c & d")
    assert len(params) == 4
    assert params[0] == Parameter("a")
    assert params[1].types == (ParameterType.STRING, ParameterType.NUMBER)
    assert params[2].optional and not params[2].rest
    assert params[3].optional and params[3].rest
    assert params.arity == Arity(ArityKind.REST, 2, None)


def test_brackets_are_optional():
    assert Parameters.parse("[n:number & m:number]") == Parameters.parse("n:number & m:number")


@pytest.mark.parametrize(
    "contract, kind, minimum, maximum, described",
    [
        ("", ArityKind.NONE, 0, 0, "0"),
        ("a b", ArityKind.FIXED, 2, 2, "2"),
        ("a &opt b c", ArityKind.OPTIONAL, 1, 3, "1-3"),
        ("& xs", ArityKind.REST, 1, None, "at least 1"),
        ("n:number & m:number", ArityKind.REST, 2, None, "at least 2"),
        ("&opt & xs", ArityKind.REST, 0, None, "at least 0"),
    ],
)
def test_arity(contract, kind, minimum, maximum, described):
    arity = Parameters.parse(contract).arity
    assert arity.kind is kind
    assert arity.minimum == minimum
    assert arity.maximum == maximum
    assert arity.describe() == described


@pytest.mark.parametrize(
    "arity, count, accepted",
    [
        (Arity(ArityKind.NONE), 0, True),
        (Arity(ArityKind.NONE), 1, False),
        (Arity(ArityKind.FIXED, 2, 2), 2, True),
        (Arity(ArityKind.FIXED, 2, 2), 3, False),
        (Arity(ArityKind.OPTIONAL, 1, 3), 0, False),
        (Arity(ArityKind.OPTIONAL, 1, 3), 3, True),
        (Arity(ArityKind.REST, 2, None), 1, False),
        (Arity(ArityKind.REST, 2, None), 20, True),
    ],
)
def test_arity_accepts(arity, count, accepted):
    assert arity.accepts(count) is accepted


def test_str_renders_markers():
    assert str(Parameters.parse("a b:string|number &opt c & d")) == "[a b:string|number &opt c & d]"
    assert str(Parameters.parse("&opt & xs")) == "[&opt & xs]"
    assert str(Parameters.none()) == "[]"


def test_unknown_type_tag():
    with pytest.raises(InvalidParameterType) as excinfo:
        Parameters.parse("a:bogus")
    assert excinfo.value.type_name == "bogus"


def test_rest_must_be_last():
    with pytest.raises(NonLastParameterIsRest):
        Parameters.parse("& a b")
    with pytest.raises(NonLastParameterIsRest):
        Parameters([Parameter("a", rest=True), Parameter("b")])


def test_required_after_optional():
    with pytest.raises(RequiredParameterAfterOptional):
        Parameters([Parameter("a", optional=True), Parameter("b")])


@pytest.mark.parametrize("contract", ["a &", "a a", "a &opt a"])
def test_malformed_contracts(contract):
    with pytest.raises(KorispContractError):
        Parameters.parse(contract)


@pytest.mark.parametrize(
    "types, node, accepted",
    [
        ((), Node.nil(), True),
        ((ParameterType.STRING,), Node.buffer("b"), True),
        ((ParameterType.LIST,), Node.ptuple([]), True),
        ((ParameterType.MAP,), Node.number(1), False),
        ((ParameterType.BOOLEAN, ParameterType.NIL), Node.boolean(False), True),
    ],
)
def test_parameter_accepts(types, node, accepted):
    assert Parameter("p", types).accepts(node) is accepted


@st.composite
def contracts(draw):
    required = draw(st.integers(0, 3))
    optional = draw(st.integers(0, 3))
    rest = draw(st.booleans())
    type_sets = st.lists(st.sampled_from(list(ParameterType)), unique=True, max_size=3)

    params = []
    for index in range(required + optional):
        params.append(
            Parameter(f"p{index}", tuple(draw(type_sets)), optional=index >= required)
        )
    if rest:
        rest_optional = optional > 0 or draw(st.booleans())
        params.append(Parameter("xs", tuple(draw(type_sets)), optional=rest_optional, rest=True))
    return Parameters(params)


@given(contracts())
def test_render_then_parse_round_trip(params):
    reparsed = Parameters.parse(str(params))
    assert reparsed == params
    assert reparsed.arity == params.arity
    assert [p.types for p in reparsed] == [p.types for p in params]
