import pytest
from hypothesis import given, assume, strategies as st

from korisp.errors import KorispArityError, InvalidNodeArgument, KorispInternalError
from korisp.types.arguments import Arguments
from korisp.types.environment import Environment
from korisp.types.node import Node, NodeKind
from korisp.types.parameters import Parameter, Parameters, ParameterType


def numbers(count):
    return [Node.number(i) for i in range(count)]


@given(st.integers(0, 6), st.integers(0, 8))
def test_fixed_arity_reports_expected_count(n, count):
    assume(count != n)
    params = Parameters([Parameter(f"p{i}") for i in range(n)])
    with pytest.raises(KorispArityError) as excinfo:
        Arguments.from_nodes(params, numbers(count))
    assert excinfo.value.expected.describe() == str(n)
    assert excinfo.value.actual == count


@given(st.integers(0, 4), st.integers(0, 10))
def test_rest_arity_minimum(minimum, count):
    if minimum == 0:
        params = Parameters.parse("&opt & xs")
    else:
        params = Parameters.parse(" ".join(f"p{i}" for i in range(minimum - 1)) + " & xs")
    if count >= minimum:
        assert len(Arguments.from_nodes(params, numbers(count))) == count
    else:
        with pytest.raises(KorispArityError):
            Arguments.from_nodes(params, numbers(count))


def test_type_mismatch_names_accepted_set():
    bad = Node.number(2)
    with pytest.raises(InvalidNodeArgument) as excinfo:
        Arguments.from_nodes(Parameters.parse("a:number b:string"), [Node.number(1), bad])
    assert excinfo.value.expected == (ParameterType.STRING,)
    assert excinfo.value.actual is bad
    assert str(excinfo.value) == "Invalid argument '2', expected 'string'"


def test_surplus_arguments_use_rest_types():
    params = Parameters.parse("n:number & m:number")
    Arguments.from_nodes(params, numbers(5))
    with pytest.raises(InvalidNodeArgument):
        Arguments.from_nodes(params, [Node.number(1), Node.number(2), Node.string("x")])


def test_add_to_env_fills_optional_and_rest():
    params = Parameters.parse("a &opt b & c")

    env = Environment()
    Arguments.from_nodes(params, [Node.number(1)]).add_to_env(env)
    assert env.get("a") == Node.number(1)
    assert env.get("b").is_nil()
    assert env.get("c") == Node.btuple([])

    env = Environment()
    Arguments.from_nodes(params, numbers(4)).add_to_env(env)
    assert env.get("b") == Node.number(1)
    assert env.get("c") == Node.btuple([Node.number(2), Node.number(3)])


def test_binding_clones_values():
    value = Node(NodeKind.BARRAY, [Node.number(1)])
    env = Environment()
    Arguments.from_nodes(Parameters.parse("l"), [value]).add_to_env(env)
    bound = env.get("l")
    assert bound == value
    assert bound is not value
    assert bound.data is not value.data


def test_failed_validation_binds_nothing():
    env = Environment()
    with pytest.raises(InvalidNodeArgument):
        Arguments.from_nodes(Parameters.parse("a b:number"), [Node.number(1), Node.nil()]).add_to_env(env)
    assert len(env) == 0


def test_unwrap_helpers():
    args = Arguments.from_nodes(
        Parameters.parse("n s l"),
        [Node.number(3), Node.string("x"), Node.btuple(numbers(2))],
    )
    assert args.unwrap_number(0) == 3
    assert args.unwrap_string(1) == "x"
    assert args.unwrap_list(2) == numbers(2)
    assert args.unwrap_from(1) == [Node.string("x"), Node.btuple(numbers(2))]
    assert args.get(5) is None
    with pytest.raises(KorispInternalError):
        args.unwrap_number(1)
    with pytest.raises(KorispInternalError):
        args.unwrap(9)


def test_parse_parameters_from_symbols():
    contract = Node.btuple([Node.symbol(s) for s in ("a", "&opt", "b:number")])
    args = Arguments.from_nodes(Parameters.parse("p"), [contract])
    assert args.parse_parameters(0) == Parameters.parse("a &opt b:number")

    bad = Node.btuple([Node.symbol("a"), Node.number(1)])
    with pytest.raises(InvalidNodeArgument):
        Arguments.from_nodes(Parameters.parse("p"), [bad]).parse_parameters(0)
