import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sprig.sprig_ast import (
    BinaryExpression,
    ConstStatement,
    FunctionStatement,
    LetStatement,
    NumberExpression,
    Program,
    StringExpression,
    SymbolExpression,
    UnaryExpression,
)
from sprig.sprig_constants import TokenType
from sprig.sprig_lexer import Token

PLUS = Token(TokenType.ADD, "+", 1, 11)


def test_node_kind_is_class_name() -> None:
    assert NumberExpression(1).kind == "NumberExpression"
    assert Program([]).kind == "Program"


def test_node_eq_equal() -> None:
    assert LetStatement("x", NumberExpression(1)) == LetStatement("x", NumberExpression(1))


def test_node_eq_not_equal_kind() -> None:
    assert LetStatement("x", NumberExpression(1)) != ConstStatement("x", NumberExpression(1))


def test_node_eq_not_equal_children() -> None:
    n1 = FunctionStatement("f", [LetStatement("a", NumberExpression(1))])
    n2 = FunctionStatement("f", [LetStatement("a", NumberExpression(2))])
    assert n1 != n2


def test_operator_position_ignored_by_equality() -> None:
    a = BinaryExpression(NumberExpression(1), NumberExpression(2), PLUS)
    b = BinaryExpression(
        NumberExpression(1), NumberExpression(2), Token(TokenType.ADD, "+", 7, 3)
    )
    assert a == b


def test_nodes_are_frozen() -> None:
    node = LetStatement("x", NumberExpression(1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.identifier = "y"  # type: ignore[misc]


def test_function_defaults() -> None:
    fn = FunctionStatement("f")
    assert fn.body == ()
    assert fn.parameters == ()


def test_sequences_stored_as_tuples() -> None:
    program = Program([FunctionStatement("f", [LetStatement("a", NumberExpression(1))], ["p"])])
    fn = program.body[0]
    assert isinstance(program.body, tuple)
    assert isinstance(fn.body, tuple)  # type: ignore[union-attr]
    assert fn.parameters == ("p",)  # type: ignore[union-attr]
    assert program == Program((fn,))


def test_tree_cannot_be_modified() -> None:
    program = Program([LetStatement("a", NumberExpression(1))])
    with pytest.raises(AttributeError):
        program.body.append(LetStatement("b", NumberExpression(2)))  # type: ignore[attr-defined]
    with pytest.raises(dataclasses.FrozenInstanceError):
        program.body = ()  # type: ignore[misc]
    assert len(program.body) == 1


def test_tree_is_hashable() -> None:
    p1 = Program([FunctionStatement("f", [ConstStatement("k", NumberExpression(1))])])
    p2 = Program([FunctionStatement("f", [ConstStatement("k", NumberExpression(1))])])
    assert hash(p1) == hash(p2)
    assert len({p1, p2}) == 1


def test_to_dict_let_binary() -> None:
    node = LetStatement(
        "hello", BinaryExpression(NumberExpression(2), NumberExpression(5), PLUS)
    )
    assert node.to_dict() == {
        "type": "LetStatement",
        "identifier": "hello",
        "expression": {
            "type": "BinaryExpression",
            "left_operand": {"type": "NumberExpression", "literal": 2},
            "right_operand": {"type": "NumberExpression", "literal": 5},
            "operator": {"type": "ADD", "value": "+"},
        },
    }


def test_to_dict_program_and_function() -> None:
    program = Program(
        [
            FunctionStatement(
                "f",
                [ConstStatement("s", StringExpression("hi"))],
                ["a"],
            ),
            LetStatement(
                "n",
                UnaryExpression(Token(TokenType.MINUS, "-"), SymbolExpression("a")),
            ),
        ]
    )
    assert program.to_dict() == {
        "type": "Program",
        "body": [
            {
                "type": "FunctionStatement",
                "identifier": "f",
                "body": [
                    {
                        "type": "ConstStatement",
                        "identifier": "s",
                        "expression": {"type": "StringExpression", "literal": "hi"},
                    }
                ],
                "parameters": ["a"],
            },
            {
                "type": "LetStatement",
                "identifier": "n",
                "expression": {
                    "type": "UnaryExpression",
                    "operator": {"type": "MINUS", "value": "-"},
                    "operand": {"type": "SymbolExpression", "name": "a"},
                },
            },
        ],
    }


@given(st.integers(), st.integers())  # type: ignore[misc]
def test_to_dict_number_literals(left: int, right: int) -> None:
    d = BinaryExpression(NumberExpression(left), NumberExpression(right), PLUS).to_dict()
    assert d["left_operand"]["literal"] == left
    assert d["right_operand"]["literal"] == right
