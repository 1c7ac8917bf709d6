"""
Defines the abstract syntax tree (AST) node structure for the Sprig programming language.

Classes:
    ASTNode:
        Base class of every node. Provides `kind` and `to_dict()`.

    Program:
        Root node holding the top-level statements in source order.

    Statements:
        LetStatement, ConstStatement, FunctionStatement

    Expressions:
        NumberExpression, StringExpression, SymbolExpression,
        UnaryExpression, BinaryExpression

All nodes are frozen dataclasses compared structurally; statement lists and
parameter names are stored as tuples. Binary and unary
nodes keep the operator `Token` that produced them; token positions do not
take part in equality, so the same program laid out with different
whitespace yields equal trees.

Usage:
    This module is the parser's output format. `to_dict()` gives a plain
    nested dictionary (each level tagged with a `"type"` key) for JSON output,
    debugging and test assertions.

Example:
    LetStatement("x", BinaryExpression(NumberExpression(2), NumberExpression(5), Token(TokenType.ADD, "+")))
"""

from dataclasses import dataclass, fields
from typing import Any, Sequence, Union

from sprig.sprig_lexer import Token


@dataclass(frozen=True)
class ASTNode:
    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Converts the node and all descendants into nested dictionaries."""
        out: dict[str, Any] = {"type": self.kind}
        for f in fields(self):
            out[f.name] = _serialize(getattr(self, f.name))
        return out


def _serialize(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, Token):
        return {"type": str(value.type), "value": value.value}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


@dataclass(frozen=True)
class NumberExpression(ASTNode):
    literal: int


@dataclass(frozen=True)
class StringExpression(ASTNode):
    literal: str


@dataclass(frozen=True)
class SymbolExpression(ASTNode):
    """A reference to a bound name."""

    name: str


@dataclass(frozen=True)
class UnaryExpression(ASTNode):
    """Prefix negation: `-operand`."""

    operator: Token
    operand: "Expression"


@dataclass(frozen=True)
class BinaryExpression(ASTNode):
    """
    An infix operation.

    Attributes:
        left_operand (Expression): Expression left of the operator.
        right_operand (Expression): Expression right of the operator.
        operator (Token): The operator token (`+`, `-`, `*`, `/`, `^`).
    """

    left_operand: "Expression"
    right_operand: "Expression"
    operator: Token


Expression = Union[
    NumberExpression,
    StringExpression,
    SymbolExpression,
    UnaryExpression,
    BinaryExpression,
]


@dataclass(frozen=True)
class LetStatement(ASTNode):
    identifier: str
    expression: Expression


@dataclass(frozen=True)
class ConstStatement(ASTNode):
    identifier: str
    expression: Expression


@dataclass(frozen=True)
class FunctionStatement(ASTNode):
    """
    A named function declaration.

    Attributes:
        identifier (str): The function name.
        body (tuple[Statement, ...]): Statements between the braces, in source order.
        parameters (tuple[str, ...]): Parameter names; empty for `fn f() { ... }`.
    """

    identifier: str
    body: Sequence["Statement"] = ()
    parameters: Sequence[str] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", tuple(self.body))
        object.__setattr__(self, "parameters", tuple(self.parameters))


Statement = Union[LetStatement, ConstStatement, FunctionStatement]


@dataclass(frozen=True)
class Program(ASTNode):
    body: Sequence[Statement] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", tuple(self.body))


__all__ = [
    "ASTNode",
    "BinaryExpression",
    "ConstStatement",
    "Expression",
    "FunctionStatement",
    "LetStatement",
    "NumberExpression",
    "Program",
    "Statement",
    "StringExpression",
    "SymbolExpression",
    "UnaryExpression",
]
