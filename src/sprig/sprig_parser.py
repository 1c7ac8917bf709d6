"""
Sprig Language Parser

Parses Sprig tokens into an abstract syntax tree rooted at a `Program` node.

Supported Constructs
--------------------
- Statements:
    * Bindings: `let x = EXPR;`, `const x = EXPR;`
    * Functions: `fn name(a, b) { STATEMENT* }` (parameter list may be empty)

- Expressions (lowest to highest binding):
    * `+`, `-`    left-associative
    * `*`, `/`    left-associative
    * `^`         right-associative
    * unary `-`
    * number, string and symbol literals, parenthesised groups

Parser Behavior
---------------
- Recursive descent, one method per grammar production.
- The cursor only moves forward.
- Fails fast: the first malformed construct raises `ParseError`; no partial
  tree is returned.

Entry Points
------------
- `parse(tokens)`: Parse a full token list into a `Program`.
- `Parser.parse_statement()`: Parse a single statement.
- `Parser.parse_expression()`: Parse a single expression.

Raises
------
ParseError
    Raised when the current token cannot begin or continue the rule in progress.
"""

from __future__ import annotations

from sprig.sprig_ast import (
    BinaryExpression,
    ConstStatement,
    Expression,
    FunctionStatement,
    LetStatement,
    NumberExpression,
    Program,
    Statement,
    StringExpression,
    SymbolExpression,
    UnaryExpression,
)
from sprig.sprig_constants import TokenType
from sprig.sprig_lexer import Token


class ParseError(SyntaxError):
    """Raised when a token does not fit the grammar rule being parsed.

    Attributes:
        token (Token | None): The offending token, when there is one.
    """

    def __init__(self, message: str, token: Token | None = None) -> None:
        if token is not None:
            message = f"{message}, got {token!r} at line {token.line}, col {token.col}"
        super().__init__(message)
        self.token = token


class Parser:
    """
    Sprig Parser Class

    Transforms a token list produced by the lexer into a `Program` AST.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream, terminated by an EOF token.
    position : int
        Current index into the token stream.
    additive_ops : set[TokenType]
        Operators handled at the lowest precedence tier.
    multiplicative_ops : set[TokenType]
        Operators handled at the term tier.
    statement_parsers : dict[TokenType, Callable[[], Statement]]
        Statement rule to run for each statement-starting token type.

    Raises
    ------
    ParseError
        When an invalid construct or malformed syntax is encountered during parsing.
    """

    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ParseError("Token stream must end with an EOF token")
        stray = next((t for t in tokens[:-1] if t.type == TokenType.EOF), None)
        if stray is not None:
            raise ParseError("EOF token may only appear at the end of the stream", stray)
        self.tokens: list[Token] = tokens
        self.position: int = 0

        self.additive_ops: set[TokenType] = {TokenType.ADD, TokenType.MINUS}
        self.multiplicative_ops: set[TokenType] = {
            TokenType.MULTIPLICATION,
            TokenType.DIVISION,
        }
        self.statement_parsers = {
            TokenType.LET: self.parse_let,
            TokenType.CONST: self.parse_const,
            TokenType.FUNCTION: self.parse_function,
        }

    def current(self) -> Token:
        # The trailing EOF token is returned for any position past the end.
        return self.tokens[min(self.position, len(self.tokens) - 1)]

    def peek(self, offset: int = 1) -> Token:
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        tok = self.current()
        if tok.type != TokenType.EOF:
            self.position += 1
        return tok

    def match(self, *types: TokenType, expected: str | None = None) -> Token:
        """Consume the current token if its type is one of `types`, else raise."""
        tok = self.current()
        if tok.type in types:
            return self.advance()
        what = expected or " or ".join(str(t) for t in types)
        raise ParseError(f"Expected {what}", tok)

    def parse(self) -> Program:
        """Parse a full Sprig program."""
        body: list[Statement] = []
        try:
            while self.current().type != TokenType.EOF:
                body.append(self.parse_statement())
        except RecursionError as e:
            raise ParseError("Expression nested too deeply", self.current()) from e
        return Program(tuple(body))

    def parse_statement(self) -> Statement:
        """Dispatch on the leading token to the matching statement rule."""
        tok = self.current()
        rule = self.statement_parsers.get(tok.type)
        if rule is None:
            raise ParseError("Expected a statement ('let', 'const' or 'fn')", tok)
        return rule()

    def parse_binding(self, keyword: TokenType) -> tuple[str, Expression]:
        """Parse `KEYWORD SYMBOL = EXPRESSION ;` and return the name and initializer."""
        self.match(keyword)
        name_tok = self.match(TokenType.SYMBOL, expected="identifier")
        self.match(TokenType.EQUAL, expected="'='")
        expr = self.parse_expression()
        self.match(TokenType.SEMICOLON, expected="';'")
        assert name_tok.value is not None  # for mypy
        return name_tok.value, expr

    def parse_let(self) -> LetStatement:
        return LetStatement(*self.parse_binding(TokenType.LET))

    def parse_const(self) -> ConstStatement:
        return ConstStatement(*self.parse_binding(TokenType.CONST))

    def parse_function(self) -> FunctionStatement:
        """Parse `fn NAME ( PARAMS ) { STATEMENT* }`."""
        self.match(TokenType.FUNCTION)
        name_tok = self.match(TokenType.SYMBOL, expected="function name")
        self.match(TokenType.LPAREN, expected="'('")

        params: list[str] = []
        if self.current().type != TokenType.RPAREN:
            while True:
                param_tok = self.match(TokenType.SYMBOL, expected="parameter name")
                assert param_tok.value is not None  # for mypy
                params.append(param_tok.value)
                if self.current().type != TokenType.COMMA:
                    break
                self.advance()
        self.match(TokenType.RPAREN, expected="')'")

        body = self.parse_block()
        assert name_tok.value is not None  # for mypy
        return FunctionStatement(name_tok.value, body, tuple(params))

    def parse_block(self) -> tuple[Statement, ...]:
        """Parse a `{}`-enclosed list of statements."""
        self.match(TokenType.LBRACE, expected="'{'")
        stmts: list[Statement] = []
        while self.current().type != TokenType.RBRACE:
            if self.current().type == TokenType.EOF:
                raise ParseError("Expected closing '}'", self.current())
            stmts.append(self.parse_statement())
        self.match(TokenType.RBRACE)
        return tuple(stmts)

    def parse_expression(self) -> Expression:
        return self.parse_additive()

    def parse_additive(self) -> Expression:
        """additive := term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.current().type in self.additive_ops:
            op_tok = self.advance()
            right = self.parse_term()
            left = BinaryExpression(left, right, op_tok)
        return left

    def parse_term(self) -> Expression:
        """term := power (('*' | '/') power)*"""
        left = self.parse_power()
        while self.current().type in self.multiplicative_ops:
            op_tok = self.advance()
            right = self.parse_power()
            left = BinaryExpression(left, right, op_tok)
        return left

    def parse_power(self) -> Expression:
        """power := unary ['^' power]"""
        base = self.parse_unary()
        if self.current().type == TokenType.EXPONENT:
            op_tok = self.advance()
            return BinaryExpression(base, self.parse_power(), op_tok)
        return base

    def parse_unary(self) -> Expression:
        if self.current().type == TokenType.MINUS:
            op_tok = self.advance()
            return UnaryExpression(op_tok, self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> Expression:
        """Parse a literal, a symbol reference or a parenthesised expression."""
        tok = self.current()
        if tok.type == TokenType.NUMBER:
            self.advance()
            try:
                literal = int(tok.value or "0")
            except ValueError as e:
                raise ParseError("Number literal too large", tok) from e
            return NumberExpression(literal)
        if tok.type == TokenType.STRING:
            self.advance()
            return StringExpression(tok.value or "")
        if tok.type == TokenType.SYMBOL:
            self.advance()
            return SymbolExpression(tok.value or "")
        if tok.type == TokenType.LPAREN:
            self.advance()
            expr = self.parse_expression()
            self.match(TokenType.RPAREN, expected="')'")
            return expr
        raise ParseError("Expected expression", tok)


def parse(tokens: list[Token]) -> Program:
    """
    Parse a token list into a Program.

    Args:
        tokens (list[Token]): Lexer output, ending with an EOF token.

    Returns:
        Program: The root of the AST.

    Raises:
        ParseError: On the first token that does not fit the grammar.
    """
    return Parser(tokens).parse()


__all__ = ["ParseError", "Parser", "parse"]
