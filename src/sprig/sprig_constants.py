"""
Token vocabulary for the Sprig language.

Defines the closed set of token types produced by the lexer and the lookup
tables the lexer uses to classify lexemes.

Exports:
    - TokenType
    - single_char_tokens
    - keyword_tokens
    - equal_tokens
    - minus_tokens
    - whitespace_chars
    - quote_chars
"""

from enum import Enum


class TokenType(str, Enum):
    """Lexical categories. Members compare equal to their string value."""

    SYMBOL = "SYMBOL"
    EQUAL = "EQUAL"
    DOUBLE_EQUAL = "DOUBLE_EQUAL"
    TRIPLE_EQUAL = "TRIPLE_EQUAL"
    NUMBER = "NUMBER"
    STRING = "STRING"
    ADD = "ADD"
    MINUS = "MINUS"
    DOUBLE_MINUS = "DOUBLE_MINUS"
    DIVISION = "DIVISION"
    MULTIPLICATION = "MULTIPLICATION"
    EXPONENT = "EXPONENT"
    CONST = "CONST"
    LET = "LET"
    FUNCTION = "FUNCTION"
    UNDERSCORE = "UNDERSCORE"
    SEMICOLON = "SEMICOLON"
    COMMA = "COMMA"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    EOF = "EOF"

    def __str__(self) -> str:
        return self.value


# Unambiguous one-character lexemes, matched before the handler chain runs.
single_char_tokens: dict[str, TokenType] = {
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "*": TokenType.MULTIPLICATION,
    "+": TokenType.ADD,
    "/": TokenType.DIVISION,
    "_": TokenType.UNDERSCORE,
    ",": TokenType.COMMA,
    "^": TokenType.EXPONENT,
}

keyword_tokens: dict[str, TokenType] = {
    "let": TokenType.LET,
    "const": TokenType.CONST,
    "fn": TokenType.FUNCTION,
}

equal_tokens: dict[str, TokenType] = {
    "=": TokenType.EQUAL,
    "==": TokenType.DOUBLE_EQUAL,
    "===": TokenType.TRIPLE_EQUAL,
}

minus_tokens: dict[str, TokenType] = {
    "-": TokenType.MINUS,
    "--": TokenType.DOUBLE_MINUS,
}

whitespace_chars = frozenset(" \t\r\n")
quote_chars = frozenset("\"'")

__all__ = [
    "TokenType",
    "equal_tokens",
    "keyword_tokens",
    "minus_tokens",
    "quote_chars",
    "single_char_tokens",
    "whitespace_chars",
]
