"""
Lexical analyzer for the Sprig programming language.

This module turns raw source text into a flat list of tokens terminated by a
single EOF token.

Classes:
    CharacterStream: Cursor over an immutable source string with line/column tracking.
    Token: Immutable lexical unit (type, optional value, source position).
    LexError: Raised when the current input cannot be classified.
    Lexer: Drives the lexeme handlers over a CharacterStream.

Lexeme recognition:
    Trivially unambiguous one-character lexemes (`;`, `(`, `)`, `{`, `}`, `*`,
    `+`, `/`, `_`, `,`, `^`) are looked up directly. Everything else goes
    through an ordered chain of handlers, each exposing `satisfies(stream)`
    (lookahead only) and `parse(stream)` (consume and build a token):

        whitespace, string, `=` family, `-` family, number,
        `let`, `const`, `fn`, symbol

    The symbol handler is always last so reserved words are never read as
    identifiers. Extra handlers passed to `Lexer` are inserted before it.

Example:
    >>> tokenize("let x = 2;")
    [Token(LET, let), Token(SYMBOL, x), Token(EQUAL, =), Token(NUMBER, 2), Token(SEMICOLON, ;), Token(EOF, None)]

Exports:
    - CharacterStream
    - Token
    - LexError
    - LexemeHandler
    - Lexer
    - tokenize
"""

import string
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from sprig.sprig_constants import (
    TokenType,
    equal_tokens,
    keyword_tokens,
    minus_tokens,
    quote_chars,
    single_char_tokens,
    whitespace_chars,
)


class LexError(SyntaxError):
    """Raised when the lexer cannot classify the input at the current position.

    Attributes:
        line (int): 1-based line of the offending character.
        col (int): 1-based column of the offending character.
    """

    def __init__(self, message: str, line: int = 0, col: int = 0) -> None:
        super().__init__(f"{message} at line {line}, col {col}")
        self.line = line
        self.col = col


class CharacterStream:
    """
    A cursor over a source string with line and column tracking.

    The source itself is never modified; every handler shares one stream and
    advances its position.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Returns:
            str: The next character.

        Raises:
            LexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise LexError("Attempted to read past end of source", self.line, self.column)
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Args:
            offset (int, optional): Number of characters to look ahead. Defaults to 0.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def startswith(self, text: str) -> bool:
        """Checks whether the unconsumed input begins with `text`."""
        return self.source.startswith(text, self.position)

    def end_of_file(self) -> bool:
        """Checks if the stream has consumed all characters."""
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token in the Sprig language.

    Source position is carried for diagnostics only and is ignored by
    equality and hashing.

    Attributes:
        type (TokenType): The token's lexical category.
        value (str | None): The matched text, or None for EOF.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    type: TokenType
    value: str | None = None
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"


def is_alpha(ch: str) -> bool:
    return ch != "" and ch in string.ascii_letters


def is_digit(ch: str) -> bool:
    return ch != "" and ch in string.digits


def is_symbol_char(ch: str) -> bool:
    return is_alpha(ch) or ch == "_"


class LexemeHandler(Protocol):
    """Interface shared by every entry in the lexer's handler chain."""

    def satisfies(self, stream: CharacterStream) -> bool: ...  # pragma: no cover

    def parse(self, stream: CharacterStream) -> Token | None: ...  # pragma: no cover


class WhitespaceHandler:
    """Consumes a run of spaces, tabs and line breaks. Produces no token."""

    def satisfies(self, stream: CharacterStream) -> bool:
        return stream.peek() in whitespace_chars

    def parse(self, stream: CharacterStream) -> None:
        while self.satisfies(stream):
            stream.next()
        return None


class StringHandler:
    """Reads a `"..."` or `'...'` literal verbatim. There are no escape sequences."""

    def satisfies(self, stream: CharacterStream) -> bool:
        return stream.peek() in quote_chars

    def parse(self, stream: CharacterStream) -> Token:
        line, col = stream.line, stream.column
        quote = stream.next()
        chars: list[str] = []
        while not stream.end_of_file() and stream.peek() != quote:
            chars.append(stream.next())
        if stream.end_of_file():
            partial = "".join(chars)
            raise LexError(f"Unterminated string {quote}{partial}", line, col)
        stream.next()
        return Token(TokenType.STRING, "".join(chars), line, col)


class RunHandler:
    """
    Matches a run of one repeated character and maps its exact length to a token type.

    Used for the `=`, `==`, `===` and `-`, `--` families: at most `max_run`
    characters are taken, so a longer run splits into several tokens.

    Args:
        char (str): The repeated character.
        max_run (int): Longest run consumed as a single lexeme.
        lexemes (dict[str, TokenType]): Exact lexeme to token type.
    """

    def __init__(self, char: str, max_run: int, lexemes: dict[str, TokenType]) -> None:
        self.char = char
        self.max_run = max_run
        self.lexemes = lexemes

    def satisfies(self, stream: CharacterStream) -> bool:
        return stream.peek() == self.char

    def parse(self, stream: CharacterStream) -> Token:
        line, col = stream.line, stream.column
        count = 0
        while count < self.max_run and stream.peek(count) == self.char:
            count += 1
        lexeme = stream.source[stream.position : stream.position + count]
        if lexeme not in self.lexemes:
            raise LexError(f"Invalid operator {lexeme!r}", line, col)
        for _ in range(count):
            stream.next()
        return Token(self.lexemes[lexeme], lexeme, line, col)


class NumberHandler:
    """Reads a maximal run of decimal digits. Signs and fractions are not part of a number."""

    def satisfies(self, stream: CharacterStream) -> bool:
        return is_digit(stream.peek())

    def parse(self, stream: CharacterStream) -> Token:
        line, col = stream.line, stream.column
        digits: list[str] = []
        while is_digit(stream.peek()):
            digits.append(stream.next())
        return Token(TokenType.NUMBER, "".join(digits), line, col)


class KeywordHandler:
    """
    Recognizes one reserved word.

    The keyword only matches at a word boundary: the character right after it
    must not continue an identifier, so `lettuce` is left for the symbol
    handler. The check is pure lookahead; `parse` consumes exactly the
    keyword's characters.

    Args:
        keyword (str): The reserved word, e.g. "let".
    """

    def __init__(self, keyword: str) -> None:
        self.keyword = keyword
        self.type = keyword_tokens[keyword]

    def satisfies(self, stream: CharacterStream) -> bool:
        return stream.startswith(self.keyword) and not is_symbol_char(
            stream.peek(len(self.keyword))
        )

    def parse(self, stream: CharacterStream) -> Token:
        line, col = stream.line, stream.column
        for _ in self.keyword:
            stream.next()
        return Token(self.type, self.keyword, line, col)


class SymbolHandler:
    """Reads a maximal run of letters and underscores as an identifier."""

    def satisfies(self, stream: CharacterStream) -> bool:
        return is_symbol_char(stream.peek())

    def parse(self, stream: CharacterStream) -> Token:
        line, col = stream.line, stream.column
        chars: list[str] = []
        while is_symbol_char(stream.peek()):
            chars.append(stream.next())
        return Token(TokenType.SYMBOL, "".join(chars), line, col)


LEXEME_HANDLERS: tuple[LexemeHandler, ...] = (
    WhitespaceHandler(),
    StringHandler(),
    RunHandler("=", 3, equal_tokens),
    RunHandler("-", 2, minus_tokens),
    NumberHandler(),
    KeywordHandler("let"),
    KeywordHandler("const"),
    KeywordHandler("fn"),
)

# Must stay at the end of every handler chain.
SYMBOL_HANDLER = SymbolHandler()


class Lexer:
    """Lexical analyzer for the Sprig language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        handlers (tuple[LexemeHandler, ...]): The ordered handler chain, always
            ending with the symbol handler.
    """

    def __init__(
        self,
        source: "str | CharacterStream",
        extra_handlers: Sequence[LexemeHandler] = (),
    ) -> None:
        """Initializes the Lexer.

        Args:
            source (str | CharacterStream): Source text, or a stream positioned at its start.
            extra_handlers (Sequence[LexemeHandler], optional): Additional handlers,
                tried after the built-in ones and before the symbol handler.
        """
        self.stream = source if isinstance(source, CharacterStream) else CharacterStream(source)
        self.handlers: tuple[LexemeHandler, ...] = (
            *LEXEME_HANDLERS,
            *extra_handlers,
            SYMBOL_HANDLER,
        )

    def match_single_char(self) -> Token | None:
        """Matches a one-character structural lexeme without touching the handler chain.

        An underscore directly followed by an identifier character is left
        to the symbol handler (`_tmp`).

        Returns:
            Token | None: The token, or None if the current character is not in the table.
        """
        ch = self.stream.peek()
        if ch not in single_char_tokens:
            return None
        if ch == "_" and is_symbol_char(self.stream.peek(1)):
            return None
        line, col = self.stream.line, self.stream.column
        self.stream.next()
        return Token(single_char_tokens[ch], ch, line, col)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token; an EOF token once the input is exhausted.

        Raises:
            LexError: If no handler accepts the current character, or a
                handler rejects malformed input (e.g. an unterminated string).
        """
        while not self.stream.end_of_file():
            token = self.match_single_char()
            if token:
                return token

            handler = next((h for h in self.handlers if h.satisfies(self.stream)), None)
            if handler is None:
                raise LexError(
                    f"No valid handler for character {self.stream.peek()!r}",
                    self.stream.line,
                    self.stream.column,
                )
            token = handler.parse(self.stream)
            if token is not None:
                return token

        return Token(TokenType.EOF, None, self.stream.line, self.stream.column)

    def tokenize(self) -> list[Token]:
        """Drains the stream into a token list terminated by exactly one EOF token."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == TokenType.EOF:
                return tokens


def tokenize(source: str) -> list[Token]:
    """
    Tokenizes Sprig source text.

    Args:
        source (str): The program text.

    Returns:
        list[Token]: Tokens in source order, ending with a single EOF token.

    Raises:
        LexError: On any character sequence the lexer cannot classify.
    """
    return Lexer(source).tokenize()


__all__ = [
    "CharacterStream",
    "LEXEME_HANDLERS",
    "LexError",
    "LexemeHandler",
    "Lexer",
    "SYMBOL_HANDLER",
    "Token",
    "tokenize",
]
