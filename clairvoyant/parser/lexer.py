"""Lexical analyzer (tokenizer) for the Clairvoyant language.

Converts preprocessed source text into a stream of tokens for parsing.
"""

from __future__ import annotations
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from clairvoyant.errors import CVSyntaxError


class TokenType(Enum):
    """Token types for the Clairvoyant language."""

    # Literals
    STRING = auto()
    NUMBER = auto()

    # Identifiers and Keywords
    IDENTIFIER = auto()
    GAME = auto()
    COMPONENT = auto()
    TEMPLATE = auto()
    SYSTEM = auto()
    EXTENDS = auto()
    TRUE = auto()
    FALSE = auto()

    # Punctuation
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COLON = auto()
    SEMICOLON = auto()
    COMMA = auto()

    # Special
    EOF = auto()


@dataclass
class Token:
    """A single token with position information."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


# Keyword mapping
KEYWORDS = {
    "game": TokenType.GAME,
    "component": TokenType.COMPONENT,
    "template": TokenType.TEMPLATE,
    "system": TokenType.SYSTEM,
    "extends": TokenType.EXTENDS,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

PUNCTUATION = {
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    ':': TokenType.COLON,
    ';': TokenType.SEMICOLON,
    ',': TokenType.COMMA,
}

_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
}


class Lexer:
    """Tokenizer for Clairvoyant source code."""

    def __init__(self, source: str, path: str = ""):
        """Initialize lexer with source code."""
        self.source = source
        self.path = path
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def error(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> CVSyntaxError:
        """Create a lexer error, at the cursor unless a start position is given."""
        return CVSyntaxError(
            message,
            path=self.path or None,
            line=self.line if line is None else line,
            column=self.column if column is None else column,
        )

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs and line breaks."""
        while self.peek() in (' ', '\t', '\r', '\n'):
            self.advance()

    def skip_comment(self) -> None:
        """Skip a ``//`` line comment or a ``/* */`` block comment."""
        start_line, start_column = self.line, self.column
        self.advance()  # /
        if self.advance() == '/':
            while self.peek() and self.peek() != '\n':
                self.advance()
            return
        while True:
            if self.peek() is None:
                raise self.error("Unterminated block comment", start_line, start_column)
            if self.peek() == '*' and self.peek(1) == '/':
                self.advance()
                self.advance()
                return
            self.advance()

    def read_string(self) -> str:
        """Read a string literal and return its unescaped value."""
        start_line, start_column = self.line, self.column
        quote = self.advance()  # " or '
        chars = []

        while True:
            char = self.peek()
            if char is None or char == '\n':
                raise self.error("Unterminated string literal", start_line, start_column)
            if char == quote:
                self.advance()
                break
            if char == '\\':
                self.advance()
                escape = self.advance()
                if escape is None:
                    raise self.error("Unterminated string literal", start_line, start_column)
                if escape == 'u':
                    chars.append(self.read_unicode_escape())
                else:
                    chars.append(_ESCAPES.get(escape, escape))
            else:
                chars.append(self.advance())

        return ''.join(chars)

    def read_unicode_escape(self) -> str:
        """Read the four hex digits following ``\\u``."""
        line, column = self.line, self.column - 2
        digits = ''.join(self.peek(i) or '' for i in range(4))
        if len(digits) != 4 or any(c not in string.hexdigits for c in digits):
            raise self.error("Invalid unicode escape: expected \\u followed by 4 hex digits", line, column)
        for _ in range(4):
            self.advance()
        return chr(int(digits, 16))

    def read_number(self) -> str:
        """Read a numeric literal, keeping its text."""
        chars = []

        # Optional minus sign
        if self.peek() == '-':
            chars.append(self.advance())

        # Integer part
        while self.peek() and self.peek().isdigit():
            chars.append(self.advance())

        # Fractional part
        if self.peek() == '.' and self.peek(1) and self.peek(1).isdigit():
            chars.append(self.advance())  # .
            while self.peek() and self.peek().isdigit():
                chars.append(self.advance())

        # Exponent
        if self.peek() and self.peek().lower() == 'e':
            following = self.peek(1) or ''
            if following.isdigit() or (following in ('+', '-') and (self.peek(2) or '').isdigit()):
                chars.append(self.advance())  # e
                if self.peek() in ('+', '-'):
                    chars.append(self.advance())
                while self.peek() and self.peek().isdigit():
                    chars.append(self.advance())

        return ''.join(chars)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        while self.peek() and (self.peek().isalnum() or self.peek() in ('_', '$')):
            chars.append(self.advance())
        return ''.join(chars)

    def add_token(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        """Add a token to the list."""
        self.tokens.append(Token(type=token_type, value=value, line=line, column=column))

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while True:
            self.skip_whitespace()

            # Check for EOF
            if self.pos >= len(self.source):
                break

            char = self.peek()
            line, column = self.line, self.column

            # Skip comments
            if char == '/' and self.peek(1) in ('/', '*'):
                self.skip_comment()
                continue

            # String literals
            if char in ('"', "'"):
                value = self.read_string()
                self.add_token(TokenType.STRING, value, line, column)
                continue

            # Numbers
            if char.isdigit() or (char == '-' and self.peek(1) and self.peek(1).isdigit()):
                value = self.read_number()
                self.add_token(TokenType.NUMBER, value, line, column)
                continue

            # Identifiers and keywords
            if char.isalpha() or char in ('_', '$'):
                value = self.read_identifier()
                token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
                self.add_token(token_type, value, line, column)
                continue

            if char in PUNCTUATION:
                self.advance()
                self.add_token(PUNCTUATION[char], char, line, column)
                continue

            # Unknown character
            raise self.error(f"Unexpected character: {char!r}")

        # Add EOF token
        self.add_token(TokenType.EOF, '', self.line, self.column)

        return self.tokens


def tokenize(source: str, path: str = "") -> List[Token]:
    """Tokenize Clairvoyant source code."""
    lexer = Lexer(source, path)
    return lexer.tokenize()


__all__ = ["Token", "TokenType", "Lexer", "tokenize", "KEYWORDS", "PUNCTUATION"]
