"""Syntax error construction for the parser."""

from __future__ import annotations

from typing import List, Optional

from clairvoyant.errors import CVSyntaxError

from .lexer import KEYWORDS, PUNCTUATION, Token, TokenType

_TOKEN_DESCRIPTIONS = {
    TokenType.STRING: "string",
    TokenType.NUMBER: "number",
    TokenType.IDENTIFIER: "identifier",
    TokenType.EOF: "end of file",
}


def describe_token_type(token_type: TokenType) -> str:
    """Human readable name of a token type, e.g. ``'{'`` or ``identifier``."""
    if token_type in _TOKEN_DESCRIPTIONS:
        return _TOKEN_DESCRIPTIONS[token_type]
    for text, candidate in PUNCTUATION.items():
        if candidate is token_type:
            return f"'{text}'"
    for text, candidate in KEYWORDS.items():
        if candidate is token_type:
            return f"'{text}'"
    return token_type.name.lower()


def describe_token(token: Token) -> str:
    if token.type in (TokenType.IDENTIFIER, TokenType.NUMBER):
        return f"{describe_token_type(token.type)} '{token.value}'"
    if token.type is TokenType.STRING:
        return f"string {token.value!r}"
    return describe_token_type(token.type)


def create_syntax_error(
    message: str,
    *,
    path: Optional[str] = None,
    line: Optional[int] = None,
    column: Optional[int] = None,
    expected: Optional[List[str]] = None,
    found: Optional[str] = None,
    suggestion: Optional[str] = None,
) -> CVSyntaxError:
    """Create a syntax error with expected/found context folded into the message."""
    details = []
    if expected:
        if len(expected) == 1:
            details.append(f"expected {expected[0]}")
        else:
            details.append(f"expected one of {', '.join(expected)}")
    if found:
        details.append(f"found {found}")
    if details:
        message = f"{message}: {', '.join(details)}"
    return CVSyntaxError(
        message,
        path=path or None,
        line=line,
        column=column,
        hint=suggestion,
    )


__all__ = ["create_syntax_error", "describe_token", "describe_token_type"]
