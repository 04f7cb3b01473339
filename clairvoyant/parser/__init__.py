"""Clairvoyant language parser."""

from .lexer import Lexer, Token, TokenType, tokenize
from .parse import Parser, parse

__all__ = ["Lexer", "Parser", "Token", "TokenType", "parse", "tokenize"]
