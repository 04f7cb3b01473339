"""Recursive descent parser for the Clairvoyant language."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from clairvoyant.ast import Component, Program, SourceLocation, System, Template
from clairvoyant.errors import CVSyntaxError

from .declarations import DeclarationParsingMixin
from .errors import create_syntax_error, describe_token, describe_token_type
from .lexer import Token, TokenType, tokenize
from .literals import LiteralParsingMixin

logger = logging.getLogger(__name__)


class Parser(DeclarationParsingMixin, LiteralParsingMixin):
    """
    Recursive descent parser producing a :class:`~clairvoyant.ast.Program`.

    Grammar:
        Program     = "game" , ( STRING | IDENT ) , [ ";" ] , { Declaration } , EOF ;
        Declaration = ComponentDecl | TemplateDecl | SystemDecl , [ ";" ] ;
    """

    def __init__(self, source: str, *, path: str = ""):
        """Initialize parser with (preprocessed) source code."""
        self.source = source
        self.path = path

        # Tokenize source
        self.tokens: List[Token] = tokenize(source, path)
        self.pos = 0

        self.components: List[Component] = []
        self.templates: List[Template] = []
        self.systems: List[System] = []

        # kind -> name -> first declaration line
        self.symbols: Dict[str, Dict[str, int]] = {
            "component": {},
            "template": {},
            "system": {},
        }

    # ====================================================================
    # Token Management
    # ====================================================================

    def peek(self, offset: int = 0) -> Token:
        """Peek at token without consuming; past the end this is EOF."""
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return self.tokens[-1]

    def current(self) -> Token:
        """Get current token."""
        return self.peek(0)

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current()
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def expect(self, *types: TokenType, context: Optional[str] = None) -> Token:
        """Expect one of the given token types and consume it."""
        token = self.current()
        if token.type not in types:
            message = f"Unexpected {describe_token(token)}"
            if context:
                message = f"{message} {context}"
            raise create_syntax_error(
                message,
                path=self.path,
                line=token.line,
                column=token.column,
                expected=[describe_token_type(t) for t in types],
                suggestion=self._suggest_token_fix(token, types),
            )
        return self.advance()

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def consume_if(self, *types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        if self.match(*types):
            return self.advance()
        return None

    def error(self, message: str, token: Optional[Token] = None, suggestion: Optional[str] = None) -> CVSyntaxError:
        """Create a syntax error at ``token`` (the current token by default)."""
        token = token or self.current()
        return create_syntax_error(
            message,
            path=self.path,
            line=token.line,
            column=token.column,
            suggestion=suggestion,
        )

    def location(self, token: Token) -> SourceLocation:
        return SourceLocation(file=self.path, line=token.line, column=token.column)

    def _suggest_token_fix(self, token: Token, expected: tuple) -> Optional[str]:
        """Suggest a fix for unexpected token."""
        if TokenType.COMMA in expected and token.type is TokenType.IDENTIFIER:
            return "Separate entries with ','"
        if TokenType.IDENTIFIER in expected and token.type is TokenType.STRING:
            return f"Names are written without quotes: {token.value}"
        if TokenType.COLON in expected and token.type is TokenType.LBRACE:
            return "Properties are written as 'name: value'"
        return None

    # ====================================================================
    # Symbol Table Management
    # ====================================================================

    def declare_symbol(self, kind: str, name: str, token: Token) -> None:
        """Declare a component, template or system name, checking for duplicates."""
        declared = self.symbols[kind]
        if name in declared:
            raise self.error(
                f"Duplicate {kind} '{name}' (first declared on line {declared[name]})",
                token,
            )
        declared[name] = token.line

    # ====================================================================
    # High-Level Parsing
    # ====================================================================

    def parse(self) -> Program:
        """
        Parse the entire program.

        Grammar:
            Program = ProgramName , { Declaration } , EOF ;
        """
        name = self.parse_program_name()

        while not self.match(TokenType.EOF):
            self.parse_top_level_declaration()
            while self.consume_if(TokenType.SEMICOLON):
                pass

        logger.debug(
            "Parsed '%s': %d component(s), %d template(s), %d system(s)",
            name,
            len(self.components),
            len(self.templates),
            len(self.systems),
        )
        return Program(
            name=name,
            components=self.components,
            templates=self.templates,
            systems=self.systems,
        )

    def parse_program_name(self) -> str:
        """
        Parse the program name declaration.

        Grammar:
            ProgramName = "game" , ( STRING | IDENT ) , [ ";" ] ;
        """
        self.expect(TokenType.GAME, context="at start of program")
        name_token = self.expect(TokenType.STRING, TokenType.IDENTIFIER, context="after 'game'")
        if not name_token.value.strip():
            raise self.error("Game name cannot be empty", name_token)
        self.consume_if(TokenType.SEMICOLON)
        return name_token.value

    def parse_top_level_declaration(self) -> None:
        if self.match(TokenType.COMPONENT):
            self.components.append(self.parse_component_declaration())
        elif self.match(TokenType.TEMPLATE):
            self.templates.append(self.parse_template_declaration())
        elif self.match(TokenType.SYSTEM):
            self.systems.append(self.parse_system_declaration())
        else:
            token = self.current()
            raise create_syntax_error(
                f"Unexpected {describe_token(token)}",
                path=self.path,
                line=token.line,
                column=token.column,
                expected=["'component'", "'template'", "'system'"],
            )


def parse(source: str, path: str = "") -> Program:
    """Parse preprocessed Clairvoyant source into a Program."""
    return Parser(source, path=path).parse()


__all__ = ["Parser", "parse"]
