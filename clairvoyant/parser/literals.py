"""Literal and property parsing methods for Parser."""

from typing import List, Union

from clairvoyant.ast import (
    ArrayLiteral,
    BooleanLiteral,
    NumericLiteral,
    ObjectLiteral,
    Property,
    StringLiteral,
    ValueNode,
)

from .errors import create_syntax_error, describe_token
from .lexer import KEYWORDS, Token, TokenType

# Keywords are allowed as property names: ``{ system: 'x', true: 1 }``.
PROPERTY_NAME_TOKENS = (TokenType.IDENTIFIER,) + tuple(KEYWORDS.values())


def numeric_value(raw: str) -> Union[int, float]:
    if any(marker in raw for marker in ".eE"):
        return float(raw)
    return int(raw)


class LiteralParsingMixin:
    """Mixin with value, property and identifier list parsing methods."""

    def parse_value(self) -> ValueNode:
        """
        Parse a literal value.

        Grammar:
            Value = NUMBER | STRING | "true" | "false" | Object | Array ;
        """
        token = self.current()

        if token.type is TokenType.NUMBER:
            self.advance()
            return NumericLiteral(value=numeric_value(token.value), raw=token.value)

        if token.type is TokenType.STRING:
            self.advance()
            return StringLiteral(value=token.value)

        if token.type in (TokenType.TRUE, TokenType.FALSE):
            self.advance()
            return BooleanLiteral(value=token.type is TokenType.TRUE)

        if token.type is TokenType.LBRACE:
            return self.parse_object_literal()

        if token.type is TokenType.LBRACKET:
            return self.parse_array_literal()

        suggestion = None
        if token.type is TokenType.IDENTIFIER:
            suggestion = f"Quote the text to use it as a string: '{token.value}'"
        raise create_syntax_error(
            f"Unexpected {describe_token(token)}",
            path=self.path,
            line=token.line,
            column=token.column,
            expected=["a value"],
            suggestion=suggestion,
        )

    def parse_object_literal(self) -> ObjectLiteral:
        self.expect(TokenType.LBRACE)
        properties = self.parse_properties()
        self.expect(TokenType.RBRACE, context="to close object")
        return ObjectLiteral(properties=properties)

    def parse_array_literal(self) -> ArrayLiteral:
        """
        Parse array literal.

        Grammar:
            Array = "[" , [ Value , { "," , Value } , [ "," ] ] , "]" ;
        """
        self.expect(TokenType.LBRACKET)
        elements: List[ValueNode] = []

        while not self.match(TokenType.RBRACKET):
            elements.append(self.parse_value())
            if not self.consume_if(TokenType.COMMA):
                break

        self.expect(TokenType.RBRACKET, context="to close array")
        return ArrayLiteral(elements=elements)

    def parse_properties(self) -> List[Property]:
        """
        Parse the property list of a component body or object literal.

        The closing brace is left for the caller.

        Grammar:
            Properties = [ Property , { "," , Property } , [ "," ] ] ;
            Property   = Name , ":" , Value ;
        """
        properties: List[Property] = []

        while not self.match(TokenType.RBRACE):
            name_token = self.parse_property_name()
            self.expect(TokenType.COLON, context=f"after property '{name_token.value}'")
            value = self.parse_value()
            properties.append(
                Property(name=name_token.value, value=value, location=self.location(name_token))
            )
            if not self.consume_if(TokenType.COMMA):
                break

        return properties

    def parse_property_name(self) -> Token:
        token = self.current()
        if token.type in PROPERTY_NAME_TOKENS:
            return self.advance()
        raise create_syntax_error(
            f"Unexpected {describe_token(token)} in property list",
            path=self.path,
            line=token.line,
            column=token.column,
            expected=["property name", "'}'"],
        )

    def parse_identifier_list(self) -> List[str]:
        """
        Parse a bracketed list of names.

        Grammar:
            IdentList = "[" , [ IDENT , { "," , IDENT } , [ "," ] ] , "]" ;
        """
        self.expect(TokenType.LBRACKET)
        names: List[str] = []

        while not self.match(TokenType.RBRACKET):
            names.append(self.expect(TokenType.IDENTIFIER, context="in name list").value)
            if not self.consume_if(TokenType.COMMA):
                break

        self.expect(TokenType.RBRACKET, context="to close name list")
        return names


__all__ = ["LiteralParsingMixin", "numeric_value"]
