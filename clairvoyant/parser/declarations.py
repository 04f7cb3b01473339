"""Declaration parsing methods for Parser.

Contains the methods for the three top-level declarations: component,
template and system.
"""

from typing import List, Optional

from clairvoyant.ast import Component, ComponentList, EntityList, Requirement, System, Template

from .errors import create_syntax_error, describe_token
from .lexer import TokenType

REQUIREMENT_CLAUSES = ("components", "entities")


class DeclarationParsingMixin:
    """Mixin with all declaration parsing methods."""

    def parse_component_declaration(self) -> Component:
        """
        Parse component declaration.

        Grammar:
            ComponentDecl = "component" , IDENT , "{" , Properties , "}" ;
        """
        keyword = self.expect(TokenType.COMPONENT)
        name_token = self.expect(TokenType.IDENTIFIER, context="after 'component'")
        self.declare_symbol("component", name_token.value, name_token)

        self.expect(TokenType.LBRACE, context=f"after component '{name_token.value}'")
        properties = self.parse_properties()
        self.expect(TokenType.RBRACE, context=f"to close component '{name_token.value}'")

        return Component(
            name=name_token.value,
            properties=properties,
            location=self.location(keyword),
        )

    def parse_template_declaration(self) -> Template:
        """
        Parse template declaration.

        Grammar:
            TemplateDecl = "template" , IDENT , [ "extends" , IDENT ] ,
                           "{" , { Instance , [ "," | ";" ] } , "}" ;
            Instance     = IDENT , "{" , Properties , "}" ;
        """
        keyword = self.expect(TokenType.TEMPLATE)
        name_token = self.expect(TokenType.IDENTIFIER, context="after 'template'")
        self.declare_symbol("template", name_token.value, name_token)
        parent = self.parse_extends_clause()

        self.expect(TokenType.LBRACE, context=f"after template '{name_token.value}'")
        instances: List[Component] = []
        while not self.match(TokenType.RBRACE):
            instance_token = self.expect(
                TokenType.IDENTIFIER,
                TokenType.RBRACE,
                context=f"in template '{name_token.value}'",
            )
            self.expect(TokenType.LBRACE, context=f"after '{instance_token.value}'")
            properties = self.parse_properties()
            self.expect(TokenType.RBRACE, context=f"to close '{instance_token.value}'")
            instances.append(
                Component(
                    name=instance_token.value,
                    properties=properties,
                    location=self.location(instance_token),
                )
            )
            while self.consume_if(TokenType.COMMA, TokenType.SEMICOLON):
                pass
        self.expect(TokenType.RBRACE)

        return Template(
            name=name_token.value,
            parent=parent,
            components=instances,
            location=self.location(keyword),
        )

    def parse_system_declaration(self) -> System:
        """
        Parse system declaration.

        Grammar:
            SystemDecl  = "system" , IDENT , [ "extends" , IDENT ] ,
                          "{" , Requirement , [ "," | ";" ] , "}" ;
            Requirement = ( "components" | "entities" ) , ":" , IdentList ;
        """
        keyword = self.expect(TokenType.SYSTEM)
        name_token = self.expect(TokenType.IDENTIFIER, context="after 'system'")
        name = name_token.value
        self.declare_symbol("system", name, name_token)
        parent = self.parse_extends_clause()

        self.expect(TokenType.LBRACE, context=f"after system '{name}'")
        if self.match(TokenType.RBRACE):
            raise self.error(
                f"System '{name}' must declare 'components' or 'entities'",
                suggestion="Add 'components: [...]' or 'entities: [...]'",
            )
        requirement = self.parse_requirement(name)
        self.consume_if(TokenType.COMMA, TokenType.SEMICOLON)

        if self.match(TokenType.IDENTIFIER) and self.current().value in REQUIREMENT_CLAUSES:
            raise self.error(
                f"System '{name}' declares more than one requirement",
                suggestion="Use either 'components' or 'entities', not both",
            )
        self.expect(TokenType.RBRACE, context=f"to close system '{name}'")

        return System(
            name=name,
            requirement=requirement,
            parent=parent,
            location=self.location(keyword),
        )

    def parse_requirement(self, system_name: str) -> Requirement:
        token = self.current()
        if token.type is not TokenType.IDENTIFIER or token.value not in REQUIREMENT_CLAUSES:
            raise create_syntax_error(
                f"Unexpected {describe_token(token)} in system '{system_name}'",
                path=self.path,
                line=token.line,
                column=token.column,
                expected=["'components'", "'entities'"],
            )
        self.advance()
        self.expect(TokenType.COLON, context=f"after '{token.value}'")
        names = self.parse_identifier_list()
        if token.value == "components":
            return ComponentList(components=names)
        return EntityList(entities=names)

    def parse_extends_clause(self) -> Optional[str]:
        if self.consume_if(TokenType.EXTENDS):
            return self.expect(TokenType.IDENTIFIER, context="after 'extends'").value
        return None


__all__ = ["DeclarationParsingMixin"]
