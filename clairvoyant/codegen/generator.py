"""Renders artifacts from resolved compiler data."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from jinja2 import DictLoader, Environment, StrictUndefined

from clairvoyant.artifacts import FACTORY_FILENAME, Artifact, ArtifactKind, FactoryFunction
from clairvoyant.ast import Component, ObjectLiteral
from clairvoyant.variant import BaseKind, Variant

from .naming import derive_filename
from .templates import TEMPLATES
from .values import INDENT, format_value, is_scalar, jsdoc_type, string_literal

logger = logging.getLogger(__name__)

# (binding name, module, attribute or None)
RequiredModule = Tuple[str, str, Optional[str]]


def require_block(modules: Sequence[RequiredModule]) -> str:
    """
    Render one ``var`` statement requiring every module.

    >>> print(require_block([("A", "m", "A"), ("B", "m", "B")]))
    var A = require('m').A,
        B = require('m').B;
    """
    lines = []
    for name, module, attribute in modules:
        line = f"{name} = require({string_literal(module)})"
        if attribute:
            line += f".{attribute}"
        lines.append(line)
    return "var " + (",\n" + INDENT).join(lines) + ";"


def factory_function_name(template_name: str) -> str:
    return f"create{template_name}"


class CodeGenerator:
    """Renders component, system and factory modules for one variant."""

    def __init__(self, variant: Variant = Variant.TWO_D):
        self.variant = variant
        self.jinja_env = Environment(
            loader=DictLoader(TEMPLATES),
            autoescape=False,  # JavaScript, not HTML
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, template_name: str, **context) -> str:
        return self.jinja_env.get_template(template_name).render(**context)

    def library_require(self, *names: str) -> List[RequiredModule]:
        return [(name, self.variant.module_name, name) for name in names]

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def generate_component(self, component: Component) -> Artifact:
        base = BaseKind.COMPONENT
        latest: Dict[str, object] = {}
        for prop in component.properties:
            latest[prop.name] = prop.value

        param_docs = []
        for field_name, value in latest.items():
            if is_scalar(value):
                param_docs.append(
                    f"@param {{{jsdoc_type(value)}}} [options.{field_name}={format_value(value)}]"
                )
            else:
                param_docs.append(f"@param {{{jsdoc_type(value)}}} [options.{field_name}]")

        source = self.render(
            "component.js",
            requires=require_block(self.library_require(base.value, "Helper")),
            name=component.name,
            name_literal=string_literal(component.name),
            base=base.value,
            param_docs=param_docs,
            defaults=format_value(ObjectLiteral(properties=list(component.properties)), 2),
            fields=list(latest),
        )
        return Artifact(
            kind=ArtifactKind.COMPONENT,
            name=component.name,
            filename=derive_filename(component.name),
            source=source,
            base=base,
        )

    # ------------------------------------------------------------------
    # Systems
    # ------------------------------------------------------------------

    def generate_system(
        self,
        name: str,
        required_components: Sequence[str],
        base: Optional[BaseKind],
    ) -> Artifact:
        hook = base.tick_hook if base is not None else None
        requires = ""
        if base is not None:
            requires = require_block(self.library_require(base.value, "Helper"))

        source = self.render(
            "system.js",
            requires=requires,
            name=name,
            base=base.value if base is not None else None,
            required=[string_literal(component) for component in required_components],
            hook=hook,
            hook_param_doc=f"@param {{{hook.param_type}}} {hook.param}" if hook else "",
        )
        return Artifact(
            kind=ArtifactKind.SYSTEM,
            name=name,
            filename=derive_filename(name),
            source=source,
            base=base,
        )

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    def generate_factory_function(
        self,
        template_name: str,
        resolved: Mapping[str, ObjectLiteral],
    ) -> FactoryFunction:
        function_name = factory_function_name(template_name)
        entries = [
            {"name": component, "options": format_value(bag, 3)}
            for component, bag in resolved.items()
        ]
        code = self.render("factory_function.js", function_name=function_name, entries=entries)
        return FactoryFunction(entity_type=template_name, function_name=function_name, code=code)

    def generate_factory(
        self,
        functions: Iterable[FactoryFunction],
        component_names: Iterable[str],
    ) -> Artifact:
        """Render ``factory.js``; ``component_names`` are the components the builders use."""
        functions = tuple(functions)
        files = {name: derive_filename(name) for name in component_names}
        ordered = sorted(files.items(), key=lambda item: (len(item[1]), item[1], item[0]))

        modules: List[RequiredModule] = list(self.library_require("World"))
        modules.extend((name, f"./components/{filename}", None) for name, filename in ordered)

        source = self.render(
            "factory.js",
            requires=require_block(modules),
            functions=functions,
        )
        logger.debug("Rendered factory with %d builder(s)", len(functions))
        return Artifact(
            kind=ArtifactKind.FACTORY,
            name="Factory",
            filename=FACTORY_FILENAME,
            source=source,
            functions=functions,
        )


__all__ = ["CodeGenerator", "factory_function_name", "require_block"]
