"""Semantic resolution and artifact generation.

The compiler walks a parsed :class:`~clairvoyant.ast.Program` in a fixed
order: components, then templates (which build the factory), then systems
(which may look templates up by name). All state lives in a
:class:`CompilationContext` created for one :meth:`Compiler.compile` call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from clairvoyant.artifacts import Artifact, CompileResult, FactoryFunction
from clairvoyant.ast import (
    ComponentList,
    ObjectLiteral,
    Program,
    SourceLocation,
    System,
    Template,
)
from clairvoyant.codegen import CodeGenerator
from clairvoyant.errors import (
    CVError,
    CVResolutionError,
    CVValidationError,
    CVWarningError,
)
from clairvoyant.variant import SYSTEM_PARENTS_2D, BaseKind, Variant

if TYPE_CHECKING:
    from clairvoyant.reporters import Reporter

logger = logging.getLogger(__name__)

# component name -> merged property bag, in order of first appearance
ResolvedTemplate = Dict[str, ObjectLiteral]


def _where(location: Optional[SourceLocation]) -> dict:
    if location is None:
        return {}
    return {"path": location.file or None, "line": location.line, "column": location.column}


@dataclass
class CompilationContext:
    """Short-lived state of a single compilation."""

    variant: Variant = Variant.TWO_D
    reporter: Optional["Reporter"] = None
    fail_on_warning: bool = False
    resolved_templates: Dict[str, ResolvedTemplate] = field(default_factory=dict)
    errors: List[CVError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def warn(self, message: str, location: Optional[SourceLocation] = None) -> None:
        """
        Report a warning.

        Unless ``fail_on_warning`` is set, the first warning stops the
        compilation with :class:`CVWarningError`.
        """
        self.warnings.append(message)
        logger.debug("warning: %s", message)
        if self.reporter is not None:
            self.reporter.warning(message)
        if not self.fail_on_warning:
            raise CVWarningError(
                f"Build stopped by warning: {message}",
                hint="Pass --fail-on-warning to collect warnings and keep building",
                **_where(location),
            )

    def fail(self, error: CVError) -> None:
        """Record an error that skips one declaration without stopping the build."""
        self.errors.append(error)
        logger.debug("error: %s", error.message)
        if self.reporter is not None:
            self.reporter.error(error)


class Compiler:
    """Turns a Program into component, factory and system artifacts."""

    def __init__(
        self,
        program: Program,
        *,
        variant: Variant = Variant.TWO_D,
        reporter: Optional["Reporter"] = None,
        fail_on_warning: bool = False,
    ):
        self.program = program
        self.variant = Variant.parse(variant)
        self.reporter = reporter
        self.fail_on_warning = fail_on_warning
        self.generator = CodeGenerator(self.variant)

    def compile(self) -> CompileResult:
        context = CompilationContext(
            variant=self.variant,
            reporter=self.reporter,
            fail_on_warning=self.fail_on_warning,
        )

        components = [self.generator.generate_component(c) for c in self.program.components]
        factory = self.compile_factory(self.program.templates, context)
        systems = self.compile_systems(self.program.systems, context)

        result = CompileResult(
            components=components,
            factory=factory,
            systems=systems,
            errors=list(context.errors),
        )
        check_output_paths(result.artifacts)
        logger.info(
            "Compiled '%s': %d component(s), %d builder(s), %d system(s), %d error(s)",
            self.program.name,
            len(components),
            len(factory.functions),
            len(systems),
            len(result.errors),
        )
        return result

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def resolve_template(self, template: Template, context: CompilationContext) -> ResolvedTemplate:
        """Copy the parent's resolution and overlay this template's components."""
        resolved: ResolvedTemplate = {}
        if template.parent is not None:
            parent = context.resolved_templates.get(template.parent)
            if parent is None:
                hint = None
                if any(t.name == template.parent for t in self.program.templates):
                    hint = f"Declare '{template.parent}' before '{template.name}'"
                raise CVResolutionError(
                    f"Template parent '{template.parent}' not defined",
                    hint=hint,
                    **_where(template.location),
                )
            resolved.update(parent)

        for instance in template.components:
            resolved[instance.name] = ObjectLiteral(properties=list(instance.properties))

        context.resolved_templates[template.name] = resolved
        return resolved

    def compile_factory(self, templates: List[Template], context: CompilationContext) -> Artifact:
        functions: List[FactoryFunction] = []
        used_components: Dict[str, None] = {}
        for template in templates:
            resolved = self.resolve_template(template, context)
            used_components.update(dict.fromkeys(resolved))
            functions.append(self.generator.generate_factory_function(template.name, resolved))
        return self.generator.generate_factory(functions, used_components)

    # ------------------------------------------------------------------
    # Systems
    # ------------------------------------------------------------------

    def system_base(self, system: System, context: CompilationContext) -> Optional[BaseKind]:
        if not self.variant.honours_system_inheritance:
            if system.parent is not None:
                context.warn(f"Ignoring system inheritance on '{system.name}'", system.location)
            return BaseKind.SYSTEM

        if system.parent is None:
            return None
        for kind in SYSTEM_PARENTS_2D:
            if kind.value == system.parent:
                return kind
        raise CVResolutionError(
            f"Expected 'RenderSystem' or 'BehaviorSystem' but got '{system.parent}'",
            **_where(system.location),
        )

    def required_components(self, system: System, context: CompilationContext) -> List[str]:
        requirement = system.requirement
        if isinstance(requirement, ComponentList):
            return list(requirement.components)

        required: Dict[str, None] = {}
        for template_name in requirement.entities:
            resolved = context.resolved_templates.get(template_name)
            if resolved is None:
                logger.debug("System '%s': unknown template '%s' adds nothing", system.name, template_name)
                continue
            required.update(dict.fromkeys(resolved))
        return list(required)

    def unknown_templates_hint(self, system: System, context: CompilationContext) -> Optional[str]:
        if isinstance(system.requirement, ComponentList):
            return None
        unknown = [t for t in system.requirement.entities if t not in context.resolved_templates]
        if not unknown:
            return None
        return "Unknown template(s): " + ", ".join(unknown)

    def compile_systems(self, systems: List[System], context: CompilationContext) -> List[Artifact]:
        artifacts = []
        for system in systems:
            base = self.system_base(system, context)
            required = self.required_components(system, context)
            if not required:
                context.fail(
                    CVValidationError(
                        f"System '{system.name}' does not have required components or entities",
                        hint=self.unknown_templates_hint(system, context),
                        **_where(system.location),
                    )
                )
                continue
            artifacts.append(self.generator.generate_system(system.name, required, base))
        return artifacts


def check_output_paths(artifacts: List[Artifact]) -> None:
    """Reject two artifacts that would be written to the same file."""
    owners: Dict[str, Artifact] = {}
    for artifact in artifacts:
        path = artifact.relative_path
        previous = owners.get(path)
        if previous is not None:
            raise CVResolutionError(
                f"'{previous.name}' and '{artifact.name}' would both be written to '{path}'",
                hint=f"Rename '{artifact.name}'",
            )
        owners[path] = artifact


def compile_program(
    program: Program,
    *,
    variant: Variant = Variant.TWO_D,
    reporter: Optional["Reporter"] = None,
    fail_on_warning: bool = False,
) -> CompileResult:
    """Compile ``program`` with a fresh context."""
    return Compiler(
        program,
        variant=variant,
        reporter=reporter,
        fail_on_warning=fail_on_warning,
    ).compile()


__all__ = [
    "CompilationContext",
    "Compiler",
    "ResolvedTemplate",
    "check_output_paths",
    "compile_program",
]
