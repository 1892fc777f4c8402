"""
ASP.NET markup syntax generator.

Web controls are used from markup rather than declared, so this generator
prints the tag a page author writes: ``<asp:Button />`` for a control class,
``<asp:Button Text="String" />`` for a settable property and
``<asp:Button OnClick="EventHandler" />`` for an event. Entities that are not
part of a web control render an empty block.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.entity import (
    ArrayOf,
    AttributeUsage,
    EntityNode,
    EnumFlagsValue,
    LiteralValue,
    PointerTo,
    ReferenceTo,
    Specialization,
    TemplateRef,
    TypeRef,
    TypeReference,
)
from ...core.generator import SyntaxGenerator
from ...core.writer import SyntaxWriter

logger = get_logger(__name__)

BOOLEAN_TYPE_ID = "T:System.Boolean"
PERSISTENCE_MODE_ATTRIBUTE_ID = "T:System.Web.UI.PersistenceModeAttribute"
INNER_PROPERTY_MODE = "InnerProperty"


class AspNetSyntaxGenerator(SyntaxGenerator):
    """Syntax generator for ASP.NET control markup."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize ASP.NET generator with configuration."""
        super().__init__(config)
        self.web_control_base: str = self.config.get("web_control_base", "T:System.Web.UI.Control")
        self.default_prefix: str = self.config.get("default_prefix", "asp")
        self.namespace_prefixes: Dict[str, str] = dict(self.config.get("namespace_prefixes", {}))
        self.excluded_controls = frozenset(self.config.get("excluded_controls", ()))

    @property
    def language_name(self) -> str:
        return "AspNet"

    @property
    def style_id(self) -> str:
        return "asp"

    # Control detection

    def is_web_control(self, type_id: str, ancestors: Iterable[TypeReference]) -> bool:
        """
        Check whether a type can appear as a markup tag.

        Args:
            type_id: Id of the type
            ancestors: Inheritance chain of the type, nearest first

        Returns:
            True if the type derives from the web control base and is not excluded
        """
        if type_id in self.excluded_controls:
            return False

        for ancestor in ancestors:
            ancestor_id = ancestor.id if isinstance(ancestor, TypeRef) else None
            if ancestor_id in self.excluded_controls:
                return False
            if ancestor_id == self.web_control_base:
                return True

        return False

    def tag_prefix(self, namespace: Optional[str]) -> str:
        if namespace:
            key = namespace if namespace.startswith("N:") else f"N:{namespace}"
            prefix = self.namespace_prefixes.get(key)
            if prefix:
                return prefix
        return self.default_prefix

    def _control_tag(self, entity: EntityNode) -> Optional[Tuple[str, str]]:
        """Return ``(prefix, type name)`` of the control declaring a member."""
        container = entity.containing_type
        if container is None:
            return None

        if not self.is_web_control(container.id, container.ancestors):
            logger.debug("%s is not declared by a web control", entity.id)
            return None

        namespace = container.namespace or entity.containing_namespace
        return self.tag_prefix(namespace), container.name

    def _write_tag_open(self, prefix: str, name: str, writer: SyntaxWriter):
        writer.write_string("<")
        writer.write_string(prefix)
        writer.write_string(":")
        writer.write_string(name)

    # Types

    def write_class_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if not self.is_web_control(entity.id, entity.ancestors):
            logger.debug("%s is not a web control", entity.id)
            return

        self._write_tag_open(self.tag_prefix(entity.containing_namespace), entity.name, writer)
        writer.write_string(" />")

    def write_namespace_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_structure_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_interface_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_delegate_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_enumeration_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    # Members

    def write_constructor_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_field_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_property_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        # Only instance properties without index parameters can be set from markup
        if not entity.is_settable or entity.is_static or entity.parameters:
            return
        if entity.return_type is None:
            return

        tag = self._control_tag(entity)
        if tag is None:
            return
        prefix, control_name = tag

        if _is_inner_property(entity.attributes):
            self._write_tag_open(prefix, control_name, writer)
            writer.write_string(">")
            writer.write_line()
            writer.write_string(self.indent)
            writer.write_string("<")
            writer.write_string(entity.name)
            writer.write_string(">")
            self.write_type_reference(entity.return_type, writer)
            writer.write_string("</")
            writer.write_string(entity.name)
            writer.write_string(">")
            writer.write_line()
            writer.write_string("</")
            writer.write_string(prefix)
            writer.write_string(":")
            writer.write_string(control_name)
            writer.write_string(">")
            return

        self._write_tag_open(prefix, control_name, writer)
        writer.write_string(" ")
        writer.write_string(entity.name)
        writer.write_string('="')
        if _type_id(entity.return_type) == BOOLEAN_TYPE_ID:
            writer.write_string("True|False")
        else:
            self.write_type_reference(entity.return_type, writer)
        writer.write_string('" />')

    def write_event_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if entity.is_static or entity.event_handler_type is None:
            return

        tag = self._control_tag(entity)
        if tag is None:
            return
        prefix, control_name = tag

        self._write_tag_open(prefix, control_name, writer)
        writer.write_string(" On")
        writer.write_string(entity.name)
        writer.write_string('="')
        self.write_type_reference(entity.event_handler_type, writer)
        writer.write_string('" />')

    def write_attached_property_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_attached_event_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    # Type references

    def write_type_reference(self, reference: TypeReference, writer: SyntaxWriter):
        if isinstance(reference, TypeRef):
            writer.write_reference_link(reference.id)
        elif isinstance(reference, ArrayOf):
            self.write_type_reference(reference.element, writer)
            writer.write_string("[")
            writer.write_string("," * (reference.rank - 1))
            writer.write_string("]")
        elif isinstance(reference, (PointerTo, ReferenceTo)):
            self.write_type_reference(reference.target, writer)
        elif isinstance(reference, TemplateRef):
            writer.write_string(reference.name)
        elif isinstance(reference, Specialization):
            for index, argument in enumerate(reference.arguments):
                if index:
                    writer.write_string(", ")
                self.write_type_reference(argument, writer)


def _type_id(reference: Optional[TypeReference]) -> Optional[str]:
    return reference.id if isinstance(reference, TypeRef) else None


def _is_inner_property(attributes: Iterable[AttributeUsage]) -> bool:
    """True if ``PersistenceModeAttribute(PersistenceMode.InnerProperty)`` is present."""
    for attribute in attributes:
        if attribute.type_id != PERSISTENCE_MODE_ATTRIBUTE_ID:
            continue

        modes: List[str] = []
        for argument in attribute.positional_arguments:
            if isinstance(argument, EnumFlagsValue):
                modes.extend(argument.field_names)
            elif isinstance(argument, LiteralValue):
                modes.append(argument.text.rsplit(".", 1)[-1])

        if INNER_PROPERTY_MODE in modes:
            return True

    return False
