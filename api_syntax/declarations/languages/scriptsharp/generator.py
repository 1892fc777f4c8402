"""
JavaScript syntax generator for Script#-compiled types.

Renders the JavaScript a Script# assembly emits for each type and member:
``Type.createClass(...)`` registrations, ``get_``/``set_`` accessor functions,
``add_``/``remove_`` event functions and so on.
"""

from typing import Optional

from ...core.config import GeneratorConfig
from ...core.entity import ArrayOf, EntityNode, Parameter, TypeRef, TypeReference
from ...core.generator import SyntaxGenerator
from ...core.naming import MemberNamer, NamingCase, qualified_type_name
from ...core.writer import SyntaxWriter

NON_SCRIPTABLE_ATTRIBUTE_ID = "T:System.NonScriptableAttribute"
RECORD_ATTRIBUTE_ID = "T:System.RecordAttribute"
PRESERVE_CASE_ATTRIBUTE_ID = "T:System.PreserveCaseAttribute"
IGNORE_NAMESPACE_ATTRIBUTE_ID = "T:System.IgnoreNamespaceAttribute"
INTRINSIC_PROPERTY_ATTRIBUTE_ID = "T:System.IntrinsicPropertyAttribute"
ATTACHED_PROPERTY_ATTRIBUTE_ID = "T:System.AttachedPropertyAttribute"
FLAGS_ATTRIBUTE_ID = "T:System.FlagsAttribute"

NON_SCRIPTABLE_MESSAGE = "UnsupportedType_ScriptSharp"

# Primitive types are linked by their framework name
PRIMITIVE_TYPE_NAMES = {
    "T:System.Byte": "Byte",
    "T:System.SByte": "SByte",
    "T:System.Char": "Char",
    "T:System.Int16": "Int16",
    "T:System.Int32": "Int32",
    "T:System.Int64": "Int64",
    "T:System.UInt16": "UInt16",
    "T:System.UInt32": "UInt32",
    "T:System.UInt64": "UInt64",
    "T:System.Single": "Single",
    "T:System.Double": "Double",
    "T:System.Decimal": "Decimal",
    "T:System.Boolean": "Boolean",
}


class ScriptSharpSyntaxGenerator(SyntaxGenerator):
    """Syntax generator for Script# JavaScript declarations."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Script# generator with configuration."""
        super().__init__(config)
        case = (
            NamingCase.CAMEL_CASE
            if self.config.get("camel_case_members", True)
            else NamingCase.PRESERVE
        )
        self.namer = MemberNamer(case)

    @property
    def language_name(self) -> str:
        return "JavaScript"

    @property
    def style_id(self) -> str:
        return "js"

    # Guards and names

    def is_unsupported(self, entity: EntityNode, writer: SyntaxWriter) -> bool:
        if (
            self.is_unsupported_generic(entity, writer)
            or self.is_unsupported_explicit(entity, writer)
            or self.is_unsupported_unsafe(entity, writer)
        ):
            return True

        if entity.has_attribute(NON_SCRIPTABLE_ATTRIBUTE_ID):
            writer.write_message(NON_SCRIPTABLE_MESSAGE)
            return True

        return False

    def member_name(self, entity: EntityNode) -> str:
        return self.namer.convert(
            entity.name, preserve=entity.has_attribute(PRESERVE_CASE_ATTRIBUTE_ID)
        )

    def full_type_name(self, entity: EntityNode) -> str:
        return qualified_type_name(
            entity.name,
            entity.containing_namespace,
            entity.has_attribute(IGNORE_NAMESPACE_ATTRIBUTE_ID),
        )

    def full_containing_type_name(self, entity: EntityNode) -> str:
        container = entity.containing_type
        if container is None:
            return ""

        ignore_namespace = entity.has_attribute(IGNORE_NAMESPACE_ATTRIBUTE_ID) or any(
            attribute.type_id == IGNORE_NAMESPACE_ATTRIBUTE_ID
            for attribute in container.attributes
        )
        return qualified_type_name(
            container.name,
            container.namespace or entity.containing_namespace,
            ignore_namespace,
        )

    # Namespaces and types

    def write_namespace_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        writer.write_string("Type.createNamespace('")
        writer.write_identifier(entity.name)
        writer.write_string("');")

    def write_class_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported(entity, writer):
            return

        if entity.has_attribute(RECORD_ATTRIBUTE_ID):
            self._write_record_syntax(entity, writer)
            return

        identifier = self.full_type_name(entity)

        writer.write_identifier(identifier)
        writer.write_string(" = ")
        writer.write_keyword("function")
        writer.write_string("();")
        writer.write_line()
        writer.write_line()
        writer.write_identifier("Type")
        writer.write_string(".createClass(")
        writer.write_line()
        writer.write_string(self.indent)
        writer.write_string("'")
        writer.write_string(identifier)
        writer.write_string("'")

        has_base_class = False
        base_type = entity.base_type
        if base_type is not None and not getattr(base_type, "is_object", False):
            self._write_indented_new_line(writer)
            self.write_type_reference(base_type, writer)
            has_base_class = True

        if entity.implemented_interfaces:
            if not has_base_class:
                self._write_indented_new_line(writer)
                writer.write_string("null")

            for interface in entity.implemented_interfaces:
                self._write_indented_new_line(writer)
                self.write_type_reference(interface, writer)

        writer.write_string(");")

    def _write_record_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        writer.write_string(entity.namespace_name)
        writer.write_string(".$create_")
        writer.write_string(entity.name)
        writer.write_string(" = ")
        writer.write_keyword("function")
        writer.write_string("();")

    def write_structure_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if not self.is_unsupported(entity, writer):
            self.write_unsupported("Structure", entity, writer)

    def write_interface_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported(entity, writer):
            return

        identifier = self.full_type_name(entity)
        writer.write_identifier(identifier)
        writer.write_string(" = ")
        writer.write_keyword("function")
        writer.write_string("();")
        writer.write_line()
        writer.write_identifier(identifier)
        writer.write_string(".createInterface('")
        writer.write_identifier(identifier)
        writer.write_string("');")

    def write_delegate_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        writer.write_keyword("function")
        self.write_parameter_list(entity, writer)
        writer.write_string(";")

    def write_enumeration_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        identifier = self.full_type_name(entity)
        writer.write_identifier(identifier)
        writer.write_string(" = ")
        writer.write_keyword("function")
        writer.write_string("();")
        writer.write_line()
        writer.write_identifier(identifier)
        writer.write_string(".createEnum('")
        writer.write_identifier(identifier)
        writer.write_string("', ")
        writer.write_string("true" if entity.has_attribute(FLAGS_ATTRIBUTE_ID) else "false")
        writer.write_string(");")

    # Members

    def write_constructor_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported(entity, writer):
            return

        if entity.is_record:
            container = entity.containing_type
            writer.write_string(entity.namespace_name)
            writer.write_string(".$create_")
            writer.write_string(container.name if container else "")
        else:
            writer.write_identifier(self.full_containing_type_name(entity))

        writer.write_string(" = ")
        writer.write_keyword("function")
        self.write_parameter_list(entity, writer)
        writer.write_string(";")

    def write_normal_method_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported(entity, writer):
            return

        if entity.has_attribute(ATTACHED_PROPERTY_ATTRIBUTE_ID):
            self.write_attached_property_syntax(entity, writer)
            return

        identifier = self.member_name(entity)

        if entity.is_static and not entity.is_global:
            writer.write_identifier(self.full_containing_type_name(entity))
            writer.write_string(".")
            writer.write_identifier(identifier)
            writer.write_string(" = ")
            writer.write_keyword("function")
        else:
            writer.write_keyword("function")
            writer.write_string(" ")
            writer.write_identifier(identifier)

        self.write_parameter_list(entity, writer)
        writer.write_string(";")

    def write_operator_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        self.write_unsupported("Operator", entity, writer)

    def write_cast_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        self.write_unsupported("Cast", entity, writer)

    def write_property_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported(entity, writer):
            return

        if entity.has_attribute(INTRINSIC_PROPERTY_ATTRIBUTE_ID):
            # Intrinsic properties compile to plain fields
            self.write_field_syntax(entity, writer)
            return

        identifier = self.member_name(entity)

        if entity.is_gettable:
            self._write_accessor_head("get_", identifier, entity, writer)
            self.write_parameter_list(entity, writer)
            writer.write_string(";")
            writer.write_line()

        if entity.is_settable:
            self._write_accessor_head("set_", identifier, entity, writer)
            writer.write_string("(")
            writer.write_parameter("value")
            writer.write_string(");")

    def _write_accessor_head(
        self, prefix: str, identifier: str, entity: EntityNode, writer: SyntaxWriter
    ):
        if entity.is_static:
            writer.write_identifier(self.full_containing_type_name(entity))
            writer.write_string(".")
            writer.write_string(prefix)
            writer.write_identifier(identifier)
            writer.write_string(" = ")
            writer.write_keyword("function")
        else:
            writer.write_keyword("function")
            writer.write_string(" ")
            writer.write_string(prefix)
            writer.write_identifier(identifier)

    def write_field_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported(entity, writer):
            return

        writer.write_keyword("var")
        writer.write_string(" ")

        if entity.is_static:
            writer.write_identifier(self.full_containing_type_name(entity))
            writer.write_string(".")

        writer.write_identifier(self.member_name(entity))

    def write_event_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported(entity, writer):
            return

        if entity.parameters:
            self.write_unsupported("Index", entity, writer)
            return

        identifier = self.member_name(entity)

        for index, prefix in enumerate((" add_", " remove_")):
            if index:
                writer.write_line()
            writer.write_keyword("function")
            writer.write_string(prefix)
            writer.write_identifier(identifier)
            writer.write_string("(")
            writer.write_parameter("value")
            writer.write_string(");")

    def write_attached_property_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        """Render a ``GetX``/``SetX`` accessor as an expando lookup on ``obj``."""
        member_name = self.member_name(entity)
        container = entity.containing_type
        full_name = f"{container.name if container else ''}.{member_name[3:]}"
        prefix = member_name[:3].lower()

        if prefix == "get":
            writer.write_keyword("var")
            writer.write_string(" value = obj['")
            writer.write_string(full_name)
            writer.write_string("'];")
        elif prefix == "set":
            writer.write_string("obj['")
            writer.write_string(full_name)
            writer.write_string("'] = value;")

    def write_attached_event_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    # Parameters and type references

    def write_parameter_list(self, entity: EntityNode, writer: SyntaxWriter):
        writer.write_string("(")
        for index, parameter in enumerate(entity.parameters):
            if index:
                writer.write_string(", ")
            self._write_parameter(parameter, writer)
        writer.write_string(")")

    def _write_parameter(self, parameter: Parameter, writer: SyntaxWriter):
        if parameter.is_params_array:
            writer.write_string("... ")
        writer.write_parameter(parameter.name)

    def _write_indented_new_line(self, writer: SyntaxWriter):
        writer.write_string(",")
        writer.write_line()
        writer.write_string(self.indent)

    def write_type_reference(self, reference: TypeReference, writer: SyntaxWriter):
        # Pointers, references, templates and bare specializations have no script form
        if isinstance(reference, ArrayOf):
            self.write_type_reference(reference.element, writer)
            writer.write_string("[")
            writer.write_string("," * (reference.rank - 1))
            writer.write_string("]")
        elif isinstance(reference, TypeRef):
            self.write_normal_type_reference(reference.id, writer)

    def write_normal_type_reference(self, type_id: str, writer: SyntaxWriter):
        text = PRIMITIVE_TYPE_NAMES.get(type_id)
        if text is None:
            text = type_id[2:]
            if text.startswith("System."):
                text = text.rsplit(".", 1)[-1]
        writer.write_reference_link(type_id, text)
