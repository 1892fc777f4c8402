"""
C# declaration syntax generator.

Renders entity nodes as C# declarations, e.g.
``public static int Parse(string s)``.
"""

from typing import Optional, Sequence

from ...core.config import GeneratorConfig
from ...core.declaration import (
    NON_SERIALIZED_ATTRIBUTE_ID,
    OPTIONAL_ATTRIBUTE_ID,
    SERIALIZABLE_ATTRIBUTE_ID,
    DeclarationSyntaxGenerator,
    require,
)
from ...core.entity import (
    Accessor,
    EntityNode,
    GenericParameter,
    LiteralValue,
    Parameter,
    TypeOfValue,
    Variance,
)
from ...core.generator import MalformedEntityError
from ...core.writer import SyntaxWriter
from .tables import CAST_KEYWORDS, OPERATOR_SYMBOLS, TYPE_KEYWORDS, VISIBILITY_KEYWORDS


class CSharpSyntaxGenerator(DeclarationSyntaxGenerator):
    """Syntax generator for C# declarations."""

    visibility_keywords = VISIBILITY_KEYWORDS
    type_keywords = TYPE_KEYWORDS
    operator_symbols = OPERATOR_SYMBOLS

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize C# generator with configuration."""
        super().__init__(config)
        self.allow_unsafe = bool(self.config.get("allow_unsafe", False))

    @property
    def language_name(self) -> str:
        return "CSharp"

    @property
    def style_id(self) -> str:
        return "cs"

    def is_unsupported_unsafe(self, entity: EntityNode, writer: SyntaxWriter) -> bool:
        if self.allow_unsafe:
            return False
        return super().is_unsupported_unsafe(entity, writer)

    # Namespaces and types

    def write_namespace_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        writer.write_keyword("namespace")
        writer.write_string(" ")
        writer.write_identifier(entity.name)

    def _write_type_preamble(self, entity: EntityNode, writer: SyntaxWriter, serializable=True):
        if serializable and entity.is_serializable:
            self.write_attribute(SERIALIZABLE_ATTRIBUTE_ID, writer)
        self.write_attributes(entity.attributes, writer)
        self.write_visibility(entity.visibility, writer)
        writer.write_string(" ")

    def write_class_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        self._write_type_preamble(entity, writer)
        self.write_class_modifiers(entity, writer)
        writer.write_keyword("class")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_generic_templates(entity.generic_parameters, writer, False)
        self.write_base_class_and_interfaces(entity, writer)
        self.write_generic_constraints(entity.generic_parameters, writer)

    def write_structure_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        self._write_type_preamble(entity, writer)
        writer.write_keyword("struct")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_generic_templates(entity.generic_parameters, writer, False)
        self.write_implemented_interfaces(entity, writer)
        self.write_generic_constraints(entity.generic_parameters, writer)

    def write_interface_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        self._write_type_preamble(entity, writer, serializable=False)
        writer.write_keyword("interface")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_generic_templates(entity.generic_parameters, writer, True)
        self.write_implemented_interfaces(entity, writer)
        self.write_generic_constraints(entity.generic_parameters, writer)

    def write_delegate_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        self._write_type_preamble(entity, writer)
        writer.write_keyword("delegate")
        writer.write_string(" ")
        self.write_return_value(entity, writer)
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_generic_templates(entity.generic_parameters, writer, True)
        self.write_method_parameters(entity, writer)
        self.write_generic_constraints(entity.generic_parameters, writer)

    def write_enumeration_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        self._write_type_preamble(entity, writer)
        writer.write_keyword("enum")
        writer.write_string(" ")
        writer.write_identifier(entity.name)

    # Members

    def write_constructor_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        self.write_attributes(entity.attributes, writer)
        if entity.is_static:
            writer.write_keyword("static")
        else:
            self.write_visibility(entity.visibility, writer)
        writer.write_string(" ")
        writer.write_identifier(entity.containing_type.name if entity.containing_type else entity.name)
        self.write_method_parameters(entity, writer)

    def write_normal_method_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return
        if self.is_unsupported_varargs(entity, writer):
            return

        is_explicit = entity.is_explicit_implementation

        self.write_attributes(entity.attributes, writer)
        if not is_explicit:
            self.write_procedure_modifiers(entity, writer)
        self.write_return_value(entity, writer)
        writer.write_string(" ")

        if is_explicit:
            self.write_qualified_member(entity.implemented_members[0], writer)
        else:
            writer.write_identifier(entity.name)

        self.write_generic_templates(entity.generic_parameters, writer, False)
        self.write_method_parameters(entity, writer)
        self.write_generic_constraints(entity.generic_parameters, writer)

    def write_operator_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        identifier = self.operator_symbol(entity.name)
        if identifier is None:
            self.write_unsupported("Operator", entity, writer)
            return

        self.write_procedure_modifiers(entity, writer)
        self.write_return_value(entity, writer)
        writer.write_string(" ")
        writer.write_keyword("operator")
        writer.write_string(" ")
        writer.write_identifier(identifier)
        self.write_method_parameters(entity, writer)

    def write_cast_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        keyword = CAST_KEYWORDS.get(entity.name)
        if keyword is None:
            raise MalformedEntityError(
                f"Cast {entity.id} must be named Implicit or Explicit, not {entity.name!r}"
            )

        if self.is_unsupported_unsafe(entity, writer):
            return

        self.write_procedure_modifiers(entity, writer)
        writer.write_keyword(keyword)
        writer.write_string(" ")
        self.write_return_value(entity, writer)
        writer.write_string(" ")
        self.write_method_parameters(entity, writer)

    def write_property_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        is_explicit = entity.is_explicit_implementation
        has_parameters = bool(entity.parameters)

        self.write_attributes(entity.attributes, writer)
        if not is_explicit:
            self.write_procedure_modifiers(entity, writer)
        self.write_return_value(entity, writer)
        writer.write_string(" ")

        if is_explicit:
            member = entity.implemented_members[0]
            self.write_type_reference(member.declaring_type, writer)
            writer.write_string(".")
            # An explicitly implemented property with parameters is an indexer
            if has_parameters:
                writer.write_keyword("this")
            else:
                self.write_member_reference(member, writer)
        elif entity.is_default_member or has_parameters:
            writer.write_keyword("this")
        else:
            writer.write_identifier(entity.name)

        self.write_property_parameters(entity, writer)
        writer.write_string(" {")

        if entity.is_gettable:
            self._write_accessor("get", entity.getter, writer)

        if entity.is_settable:
            self._write_accessor("set", entity.setter, writer, not entity.is_gettable)

        writer.write_string(" }")

    def _write_accessor(
        self,
        keyword: str,
        accessor: Accessor,
        writer: SyntaxWriter,
        leading_line: bool = True,
    ):
        has_attributes = bool(accessor.attributes)

        if has_attributes:
            if leading_line:
                writer.write_line()
            self.write_attributes(accessor.attributes, writer, self.indent)
            writer.write_string(self.indent)
        else:
            writer.write_string(" ")

        if accessor.visibility is not None:
            self.write_visibility(accessor.visibility, writer)
            writer.write_string(" ")

        writer.write_keyword(keyword)
        writer.write_string(";")

        if has_attributes:
            writer.write_line()

    def write_event_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        is_explicit = entity.is_explicit_implementation

        self.write_attributes(entity.attributes, writer)
        if not is_explicit:
            self.write_procedure_modifiers(entity, writer)
        writer.write_keyword("event")
        writer.write_string(" ")
        require(entity.event_handler_type, entity, "event handler type")
        self.write_type_reference(entity.event_handler_type, writer)
        writer.write_string(" ")

        if is_explicit:
            self.write_qualified_member(entity.implemented_members[0], writer)
        else:
            writer.write_identifier(entity.name)

    def write_field_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        if not entity.is_serialized:
            self.write_attribute(NON_SERIALIZED_ATTRIBUTE_ID, writer)

        self.write_attributes(entity.attributes, writer)
        self.write_visibility(entity.visibility, writer)
        writer.write_string(" ")

        if entity.is_static:
            writer.write_keyword("const" if entity.is_literal else "static")
            writer.write_string(" ")

        if entity.is_read_only:
            writer.write_keyword("readonly")
            writer.write_string(" ")

        fixed_buffer = entity.fixed_buffer
        if fixed_buffer is not None:
            self._write_fixed_buffer(entity, writer)
            return

        self.write_return_value(entity, writer)
        writer.write_string(" ")
        writer.write_identifier(entity.name)

        if entity.is_static and entity.is_literal:
            writer.write_string(" = ")
            self.write_constant_value(entity, writer)

    def _write_fixed_buffer(self, entity: EntityNode, writer: SyntaxWriter):
        arguments = entity.fixed_buffer.positional_arguments
        buffer_type = arguments[0] if len(arguments) > 0 else None
        buffer_size = arguments[1] if len(arguments) > 1 else None

        writer.write_keyword("fixed")
        writer.write_string(" ")

        if isinstance(buffer_type, TypeOfValue):
            self.write_type_reference(buffer_type.type, writer)
            writer.write_string(" ")

        writer.write_identifier(entity.name)

        if isinstance(buffer_size, LiteralValue):
            writer.write_string("[")
            writer.write_string(buffer_size.text)
            writer.write_string("]")

    # Base types and generics

    def write_implemented_interfaces(self, entity: EntityNode, writer: SyntaxWriter):
        if not entity.implemented_interfaces:
            return

        writer.write_string(" : ")
        self.write_separated(entity.implemented_interfaces, writer, self.write_type_reference)

    def write_base_class_and_interfaces(self, entity: EntityNode, writer: SyntaxWriter):
        base_type = entity.base_type
        has_base_class = base_type is not None and not getattr(base_type, "is_object", False)
        interfaces = entity.implemented_interfaces

        if not (has_base_class or interfaces):
            return

        writer.write_string(" : ")

        if has_base_class:
            self.write_type_reference(base_type, writer)
            if interfaces:
                self.write_with_line_break_if_needed(writer, ", ", self.indent)

        self.write_separated(interfaces, writer, self.write_type_reference)

    def write_generic_templates(
        self,
        templates: Sequence[GenericParameter],
        writer: SyntaxWriter,
        write_variance: bool,
    ):
        if not templates:
            return

        contravariant, covariant = self.variance_keywords

        def write_template(template: GenericParameter, writer: SyntaxWriter):
            if write_variance and template.variance == Variance.CONTRAVARIANT:
                writer.write_keyword(contravariant)
                writer.write_string(" ")
            if write_variance and template.variance == Variance.COVARIANT:
                writer.write_keyword(covariant)
                writer.write_string(" ")
            writer.write_string(template.name)

        writer.write_string("<")
        self.write_separated(templates, writer, write_template)
        writer.write_string(">")

    def write_generic_constraints(self, templates: Sequence[GenericParameter], writer: SyntaxWriter):
        if not templates:
            return

        writer.write_line()

        for template in templates:
            constraints = template.constraints
            if not constraints.is_constrained:
                continue

            writer.write_keyword("where")
            writer.write_string(" ")
            writer.write_string(template.name)
            writer.write_string(" : ")

            items = []
            if constraints.is_value_type:
                items.append(lambda w: w.write_keyword("struct"))
            if constraints.is_reference_type:
                items.append(lambda w: w.write_keyword("class"))
            if constraints.requires_default_constructor:
                items.append(_write_new_constraint)
            for constraint in constraints.type_constraints:
                items.append(lambda w, c=constraint: self.write_type_reference(c, w))

            self.write_separated(items, writer, lambda item, w: item(w))
            writer.write_line()

    # Parameters and return values

    def write_method_parameters(self, entity: EntityNode, writer: SyntaxWriter):
        writer.write_string("(")
        if entity.parameters:
            writer.write_line()
            self.write_parameters(entity, writer)
        writer.write_string(")")

    def write_property_parameters(self, entity: EntityNode, writer: SyntaxWriter):
        if not entity.parameters:
            return

        writer.write_string("[")
        writer.write_line()
        self.write_parameters(entity, writer)
        writer.write_string("]")

    def write_parameters(self, entity: EntityNode, writer: SyntaxWriter):
        is_extension = entity.is_extension
        count = len(entity.parameters)

        for index, parameter in enumerate(entity.parameters):
            writer.write_string(self.indent)
            self._write_parameter(parameter, writer, is_extension and index == 0)

            if index < count - 1:
                writer.write_string(",")
            writer.write_line()

    def _write_parameter(self, parameter: Parameter, writer: SyntaxWriter, is_receiver: bool):
        has_default = parameter.default_value is not None

        if parameter.is_optional and not has_default:
            self.write_attribute(OPTIONAL_ATTRIBUTE_ID, writer, new_line=False)
            writer.write_string(" ")

        self.write_attributes(parameter.attributes, writer, parameter_attributes=True)

        if is_receiver:
            writer.write_keyword("this")
            writer.write_string(" ")

        if parameter.is_out:
            writer.write_keyword("out")
            writer.write_string(" ")
        elif parameter.is_by_ref:
            writer.write_keyword("ref")
            writer.write_string(" ")

        if parameter.is_params_array:
            writer.write_keyword("params")
            writer.write_string(" ")

        self.write_type_reference(parameter.type, writer)
        writer.write_string(" ")
        writer.write_parameter(parameter.name)

        if has_default:
            writer.write_string(" = ")
            self.write_value(parameter.default_value, writer)

    def write_return_value(self, entity: EntityNode, writer: SyntaxWriter):
        if entity.return_type is None:
            writer.write_keyword("void")
        else:
            self.write_type_reference(entity.return_type, writer)


def _write_new_constraint(writer: SyntaxWriter):
    writer.write_keyword("new")
    writer.write_string("()")
