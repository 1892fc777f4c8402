"""
Visual Basic declaration syntax generator.

Renders entity nodes as Visual Basic declarations, e.g.
``Public Shared Function Parse ( s As String ) As Integer``.
"""

from typing import Optional, Sequence

from ...core.config import GeneratorConfig
from ...core.declaration import (
    NON_SERIALIZED_ATTRIBUTE_ID,
    OPTIONAL_ATTRIBUTE_ID,
    OUT_ATTRIBUTE_ID,
    SERIALIZABLE_ATTRIBUTE_ID,
    DeclarationSyntaxGenerator,
    require,
)
from ...core.entity import (
    Accessor,
    EntityNode,
    EntitySubkind,
    GenericParameter,
    Parameter,
    Specialization,
    TypeReference,
    Variance,
)
from ...core.generator import MalformedEntityError
from ...core.writer import SyntaxWriter
from .tables import (
    CLASS_MODIFIER_KEYWORDS,
    CONVERSION_KEYWORDS,
    OPERATOR_SYMBOLS,
    PROCEDURE_MODIFIER_KEYWORDS,
    TYPE_KEYWORDS,
    VISIBILITY_KEYWORDS,
)


class VisualBasicSyntaxGenerator(DeclarationSyntaxGenerator):
    """Syntax generator for Visual Basic declarations."""

    visibility_keywords = VISIBILITY_KEYWORDS
    class_modifier_keywords = CLASS_MODIFIER_KEYWORDS
    procedure_modifier_keywords = PROCEDURE_MODIFIER_KEYWORDS
    type_keywords = TYPE_KEYWORDS
    operator_symbols = OPERATOR_SYMBOLS

    attribute_brackets = ("<", ">")
    named_argument_separator = " := "
    null_keyword = "Nothing"
    type_of_keyword = "GetType"
    array_new_keyword = "New"
    array_brackets = ("(", ")")
    char_quotes = ('"', '"C')
    float_suffix = "F"
    attribute_booleans = ("True", "False")
    constant_booleans = ("True", "False")
    variance_keywords = ("In", "Out")

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Visual Basic generator with configuration."""
        super().__init__(config)
        self.include_line_continuation = bool(
            self.config.get("include_line_continuation", False)
        )

    @property
    def language_name(self) -> str:
        return "VisualBasic"

    @property
    def style_id(self) -> str:
        return "vb"

    @property
    def line_continuation(self) -> str:
        return " _" if self.include_line_continuation else ""

    # Namespaces and types

    def write_namespace_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        writer.write_keyword("Namespace")
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
        writer.write_keyword("Class")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_generic_templates(entity.generic_parameters, writer)
        self.write_base_class(entity, writer)
        self.write_implemented_interfaces(entity, writer)

    def write_structure_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        self._write_type_preamble(entity, writer)
        writer.write_keyword("Structure")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_generic_templates(entity.generic_parameters, writer)
        self.write_implemented_interfaces(entity, writer)

    def write_interface_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        self._write_type_preamble(entity, writer, serializable=False)
        writer.write_keyword("Interface")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_generic_templates(entity.generic_parameters, writer, True)
        self.write_implemented_interfaces(entity, writer)

    def write_delegate_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        self._write_type_preamble(entity, writer)
        writer.write_keyword("Delegate")
        writer.write_string(" ")
        writer.write_keyword("Sub" if entity.return_type is None else "Function")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_generic_templates(entity.generic_parameters, writer, True)
        self.write_parameters(entity, writer)
        self.write_return_type(entity.return_type, writer)

    def write_enumeration_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        self._write_type_preamble(entity, writer)
        writer.write_keyword("Enumeration")
        writer.write_string(" ")
        writer.write_identifier(entity.name)

    # Members

    def write_constructor_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        self.write_attributes(entity.attributes, writer)
        if entity.is_static:
            writer.write_keyword("Shared")
        else:
            self.write_visibility(entity.visibility, writer)
        writer.write_string(" ")
        writer.write_keyword("Sub")
        writer.write_string(" ")
        writer.write_identifier("New")
        self.write_parameters(entity, writer)

    def write_normal_method_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return
        if self.is_unsupported_varargs(entity, writer):
            return

        self.write_attributes(entity.attributes, writer)
        self.write_procedure_modifiers(entity, writer)
        writer.write_keyword("Sub" if entity.return_type is None else "Function")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_generic_templates(entity.generic_parameters, writer)
        self.write_parameters(entity, writer)
        self.write_return_type(entity.return_type, writer)
        self.write_explicit_implementations(entity, writer)

    def write_operator_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        result_type = entity.return_type
        if result_type is None and entity.parameters:
            # Assignment operators take their type from the first parameter
            result_type = entity.parameters[0].type

        identifier = self.operator_symbol(entity.name)
        if result_type is None or identifier is None:
            self.write_unsupported("Operator", entity, writer)
            return

        self.write_procedure_modifiers(entity, writer)

        conversion = CONVERSION_KEYWORDS.get(entity.name)
        if conversion:
            writer.write_keyword(conversion)
            writer.write_string(" ")

        writer.write_keyword("Operator")
        writer.write_string(" ")
        writer.write_identifier(identifier)
        self.write_parameters(entity, writer)
        self.write_return_type(result_type, writer)

    def write_cast_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if entity.name not in CONVERSION_KEYWORDS:
            raise MalformedEntityError(
                f"Cast {entity.id} must be named Implicit or Explicit, not {entity.name!r}"
            )
        self.write_operator_syntax(entity, writer)

    def write_property_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        gettable = entity.is_gettable
        settable = entity.is_settable

        self.write_attributes(entity.attributes, writer)
        self.write_procedure_modifiers(entity, writer)

        if gettable and not settable:
            writer.write_keyword("ReadOnly")
            writer.write_string(" ")
        elif settable and not gettable:
            writer.write_keyword("WriteOnly")
            writer.write_string(" ")

        if entity.is_default_member:
            writer.write_keyword("Default")
            writer.write_string(" ")

        writer.write_keyword("Property")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_parameters(entity, writer)

        # Some compilers omit the property type; write what is available
        self.write_return_type(entity.return_type, writer)
        self.write_explicit_implementations(entity, writer)

        if gettable:
            self._write_accessor("Get", entity.getter, writer)
        if settable:
            self._write_accessor("Set", entity.setter, writer)

    def _write_accessor(self, keyword: str, accessor: Accessor, writer: SyntaxWriter):
        writer.write_line()

        if accessor.attributes:
            self.write_attributes(accessor.attributes, writer, self.indent)

        writer.write_string(self.indent)

        if accessor.visibility is not None:
            self.write_visibility(accessor.visibility, writer)
            writer.write_string(" ")

        writer.write_keyword(keyword)

    def write_event_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        self.write_attributes(entity.attributes, writer)
        self.write_procedure_modifiers(entity, writer)
        writer.write_keyword("Event")
        writer.write_string(" ")
        writer.write_identifier(entity.name)
        self.write_return_type(
            require(entity.event_handler_type, entity, "event handler type"), writer
        )
        self.write_explicit_implementations(entity, writer)

    def write_field_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        if self.is_unsupported_unsafe(entity, writer):
            return

        if not entity.is_serialized:
            self.write_attribute(NON_SERIALIZED_ATTRIBUTE_ID, writer)

        self.write_attributes(entity.attributes, writer)
        self.write_visibility(entity.visibility, writer)
        writer.write_string(" ")

        if entity.is_static:
            writer.write_keyword("Const" if entity.is_literal else "Shared")
            writer.write_string(" ")

        if entity.is_read_only:
            writer.write_keyword("ReadOnly")
            writer.write_string(" ")

        writer.write_identifier(entity.name)
        self.write_return_type(require(entity.return_type, entity, "field type"), writer)

        if entity.is_static and entity.is_literal:
            writer.write_string(" = ")
            self.write_constant_value(entity, writer)

    def write_explicit_implementations(self, entity: EntityNode, writer: SyntaxWriter):
        if not entity.is_explicit_implementation:
            return

        if writer.position > self.wrap_column:
            self.write_line_break(writer)
            writer.write_string(self.indent)
        else:
            writer.write_string(" ")

        writer.write_keyword("Implements")
        writer.write_string(" ")

        for index, member in enumerate(entity.implemented_members):
            if index:
                writer.write_string(", ")
            self.write_qualified_member(member, writer)

    # Base types and generics

    def write_base_class(self, entity: EntityNode, writer: SyntaxWriter):
        base_type = entity.base_type
        if base_type is None or getattr(base_type, "is_object", False):
            return

        self.write_line_break(writer)
        writer.write_string(self.indent)
        writer.write_keyword("Inherits")
        writer.write_string(" ")
        self.write_type_reference(base_type, writer)

    def write_implemented_interfaces(self, entity: EntityNode, writer: SyntaxWriter):
        if not entity.implemented_interfaces:
            return

        self.write_line_break(writer)
        writer.write_string(self.indent)

        if entity.subkind == EntitySubkind.INTERFACE:
            writer.write_keyword("Inherits")
        else:
            writer.write_keyword("Implements")

        writer.write_string(" ")
        self.write_separated(entity.implemented_interfaces, writer, self.write_type_reference)

    def write_generic_templates(
        self,
        templates: Sequence[GenericParameter],
        writer: SyntaxWriter,
        write_variance: bool = False,
    ):
        if not templates:
            return

        writer.write_string("(")
        writer.write_keyword("Of")
        writer.write_string(" ")

        def write_template(template: GenericParameter, writer: SyntaxWriter):
            contravariant, covariant = self.variance_keywords
            if write_variance and template.variance == Variance.CONTRAVARIANT:
                writer.write_keyword(contravariant)
                writer.write_string(" ")
            if write_variance and template.variance == Variance.COVARIANT:
                writer.write_keyword(covariant)
                writer.write_string(" ")

            writer.write_string(template.name)
            self._write_template_constraints(template, writer)

        self.write_separated(templates, writer, write_template)
        writer.write_string(")")

    def _write_template_constraints(self, template: GenericParameter, writer: SyntaxWriter):
        constraints = template.constraints
        if not constraints.is_constrained:
            return

        writer.write_string(" ")
        writer.write_keyword("As")
        writer.write_string(" ")

        grouped = constraints.count > 1
        if grouped:
            writer.write_string("{")

        items = []
        if constraints.is_value_type:
            items.append(lambda w: w.write_keyword("Structure"))
        if constraints.is_reference_type:
            items.append(lambda w: w.write_keyword("Class"))
        if constraints.requires_default_constructor:
            items.append(lambda w: w.write_keyword("New"))
        for constraint in constraints.type_constraints:
            items.append(lambda w, c=constraint: self.write_type_reference(c, w))

        self.write_separated(items, writer, lambda item, w: item(w))

        if grouped:
            writer.write_string("}")

    # Parameters and return types

    def write_parameters(self, entity: EntityNode, writer: SyntaxWriter):
        if not entity.parameters:
            return

        writer.write_string(" ( ")
        if self.include_line_continuation:
            writer.write_string("_")
        writer.write_line()

        count = len(entity.parameters)
        for index, parameter in enumerate(entity.parameters):
            writer.write_string(self.indent)
            self._write_parameter(parameter, writer)

            if index < count - 1:
                writer.write_string(",")
            self.write_line_break(writer)

        writer.write_string(")")

    def _write_parameter(self, parameter: Parameter, writer: SyntaxWriter):
        has_default = parameter.default_value is not None

        if parameter.is_optional and not has_default:
            self.write_attribute(OPTIONAL_ATTRIBUTE_ID, writer, new_line=False)
            writer.write_string(" ")

        if parameter.is_out:
            self.write_attribute(OUT_ATTRIBUTE_ID, writer, new_line=False)
            writer.write_string(" ")

        self.write_attributes(parameter.attributes, writer, parameter_attributes=True)

        if has_default:
            writer.write_keyword("Optional")
            writer.write_string(" ")

        if parameter.is_params_array:
            writer.write_keyword("ParamArray")
            writer.write_string(" ")

        if parameter.is_by_ref or parameter.is_out:
            writer.write_keyword("ByRef")
            writer.write_string(" ")

        writer.write_parameter(parameter.name)
        self.write_return_type(parameter.type, writer)

        if has_default:
            writer.write_string(" = ")
            self.write_value(parameter.default_value, writer)

    def write_return_type(self, reference: Optional[TypeReference], writer: SyntaxWriter):
        """Write `` As Type`` (nothing for a missing type)."""
        if reference is None:
            return

        writer.write_string(" ")
        writer.write_keyword("As")
        writer.write_string(" ")
        self.write_type_reference(reference, writer)

    # Values and type references

    def write_or_separator(self, writer: SyntaxWriter):
        writer.write_string(" ")
        writer.write_keyword("Or")
        writer.write_string(" ")

    def write_specialization(self, specialization: Specialization, writer: SyntaxWriter):
        writer.write_string("(")
        writer.write_keyword("Of")
        writer.write_string(" ")
        for index, argument in enumerate(specialization.arguments):
            if index:
                writer.write_string(", ")
            self.write_type_reference(argument, writer)
        writer.write_string(")")

    def write_tuple_element(self, element: TypeReference, writer: SyntaxWriter):
        name = getattr(element, "element_name", None)
        if name:
            writer.write_string(name)
            writer.write_string(" As ")
        self.write_type_reference(element, writer)
