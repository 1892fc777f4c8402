"""
Shared helpers for declaration-statement languages.

Languages that print a declaration statement (as opposed to usage markup)
share most of their formatting algorithms: attributes and their argument
values, modifiers, type references and constant values. The helpers here are
driven by class-level keyword tables that each language overrides.
"""

from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from .entity import (
    EXTENSION_ATTRIBUTE_ID,
    FIXED_BUFFER_ATTRIBUTE_ID,
    PARAM_ARRAY_ATTRIBUTE_ID,
    ArrayOf,
    ArrayPlaceholderValue,
    AttributeUsage,
    EntityNode,
    EnumFlagsValue,
    LiteralValue,
    MemberReference,
    NullValue,
    PointerTo,
    ReferenceTo,
    Specialization,
    TemplateRef,
    TypeOfValue,
    TypeRef,
    TypeReference,
    Value,
    Visibility,
)
from .generator import MalformedEntityError, SyntaxGenerator
from .writer import SyntaxWriter

# Compiler-generated markers never printed in attribute lists
SKIPPED_ATTRIBUTE_IDS = frozenset(
    {EXTENSION_ATTRIBUTE_ID, FIXED_BUFFER_ATTRIBUTE_ID, PARAM_ARRAY_ATTRIBUTE_ID}
)

SERIALIZABLE_ATTRIBUTE_ID = "T:System.SerializableAttribute"
NON_SERIALIZED_ATTRIBUTE_ID = "T:System.NonSerializedAttribute"
OPTIONAL_ATTRIBUTE_ID = "T:System.Runtime.InteropServices.OptionalAttribute"
OUT_ATTRIBUTE_ID = "T:System.Runtime.InteropServices.OutAttribute"

STRING_TYPE_ID = "T:System.String"
BOOLEAN_TYPE_ID = "T:System.Boolean"
CHAR_TYPE_ID = "T:System.Char"
SINGLE_TYPE_ID = "T:System.Single"

# Literal types whose text is printed unchanged
RAW_LITERAL_TYPE_IDS = frozenset(
    {
        "T:System.Byte",
        "T:System.Double",
        "T:System.SByte",
        "T:System.Int16",
        "T:System.Int32",
        "T:System.Int64",
        "T:System.UInt16",
        "T:System.UInt32",
        "T:System.UInt64",
    }
)


def parse_boolean(text: str) -> bool:
    return text.strip().lower() == "true"


def require(value, entity: EntityNode, what: str):
    """Fail fast when a field the declaration needs is missing."""
    if value is None:
        raise MalformedEntityError(f"{entity.id} has no {what}")
    return value


class DeclarationSyntaxGenerator(SyntaxGenerator):
    """Base class for languages rendering declaration statements."""

    # Keyword per visibility; None writes nothing
    visibility_keywords: Dict[Visibility, Optional[str]] = {}

    # Keywords for the abstract/sealed combinations of a class
    class_modifier_keywords: Dict[str, str] = {
        "static": "static",
        "abstract": "abstract",
        "sealed": "sealed",
    }

    # Keywords written by procedure modifiers
    procedure_modifier_keywords: Dict[str, str] = {
        "static": "static",
        "abstract": "abstract",
        "override": "override",
        "final": "sealed",
        "virtual": "virtual",
    }

    attribute_brackets: Tuple[str, str] = ("[", "]")
    named_argument_separator = " = "
    null_keyword = "null"
    type_of_keyword = "typeof"
    array_new_keyword = "new"
    array_brackets: Tuple[str, str] = ("[", "]")
    char_quotes: Tuple[str, str] = ("'", "'")
    float_suffix = "f"
    attribute_booleans: Tuple[str, str] = ("true", "false")
    constant_booleans: Tuple[str, str] = ("true", "false")
    variance_keywords: Tuple[str, str] = ("in", "out")

    # Built-in type id -> language keyword used as link text
    type_keywords: Dict[str, str] = {}

    # Canonical operator member name -> operator token
    operator_symbols: Dict[str, str] = {}

    @property
    def line_continuation(self) -> str:
        """Marker written before a mid-statement line break (none by default)."""
        return ""

    def write_line_break(self, writer: SyntaxWriter):
        if self.line_continuation:
            writer.write_string(self.line_continuation)
        writer.write_line()

    def write_with_line_break_if_needed(
        self, writer: SyntaxWriter, text: Optional[str], indent: Optional[str]
    ) -> bool:
        """Write text, then break the line if the writer is past the wrap column."""
        if text:
            writer.write_string(text)

        if writer.position > self.wrap_column:
            self.write_line_break(writer)
            if indent:
                writer.write_string(indent)
            return True

        return False

    def write_separated(
        self,
        items: Sequence,
        writer: SyntaxWriter,
        write_item: Callable,
        separator: str = ", ",
        indent: Optional[str] = None,
    ):
        """Write items separated by a wrapping separator."""
        for index, item in enumerate(items):
            if index:
                self.write_with_line_break_if_needed(writer, separator, indent or self.indent)
            write_item(item, writer)

    def operator_symbol(self, name: str) -> Optional[str]:
        return self.operator_symbols.get(name)

    # Visibility and modifiers

    def write_visibility(self, visibility: Optional[Visibility], writer: SyntaxWriter):
        keyword = self.visibility_keywords.get(visibility) if visibility else None
        if keyword:
            writer.write_keyword(keyword)

    def write_class_modifiers(self, entity: EntityNode, writer: SyntaxWriter):
        """Abstract and sealed together mean a static class."""
        keywords = self.class_modifier_keywords
        is_abstract = entity.has_abstract
        is_sealed = entity.has_sealed

        if is_abstract and is_sealed:
            keyword = keywords["static"]
        elif is_abstract:
            keyword = keywords["abstract"]
        elif is_sealed:
            keyword = keywords["sealed"]
        else:
            return

        writer.write_keyword(keyword)
        writer.write_string(" ")

    def write_procedure_modifiers(self, entity: EntityNode, writer: SyntaxWriter):
        # Interface members don't get modified
        if entity.is_interface_member:
            return

        keywords = self.procedure_modifier_keywords

        self.write_visibility(entity.visibility, writer)
        writer.write_string(" ")

        if entity.is_static:
            writer.write_keyword(keywords["static"])
            writer.write_string(" ")
        elif entity.is_virtual:
            if entity.has_abstract:
                writer.write_keyword(keywords["abstract"])
                writer.write_string(" ")
            elif entity.is_override:
                writer.write_keyword(keywords["override"])
                writer.write_string(" ")
                if entity.is_final:
                    writer.write_keyword(keywords["final"])
                    writer.write_string(" ")
            elif not entity.is_final:
                writer.write_keyword(keywords["virtual"])
                writer.write_string(" ")

    # Attributes

    def write_attribute(self, type_id: str, writer: SyntaxWriter, new_line: bool = True):
        """Write a bare attribute reference such as ``[SerializableAttribute]``."""
        open_bracket, close_bracket = self.attribute_brackets
        writer.write_string(open_bracket)
        writer.write_reference_link(type_id)
        writer.write_string(close_bracket)

        if new_line:
            self.write_line_break(writer)

    def write_attributes(
        self,
        attributes: Iterable[AttributeUsage],
        writer: SyntaxWriter,
        indent: Optional[str] = None,
        parameter_attributes: bool = False,
    ) -> int:
        """
        Write an attribute list.

        Args:
            attributes: Attributes to write
            writer: Writer to use
            indent: Indent written before each attribute and after argument wraps
            parameter_attributes: Write inline (no line breaks) for a parameter

        Returns:
            Number of attributes written
        """
        open_bracket, close_bracket = self.attribute_brackets
        wrap_indent = (indent or "") + self.indent
        written = 0

        for attribute in attributes:
            if attribute.type_id in SKIPPED_ATTRIBUTE_IDS:
                continue

            if indent:
                writer.write_string(indent)

            writer.write_string(open_bracket)
            self.write_type_reference(attribute.type, writer)

            if attribute.has_arguments:
                writer.write_string("(")

                for index, argument in enumerate(attribute.positional_arguments):
                    if index:
                        self.write_with_line_break_if_needed(writer, ", ", wrap_indent)
                    self.write_value(argument, writer)

                if attribute.positional_arguments and attribute.named_arguments:
                    writer.write_string(", ")

                for index, assignment in enumerate(attribute.named_arguments):
                    if index:
                        self.write_with_line_break_if_needed(writer, ", ", wrap_indent)
                    writer.write_string(assignment.name)
                    writer.write_string(self.named_argument_separator)
                    self.write_value(assignment.value, writer)

                writer.write_string(")")

            writer.write_string(close_bracket)
            written += 1

            if not parameter_attributes:
                self.write_line_break(writer)

        if parameter_attributes and written:
            writer.write_string(" ")

        return written

    # Values

    def write_value(self, value: Optional[Value], writer: SyntaxWriter, constant: bool = False):
        """
        Write an attribute argument, default parameter value or constant.

        Args:
            value: Value to write
            writer: Writer to use
            constant: Render as a constant field value (affects boolean keywords)

        Raises:
            MalformedEntityError: If the value has no payload
        """
        if value is None:
            raise MalformedEntityError("Value node has no payload")

        if isinstance(value, NullValue):
            writer.write_keyword(self.null_keyword)
        elif isinstance(value, TypeOfValue):
            writer.write_keyword(self.type_of_keyword)
            writer.write_string("(")
            self.write_type_reference(value.type, writer)
            writer.write_string(")")
        elif isinstance(value, EnumFlagsValue):
            for index, field_name in enumerate(value.field_names):
                if index:
                    self.write_or_separator(writer)
                self.write_type_reference(value.type, writer)
                writer.write_string(".")
                writer.write_string(field_name)
        elif isinstance(value, ArrayPlaceholderValue):
            self.write_array_placeholder(ArrayOf(value.element_type), writer)
        elif isinstance(value, LiteralValue):
            self.write_literal_value(value, writer, constant)
        else:
            raise MalformedEntityError(f"Unknown value node: {value!r}")

    def write_literal_value(self, value: LiteralValue, writer: SyntaxWriter, constant: bool):
        text = value.text
        type_id = value.type.id if isinstance(value.type, TypeRef) else None

        if type_id == STRING_TYPE_ID:
            writer.write_string('"')
            writer.write_string(text)
            writer.write_string('"')
        elif type_id == BOOLEAN_TYPE_ID:
            true_keyword, false_keyword = (
                self.constant_booleans if constant else self.attribute_booleans
            )
            writer.write_keyword(true_keyword if parse_boolean(text) else false_keyword)
        elif type_id == CHAR_TYPE_ID:
            open_quote, close_quote = self.char_quotes
            writer.write_string(open_quote)
            writer.write_string(text)
            writer.write_string(close_quote)
        elif type_id in RAW_LITERAL_TYPE_IDS:
            writer.write_string(text)
        elif type_id == SINGLE_TYPE_ID:
            writer.write_string(text)
            writer.write_string(self.float_suffix)
        elif isinstance(value.type, ArrayOf) and not constant:
            # Element values are not available for arrays
            self.write_array_placeholder(value.type, writer)
        else:
            writer.write_string(text)

    def write_array_placeholder(self, array_type: ArrayOf, writer: SyntaxWriter):
        writer.write_keyword(self.array_new_keyword)
        writer.write_string(" ")
        self.write_type_reference(array_type, writer)
        writer.write_string(" { ... }")

    def write_or_separator(self, writer: SyntaxWriter):
        writer.write_string("|")

    def write_constant_value(self, entity: EntityNode, writer: SyntaxWriter):
        self.write_value(entity.constant_value, writer, constant=True)

    # Type references

    def write_type_reference(self, reference: TypeReference, writer: SyntaxWriter):
        if isinstance(reference, ArrayOf):
            self.write_type_reference(reference.element, writer)
            open_bracket, close_bracket = self.array_brackets
            writer.write_string(open_bracket)
            writer.write_string("," * (reference.rank - 1))
            writer.write_string(close_bracket)
        elif isinstance(reference, PointerTo):
            self.write_type_reference(reference.target, writer)
            writer.write_string("*")
        elif isinstance(reference, ReferenceTo):
            self.write_type_reference(reference.target, writer)
        elif isinstance(reference, TypeRef):
            if reference.is_value_tuple and reference.specialization:
                self.write_value_tuple(reference.specialization, writer)
            else:
                self.write_normal_type_reference(reference.id, writer)
                if reference.specialization is not None:
                    self.write_specialization(reference.specialization, writer)
        elif isinstance(reference, TemplateRef):
            writer.write_string(reference.name)
        elif isinstance(reference, Specialization):
            self.write_specialization(reference, writer)
        else:
            raise MalformedEntityError(f"Unknown type reference: {reference!r}")

    def write_normal_type_reference(self, type_id: str, writer: SyntaxWriter):
        keyword = self.type_keywords.get(type_id)
        if keyword is not None:
            writer.write_reference_link(type_id, keyword)
        else:
            writer.write_reference_link(type_id)

    def write_specialization(self, specialization: Specialization, writer: SyntaxWriter):
        writer.write_string("<")
        for index, argument in enumerate(specialization.arguments):
            if index:
                writer.write_string(", ")
            self.write_type_reference(argument, writer)
        writer.write_string(">")

    def write_value_tuple(self, specialization: Specialization, writer: SyntaxWriter):
        writer.write_string("(")
        for index, element in enumerate(specialization.arguments):
            if index:
                writer.write_string(", ")
            self.write_tuple_element(element, writer)
        writer.write_string(")")

    def write_tuple_element(self, element: TypeReference, writer: SyntaxWriter):
        self.write_type_reference(element, writer)
        name = getattr(element, "element_name", None)
        if name:
            writer.write_string(" ")
            writer.write_string(name)

    def write_member_reference(self, member: MemberReference, writer: SyntaxWriter):
        writer.write_reference_link(member.id)

    def write_qualified_member(self, member: MemberReference, writer: SyntaxWriter):
        """Write ``Contract.Member`` for an implemented interface member."""
        self.write_type_reference(member.declaring_type, writer)
        writer.write_string(".")
        self.write_member_reference(member, writer)
