"""
Core entity model for declaration syntax rendering.

Describes one documented API element (namespace, type or member) together with
the references it carries. Nodes are immutable and produced once upstream;
generators only read them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union

OBJECT_TYPE_ID = "T:System.Object"
EXTENSION_ATTRIBUTE_ID = "T:System.Runtime.CompilerServices.ExtensionAttribute"
FIXED_BUFFER_ATTRIBUTE_ID = "T:System.Runtime.CompilerServices.FixedBufferAttribute"
PARAM_ARRAY_ATTRIBUTE_ID = "T:System.ParamArrayAttribute"
VALUE_TUPLE_PREFIX = "T:System.ValueTuple`"


class EntityKind(Enum):
    """Top-level discriminator of an entity node."""

    NAMESPACE = "namespace"
    TYPE = "type"
    MEMBER = "member"


class EntitySubkind(Enum):
    """Kind of type or member."""

    # Types
    CLASS = "class"
    STRUCTURE = "structure"
    INTERFACE = "interface"
    DELEGATE = "delegate"
    ENUMERATION = "enumeration"

    # Members
    CONSTRUCTOR = "constructor"
    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"
    EVENT = "event"


TYPE_SUBKINDS = frozenset(
    {
        EntitySubkind.CLASS,
        EntitySubkind.STRUCTURE,
        EntitySubkind.INTERFACE,
        EntitySubkind.DELEGATE,
        EntitySubkind.ENUMERATION,
    }
)


class MemberTag(Enum):
    """Further classification of methods, properties and events."""

    NORMAL = "normal"
    OPERATOR = "operator"  # special-name operator method
    CAST = "cast"  # conversion operator
    SPECIAL = "special"  # other special-name methods (accessors, let_ sugar)
    ATTACHED = "attached"  # attached property or attached event


class Visibility(Enum):
    """Accessibility of a type or member."""

    PUBLIC = "public"
    FAMILY = "family"
    FAMILY_OR_ASSEMBLY = "family or assembly"
    FAMILY_AND_ASSEMBLY = "family and assembly"
    ASSEMBLY = "assembly"
    PRIVATE = "private"


class Modifier(Enum):
    """Declaration modifiers."""

    STATIC = "static"
    ABSTRACT = "abstract"
    SEALED = "sealed"
    VIRTUAL = "virtual"
    OVERRIDE = "override"
    FINAL = "final"
    READ_ONLY = "readonly"  # init-only field
    LITERAL = "literal"  # const field
    SERIALIZABLE = "serializable"
    NON_SERIALIZED = "nonserialized"  # field excluded from serialization
    VOLATILE = "volatile"
    UNSAFE = "unsafe"
    VARARGS = "varargs"
    EXTENSION = "extension"
    EXPLICIT_IMPLEMENTATION = "explicit"
    DEFAULT_INDEXER = "default"


class Variance(Enum):
    """Variance annotation of a generic parameter."""

    NONE = "none"
    COVARIANT = "covariant"
    CONTRAVARIANT = "contravariant"


# Type references


@dataclass(frozen=True)
class Specialization:
    """Generic arguments applied to a generic type definition."""

    arguments: Tuple["TypeReference", ...] = ()


@dataclass(frozen=True)
class TypeRef:
    """Reference to a named type by entity id (e.g. ``T:System.Int32``)."""

    id: str
    specialization: Optional[Specialization] = None
    element_name: Optional[str] = None  # value tuple element name

    @property
    def is_object(self) -> bool:
        return self.id == OBJECT_TYPE_ID and self.specialization is None

    @property
    def is_value_tuple(self) -> bool:
        return self.id.startswith(VALUE_TUPLE_PREFIX)


@dataclass(frozen=True)
class ArrayOf:
    """Array of ``element`` with the given rank."""

    element: "TypeReference"
    rank: int = 1


@dataclass(frozen=True)
class PointerTo:
    """Unmanaged pointer to ``target``."""

    target: "TypeReference"


@dataclass(frozen=True)
class ReferenceTo:
    """By-reference occurrence of ``target`` (ref/out parameters)."""

    target: "TypeReference"


@dataclass(frozen=True)
class TemplateRef:
    """Occurrence of a generic parameter by name."""

    name: str
    element_name: Optional[str] = None


TypeReference = Union[TypeRef, ArrayOf, PointerTo, ReferenceTo, TemplateRef, Specialization]


def contains_pointer(reference: Optional[TypeReference]) -> bool:
    """Return True if a pointer occurs anywhere inside the type reference."""
    if reference is None:
        return False
    if isinstance(reference, PointerTo):
        return True
    if isinstance(reference, ArrayOf):
        return contains_pointer(reference.element)
    if isinstance(reference, ReferenceTo):
        return contains_pointer(reference.target)
    if isinstance(reference, TypeRef) and reference.specialization:
        return any(contains_pointer(arg) for arg in reference.specialization.arguments)
    if isinstance(reference, Specialization):
        return any(contains_pointer(arg) for arg in reference.arguments)
    return False


# Values


@dataclass(frozen=True)
class NullValue:
    """The null literal."""


@dataclass(frozen=True)
class TypeOfValue:
    """A type object argument (``typeof(T)``)."""

    type: TypeReference


@dataclass(frozen=True)
class EnumFlagsValue:
    """One or more enumeration fields combined with bitwise-or."""

    type: TypeReference
    field_names: Tuple[str, ...]


@dataclass(frozen=True)
class LiteralValue:
    """A literal whose rendering depends on its declared type."""

    type: TypeReference
    text: str


@dataclass(frozen=True)
class ArrayPlaceholderValue:
    """An array argument; element values are never available."""

    element_type: TypeReference


Value = Union[NullValue, TypeOfValue, EnumFlagsValue, LiteralValue, ArrayPlaceholderValue]


# Declaration parts


@dataclass(frozen=True)
class NamedArgument:
    """Named attribute argument (``Name = value``)."""

    name: str
    value: Optional[Value]


@dataclass(frozen=True)
class AttributeUsage:
    """An attribute applied to an entity, parameter or accessor."""

    type: TypeReference
    positional_arguments: Tuple[Optional[Value], ...] = ()
    named_arguments: Tuple[NamedArgument, ...] = ()

    @property
    def type_id(self) -> Optional[str]:
        return self.type.id if isinstance(self.type, TypeRef) else None

    @property
    def has_arguments(self) -> bool:
        return bool(self.positional_arguments or self.named_arguments)


@dataclass(frozen=True)
class GenericConstraints:
    """Constraints placed on a generic parameter."""

    is_value_type: bool = False
    is_reference_type: bool = False
    requires_default_constructor: bool = False
    type_constraints: Tuple[TypeReference, ...] = ()

    @property
    def is_constrained(self) -> bool:
        return (
            self.is_value_type
            or self.is_reference_type
            or self.requires_default_constructor
            or bool(self.type_constraints)
        )

    @property
    def count(self) -> int:
        return (
            int(self.is_value_type)
            + int(self.is_reference_type)
            + int(self.requires_default_constructor)
            + len(self.type_constraints)
        )


@dataclass(frozen=True)
class GenericParameter:
    """A generic type or method parameter."""

    name: str
    variance: Variance = Variance.NONE
    constraints: GenericConstraints = field(default_factory=GenericConstraints)


@dataclass(frozen=True)
class Parameter:
    """A method, indexer or delegate parameter."""

    name: str
    type: TypeReference
    is_in: bool = False
    is_out: bool = False
    is_by_ref: bool = False
    is_params_array: bool = False
    is_optional: bool = False
    default_value: Optional[Value] = None
    attributes: Tuple[AttributeUsage, ...] = ()


@dataclass(frozen=True)
class MemberReference:
    """Reference to a member, carrying its declaring type."""

    id: str
    declaring_type: TypeReference
    name: Optional[str] = None


@dataclass(frozen=True)
class ContainerType:
    """Back-reference to the type that declares a member."""

    id: str
    name: str
    subkind: Optional[EntitySubkind] = None
    namespace: Optional[str] = None
    ancestors: Tuple[TypeReference, ...] = ()
    attributes: Tuple[AttributeUsage, ...] = ()


@dataclass(frozen=True)
class Accessor:
    """Property getter or setter."""

    visibility: Optional[Visibility] = None  # only set when narrower than the member
    attributes: Tuple[AttributeUsage, ...] = ()


@dataclass(frozen=True)
class EntityNode:
    """Immutable description of one API element."""

    id: str
    kind: EntityKind
    name: str
    subkind: Optional[EntitySubkind] = None
    tag: MemberTag = MemberTag.NORMAL
    visibility: Visibility = Visibility.PUBLIC
    modifiers: FrozenSet[Modifier] = frozenset()
    generic_parameters: Tuple[GenericParameter, ...] = ()
    base_type: Optional[TypeReference] = None
    ancestors: Tuple[TypeReference, ...] = ()
    implemented_interfaces: Tuple[TypeReference, ...] = ()
    attributes: Tuple[AttributeUsage, ...] = ()
    parameters: Tuple[Parameter, ...] = ()
    return_type: Optional[TypeReference] = None
    constant_value: Optional[Value] = None
    event_handler_type: Optional[TypeReference] = None
    event_args_type: Optional[TypeReference] = None
    implemented_members: Tuple[MemberReference, ...] = ()
    containing_type: Optional[ContainerType] = None
    containing_namespace: Optional[str] = None
    containing_assembly: Optional[str] = None
    getter: Optional[Accessor] = None
    setter: Optional[Accessor] = None
    attached_getter: Optional[str] = None
    attached_setter: Optional[str] = None
    attached_adder: Optional[str] = None
    attached_remover: Optional[str] = None
    is_global: bool = False
    is_record: bool = False

    def has(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers

    @property
    def is_static(self) -> bool:
        return Modifier.STATIC in self.modifiers

    @property
    def has_abstract(self) -> bool:
        return Modifier.ABSTRACT in self.modifiers

    @property
    def has_sealed(self) -> bool:
        return Modifier.SEALED in self.modifiers

    @property
    def is_virtual(self) -> bool:
        return Modifier.VIRTUAL in self.modifiers

    @property
    def is_override(self) -> bool:
        return Modifier.OVERRIDE in self.modifiers

    @property
    def is_final(self) -> bool:
        return Modifier.FINAL in self.modifiers

    @property
    def is_literal(self) -> bool:
        return Modifier.LITERAL in self.modifiers

    @property
    def is_read_only(self) -> bool:
        return Modifier.READ_ONLY in self.modifiers

    @property
    def is_serializable(self) -> bool:
        return Modifier.SERIALIZABLE in self.modifiers

    @property
    def is_serialized(self) -> bool:
        """Fields are serialized unless marked otherwise."""
        return Modifier.NON_SERIALIZED not in self.modifiers

    @property
    def is_extension(self) -> bool:
        return Modifier.EXTENSION in self.modifiers or self.has_attribute(
            EXTENSION_ATTRIBUTE_ID
        )

    @property
    def is_default_member(self) -> bool:
        return Modifier.DEFAULT_INDEXER in self.modifiers

    @property
    def is_generic(self) -> bool:
        return bool(self.generic_parameters)

    @property
    def has_varargs(self) -> bool:
        return Modifier.VARARGS in self.modifiers

    @property
    def is_explicit_implementation(self) -> bool:
        return Modifier.EXPLICIT_IMPLEMENTATION in self.modifiers and bool(
            self.implemented_members
        )

    @property
    def is_unsafe(self) -> bool:
        """Pointer-bearing signature or fixed-size buffer."""
        if Modifier.UNSAFE in self.modifiers:
            return True
        if contains_pointer(self.return_type):
            return True
        if any(contains_pointer(p.type) for p in self.parameters):
            return True
        return self.fixed_buffer is not None

    @property
    def fixed_buffer(self) -> Optional[AttributeUsage]:
        return self.find_attribute(FIXED_BUFFER_ATTRIBUTE_ID)

    @property
    def is_interface_member(self) -> bool:
        return (
            self.containing_type is not None
            and self.containing_type.subkind == EntitySubkind.INTERFACE
        )

    @property
    def is_gettable(self) -> bool:
        return self.getter is not None

    @property
    def is_settable(self) -> bool:
        return self.setter is not None

    @property
    def namespace_name(self) -> str:
        return strip_id_prefix(self.containing_namespace or "")

    def find_attribute(self, type_id: str) -> Optional[AttributeUsage]:
        for attribute in self.attributes:
            if attribute.type_id == type_id:
                return attribute
        return None

    def has_attribute(self, type_id: str) -> bool:
        return self.find_attribute(type_id) is not None


def strip_id_prefix(entity_id: str) -> str:
    """Remove the ``X:`` category sigil from an entity id."""
    if len(entity_id) > 1 and entity_id[1] == ":":
        return entity_id[2:]
    return entity_id


def display_name_for_id(entity_id: str) -> str:
    """
    Best-effort display text for a reference id.

    ``M:Ns.Type.Method(System.Int32)`` -> ``Method``,
    ``T:System.Collections.Generic.List`1`` -> ``List``.
    """
    name = strip_id_prefix(entity_id)
    paren = name.find("(")
    if paren >= 0:
        name = name[:paren]
    name = name.rsplit(".", 1)[-1]
    tick = name.find("`")
    if tick >= 0:
        name = name[:tick]
    return name
