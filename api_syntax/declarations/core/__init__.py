"""
Core syntax generation components.

Provides the entity model, the syntax writer and the base classes used by
all language generators.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .declaration import DeclarationSyntaxGenerator
from .entity import (
    Accessor,
    ArrayOf,
    ArrayPlaceholderValue,
    AttributeUsage,
    ContainerType,
    EntityKind,
    EntityNode,
    EntitySubkind,
    EnumFlagsValue,
    GenericConstraints,
    GenericParameter,
    LiteralValue,
    MemberReference,
    MemberTag,
    Modifier,
    NamedArgument,
    NullValue,
    Parameter,
    PointerTo,
    ReferenceTo,
    Specialization,
    TemplateRef,
    TypeOfValue,
    TypeRef,
    Variance,
    Visibility,
)
from .generator import (
    MalformedEntityError,
    RenderResult,
    SyntaxGenerator,
    SyntaxGeneratorError,
    render_entity,
)
from .messages import MessageCatalog, get_default_catalog
from .naming import MemberNamer, NamingCase, to_camel_case
from .writer import SyntaxBlock, SyntaxStyle, SyntaxWriter, WriterStateError

__all__ = [
    # Entity model
    "Accessor",
    "ArrayOf",
    "ArrayPlaceholderValue",
    "AttributeUsage",
    "ContainerType",
    "EntityKind",
    "EntityNode",
    "EntitySubkind",
    "EnumFlagsValue",
    "GenericConstraints",
    "GenericParameter",
    "LiteralValue",
    "MemberReference",
    "MemberTag",
    "Modifier",
    "NamedArgument",
    "NullValue",
    "Parameter",
    "PointerTo",
    "ReferenceTo",
    "Specialization",
    "TemplateRef",
    "TypeOfValue",
    "TypeRef",
    "Variance",
    "Visibility",
    # Writer
    "SyntaxBlock",
    "SyntaxStyle",
    "SyntaxWriter",
    "WriterStateError",
    # Base generator interface
    "SyntaxGenerator",
    "DeclarationSyntaxGenerator",
    "SyntaxGeneratorError",
    "MalformedEntityError",
    "RenderResult",
    "render_entity",
    # Messages and naming
    "MessageCatalog",
    "get_default_catalog",
    "MemberNamer",
    "NamingCase",
    "to_camel_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
]
