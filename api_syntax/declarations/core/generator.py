"""
Base generator interface for all syntax targets.

Defines the contract that every language backend implements: one
``write_<kind>_syntax`` method per declarable entity kind, the dispatch from
an entity node to those methods, and the guards and wrap helper shared by
all backends.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from rich.text import Text

from ...logging_config import get_logger
from .config import GeneratorConfig
from .entity import EntityKind, EntityNode, EntitySubkind, MemberTag, TypeReference
from .messages import get_default_catalog
from .writer import MessageRenderer, ReferenceResolver, SyntaxWriter

logger = get_logger(__name__)

CAST_OPERATOR_NAMES = ("Implicit", "Explicit")
LET_PREFIX = "let_"


class SyntaxGeneratorError(Exception):
    """Base exception for syntax generation errors."""

    pass


class MalformedEntityError(SyntaxGeneratorError):
    """Raised when an entity node violates the data contract."""

    pass


class SyntaxGenerator(ABC):
    """Abstract base class for all declaration syntax generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the language id used in block tags and message keys (e.g. 'CSharp')."""
        pass

    @property
    @abstractmethod
    def style_id(self) -> str:
        """Return the short style id of the language (e.g. 'cs')."""
        pass

    @property
    def language(self) -> str:
        """Effective language id, honouring the configured override."""
        return self.config.language_name or self.language_name

    @property
    def wrap_column(self) -> int:
        return self.config.wrap_column

    @property
    def indent(self) -> str:
        return self.config.indent

    # Entry point and dispatch

    def write_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        """
        Render one entity into a new block of the writer.

        Args:
            entity: Entity node to render
            writer: Writer receiving the block

        Raises:
            MalformedEntityError: If the entity kind/subkind combination is unknown
        """
        with writer.block(self.language):
            match entity.kind:
                case EntityKind.NAMESPACE:
                    self.write_namespace_syntax(entity, writer)
                case EntityKind.TYPE:
                    self.write_type_syntax(entity, writer)
                case EntityKind.MEMBER:
                    self.write_member_syntax(entity, writer)
                case _:
                    raise MalformedEntityError(f"Unknown entity kind for {entity.id}: {entity.kind}")

    def write_type_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        logger.debug("%s: %s as %s", self.language, entity.id, entity.subkind)

        match entity.subkind:
            case EntitySubkind.CLASS:
                self.write_class_syntax(entity, writer)
            case EntitySubkind.STRUCTURE:
                self.write_structure_syntax(entity, writer)
            case EntitySubkind.INTERFACE:
                self.write_interface_syntax(entity, writer)
            case EntitySubkind.DELEGATE:
                self.write_delegate_syntax(entity, writer)
            case EntitySubkind.ENUMERATION:
                self.write_enumeration_syntax(entity, writer)
            case _:
                raise MalformedEntityError(
                    f"Type {entity.id} has unsupported subkind {entity.subkind}"
                )

    def write_member_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        logger.debug("%s: %s as %s/%s", self.language, entity.id, entity.subkind, entity.tag)

        match entity.subkind:
            case EntitySubkind.CONSTRUCTOR:
                self.write_constructor_syntax(entity, writer)
            case EntitySubkind.METHOD:
                self.write_method_syntax(entity, writer)
            case EntitySubkind.PROPERTY if entity.tag == MemberTag.ATTACHED:
                self.write_attached_property_syntax(entity, writer)
            case EntitySubkind.PROPERTY:
                self.write_property_syntax(entity, writer)
            case EntitySubkind.EVENT if entity.tag == MemberTag.ATTACHED:
                self.write_attached_event_syntax(entity, writer)
            case EntitySubkind.EVENT:
                self.write_event_syntax(entity, writer)
            case EntitySubkind.FIELD:
                self.write_field_syntax(entity, writer)
            case _:
                raise MalformedEntityError(
                    f"Member {entity.id} has unsupported subkind {entity.subkind}"
                )

    def write_method_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        """Route a method to normal, operator or cast syntax."""
        match entity.tag:
            case MemberTag.CAST:
                self.write_cast_syntax(entity, writer)
            case MemberTag.OPERATOR if entity.name in CAST_OPERATOR_NAMES:
                self.write_cast_syntax(entity, writer)
            case MemberTag.OPERATOR:
                self.write_operator_syntax(entity, writer)
            case MemberTag.SPECIAL if entity.name.startswith(LET_PREFIX):
                # let properties have no declaration form of their own
                self.write_normal_method_syntax(entity, writer)
            case MemberTag.SPECIAL:
                logger.debug("Skipping special-name method %s", entity.id)
            case MemberTag.NORMAL | MemberTag.ATTACHED:
                self.write_normal_method_syntax(entity, writer)
            case _:
                raise MalformedEntityError(f"Method {entity.id} has unknown tag {entity.tag}")

    # Per-kind writers

    @abstractmethod
    def write_namespace_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    @abstractmethod
    def write_class_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    @abstractmethod
    def write_structure_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    @abstractmethod
    def write_interface_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    @abstractmethod
    def write_delegate_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    @abstractmethod
    def write_enumeration_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    @abstractmethod
    def write_constructor_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    @abstractmethod
    def write_property_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    @abstractmethod
    def write_field_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    @abstractmethod
    def write_event_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_normal_method_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_operator_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_cast_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        pass

    def write_attached_property_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        """Refer the reader to the static getter and setter methods."""
        getter = entity.attached_getter
        setter = entity.attached_setter

        if getter:
            writer.write_string("See ")
            writer.write_reference_link(getter)

        if setter:
            if getter:
                writer.write_string(", ")
            writer.write_reference_link(setter)

    def write_attached_event_syntax(self, entity: EntityNode, writer: SyntaxWriter):
        """Refer the reader to the static adder and remover methods."""
        adder = entity.attached_adder
        remover = entity.attached_remover

        if adder or remover:
            writer.write_string("See ")
            if adder:
                writer.write_reference_link(adder)
            if adder and remover:
                writer.write_string(", ")
            if remover:
                writer.write_reference_link(remover)

    @abstractmethod
    def write_type_reference(self, reference: TypeReference, writer: SyntaxWriter):
        """Write a type occurrence in the language's notation."""
        pass

    # Unsupported-feature guards

    def message_key(self, feature: str) -> str:
        return f"Unsupported{feature}_{self.language}"

    def write_unsupported(self, feature: str, entity: EntityNode, writer: SyntaxWriter):
        """Emit the unsupported-feature message for ``feature``."""
        key = self.message_key(feature)
        logger.info("%s cannot be expressed in %s (%s)", entity.id, self.language, key)
        writer.write_message(key)

    def is_unsupported_varargs(self, entity: EntityNode, writer: SyntaxWriter) -> bool:
        if entity.has_varargs:
            self.write_unsupported("Varargs", entity, writer)
            return True
        return False

    def is_unsupported_unsafe(self, entity: EntityNode, writer: SyntaxWriter) -> bool:
        if entity.is_unsafe:
            self.write_unsupported("Unsafe", entity, writer)
            return True
        return False

    def is_unsupported_generic(self, entity: EntityNode, writer: SyntaxWriter) -> bool:
        if entity.is_generic:
            self.write_unsupported("Generic", entity, writer)
            return True
        return False

    def is_unsupported_explicit(self, entity: EntityNode, writer: SyntaxWriter) -> bool:
        if entity.is_explicit_implementation:
            self.write_unsupported("Explicit", entity, writer)
            return True
        return False


class RenderResult:
    """Container for the output of one (entity, language) render."""

    def __init__(
        self,
        text: str,
        rich_text: Optional[Text] = None,
        messages: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize render result.

        Args:
            text: Plain-text rendering of the block
            rich_text: Styled rendering of the block
            messages: Message keys emitted instead of syntax
            metadata: Additional metadata about the render
        """
        self.text = text
        self.rich_text = rich_text if rich_text is not None else Text(text)
        self.messages = messages or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def is_supported(self) -> bool:
        return self.success and not self.messages

    @classmethod
    def error(cls, message: str, exception: Optional[Exception] = None) -> "RenderResult":
        """Create a failed render result."""
        result = cls(text="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def render_entity(
    generator: SyntaxGenerator,
    entity: EntityNode,
    reference_resolver: Optional[ReferenceResolver] = None,
    message_renderer: Optional[MessageRenderer] = None,
) -> RenderResult:
    """
    Render one entity with error handling.

    A fresh writer is used for every call so no state carries over between
    renders.

    Args:
        generator: Syntax generator instance
        entity: Entity node to render
        reference_resolver: Display text for reference links
        message_renderer: Display text for message keys (defaults to the message catalog)

    Returns:
        RenderResult with text, messages and metadata
    """
    writer = SyntaxWriter()
    renderer = message_renderer or get_default_catalog().render_run

    try:
        generator.write_syntax(entity, writer)
    except Exception as e:
        logger.error(
            "Failed to render %s as %s", entity.id, generator.language, exc_info=True
        )
        return RenderResult.error(f"Syntax generation failed: {e}", exception=e)

    block = writer.blocks[-1]
    metadata = {
        "language": generator.language,
        "style_id": generator.style_id,
        "entity": entity.id,
        "references": [run.target for run in block.references],
        "is_empty": block.is_empty,
    }

    return RenderResult(
        writer.to_plain_text(reference_resolver, renderer),
        writer.to_rich_text(reference_resolver, renderer),
        [run.key for run in block.messages],
        metadata,
    )
