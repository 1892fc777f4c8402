"""Functions for loading entity nodes from JSON documents.

An entity document is one JSON object (or a list of them) whose keys mirror
the fields of ``EntityNode``. Type references are either a bare id string
(``"T:System.Int32"``) or an object with one of the keys ``type``,
``array_of``, ``pointer_to``, ``reference_to``, ``template`` or
``specialization``. Values are objects with one of the keys ``null``,
``type_of``, ``enum``, ``literal`` or ``array``.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from .declarations.core.entity import (
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
    TypeReference,
    Value,
    Variance,
    Visibility,
)
from .logging_config import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)


class EntityLoadError(Exception):
    """Raised when an entity document cannot be read or converted."""

    pass


def _normalize(text: str) -> str:
    return text.replace("_", "").replace(" ", "").replace("-", "").lower()


def _enum(enum_type: Type[E], raw: Any, field_name: str) -> E:
    """Convert ``raw`` to ``enum_type`` by value, ignoring case and separators."""
    if isinstance(raw, enum_type):
        return raw
    if not isinstance(raw, str):
        raise EntityLoadError(f"{field_name} must be a string, got {raw!r}")

    wanted = _normalize(raw)
    for member in enum_type:
        if _normalize(member.value) == wanted or _normalize(member.name) == wanted:
            return member

    allowed = ", ".join(member.value for member in enum_type)
    raise EntityLoadError(f"Unknown {field_name} '{raw}' (expected one of: {allowed})")


def _optional_enum(enum_type: Type[E], raw: Any, field_name: str) -> Optional[E]:
    return None if raw is None else _enum(enum_type, raw, field_name)


def type_reference_from_json(data: Any) -> TypeReference:
    """
    Convert a JSON type reference.

    Args:
        data: Id string or type reference object

    Returns:
        The TypeReference

    Raises:
        EntityLoadError: If the reference has no recognised shape
    """
    if isinstance(data, str):
        return TypeRef(data)

    if not isinstance(data, dict):
        raise EntityLoadError(f"Type reference must be a string or object, got {data!r}")

    if "type" in data:
        specialization = data.get("specialization")
        return TypeRef(
            data["type"],
            specialization=_specialization(specialization) if specialization else None,
            element_name=data.get("name"),
        )
    if "array_of" in data:
        return ArrayOf(type_reference_from_json(data["array_of"]), int(data.get("rank", 1)))
    if "pointer_to" in data:
        return PointerTo(type_reference_from_json(data["pointer_to"]))
    if "reference_to" in data:
        return ReferenceTo(type_reference_from_json(data["reference_to"]))
    if "template" in data:
        return TemplateRef(data["template"], element_name=data.get("name"))
    if "specialization" in data:
        return _specialization(data["specialization"])

    raise EntityLoadError(f"Unrecognised type reference: {data!r}")


def _specialization(arguments: List[Any]) -> Specialization:
    return Specialization(tuple(type_reference_from_json(arg) for arg in arguments))


def _type_list(items: Optional[List[Any]]) -> tuple:
    return tuple(type_reference_from_json(item) for item in items or ())


def _optional_type(data: Any) -> Optional[TypeReference]:
    return None if data is None else type_reference_from_json(data)


def value_from_json(data: Any) -> Optional[Value]:
    """
    Convert a JSON value node.

    A ``null`` document yields None, which renderers treat as a value with no
    payload.

    Raises:
        EntityLoadError: If the value has no recognised shape
    """
    if data is None:
        return None

    if not isinstance(data, dict):
        raise EntityLoadError(f"Value must be an object, got {data!r}")

    if "null" in data:
        return NullValue()
    if "type_of" in data:
        return TypeOfValue(type_reference_from_json(data["type_of"]))
    if "enum" in data:
        return EnumFlagsValue(
            type_reference_from_json(data["enum"]), tuple(data.get("fields", ()))
        )
    if "literal" in data:
        if "type" not in data:
            raise EntityLoadError(f"Literal value needs a type: {data!r}")
        return LiteralValue(type_reference_from_json(data["type"]), str(data["literal"]))
    if "array" in data:
        return ArrayPlaceholderValue(type_reference_from_json(data["array"]))

    raise EntityLoadError(f"Unrecognised value: {data!r}")


def _attribute(data: Dict[str, Any]) -> AttributeUsage:
    named = data.get("named_arguments") or {}
    if isinstance(named, dict):
        named_arguments = tuple(
            NamedArgument(name, value_from_json(value)) for name, value in named.items()
        )
    else:
        named_arguments = tuple(
            NamedArgument(item["name"], value_from_json(item.get("value"))) for item in named
        )

    return AttributeUsage(
        type_reference_from_json(data["type"]),
        positional_arguments=tuple(value_from_json(arg) for arg in data.get("arguments", ())),
        named_arguments=named_arguments,
    )


def _attributes(items: Optional[List[Dict[str, Any]]]) -> tuple:
    return tuple(_attribute(item) for item in items or ())


def _generic_parameter(data: Dict[str, Any]) -> GenericParameter:
    constraints = data.get("constraints") or {}
    return GenericParameter(
        data["name"],
        variance=_enum(Variance, data.get("variance", "none"), "variance"),
        constraints=GenericConstraints(
            is_value_type=bool(constraints.get("value_type", False)),
            is_reference_type=bool(constraints.get("reference_type", False)),
            requires_default_constructor=bool(constraints.get("default_constructor", False)),
            type_constraints=_type_list(constraints.get("types")),
        ),
    )


def _parameter(data: Dict[str, Any]) -> Parameter:
    return Parameter(
        data["name"],
        type_reference_from_json(data["type"]),
        is_in=bool(data.get("is_in", False)),
        is_out=bool(data.get("is_out", False)),
        is_by_ref=bool(data.get("is_by_ref", False)),
        is_params_array=bool(data.get("is_params_array", False)),
        is_optional=bool(data.get("is_optional", False)),
        default_value=value_from_json(data.get("default_value")),
        attributes=_attributes(data.get("attributes")),
    )


def _member_reference(data: Dict[str, Any]) -> MemberReference:
    return MemberReference(
        data["id"], type_reference_from_json(data["declaring_type"]), name=data.get("name")
    )


def _container(data: Optional[Dict[str, Any]]) -> Optional[ContainerType]:
    if data is None:
        return None
    return ContainerType(
        data["id"],
        data["name"],
        subkind=_optional_enum(EntitySubkind, data.get("subkind"), "subkind"),
        namespace=data.get("namespace"),
        ancestors=_type_list(data.get("ancestors")),
        attributes=_attributes(data.get("attributes")),
    )


def _accessor(data: Any) -> Optional[Accessor]:
    """``true`` declares a plain accessor; an object may narrow it."""
    if data is None or data is False:
        return None
    if data is True:
        return Accessor()
    return Accessor(
        visibility=_optional_enum(Visibility, data.get("visibility"), "visibility"),
        attributes=_attributes(data.get("attributes")),
    )


def entity_from_dict(data: Dict[str, Any]) -> EntityNode:
    """
    Convert one entity document into an EntityNode.

    Args:
        data: Parsed JSON object

    Returns:
        The entity node

    Raises:
        EntityLoadError: If a required key is missing or a value is invalid
    """
    if not isinstance(data, dict):
        raise EntityLoadError(f"Entity must be a JSON object, got {type(data).__name__}")

    try:
        return EntityNode(
            id=data["id"],
            kind=_enum(EntityKind, data["kind"], "kind"),
            name=data["name"],
            subkind=_optional_enum(EntitySubkind, data.get("subkind"), "subkind"),
            tag=_enum(MemberTag, data.get("tag", "normal"), "tag"),
            visibility=_enum(Visibility, data.get("visibility", "public"), "visibility"),
            modifiers=frozenset(
                _enum(Modifier, item, "modifier") for item in data.get("modifiers", ())
            ),
            generic_parameters=tuple(
                _generic_parameter(item) for item in data.get("generic_parameters", ())
            ),
            base_type=_optional_type(data.get("base_type")),
            ancestors=_type_list(data.get("ancestors")),
            implemented_interfaces=_type_list(data.get("implemented_interfaces")),
            attributes=_attributes(data.get("attributes")),
            parameters=tuple(_parameter(item) for item in data.get("parameters", ())),
            return_type=_optional_type(data.get("return_type")),
            constant_value=value_from_json(data.get("constant_value")),
            event_handler_type=_optional_type(data.get("event_handler_type")),
            event_args_type=_optional_type(data.get("event_args_type")),
            implemented_members=tuple(
                _member_reference(item) for item in data.get("implemented_members", ())
            ),
            containing_type=_container(data.get("containing_type")),
            containing_namespace=data.get("containing_namespace"),
            containing_assembly=data.get("containing_assembly"),
            getter=_accessor(data.get("getter")),
            setter=_accessor(data.get("setter")),
            attached_getter=data.get("attached_getter"),
            attached_setter=data.get("attached_setter"),
            attached_adder=data.get("attached_adder"),
            attached_remover=data.get("attached_remover"),
            is_global=bool(data.get("is_global", False)),
            is_record=bool(data.get("is_record", False)),
        )
    except KeyError as e:
        raise EntityLoadError(f"Entity {data.get('id', '?')} is missing key {e}") from e


def load_entities(path) -> List[EntityNode]:
    """Load entity nodes from a JSON file.

    Args:
        path: Path to a file holding one entity object or a list of them.

    Returns:
        List of entity nodes, in document order.

    Raises:
        EntityLoadError: If the file cannot be read or an entity is invalid.
    """
    file_path = Path(path)
    logger.debug("Loading entities from %s", file_path)

    if not file_path.exists():
        raise EntityLoadError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise EntityLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        raise EntityLoadError(f"Error reading file {file_path}: {e}") from e

    items = document if isinstance(document, list) else [document]
    entities = [entity_from_dict(item) for item in items]
    logger.info("Loaded %d entities from %s", len(entities), file_path)
    return entities
