"""Tests for loading entity nodes from JSON."""

import json

import pytest

from api_syntax.declarations.core.entity import (
    Accessor,
    ArrayOf,
    ArrayPlaceholderValue,
    EntityKind,
    EntitySubkind,
    EnumFlagsValue,
    LiteralValue,
    MemberTag,
    Modifier,
    NullValue,
    PointerTo,
    ReferenceTo,
    Specialization,
    TemplateRef,
    TypeOfValue,
    TypeRef,
    Variance,
    Visibility,
)
from api_syntax.declarations import render_syntax
from api_syntax.loader import (
    EntityLoadError,
    entity_from_dict,
    load_entities,
    type_reference_from_json,
    value_from_json,
)

METHOD_DOCUMENT = {
    "id": "M:Contoso.Widget.TryParse(System.String,System.Int32@)",
    "kind": "member",
    "subkind": "method",
    "name": "TryParse",
    "visibility": "public",
    "modifiers": ["static"],
    "containing_type": {
        "id": "T:Contoso.Widget",
        "name": "Widget",
        "subkind": "class",
        "namespace": "N:Contoso",
    },
    "containing_namespace": "N:Contoso",
    "parameters": [
        {"name": "text", "type": "T:System.String"},
        {"name": "result", "type": "T:System.Int32", "is_out": True, "is_by_ref": True},
    ],
    "return_type": "T:System.Boolean",
}


class TestTypeReferences:
    def test_shapes(self):
        assert type_reference_from_json("T:System.Int32") == TypeRef("T:System.Int32")
        assert type_reference_from_json({"array_of": "T:System.Int32", "rank": 2}) == ArrayOf(
            TypeRef("T:System.Int32"), 2
        )
        assert type_reference_from_json({"pointer_to": "T:System.Byte"}) == PointerTo(
            TypeRef("T:System.Byte")
        )
        assert type_reference_from_json({"reference_to": "T:System.Int32"}) == ReferenceTo(
            TypeRef("T:System.Int32")
        )
        assert type_reference_from_json({"template": "T"}) == TemplateRef("T")
        assert type_reference_from_json({"specialization": ["T:System.String"]}) == Specialization(
            (TypeRef("T:System.String"),)
        )

    def test_specialized_type_with_element_name(self):
        reference = type_reference_from_json(
            {
                "type": "T:System.Collections.Generic.List`1",
                "specialization": [{"template": "T"}],
                "name": "items",
            }
        )
        assert reference == TypeRef(
            "T:System.Collections.Generic.List`1",
            Specialization((TemplateRef("T"),)),
            element_name="items",
        )

    def test_unrecognised_shape(self):
        with pytest.raises(EntityLoadError):
            type_reference_from_json({"banana": 1})
        with pytest.raises(EntityLoadError):
            type_reference_from_json(42)


class TestValues:
    def test_shapes(self):
        assert value_from_json(None) is None
        assert value_from_json({"null": True}) == NullValue()
        assert value_from_json({"type_of": "T:Contoso.Widget"}) == TypeOfValue(
            TypeRef("T:Contoso.Widget")
        )
        assert value_from_json(
            {"enum": "T:System.IO.FileAccess", "fields": ["Read", "Write"]}
        ) == EnumFlagsValue(TypeRef("T:System.IO.FileAccess"), ("Read", "Write"))
        assert value_from_json({"literal": 42, "type": "T:System.Int32"}) == LiteralValue(
            TypeRef("T:System.Int32"), "42"
        )
        assert value_from_json({"array": "T:System.String"}) == ArrayPlaceholderValue(
            TypeRef("T:System.String")
        )

    def test_literal_needs_type(self):
        with pytest.raises(EntityLoadError, match="needs a type"):
            value_from_json({"literal": "x"})

    def test_non_object(self):
        with pytest.raises(EntityLoadError):
            value_from_json("x")


class TestEntities:
    def test_method(self):
        entity = entity_from_dict(METHOD_DOCUMENT)

        assert entity.kind == EntityKind.MEMBER
        assert entity.subkind == EntitySubkind.METHOD
        assert entity.tag == MemberTag.NORMAL
        assert entity.modifiers == frozenset({Modifier.STATIC})
        assert entity.containing_type.subkind == EntitySubkind.CLASS
        assert entity.parameters[1].is_out
        assert entity.return_type == TypeRef("T:System.Boolean")

    def test_enum_spelling_is_lenient(self):
        document = dict(
            METHOD_DOCUMENT,
            visibility="FAMILY_OR_ASSEMBLY",
            modifiers=["Explicit", "non-serialized"],
        )
        entity = entity_from_dict(document)

        assert entity.visibility == Visibility.FAMILY_OR_ASSEMBLY
        assert entity.modifiers == frozenset(
            {Modifier.EXPLICIT_IMPLEMENTATION, Modifier.NON_SERIALIZED}
        )

    def test_unknown_enum_value(self):
        with pytest.raises(EntityLoadError, match="Unknown modifier"):
            entity_from_dict(dict(METHOD_DOCUMENT, modifiers=["frozen"]))

    def test_missing_key(self):
        document = dict(METHOD_DOCUMENT)
        del document["name"]
        with pytest.raises(EntityLoadError, match="missing key"):
            entity_from_dict(document)

    def test_non_object(self):
        with pytest.raises(EntityLoadError):
            entity_from_dict(["not", "an", "entity"])

    def test_property_accessors_and_attributes(self):
        entity = entity_from_dict(
            {
                "id": "P:Contoso.Widget.Name",
                "kind": "member",
                "subkind": "property",
                "name": "Name",
                "return_type": "T:System.String",
                "getter": True,
                "setter": {"visibility": "private"},
                "attributes": [
                    {
                        "type": "T:System.ObsoleteAttribute",
                        "arguments": [{"literal": "Use Title", "type": "T:System.String"}],
                        "named_arguments": {"IsError": {"literal": "true", "type": "T:System.Boolean"}},
                    }
                ],
            }
        )

        assert entity.getter == Accessor()
        assert entity.setter == Accessor(visibility=Visibility.PRIVATE)
        attribute = entity.attributes[0]
        assert attribute.positional_arguments == (LiteralValue(TypeRef("T:System.String"), "Use Title"),)
        assert attribute.named_arguments[0].name == "IsError"

    def test_named_arguments_as_list(self):
        entity = entity_from_dict(
            {
                "id": "T:Contoso.Widget",
                "kind": "type",
                "subkind": "class",
                "name": "Widget",
                "attributes": [
                    {
                        "type": "T:Contoso.InfoAttribute",
                        "named_arguments": [{"name": "Level", "value": {"null": True}}],
                    }
                ],
            }
        )
        assert entity.attributes[0].named_arguments[0].value == NullValue()

    def test_generic_parameters(self):
        entity = entity_from_dict(
            {
                "id": "T:Contoso.IProducer`1",
                "kind": "type",
                "subkind": "interface",
                "name": "IProducer",
                "generic_parameters": [
                    {
                        "name": "T",
                        "variance": "covariant",
                        "constraints": {"reference_type": True, "types": ["T:System.IDisposable"]},
                    }
                ],
            }
        )
        template = entity.generic_parameters[0]

        assert template.variance == Variance.COVARIANT
        assert template.constraints.is_reference_type
        assert template.constraints.type_constraints == (TypeRef("T:System.IDisposable"),)

    def test_attached_event_refers_to_its_accessor_methods(self):
        entity = entity_from_dict(
            {
                "id": "E:Contoso.Widget.Changed",
                "kind": "member",
                "subkind": "event",
                "tag": "attached",
                "name": "Changed",
                "attached_adder": "M:Contoso.Widget.AddChangedHandler(System.Object)",
                "attached_remover": "M:Contoso.Widget.RemoveChangedHandler(System.Object)",
            }
        )

        assert not hasattr(entity, "adder")
        assert render_syntax(entity, "cs") == "See AddChangedHandler, RemoveChangedHandler"


class TestLoadEntities:
    def test_single_object(self, tmp_path):
        path = tmp_path / "entity.json"
        path.write_text(json.dumps(METHOD_DOCUMENT))

        entities = load_entities(path)
        assert [entity.name for entity in entities] == ["TryParse"]

    def test_list(self, tmp_path):
        path = tmp_path / "entities.json"
        path.write_text(json.dumps([METHOD_DOCUMENT, dict(METHOD_DOCUMENT, name="Parse")]))

        assert [entity.name for entity in load_entities(str(path))] == ["TryParse", "Parse"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(EntityLoadError, match="File not found"):
            load_entities(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{")
        with pytest.raises(EntityLoadError, match="Invalid JSON"):
            load_entities(path)
