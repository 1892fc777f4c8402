"""Shared fixtures and entity builders for the syntax generator tests."""

import pytest

from api_syntax.declarations.core.entity import (
    ContainerType,
    EntityKind,
    EntityNode,
    EntitySubkind,
    TypeRef,
)
from api_syntax.declarations.core.writer import SyntaxWriter
from api_syntax.declarations.languages.aspnet import create_aspnet_generator
from api_syntax.declarations.languages.csharp import create_csharp_generator
from api_syntax.declarations.languages.scriptsharp import create_scriptsharp_generator
from api_syntax.declarations.languages.visualbasic import create_visualbasic_generator

INT = TypeRef("T:System.Int32")
STRING = TypeRef("T:System.String")
BOOL = TypeRef("T:System.Boolean")
CHAR = TypeRef("T:System.Char")
WIDGET = TypeRef("T:Contoso.Widget")

MEMBER_PREFIXES = {
    EntitySubkind.CONSTRUCTOR: "M",
    EntitySubkind.METHOD: "M",
    EntitySubkind.PROPERTY: "P",
    EntitySubkind.FIELD: "F",
    EntitySubkind.EVENT: "E",
}


class EntityFactory:
    """Builds entity nodes with sensible defaults for the Contoso.Widget class."""

    namespace = "N:Contoso"

    def container(self, name="Widget", subkind=EntitySubkind.CLASS, namespace=None, **fields):
        namespace = namespace or self.namespace
        return ContainerType(
            id=f"T:{namespace[2:]}.{name}",
            name=name,
            subkind=subkind,
            namespace=namespace,
            **fields,
        )

    def namespace_entity(self, name="Contoso"):
        return EntityNode(id=f"N:{name}", kind=EntityKind.NAMESPACE, name=name)

    def type(self, name="Widget", subkind=EntitySubkind.CLASS, **fields):
        fields.setdefault("containing_namespace", self.namespace)
        fields["modifiers"] = frozenset(fields.get("modifiers", ()))
        namespace = fields["containing_namespace"][2:]
        return EntityNode(
            id=f"T:{namespace}.{name}",
            kind=EntityKind.TYPE,
            name=name,
            subkind=subkind,
            **fields,
        )

    def member(self, name, subkind, **fields):
        fields.setdefault("containing_type", self.container())
        fields.setdefault("containing_namespace", self.namespace)
        fields["modifiers"] = frozenset(fields.get("modifiers", ()))
        container = fields["containing_type"]
        return EntityNode(
            id=f"{MEMBER_PREFIXES[subkind]}:{container.id[2:]}.{name}",
            kind=EntityKind.MEMBER,
            name=name,
            subkind=subkind,
            **fields,
        )

    def method(self, name="Run", **fields):
        return self.member(name, EntitySubkind.METHOD, **fields)

    def constructor(self, **fields):
        return self.member("#ctor", EntitySubkind.CONSTRUCTOR, **fields)

    def property(self, name="Value", **fields):
        return self.member(name, EntitySubkind.PROPERTY, **fields)

    def field(self, name="count", **fields):
        return self.member(name, EntitySubkind.FIELD, **fields)

    def event(self, name="Changed", **fields):
        return self.member(name, EntitySubkind.EVENT, **fields)


@pytest.fixture
def make():
    """Entity builder."""
    return EntityFactory()


@pytest.fixture
def render():
    """Render one entity to plain text; messages show as ``[key]``."""

    def _render(generator, entity):
        writer = SyntaxWriter()
        generator.write_syntax(entity, writer)
        return writer.to_plain_text()

    return _render


@pytest.fixture
def flat():
    """Collapse all whitespace runs to single spaces."""

    def _flat(text):
        return " ".join(text.split())

    return _flat


@pytest.fixture
def csharp():
    return create_csharp_generator()


@pytest.fixture
def vb():
    return create_visualbasic_generator()


@pytest.fixture
def aspnet():
    return create_aspnet_generator()


@pytest.fixture
def js():
    return create_scriptsharp_generator()


@pytest.fixture
def all_generators(csharp, vb, aspnet, js):
    return [csharp, vb, aspnet, js]
