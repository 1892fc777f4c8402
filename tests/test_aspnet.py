"""Tests for the ASP.NET markup syntax generator."""

import pytest

from api_syntax.declarations.core.entity import (
    Accessor,
    AttributeUsage,
    EnumFlagsValue,
    LiteralValue,
    Modifier,
    Parameter,
    TypeRef,
)
from api_syntax.declarations.languages.aspnet import create_aspnet_generator
from api_syntax.declarations.languages.aspnet.generator import PERSISTENCE_MODE_ATTRIBUTE_ID

WEB_CONTROLS = "N:System.Web.UI.WebControls"
CONTROL = TypeRef("T:System.Web.UI.Control")
WEB_CONTROL = TypeRef("T:System.Web.UI.WebControls.WebControl")
PAGE = TypeRef("T:System.Web.UI.Page")
TEMPLATE_CONTROL = TypeRef("T:System.Web.UI.TemplateControl")
STRING = TypeRef("T:System.String")
BOOL = TypeRef("T:System.Boolean")
INT = TypeRef("T:System.Int32")


@pytest.fixture
def button(make):
    return make.container("Button", namespace=WEB_CONTROLS, ancestors=(WEB_CONTROL, CONTROL))


class TestControls:
    def test_web_control_class(self, aspnet, make, render):
        entity = make.type("Button", containing_namespace=WEB_CONTROLS, ancestors=(WEB_CONTROL, CONTROL))
        assert render(aspnet, entity) == "<asp:Button />"

    def test_mobile_control_prefix(self, aspnet, make, render):
        entity = make.type(
            "Label",
            containing_namespace="N:System.Web.UI.MobileControls",
            ancestors=(TypeRef("T:System.Web.UI.MobileControls.MobileControl"), CONTROL),
        )
        assert render(aspnet, entity) == "<mobile:Label />"

    def test_custom_prefix(self, make, render):
        generator = create_aspnet_generator(namespace_prefixes={"N:Contoso.Web": "contoso"})
        entity = make.type("Gauge", containing_namespace="N:Contoso.Web", ancestors=(CONTROL,))
        assert render(generator, entity) == "<contoso:Gauge />"

    def test_prefix_lookup_accepts_bare_namespace(self, aspnet):
        assert aspnet.tag_prefix("System.Web.UI.MobileControls") == "mobile"
        assert aspnet.tag_prefix(None) == "asp"

    def test_non_control_class_is_empty(self, aspnet, make, render):
        assert render(aspnet, make.type("Widget")) == ""

    def test_page_is_excluded(self, aspnet, make, render):
        entity = make.type(
            "Page", containing_namespace="N:System.Web.UI", ancestors=(TEMPLATE_CONTROL, CONTROL)
        )
        assert render(aspnet, entity) == ""

    def test_page_subclass_is_excluded(self, aspnet, make, render):
        entity = make.type("Default", ancestors=(PAGE, TEMPLATE_CONTROL, CONTROL))
        assert render(aspnet, entity) == ""


class TestProperties:
    def test_settable_property(self, aspnet, make, render, button):
        entity = make.property(
            "Text", containing_type=button, return_type=STRING, getter=Accessor(), setter=Accessor()
        )
        assert render(aspnet, entity) == '<asp:Button Text="String" />'

    def test_boolean_property(self, aspnet, make, render, button):
        entity = make.property("Enabled", containing_type=button, return_type=BOOL, setter=Accessor())
        assert render(aspnet, entity) == '<asp:Button Enabled="True|False" />'

    @pytest.mark.parametrize(
        "mode",
        [
            EnumFlagsValue(TypeRef("T:System.Web.UI.PersistenceMode"), ("InnerProperty",)),
            LiteralValue(TypeRef("T:System.Web.UI.PersistenceMode"), "PersistenceMode.InnerProperty"),
        ],
    )
    def test_inner_property(self, aspnet, make, render, mode):
        grid = make.container("GridView", namespace=WEB_CONTROLS, ancestors=(WEB_CONTROL, CONTROL))
        entity = make.property(
            "RowStyle",
            containing_type=grid,
            attributes=(AttributeUsage(TypeRef(PERSISTENCE_MODE_ATTRIBUTE_ID), (mode,)),),
            return_type=TypeRef("T:System.Web.UI.WebControls.TableItemStyle"),
            getter=Accessor(),
            setter=Accessor(),
        )
        assert render(aspnet, entity) == (
            "<asp:GridView>\n\t<RowStyle>TableItemStyle</RowStyle>\n</asp:GridView>"
        )

    def test_read_only_property_is_empty(self, aspnet, make, render, button):
        entity = make.property("Count", containing_type=button, return_type=INT, getter=Accessor())
        assert render(aspnet, entity) == ""

    def test_static_and_indexed_properties_are_empty(self, aspnet, make, render, button):
        static = make.property(
            "Default", containing_type=button, modifiers={Modifier.STATIC}, return_type=INT, setter=Accessor()
        )
        indexed = make.property(
            "Item",
            containing_type=button,
            parameters=(Parameter("index", INT),),
            return_type=INT,
            setter=Accessor(),
        )
        assert render(aspnet, static) == ""
        assert render(aspnet, indexed) == ""

    def test_property_of_non_control_is_empty(self, aspnet, make, render):
        entity = make.property("Text", return_type=STRING, setter=Accessor())
        assert render(aspnet, entity) == ""


class TestEvents:
    def test_event(self, aspnet, make, render, button):
        entity = make.event(
            "Click", containing_type=button, event_handler_type=TypeRef("T:System.EventHandler")
        )
        assert render(aspnet, entity) == '<asp:Button OnClick="EventHandler" />'

    def test_static_event_is_empty(self, aspnet, make, render, button):
        entity = make.event(
            "Click",
            containing_type=button,
            modifiers={Modifier.STATIC},
            event_handler_type=TypeRef("T:System.EventHandler"),
        )
        assert render(aspnet, entity) == ""


class TestOtherEntities:
    def test_everything_else_renders_an_empty_block(self, aspnet, make, render, button):
        entities = [
            make.namespace_entity("System.Web.UI"),
            make.method("Focus", containing_type=button),
            make.constructor(containing_type=button),
            make.field("count", containing_type=button, return_type=INT),
        ]
        for entity in entities:
            assert render(aspnet, entity) == ""
