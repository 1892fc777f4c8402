"""Tests for the message catalog."""

import pytest

from api_syntax.declarations.core.messages import (
    MessageCatalog,
    get_default_catalog,
    split_message_key,
)
from api_syntax.declarations.core.writer import MessageRun


@pytest.fixture
def catalog():
    return MessageCatalog()


class TestCatalog:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("UnsupportedUnsafe_VisualBasic", "Unsafe code is not supported in Visual Basic."),
            ("UnsupportedVarargs_CSharp", "Variable argument lists are not supported in CSharp."),
            ("UnsupportedStructure_JavaScript", "Structures are not supported in Java Script."),
            ("UnsupportedType_ScriptSharp", "This type is not available to Script Sharp."),
        ],
    )
    def test_default_templates(self, catalog, key, expected):
        assert catalog.render(key) == expected

    def test_unknown_feature_falls_back_to_key(self, catalog):
        assert catalog.render("UnsupportedTeleport_CSharp") == "[UnsupportedTeleport_CSharp]"

    def test_custom_template_with_parameters(self, catalog):
        catalog.add_template("UnsupportedCast", "{{ params[0] }} cannot convert in {{ language }}")

        assert catalog.has_template("UnsupportedCast")
        assert catalog.render("UnsupportedCast_CSharp", "Widget") == "Widget cannot convert in CSharp"

    def test_template_errors_fall_back_to_key(self, catalog):
        catalog.add_template("Broken", "{{ missing_variable }}")
        assert catalog.render("Broken_CSharp") == "[Broken_CSharp]"

    def test_overrides_from_constructor(self):
        catalog = MessageCatalog({"UnsupportedUnsafe": "nope"})
        assert catalog.render("UnsupportedUnsafe_CSharp") == "nope"

    def test_render_run(self, catalog):
        run = MessageRun("UnsupportedGeneric_JavaScript")
        assert catalog.render_run(run) == (
            "Generic types and methods are not supported in Java Script."
        )

    def test_default_catalog_is_shared(self):
        assert get_default_catalog() is get_default_catalog()


def test_split_message_key():
    assert split_message_key("UnsupportedUnsafe_CSharp") == ("UnsupportedUnsafe", "CSharp")
    assert split_message_key("Plain") == ("Plain", "")
