"""Behaviour every backend shares: base clauses, skipped markers, wrapping and so on."""

import pytest

from api_syntax.declarations.core.entity import (
    EXTENSION_ATTRIBUTE_ID,
    FIXED_BUFFER_ATTRIBUTE_ID,
    Accessor,
    ArrayOf,
    AttributeUsage,
    EnumFlagsValue,
    GenericParameter,
    LiteralValue,
    MemberReference,
    Modifier,
    Parameter,
    PointerTo,
    TypeOfValue,
    TypeRef,
)
from api_syntax.declarations.core.writer import SyntaxWriter
from api_syntax.declarations.languages.csharp import create_unsafe_generator

INT = TypeRef("T:System.Int32")
STRING = TypeRef("T:System.String")
CHAR = TypeRef("T:System.Char")
CONTROL = TypeRef("T:System.Web.UI.Control")
FILE_ACCESS = TypeRef("T:System.IO.FileAccess")

TEMPLATE_NAMES = (
    "TFirstParameter",
    "TSecondParameter",
    "TThirdParameter",
    "TFourthParameter",
    "TFifthParameter",
    "TSixthParameter",
)


def long_generic_class(make):
    return make.type(
        "Container", generic_parameters=tuple(GenericParameter(name) for name in TEMPLATE_NAMES)
    )


def flags_attribute(field_names):
    return AttributeUsage(
        TypeRef("T:Contoso.AccessAttribute"),
        (EnumFlagsValue(FILE_ACCESS, tuple(field_names)),),
    )


class TestBaseClause:
    def test_csharp(self, csharp, make, render):
        assert ":" not in render(csharp, make.type("Widget"))

    def test_visualbasic(self, vb, make, render):
        assert "Inherits" not in render(vb, make.type("Widget"))

    def test_javascript(self, js, make, render):
        text = render(js, make.type("Widget"))
        assert text.endswith("'Contoso.Widget');")
        assert "null" not in text


class TestSkippedMarkers:
    def test_extension_marker_never_printed(self, all_generators, make, render):
        entity = make.method(
            "IsBlank",
            modifiers={Modifier.STATIC},
            attributes=(AttributeUsage(TypeRef(EXTENSION_ATTRIBUTE_ID)),),
            parameters=(Parameter("value", STRING),),
        )
        for generator in all_generators:
            assert "ExtensionAttribute" not in render(generator, entity)

    def test_fixed_buffer_marker_never_printed(self, all_generators, make, render):
        attribute = AttributeUsage(
            TypeRef(FIXED_BUFFER_ATTRIBUTE_ID),
            (TypeOfValue(CHAR), LiteralValue(INT, "64")),
        )
        entity = make.field("buffer", return_type=ArrayOf(CHAR), attributes=(attribute,))

        for generator in all_generators + [create_unsafe_generator()]:
            assert "FixedBufferAttribute" not in render(generator, entity)


class TestGenericWrapping:
    @pytest.mark.parametrize("language", ["csharp", "vb"])
    def test_wrapped_lines_resume_after_one_indent(self, request, language, make, render):
        generator = request.getfixturevalue(language)
        text = render(generator, long_generic_class(make))
        lines = [line for line in text.split("\n") if line]

        assert len(lines) > 1
        for line in lines[1:]:
            assert line.startswith("\t")
            assert not line.startswith("\t\t")

    def test_short_list_does_not_wrap(self, csharp, make, render):
        entity = make.type("Pair", generic_parameters=(GenericParameter("TKey"), GenericParameter("TValue")))
        assert render(csharp, entity) == "public class Pair<TKey, TValue>\n"


class TestEnumFlags:
    @pytest.mark.parametrize("count", [1, 2, 3])
    def test_csharp_or_tokens(self, csharp, make, render, count):
        fields = ("Read", "Write", "Execute")[:count]
        text = render(csharp, make.type("Widget", attributes=(flags_attribute(fields),)))

        assert text.count("|") == count - 1
        assert text.startswith("[AccessAttribute(FileAccess.Read")

    @pytest.mark.parametrize("count", [1, 2, 3])
    def test_visualbasic_or_tokens(self, vb, make, render, count):
        fields = ("Read", "Write", "Execute")[:count]
        text = render(vb, make.type("Widget", attributes=(flags_attribute(fields),)))

        assert text.split().count("Or") == count - 1


class TestIdempotence:
    def test_fresh_writers_give_identical_output(self, all_generators, make):
        entities = [
            make.type("Widget", implemented_interfaces=(TypeRef("T:System.IDisposable"),)),
            make.type("Button", ancestors=(CONTROL,)),
            long_generic_class(make),
            make.method("Add", parameters=(Parameter("x", INT), Parameter("y", INT)), return_type=INT),
            make.property("Name", return_type=STRING, getter=Accessor(), setter=Accessor()),
            make.event("Changed", event_handler_type=TypeRef("T:System.EventHandler")),
        ]

        for generator in all_generators:
            for entity in entities:
                outputs = []
                for _ in range(2):
                    writer = SyntaxWriter()
                    generator.write_syntax(entity, writer)
                    outputs.append(writer.to_plain_text())
                assert outputs[0] == outputs[1]


class TestArrayRank:
    def test_csharp(self, csharp, make, render):
        text = render(csharp, make.field("grid", return_type=ArrayOf(INT, 3)))
        assert "int[,,]" in text

    def test_visualbasic(self, vb, make, render):
        text = render(vb, make.field("grid", return_type=ArrayOf(INT, 3)))
        assert text == "Public grid As Integer(,,)"

    def test_javascript_omits_the_type(self, js, make, render):
        assert render(js, make.field("grid", return_type=ArrayOf(INT, 3))) == "var grid"


class TestScenarios:
    def test_simple_method(self, csharp, make, render, flat):
        entity = make.method(
            "Add", parameters=(Parameter("x", INT), Parameter("y", INT)), return_type=INT
        )
        assert flat(render(csharp, entity)) == "public int Add( int x, int y )"

    @pytest.mark.parametrize(
        "language,expected",
        [
            ("csharp", "[UnsupportedUnsafe_CSharp]"),
            ("vb", "[UnsupportedUnsafe_VisualBasic]"),
            ("js", "[UnsupportedUnsafe_JavaScript]"),
            ("aspnet", ""),
        ],
    )
    def test_pointer_parameter_rejected(self, request, language, expected, make, render):
        generator = request.getfixturevalue(language)
        entity = make.method("Poke", parameters=(Parameter("p", PointerTo(INT)),))

        assert render(generator, entity) == expected

    def test_explicit_interface_property(self, csharp, make, render):
        entity = make.property(
            "Value",
            modifiers={Modifier.EXPLICIT_IMPLEMENTATION},
            implemented_members=(
                MemberReference("P:Contoso.IBox.Value", TypeRef("T:Contoso.IBox")),
            ),
            return_type=INT,
            getter=Accessor(),
        )
        text = render(csharp, entity)

        assert "IBox.Value" in text
        assert " Value " not in text
