"""Tests for the styled syntax writer."""

import pytest

from api_syntax.declarations.core.writer import (
    REFERENCE_WIDTH,
    LineBreak,
    MessageRun,
    ReferenceRun,
    SubBlock,
    SyntaxStyle,
    SyntaxWriter,
    TextRun,
    WriterStateError,
)


@pytest.fixture
def writer():
    return SyntaxWriter()


class TestBlocks:
    def test_block_records_language(self, writer):
        with writer.block("CSharp"):
            writer.write_keyword("public")

        assert len(writer.blocks) == 1
        assert writer.blocks[0].language == "CSharp"
        assert writer.blocks[0].items == [TextRun("public", SyntaxStyle.KEYWORD)]

    def test_nested_block_is_rejected(self, writer):
        writer.start_block("CSharp")
        with pytest.raises(WriterStateError):
            writer.start_block("VisualBasic")

    def test_unbalanced_end_is_rejected(self, writer):
        with pytest.raises(WriterStateError):
            writer.end_block()
        with pytest.raises(WriterStateError):
            writer.end_sub_block()

    def test_writing_outside_a_block_is_rejected(self, writer):
        with pytest.raises(WriterStateError):
            writer.write_string("orphan")

    def test_block_closes_on_error(self, writer):
        with pytest.raises(ValueError):
            with writer.block("CSharp"):
                writer.start_sub_block("getter")
                raise ValueError("boom")

        assert not writer.in_block
        writer.start_block("VisualBasic")

    def test_sub_blocks_nest(self, writer):
        with writer.block("CSharp"):
            writer.write_string("a")
            with writer.sub_block("getter"):
                writer.write_string("b")
            writer.write_string("c")

        block = writer.blocks[0]
        assert isinstance(block.items[1], SubBlock)
        assert block.items[1].class_tag == "getter"
        assert [run.text for run in block.runs()] == ["a", "b", "c"]

    def test_empty_block(self, writer):
        with writer.block("AspNet"):
            pass

        assert writer.blocks[0].is_empty
        assert writer.to_plain_text() == ""


class TestPosition:
    def test_text_advances_position(self, writer):
        with writer.block("CSharp"):
            writer.write_string("public ")
            writer.write_keyword("class")
            assert writer.position == 12

    def test_line_break_resets_position(self, writer):
        with writer.block("CSharp"):
            writer.write_string("public")
            writer.write_line()
            assert writer.position == 0

    def test_reference_width(self, writer):
        with writer.block("CSharp"):
            writer.write_reference_link("T:System.Int32")
            assert writer.position == REFERENCE_WIDTH
            writer.write_reference_link("T:System.Int32", "int")
            assert writer.position == REFERENCE_WIDTH + 3

    def test_messages_do_not_advance_position(self, writer):
        with writer.block("CSharp"):
            writer.write_message("UnsupportedUnsafe_CSharp")
            assert writer.position == 0

    def test_empty_text_is_ignored(self, writer):
        with writer.block("CSharp"):
            writer.write_string("")

        assert writer.blocks[0].items == []


class TestExport:
    def test_plain_text(self, writer):
        with writer.block("CSharp"):
            writer.write_keyword("public")
            writer.write_string(" ")
            writer.write_reference_link("T:System.Collections.Generic.List`1")
            writer.write_line()
            writer.write_message("UnsupportedGeneric_CSharp")

        assert writer.to_plain_text() == "public List\n[UnsupportedGeneric_CSharp]"

    def test_blocks_are_separated(self, writer):
        for language in ("CSharp", "VisualBasic"):
            with writer.block(language):
                writer.write_string(language)

        assert writer.to_plain_text() == "CSharp\n\nVisualBasic"
        assert writer.to_plain_text(separator="\n") == "CSharp\nVisualBasic"

    def test_custom_resolvers(self, writer):
        with writer.block("CSharp"):
            writer.write_reference_link("T:Contoso.Widget")
            writer.write_message("UnsupportedCast_CSharp", "Widget")

        text = writer.to_plain_text(
            reference_resolver=lambda run: run.target.upper(),
            message_renderer=lambda run: f"{run.key}:{','.join(run.parameters)}",
        )
        assert text == "T:CONTOSO.WIDGETUnsupportedCast_CSharp:Widget"

    def test_rich_text_styles(self, writer):
        with writer.block("CSharp"):
            writer.write_keyword("public")
            writer.write_string(" ")
            writer.write_reference_link("T:System.Int32", "int")

        rich_text = writer.to_rich_text()

        assert rich_text.plain == "public int"
        styles = {str(span.style) for span in rich_text.spans}
        assert "bold blue" in styles
        assert "cyan underline" in styles

    def test_run_collections(self, writer):
        with writer.block("CSharp"):
            writer.write_reference_link("T:A")
            writer.write_message("K")
            writer.write_line()

        block = writer.blocks[0]
        assert block.references == [ReferenceRun("T:A")]
        assert block.messages == [MessageRun("K")]
        assert isinstance(block.items[-1], LineBreak)
