"""
Styled syntax writer.

Accumulates declaration blocks made of style-tagged text runs, reference
links, diagnostic messages and line breaks, and tracks the output column
used by the line-wrap helpers.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple, Union

from rich.text import Text

from .entity import display_name_for_id

REFERENCE_WIDTH = 10  # assumed width of a link without display text


class WriterStateError(Exception):
    """Raised when block calls are unbalanced."""

    pass


class SyntaxStyle(Enum):
    """Presentation tag of a text run."""

    PLAIN = "plain"
    KEYWORD = "keyword"
    PARAMETER = "parameter"
    IDENTIFIER = "identifier"
    LITERAL = "literal"


# rich styles used by to_rich_text()
RICH_STYLES = {
    SyntaxStyle.PLAIN: "",
    SyntaxStyle.KEYWORD: "bold blue",
    SyntaxStyle.PARAMETER: "italic",
    SyntaxStyle.IDENTIFIER: "bold",
    SyntaxStyle.LITERAL: "green",
}
REFERENCE_STYLE = "cyan underline"
MESSAGE_STYLE = "yellow"


@dataclass(frozen=True)
class TextRun:
    text: str
    style: SyntaxStyle = SyntaxStyle.PLAIN


@dataclass(frozen=True)
class ReferenceRun:
    target: str
    text: Optional[str] = None


@dataclass(frozen=True)
class MessageRun:
    key: str
    parameters: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LineBreak:
    pass


@dataclass
class SubBlock:
    """Nested region such as a getter/setter usage group."""

    class_tag: str
    items: List["BlockItem"] = field(default_factory=list)


BlockItem = Union[TextRun, ReferenceRun, MessageRun, LineBreak, SubBlock]


@dataclass
class SyntaxBlock:
    """One rendered declaration for one language."""

    language: str
    items: List[BlockItem] = field(default_factory=list)

    def runs(self) -> Iterator[BlockItem]:
        """Iterate leaf runs in order, flattening sub-blocks."""
        yield from _flatten(self.items)

    @property
    def messages(self) -> List[MessageRun]:
        return [run for run in self.runs() if isinstance(run, MessageRun)]

    @property
    def references(self) -> List[ReferenceRun]:
        return [run for run in self.runs() if isinstance(run, ReferenceRun)]

    @property
    def is_empty(self) -> bool:
        return not any(True for _ in self.runs())


def _flatten(items: List[BlockItem]) -> Iterator[BlockItem]:
    for item in items:
        if isinstance(item, SubBlock):
            yield from _flatten(item.items)
        else:
            yield item


ReferenceResolver = Callable[[ReferenceRun], str]
MessageRenderer = Callable[[MessageRun], str]


def default_reference_text(run: ReferenceRun) -> str:
    """Display text for a reference when no resolver is supplied."""
    if run.text is not None:
        return run.text
    return display_name_for_id(run.target)


def default_message_text(run: MessageRun) -> str:
    return f"[{run.key}]"


class SyntaxWriter:
    """
    Sink for styled declaration text.

    A writer is used by one render at a time. ``position`` is the column count
    since the last line break or block/sub-block boundary.
    """

    def __init__(self):
        self.blocks: List[SyntaxBlock] = []
        self._stack: List[Union[SyntaxBlock, SubBlock]] = []
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def in_block(self) -> bool:
        return bool(self._stack)

    # Blocks

    def start_block(self, language: str):
        if self._stack:
            raise WriterStateError("Cannot start a block inside another block")
        block = SyntaxBlock(language)
        self.blocks.append(block)
        self._stack.append(block)
        self._position = 0

    def end_block(self):
        if len(self._stack) != 1:
            raise WriterStateError("end_block() called without a matching start_block()")
        self._stack.pop()
        self._position = 0

    def start_sub_block(self, class_tag: str):
        sub_block = SubBlock(class_tag)
        self._current().items.append(sub_block)
        self._stack.append(sub_block)
        self._position = 0

    def end_sub_block(self):
        if len(self._stack) < 2:
            raise WriterStateError(
                "end_sub_block() called without a matching start_sub_block()"
            )
        self._stack.pop()

    @contextmanager
    def block(self, language: str):
        """Open a top-level block that is closed even if rendering stops early."""
        self.start_block(language)
        try:
            yield self
        finally:
            # Unwind sub-blocks left open by an exception
            del self._stack[1:]
            self.end_block()

    @contextmanager
    def sub_block(self, class_tag: str):
        self.start_sub_block(class_tag)
        try:
            yield self
        finally:
            self.end_sub_block()

    def _current(self) -> Union[SyntaxBlock, SubBlock]:
        if not self._stack:
            raise WriterStateError("No open block; call start_block() first")
        return self._stack[-1]

    # Text

    def write_string(self, text: str):
        self.write_string_with_style(text, SyntaxStyle.PLAIN)

    def write_string_with_style(self, text: str, style: SyntaxStyle):
        if not text:
            return
        self._current().items.append(TextRun(text, style))
        self._position += len(text)

    def write_keyword(self, text: str):
        self.write_string_with_style(text, SyntaxStyle.KEYWORD)

    def write_parameter(self, text: str):
        self.write_string_with_style(text, SyntaxStyle.PARAMETER)

    def write_identifier(self, text: str):
        self.write_string_with_style(text, SyntaxStyle.IDENTIFIER)

    def write_literal(self, text: str):
        self.write_string_with_style(text, SyntaxStyle.LITERAL)

    def write_line(self):
        self._current().items.append(LineBreak())
        self._position = 0

    def write_reference_link(self, target: str, text: Optional[str] = None):
        self._current().items.append(ReferenceRun(target, text))
        self._position += REFERENCE_WIDTH if text is None else len(text)

    def write_message(self, key: str, *parameters: str):
        self._current().items.append(MessageRun(key, tuple(parameters)))

    # Export

    def to_plain_text(
        self,
        reference_resolver: Optional[ReferenceResolver] = None,
        message_renderer: Optional[MessageRenderer] = None,
        separator: str = "\n\n",
    ) -> str:
        """
        Flatten all blocks to plain text.

        Args:
            reference_resolver: Maps a reference run to its display text
            message_renderer: Maps a message run to its display text
            separator: Text placed between blocks

        Returns:
            The concatenated text of every block
        """
        resolve = reference_resolver or default_reference_text
        render = message_renderer or default_message_text
        rendered = []
        for block in self.blocks:
            parts = []
            for run in block.runs():
                if isinstance(run, TextRun):
                    parts.append(run.text)
                elif isinstance(run, ReferenceRun):
                    parts.append(resolve(run))
                elif isinstance(run, MessageRun):
                    parts.append(render(run))
                else:
                    parts.append("\n")
            rendered.append("".join(parts))
        return separator.join(rendered)

    def to_rich_text(
        self,
        reference_resolver: Optional[ReferenceResolver] = None,
        message_renderer: Optional[MessageRenderer] = None,
    ) -> Text:
        """Export all blocks as a rich Text with per-run styles."""
        resolve = reference_resolver or default_reference_text
        render = message_renderer or default_message_text
        text = Text()
        for index, block in enumerate(self.blocks):
            if index:
                text.append("\n\n")
            for run in block.runs():
                if isinstance(run, TextRun):
                    text.append(run.text, style=RICH_STYLES[run.style])
                elif isinstance(run, ReferenceRun):
                    text.append(resolve(run), style=REFERENCE_STYLE)
                elif isinstance(run, MessageRun):
                    text.append(render(run), style=MESSAGE_STYLE)
                else:
                    text.append("\n")
        return text
