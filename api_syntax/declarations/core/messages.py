"""
Message catalog for in-band diagnostics.

Generators emit message keys such as ``UnsupportedUnsafe_CSharp`` instead of
syntax. Resolving keys into text belongs to the caller; this catalog provides
a default English rendering backed by Jinja2 templates.
"""

from typing import Dict, Optional

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError, TemplateNotFound

from ...logging_config import get_logger
from .writer import MessageRun

logger = get_logger(__name__)

# Templates keyed by the feature part of a message key
DEFAULT_TEMPLATES: Dict[str, str] = {
    "UnsupportedVarargs": "Variable argument lists are not supported in {{ language | spaced }}.",
    "UnsupportedUnsafe": "Unsafe code is not supported in {{ language | spaced }}.",
    "UnsupportedGeneric": "Generic types and methods are not supported in {{ language | spaced }}.",
    "UnsupportedExplicit": (
        "Explicit interface implementations are not supported in {{ language | spaced }}."
    ),
    "UnsupportedOperator": "This operator is not supported in {{ language | spaced }}.",
    "UnsupportedCast": "Conversion operators are not supported in {{ language | spaced }}.",
    "UnsupportedStructure": "Structures are not supported in {{ language | spaced }}.",
    "UnsupportedIndex": "Indexed events and properties are not supported in {{ language | spaced }}.",
    "UnsupportedType": "This type is not available to {{ language | spaced }}.",
}


def split_message_key(key: str):
    """Split ``Feature_Language`` into its two parts (language may be empty)."""
    feature, _, language = key.partition("_")
    return feature, language


class MessageCatalog:
    """Renders message keys to text with Jinja2."""

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        mapping = dict(DEFAULT_TEMPLATES)
        if templates:
            mapping.update(templates)
        self._env = Environment(
            loader=DictLoader(mapping),
            undefined=StrictUndefined,
            autoescape=False,
        )
        self._env.filters["spaced"] = _spaced_filter

    def add_template(self, feature: str, content: str):
        self._env.loader.mapping[feature] = content

    def has_template(self, feature: str) -> bool:
        return feature in self._env.loader.mapping

    def render(self, key: str, *parameters: str) -> str:
        """
        Render a message key.

        Args:
            key: Message key, e.g. ``UnsupportedUnsafe_VisualBasic``
            parameters: Positional parameters exposed to the template as ``params``

        Returns:
            Rendered message text, or ``[key]`` when no template matches
        """
        feature, language = split_message_key(key)
        try:
            template = self._env.get_template(feature)
            return template.render(language=language, key=key, params=list(parameters))
        except TemplateNotFound:
            return f"[{key}]"
        except TemplateError as e:
            logger.warning("Failed to render message %s: %s", key, e)
            return f"[{key}]"

    def render_run(self, run: MessageRun) -> str:
        """Adapter usable as a writer message renderer."""
        return self.render(run.key, *run.parameters)


def _spaced_filter(value: str) -> str:
    """Split a PascalCase language id into words (``VisualBasic`` -> ``Visual Basic``)."""
    words = []
    for index, char in enumerate(value):
        if index and char.isupper() and not value[index - 1].isupper():
            words.append(" ")
        words.append(char)
    return "".join(words)


_default_catalog = None


def get_default_catalog() -> MessageCatalog:
    """Get the shared default message catalog."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = MessageCatalog()
    return _default_catalog
