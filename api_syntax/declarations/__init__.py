"""
API Syntax Declarations Module

Renders API entity metadata as declaration syntax in several languages.
"""

from .core.config import GeneratorConfig, load_config
from .core.entity import EntityNode
from .core.generator import RenderResult, SyntaxGenerator, render_entity
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
    render_entities,
)


def render_syntax(entity: EntityNode, language: str = "csharp", config=None) -> str:
    """
    Quick rendering of one entity to plain text.

    Args:
        entity: Entity node to render
        language: Target language name or alias
        config: Generator configuration dict or path

    Returns:
        Rendered declaration text

    Raises:
        RuntimeError: If rendering fails
    """
    result = render_entity(get_generator(language, config), entity)

    if result.success:
        return result.text
    raise RuntimeError(f"Syntax rendering failed: {result.error_message}")


__all__ = [
    "EntityNode",
    "GeneratorConfig",
    "GeneratorRegistry",
    "RegistryError",
    "RenderResult",
    "SyntaxGenerator",
    "get_generator",
    "get_registry",
    "list_supported_languages",
    "load_config",
    "render_entities",
    "render_entity",
    "render_syntax",
]
