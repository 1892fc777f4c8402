"""
Language registry for the declaration syntax generators.

Maps language keys and their aliases (``cs``, ``vb``, ``js`` ...) to
generator classes, and builds configured generators on demand.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type, Union

from ..logging_config import get_logger
from .core.config import GeneratorConfig, load_config
from .core.entity import EntityNode
from .core.generator import RenderResult, SyntaxGenerator, render_entity

logger = get_logger(__name__)

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path]


class RegistryError(Exception):
    """Unknown language, alias clash or a generator that cannot be built."""


class GeneratorRegistry:
    """Language key and alias table for SyntaxGenerator subclasses."""

    def __init__(self):
        self._generators: Dict[str, Type[SyntaxGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[SyntaxGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Add ``generator_class`` under ``language`` and its aliases.

        Keys are case-insensitive. Without ``replace`` an existing key is left
        alone, and an alias already claimed by another language is an error.
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, SyntaxGenerator
        ):
            raise RegistryError("Generator class must inherit from SyntaxGenerator")

        language_key = language.lower()

        if language_key in self._generators and not replace:
            logger.debug("Generator for %s already registered", language_key)
            return

        self._generators[language_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()

            if alias_key == language_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary language"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != language_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = language_key

    def unregister(self, language: str):
        """Drop a language key along with every alias pointing at it."""
        language_key = language.lower()
        self._generators.pop(language_key, None)

        aliases_to_remove = [
            alias for alias, target in self._aliases.items() if target == language_key
        ]
        for alias in aliases_to_remove:
            del self._aliases[alias]

    def resolve(self, language: str) -> str:
        """Map a key or alias to its primary key, or raise RegistryError."""
        language_key = language.lower()

        if language_key in self._generators:
            return language_key

        if language_key in self._aliases:
            return self._aliases[language_key]

        available = self.list_languages()
        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(available)}"
        )

    def get_generator_class(self, language: str) -> Type[SyntaxGenerator]:
        return self._generators[self.resolve(language)]

    def create_generator(
        self, language: str, config: Optional[ConfigSource] = None
    ) -> SyntaxGenerator:
        """
        Build a generator for ``language``.

        ``config`` may be a ready GeneratorConfig, or a dict or JSON file path
        merged over that language's defaults. Any failure while building is
        reported as RegistryError.
        """
        try:
            language_key = self.resolve(language)
            generator_class = self._generators[language_key]

            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(language_key, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(language_key, custom_config=config)
            elif config is None:
                final_config = load_config(language_key)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            return generator_class(final_config)

        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {language} generator: {e}") from e

    def list_languages(self) -> List[str]:
        return sorted(self._generators.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        language_key = language.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == language_key)

    def list_all_names(self) -> Dict[str, List[str]]:
        """Primary key -> that key followed by its sorted aliases."""
        return {
            language: [language] + self.get_aliases_for_language(language)
            for language in self._generators
        }

    def is_supported(self, language: str) -> bool:
        language_key = language.lower()
        return language_key in self._generators or language_key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """Display name, style id, class and aliases of a registered language."""
        language_key = self.resolve(language)
        generator_class = self._generators[language_key]

        # language_name and style_id are instance attributes
        temp_generator = generator_class(load_config(language_key))

        return {
            "name": temp_generator.language_name,
            "style_id": temp_generator.style_id,
            "class": generator_class.__name__,
            "aliases": self.get_aliases_for_language(language_key),
            "module": generator_class.__module__,
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Shared registry, populated with the built-in languages on first use."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    from .languages.aspnet import AspNetSyntaxGenerator
    from .languages.csharp import CSharpSyntaxGenerator
    from .languages.scriptsharp import ScriptSharpSyntaxGenerator
    from .languages.visualbasic import VisualBasicSyntaxGenerator

    registry.register("csharp", CSharpSyntaxGenerator, aliases=["cs", "c#"])
    registry.register("visualbasic", VisualBasicSyntaxGenerator, aliases=["vb", "vbnet"])
    registry.register("aspnet", AspNetSyntaxGenerator, aliases=["asp", "asp.net"])
    registry.register(
        "javascript", ScriptSharpSyntaxGenerator, aliases=["js", "scriptsharp", "ecmascript"]
    )


# Module-level shortcuts over the shared registry


def register_generator(
    language: str,
    generator_class: Type[SyntaxGenerator],
    aliases: Optional[List[str]] = None,
):
    get_registry().register(language, generator_class, aliases)


def get_generator(language: str, config: Optional[ConfigSource] = None) -> SyntaxGenerator:
    """Configured generator for a language key or alias."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Info for every registered language, skipping any that fail to build."""
    result = {}
    for language in list_supported_languages():
        try:
            result[language] = get_language_info(language)
        except RegistryError as e:
            logger.warning("Skipping %s: %s", language, e)
    return result

def render_entities(
    entities: Iterable[EntityNode],
    languages: Iterable[str],
    config: Optional[ConfigSource] = None,
) -> Dict[str, List[RenderResult]]:
    """
    Render every entity in every language.

    Each (entity, language) pair is rendered with its own writer, so a failure
    in one pair shows up only in that pair's result.

    Args:
        entities: Entity nodes to render
        languages: Language names or aliases
        config: Configuration applied to every generator

    Returns:
        Dict mapping primary language key to one result per entity, in order

    Raises:
        RegistryError: If a language is unknown
    """
    registry = get_registry()
    entity_list = list(entities)
    results: Dict[str, List[RenderResult]] = {}

    for language in languages:
        language_key = registry.resolve(language)
        generator = registry.create_generator(language_key, config)
        results[language_key] = [render_entity(generator, entity) for entity in entity_list]

    return results
