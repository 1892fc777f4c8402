"""
API Syntax

Renders documented API entities (namespaces, types and members) as the
declaration syntax a programmer would write in C#, Visual Basic, ASP.NET
markup or Script# JavaScript.
"""

from .declarations import (
    get_generator,
    list_supported_languages,
    render_entities,
    render_entity,
    render_syntax,
)
from .loader import EntityLoadError, entity_from_dict, load_entities

__version__ = "0.1.0"

__all__ = [
    "EntityLoadError",
    "entity_from_dict",
    "get_generator",
    "list_supported_languages",
    "load_entities",
    "render_entities",
    "render_entity",
    "render_syntax",
]
