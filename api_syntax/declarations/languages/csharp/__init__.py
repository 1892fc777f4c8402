"""
C# syntax generator module.

Generates C# declaration syntax for namespaces, types and members.
"""

from ...core.config import load_config
from .generator import CSharpSyntaxGenerator

__all__ = [
    "CSharpSyntaxGenerator",
    "create_csharp_generator",
    "create_unsafe_generator",
]


def create_csharp_generator(**kwargs) -> CSharpSyntaxGenerator:
    """
    Create a C# generator.

    Args:
        **kwargs: Configuration overrides (wrap_column, allow_unsafe, ...)

    Returns:
        Configured CSharpSyntaxGenerator instance
    """
    return CSharpSyntaxGenerator(load_config("csharp", custom_config=kwargs))


def create_unsafe_generator(**kwargs) -> CSharpSyntaxGenerator:
    """Create a C# generator that renders pointers and fixed buffers."""
    return create_csharp_generator(allow_unsafe=True, **kwargs)
