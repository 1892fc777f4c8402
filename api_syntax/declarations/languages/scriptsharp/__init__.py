"""
Script# JavaScript syntax generator module.
"""

from ...core.config import load_config
from .generator import ScriptSharpSyntaxGenerator

__all__ = [
    "ScriptSharpSyntaxGenerator",
    "create_scriptsharp_generator",
    "create_preserve_case_generator",
]


def create_scriptsharp_generator(**kwargs) -> ScriptSharpSyntaxGenerator:
    """
    Create a Script# JavaScript generator.

    Args:
        **kwargs: Configuration overrides (camel_case_members, ...)

    Returns:
        Configured ScriptSharpSyntaxGenerator instance
    """
    return ScriptSharpSyntaxGenerator(load_config("javascript", custom_config=kwargs))


def create_preserve_case_generator(**kwargs) -> ScriptSharpSyntaxGenerator:
    """Create a generator that keeps declared member casing."""
    return create_scriptsharp_generator(camel_case_members=False, **kwargs)
