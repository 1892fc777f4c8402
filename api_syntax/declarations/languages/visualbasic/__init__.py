"""
Visual Basic syntax generator module.

Generates Visual Basic declaration syntax for namespaces, types and members.
"""

from ...core.config import load_config
from .generator import VisualBasicSyntaxGenerator

__all__ = [
    "VisualBasicSyntaxGenerator",
    "create_visualbasic_generator",
    "create_line_continuation_generator",
]


def create_visualbasic_generator(**kwargs) -> VisualBasicSyntaxGenerator:
    """
    Create a Visual Basic generator.

    Args:
        **kwargs: Configuration overrides (wrap_column, include_line_continuation, ...)

    Returns:
        Configured VisualBasicSyntaxGenerator instance
    """
    return VisualBasicSyntaxGenerator(load_config("visualbasic", custom_config=kwargs))


def create_line_continuation_generator(**kwargs) -> VisualBasicSyntaxGenerator:
    """Create a generator that writes explicit ` _` line continuations."""
    return create_visualbasic_generator(include_line_continuation=True, **kwargs)
