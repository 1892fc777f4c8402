"""
ASP.NET syntax generator module.

Generates control markup for web controls and their settable properties
and events.
"""

from ...core.config import load_config
from .generator import AspNetSyntaxGenerator

__all__ = [
    "AspNetSyntaxGenerator",
    "create_aspnet_generator",
]


def create_aspnet_generator(**kwargs) -> AspNetSyntaxGenerator:
    """
    Create an ASP.NET generator.

    Args:
        **kwargs: Configuration overrides (default_prefix, namespace_prefixes, ...)

    Returns:
        Configured AspNetSyntaxGenerator instance
    """
    return AspNetSyntaxGenerator(load_config("aspnet", custom_config=kwargs))
