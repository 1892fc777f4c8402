"""
Language-specific syntax generators.

This module contains generators for different target languages.
"""

from .aspnet import AspNetSyntaxGenerator, create_aspnet_generator
from .csharp import CSharpSyntaxGenerator, create_csharp_generator, create_unsafe_generator
from .scriptsharp import (
    ScriptSharpSyntaxGenerator,
    create_preserve_case_generator,
    create_scriptsharp_generator,
)
from .visualbasic import (
    VisualBasicSyntaxGenerator,
    create_line_continuation_generator,
    create_visualbasic_generator,
)

__all__ = [
    "AspNetSyntaxGenerator",
    "create_aspnet_generator",
    "CSharpSyntaxGenerator",
    "create_csharp_generator",
    "create_unsafe_generator",
    "ScriptSharpSyntaxGenerator",
    "create_scriptsharp_generator",
    "create_preserve_case_generator",
    "VisualBasicSyntaxGenerator",
    "create_visualbasic_generator",
    "create_line_continuation_generator",
]
