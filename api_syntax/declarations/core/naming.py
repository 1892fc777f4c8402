"""
Naming utilities for syntax generation.

Handles member-name case conversion and qualified type names for the
script-emitting backend.
"""

from enum import Enum
from typing import Dict, Optional

from .entity import strip_id_prefix


class NamingCase(Enum):
    """Case styles applied to member names."""

    PRESERVE = "preserve"  # UserName
    CAMEL_CASE = "camel"  # userName


class MemberNamer:
    """Converts member names to the case a target language expects."""

    def __init__(self, case: NamingCase = NamingCase.CAMEL_CASE):
        self.case = case
        self._name_cache: Dict[str, str] = {}

    def convert(self, name: str, preserve: bool = False) -> str:
        """
        Convert a member name.

        Args:
            name: Declared member name
            preserve: Keep the declared casing regardless of the naming case

        Returns:
            Converted name
        """
        if preserve or self.case == NamingCase.PRESERVE:
            return name

        if name in self._name_cache:
            return self._name_cache[name]

        converted = to_camel_case(name)
        self._name_cache[name] = converted
        return converted


def to_camel_case(name: str) -> str:
    """
    Lower-case the leading capital run of a PascalCase identifier.

    ``ID`` -> ``id``, ``URLPath`` -> ``urlPath``, ``Name`` -> ``name``;
    all-caps names (other than ``ID``) and names that do not start with a
    capital are returned unchanged.
    """
    if not name:
        return name

    if name == "ID":
        return "id"

    if len(name) != 1 and name.upper() == name:
        return name

    if not name[0].isupper():
        return name

    if len(name) == 1:
        return name.lower()

    run = 0
    for char in name:
        if not char.isupper():
            break
        run += 1

    if run > 1:
        # Keep the last capital of the run; it starts the next word
        return name[: run - 1].lower() + name[run - 1 :]

    return name[0].lower() + name[1:]


def qualified_type_name(
    name: str, namespace: Optional[str], ignore_namespace: bool = False
) -> str:
    """
    Namespace-qualified type name (``Ns.Sub.Type``).

    Args:
        name: Unqualified type name
        namespace: Namespace id or name (may carry the ``N:`` sigil)
        ignore_namespace: Return the bare name

    Returns:
        The qualified name
    """
    namespace_name = strip_id_prefix(namespace or "")
    if ignore_namespace or not namespace_name:
        return name
    return f"{namespace_name}.{name}"
