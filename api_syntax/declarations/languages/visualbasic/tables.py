"""
Visual Basic keyword and symbol tables.
"""

from ...core.entity import Visibility

VISIBILITY_KEYWORDS = {
    Visibility.PUBLIC: "Public",
    Visibility.FAMILY: "Protected",
    Visibility.FAMILY_OR_ASSEMBLY: "Protected Friend",
    Visibility.FAMILY_AND_ASSEMBLY: "Friend",  # not exact, but the same outside the assembly
    Visibility.ASSEMBLY: "Friend",
    Visibility.PRIVATE: "Private",
}

CLASS_MODIFIER_KEYWORDS = {
    "static": "NotInheritable",
    "abstract": "MustInherit",
    "sealed": "NotInheritable",
}

PROCEDURE_MODIFIER_KEYWORDS = {
    "static": "Shared",
    "abstract": "MustOverride",
    "override": "Overrides",
    "final": "NotOverridable",
    "virtual": "Overridable",
}

TYPE_KEYWORDS = {
    "T:System.Int16": "Short",
    "T:System.Int32": "Integer",
    "T:System.Int64": "Long",
    "T:System.UInt16": "UShort",
    "T:System.UInt32": "UInteger",
    "T:System.UInt64": "ULong",
}

OPERATOR_SYMBOLS = {
    # unary math
    "UnaryPlus": "+",
    "UnaryNegation": "-",
    "Increment": "++",
    "Decrement": "--",
    # unary logical
    "LogicalNot": "Not",
    "True": "IsTrue",
    "False": "IsFalse",
    # binary comparison
    "Equality": "=",
    "Inequality": "<>",
    "LessThan": "<",
    "GreaterThan": ">",
    "LessThanOrEqual": "<=",
    "GreaterThanOrEqual": ">=",
    # binary math
    "Addition": "+",
    "Subtraction": "-",
    "Multiply": "*",
    "Division": "/",
    "Exponent": "^",
    "Modulus": "Mod",
    "IntegerDivision": "\\",
    # binary logical
    "BitwiseAnd": "And",
    "BitwiseOr": "Or",
    "ExclusiveOr": "Xor",
    # bit-array
    "OnesComplement": "~",
    "LeftShift": "<<",
    "RightShift": ">>",
    # concatenation
    "Concatenate": "&",
    # conversions
    "Implicit": "CType",
    "Explicit": "CType",
    "Assign": "=",
}

CONVERSION_KEYWORDS = {
    "Implicit": "Widening",
    "Explicit": "Narrowing",
}
