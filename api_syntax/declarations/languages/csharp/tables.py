"""
C# keyword and symbol tables.
"""

from ...core.entity import Visibility

VISIBILITY_KEYWORDS = {
    Visibility.PUBLIC: "public",
    Visibility.FAMILY: "protected",
    Visibility.FAMILY_OR_ASSEMBLY: "protected internal",
    # No direct equivalent; internal is the closest conservative keyword
    Visibility.FAMILY_AND_ASSEMBLY: "internal",
    Visibility.ASSEMBLY: "internal",
    Visibility.PRIVATE: "private",
}

TYPE_KEYWORDS = {
    "T:System.Void": "void",
    "T:System.String": "string",
    "T:System.Boolean": "bool",
    "T:System.Byte": "byte",
    "T:System.SByte": "sbyte",
    "T:System.Char": "char",
    "T:System.Int16": "short",
    "T:System.Int32": "int",
    "T:System.Int64": "long",
    "T:System.UInt16": "ushort",
    "T:System.UInt32": "uint",
    "T:System.UInt64": "ulong",
    "T:System.Single": "float",
    "T:System.Double": "double",
    "T:System.Decimal": "decimal",
}

OPERATOR_SYMBOLS = {
    # unary math
    "UnaryPlus": "+",
    "UnaryNegation": "-",
    "Increment": "++",
    "Decrement": "--",
    # unary logical
    "LogicalNot": "!",
    "True": "true",
    "False": "false",
    # binary comparison
    "Equality": "==",
    "Inequality": "!=",
    "LessThan": "<",
    "GreaterThan": ">",
    "LessThanOrEqual": "<=",
    "GreaterThanOrEqual": ">=",
    # binary math
    "Addition": "+",
    "Subtraction": "-",
    "Multiply": "*",
    "Division": "/",
    "Modulus": "%",
    # binary logical
    "BitwiseAnd": "&",
    "BitwiseOr": "|",
    "ExclusiveOr": "^",
    # bit-array
    "OnesComplement": "~",
    "LeftShift": "<<",
    "RightShift": ">>",
    "Assign": "=",
}

CAST_KEYWORDS = {
    "Implicit": "implicit operator",
    "Explicit": "explicit operator",
}
