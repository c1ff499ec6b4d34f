"""Requirement shortcuts for typed placeholders.

Built-in converters for template variables like ``{id:int}``. A converter
only supplies the variable's requirement; captured values stay strings.
"""

# Constraint for variables without a requirement: one non-empty segment
DEFAULT_REQUIREMENT = r"[^/]+"

# converter name -> requirement regex
CONVERTERS: dict[str, str] = {
    "str": DEFAULT_REQUIREMENT,
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
}
