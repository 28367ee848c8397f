"""Variable engine — detects ``{{variable}}`` tokens in prompt content.

Extraction, substitution, validation and label formatting. Everything here
is a pure function of its arguments.
"""

from __future__ import annotations

import re

from promptvault.schemas.variables import VariableField, VariablePosition, VariableValidation

# ASCII only: no whitespace inside the braces, no nesting, no escapes
VARIABLE_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")

_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")
_WORD_START_RE = re.compile(r"\b\w", re.ASCII)


def extract_variables(content: str) -> list[str]:
    """Return unique variable names in order of first appearance."""
    return list(dict.fromkeys(m.group(1) for m in VARIABLE_PATTERN.finditer(content)))


def has_variables(content: str) -> bool:
    return VARIABLE_PATTERN.search(content) is not None


def count_variable_occurrences(content: str) -> int:
    """Total token count, repeats included."""
    return sum(1 for _ in VARIABLE_PATTERN.finditer(content))


def resolve_template(content: str, values: dict[str, str]) -> str:
    """Substitute each ``{{name}}`` that has a non-empty value.

    Unfilled variables stay as ``{{name}}``. Substituted text is not scanned
    again, so a value containing ``{{other}}`` is emitted verbatim.
    """

    def _sub(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        return value if value else match.group(0)

    return VARIABLE_PATTERN.sub(_sub, content)


def validate_variables(content: str, values: dict[str, str]) -> VariableValidation:
    missing = [
        name for name in extract_variables(content)
        if not values.get(name) or not values[name].strip()
    ]
    return VariableValidation(complete=not missing, missing=missing)


def variable_positions(content: str) -> list[VariablePosition]:
    """Every occurrence with its span and 1-based line number."""
    return [
        VariablePosition(
            name=m.group(1),
            start=m.start(),
            end=m.end(),
            line=content.count("\n", 0, m.start()) + 1,
        )
        for m in VARIABLE_PATTERN.finditer(content)
    ]


def humanize_label(name: str) -> str:
    """Format a variable name for display.

    ``user_name`` → ``User Name``, ``firstName`` → ``First Name``.
    """
    label = name.replace("_", " ")
    label = _CAMEL_BOUNDARY_RE.sub(r"\1 \2", label)
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), label)


def variable_schema(content: str) -> list[VariableField]:
    """Form fields for the variables in ``content``; all required."""
    return [
        VariableField(name=name, label=humanize_label(name), required=True)
        for name in extract_variables(content)
    ]
