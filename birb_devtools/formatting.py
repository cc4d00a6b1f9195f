"""
formatting.py

Responsibility: Small Markdown fragments shared by every page.

- Type expressions (with cross-reference links and MDN links for well-known types)
- Flag badges (just-the-docs labels)
- Function parameter lists and parameter tables
- Group titles / directory slugs

Everything here is a pure function of the immutable `Document`.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from birb_devtools.document import Document, Flags, SymbolNode, TypeExpression

MDN_BASE_URL = "https://developer.mozilla.org/en-US/docs/Web/JavaScript/Reference/Global_Objects"

WELL_KNOWN_TYPES: frozenset[str] = frozenset(
    {"object", "string", "number", "boolean", "symbol", "null", "undefined"}
)

# Documentation site section per referenced kind.
KIND_SECTIONS: dict[str, str] = {
    "Class": "classes",
    "Enumeration": "enums",
    "Interface": "interfaces",
}

# Fixed output order, independent of the source object's key order.
BADGES: tuple[tuple[str, str, str], ...] = (
    ("is_static", "STATIC", "blue"),
    ("is_readonly", "READONLY", "purple"),
    ("is_private", "PRIVATE", "red"),
    ("is_protected", "PROTECTED", "red"),
    ("is_abstract", "ABSTRACT", "yellow"),
    ("is_deprecated", "DEPRECATED", "red"),
)

UNION_SEPARATOR = " \\| "

_LINE_BREAKS = re.compile(r"\r\n|\n|\r")

_GROUP_RENAMES: dict[str, str] = {"Type aliases": "Types"}


def group_title(title: str) -> str:
    return _GROUP_RENAMES.get(title, title)


def group_slug(title: str) -> str:
    return group_title(title).lower()


def kind_section(kind: str) -> str | None:
    return KIND_SECTIONS.get(kind)


def annotate_well_known(name: str) -> str:
    """Wrap JavaScript built-in type names in an emphasized link to their MDN page."""
    if name.lower() in WELL_KNOWN_TYPES:
        return f"*[{name}]({MDN_BASE_URL}/{name})*"
    return name


def format_type(document: Document, type_: TypeExpression | None) -> str:
    """
    Render a type expression as inline Markdown.

    A missing type renders like an untagged one ("Object").
    """
    if type_ is None:
        return annotate_well_known("Object")

    if type_.kind == "reference":
        name = type_.name or "Object"
        if type_.type_arguments:
            args = ", ".join(format_type(document, t) for t in type_.type_arguments)
            return f"{name}<{args}>"
        ref = document.lookup(type_.target)
        if ref is not None:
            section = kind_section(ref.kind)
            if section:
                return f"[{ref.name}](/{section}/{ref.name})"
        return name

    if type_.kind == "union":
        return UNION_SEPARATOR.join(format_type(document, t) for t in type_.types)

    if type_.kind == "literal":
        return annotate_well_known(f"{type_.value if type_.value is not None else 'null'}")

    if type_.kind == "intrinsic":
        return annotate_well_known(f"{type_.name}")

    return annotate_well_known(type_.name or "Object")


def format_badges(flags: Flags) -> str:
    tags = "".join(
        f"\n{{: .d-inline-block }}\n\n{label}\n{{: .label .label-{color} }}"
        for attr, label, color in BADGES
        if getattr(flags, attr)
    )
    if tags:
        return tags + "\n"
    return tags


def format_fn_params(params: Sequence[SymbolNode]) -> str:
    return ", ".join(f"{p.name}?" if p.flags.is_optional else p.name for p in params)


def _cell(text: str) -> str:
    return _LINE_BREAKS.sub(" ", text)


def build_param_table(document: Document, params: Sequence[SymbolNode]) -> str:
    """
    Render a parameter table (name, type, description, optional, default).
    Returns an empty string when there are no parameters.
    """
    if not params:
        return ""
    rows = [
        "| name | type | description | optional | default |",
        "|:-----|:-----|:------------|:---------|:--------|",
    ]
    for param in params:
        row = [
            param.name or " ",
            format_type(document, param.type) or "Object",
            param.short_text or " ",
            "true" if param.flags.is_optional else "false",
            param.default_value if param.default_value is not None else "*none*",
        ]
        rows.append(f"| {_cell(' | '.join(row))} |")
    return "\n".join(rows) + "\n\n"
