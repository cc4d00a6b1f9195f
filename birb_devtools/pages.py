"""
pages.py

Responsibility: Build the Markdown body of one symbol page.

Each page is the page header (front-matter + title + table of contents) followed by
an ordered list of optional sections. A section builder returns an empty string when
it has nothing to show, and the page is concatenated once at the end.

Pages are rendered with Jinja2 templates so the output format (just-the-docs
front-matter, kramdown attribute lists) lives in one place and stays byte-stable.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache
from typing import Any

from jinja2 import Environment, StrictUndefined, Template

from birb_devtools.document import Document, SymbolNode
from birb_devtools.formatting import (
    build_param_table,
    format_badges,
    format_fn_params,
    format_type,
)

TABLE_OF_CONTENTS = "### Table of Contents\n{: .no_toc .text-delta }\n\n- TOC\n{:toc}\n"

INDEX_TEMPLATE = """---
layout: default
title: {{ title }}
has_children: true
has_toc: false
---

# {{ title }}
{{ toc }}"""

PAGE_HEADER_TEMPLATE = """---
layout: default
title: {{ title }}
parent: {{ parent }}
has_children: false
has_toc: true
---

# {{ title }}{{ badges }}
{{ toc }}"""

MEMBERS_TEMPLATE = """## Members
{% for member in members %}
- `{{ member.name }}`: {{ member.value }}{{ member.badges }}
{% endfor %}
"""

CONSTRUCTOR_TEMPLATE = """{% if description %}
{{ description }}
{% endif %}
# Constructor{{ badges }}
```js
{{ name }}({{ params }})
```

{{ table }}"""

PROPERTIES_TEMPLATE = """# Properties
{% for prop in properties %}
## {{ prop.name }}{{ prop.badges }}
{% if prop.description %}
{{ prop.description }}

{% endif %}
**Type:** {{ prop.type }}

{% endfor %}
"""

METHODS_TEMPLATE = """# Methods
{% for method in methods %}
## {{ method.name }}({{ method.params }}){{ method.badges }}
{% if method.description %}
{{ method.description }}

{% endif %}
{{ method.table }}**Returns:** {{ method.returns }}

{% endfor %}
"""

DEFINITION_TEMPLATE = """## Definition{{ badges }}
{% for item in types %}
- {{ item }}
{% endfor %}
"""

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


@lru_cache(maxsize=None)
def _compile(source: str) -> Template:
    return _env.from_string(source)


def _render(source: str, **context: Any) -> str:
    return _compile(source).render(**context)


def render_index(title: str) -> str:
    return _render(INDEX_TEMPLATE, title=title, toc=TABLE_OF_CONTENTS)


def render_page_header(symbol: SymbolNode, parent: str) -> str:
    return _render(
        PAGE_HEADER_TEMPLATE,
        title=symbol.name,
        parent=parent,
        badges=format_badges(symbol.flags),
        toc=TABLE_OF_CONTENTS,
    )


def _first_signature(symbol: SymbolNode) -> SymbolNode:
    """TypeDoc puts descriptions, parameters and return types on the first signature."""
    if symbol.signatures:
        return symbol.signatures[0]
    return SymbolNode(name=symbol.name)


# ---- enumerations ----


def members_section(document: Document, symbol: SymbolNode) -> str:
    members = [
        {
            "name": child.name,
            "value": child.default_value if child.default_value is not None else "null",
            "badges": format_badges(child.flags),
        }
        for child in symbol.children
    ]
    return _render(MEMBERS_TEMPLATE, members=members)


# ---- classes ----


def constructor_section(document: Document, symbol: SymbolNode) -> str:
    constructor = next((c for c in symbol.children if c.kind == "Constructor"), None)
    if constructor is None:
        return ""
    sig = _first_signature(constructor)
    return _render(
        CONSTRUCTOR_TEMPLATE,
        description=sig.short_text,
        badges=format_badges(constructor.flags),
        name=sig.name,
        params=format_fn_params(sig.parameters),
        table=build_param_table(document, sig.parameters),
    )


def properties_section(document: Document, symbol: SymbolNode) -> str:
    properties = [
        {
            "name": prop.name,
            "badges": format_badges(prop.flags),
            "description": prop.short_text,
            "type": format_type(document, prop.type),
        }
        for prop in symbol.children
        if prop.kind == "Property"
    ]
    if not properties:
        return ""
    return _render(PROPERTIES_TEMPLATE, properties=properties)


def methods_section(document: Document, symbol: SymbolNode) -> str:
    methods = []
    for method in symbol.children:
        if method.kind != "Method":
            continue
        sig = _first_signature(method)
        methods.append(
            {
                "name": method.name,
                "params": format_fn_params(sig.parameters),
                "badges": format_badges(method.flags),
                "description": sig.short_text,
                "table": build_param_table(document, sig.parameters),
                "returns": format_type(document, sig.type),
            }
        )
    if not methods:
        return ""
    return _render(METHODS_TEMPLATE, methods=methods)


# ---- type aliases ----


def definition_section(document: Document, symbol: SymbolNode) -> str:
    alias = symbol.type
    if alias is not None and alias.kind == "union":
        alternatives = alias.types
    else:
        alternatives = (alias,)
    return _render(
        DEFINITION_TEMPLATE,
        badges=format_badges(symbol.flags),
        types=[format_type(document, t) for t in alternatives],
    )


Section = Callable[[Document, SymbolNode], str]

PAGE_SECTIONS: dict[str, tuple[Section, ...]] = {
    "Enumeration": (members_section,),
    "Class": (constructor_section, properties_section, methods_section),
    "Type alias": (definition_section,),
}


def build_page(document: Document, symbol: SymbolNode, parent: str) -> str | None:
    """
    Build the full Markdown page for a symbol, or return None if its kind has no page builder.
    """
    sections = PAGE_SECTIONS.get(symbol.kind)
    if sections is None:
        return None
    parts = [render_page_header(symbol, parent)]
    parts.extend(section(document, symbol) for section in sections)
    return "".join(parts)
