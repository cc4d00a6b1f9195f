"""
document.py

Responsibility: Load the documentation generator's JSON output into a typed, immutable model.

The upstream tool (TypeDoc) emits a large, loosely shaped document. Only the fields the
renderer depends on are read here, and every optional field is given an explicit default
at this boundary so the rendering code never has to guess.

Validation is strict for the fields the renderer cannot work without (group titles,
symbol names, ids) and fails with a `DocumentError` naming the JSON path.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Any

# TypeDoc emits integer ids; hand-written documents may use strings.
SymbolId = int | str


class DocumentError(ValueError):
    pass


@dataclass(frozen=True)
class Flags:
    """Boolean traits of a declaration (TypeDoc `flags`)."""

    is_static: bool = False
    is_readonly: bool = False
    is_private: bool = False
    is_protected: bool = False
    is_abstract: bool = False
    is_deprecated: bool = False
    is_optional: bool = False


@dataclass(frozen=True)
class TypeExpression:
    """
    A tagged type description.

    `kind` is the TypeDoc `type` tag ("reference", "union", "literal", "intrinsic", or anything
    else). `value` is the stringified literal value; `target` is the id of the referenced symbol.
    """

    kind: str
    name: str | None = None
    value: str | None = None
    target: SymbolId | None = None
    type_arguments: tuple[TypeExpression, ...] = ()
    types: tuple[TypeExpression, ...] = ()


@dataclass(frozen=True)
class SymbolNode:
    """One documented declaration: a class, enum member, method, signature, parameter, ..."""

    name: str
    id: SymbolId | None = None
    kind: str = ""
    flags: Flags = field(default_factory=Flags)
    short_text: str | None = None
    default_value: str | None = None
    children: tuple[SymbolNode, ...] = ()
    signatures: tuple[SymbolNode, ...] = ()
    parameters: tuple[SymbolNode, ...] = ()
    type: TypeExpression | None = None


@dataclass(frozen=True)
class Group:
    title: str
    children: tuple[SymbolId, ...] = ()


@dataclass(frozen=True)
class Document:
    """Ordered groups plus the flat id -> symbol lookup table used for cross-references."""

    groups: tuple[Group, ...]
    symbols: tuple[SymbolNode, ...]

    def lookup(self, symbol_id: SymbolId | None) -> SymbolNode | None:
        if symbol_id is None:
            return None
        return self._by_id.get(symbol_id)

    @cached_property
    def _by_id(self) -> dict[SymbolId, SymbolNode]:
        return {s.id: s for s in self.symbols if s.id is not None}

    def group_symbols(self, group: Group) -> list[SymbolNode]:
        """
        Return the symbols of a group in the order the group lists them.
        Ids that are missing from the lookup table are dropped.
        """
        out: list[SymbolNode] = []
        for symbol_id in group.children:
            symbol = self.lookup(symbol_id)
            if symbol is not None:
                out.append(symbol)
        return out


_FLAG_KEYS: dict[str, str] = {
    "isStatic": "is_static",
    "isReadonly": "is_readonly",
    "isPrivate": "is_private",
    "isProtected": "is_protected",
    "isAbstract": "is_abstract",
    "isDeprecated": "is_deprecated",
    "isOptional": "is_optional",
}


def _expect(data: Any, kind: type | tuple[type, ...], where: str) -> Any:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    # bool is an int subclass; `true` is never a valid id.
    if not isinstance(data, kinds) or (isinstance(data, bool) and bool not in kinds):
        expected = " or ".join(k.__name__ for k in kinds)
        raise DocumentError(f"`{where}` must be {expected}, got {type(data).__name__}.")
    return data


def _optional_text(value: Any) -> str | None:
    """
    Stringify a scalar the way the upstream JavaScript tooling prints it
    (`null`, `true`/`false`, numbers without a trailing `.0`).
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_flags(raw: Any, where: str) -> Flags:
    if raw is None:
        return Flags()
    _expect(raw, dict, where)
    return Flags(**{attr: bool(raw.get(key, False)) for key, attr in _FLAG_KEYS.items()})


def _parse_type(raw: Any, where: str) -> TypeExpression | None:
    if raw is None:
        return None
    _expect(raw, dict, where)

    target = raw.get("id")
    if target is None and isinstance(raw.get("target"), int):
        target = raw["target"]
    if target is not None:
        _expect(target, (int, str), f"{where}.id")

    type_arguments = raw.get("typeArguments") or []
    types = raw.get("types") or []
    _expect(type_arguments, list, f"{where}.typeArguments")
    _expect(types, list, f"{where}.types")

    name = raw.get("name")
    return TypeExpression(
        kind=str(raw.get("type") or ""),
        name=None if name is None else str(name),
        value=_optional_text(raw.get("value")) if "value" in raw else None,
        target=target,
        type_arguments=tuple(
            _parse_type(t, f"{where}.typeArguments[{i}]") for i, t in enumerate(type_arguments)
        ),
        types=tuple(_parse_type(t, f"{where}.types[{i}]") for i, t in enumerate(types)),
    )


def _parse_nodes(raw: Any, where: str) -> tuple[SymbolNode, ...]:
    if raw is None:
        return ()
    _expect(raw, list, where)
    return tuple(_parse_symbol(item, f"{where}[{i}]") for i, item in enumerate(raw))


def _parse_symbol(raw: Any, where: str, *, require_id: bool = False) -> SymbolNode:
    _expect(raw, dict, where)

    if "name" not in raw:
        raise DocumentError(f"`{where}.name` is required.")
    name = _expect(raw["name"], str, f"{where}.name")

    symbol_id = raw.get("id")
    if require_id and symbol_id is None:
        raise DocumentError(f"`{where}.id` is required.")
    if symbol_id is not None:
        _expect(symbol_id, (int, str), f"{where}.id")

    comment = raw.get("comment") or {}
    _expect(comment, dict, f"{where}.comment")
    short_text = comment.get("shortText")

    return SymbolNode(
        name=name,
        id=symbol_id,
        kind=str(raw.get("kindString") or ""),
        flags=_parse_flags(raw.get("flags"), f"{where}.flags"),
        short_text=str(short_text) if short_text else None,
        default_value=_optional_text(raw.get("defaultValue")),
        children=_parse_nodes(raw.get("children"), f"{where}.children"),
        signatures=_parse_nodes(raw.get("signatures"), f"{where}.signatures"),
        parameters=_parse_nodes(raw.get("parameters"), f"{where}.parameters"),
        type=_parse_type(raw.get("type"), f"{where}.type"),
    )


def _parse_group(raw: Any, where: str) -> Group:
    _expect(raw, dict, where)
    if "title" not in raw:
        raise DocumentError(f"`{where}.title` is required.")
    title = _expect(raw["title"], str, f"{where}.title")
    children = _expect(raw.get("children", []), list, f"{where}.children")
    for i, child in enumerate(children):
        _expect(child, (int, str), f"{where}.children[{i}]")
    return Group(title=title, children=tuple(children))


def _check_unique_ids(symbols: tuple[SymbolNode, ...]) -> None:
    seen: dict[SymbolId, int] = {}
    for i, symbol in enumerate(symbols):
        first = seen.setdefault(symbol.id, i)
        if first != i:
            raise DocumentError(
                f"Duplicate symbol id {symbol.id!r} at `children[{first}].id` and `children[{i}].id`."
            )


def _check_group_membership(groups: tuple[Group, ...]) -> None:
    seen: dict[SymbolId, str] = {}
    for gi, group in enumerate(groups):
        for ci, symbol_id in enumerate(group.children):
            where = f"groups[{gi}].children[{ci}]"
            first = seen.setdefault(symbol_id, where)
            if first != where:
                raise DocumentError(f"Symbol id {symbol_id!r} is listed twice: `{first}` and `{where}`.")


def parse_document(data: Any) -> Document:
    """
    Convert decoded JSON into a `Document`.

    Required keys:
    - groups: list of {title: str, children: [id, ...]}
    - children: flat list of symbols, each with a unique `id` and a `name`

    A symbol id may be listed by at most one group.
    """
    _expect(data, dict, "<root>")
    for key in ("groups", "children"):
        if key not in data:
            raise DocumentError(f"Document must define `{key}`.")

    groups_raw = _expect(data["groups"], list, "groups")
    symbols_raw = _expect(data["children"], list, "children")

    groups = tuple(_parse_group(g, f"groups[{i}]") for i, g in enumerate(groups_raw))
    symbols = tuple(
        _parse_symbol(s, f"children[{i}]", require_id=True) for i, s in enumerate(symbols_raw)
    )
    _check_unique_ids(symbols)
    _check_group_membership(groups)
    return Document(groups=groups, symbols=symbols)


def load_document(path: str | Path) -> Document:
    """Read and parse a TypeDoc JSON file."""
    p = Path(path)
    if not p.exists():
        raise DocumentError(f"Documentation JSON does not exist: {p}")
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Failed reading {p}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Invalid JSON in {p}: {e}") from e
    return parse_document(data)
