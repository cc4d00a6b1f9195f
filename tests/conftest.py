from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from birb_devtools.document import Document, parse_document


def _sample() -> dict[str, Any]:
    """A trimmed-down TypeDoc document covering every page builder."""
    return {
        "groups": [
            {"title": "Classes", "children": [1]},
            {"title": "Enumerations", "children": [3]},
            {"title": "Interfaces", "children": [2]},
            {"title": "Type aliases", "children": [5]},
        ],
        "children": [
            {
                "id": 1,
                "name": "Client",
                "kindString": "Class",
                "flags": {},
                "children": [
                    {
                        "id": 10,
                        "name": "constructor",
                        "kindString": "Constructor",
                        "flags": {},
                        "signatures": [
                            {
                                "id": 11,
                                "name": "new Client",
                                "kindString": "Constructor signature",
                                "flags": {},
                                "comment": {"shortText": "Creates a client."},
                                "parameters": [
                                    {
                                        "id": 12,
                                        "name": "options",
                                        "kindString": "Parameter",
                                        "flags": {"isOptional": True},
                                        "type": {"type": "reference", "id": 2, "name": "ClientOptions"},
                                    }
                                ],
                                "type": {"type": "reference", "id": 1, "name": "Client"},
                            }
                        ],
                    },
                    {
                        "id": 13,
                        "name": "token",
                        "kindString": "Property",
                        "flags": {"isReadonly": True},
                        "comment": {"shortText": "Bot token."},
                        "type": {"type": "intrinsic", "name": "string"},
                    },
                    {
                        "id": 14,
                        "name": "connect",
                        "kindString": "Method",
                        "flags": {},
                        "signatures": [
                            {
                                "id": 15,
                                "name": "connect",
                                "kindString": "Call signature",
                                "flags": {},
                                "type": {
                                    "type": "reference",
                                    "name": "Promise",
                                    "typeArguments": [{"type": "intrinsic", "name": "void"}],
                                },
                            }
                        ],
                    },
                ],
            },
            {"id": 2, "name": "ClientOptions", "kindString": "Interface", "flags": {}},
            {
                "id": 3,
                "name": "Color",
                "kindString": "Enumeration",
                "flags": {},
                "children": [
                    {"id": 30, "name": "RED", "kindString": "Enumeration member", "flags": {}, "defaultValue": "0"},
                    {"id": 31, "name": "GREEN", "kindString": "Enumeration member", "flags": {}},
                ],
            },
            {
                "id": 5,
                "name": "Snowflake",
                "kindString": "Type alias",
                "flags": {},
                "type": {
                    "type": "union",
                    "types": [
                        {"type": "intrinsic", "name": "string"},
                        {"type": "intrinsic", "name": "number"},
                    ],
                },
            },
        ],
    }


@pytest.fixture
def sample_data() -> dict[str, Any]:
    return _sample()


@pytest.fixture
def sample_document() -> Document:
    return parse_document(_sample())


@pytest.fixture
def sample_json(tmp_path: Path) -> Path:
    path = tmp_path / "docs.json"
    path.write_text(json.dumps(_sample()), encoding="utf-8")
    return path
