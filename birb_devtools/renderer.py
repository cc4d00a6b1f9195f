"""
renderer.py

Responsibility: Write the Markdown documentation site for a `Document`.

Rules:
- Groups are visited in input order, and each group's symbols in the order the group lists them.
- Every group gets a directory (lower-cased title) and an `index.md`.
- Every symbol with a page builder gets `<Name>.md`; other kinds are skipped with a warning.
- Files are always overwritten; directories are created only if absent.
- Stale files from earlier runs are left alone.

Any filesystem error aborts the run with a `RenderError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from birb_devtools.document import Document
from birb_devtools.formatting import group_slug, group_title
from birb_devtools.pages import build_page, render_index

log = logging.getLogger(__name__)


class RenderError(RuntimeError):
    pass


@dataclass
class RenderResult:
    index_pages: list[str] = field(default_factory=list)
    symbol_pages: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class DocRenderer:
    """
    Single-pass Document -> Markdown site writer rooted at `output_dir`.

    `output_dir` is created if missing, but its parent must already exist.
    """

    def __init__(self, output_dir: str | Path, *, logger: logging.Logger | None = None) -> None:
        self._root = Path(output_dir)
        self._log = logger or log

    def _mkdir(self, path: Path) -> None:
        if path.is_dir():
            return
        try:
            path.mkdir()
        except OSError as e:
            raise RenderError(f"Failed creating directory: {path}") from e

    def _write(self, rel: str, text: str) -> None:
        self._log.info("write: %s", rel)
        target = self._root / rel.lstrip("/")
        try:
            target.write_text(text, encoding="utf-8", newline="\n")
        except OSError as e:
            raise RenderError(f"Failed writing file: {target}") from e

    def render(self, document: Document) -> RenderResult:
        result = RenderResult()
        self._mkdir(self._root)

        for group in document.groups:
            title = group_title(group.title)
            directory = f"/{group_slug(group.title)}"
            self._mkdir(self._root / directory.lstrip("/"))

            index = f"{directory}/index.md"
            self._write(index, render_index(title))
            result.index_pages.append(index)

            listed = document.group_symbols(group)
            if len(listed) != len(group.children):
                self._log.debug(
                    "group %r lists %d id(s) missing from the symbol table",
                    group.title,
                    len(group.children) - len(listed),
                )

            for symbol in listed:
                rel = f"{directory}/{symbol.name}.md"
                page = build_page(document, symbol, title)
                if page is None:
                    self._log.warning("miss: %s", rel)
                    result.skipped.append(rel)
                    continue
                self._write(rel, page)
                result.symbol_pages.append(rel)

        return result


def render_site(
    document: Document,
    output_dir: str | Path,
    *,
    logger: logging.Logger | None = None,
) -> RenderResult:
    """Render `document` into `output_dir`, returning what was written and what was skipped."""
    return DocRenderer(output_dir, logger=logger).render(document)
