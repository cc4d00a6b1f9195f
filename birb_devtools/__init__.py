"""
birb_devtools package

Development helpers for the Birb.JS project, run as a CLI-first utility.

Key responsibilities are split across modules:
- `document.py`: load the documentation generator's JSON into a typed, validated model
- `formatting.py`: type expressions, flag badges and parameter tables as Markdown
- `pages.py`: per-kind page builders (enumerations, classes, type aliases)
- `renderer.py`: write the Markdown site (group directories, index pages, symbol pages)
- `logger.py`: the debug logger used while developing Birb.JS
- `config.py`: optional YAML config file + environment resolution
- `cli.py`: CLI entrypoint and orchestration (config -> load -> render)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
