"""
cli.py

Responsibility: CLI entrypoint for Birb.JS DevTools.

High-level flow (single command `docs`):
1) Resolve settings (flags > env > birb-devtools.yml > defaults)
2) Start the debug logger
3) Load the TypeDoc JSON -> `Document`
4) Render the Markdown site into the output directory

This module should orchestrate behavior but keep concerns isolated:
- Settings: `config.py`
- Input model: `document.py`
- Rendering: `renderer.py`
- Logging: `logger.py`
"""

from __future__ import annotations

import argparse
from pathlib import Path

from birb_devtools import __version__
from birb_devtools.config import ConfigError, Settings, load_config, resolve_settings
from birb_devtools.document import DocumentError, load_document
from birb_devtools.logger import DevLogger, LoggerConfig
from birb_devtools.renderer import RenderError, render_site


class CLIError(RuntimeError):
    pass


def _settings_from_args(args: argparse.Namespace, cwd: Path) -> Settings:
    config = load_config(args.config, cwd=cwd)
    overrides = {
        "input": args.input,
        "output": args.output,
        "logs": False if args.no_log_file else args.log_dir,
        "log_level": args.log_level,
        "token": args.token,
    }
    return resolve_settings(overrides=overrides, config=config, cwd=cwd)


def docs_cmd(args: argparse.Namespace) -> int:
    cwd = Path.cwd()
    try:
        settings = _settings_from_args(args, cwd)
    except ConfigError as e:
        raise CLIError(str(e)) from e

    devlog = DevLogger(
        LoggerConfig(
            level=settings.log_level,
            log_dir=settings.logs,
            token=settings.token,
        )
    )
    devlog.install_hooks()
    try:
        devlog.log(f"working in {cwd}")
        try:
            document = load_document(settings.input)
            result = render_site(document, settings.output, logger=devlog.logger.getChild("docs"))
        except (DocumentError, RenderError) as e:
            devlog.error(str(e))
            return 1

        devlog.log(
            f"wrote {len(result.index_pages)} index page(s) and {len(result.symbol_pages)} "
            f"symbol page(s) to {settings.output}; skipped {len(result.skipped)}"
        )
        return 0
    finally:
        devlog.close()


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="birb-devtools", description="Birb.JS DevTools - development helpers")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("docs", help="Convert TypeDoc JSON into the Markdown documentation site")
    d.add_argument("--input", default=None, help="TypeDoc JSON file (default: docs.json)")
    d.add_argument("--output", default=None, help="Output directory (default: docs)")
    d.add_argument("--config", default=None, help="YAML config file (default: birb-devtools.yml if present)")
    d.add_argument("--log-dir", default=None, help="Directory for the debug log file (default: logs)")
    d.add_argument("--no-log-file", action="store_true", help="Do not write a debug log file")
    d.add_argument("--log-level", default=None, help="Console log level (default: INFO)")
    d.add_argument("--token", default=None, help="Secret to redact from logs (or set env BIRB_TOKEN)")

    d.set_defaults(func=docs_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except CLIError as e:
        parser.exit(1, f"birb-devtools: error: {e}\n")


if __name__ == "__main__":
    raise SystemExit(main())
