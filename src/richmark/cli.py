"""Command-line interface for richmark."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from richmark.errors import MarkupError
from richmark.parser import DEFAULT_MAX_DEPTH, check_max_depth
from richmark.session import PreviewStyle
from richmark.syntax import position_at


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    max_depth: int
    page: bool
    style: PreviewStyle
    interval: float
    watch: bool
    debug: bool


class ConfigError(Exception):
    """Raised for an unusable config value or CLI flag."""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="richmark",
        description="Render richmark rich-text markup to HTML",
    )
    p.add_argument("input", help="Input markup file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover richmark.toml)",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help=f"Maximum tag nesting depth (default: {DEFAULT_MAX_DEPTH})",
    )
    p.add_argument(
        "--page",
        action="store_true",
        default=None,
        help="Wrap output in a standalone preview page",
    )
    p.add_argument(
        "--style",
        choices=[s.value for s in PreviewStyle],
        default=None,
        help="Preview page background style (default: mail)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-render")
    p.add_argument(
        "--interval",
        type=float,
        default=None,
        metavar="SECS",
        help="Watch polling interval in seconds (default: 0.5)",
    )
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "richmark.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config file: {exc}") from exc

    # Nesting depth: config < CLI
    max_depth = DEFAULT_MAX_DEPTH
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict):
        cfg_depth = cfg_parser.get("max_depth")
        # TOML booleans are ints to isinstance
        if isinstance(cfg_depth, int) and not isinstance(cfg_depth, bool):
            max_depth = cfg_depth
    if args.max_depth is not None:
        max_depth = args.max_depth
    try:
        check_max_depth(max_depth)
    except ValueError as exc:
        raise ConfigError(str(exc)) from None

    # Preview page: config < CLI
    page = False
    style = PreviewStyle.MAIL
    cfg_preview = config.get("preview")
    if isinstance(cfg_preview, dict):
        cfg_page = cfg_preview.get("page")
        if isinstance(cfg_page, bool):
            page = cfg_page
        cfg_style = cfg_preview.get("style")
        if isinstance(cfg_style, str):
            style = _parse_style(cfg_style)
    if args.page is not None:
        page = args.page
    if args.style is not None:
        style = _parse_style(args.style)

    # Watch interval: config < CLI
    interval = 0.5
    cfg_watch = config.get("watch")
    if isinstance(cfg_watch, dict):
        cfg_interval = cfg_watch.get("interval")
        if isinstance(cfg_interval, (int, float)):
            interval = float(cfg_interval)
    if args.interval is not None:
        interval = args.interval

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        max_depth=max_depth,
        page=page,
        style=style,
        interval=interval,
        watch=args.watch,
        debug=args.debug,
    )


def _parse_style(value: str) -> PreviewStyle:
    try:
        return PreviewStyle(value.lower())
    except ValueError:
        choices = ", ".join(s.value for s in PreviewStyle)
        raise ConfigError(f"unknown preview style {value!r} (expected one of: {choices})") from None


def render_file(options: CliOptions) -> str:
    """Read, parse, and render a markup file to HTML."""
    from richmark.debug import dump_ast
    from richmark.parser import parse
    from richmark.render import render
    from richmark.session import wrap_page

    source = options.input_file.read_text(encoding="utf-8")
    doc = parse(source, options.max_depth)

    if options.debug:
        dump_ast(doc, file=sys.stderr)

    html = render(doc)
    if options.page:
        return wrap_page(html, options.style)
    return html


def _write_output(options: CliOptions, html: str) -> None:
    if options.output_file:
        options.output_file.write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-render on each modification.

    A failed render keeps the previous good output and flags the error state.
    With --debug, each successful render also dumps its AST to stderr.
    """
    from richmark.debug import dump_ast
    from richmark.parser import parse
    from richmark.session import PreviewSession

    session = PreviewSession(options.max_depth, options.style)
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
                if mtime != last_mtime:
                    source = options.input_file.read_text(encoding="utf-8")
            except OSError:
                time.sleep(options.interval)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                state = session.update(source)
                _write_output(options, session.page() if options.page else state.html)
                if state.error is None:
                    if options.debug:
                        dump_ast(parse(source, options.max_depth), file=sys.stderr)
                    print(f"Rendered {options.input_file}", file=sys.stderr)
                else:
                    pos = position_at(source, state.error.offset)
                    print(
                        f"error: {state.error.message}\n"
                        f"  --> {options.input_file}:{pos.line}:{pos.column}",
                        file=sys.stderr,
                    )
            time.sleep(options.interval)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        html = render_file(options)
    except MarkupError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    _write_output(options, html)
    return 0
