"""
cli.py

Responsibility: CLI entrypoint for cssbuilder.

Commands:
- `select`: build a single selector from flags and print it
- `render`: parse a sheet file -> render stylesheet -> print or write it

This module should orchestrate behavior but keep concerns isolated:
- Selector building: `selector.py` / `facade.py`
- Sheet parsing: `sheet_parser.py`
- Rendering: `renderer.py`
"""

from __future__ import annotations

import argparse
import logging
import sys

from cssbuilder import __version__
from cssbuilder.facade import css_selector_builder
from cssbuilder.renderer import RenderError, render_stylesheet, write_stylesheet
from cssbuilder.selector import SelectorBuilder, SelectorError
from cssbuilder.sheet_parser import SheetError, parse_sheet

logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    pass


def select_cmd(args: argparse.Namespace) -> int:
    # (flag value, facade/builder method name) in rank order.
    parts: list[tuple[str, str]] = []
    if args.element:
        parts.append((args.element, "element"))
    if args.id:
        parts.append((args.id, "id"))
    parts.extend((v, "class_") for v in args.classes)
    parts.extend((v, "attr") for v in args.attrs)
    parts.extend((v, "pseudo_class") for v in args.pseudo_classes)
    if args.pseudo_element:
        parts.append((args.pseudo_element, "pseudo_element"))

    if not parts:
        raise CLIError("At least one selector part is required (e.g. --element, --class)")

    builder: SelectorBuilder | None = None
    for value, method in parts:
        target = css_selector_builder if builder is None else builder
        builder = getattr(target, method)(value)
        logger.debug("Appended %s %r", method, value)

    print(builder.stringify())
    return 0


def render_cmd(args: argparse.Namespace) -> int:
    sheet = parse_sheet(args.sheet_path)
    logger.debug("Parsed sheet %r with %d rule(s)", sheet.name, len(sheet.rules))

    if args.output:
        dst = write_stylesheet(
            sheet,
            args.output,
            template_path=args.template,
            overwrite=bool(args.overwrite),
        )
        logger.info("Wrote %s", dst)
    else:
        sys.stdout.write(render_stylesheet(sheet, template_path=args.template))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cssbuilder", description="cssbuilder - fluent CSS selector builder")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("select", help="Build a single selector from its parts and print it")
    s.add_argument("--element", default=None, help="Element (type) selector, e.g. div")
    s.add_argument("--id", default=None, help="Id selector without '#'")
    s.add_argument("--class", dest="classes", action="append", default=[], help="Class without '.' (repeatable)")
    s.add_argument("--attr", dest="attrs", action="append", default=[], help="Attribute without brackets (repeatable)")
    s.add_argument(
        "--pseudo-class",
        dest="pseudo_classes",
        action="append",
        default=[],
        help="Pseudo-class without ':' (repeatable)",
    )
    s.add_argument("--pseudo-element", default=None, help="Pseudo-element without '::'")
    s.set_defaults(func=select_cmd)

    r = sub.add_parser("render", help="Render a stylesheet from a sheet file")
    r.add_argument("sheet_path", help="Path to the sheet file (markdown with YAML frontmatter, or YAML)")
    r.add_argument("--template", default=None, help="Jinja2 template file (default: built-in layout)")
    r.add_argument("--output", default=None, help="Write the stylesheet here instead of stdout")
    r.add_argument("--overwrite", action="store_true", help="Allow replacing an existing output file")
    r.set_defaults(func=render_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(args.func(args))
    except (CLIError, SheetError, RenderError, SelectorError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
