"""
renderer.py

Responsibility: Deterministically render a parsed `Sheet` into stylesheet text.

Rules:
- Rules are emitted in sheet order; declarations in the order they were written.
- Rendering uses Jinja2 with StrictUndefined so template typos fail loudly.
- A custom template file may replace the built-in layout.

This module intentionally does NOT know about YAML or CLI parsing.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, StrictUndefined, TemplateError

from cssbuilder.sheet_parser import Sheet


class RenderError(RuntimeError):
    pass


DEFAULT_TEMPLATE = """\
/* {{ name | comment }}{% if description %}: {{ description | comment }}{% endif %} */
{% for rule in rules %}
{{ rule.selector }} {
{%- for prop, value in rule.declarations.items() %}
  {{ prop }}: {{ value }};
{%- endfor %}
}
{% endfor -%}
"""


def _comment_text(value: object) -> str:
    """Make text safe inside a `/* ... */` comment."""
    return str(value).replace("*/", "* /")


def _environment() -> Environment:
    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["comment"] = _comment_text
    return env


def render_stylesheet(sheet: Sheet, *, template_path: str | Path | None = None) -> str:
    """
    Render `sheet` with the built-in template or the one at `template_path`.

    Templates receive `name`, `description` and `rules`, and may use the
    `comment` filter for text placed inside a CSS comment.
    """
    if template_path is None:
        text = DEFAULT_TEMPLATE
    else:
        tpl = Path(template_path)
        if not tpl.is_file():
            raise RenderError(f"Template file not found: {tpl}")
        text = tpl.read_text(encoding="utf-8")

    try:
        template = _environment().from_string(text)
        return template.render(name=sheet.name, description=sheet.description, rules=sheet.rules)
    except TemplateError as e:
        raise RenderError(f"Failed rendering stylesheet: {sheet.name}") from e


def write_stylesheet(
    sheet: Sheet,
    destination: str | Path,
    *,
    template_path: str | Path | None = None,
    overwrite: bool = False,
) -> Path:
    """
    Render `sheet` and write it to `destination`, creating parent directories.

    Refuses to replace an existing file unless `overwrite` is set.
    """
    dst = Path(destination).resolve()
    if dst.exists() and not overwrite:
        raise RenderError(f"Output file already exists: {dst} (use --overwrite to allow)")

    out = render_stylesheet(sheet, template_path=template_path)
    dst.parent.mkdir(parents=True, exist_ok=True)
    # Normalize newlines for stable cross-platform output.
    dst.write_text(out, encoding="utf-8", newline="\n")
    return dst
