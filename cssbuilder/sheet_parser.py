"""
sheet_parser.py

Responsibility: Load a sheet file (a YAML description of CSS rules) into a typed model.

Accepted inputs:
- Markdown with YAML frontmatter at the top of the file.
- A plain YAML document (`.yaml` / `.yml`).

Selectors are described as data and assembled through the selector facade, so
the same ordering and cardinality rules apply as when building them in code:

    rules:
      - selector: {element: a, attr: 'href$=".png"', pseudo_class: focus}
        declarations: {color: red}
      - selector:
          combine:
            - {element: div, id: main}
            - "+"
            - {element: table, id: data}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cssbuilder.facade import css_selector_builder
from cssbuilder.selector import SelectorBuilder, SelectorError


class SheetError(ValueError):
    pass


# Rank order; values are applied in this order regardless of mapping order.
SELECTOR_KEYS = ("element", "id", "class", "attr", "pseudo_class", "pseudo_element")


@dataclass(frozen=True)
class Rule:
    """A rendered selector and its declarations."""

    selector: str
    declarations: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Sheet:
    name: str
    description: str = ""
    rules: tuple[Rule, ...] = ()


def _parse_yaml_frontmatter(text: str) -> tuple[dict[str, Any] | None, str]:
    """
    If the markdown begins with YAML frontmatter delimited by '---', parse it.
    Returns (frontmatter_dict_or_none, remaining_markdown_text).
    """
    if not text.startswith("---\n"):
        return None, text

    end = text.find("\n---\n", 4)
    if end == -1:
        raise SheetError("YAML frontmatter starts with '---' but no closing '---' was found.")

    fm_text = text[4:end]
    rest = text[end + len("\n---\n") :]
    return _load_mapping(fm_text), rest


def _load_mapping(text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise SheetError(f"Invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise SheetError("Sheet must be a mapping/object at the top level.")
    return data


def _scalar(where: str, raw: Any) -> str:
    if raw is None or isinstance(raw, (dict, list)):
        raise SheetError(f"{where} must be a string, got: {raw!r}")
    return str(raw)


def _as_values(key: str, raw: Any) -> list[str]:
    if isinstance(raw, list):
        # Lists of unique kinds are passed through; the builder rejects repeats.
        if not raw:
            raise SheetError(f"`{key}` must not be an empty list.")
        return [_scalar(f"`{key}` item", v) for v in raw]
    return [_scalar(f"`{key}`", raw)]


def build_selector(desc: Any) -> SelectorBuilder | str:
    """
    Build a selector from its data description.

    Strings are taken verbatim; mappings go through the facade.
    """
    if isinstance(desc, str):
        if not desc.strip():
            raise SheetError("Selector string must not be empty.")
        return desc
    if not isinstance(desc, dict) or not desc:
        raise SheetError(f"Selector must be a string or a non-empty mapping, got: {desc!r}")

    if "combine" in desc:
        if len(desc) != 1:
            raise SheetError("`combine` must be the only key of its selector mapping.")
        parts = desc["combine"]
        if not isinstance(parts, list) or len(parts) != 3:
            raise SheetError("`combine` must be a list of [left, combinator, right].")
        left, combinator, right = parts
        return css_selector_builder.combine(
            _stringifiable(build_selector(left)),
            str(combinator),
            _stringifiable(build_selector(right)),
        )

    unknown = sorted(str(k) for k in desc if k not in SELECTOR_KEYS)
    if unknown:
        raise SheetError(f"Unknown selector key(s): {', '.join(unknown)}")

    # Non-empty: desc has at least one known key and every key yields a value.
    calls = [(key, value) for key in SELECTOR_KEYS if key in desc for value in _as_values(key, desc[key])]
    (first_key, first_value), rest = calls[0], calls[1:]
    try:
        builder = getattr(css_selector_builder, first_key)(first_value)
        for key, value in rest:
            getattr(builder, key)(value)
    except SelectorError as e:
        raise SheetError(f"Invalid selector {desc!r}: {e}") from e
    return builder


class _Verbatim:
    def __init__(self, text: str) -> None:
        self._text = text

    def stringify(self) -> str:
        return self._text


def _stringifiable(sel: SelectorBuilder | str) -> SelectorBuilder | _Verbatim:
    return _Verbatim(sel) if isinstance(sel, str) else sel


def _parse_rule(index: int, raw: Any) -> Rule:
    if not isinstance(raw, dict):
        raise SheetError(f"Rule #{index} must be an object/mapping.")
    if "selector" not in raw:
        raise SheetError(f"Rule #{index} must define `selector`.")

    sel = build_selector(raw["selector"])
    selector = sel if isinstance(sel, str) else sel.stringify()

    decl_raw = raw.get("declarations") or {}
    if not isinstance(decl_raw, dict):
        raise SheetError(f"Rule #{index}: `declarations` must be an object/mapping when provided.")
    declarations = {str(k): _scalar(f"Rule #{index}: declaration `{k}`", v) for k, v in decl_raw.items()}

    return Rule(selector=selector, declarations=declarations)


def parse_sheet(sheet_path: str | Path) -> Sheet:
    """
    Parse a sheet file into a `Sheet`.

    Keys:
    - name: str (default: file stem)
    - description: str
    - rules: list (required, non-empty) of {selector, declarations}
    """
    path = Path(sheet_path)
    if not path.is_file():
        raise SheetError(f"Sheet file does not exist or is not a file: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SheetError(f"Sheet file is not valid UTF-8: {path}") from e

    if path.suffix.lower() in (".yaml", ".yml"):
        data = _load_mapping(text)
    else:
        frontmatter, _rest = _parse_yaml_frontmatter(text)
        if frontmatter is None:
            raise SheetError("Markdown sheet must start with YAML frontmatter ('---').")
        data = frontmatter

    name = str(data.get("name") or path.stem).strip()
    description = str(data.get("description") or "").strip()

    rules_raw = data.get("rules")
    if not isinstance(rules_raw, list) or not rules_raw:
        raise SheetError("Sheet must define a non-empty `rules` list.")

    rules = tuple(_parse_rule(i, raw) for i, raw in enumerate(rules_raw, start=1))
    return Sheet(name=name, description=description, rules=rules)
