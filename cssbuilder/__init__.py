"""
cssbuilder package

A fluent CSS selector builder plus a few small object helpers.

Key responsibilities are split across modules:
- `selector.py`: typed selector fragments, ordering/cardinality rules, rendering
- `facade.py`: `css_selector_builder`, the entry point that creates builders
- `objects.py`: `Rectangle` and the JSON helpers `get_json` / `from_json`
- `sheet_parser.py`: parse a YAML sheet file into rules built with the facade
- `renderer.py`: deterministic Jinja2 rendering of a sheet into stylesheet text
- `cli.py`: CLI entrypoint (`select`, `render`)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
