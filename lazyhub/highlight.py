"""JSON output formatting for the non-interactive print modes.

Colorizes with Pygments when writing to a terminal; plain JSON otherwise.
"""

from __future__ import annotations

import json

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import JsonLexer
from pygments.styles import get_all_styles, get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def available_style_names() -> list[str]:
    return sorted(get_all_styles())


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def dump_json(data: object) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def render_json(data: object, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Serialize ``data`` as indented JSON, highlighted unless ``no_color``."""
    text = dump_json(data)
    if no_color:
        return text
    formatter = Terminal256Formatter(style=_normalize_style(style))
    return pygments_highlight(text, JsonLexer(), formatter)
