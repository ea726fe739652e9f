"""Turn raw model text into something a client can render.

Markdown is the default: the text is passed through and the client renders
it. The HTML style is kept for older clients that insert the body verbatim,
so everything is escaped before the few supported markers are applied.
"""
from __future__ import annotations

import html
import re
from typing import Literal

from pydantic import BaseModel

Style = Literal["markdown", "html"]

_BLOCK_SPLIT = re.compile(r"\n[ \t]*\n")
_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+(.*)$")
_STRONG = re.compile(r"\*\*(.+?)\*\*")
_EM = re.compile(r"\*(.+?)\*")
_UNDERLINE = re.compile(r"(?<!\w)_(.+?)_(?!\w)")


class DisplayContent(BaseModel):
    kind: Style
    body: str


def _inline(text: str) -> str:
    text = _STRONG.sub(r"<strong>\1</strong>", text)
    text = _EM.sub(r"<em>\1</em>", text)
    return _UNDERLINE.sub(r"<u>\1</u>", text)


def _render_block(block: str) -> list[str]:
    out: list[str] = []
    items: list[str] = []
    lines: list[str] = []

    def flush_items() -> None:
        if items:
            out.append("<ul>\n" + "\n".join(items) + "\n</ul>")
            items.clear()

    def flush_lines() -> None:
        if lines:
            out.append("<p>" + "<br>".join(lines) + "</p>")
            lines.clear()

    for line in block.split("\n"):
        match = _BULLET.match(line)
        if match:
            flush_lines()
            items.append(f"<li>{_inline(match.group(1).strip())}</li>")
        elif line.strip():
            flush_items()
            lines.append(_inline(line.strip()))
    flush_items()
    flush_lines()
    return out


def to_html(raw: str) -> str:
    escaped = html.escape(raw.replace("\r\n", "\n").strip(), quote=False)
    parts: list[str] = []
    for block in _BLOCK_SPLIT.split(escaped):
        parts.extend(_render_block(block))
    return "\n".join(parts)


def format_response(raw: str, style: Style = "markdown") -> DisplayContent:
    if style == "html":
        return DisplayContent(kind="html", body=to_html(raw))
    return DisplayContent(kind="markdown", body=raw)
