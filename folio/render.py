from __future__ import annotations

import re
from pathlib import Path

import markdown

DEFAULT_TEMPLATE = Path(__file__).resolve().parent / "templates" / "base.html"
PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


def render_template(template: str, **context: str) -> str:
    # Single pass: substituted values are never scanned for placeholders.
    def repl(match: re.Match) -> str:
        return context.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(repl, template)


def read_template(path: Path | None = None) -> str:
    return (path or DEFAULT_TEMPLATE).read_text(encoding="utf-8")


def markdown_to_html(text: str) -> str:
    md = markdown.Markdown(extensions=["fenced_code", "tables"])
    return md.convert(text)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
