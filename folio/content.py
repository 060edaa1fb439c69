from __future__ import annotations

import datetime as dt
import os
import re
import sys
from pathlib import Path

from .categories import Category

UNKNOWN_DATE = "Unknown Date"
SLUG_UNSAFE_RE = re.compile(r"[^\w]+", re.UNICODE)
REQUIRED_KEYS = ("type", "title")


class ValidationError(ValueError):
    """A document's metadata cannot produce a page."""


class NotFoundError(FileNotFoundError):
    pass


def slugify(text: str) -> str:
    text = SLUG_UNSAFE_RE.sub("-", text.lower())
    return text.strip("-_").replace("_", "-")


def parse_front_matter(text: str) -> tuple[dict, str]:
    """Split a leading ``---`` block of ``key: value`` lines from the body.

    Lines without a colon are ignored. When there is no closed block at the
    head of the text, the metadata is empty and the text is returned as-is.
    """
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        return {}, text

    meta = {}
    for line in lines[1:end]:
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        if key:
            meta[key] = value.strip()
    body = "\n".join(lines[end + 1 :])
    return meta, body


def validate_metadata(meta: dict) -> Category:
    missing = [key for key in REQUIRED_KEYS if not meta.get(key)]
    if missing:
        raise ValidationError(f"missing required metadata ({', '.join(missing)})")
    try:
        category = Category.parse(meta["type"])
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if not slugify(meta["title"]):
        raise ValidationError(f"title {meta['title']!r} has no characters usable in a file name")
    return category


def parse_date(value: str | None) -> dt.date | None:
    value = (value or "").strip()
    if not value:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(value).date()
    except ValueError:
        return None


def format_display_date(value: str | None) -> str:
    date_value = parse_date(value)
    if date_value is None:
        return UNKNOWN_DATE
    return f"{date_value.month}/{date_value.day}/{date_value:%y}"


def discover_documents(root: Path) -> list[Path]:
    if not root.is_dir():
        raise NotFoundError(f"Content directory not found: {root}")

    def report(exc: OSError) -> None:
        print(f"Failed to read directory {exc.filename}: {exc.strerror}", file=sys.stderr)

    found = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=report):
        for name in filenames:
            path = Path(dirpath) / name
            if path.suffix == ".md" and path.is_file():
                found.append(path)
    return found
