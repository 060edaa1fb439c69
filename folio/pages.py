from __future__ import annotations

import argparse
import datetime as dt
import html
import sys
from dataclasses import dataclass
from pathlib import Path

from .categories import Category
from .content import ValidationError, format_display_date, parse_front_matter, validate_metadata
from .paths import resolve
from .render import markdown_to_html, render_template, write_text
from .utils import iso_date, join_url

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


@dataclass(frozen=True)
class IndexEntry:
    title: str
    url: str
    display_date: str


@dataclass
class RenderedPage:
    source: Path
    output_path: Path
    category: Category
    entry: IndexEntry


@dataclass
class Skip:
    source: Path
    reason: str


ContentIndex = dict[Category, list[IndexEntry]]


def new_content_index() -> ContentIndex:
    return {category: [] for category in Category}


def build_nav() -> str:
    links = [("/", "Home"), (Category.POETRY.archive_url, "Poetry"), (Category.STORIES.archive_url, "Stories")]
    return "\n".join(f'          <li><a href="{url}">{label}</a></li>' for url, label in links)


def build_social(args: argparse.Namespace) -> str:
    links = [
        (args.medium_url, "Medium", "fa-medium"),
        (args.instagram_url, "Instagram", "fa-instagram"),
    ]
    return "\n".join(
        f'        <a href="{html.escape(url)}" aria-label="{label}" target="_blank" '
        f'rel="noopener noreferrer"><i class="fa-brands {icon}"></i></a>'
        for url, label, icon in links
    )


def build_page(
    base_template: str, args: argparse.Namespace, title: str, category: Category, content: str
) -> str:
    return render_template(
        base_template,
        title=html.escape(title),
        stylesheet=category.stylesheet,
        site_author=html.escape(args.site_author),
        copyright_year=html.escape(str(args.copyright_year)),
        nav=build_nav(),
        social=build_social(args),
        content=content,
    )


def render_page(
    md_file: Path,
    base_template: str,
    output_dir: Path,
    content_index: ContentIndex,
    args: argparse.Namespace,
) -> RenderedPage | Skip:
    """Render one Markdown document into its category folder.

    Documents with missing or unsupported metadata come back as ``Skip`` and
    leave ``content_index`` untouched. Read and write errors propagate.
    """
    raw_text = md_file.read_text(encoding="utf-8")
    meta, body = parse_front_matter(raw_text)
    try:
        category = validate_metadata(meta)
    except ValidationError as exc:
        return Skip(md_file, str(exc))

    title = meta["title"]
    file_path, url_path = resolve(category, title)
    output_path = output_dir / file_path
    if not output_path.resolve().is_relative_to(output_dir.resolve()):
        return Skip(md_file, f"output path {file_path} is outside the output directory")

    display_date = format_display_date(meta.get("date"))
    css_class = category.css_class
    content = (
        f'    <article class="{css_class}">\n'
        f"      <h1>{html.escape(title)}</h1>\n"
        f'      <p class="{css_class}-meta">Published on {html.escape(display_date)}</p>\n'
        f'      <div class="{css_class}-body">\n'
        f"{markdown_to_html(body)}\n"
        "      </div>\n"
        "    </article>"
    )
    write_text(output_path, build_page(base_template, args, title, category, content))

    entry = IndexEntry(title=title, url=url_path, display_date=display_date)
    content_index[category].append(entry)
    return RenderedPage(md_file, output_path, category, entry)


def build_index(
    base_template: str,
    output_dir: Path,
    category: Category,
    entries: list[IndexEntry],
    args: argparse.Namespace,
) -> Path:
    # Entries keep discovery order; the archive is not sorted by date.
    if entries:
        rows = [
            f'        <li><a href="{html.escape(entry.url)}">{html.escape(entry.title)}</a> '
            f"({html.escape(entry.display_date)})</li>"
            for entry in entries
        ]
        body = '      <ul class="archive-list">\n' + "\n".join(rows) + "\n      </ul>"
    else:
        body = f'      <p class="archive-empty">{html.escape(category.empty_message)}</p>'
    content = (
        f'    <section class="{category.css_class}-archive">\n'
        f"      <h1>{category.archive_title}</h1>\n"
        f"{body}\n"
        "    </section>"
    )
    output_path = output_dir / category.archive_file
    write_text(output_path, build_page(base_template, args, category.archive_title, category, content))
    return output_path


def build_sitemap(
    output_dir: Path,
    content_index: ContentIndex,
    site_url: str,
    generated_at: dt.datetime | None = None,
) -> Path | None:
    entries = [entry for items in content_index.values() for entry in items]
    if not entries:
        print("Warning: no pages were generated, sitemap.xml not written.", file=sys.stderr)
        return None
    # lastmod is the build time, shared by every URL in the run.
    lastmod = iso_date(generated_at or dt.datetime.now(dt.timezone.utc))
    items = []
    for entry in entries:
        items.append(
            "\n".join(
                [
                    "  <url>",
                    f"    <loc>{html.escape(join_url(site_url, entry.url))}</loc>",
                    f"    <lastmod>{lastmod}</lastmod>",
                    "  </url>",
                ]
            )
        )
    sitemap = "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<urlset xmlns="{SITEMAP_NS}">',
            "\n".join(items),
            "</urlset>",
            "",
        ]
    )
    output_path = output_dir / "sitemap.xml"
    write_text(output_path, sitemap)
    return output_path
