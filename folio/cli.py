from __future__ import annotations

import argparse
import datetime as dt
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

from .config import load_config
from .content import NotFoundError, discover_documents
from .pages import RenderedPage, Skip, build_index, build_sitemap, new_content_index, render_page
from .render import read_template
from .utils import parse_bool

DEFAULT_SITE_URL = "https://example.com"


@dataclass
class BuildReport:
    rendered: list[RenderedPage] = field(default_factory=list)
    skipped: list[Skip] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)
    archives: list[Path] = field(default_factory=list)
    sitemap: Path | None = None

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def sitemap_written(self) -> bool:
        return self.sitemap is not None


def build_site(args: argparse.Namespace, generated_at: dt.datetime | None = None) -> BuildReport:
    content_dir = Path(args.content)
    output_dir = Path(args.output)
    template_path = Path(args.template) if args.template else None

    md_files = discover_documents(content_dir)
    base_template = read_template(template_path)
    content_index = new_content_index()
    report = BuildReport()

    for md_file in md_files:
        try:
            result = render_page(md_file, base_template, output_dir, content_index, args)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Failed {md_file}: {exc}", file=sys.stderr)
            report.failed.append((md_file, str(exc)))
            continue
        if isinstance(result, Skip):
            print(f"Skipped {md_file}: {result.reason}", file=sys.stderr)
            report.skipped.append(result)
            continue
        print(f"Generated: {result.output_path}")
        report.rendered.append(result)

    for category, entries in content_index.items():
        archive_path = build_index(base_template, output_dir, category, entries, args)
        print(f"Generated: {archive_path}")
        report.archives.append(archive_path)

    if args.enable_sitemap:
        report.sitemap = build_sitemap(output_dir, content_index, args.site_url, generated_at)
        if report.sitemap is not None:
            print(f"Generated: {report.sitemap}")
    return report


def build_parser(config: dict, config_path: str) -> argparse.ArgumentParser:
    def cfg_str(key: str, default: str) -> str:
        value = config.get(key)
        return default if value is None else str(value)

    def cfg_bool(key: str, default: bool) -> bool:
        value = config.get(key)
        return default if value is None else parse_bool(value)

    parser = argparse.ArgumentParser(description="Build poetry and story pages from Markdown.")
    parser.add_argument("--config", default=config_path, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--content", default=cfg_str("content", "content"), help="Directory containing Markdown documents.")
    parser.add_argument("--output", default=cfg_str("output", "."), help="Output directory for the site.")
    parser.add_argument(
        "--template",
        default=cfg_str("template", ""),
        help="Path to the page template (defaults to the bundled base.html).",
    )
    parser.add_argument(
        "--site-url",
        default=cfg_str("site_url", DEFAULT_SITE_URL),
        help="Public site URL used for absolute sitemap links.",
    )
    parser.add_argument("--site-author", default=cfg_str("site_author", "Gerald Reid"), help="Author shown in titles and footer.")
    parser.add_argument("--copyright-year", default=cfg_str("copyright_year", "2025"), help="Year in the footer copyright line.")
    parser.add_argument("--medium-url", default=cfg_str("medium_url", "https://medium.com/"), help="Footer Medium link.")
    parser.add_argument(
        "--instagram-url",
        default=cfg_str("instagram_url", "https://instagram.com/"),
        help="Footer Instagram link.",
    )
    parser.add_argument(
        "--enable-sitemap",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("enable_sitemap", True),
        help="Generate sitemap.xml.",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))
    return build_parser(config, pre_args.config).parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    start = time.perf_counter()
    try:
        report = build_site(args)
    except NotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(
        f"{len(report.rendered)} rendered, {len(report.skipped)} skipped, "
        f"{len(report.failed)} failed."
    )
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
