from __future__ import annotations

import datetime as dt

from folio.categories import Category
from folio.cli import build_site, main, parse_args

POEM = "---\ntype: poetry\ntitle: Winter Light\ndate: 2025-01-10\n---\nThe sun is low.\n"
STORY = "---\ntype: stories\ntitle: The Long Road\n---\nOnce upon a time.\n"


def test_build_site_scenario(write_doc, output_dir, site_args, capsys):
    write_doc("poetry/winter.md", POEM)
    write_doc("stories/road.md", STORY)

    report = build_site(site_args())

    assert report.ok
    assert len(report.rendered) == 2
    assert report.sitemap_written
    assert report.sitemap == output_dir / "sitemap.xml"
    assert (output_dir / "poetry" / "winter-light.html").exists()
    assert (output_dir / "stories" / "the-long-road.html").exists()

    poetry_archive = (output_dir / "poetry" / "poetry-archive.html").read_text(encoding="utf-8")
    story_archive = (output_dir / "stories" / "story-archive.html").read_text(encoding="utf-8")
    assert '<a href="/poetry/winter-light.html">Winter Light</a> (1/10/25)' in poetry_archive
    assert '<a href="/stories/the-long-road.html">The Long Road</a> (Unknown Date)' in story_archive

    sitemap = (output_dir / "sitemap.xml").read_text(encoding="utf-8")
    assert sitemap.count("<url>") == 2
    assert "<loc>https://writer.example/poetry/winter-light.html</loc>" in sitemap
    assert "<loc>https://writer.example/stories/the-long-road.html</loc>" in sitemap

    out = capsys.readouterr().out
    assert "Generated:" in out


def test_entry_urls_match_written_paths(write_doc, output_dir, site_args):
    write_doc("a.md", POEM)
    write_doc("nested/deeper/b.md", STORY)

    report = build_site(site_args())

    for page in report.rendered:
        assert page.output_path == output_dir / page.entry.url.lstrip("/")
        assert page.output_path.exists()


def test_invalid_documents_produce_nothing(write_doc, output_dir, site_args, capsys):
    write_doc("untitled.md", "---\ntype: poetry\n---\nbody\n")
    write_doc("plain.md", "no front matter at all\n")

    report = build_site(site_args())

    assert report.rendered == []
    assert len(report.skipped) == 2
    assert report.sitemap is None
    assert not report.sitemap_written
    assert not (output_dir / "sitemap.xml").exists()
    assert sorted(p.name for p in (output_dir / "poetry").iterdir()) == ["poetry-archive.html"]
    assert sorted(p.name for p in (output_dir / "stories").iterdir()) == ["story-archive.html"]
    err = capsys.readouterr().err
    assert "Skipped" in err
    assert "Warning" in err


def test_unreadable_document_does_not_stop_run(write_doc, content_dir, output_dir, site_args, capsys):
    (content_dir / "broken.md").write_bytes(b"---\ntype: poetry\ntitle: \xff\xfe\n---\n")
    write_doc("good.md", POEM)

    report = build_site(site_args())

    assert not report.ok
    assert [path.name for path, _ in report.failed] == ["broken.md"]
    assert [page.entry.title for page in report.rendered] == ["Winter Light"]
    assert "Failed" in capsys.readouterr().err


def test_rebuild_is_idempotent(write_doc, output_dir, site_args):
    write_doc("poetry/winter.md", POEM)
    write_doc("stories/road.md", STORY)
    when = dt.datetime(2025, 5, 1, 12, 0, tzinfo=dt.timezone.utc)

    build_site(site_args(), generated_at=when)
    first = {p: p.read_bytes() for p in output_dir.rglob("*") if p.is_file()}
    build_site(site_args(), generated_at=when)
    second = {p: p.read_bytes() for p in output_dir.rglob("*") if p.is_file()}

    assert first == second


def test_archive_lists_in_discovery_order(write_doc, output_dir, site_args):
    write_doc("one.md", "---\ntype: poetry\ntitle: Late\ndate: 2025-06-01\n---\nx\n")
    write_doc("two.md", "---\ntype: poetry\ntitle: Early\ndate: 2001-01-01\n---\ny\n")

    report = build_site(site_args())

    titles = [page.entry.title for page in report.rendered if page.category is Category.POETRY]
    archive = (output_dir / "poetry" / "poetry-archive.html").read_text(encoding="utf-8")
    positions = [archive.index(f">{title}</a>") for title in titles]
    assert positions == sorted(positions)


def test_sitemap_can_be_disabled(write_doc, output_dir, site_args):
    write_doc("winter.md", POEM)

    report = build_site(site_args("--no-enable-sitemap"))

    assert report.sitemap is None
    assert not (output_dir / "sitemap.xml").exists()


def test_config_file_supplies_defaults(tmp_path, content_dir, output_dir, write_doc):
    write_doc("winter.md", POEM)
    config = tmp_path / "site.yaml"
    config.write_text(
        f"content: {content_dir}\noutput: {output_dir}\nsite_author: Ada Poet\ncopyright_year: 2030\n",
        encoding="utf-8",
    )

    args = parse_args(["--config", str(config)])
    build_site(args)

    page = (output_dir / "poetry" / "winter-light.html").read_text(encoding="utf-8")
    assert "<title>Winter Light - Ada Poet</title>" in page
    assert "2030 Ada Poet" in page


def test_main_missing_content_root(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "missing.toml"), "--content", str(tmp_path / "nope")])

    assert code == 1
    assert "Content directory not found" in capsys.readouterr().err


def test_main_reports_summary(tmp_path, write_doc, content_dir, output_dir, capsys):
    write_doc("winter.md", POEM)

    code = main(["--config", str(tmp_path / "missing.toml"), "--content", str(content_dir), "--output", str(output_dir)])

    assert code == 0
    out = capsys.readouterr().out
    assert "Build completed in" in out
    assert "1 rendered, 0 skipped, 0 failed." in out
