"""Tests for marketbrief.ingestion.scratch."""

from marketbrief.ingestion import ScratchStore, safe_filename


class TestSafeFilename:
    def test_slug(self) -> None:
        assert safe_filename("NCB Posts $10B Profit!") == "ncb_posts_10b_profit"

    def test_collapses_underscores(self) -> None:
        assert safe_filename("a -- b") == "a_b"

    def test_empty_headline(self) -> None:
        assert safe_filename("???") == "untitled"

    def test_truncates_long_headlines(self) -> None:
        slug = safe_filename("Word " * 80)

        assert len(slug) <= 100
        assert not slug.endswith("_")


class TestScratchStore:
    def test_reset_creates_empty_directories(self, tmp_path) -> None:
        store = ScratchStore(tmp_path / "page-content", tmp_path / "scraped-articles")
        (tmp_path / "page-content").mkdir()
        (tmp_path / "page-content" / "stale.html").write_text("old")

        store.reset()

        assert store.page_content_dir.is_dir()
        assert store.articles_dir.is_dir()
        assert list(store.page_content_dir.iterdir()) == []

    def test_save_infers_html_extension(self, scratch: ScratchStore) -> None:
        path = scratch.save("0-homepage", "  <html></html>")

        assert path == scratch.page_content_dir / "0-homepage.html"
        assert path.read_text() == "  <html></html>"

    def test_save_infers_txt_extension(self, scratch: ScratchStore) -> None:
        path = scratch.save("notes", "plain text")

        assert path.name == "notes.txt"

    def test_save_keeps_explicit_extension(self, scratch: ScratchStore) -> None:
        path = scratch.save("jamstockex-daily.json", "[]")

        assert path.name == "jamstockex-daily.json"

    def test_save_failure_is_swallowed(self, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = ScratchStore(blocker / "page-content", tmp_path / "articles")

        assert store.save("0-homepage.html", "<html></html>") is None

    def test_write_article_uses_index_and_headline_slug(self, scratch: ScratchStore) -> None:
        path = scratch.write_article(2, "BOJ Holds Rate", "content")

        assert path == scratch.articles_dir / "2-boj_holds_rate.txt"
        assert path.read_text(encoding="utf-8") == "content"

    def test_purge_removes_both_directories(self, scratch: ScratchStore) -> None:
        scratch.save("a.html", "<p></p>")
        scratch.write_article(0, "x", "y")

        scratch.purge()

        assert not scratch.page_content_dir.exists()
        assert not scratch.articles_dir.exists()

    def test_purge_missing_directories_is_noop(self, tmp_path) -> None:
        ScratchStore(tmp_path / "a", tmp_path / "b").purge()
